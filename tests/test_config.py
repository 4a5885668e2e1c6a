import logging

import pytest

from nodetype_cnd.config import ReaderConfig, parse_conflict_policy
from nodetype_cnd.exceptions import ConfigurationError
from nodetype_cnd.models import NamespaceConflictPolicy
from nodetype_cnd.utils.logging_utils import parse_level


ENV_VARS = [
    'NODETYPE_CND_LOG_LEVEL',
    'NODETYPE_CND_PRINT_LEVEL',
    'NODETYPE_CND_NAMESPACE_CONFLICT',
    'NODETYPE_CND_CACHE_ENABLED',
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    config = ReaderConfig.from_env()
    assert config.log_level == 'INFO'
    assert config.print_level == 'WARNING'
    assert config.namespace_conflict == NamespaceConflictPolicy.ERROR
    assert config.cache_enabled is False


def test_from_env(clean_env):
    clean_env.setenv('NODETYPE_CND_LOG_LEVEL', 'DEBUG')
    clean_env.setenv('NODETYPE_CND_NAMESPACE_CONFLICT', 'override')
    clean_env.setenv('NODETYPE_CND_CACHE_ENABLED', 'TRUE')
    config = ReaderConfig.from_env()
    assert config.log_level == 'DEBUG'
    assert config.namespace_conflict == NamespaceConflictPolicy.OVERRIDE
    assert config.cache_enabled is True


def test_invalid_conflict_policy(clean_env):
    clean_env.setenv('NODETYPE_CND_NAMESPACE_CONFLICT', 'merge')
    with pytest.raises(ConfigurationError, match="Invalid namespace conflict policy 'merge'"):
        ReaderConfig.from_env()


def test_invalid_conflict_policy_lenient(clean_env, caplog):
    clean_env.setenv('NODETYPE_CND_NAMESPACE_CONFLICT', 'merge')
    clean_env.setenv('NODETYPE_CND_LOG_LEVEL', 'DEBUG')
    with caplog.at_level(logging.WARNING, logger='nodetype_cnd.config'):
        config = ReaderConfig.from_env(strict=False)
    assert config.namespace_conflict == NamespaceConflictPolicy.ERROR
    assert config.log_level == 'DEBUG'
    assert "Invalid namespace conflict policy 'merge'" in caplog.text


def test_parse_conflict_policy():
    assert parse_conflict_policy(' Ignore ') == NamespaceConflictPolicy.IGNORE
    assert parse_conflict_policy('error') == NamespaceConflictPolicy.ERROR


def test_parse_level():
    assert parse_level('debug') == logging.DEBUG
    assert parse_level('nope', logging.WARNING) == logging.WARNING

"""Shared test fixtures for nodetype_cnd tests."""
import pytest

from nodetype_cnd.models import NamespaceMapping


EX_URI = 'http://example.com/ns'


@pytest.fixture
def namespaces():
    """Built-in mapping plus the ``ex`` prefix."""
    return NamespaceMapping({'ex': EX_URI})


@pytest.fixture
def write_file(tmp_path):
    """Write *text* to ``tmp_path / name`` and return the path."""
    def _write(name, text):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding='utf-8')
        return path
    return _write

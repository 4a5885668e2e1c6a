import pytest

from nodetype_cnd.exceptions import ConfigurationError
from nodetype_cnd.file_io import load_namespace_file, namespaces_from_data
from nodetype_cnd.models import NamespaceMapping, QName
from nodetype_cnd.parsers import YamlParser


EX_URI = 'http://example.com/ns'


def test_load_namespace_file(write_file):
    path = write_file('ns.yaml', f'namespaces:\n  ex: {EX_URI}\n  cms: http://example.com/cms/1.0\n')
    mapping = load_namespace_file(path)
    assert mapping.resolve('ex:a') == QName(EX_URI, 'a')
    assert mapping.get_uri('cms') == 'http://example.com/cms/1.0'
    assert 'nt' in mapping


def test_base_mapping_is_copied(write_file):
    base = NamespaceMapping({'base': 'http://example.com/base'})
    path = write_file('ns.yaml', f'namespaces:\n  ex: {EX_URI}\n')
    mapping = load_namespace_file(path, base=base)
    assert 'base' in mapping and 'ex' in mapping
    assert 'ex' not in base


@pytest.mark.parametrize('data', [
    {},
    {'namespaces': {'ex': 5}},
    {'namespaces': {'1bad': EX_URI}},
    {'namespaces': {'ex': EX_URI}, 'extra': True},
    ['ex'],
])
def test_schema_violations(data):
    with pytest.raises(ConfigurationError, match='Invalid namespace file'):
        namespaces_from_data(data)


def test_conflict_with_builtin_reports_location(write_file):
    path = write_file('ns.yaml', 'namespaces:\n  nt: http://example.com/not-nt\n')
    with pytest.raises(ConfigurationError) as excinfo:
        load_namespace_file(path)
    message = str(excinfo.value)
    assert 'already mapped' in message
    assert f'{path}:2:7' in message


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match='not found'):
        load_namespace_file(tmp_path / 'missing.yaml')


def test_yaml_syntax_error(write_file):
    path = write_file('ns.yaml', 'namespaces: [unclosed\n')
    with pytest.raises(ConfigurationError, match='Failed to parse YAML content'):
        load_namespace_file(path)


def test_source_map():
    parser = YamlParser(cache_enabled=False)
    data, source_map = parser.load_config_from_string_with_source(f'namespaces:\n  ex: {EX_URI}\n')
    assert data == {'namespaces': {'ex': EX_URI}}
    assert source_map['/namespaces/ex'] == {'line': 2, 'column': 7}


def test_yaml_parser_cache(write_file):
    path = write_file('ns.yaml', 'namespaces: {}\n')
    parser = YamlParser(cache_enabled=True)
    assert parser.load_config(path) == {'namespaces': {}}

    path.write_text(f'namespaces:\n  ex: {EX_URI}\n', encoding='utf-8')
    assert parser.load_config(path) == {'namespaces': {}}

    parser.clear_cache()
    assert parser.load_config(path) == {'namespaces': {'ex': EX_URI}}

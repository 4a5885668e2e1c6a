import pytest

from nodetype_cnd import (
    NT_BASE,
    RESIDUAL_NAME,
    GrammarError,
    NameResolutionError,
    NamespaceConflictError,
    NamespaceConflictPolicy,
    NamespaceMapping,
    OnParentVersionAction,
    PropertyType,
    QName,
    SemanticError,
    Value,
    ValueConversionError,
    parse_cnd,
)
from nodetype_cnd.config import ReaderConfig
from nodetype_cnd.values import PatternConstraint, RangeConstraint


EX_URI = 'http://example.com/ns'
EX_DECL = f"<ex = '{EX_URI}'>\n"


def ex(local):
    return QName(EX_URI, local)


def parse_one(text):
    result = parse_cnd(EX_DECL + text)
    assert len(result) == 1
    return result.definitions[0]


def test_minimal_definition():
    definition = parse_one('[ex:a]')
    assert definition.name == ex('a')
    assert definition.supertypes == ()
    assert definition.mixin is False
    assert definition.orderable_child_nodes is False
    assert definition.primary_item_name is None
    assert definition.property_definitions == ()
    assert definition.child_node_definitions == ()
    assert not definition.has_members


def test_end_to_end_file_type():
    text = (
        "<ex='http://example.com/ns'>\n"
        "[ex:File] > nt:base orderable mixin\n"
        "- ex:size (LONG) mandatory\n"
        "+ ex:content (nt:base) = nt:base primary\n"
    )
    result = parse_cnd(text)
    assert len(result) == 1
    definition = result.definitions[0]

    assert definition.name == QName('http://example.com/ns', 'File')
    assert definition.orderable_child_nodes is True
    assert definition.mixin is True
    assert definition.supertypes == (NT_BASE,)

    (size,) = definition.property_definitions
    assert size.name == ex('size')
    assert size.required_type == PropertyType.LONG
    assert size.mandatory is True
    assert size.declaring_node_type == ex('File')

    (content,) = definition.child_node_definitions
    assert content.name == ex('content')
    assert content.required_primary_types == (NT_BASE,)
    assert content.default_primary_type == NT_BASE
    assert content.primary is True
    assert definition.primary_item_name == ex('content')
    assert definition.has_members

    assert result.namespaces.get_uri('ex') == 'http://example.com/ns'


@pytest.mark.parametrize('property_type', list(PropertyType))
def test_type_spellings_are_equivalent(property_type):
    word = property_type.value
    for spelling in (word.upper(), word.capitalize(), word.lower()):
        definition = parse_one(f'[ex:a]\n- ex:p ({spelling})')
        assert definition.property_definitions[0].required_type == property_type


def test_undefined_type_star():
    definition = parse_one('[ex:a]\n- ex:p (*)')
    assert definition.property_definitions[0].required_type == PropertyType.UNDEFINED


def test_type_keywords_are_case_sensitive():
    with pytest.raises(GrammarError, match="Unknown property type 'sTRING' specified"):
        parse_one('[ex:a]\n- ex:p (sTRING)')


def test_default_type_is_string():
    definition = parse_one('[ex:a]\n- ex:p')
    assert definition.property_definitions[0].required_type == PropertyType.STRING


def test_duplicate_supertypes_are_preserved():
    definition = parse_one('[ex:a] > ex:b, ex:b')
    assert definition.supertypes == (ex('b'), ex('b'))


@pytest.mark.parametrize('options, orderable, mixin', [
    ('orderable', True, False),
    ('ord', True, False),
    ('o', True, False),
    ('mixin', False, True),
    ('mix', False, True),
    ('m', False, True),
    ('orderable mixin', True, True),
    ('mixin orderable', True, True),
    ('o m', True, True),
])
def test_options(options, orderable, mixin):
    definition = parse_one(f'[ex:a] > nt:base {options}')
    assert definition.orderable_child_nodes is orderable
    assert definition.mixin is mixin


@pytest.mark.parametrize('options', ['orderable orderable', 'mixin m'])
def test_repeated_option_is_rejected(options):
    with pytest.raises(GrammarError, match="Missing '\\['"):
        parse_cnd(EX_DECL + f'[ex:a] {options}')


def test_property_definition():
    definition = parse_one(
        "[ex:a]\n"
        "- ex:title (String) = 'hello', 'world' mandatory autocreated protected multiple VERSION < 'h.*'"
    )
    (prop,) = definition.property_definitions
    assert prop.name == ex('title')
    assert prop.default_values == (
        Value(PropertyType.STRING, 'hello'),
        Value(PropertyType.STRING, 'world'),
    )
    assert prop.mandatory and prop.autocreated and prop.protected and prop.multiple
    assert not prop.primary
    assert prop.on_parent_version == OnParentVersionAction.VERSION
    (constraint,) = prop.value_constraints
    assert isinstance(constraint, PatternConstraint)
    assert constraint.definition == 'h.*'


def test_attribute_short_forms():
    (prop,) = parse_one('[ex:a]\n- ex:p a m p *').property_definitions
    assert prop.autocreated and prop.mandatory and prop.protected and prop.multiple

    (prop,) = parse_one('[ex:a]\n- ex:p aut man pro mul pri').property_definitions
    assert prop.autocreated and prop.mandatory and prop.protected and prop.multiple and prop.primary


@pytest.mark.parametrize('spelling', ['IGNORE', 'Ignore', 'ignore'])
def test_on_parent_version_spellings(spelling):
    (prop,) = parse_one(f'[ex:a]\n- ex:p {spelling}').property_definitions
    assert prop.on_parent_version == OnParentVersionAction.IGNORE


def test_on_parent_version_defaults_to_copy():
    definition = parse_one('[ex:a]\n- ex:p\n+ ex:c')
    assert definition.property_definitions[0].on_parent_version == OnParentVersionAction.COPY
    assert definition.child_node_definitions[0].on_parent_version == OnParentVersionAction.COPY


def test_typed_default_values():
    definition = parse_one(
        "[ex:a]\n"
        "- ex:count (LONG) = '42'\n"
        "- ex:list (Long) = 1, 2 multiple\n"
        "- ex:kind (Name) = ex:foo\n"
        "- ex:when (Date) = '2024-01-31T12:30:00.000Z'\n"
    )
    count, lst, kind, when = definition.property_definitions
    assert count.default_values == (Value(PropertyType.LONG, 42),)
    assert [v.value for v in lst.default_values] == [1, 2]
    assert kind.default_values[0].value == ex('foo')
    assert when.default_values[0].value.year == 2024


def test_default_value_conversion_failure():
    with pytest.raises(ValueConversionError) as excinfo:
        parse_cnd(EX_DECL + "[ex:a]\n- ex:p (LONG) = 'abc'")
    err = excinfo.value
    assert isinstance(err, ValueError)
    assert "'abc'" in err.message
    assert 'Long' in err.message
    assert (err.line, err.column) == (3, 17)


def test_range_constraint():
    (prop,) = parse_one("[ex:a]\n- ex:p (Long) < '[1, 10]', '[20,]'").property_definitions
    first, second = prop.value_constraints
    assert isinstance(first, RangeConstraint)
    assert (first.lower, first.upper) == (1, 10)
    assert second.upper is None


def test_invalid_constraint():
    with pytest.raises(ValueConversionError, match='not a valid constraint expression'):
        parse_cnd(EX_DECL + "[ex:a]\n- ex:p (Long) < 'abc'")


def test_residual_names():
    definition = parse_one('[ex:a]\n- * (STRING)\n+ * (ex:base)')
    prop = definition.property_definitions[0]
    child = definition.child_node_definitions[0]
    assert prop.name == RESIDUAL_NAME
    assert child.name == RESIDUAL_NAME
    assert prop.is_residual and child.is_residual
    assert prop.name != QName('', '*x')
    assert child.required_primary_types == (ex('base'),)


def test_child_node_definition():
    (child,) = parse_one(
        '[ex:a]\n+ ex:child (nt:base, ex:other) = ex:other mandatory autocreated protected * ABORT'
    ).child_node_definitions
    assert child.name == ex('child')
    assert child.required_primary_types == (NT_BASE, ex('other'))
    assert child.default_primary_type == ex('other')
    assert child.mandatory and child.autocreated and child.protected
    assert child.allows_same_name_siblings is True
    assert child.on_parent_version == OnParentVersionAction.ABORT
    assert child.declaring_node_type == ex('a')


def test_child_node_defaults():
    (child,) = parse_one('[ex:a]\n+ ex:child').child_node_definitions
    assert child.required_primary_types == (NT_BASE,)
    assert child.default_primary_type is None
    assert child.allows_same_name_siblings is False


def test_primary_item_on_property():
    definition = parse_one('[ex:a]\n- ex:p !\n+ ex:c')
    assert definition.primary_item_name == ex('p')
    assert definition.get_property(ex('p')).primary
    assert not definition.get_child_node(ex('c')).primary


def test_second_primary_item_is_rejected():
    with pytest.raises(SemanticError, match="More than one primary item specified in node type 'ex:a'"):
        parse_cnd(EX_DECL + '[ex:a]\n- ex:p primary\n+ ex:c !')


def test_primary_item_is_per_node_type():
    result = parse_cnd(EX_DECL + '[ex:a]\n- ex:p !\n[ex:b]\n- ex:q !')
    assert [d.primary_item_name for d in result] == [ex('p'), ex('q')]


def test_definitions_keep_declaration_order():
    result = parse_cnd(EX_DECL + '[ex:c] [ex:a] [ex:b]')
    assert [d.name.local_name for d in result] == ['c', 'a', 'b']
    assert result.get(ex('a')).name == ex('a')
    assert result.get(ex('missing')) is None


def test_comments_between_members():
    definition = parse_one(
        '[ex:a] // the type\n'
        '/* properties\n   follow */\n'
        '- ex:p (Long) // count\n'
    )
    assert definition.property_definitions[0].required_type == PropertyType.LONG


def test_quoted_names():
    definition = parse_one("['ex:a'] > 'nt:base'")
    assert definition.name == ex('a')
    assert definition.supertypes == (NT_BASE,)


@pytest.mark.parametrize('text, message', [
    ('[ex:a', "Missing ']' delimiter for end of node type name"),
    ('ex:a]', "Missing '\\[' delimiter for beginning of node type name"),
    ('[ex:a]\n+ ex:c (nt:base', "Missing '\\)' delimiter"),
    ('[ex:a]\n- ex:p (Long', "Missing '\\)' delimiter"),
    ('<ex2 = >', 'Missing URI in namespace declaration'),
    ("<ex2 'x'>", "Missing '=' in namespace declaration"),
    ("<ex2 = 'x'", "Missing '>' in namespace declaration"),
    ('[ex:a] > ,', 'Expected supertype name'),
])
def test_grammar_errors(text, message):
    with pytest.raises(GrammarError, match=message):
        parse_cnd(EX_DECL + text)


def test_undeclared_prefix():
    with pytest.raises(NameResolutionError) as excinfo:
        parse_cnd('[foo:a]')
    err = excinfo.value
    assert err.message.startswith("Error while parsing 'foo:a'")
    assert (err.line, err.column) == (1, 2)


def test_error_location_and_system_id():
    text = EX_DECL + '[ex:a]\n- ex:p (Bogus)\n'
    with pytest.raises(GrammarError) as excinfo:
        parse_cnd(text, system_id='types.cnd')
    err = excinfo.value
    assert err.system_id == 'types.cnd'
    assert (err.line, err.column) == (3, 9)
    assert 'types.cnd:3:9' in str(err)


def test_duplicate_declaration_is_idempotent():
    once = parse_cnd(EX_DECL).namespaces
    twice = parse_cnd(EX_DECL + EX_DECL).namespaces
    assert once == twice


def test_conflicting_declaration_raises_by_default():
    with pytest.raises(NamespaceConflictError) as excinfo:
        parse_cnd(EX_DECL + "<ex = 'http://example.com/other'>")
    assert excinfo.value.line == 2


def test_conflicting_declaration_ignored_by_policy():
    config = ReaderConfig(namespace_conflict=NamespaceConflictPolicy.IGNORE)
    result = parse_cnd(EX_DECL + "<ex = 'http://example.com/other'>\n[ex:a]", config=config)
    assert result.definitions[0].name == ex('a')


def test_conflicting_declaration_overridden_by_policy():
    config = ReaderConfig(namespace_conflict=NamespaceConflictPolicy.OVERRIDE)
    result = parse_cnd(EX_DECL + "<ex = 'http://example.com/other'>\n[ex:a]", config=config)
    assert result.definitions[0].name == QName('http://example.com/other', 'a')


def test_supplied_mapping_is_not_mutated():
    seed = NamespaceMapping()
    result = parse_cnd(EX_DECL + '[ex:a]', namespaces=seed)
    assert 'ex' not in seed
    assert 'ex' in result.namespaces


def test_mapping_carries_over_to_next_parse():
    first = parse_cnd(EX_DECL)
    second = parse_cnd('[ex:b]', namespaces=first.namespaces)
    assert second.definitions[0].name == ex('b')


def test_empty_input():
    result = parse_cnd('')
    assert result.definitions == ()
    assert result.namespaces == NamespaceMapping()

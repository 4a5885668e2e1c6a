import io

import pytest

from nodetype_cnd.cnd.lexer import Lexer, TokenKind, tokenize
from nodetype_cnd.exceptions import LexError


def _texts(tokens):
    return [t.text for t in tokens if not t.is_eof]


def test_namespace_declaration_tokens():
    tokens = tokenize("<ex = 'http://example.com/ns'>")
    assert [t.kind for t in tokens] == [
        TokenKind.SYMBOL, TokenKind.STRING, TokenKind.SYMBOL,
        TokenKind.STRING, TokenKind.SYMBOL, TokenKind.EOF,
    ]
    assert _texts(tokens) == ['<', 'ex', '=', 'http://example.com/ns', '>']
    assert tokens[3].quoted is True
    assert tokens[1].quoted is False


def test_unquoted_names_keep_colon_and_underscore():
    tokens = tokenize('[ex:my_type2] > nt:base')
    assert _texts(tokens) == ['[', 'ex:my_type2', ']', '>', 'nt:base']


def test_all_symbols():
    tokens = tokenize('<>=[]-+(),*!')
    assert all(t.kind == TokenKind.SYMBOL for t in tokens[:-1])
    assert _texts(tokens) == list('<>=[]-+(),*!')


def test_line_and_column():
    tokens = tokenize('[a]\n  - b')
    dash = tokens[3]
    assert dash.is_symbol('-')
    assert (dash.line, dash.column) == (2, 3)
    b = tokens[4]
    assert (b.line, b.column) == (2, 5)


def test_comments_are_skipped():
    tokens = tokenize('// line comment\n/* block\n */ [a]')
    assert _texts(tokens) == ['[', 'a', ']']
    assert (tokens[0].line, tokens[0].column) == (3, 5)


def test_quoted_string_escapes():
    tokens = tokenize(r"'a\'b\n'")
    assert tokens[0].text == "a'b\n"
    assert tokens[0].kind == TokenKind.STRING


def test_quoted_string_may_span_lines():
    tokens = tokenize("'a\nb' c")
    assert tokens[0].text == 'a\nb'
    assert (tokens[1].line, tokens[1].column) == (2, 4)


def test_eof_is_repeated():
    lexer = Lexer('')
    assert lexer.next_token().is_eof
    assert lexer.next_token().is_eof


def test_text_stream_source():
    tokens = tokenize(io.StringIO('[a]'))
    assert _texts(tokens) == ['[', 'a', ']']


def test_unterminated_quoted_string():
    with pytest.raises(LexError) as excinfo:
        tokenize("[a] 'open")
    assert excinfo.value.line == 1
    assert excinfo.value.column == 5


def test_unterminated_comment():
    with pytest.raises(LexError, match='Unterminated comment'):
        tokenize('[a]\n/* never closed')


def test_unexpected_character():
    with pytest.raises(LexError) as excinfo:
        tokenize('[a] @', system_id='types.cnd')
    err = excinfo.value
    assert (err.line, err.column) == (1, 5)
    assert err.system_id == 'types.cnd'
    assert 'types.cnd:1:5' in str(err)


def test_describe():
    tokens = tokenize('x')
    assert tokens[0].describe() == "'x'"
    assert tokens[1].describe() == 'end of input'

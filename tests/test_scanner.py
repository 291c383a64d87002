from lox.errors import LEXICAL
from lox.scanner import tokenize
from lox.tokens import TokenType


def types_of(source):
    tokens, _ = tokenize(source)
    return [t.type for t in tokens]


def test_punctuation_and_maximal_munch():
    assert types_of('(){},.-+;*/ ! != = == < <= > >=') == [
        TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN, TokenType.LEFT_BRACE,
        TokenType.RIGHT_BRACE, TokenType.COMMA, TokenType.DOT, TokenType.MINUS,
        TokenType.PLUS, TokenType.SEMICOLON, TokenType.STAR, TokenType.SLASH,
        TokenType.BANG, TokenType.BANG_EQUAL, TokenType.EQUAL, TokenType.EQUAL_EQUAL,
        TokenType.LESS, TokenType.LESS_EQUAL, TokenType.GREATER, TokenType.GREATER_EQUAL,
        TokenType.EOF,
    ]


def test_less_and_greater_keep_their_meaning():
    tokens, _ = tokenize('a < b > c')
    assert [t.lexeme for t in tokens if t.type in (TokenType.LESS, TokenType.GREATER)] == ['<', '>']
    assert tokens[1].type == TokenType.LESS
    assert tokens[3].type == TokenType.GREATER


def test_comments_and_whitespace_are_discarded():
    tokens, diagnostics = tokenize('// nothing here\n\t 1 // trailing\r\n')
    assert diagnostics == []
    assert [t.type for t in tokens] == [TokenType.NUMBER, TokenType.EOF]
    assert tokens[0].line == 2
    assert tokens[-1].line == 3


def test_numbers_decode_to_floats():
    tokens, _ = tokenize('123 4.5 6.')
    assert tokens[0].literal == 123.0
    assert isinstance(tokens[0].literal, float)
    assert tokens[1].literal == 4.5
    # a trailing dot is not part of the number
    assert [t.type for t in tokens[2:]] == [TokenType.NUMBER, TokenType.DOT, TokenType.EOF]
    assert tokens[2].lexeme == '6'


def test_strings_span_lines():
    tokens, diagnostics = tokenize('"one\ntwo" x')
    assert diagnostics == []
    assert tokens[0].type == TokenType.STRING
    assert tokens[0].literal == 'one\ntwo'
    assert tokens[0].lexeme == '"one\ntwo"'
    assert tokens[0].line == 2
    assert tokens[1].line == 2


def test_keywords_and_identifiers():
    tokens, _ = tokenize('class fun var orchid _under this super nil')
    assert [t.type for t in tokens] == [
        TokenType.CLASS, TokenType.FUN, TokenType.VAR, TokenType.IDENTIFIER,
        TokenType.IDENTIFIER, TokenType.THIS, TokenType.SUPER, TokenType.NIL, TokenType.EOF,
    ]


def test_unterminated_string_reported_where_scanning_stopped():
    tokens, diagnostics = tokenize('print 1;\n"abc\ndef')
    assert [t.type for t in tokens] == [
        TokenType.PRINT, TokenType.NUMBER, TokenType.SEMICOLON, TokenType.EOF,
    ]
    assert len(diagnostics) == 1
    assert diagnostics[0].phase == LEXICAL
    assert diagnostics[0].line == 3
    assert str(diagnostics[0]) == '[line 3] Error: Unterminated string.'


def test_scanning_continues_after_unexpected_characters():
    tokens, diagnostics = tokenize('@ 1\n# 2')
    assert [d.line for d in diagnostics] == [1, 2]
    assert all(d.message == 'Unexpected character.' for d in diagnostics)
    assert [t.literal for t in tokens if t.type == TokenType.NUMBER] == [1.0, 2.0]

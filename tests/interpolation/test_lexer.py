"""
Tests for the mode-aware phrase lexer.
"""

import pytest

from phrasebook.errors import InvalidSyntaxError
from phrasebook.interpolation.lexer import PhraseLexer, tokenize
from phrasebook.interpolation.tokens import Token, TokenType as T


def types(text):
    return [tok.type for tok in tokenize(text)]


def values(text):
    return [tok.value for tok in tokenize(text)]


class TestBodyMode:
    """Plain phrase text outside of interpolations."""

    def test_plain_text_is_single_string(self):
        assert tokenize("The quick brown fox") == [Token(T.STRING, "The quick brown fox", 0)]

    def test_empty_text_has_no_tokens(self):
        assert tokenize("") == []

    def test_closing_brace_in_body_is_text(self):
        assert tokenize("a } b") == [Token(T.STRING, "a } b", 0)]

    def test_dollar_without_brace_is_text(self):
        assert tokenize("costs $5 {maybe}") == [Token(T.STRING, "costs $5 {maybe}", 0)]

    def test_identifier_interpolation(self):
        tokens = tokenize("The quick ${foxColour} fox")
        assert tokens == [
            Token(T.STRING, "The quick ", 0),
            Token(T.EXPRESSION_START, "${", 10),
            Token(T.IDENTIFIER, "foxColour", 12),
            Token(T.EXPRESSION_END, "}", 21),
            Token(T.STRING, " fox", 22),
        ]

    def test_whitespace_around_expression_is_skipped(self):
        tokens = tokenize("${  name  } b")
        assert [t.type for t in tokens] == [T.EXPRESSION_START, T.IDENTIFIER, T.EXPRESSION_END, T.STRING]
        assert tokens[1].position == 4
        assert tokens[-1].value == " b"


class TestExpressionMode:
    """Tokens inside ${...}."""

    def test_function_call_without_arguments(self):
        assert types("${getSubject()}") == [
            T.EXPRESSION_START, T.FUNCTION_CALL, T.PAREN_END, T.EXPRESSION_END,
        ]
        assert tokenize("${getSubject()}")[1].value == "getSubject"

    def test_call_with_nested_literals(self):
        text = "${t('foo.bar', { count: 2, name: 'Foobar', locales: ['en-GB', 'pt-PT'] })}"
        assert types(text) == [
            T.EXPRESSION_START,
            T.FUNCTION_CALL,
            T.STRING, T.COMMA,
            T.BRACE_START,
            T.PROPERTY_NAME, T.NUMBER, T.COMMA,
            T.PROPERTY_NAME, T.STRING, T.COMMA,
            T.PROPERTY_NAME, T.BRACKET_START, T.STRING, T.COMMA, T.STRING, T.BRACKET_END,
            T.BRACE_END,
            T.PAREN_END,
            T.EXPRESSION_END,
        ]
        assert values(text)[1:6] == ["t", "foo.bar", ",", "{", "count"]

    @pytest.mark.parametrize("source,expected_type,expected_value", [
        ("${true}", T.BOOLEAN, "true"),
        ("${false}", T.BOOLEAN, "false"),
        ("${null}", T.NULL, "null"),
        ("${undefined}", T.UNDEFINED, "undefined"),
        ("${42}", T.NUMBER, "42"),
        ("${-2.5}", T.NUMBER, "-2.5"),
        ("${'single'}", T.STRING, "single"),
        ('${"double"}', T.STRING, "double"),
    ])
    def test_literals(self, source, expected_type, expected_value):
        token = tokenize(source)[1]
        assert token.type is expected_type
        assert token.value == expected_value

    def test_keywords_match_whole_words_only(self):
        assert tokenize("${trueValue}")[1] == Token(T.IDENTIFIER, "trueValue", 2)
        assert tokenize("${nullable}")[1].type is T.IDENTIFIER
        assert tokenize("${undefinedThing}")[1].type is T.IDENTIFIER

    def test_string_escapes_are_decoded(self):
        assert tokenize('${"a \\"quoted\\" word"}')[1].value == 'a "quoted" word'
        assert tokenize("${'it\\'s'}")[1].value == "it's"
        assert tokenize("${'line\\nbreak'}")[1].value == "line\nbreak"
        assert tokenize("${'back\\\\slash'}")[1].value == "back\\slash"

    def test_property_name_allows_space_before_colon(self):
        tokens = tokenize("${ {color : 'brown'} }")
        assert tokens[2] == Token(T.PROPERTY_NAME, "color", 4)

    def test_function_call_allows_space_before_paren(self):
        tokens = tokenize("${f (1)}")
        assert tokens[1] == Token(T.FUNCTION_CALL, "f", 2)

    def test_brace_inside_array_closes_as_brace_end(self):
        assert types("${[1, 2}") == [
            T.EXPRESSION_START, T.BRACKET_START, T.NUMBER, T.COMMA, T.NUMBER, T.BRACE_END,
        ]


class TestTemplateMode:
    """Backtick templates and their own interpolations."""

    def test_template_with_interpolation(self):
        assert tokenize("${`a ${b} c`}") == [
            Token(T.EXPRESSION_START, "${", 0),
            Token(T.TEMPLATE_START, "`", 2),
            Token(T.STRING, "a ", 3),
            Token(T.EXPRESSION_START, "${", 5),
            Token(T.IDENTIFIER, "b", 7),
            Token(T.EXPRESSION_END, "}", 8),
            Token(T.STRING, " c", 9),
            Token(T.TEMPLATE_END, "`", 11),
            Token(T.EXPRESSION_END, "}", 12),
        ]

    def test_template_keeps_whitespace_and_braces(self):
        tokens = tokenize("${`  {x} $ `}")
        assert tokens[2] == Token(T.STRING, "  {x} $ ", 3)

    def test_nested_templates_balance(self):
        assert types("${`outer ${f(`inner ${x}`)} end`}") == [
            T.EXPRESSION_START,
            T.TEMPLATE_START, T.STRING,
            T.EXPRESSION_START, T.FUNCTION_CALL,
            T.TEMPLATE_START, T.STRING, T.EXPRESSION_START, T.IDENTIFIER, T.EXPRESSION_END, T.TEMPLATE_END,
            T.PAREN_END, T.EXPRESSION_END,
            T.STRING, T.TEMPLATE_END,
            T.EXPRESSION_END,
        ]


class TestLexerErrors:

    @pytest.mark.parametrize("source", [
        "The quick brown fox ${const foo = 'bar'}",
        "${'unterminated}",
        "${a + b}",
        "${a.b}",
    ])
    def test_unknown_character_raises(self, source):
        with pytest.raises(InvalidSyntaxError):
            tokenize(source)

    def test_error_reports_position(self):
        with pytest.raises(InvalidSyntaxError) as exc:
            tokenize("${a = b}")
        assert exc.value.position == 4
        assert "at position 4" in str(exc.value)


class TestLexerReuse:

    def test_instance_state_does_not_leak_between_calls(self):
        lexer = PhraseLexer()
        lexer.tokenize("${ [ `unclosed")
        assert lexer.tokenize("plain } text") == [Token(T.STRING, "plain } text", 0)]

    def test_same_text_same_tokens(self):
        lexer = PhraseLexer()
        text = "Hi ${name}, you have ${count(items, [1, 2])}"
        assert lexer.tokenize(text) == lexer.tokenize(text)

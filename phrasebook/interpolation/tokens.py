"""
Lexical types for the phrase interpolation language.

Defines token types, lexer modes and the token record itself.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    """Token types produced by PhraseLexer."""

    # Plain text (phrase body, template segments) and quoted strings
    STRING = "STRING"

    # Interpolation and template delimiters
    EXPRESSION_START = "EXPRESSION_START"    # ${
    EXPRESSION_END = "EXPRESSION_END"        # } closing ${
    TEMPLATE_START = "TEMPLATE_START"        # `
    TEMPLATE_END = "TEMPLATE_END"            # `

    # Brackets
    BRACKET_START = "BRACKET_START"          # [
    BRACKET_END = "BRACKET_END"              # ]
    BRACE_START = "BRACE_START"              # {
    BRACE_END = "BRACE_END"                  # } closing {
    PAREN_END = "PAREN_END"                  # )

    COMMA = "COMMA"

    # Literal keywords and numbers
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"
    UNDEFINED = "UNDEFINED"
    NUMBER = "NUMBER"

    # Names
    FUNCTION_CALL = "FUNCTION_CALL"          # name(
    PROPERTY_NAME = "PROPERTY_NAME"          # name:
    IDENTIFIER = "IDENTIFIER"


class LexerMode(enum.Enum):
    """Lexical modes kept on the lexer's mode stack."""
    BODY = "body"
    EXPRESSION = "expression"
    TEMPLATE = "template"


# Token types that carry a literal value
LITERAL_TOKENS = frozenset({
    TokenType.STRING,
    TokenType.BOOLEAN,
    TokenType.NULL,
    TokenType.UNDEFINED,
    TokenType.NUMBER,
})

# Token types that close a construct
CLOSING_TOKENS = frozenset({
    TokenType.EXPRESSION_END,
    TokenType.TEMPLATE_END,
    TokenType.BRACKET_END,
    TokenType.BRACE_END,
    TokenType.PAREN_END,
})


@dataclass(frozen=True)
class Token:
    """
    Token with its offset in the source phrase.

    Attributes:
        type: Token type
        value: Cleaned token value (whitespace, quotes and punctuation stripped)
        position: Offset of the match start in the source phrase
    """
    type: TokenType
    value: str
    position: int

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, pos={self.position})"


__all__ = ["TokenType", "LexerMode", "Token", "LITERAL_TOKENS", "CLOSING_TOKENS"]

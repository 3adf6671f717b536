"""
Recursive descent parser for phrase interpolation.

Builds the phrase AST from the token sequence produced by PhraseLexer.

Grammar (tokens in capitals):
phrase      → (STRING | EXPRESSION_START expression EXPRESSION_END)*
expression  → IDENTIFIER | call | array | object | template | literal
call        → FUNCTION_CALL list(PAREN_END)
array       → BRACKET_START list(BRACKET_END)
list(END)   → (expression | COMMA)* END        ; elided items are undefined
object      → BRACE_START (PROPERTY_NAME expression | COMMA)* BRACE_END
template    → TEMPLATE_START (STRING | EXPRESSION_START expression EXPRESSION_END)* TEMPLATE_END
literal     → STRING | NUMBER | BOOLEAN | NULL | UNDEFINED
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from .lexer import PhraseLexer
from .model import (
    ArrayExpression,
    CallExpression,
    Expression,
    Identifier,
    Literal,
    ObjectExpression,
    PhraseAST,
    TemplateLiteral,
)
from .tokens import LITERAL_TOKENS, Token, TokenType
from .values import UNDEFINED
from ..errors import InvalidSyntaxError

logger = logging.getLogger(__name__)


class TokenCursor:
    """
    Read-only view over a token sequence with an advancing position.

    The underlying sequence is never modified, so the same tokens
    can be parsed again from a fresh cursor.
    """

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = tuple(tokens)
        self.position = 0
        self.length = len(self.tokens)

    def current(self) -> Optional[Token]:
        """Returns the current token or None at the end."""
        if self.position >= self.length:
            return None
        return self.tokens[self.position]

    def peek(self, offset: int = 1) -> Optional[Token]:
        """Returns the token at the given offset from the current position."""
        pos = self.position + offset
        if pos >= self.length:
            return None
        return self.tokens[pos]

    def advance(self) -> Token:
        """Moves to the next token and returns the previous one."""
        current = self.current()
        if current is None:
            raise InvalidSyntaxError("unexpected end of phrase", self.end_position())
        self.position += 1
        return current

    def is_at_end(self) -> bool:
        return self.position >= self.length

    def match(self, *token_types: TokenType) -> bool:
        current = self.current()
        return current is not None and current.type in token_types

    def end_position(self) -> int:
        """Source offset used for errors at the end of input."""
        if not self.tokens:
            return 0
        return self.tokens[-1].position


class PhraseParser:
    """
    Parser of phrase text into a PhraseAST.

    Holds no per-parse state: every parse works on its own TokenCursor,
    so a single instance is safe to share.
    """

    def __init__(self, lexer: Optional[PhraseLexer] = None):
        self.lexer = lexer or PhraseLexer()

    def parse(self, text: str) -> PhraseAST:
        """
        Parses phrase text.

        Raises:
            InvalidSyntaxError: On lexical or structural errors
        """
        return self.parse_tokens(self.lexer.tokenize(text))

    def parse_tokens(self, tokens: Sequence[Token]) -> PhraseAST:
        """Parses an already tokenized phrase."""
        if not tokens:
            return (Literal(""),)

        cursor = TokenCursor(tokens)
        output: List[Expression] = []

        while not cursor.is_at_end():
            token = cursor.current()
            assert token is not None

            if token.type is TokenType.STRING:
                cursor.advance()
                output.append(Literal(token.value))
            elif token.type is TokenType.EXPRESSION_START:
                cursor.advance()
                output.append(self._parse_interpolation(cursor, token))
            elif token.type in (TokenType.EXPRESSION_END, TokenType.BRACE_END):
                # Stray closer outside of an interpolation
                cursor.advance()
            else:
                raise self._unexpected(token)

        logger.debug(f"Parsed {len(tokens)} tokens into {len(output)} top-level nodes")
        return tuple(output)

    # ------------------------------------------------------------------ #

    def _parse_interpolation(self, cursor: TokenCursor, opener: Token) -> Expression:
        """Parses the body of ${...} and its closing brace."""
        node = self._parse_expression(cursor)

        closer = cursor.current()
        if closer is None:
            raise InvalidSyntaxError("unterminated interpolation", opener.position)
        if closer.type is not TokenType.EXPRESSION_END:
            raise self._unexpected(closer)
        cursor.advance()
        return node

    def _parse_expression(self, cursor: TokenCursor) -> Expression:
        token = cursor.current()
        if token is None:
            raise InvalidSyntaxError("unexpected end of phrase", cursor.end_position())

        if token.type is TokenType.IDENTIFIER:
            cursor.advance()
            return Identifier(name=token.value)
        if token.type is TokenType.FUNCTION_CALL:
            return self._parse_call(cursor)
        if token.type is TokenType.BRACKET_START:
            return self._parse_array(cursor)
        if token.type is TokenType.BRACE_START:
            return self._parse_object(cursor)
        if token.type is TokenType.TEMPLATE_START:
            return self._parse_template(cursor)
        if token.type in LITERAL_TOKENS:
            return self._parse_literal(cursor)

        raise self._unexpected(token)

    def _parse_literal(self, cursor: TokenCursor) -> Literal:
        token = cursor.advance()

        if token.type is TokenType.BOOLEAN:
            return Literal(token.value == "true")
        if token.type is TokenType.NULL:
            return Literal(None)
        if token.type is TokenType.UNDEFINED:
            return Literal(UNDEFINED)
        if token.type is TokenType.NUMBER:
            if "." in token.value:
                return Literal(float(token.value))
            return Literal(int(token.value))
        return Literal(token.value)

    def _parse_call(self, cursor: TokenCursor) -> CallExpression:
        opener = cursor.advance()
        arguments = self._parse_list(cursor, opener, TokenType.PAREN_END)
        return CallExpression(callee=opener.value, arguments=arguments)

    def _parse_array(self, cursor: TokenCursor) -> ArrayExpression:
        opener = cursor.advance()
        elements = self._parse_list(cursor, opener, TokenType.BRACKET_END)
        return ArrayExpression(elements=elements)

    def _parse_list(self, cursor: TokenCursor, opener: Token, closing: TokenType) -> tuple:
        """
        Parses comma separated items up to the closing token.

        Elision: a leading comma, two consecutive commas and a comma
        right before the closing token each stand for an undefined item.
        """
        items: List[Expression] = []

        if cursor.match(TokenType.COMMA):
            items.append(Literal(UNDEFINED))

        while True:
            token = cursor.current()
            if token is None:
                raise InvalidSyntaxError(f"unclosed {opener.type.value.lower()}", opener.position)

            if token.type is TokenType.COMMA:
                following = cursor.peek()
                if following is not None and following.type in (TokenType.COMMA, closing):
                    items.append(Literal(UNDEFINED))
                cursor.advance()
            elif token.type is closing:
                cursor.advance()
                return tuple(items)
            else:
                items.append(self._parse_expression(cursor))

    def _parse_object(self, cursor: TokenCursor) -> ObjectExpression:
        opener = cursor.advance()
        properties: Dict[str, Expression] = {}

        while True:
            if cursor.is_at_end():
                raise InvalidSyntaxError("unclosed object", opener.position)

            token = cursor.advance()
            if token.type is TokenType.COMMA:
                continue
            if token.type is TokenType.BRACE_END:
                return ObjectExpression(properties=properties)
            if token.type is TokenType.IDENTIFIER:
                raise InvalidSyntaxError(f"shorthand property '{token.value}' is not supported", token.position)
            if token.type is not TokenType.PROPERTY_NAME:
                raise self._unexpected(token)

            # Last write wins for repeated keys
            properties[token.value] = self._parse_expression(cursor)

    def _parse_template(self, cursor: TokenCursor) -> TemplateLiteral:
        opener = cursor.advance()
        parts: List[Expression] = []

        while True:
            token = cursor.current()
            if token is None:
                raise InvalidSyntaxError("unclosed template literal", opener.position)

            if token.type is TokenType.STRING:
                cursor.advance()
                parts.append(Literal(token.value))
            elif token.type is TokenType.EXPRESSION_START:
                cursor.advance()
                parts.append(self._parse_template_expression(cursor, token))
            elif token.type is TokenType.TEMPLATE_END:
                cursor.advance()
                return TemplateLiteral(parts=tuple(parts))
            else:
                raise self._unexpected(token)

    def _parse_template_expression(self, cursor: TokenCursor, opener: Token) -> Expression:
        node = self._parse_expression(cursor)

        closer = cursor.current()
        if closer is None:
            raise InvalidSyntaxError("unterminated interpolation in template literal", opener.position)
        if closer.type is TokenType.TEMPLATE_END:
            raise InvalidSyntaxError("template literal closed while an expression is still open", closer.position)
        if closer.type is not TokenType.EXPRESSION_END:
            raise self._unexpected(closer)
        cursor.advance()
        return node

    @staticmethod
    def _unexpected(token: Token) -> InvalidSyntaxError:
        return InvalidSyntaxError(f"unexpected {token.type.value} {token.value!r}", token.position)


_default_parser = PhraseParser()


def parse(text: str) -> PhraseAST:
    """Parses phrase text with the shared default parser."""
    return _default_parser.parse(text)


__all__ = ["TokenCursor", "PhraseParser", "parse"]

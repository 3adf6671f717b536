"""
Mode-aware lexer for phrase interpolation.

Splits a phrase into tokens using a stack of lexical modes:
- body: plain phrase text with ${...} interpolations
- expression: the inside of ${...}, [...], {...} and name(...)
- template: the inside of backtick templates with their own ${...}

The mode stack lives only for the duration of a tokenize() call,
so one lexer instance can be shared between threads.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Pattern, Tuple

from .tokens import LexerMode, Token, TokenType
from ..errors import InvalidSyntaxError

logger = logging.getLogger(__name__)


class Transition(enum.Enum):
    NONE = "none"
    PUSH_EXPRESSION = "push_expression"
    PUSH_TEMPLATE = "push_template"
    POP = "pop"


_ESCAPES = {
    '"': '"',
    "'": "'",
    "\\": "\\",
    "n": "\n",
    "r": "\r",
}

_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)

_WHITESPACE_RE = re.compile(r"\s+")


def _decode_string(raw: str) -> str:
    """Replaces supported escape sequences inside a quoted string."""
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(1)], raw)


@dataclass(frozen=True)
class LexRule:
    """
    One lexical rule of a mode.

    Attributes:
        pattern: Compiled regex; a named group "value" marks the token value
        token_type: Type of the emitted token
        transition: Mode stack change after the match
        convert: Optional post-processing of the value
    """
    pattern: Pattern[str]
    token_type: TokenType
    transition: Transition = Transition.NONE
    convert: Optional[Callable[[str], str]] = None


def _rule(
    regex: str,
    token_type: TokenType,
    transition: Transition = Transition.NONE,
    convert: Optional[Callable[[str], str]] = None,
) -> LexRule:
    return LexRule(re.compile(regex, re.DOTALL), token_type, transition, convert)


# Rules are tried in order, the first match wins
MODE_RULES: Dict[LexerMode, Tuple[LexRule, ...]] = {
    LexerMode.BODY: (
        _rule(r"\$\{", TokenType.EXPRESSION_START, Transition.PUSH_EXPRESSION),
        _rule(r"(?:[^$]|\$(?!\{))+", TokenType.STRING),
    ),
    LexerMode.EXPRESSION: (
        _rule(r'"(?P<value>(?:\\["\'\\rn]|[^"\\])*)"', TokenType.STRING, convert=_decode_string),
        _rule(r"'(?P<value>(?:\\[\"'\\rn]|[^'\\])*)'", TokenType.STRING, convert=_decode_string),
        _rule(r"\[", TokenType.BRACKET_START, Transition.PUSH_EXPRESSION),
        _rule(r"\]", TokenType.BRACKET_END, Transition.POP),
        _rule(r"\{", TokenType.BRACE_START, Transition.PUSH_EXPRESSION),
        _rule(r"\}", TokenType.BRACE_END, Transition.POP),
        _rule(r"\)", TokenType.PAREN_END, Transition.POP),
        _rule(r"`", TokenType.TEMPLATE_START, Transition.PUSH_TEMPLATE),
        _rule(r",", TokenType.COMMA),
        _rule(r"(?:true|false)(?!\w)", TokenType.BOOLEAN),
        _rule(r"null(?!\w)", TokenType.NULL),
        _rule(r"-?\d+(?:\.\d+)?", TokenType.NUMBER),
        _rule(r"undefined(?!\w)", TokenType.UNDEFINED),
        _rule(r"(?P<value>\w+)\s*\(", TokenType.FUNCTION_CALL, Transition.PUSH_EXPRESSION),
        _rule(r"(?P<value>\w+)\s*:", TokenType.PROPERTY_NAME),
        _rule(r"\w+", TokenType.IDENTIFIER),
    ),
    LexerMode.TEMPLATE: (
        _rule(r"\$\{", TokenType.EXPRESSION_START, Transition.PUSH_EXPRESSION),
        _rule(r"`", TokenType.TEMPLATE_END, Transition.POP),
        _rule(r"(?:[^$`]|\$(?!\{))+", TokenType.STRING),
    ),
}


@dataclass(frozen=True)
class _Frame:
    """Mode stack entry: the mode and the token that opened it."""
    mode: LexerMode
    opener: Optional[TokenType] = None


class PhraseLexer:
    """
    Tokenizer for phrase text.

    A finite-state machine over LexerMode with an explicit mode stack.
    The bottom of the stack is always body mode.
    """

    def __init__(self, rules: Optional[Dict[LexerMode, Tuple[LexRule, ...]]] = None):
        self.rules = rules or MODE_RULES

    def tokenize(self, text: str) -> List[Token]:
        """
        Splits a phrase into tokens.

        Args:
            text: Phrase text

        Returns:
            Tokens in source order

        Raises:
            InvalidSyntaxError: When no rule of the active mode matches
        """
        tokens: List[Token] = []
        stack: List[_Frame] = [_Frame(LexerMode.BODY)]
        position = 0
        length = len(text)

        while position < length:
            frame = stack[-1]

            if frame.mode is LexerMode.EXPRESSION:
                ws = _WHITESPACE_RE.match(text, position)
                if ws:
                    position = ws.end()
                    if position >= length:
                        break

            token, position, transition = self._match(text, position, frame)
            tokens.append(token)
            self._apply_transition(stack, token, transition)

        if len(stack) > 1:
            logger.debug(f"Tokenized with {len(stack) - 1} unclosed mode(s): {stack[-1].mode.value}")
        logger.debug(f"Tokenized phrase of length {length} into {len(tokens)} tokens")
        return tokens

    def _match(self, text: str, position: int, frame: _Frame) -> Tuple[Token, int, Transition]:
        for rule in self.rules[frame.mode]:
            match = rule.pattern.match(text, position)
            if not match:
                continue

            if "value" in rule.pattern.groupindex:
                value = match.group("value")
            else:
                value = match.group(0)
            if rule.convert is not None:
                value = rule.convert(value)

            token_type = rule.token_type
            # } closes either an interpolation or an object literal
            if token_type is TokenType.BRACE_END and frame.opener is TokenType.EXPRESSION_START:
                token_type = TokenType.EXPRESSION_END

            return Token(token_type, value, position), match.end(), rule.transition

        raise InvalidSyntaxError(
            f"unexpected character {text[position]!r} in {frame.mode.value} mode",
            position,
        )

    @staticmethod
    def _apply_transition(stack: List[_Frame], token: Token, transition: Transition) -> None:
        if transition is Transition.PUSH_EXPRESSION:
            stack.append(_Frame(LexerMode.EXPRESSION, token.type))
        elif transition is Transition.PUSH_TEMPLATE:
            stack.append(_Frame(LexerMode.TEMPLATE, token.type))
        elif transition is Transition.POP and len(stack) > 1:
            stack.pop()


def tokenize(text: str) -> List[Token]:
    """Tokenizes a phrase with a default lexer."""
    return PhraseLexer().tokenize(text)


__all__ = ["PhraseLexer", "LexRule", "Transition", "MODE_RULES", "tokenize"]

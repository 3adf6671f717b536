"""
Phrase interpolation language: lexer, parser and interpreter.

Pipeline: text → tokens → PhraseAST → evaluated parts.
"""

from __future__ import annotations

from .interpreter import Locals, PhraseInterpreter, interpret
from .lexer import PhraseLexer, tokenize
from .model import (
    ArrayExpression,
    CallExpression,
    Expression,
    Identifier,
    Literal,
    NodeType,
    ObjectExpression,
    PhraseAST,
    TemplateLiteral,
    ast_to_list,
)
from .parser import PhraseParser, TokenCursor, parse
from .tokens import LexerMode, Token, TokenType
from .values import UNDEFINED, is_absent, join_parts, to_text

__all__ = [
    # Pipeline
    "tokenize",
    "parse",
    "interpret",
    "PhraseLexer",
    "PhraseParser",
    "PhraseInterpreter",
    "TokenCursor",
    # Tokens
    "Token",
    "TokenType",
    "LexerMode",
    # Syntax tree
    "NodeType",
    "Expression",
    "Literal",
    "Identifier",
    "CallExpression",
    "ArrayExpression",
    "ObjectExpression",
    "TemplateLiteral",
    "PhraseAST",
    "ast_to_list",
    # Values
    "Locals",
    "UNDEFINED",
    "is_absent",
    "to_text",
    "join_parts",
]

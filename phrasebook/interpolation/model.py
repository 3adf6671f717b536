"""
Syntax tree for phrase interpolation.

A phrase parses into a flat tuple of expressions: literals for plain text
runs and one expression per ${...} interpolation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple, Union

from .values import UNDEFINED


class NodeType(Enum):
    """Syntax tree node types."""
    LITERAL = "Literal"
    IDENTIFIER = "Identifier"
    CALL_EXPRESSION = "CallExpression"
    ARRAY_EXPRESSION = "ArrayExpression"
    OBJECT_EXPRESSION = "ObjectExpression"
    TEMPLATE_LITERAL = "TemplateLiteral"


class Expression(ABC):
    """Base class of all syntax tree nodes."""

    @abstractmethod
    def get_type(self) -> NodeType:
        """Returns the node type."""
        pass

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Serializes the node into JSON-friendly primitives."""
        pass


@dataclass(frozen=True)
class Literal(Expression):
    """
    Literal value: text run, quoted string, number, boolean, null or undefined.

    `undefined` is stored as the UNDEFINED sentinel, `null` as None.
    """
    value: Any

    def get_type(self) -> NodeType:
        return NodeType.LITERAL

    def to_dict(self) -> Dict[str, Any]:
        if self.value is UNDEFINED:
            return {"type": self.get_type().value}
        return {"type": self.get_type().value, "value": self.value}


@dataclass(frozen=True)
class Identifier(Expression):
    name: str

    def get_type(self) -> NodeType:
        return NodeType.IDENTIFIER

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.get_type().value, "name": self.name}


@dataclass(frozen=True)
class CallExpression(Expression):
    """Function call: callee(arg, ...). Elided arguments are undefined literals."""
    callee: str
    arguments: Tuple[Expression, ...] = ()

    def get_type(self) -> NodeType:
        return NodeType.CALL_EXPRESSION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.get_type().value,
            "callee": self.callee,
            "arguments": [arg.to_dict() for arg in self.arguments],
        }


@dataclass(frozen=True)
class ArrayExpression(Expression):
    elements: Tuple[Expression, ...] = ()

    def get_type(self) -> NodeType:
        return NodeType.ARRAY_EXPRESSION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.get_type().value,
            "elements": [el.to_dict() for el in self.elements],
        }


@dataclass(frozen=True)
class ObjectExpression(Expression):
    """
    Object literal: { name: expr, ... }

    Keys are unique; a repeated key keeps the last value.
    """
    properties: Mapping[str, Expression] = field(default_factory=dict)

    def __post_init__(self):
        # Read-only view over a private copy
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObjectExpression):
            return NotImplemented
        return list(self.properties.items()) == list(other.properties.items())

    def __hash__(self) -> int:
        return hash(tuple(self.properties.items()))

    def get_type(self) -> NodeType:
        return NodeType.OBJECT_EXPRESSION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.get_type().value,
            "properties": {key: value.to_dict() for key, value in self.properties.items()},
        }


@dataclass(frozen=True)
class TemplateLiteral(Expression):
    """Backtick template: literal segments and embedded expressions in source order."""
    parts: Tuple[Expression, ...] = ()

    def get_type(self) -> NodeType:
        return NodeType.TEMPLATE_LITERAL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.get_type().value,
            "parts": [part.to_dict() for part in self.parts],
        }


AnyExpression = Union[
    Literal,
    Identifier,
    CallExpression,
    ArrayExpression,
    ObjectExpression,
    TemplateLiteral,
]

# Top-level phrase representation
PhraseAST = Tuple[Expression, ...]


def ast_to_list(ast: PhraseAST) -> list:
    """Dumps a whole phrase AST for JSON output."""
    return [node.to_dict() for node in ast]


__all__ = [
    "NodeType",
    "Expression",
    "Literal",
    "Identifier",
    "CallExpression",
    "ArrayExpression",
    "ObjectExpression",
    "TemplateLiteral",
    "AnyExpression",
    "PhraseAST",
    "ast_to_list",
]

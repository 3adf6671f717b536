"""
Tree-walking interpreter for phrase ASTs.

Evaluates syntax tree nodes against a locals mapping (name → value or
callable). The interpreter keeps no state between calls: the same AST
may be evaluated many times, from many threads, with different locals.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, cast

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
)
from .values import UNDEFINED, join_parts
from ..errors import EvaluationError, InternalInconsistencyError


Locals = Mapping[str, Any]


class PhraseInterpreter:
    """
    Evaluator of phrase syntax trees.

    Dispatches on the node type; every NodeType has exactly one handler.
    """

    def interpret(self, ast: PhraseAST, locals_: Locals) -> List[Any]:
        """
        Evaluates every top-level node of a phrase.

        Args:
            ast: Parsed phrase
            locals_: Bindings for identifiers and calls

        Returns:
            One evaluated part per node, in order
        """
        return [self.evaluate(node, locals_) for node in ast]

    def evaluate(self, node: Expression, locals_: Locals) -> Any:
        """
        Evaluates a single node.

        Raises:
            EvaluationError: When a call targets something that is not callable
            InternalInconsistencyError: When the node type is unknown
        """
        try:
            node_type = node.get_type()
        except AttributeError:
            raise InternalInconsistencyError(f"Unknown AST type: {type(node).__name__}") from None

        if node_type == NodeType.LITERAL:
            return self._evaluate_literal(cast(Literal, node))
        elif node_type == NodeType.IDENTIFIER:
            return self._evaluate_identifier(cast(Identifier, node), locals_)
        elif node_type == NodeType.CALL_EXPRESSION:
            return self._evaluate_call(cast(CallExpression, node), locals_)
        elif node_type == NodeType.ARRAY_EXPRESSION:
            return self._evaluate_array(cast(ArrayExpression, node), locals_)
        elif node_type == NodeType.OBJECT_EXPRESSION:
            return self._evaluate_object(cast(ObjectExpression, node), locals_)
        elif node_type == NodeType.TEMPLATE_LITERAL:
            return self._evaluate_template(cast(TemplateLiteral, node), locals_)
        else:
            raise InternalInconsistencyError(f"Unknown AST type: {node_type}")

    def _evaluate_literal(self, node: Literal) -> Any:
        return node.value

    def _evaluate_identifier(self, node: Identifier, locals_: Locals) -> Any:
        """Unbound names evaluate to undefined instead of failing."""
        return locals_.get(node.name, UNDEFINED)

    def _evaluate_call(self, node: CallExpression, locals_: Locals) -> Any:
        function = locals_.get(node.callee, UNDEFINED)
        if function is UNDEFINED:
            raise EvaluationError(f"'{node.callee}' is not defined")
        if not callable(function):
            raise EvaluationError(f"'{node.callee}' is not a function")

        arguments = [self.evaluate(arg, locals_) for arg in node.arguments]
        return function(*arguments)

    def _evaluate_array(self, node: ArrayExpression, locals_: Locals) -> List[Any]:
        return [self.evaluate(element, locals_) for element in node.elements]

    def _evaluate_object(self, node: ObjectExpression, locals_: Locals) -> Dict[str, Any]:
        return {key: self.evaluate(value, locals_) for key, value in node.properties.items()}

    def _evaluate_template(self, node: TemplateLiteral, locals_: Locals) -> str:
        return join_parts(self.evaluate(part, locals_) for part in node.parts)


_default_interpreter = PhraseInterpreter()


def interpret(ast: PhraseAST, locals_: Locals) -> List[Any]:
    """Evaluates a phrase AST with the shared default interpreter."""
    return _default_interpreter.interpret(ast, locals_)


__all__ = ["PhraseInterpreter", "Locals", "interpret"]

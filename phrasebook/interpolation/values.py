"""
Runtime values of the interpolation language.

Phrases distinguish `null` (None) from `undefined` (the UNDEFINED
sentinel). Unbound identifiers and elided call arguments evaluate
to UNDEFINED.
"""

from __future__ import annotations

from typing import Any, Iterable


class _Undefined:
    """Singleton type of the `undefined` value."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "undefined"

    def __reduce__(self):
        return (_Undefined, ())


UNDEFINED = _Undefined()


def is_absent(value: Any) -> bool:
    """True for both null and undefined."""
    return value is None or value is UNDEFINED


def to_text(value: Any) -> str:
    """
    String form of an evaluated value, as used when parts are joined.

    - null / undefined → ""
    - booleans → "true" / "false"
    - integral floats lose the ".0"
    - lists and tuples → elements joined with ","
    """
    if is_absent(value):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(to_text(item) for item in value)
    return str(value)


def join_parts(parts: Iterable[Any]) -> str:
    """Joins evaluated phrase parts into the final string."""
    return "".join(to_text(part) for part in parts)


__all__ = ["UNDEFINED", "is_absent", "to_text", "join_parts"]

from __future__ import annotations

import json
from typing import Any

from .interpolation.values import UNDEFINED


def _default(obj: Any) -> Any:
    if obj is UNDEFINED:
        return None
    if isinstance(obj, (set, frozenset, tuple)):
        return list(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def dumps(obj: Any) -> str:
    """
    Minimal JSON dumper for CLI answers.
    No prettify; ensure_ascii=False; the CLI decides about the trailing newline.
    """
    return json.dumps(obj, ensure_ascii=False, default=_default)

__all__ = ["dumps"]

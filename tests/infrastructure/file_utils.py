"""
File helpers for tests.
"""

from __future__ import annotations

import textwrap
from pathlib import Path


def write(p: Path, text: str) -> Path:
    """
    Writes text to a file, creating parent directories when needed.

    Args:
        p: File path
        text: Content to write

    Returns:
        Path of the written file
    """
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


def write_phrase_file(p: Path, yaml_text: str) -> Path:
    """Writes a phrase file from an indented YAML snippet."""
    return write(p, textwrap.dedent(yaml_text).strip() + "\n")

"""
Shared test infrastructure for phrasebook.

Modules:
- file_utils: helpers for creating files and phrase files
"""

from .file_utils import write, write_phrase_file

__all__ = ["write", "write_phrase_file"]

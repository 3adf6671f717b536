from __future__ import annotations

from importlib import metadata


def tool_version() -> str:
    """
    Version of the installed package.
    Does not import other modules of the package (avoids cycles).
    """
    try:
        return metadata.version("phrasebook")
    except metadata.PackageNotFoundError:
        return "0.0.0"

__all__ = ["tool_version"]

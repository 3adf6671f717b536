from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import PhrasebookUserError
from .interpolation import ast_to_list, parse, tokenize
from .jsonic import dumps as jdumps
from .loader import load_translations
from .version import tool_version

DEBUG_ENV = "PHRASEBOOK_DEBUG"

_yaml = YAML(typ="safe")


def _setup_logging() -> None:
    root = logging.getLogger("phrasebook")
    if root.handlers:
        return
    root.setLevel(logging.DEBUG if os.environ.get(DEBUG_ENV) else logging.WARNING)
    h = logging.StreamHandler()
    h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    root.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="phrasebook",
        description="Phrase interpolation toolkit",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_tokens = sub.add_parser("tokens", help="token stream of a phrase (JSON)")
    sp_tokens.add_argument("text", help="phrase text")

    sp_parse = sub.add_parser("parse", help="syntax tree of a phrase (JSON)")
    sp_parse.add_argument("text", help="phrase text")

    sp_render = sub.add_parser("render", help="render a phrase from a phrase file (plain text)")
    sp_render.add_argument("file", type=Path, help="phrase file (YAML or JSON)")
    sp_render.add_argument("key", help="translation key, dot notation")
    sp_render.add_argument(
        "--var",
        action="append",
        metavar="NAME=VALUE",
        help="context variable; VALUE is read as a YAML scalar (can be repeated)",
    )

    sp_keys = sub.add_parser("keys", help="translation keys of a phrase file (JSON)")
    sp_keys.add_argument("file", type=Path, help="phrase file (YAML or JSON)")

    return p


def _parse_vars(specs: Optional[List[str]]) -> Dict[str, Any]:
    """Parses NAME=VALUE pairs into a context mapping."""
    result: Dict[str, Any] = {}
    if not specs:
        return result

    for spec in specs:
        if "=" not in spec:
            raise ValueError(f"Invalid variable format '{spec}'. Expected 'NAME=VALUE'")
        name, raw = spec.split("=", 1)
        name = name.strip()
        if not name:
            raise ValueError(f"Invalid variable format '{spec}'. Name is empty")
        result[name] = _parse_scalar(raw)

    return result


def _parse_scalar(raw: str) -> Any:
    """'3' → 3, 'true' → True, 'a b' → 'a b'. Unparsable YAML stays a string."""
    try:
        value = _yaml.load(raw)
    except YAMLError:
        return raw
    return raw if value is None and raw.strip() not in {"null", "~"} else value


def main(argv: list[str] | None = None) -> int:
    _setup_logging()
    ns = _build_parser().parse_args(argv)

    try:
        if ns.cmd == "tokens":
            data = [
                {"type": tok.type.value, "value": tok.value, "position": tok.position}
                for tok in tokenize(ns.text)
            ]
            sys.stdout.write(jdumps(data))
            return 0

        if ns.cmd == "parse":
            sys.stdout.write(jdumps(ast_to_list(parse(ns.text))))
            return 0

        if ns.cmd == "render":
            translations = load_translations(ns.file)
            sys.stdout.write(translations.t(ns.key, _parse_vars(ns.var)))
            return 0

        if ns.cmd == "keys":
            translations = load_translations(ns.file)
            sys.stdout.write(jdumps(list(translations.keys())))
            return 0

    except PhrasebookUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())

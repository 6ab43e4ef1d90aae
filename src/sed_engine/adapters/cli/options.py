"""Command-line flag binding for the stream editor."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from sed_engine.script import ScriptError

PROG = "sed-engine"


@dataclass(frozen=True, slots=True)
class ScriptSource:
    """One ``-e`` expression or ``-f`` script file, in command-line order."""

    kind: str
    value: str

    def fragments(self) -> List[str]:
        if self.kind != "file":
            return [self.value]
        try:
            return Path(self.value).read_text(encoding="utf-8").splitlines()
        except UnicodeDecodeError as exc:
            raise ScriptError(
                f"can't read {self.value}: invalid {exc.encoding} data at byte {exc.start}"
            ) from exc


@dataclass(slots=True)
class SedOptions:
    sources: List[ScriptSource] = field(default_factory=list)
    files: List[str] = field(default_factory=list)
    quiet: bool = False
    in_place: Optional[str] = None
    debug: bool = False

    def load_fragments(self) -> List[str]:
        """Expand every script source into compiler fragments, preserving order."""

        fragments: List[str] = []
        for source in self.sources:
            fragments.extend(source.fragments())
        return fragments


def _expression(value: str) -> ScriptSource:
    return ScriptSource("expression", value)


def _script_file(value: str) -> ScriptSource:
    return ScriptSource("file", value)


def _env_flag(key: str) -> bool:
    return os.environ.get(key, "").lower() in {"1", "true", "yes", "on"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Apply a sed-style editing script to the lines of the input files.",
    )
    parser.add_argument(
        "-e",
        "--expression",
        dest="sources",
        action="append",
        type=_expression,
        metavar="SCRIPT",
        help="add SCRIPT to the commands to be executed (repeatable)",
    )
    parser.add_argument(
        "-f",
        "--file",
        dest="sources",
        action="append",
        type=_script_file,
        metavar="SCRIPT_FILE",
        help="add the contents of SCRIPT_FILE, one command per line",
    )
    parser.add_argument(
        "-q",
        "-n",
        "--quiet",
        action="store_true",
        help="suppress automatic printing of each line",
    )
    parser.add_argument(
        "-i",
        "--in-place",
        metavar="SUFFIX",
        default=None,
        help="edit the input file in place; a non-empty SUFFIX keeps FILE.SUFFIX as backup",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=_env_flag("SED_ENGINE_DEBUG"),
        help="log compiler and engine telemetry to the console",
    )
    parser.add_argument(
        "args",
        nargs="*",
        metavar="FILE",
        help="input files; the first one is the script when no -e/-f is given",
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> SedOptions:
    parser = build_parser()
    namespace = parser.parse_args(argv)

    sources: List[ScriptSource] = list(namespace.sources or [])
    files: List[str] = list(namespace.args)
    if not sources:
        if not files:
            parser.error("no script specified")
        sources.append(_expression(files.pop(0)))

    if namespace.in_place is not None and len(files) != 1:
        parser.error("in-place editing requires exactly one input file")

    return SedOptions(
        sources=sources,
        files=files,
        quiet=namespace.quiet,
        in_place=namespace.in_place,
        debug=namespace.debug,
    )


__all__ = ["ScriptSource", "SedOptions", "build_parser", "parse_args"]

"""Single-pass compiler from script text to an executable program."""

from __future__ import annotations

from functools import partial
from typing import Callable, Dict, List, Sequence, Type

from sed_engine.runtime.telemetry import span

from .builders import (
    ADDRESS_STARTS,
    TERMINATOR,
    build_address,
    build_insert,
    build_substitution,
    build_write,
)
from .models import (
    Address,
    Command,
    Delete,
    Instruction,
    Print,
    PrintLineNumber,
    Program,
    Quit,
    Skip,
)
from .scanner import ScriptError, ScriptScanner

Builder = Callable[[ScriptScanner, Address], Instruction]

_SIMPLE_COMMANDS: Dict[str, Type[Command]] = {
    command.letter: command for command in (Delete, Print, Skip, PrintLineNumber, Quit)
}

_BUILDERS: Dict[str, Builder] = {
    "s": build_substitution,
    "w": build_write,
    "i": build_insert,
    "a": partial(build_insert, after=True),
}

_NO_OPS = frozenset(", ")


def compile_script(script: str | Sequence[str], lines: Sequence[str]) -> Program:
    """Compile ``script`` against the fixed input ``lines``.

    ``script`` may be a single string or a sequence of fragments (one per
    ``-e`` expression or script-file line); fragments are joined with ``;``.
    """

    fragments = [script] if isinstance(script, str) else list(script)
    scanner = ScriptScanner.from_fragments(fragments)
    with span(
        "script::compile",
        component="script",
        metadata={"fragments": len(fragments), "lines": len(lines)},
    ) as handle:
        instructions = _compile(scanner, lines)
        handle.add_metadata("instructions", len(instructions))
    return Program(tuple(instructions))


def _compile(scanner: ScriptScanner, lines: Sequence[str]) -> List[Instruction]:
    instructions: List[Instruction] = []
    pending = Address()

    while not scanner.at_end:
        char = scanner.next()
        if char in _SIMPLE_COMMANDS:
            instructions.append(Instruction(pending, _SIMPLE_COMMANDS[char]()))
            pending = Address()
        elif char in _BUILDERS:
            instructions.append(_BUILDERS[char](scanner, pending))
            pending = Address()
        elif char in ADDRESS_STARTS:
            scanner.back()
            pending = build_address(scanner, lines)
        elif char == "!":
            pending = pending.negated()
        elif char == TERMINATOR:
            if not pending.is_empty:
                raise ScriptError("missing command", position=scanner.position - 1)
            pending = Address()
        elif char in _NO_OPS:
            continue
        else:
            raise ScriptError(
                f"Invalid command: {char}", position=scanner.position - 1
            )

    return instructions


__all__ = ["compile_script"]

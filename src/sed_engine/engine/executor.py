"""Drives a compiled program across the whole line buffer."""

from __future__ import annotations

from typing import Callable, Dict, List, Sequence, Type

from sed_engine.runtime.telemetry import record_event, span
from sed_engine.script.models import (
    Command,
    Delete,
    InsertAfter,
    InsertBefore,
    Print,
    PrintLineNumber,
    Program,
    Quit,
    Skip,
    Substitute,
    Write,
)

from .files import append_or_create
from .state import ExecutionState
from .substitution import substitute

CommandHandler = Callable[[ExecutionState, Command], None]


def execute(program: Program, lines: Sequence[str], *, quiet: bool = False) -> List[str]:
    """Run ``program`` over ``lines`` and return the emitted output sequence.

    Every instruction is tried against every line in program order. ``n``
    moves the cursor mid-pass and ``q`` ends the run once the current pass
    has been flushed.
    """

    state = ExecutionState(lines=list(lines), quiet=quiet)
    with span(
        "engine::execute",
        component="engine",
        metadata={"instructions": len(program), "lines": len(state.lines)},
    ) as handle:
        while not state.finished:
            _run_pass(state, program)
            if state.quitting:
                break
        handle.add_metadata("output", len(state.output))
    return state.output


def _run_pass(state: ExecutionState, program: Program) -> None:
    for instruction in program:
        if not instruction.address.matches(state.index):
            continue
        _HANDLERS[type(instruction.command)](state, instruction.command)
        if state.quitting:
            record_event(
                "engine.quit", level="debug", data={"line": state.line_number}
            )
            break
    state.flush()


def _handle_substitute(state: ExecutionState, command: Substitute) -> None:
    first, *extra = substitute(
        command.pattern,
        command.replacement,
        command.flags,
        state.text,
        line_number=state.line_number,
    )
    state.text = first
    state.printed.extend(extra)


def _handle_delete(state: ExecutionState, command: Delete) -> None:
    del command
    state.text = "\n" if state.text.endswith("\n") else ""


def _handle_print(state: ExecutionState, command: Print) -> None:
    del command
    state.printed.append(state.text)


def _handle_line_number(state: ExecutionState, command: PrintLineNumber) -> None:
    del command
    state.printed.append(f"{state.line_number}\n")


def _handle_skip(state: ExecutionState, command: Skip) -> None:
    del command
    state.advance()


def _handle_quit(state: ExecutionState, command: Quit) -> None:
    del command
    state.quitting = True


def _handle_insert_before(state: ExecutionState, command: InsertBefore) -> None:
    state.before.append(command.text)


def _handle_insert_after(state: ExecutionState, command: InsertAfter) -> None:
    state.after.append(command.text)


def _handle_write(state: ExecutionState, command: Write) -> None:
    append_or_create(command.path, state.text, line_number=state.line_number)


_HANDLERS: Dict[Type[Command], CommandHandler] = {
    Substitute: _handle_substitute,
    Delete: _handle_delete,
    Print: _handle_print,
    PrintLineNumber: _handle_line_number,
    Skip: _handle_skip,
    Quit: _handle_quit,
    InsertBefore: _handle_insert_before,
    InsertAfter: _handle_insert_after,
    Write: _handle_write,
}


__all__ = ["execute"]

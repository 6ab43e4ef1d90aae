"""Per-run execution state for the stream engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


class ExecutionError(RuntimeError):
    """Raised when a compiled program cannot be applied to the input."""

    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number


@dataclass(slots=True)
class ExecutionState:
    """Mutable cursor, pattern space and per-line queues for one run."""

    lines: List[str]
    quiet: bool = False
    index: int = 0
    output: List[str] = field(default_factory=list)
    before: List[str] = field(default_factory=list)
    printed: List[str] = field(default_factory=list)
    after: List[str] = field(default_factory=list)
    quitting: bool = False

    @property
    def finished(self) -> bool:
        return self.index >= len(self.lines)

    @property
    def line_number(self) -> int:
        return self.index + 1

    @property
    def text(self) -> str:
        return self.lines[self.index]

    @text.setter
    def text(self, value: str) -> None:
        self.lines[self.index] = value

    def advance(self) -> None:
        """Emit the pattern space (unless quiet) and move to the next line."""

        if self.index + 1 >= len(self.lines):
            raise ExecutionError(
                "'n' command has no next line", line_number=self.line_number
            )
        if not self.quiet:
            self.output.append(self.text)
        self.index += 1

    def flush(self) -> None:
        """Close the current pass: emit queued text around the pattern space."""

        self.output.extend(self.before)
        self.output.extend(self.printed)
        if not self.quiet:
            self.output.append(self.text)
        self.output.extend(self.after)
        self.before.clear()
        self.printed.clear()
        self.after.clear()
        self.index += 1


__all__ = ["ExecutionError", "ExecutionState"]

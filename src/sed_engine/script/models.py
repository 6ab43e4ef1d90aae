"""Dataclasses describing compiled addresses, commands and programs."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ClassVar, Iterator, Optional, Union

UNRESOLVED = 0


@dataclass(frozen=True, slots=True)
class Single:
    """One 1-based line number; ``0`` is an unresolved regex address."""

    line: int

    def matches(self, index: int) -> bool:
        return self.line == UNRESOLVED or index == self.line - 1


@dataclass(frozen=True, slots=True)
class Range:
    """Inclusive 1-based line range; an unresolved endpoint matches everything."""

    start: int
    end: int

    def matches(self, index: int) -> bool:
        if self.start == UNRESOLVED or self.end == UNRESOLVED:
            return True
        return self.start - 1 <= index < self.end


Matcher = Union[Single, Range]


@dataclass(frozen=True, slots=True)
class Address:
    """Line predicate bound to a command, optionally negated."""

    matcher: Optional[Matcher] = None
    negate: bool = False

    @property
    def is_empty(self) -> bool:
        return self.matcher is None and not self.negate

    def matches(self, index: int) -> bool:
        """Return whether the 0-based line ``index`` is selected."""

        valid = True if self.matcher is None else self.matcher.matches(index)
        return not valid if self.negate else valid

    def negated(self) -> "Address":
        return replace(self, negate=True)

    def extend(self, line: int, *, negate: bool = False) -> "Address":
        """Fold a freshly scanned line number into this address.

        A pending ``Single`` becomes a ``Range`` ending at ``line``; anything
        else is replaced by ``Single(line)``.
        """

        if isinstance(self.matcher, Single):
            return Address(Range(self.matcher.line, line), negate)
        return Address(Single(line), negate)


class Command:
    """Base class for every compiled command variant."""

    letter: ClassVar[str] = ""


@dataclass(frozen=True, slots=True)
class Substitute(Command):
    letter: ClassVar[str] = "s"

    pattern: str
    replacement: str
    flags: str = ""


@dataclass(frozen=True, slots=True)
class Delete(Command):
    letter: ClassVar[str] = "d"


@dataclass(frozen=True, slots=True)
class Print(Command):
    letter: ClassVar[str] = "p"


@dataclass(frozen=True, slots=True)
class Skip(Command):
    letter: ClassVar[str] = "n"


@dataclass(frozen=True, slots=True)
class PrintLineNumber(Command):
    letter: ClassVar[str] = "="


@dataclass(frozen=True, slots=True)
class Quit(Command):
    letter: ClassVar[str] = "q"


@dataclass(frozen=True, slots=True)
class InsertBefore(Command):
    letter: ClassVar[str] = "i"

    text: str


@dataclass(frozen=True, slots=True)
class InsertAfter(Command):
    letter: ClassVar[str] = "a"

    text: str


@dataclass(frozen=True, slots=True)
class Write(Command):
    letter: ClassVar[str] = "w"

    path: str


@dataclass(frozen=True, slots=True)
class Instruction:
    """Compiled ``(address, command)`` pair."""

    address: Address
    command: Command


@dataclass(frozen=True, slots=True)
class Program:
    """Immutable instruction list; order is execution order."""

    instructions: tuple[Instruction, ...] = ()

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __len__(self) -> int:
        return len(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]


__all__ = [
    "UNRESOLVED",
    "Single",
    "Range",
    "Matcher",
    "Address",
    "Command",
    "Substitute",
    "Delete",
    "Print",
    "Skip",
    "PrintLineNumber",
    "Quit",
    "InsertBefore",
    "InsertAfter",
    "Write",
    "Instruction",
    "Program",
]

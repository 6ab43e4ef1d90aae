"""Character cursor shared by the script compiler and its command builders."""

from __future__ import annotations

from typing import FrozenSet, Iterable, Optional

FRAGMENT_SEPARATOR = ";"


class ScriptError(RuntimeError):
    """Raised when script text cannot be compiled into a program."""

    def __init__(self, message: str, *, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position


class ScriptScanner:
    """Script text plus a single advancing position with one-step pushback.

    Builders consume characters with :meth:`next`; a builder that meets a
    terminator it does not own calls :meth:`back` so the dispatcher sees the
    same character again.
    """

    def __init__(self, source: str, *, boundaries: Iterable[int] = ()) -> None:
        self._source = source
        self._position = 0
        self._boundaries: FrozenSet[int] = frozenset(boundaries)

    @classmethod
    def from_fragments(cls, fragments: Iterable[str]) -> "ScriptScanner":
        """Join script sources with ``;`` and remember where they were joined."""

        parts = list(fragments)
        boundaries = []
        offset = 0
        for part in parts[:-1]:
            offset += len(part)
            boundaries.append(offset)
            offset += len(FRAGMENT_SEPARATOR)
        return cls(FRAGMENT_SEPARATOR.join(parts), boundaries=boundaries)

    @property
    def source(self) -> str:
        return self._source

    @property
    def position(self) -> int:
        return self._position

    @property
    def at_end(self) -> bool:
        return self._position >= len(self._source)

    @property
    def at_boundary(self) -> bool:
        """True when the next character is a separator joining two fragments."""

        return self._position in self._boundaries

    def peek(self) -> Optional[str]:
        if self.at_end:
            return None
        return self._source[self._position]

    def next(self) -> str:
        if self.at_end:
            raise ScriptError("unexpected end of script", position=self._position)
        char = self._source[self._position]
        self._position += 1
        return char

    def back(self) -> None:
        if self._position == 0:
            raise ScriptError("cannot step back past start of script", position=0)
        self._position -= 1

    def skip_spaces(self) -> None:
        while self.peek() == " ":
            self._position += 1


__all__ = ["FRAGMENT_SEPARATOR", "ScriptError", "ScriptScanner"]

"""Line buffer holding the combined input of one run."""

from __future__ import annotations

from dataclasses import dataclass, field
from os import PathLike
from typing import Iterable, Iterator, TextIO, Union

from sed_engine.runtime.telemetry import record_event

StrPath = Union[str, "PathLike[str]"]

STDIN_NAME = "<stdin>"


class BufferReadError(RuntimeError):
    """Raised when an input source cannot be decoded into lines."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path = path


def _split_lines(text: str) -> list[str]:
    pieces = text.split("\n")
    if pieces[-1] == "":
        pieces.pop()
    return [piece.removesuffix("\r") + "\n" for piece in pieces]


def _decode_failure(path: str, exc: UnicodeDecodeError) -> BufferReadError:
    return BufferReadError(
        f"can't read {path}: invalid {exc.encoding} data at byte {exc.start}",
        path=path,
    )


@dataclass(frozen=True, slots=True)
class LineBuffer:
    """Ordered input lines, each terminated by ``"\\n"``.

    A final line without a newline in the source gets one, so every line of
    the combined stream carries its own terminator.
    """

    lines: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_text(cls, text: str) -> "LineBuffer":
        return cls(lines=tuple(_split_lines(text)))

    @classmethod
    def from_stream(cls, stream: TextIO) -> "LineBuffer":
        try:
            text = stream.read()
        except UnicodeDecodeError as exc:
            raise _decode_failure(STDIN_NAME, exc) from exc
        return cls.from_text(text)

    @classmethod
    def from_files(
        cls, paths: Iterable[StrPath], *, encoding: str = "utf-8"
    ) -> "LineBuffer":
        """Concatenate every file into one buffer; numbering spans all files."""

        lines: list[str] = []
        for path in paths:
            try:
                with open(path, "r", encoding=encoding) as handle:
                    lines.extend(_split_lines(handle.read()))
            except UnicodeDecodeError as exc:
                raise _decode_failure(str(path), exc) from exc
            record_event(
                "buffer.read", level="debug", data={"path": str(path), "lines": len(lines)}
            )
        return cls(lines=tuple(lines))

    def __iter__(self) -> Iterator[str]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, index: int) -> str:
        return self.lines[index]

"""File side effects produced by ``w`` commands and the ``s///w`` flag."""

from __future__ import annotations

from sed_engine.runtime.telemetry import record_event

from .state import ExecutionError


def append_or_create(path: str, text: str, *, line_number: int | None = None) -> None:
    """Append ``text`` verbatim to ``path``, creating the file if needed."""

    try:
        with open(path, "a", encoding="utf-8") as handle:
            handle.write(text)
    except OSError as exc:
        raise ExecutionError(
            f"couldn't write to '{path}': {exc.strerror or exc}",
            line_number=line_number,
        ) from exc
    record_event(
        "engine.write",
        level="debug",
        data={"path": path, "bytes": len(text), "line": line_number},
    )


__all__ = ["append_or_create"]

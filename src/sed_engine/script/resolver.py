"""Compile-time resolution of ``/regex/`` addresses to line numbers."""

from __future__ import annotations

import re
from typing import Sequence

from .models import UNRESOLVED
from .scanner import ScriptError


def resolve_regex_address(
    pattern: str, lines: Sequence[str], *, position: int | None = None
) -> int:
    """Return the 1-based number of the first line matching ``pattern``.

    The scan always starts at the top of the original buffer. ``0`` means no
    line matched.
    """

    try:
        regex = re.compile(pattern)
    except re.error as exc:
        raise ScriptError(
            f"Invalid regular expression '{pattern}': {exc}", position=position
        ) from exc

    for number, line in enumerate(lines, start=1):
        if regex.search(line):
            return number
    return UNRESOLVED


__all__ = ["resolve_regex_address"]

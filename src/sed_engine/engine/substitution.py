"""The ``s`` command: pattern replacement on a single pattern space.

Patterns use Python ``re`` syntax. Replacements follow sed conventions:
``&`` is the whole match, ``\\1``..``\\9`` are groups, ``\\&`` and ``\\\\``
are literals and ``\\n``/``\\t`` insert a newline/tab.
"""

from __future__ import annotations

import re
import string
from dataclasses import dataclass
from functools import lru_cache
from itertools import islice
from re import Pattern
from typing import List, Optional, Tuple

from .files import append_or_create
from .state import ExecutionError

_ESCAPES = {"n": "\n", "t": "\t"}


@dataclass(frozen=True, slots=True)
class SubstitutionFlags:
    """Decoded flags field of an ``s`` command."""

    occurrence: Optional[int] = None
    replace_all: bool = False
    print_match: bool = False
    ignore_case: bool = False
    write_path: Optional[str] = None


@lru_cache(maxsize=256)
def parse_flags(flags: str) -> SubstitutionFlags:
    """Decode ``[N][g][p][i] [w path]``; the path is the last token after ``w``."""

    digits = ""
    in_number = False
    replace_all = print_match = ignore_case = False
    write_path = None

    for position, char in enumerate(flags):
        if char in string.digits:
            if digits and not in_number:
                raise ExecutionError("multiple number options to `s' command")
            digits += char
            in_number = True
            continue
        in_number = False
        if char == "g":
            replace_all = True
        elif char == "p":
            print_match = True
        elif char in "iI":
            ignore_case = True
        elif char == "w":
            tokens = flags[position + 1 :].split()
            if not tokens:
                raise ExecutionError("missing filename in `s' command w flag")
            write_path = tokens[-1]
            break
        elif not char.isspace():
            raise ExecutionError(f"unknown option to `s': {char}")

    occurrence = int(digits) if digits else None
    if occurrence == 0:
        raise ExecutionError("Number option to 's' command may not be 0")

    return SubstitutionFlags(
        occurrence=occurrence,
        replace_all=replace_all,
        print_match=print_match,
        ignore_case=ignore_case,
        write_path=write_path,
    )


@lru_cache(maxsize=256)
def _compile(pattern: str, ignore_case: bool) -> Pattern[str]:
    try:
        return re.compile(pattern, re.IGNORECASE if ignore_case else 0)
    except re.error as exc:
        raise ExecutionError(
            f"Invalid regular expression '{pattern}': {exc}"
        ) from exc


@lru_cache(maxsize=256)
def _template(replacement: str) -> str:
    """Translate a sed replacement into a ``re.sub`` template."""

    out: List[str] = []
    chars = iter(replacement)
    for char in chars:
        if char == "&":
            out.append(r"\g<0>")
        elif char != "\\":
            out.append(char)
        else:
            escaped = next(chars, "\\")
            if escaped in string.digits:
                out.append(rf"\g<{escaped}>")
            elif escaped == "\\":
                out.append(r"\\")
            else:
                out.append(_ESCAPES.get(escaped, escaped))
    return "".join(out)


def _replace(regex: Pattern[str], template: str, text: str, count: int) -> str:
    try:
        return regex.sub(template, text, count=count)
    except (re.error, IndexError) as exc:
        raise ExecutionError(f"invalid reference in `s' replacement: {exc}") from exc


def _split_at_occurrence(
    regex: Pattern[str], line: str, occurrence: Optional[int]
) -> Tuple[str, str]:
    if occurrence is None:
        return "", line
    match = next(islice(regex.finditer(line), occurrence - 1, None), None)
    if match is None:
        return line, ""
    return line[: match.start()], line[match.start() :]


def substitute(
    pattern: str,
    replacement: str,
    flags: str,
    line: str,
    *,
    line_number: int | None = None,
) -> List[str]:
    """Apply one substitution to ``line``.

    Returns the edited line, twice when the ``p`` flag is set and the
    edited region matched. The ``w`` flag appends the edited line to a file
    under the same condition. The pattern never sees the line terminator,
    so ``$`` and empty matches stop before it.
    """

    body = line.removesuffix("\n")
    terminator = line[len(body) :]
    try:
        options = parse_flags(flags)
        regex = _compile(pattern, options.ignore_case)
        template = _template(replacement)

        if not flags:
            return [_replace(regex, template, body, 1) + terminator]

        prefix, remainder = _split_at_occurrence(regex, body, options.occurrence)
        matched = regex.search(remainder) is not None
        count = 0 if options.replace_all else 1
        edited = prefix + _replace(regex, template, remainder, count) + terminator
    except ExecutionError as exc:
        if exc.line_number is None:
            exc.line_number = line_number
        raise

    if options.write_path is not None and matched:
        append_or_create(options.write_path, edited, line_number=line_number)
    if options.print_match and matched:
        return [edited, edited]
    return [edited]


__all__ = ["SubstitutionFlags", "parse_flags", "substitute"]

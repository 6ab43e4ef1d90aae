"""Scanners that turn one command (or address) of a script into data.

Every builder is entered with the command letter already consumed and leaves
the scanner on the last character it owns. A ``;`` is never owned by a
builder: it is pushed back for the dispatcher.
"""

from __future__ import annotations

import string
from typing import Sequence

from .models import Address, InsertAfter, InsertBefore, Instruction, Substitute, Write
from .resolver import resolve_regex_address
from .scanner import ScriptError, ScriptScanner

TERMINATOR = ";"
ADDRESS_STARTS = frozenset(string.digits + "$/")

_SUBSTITUTION_FIELDS = 3


def build_substitution(scanner: ScriptScanner, address: Address) -> Instruction:
    """Scan ``<d>pattern<d>replacement<d>flags`` after an ``s``.

    All three delimiters are required: ``s/a/b`` is rejected as an
    unterminated command instead of being read with empty flags. A fourth
    delimiter-separated field is an invalid substitution.
    """

    start = scanner.position - 1
    if scanner.at_end:
        raise ScriptError("unterminated `s' command", position=start)

    delimiter = scanner.next()
    fields = ["" for _ in range(_SUBSTITUTION_FIELDS)]
    seen = 1
    while not scanner.at_end:
        char = scanner.next()
        if char == delimiter:
            seen += 1
        elif char == TERMINATOR:
            scanner.back()
            break
        elif seen > _SUBSTITUTION_FIELDS:
            raise ScriptError(
                "invalid substitution command", position=scanner.position - 1
            )
        else:
            fields[seen - 1] += char

    if seen < _SUBSTITUTION_FIELDS:
        raise ScriptError("unterminated `s' command", position=start)

    pattern, replacement, flags = fields
    return Instruction(address, Substitute(pattern, replacement, flags))


def build_write(scanner: ScriptScanner, address: Address) -> Instruction:
    start = scanner.position - 1
    scanner.skip_spaces()
    chars = []
    while not scanner.at_end:
        char = scanner.next()
        if char == TERMINATOR:
            scanner.back()
            break
        chars.append(char)

    path = "".join(chars).rstrip()
    if not path:
        raise ScriptError("missing filename in `w' command", position=start)
    return Instruction(address, Write(path))


def build_insert(
    scanner: ScriptScanner, address: Address, *, after: bool = False
) -> Instruction:
    """Read the rest of the current script fragment as one inserted line."""

    scanner.skip_spaces()
    chars = []
    while not scanner.at_end and not scanner.at_boundary:
        chars.append(scanner.next())

    text = "".join(chars) + "\n"
    command = InsertAfter(text) if after else InsertBefore(text)
    return Instruction(address, command)


def build_address(scanner: ScriptScanner, lines: Sequence[str]) -> Address:
    """Scan line numbers, ``$`` and ``/regex/`` tokens into one address.

    Regex addresses are resolved immediately against ``lines``. An address
    whose closing token runs into the end of the script is discarded.
    """

    address = Address()
    state = "idle"
    digits = ""
    body = ""
    closed = False
    token_start = scanner.position

    while not scanner.at_end:
        char = scanner.next()
        if state == "idle":
            token_start = scanner.position - 1
            if char in string.digits:
                state, digits = "digits", char
            elif char == "$":
                state, digits = "digits", str(len(lines))
            elif char == "/":
                state, body, closed = "regex", "", False
            elif char not in " ,":
                scanner.back()
                break
        elif state == "digits":
            if char in string.digits:
                digits += char
                continue
            address = address.extend(int(digits), negate=char == "!")
            state = "idle"
            scanner.back()
        elif not closed and char != "/":
            body += char
        elif char == "/":
            closed = True
        else:
            line = resolve_regex_address(body, lines, position=token_start)
            address = address.extend(line, negate=char == "!")
            state = "idle"
            scanner.back()

    return address


__all__ = [
    "ADDRESS_STARTS",
    "build_address",
    "build_insert",
    "build_substitution",
    "build_write",
]

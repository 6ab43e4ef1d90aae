"""Script language: data model, scanner, builders and compiler."""

from .compiler import compile_script
from .models import (
    UNRESOLVED,
    Address,
    Command,
    Delete,
    InsertAfter,
    InsertBefore,
    Instruction,
    Print,
    PrintLineNumber,
    Program,
    Quit,
    Range,
    Single,
    Skip,
    Substitute,
    Write,
)
from .resolver import resolve_regex_address
from .scanner import ScriptError, ScriptScanner

__all__ = [
    "UNRESOLVED",
    "Address",
    "Command",
    "Delete",
    "InsertAfter",
    "InsertBefore",
    "Instruction",
    "Print",
    "PrintLineNumber",
    "Program",
    "Quit",
    "Range",
    "Single",
    "Skip",
    "Substitute",
    "Write",
    "ScriptError",
    "ScriptScanner",
    "compile_script",
    "resolve_regex_address",
]

"""Execution engine applying compiled programs to line buffers."""

from .executor import execute
from .files import append_or_create
from .state import ExecutionError, ExecutionState
from .substitution import SubstitutionFlags, parse_flags, substitute

__all__ = [
    "ExecutionError",
    "ExecutionState",
    "SubstitutionFlags",
    "append_or_create",
    "execute",
    "parse_flags",
    "substitute",
]

"""Command-line adapter around the script compiler and execution engine."""

from .app import main, run
from .options import ScriptSource, SedOptions, parse_args

__all__ = ["ScriptSource", "SedOptions", "main", "parse_args", "run"]

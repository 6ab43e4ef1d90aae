"""Stream-editing engine for a practical subset of the sed command language."""

__all__ = [
    "adapters",
    "buffer",
    "engine",
    "runtime",
    "script",
]

__version__ = "0.1.0"

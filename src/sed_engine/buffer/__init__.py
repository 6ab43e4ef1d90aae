"""Input line storage shared by compilation and execution."""

from .document import BufferReadError, LineBuffer

__all__ = ["BufferReadError", "LineBuffer"]

"""
Exception hierarchy for blockpix.

Everything raised by the rendering core derives from BlockPixError so
callers can catch the whole family with a single except clause.
"""

from __future__ import annotations


class BlockPixError(Exception):
    """Base exception for all blockpix errors."""


class InvalidSourceError(BlockPixError):
    """Raised when a source image is missing, unreadable or has a zero dimension."""


class InvalidDimensionError(BlockPixError):
    """Raised when a block size or scale rate yields a non-positive size."""


class MissingStrategyError(BlockPixError):
    """Raised when no render strategy is configured."""


class EmptySequenceError(BlockPixError):
    """Raised when an animation is given zero frames."""


class EncodingFailureError(BlockPixError):
    """Raised when writing a rendered image or animation fails."""


class GridAssemblyError(BlockPixError):
    """Raised when character cells do not fill the block grid exactly once."""

    def __init__(self, message: str, row: int | None = None, col: int | None = None) -> None:
        super().__init__(message)
        self.row = row
        self.col = col

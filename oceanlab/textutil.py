"""Plain-text formatting of number vectors and matrices."""

from __future__ import annotations

from collections.abc import Iterable


def format_ints(values: Iterable[int]) -> str:
    """Format integers as ``"a, b, \\n"``."""
    return "".join(f"{int(v)}, " for v in values) + "\n"


def format_floats(values: Iterable[float]) -> str:
    """Format floats in ``%g`` style as ``"a, b, \\n"``."""
    return "".join("%g, " % v for v in values) + "\n"


def format_int_matrix(rows: Iterable[Iterable[int]]) -> str:
    """Format each row with :func:`format_ints`, followed by a blank line."""
    return "".join(format_ints(row) for row in rows) + "\n"


def format_float_matrix(rows: Iterable[Iterable[float]]) -> str:
    """Format each row with :func:`format_floats`, followed by a blank line."""
    return "".join(format_floats(row) for row in rows) + "\n"
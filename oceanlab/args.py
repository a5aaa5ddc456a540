"""Look up flags and their values in a list of command-line words."""

from __future__ import annotations

from collections.abc import Sequence


def exist_arg(name: str, argv: Sequence[str]) -> bool:
    """Return True if ``name`` appears verbatim among ``argv``."""
    return name in argv


def get_arg(name: str, argv: Sequence[str]) -> str | None:
    """Return the word following the first occurrence of ``name``.

    Returns None when ``name`` is absent or is the last word.
    """
    try:
        index = list(argv).index(name)
    except ValueError:
        return None
    if index + 1 < len(argv):
        return argv[index + 1]
    return None
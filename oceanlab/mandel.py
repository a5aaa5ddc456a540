"""Render the Mandelbrot set to a raw gray or RGB image and convert it to PNG."""

from __future__ import annotations

import re
import subprocess
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from oceanlab.args import exist_arg, get_arg

_PALETTE_RED = (66, 25, 9, 4, 0, 12, 24, 57, 134, 211, 241, 248, 255, 204, 153, 106)
_PALETTE_GREEN = (30, 7, 1, 4, 7, 44, 82, 125, 181, 236, 233, 201, 170, 128, 87, 52)
_PALETTE_BLUE = (15, 26, 47, 73, 100, 138, 177, 209, 229, 248, 191, 95, 0, 0, 0, 3)

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class UsageError(ValueError):
    """Bad command line; ``show_usage`` tells whether to print the help."""

    def __init__(self, message: str, show_usage: bool = False) -> None:
        super().__init__(message)
        self.show_usage = show_usage


@dataclass(frozen=True)
class MandelSettings:
    rows: int
    cols: int
    min_x: float
    min_y: float
    size_x: float
    size_y: float
    max_iter: int
    output: str = "Image"
    gray: bool = False


def _atoi(text: str | None) -> int:
    match = _INT_RE.match(text or "")
    return int(match.group(1)) if match else 0


def _atof(text: str | None) -> float:
    match = _FLOAT_RE.match(text or "")
    return float(match.group(1)) if match else 0.0


def niter_to_gray(niter: int, max_niter: int) -> int:
    """Map an iteration count to a gray byte."""
    return (niter * 255 // max_niter) & 0xFF


def niter_to_rgb(niter: int) -> tuple[int, int, int]:
    """Map an iteration count to a colour of the 16-entry palette."""
    index = niter % 16
    return _PALETTE_RED[index], _PALETTE_GREEN[index], _PALETTE_BLUE[index]


def _escape(cr: float, ci: float, max_niter: int) -> int:
    zr, zi = cr, ci
    zrs = zis = 0.0
    niter = 0
    while zrs + zis <= 4.0 and niter <= max_niter:
        zrs = zr * zr
        zis = zi * zi
        zi = 2.0 * zr * zi + ci
        zr = zrs - zis + cr
        niter += 1
    return niter


def escape_counts(
    rows: int,
    cols: int,
    min_x: float,
    min_y: float,
    size_x: float,
    size_y: float,
    max_niter: int,
) -> list[list[int]]:
    """Return the iteration count of every pixel, row by row."""
    inc_x = size_x / cols
    inc_y = size_y / rows
    return [
        [_escape(min_x + j * inc_x, min_y + i * inc_y, max_niter) for j in range(cols)]
        for i in range(rows)
    ]


def render_gray(counts: Sequence[Sequence[int]], max_niter: int) -> bytes:
    """Raw 8-bit gray image data."""
    return bytes(niter_to_gray(n, max_niter) for row in counts for n in row)


def render_rgb(counts: Sequence[Sequence[int]]) -> bytes:
    """Raw 24-bit RGB image data."""
    return bytes(c for row in counts for n in row for c in niter_to_rgb(n))


def _required(flag: str, argv: Sequence[str]) -> str | None:
    if not exist_arg(flag, argv):
        raise UsageError(f"Parameter {flag} is neccesary.", show_usage=True)
    return get_arg(flag, argv)


def parse_settings(argv: Sequence[str]) -> MandelSettings:
    """Read settings from command-line words; raise UsageError on bad input."""
    rows = _atoi(_required("-r", argv))
    if rows <= 3:
        raise UsageError("Rows<=3")
    cols = _atoi(_required("-c", argv))
    if cols <= 3:
        raise UsageError("Col<=3")
    min_x = _atof(_required("-mx", argv))
    min_y = _atof(_required("-my", argv))
    size_x = _atof(_required("-sx", argv))
    size_y = _atof(_required("-sy", argv))
    max_iter = _atoi(_required("-mi", argv))
    if max_iter < 1:
        raise UsageError("Max. number of Iterations < 1")
    output = get_arg("-o", argv) if exist_arg("-o", argv) else "Image"
    return MandelSettings(
        rows=rows,
        cols=cols,
        min_x=min_x,
        min_y=min_y,
        size_x=size_x,
        size_y=size_y,
        max_iter=max_iter,
        output=output or "",
        gray=exist_arg("-g", argv),
    )


def convert_command(settings: MandelSettings) -> str:
    """Shell pipeline turning the raw image into ``<output>.png``."""
    tool = "rawtopgm" if settings.gray else "rawtoppm"
    return (
        f"{tool} {settings.cols} {settings.rows} {settings.output} "
        f"| pnmtopng > {settings.output}.png"
    )


def usage() -> str:
    """Help text listing the options."""
    return "\n".join(
        [
            "Options are:",
            "\t[ -h To show this help ]",
            "\t  -r  <n rows image>",
            "\t  -c  <n columns image>",
            "\t  -mx <min  x Mandel's window>",
            "\t  -my <min  y Mandel's window>",
            "\t  -sx <size x Mandel's window>",
            "\t  -sy <size y Mandel's window>",
            "\t  -mi <max n of iterations>",
            "\t  -o <file> [Image]>",
            "\t  -g  (gray colours) [default colored without -g]",
        ]
    )


def main(argv: Sequence[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if exist_arg("-h", argv):
        print(usage())
        return 0
    try:
        settings = parse_settings(argv)
    except UsageError as err:
        if err.show_usage:
            print(err, file=sys.stderr)
            print(usage())
            return 0
        print(err)
        return 1

    counts = escape_counts(
        settings.rows,
        settings.cols,
        settings.min_x,
        settings.min_y,
        settings.size_x,
        settings.size_y,
        settings.max_iter,
    )
    if settings.gray:
        data = render_gray(counts, settings.max_iter)
        print("gris", end="")
    else:
        data = render_rgb(counts)

    try:
        with open(settings.output, "wb") as out:
            out.write(data)
    except OSError:
        print(f"Can not open the file {settings.output}", file=sys.stderr)
        return 1

    subprocess.run(convert_command(settings), shell=True, check=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
"""Wa-tor simulation whose iterations run in row stripes on a worker pool."""

from __future__ import annotations

import os
import sys
import time
from collections.abc import Sequence

from oceanlab.args import exist_arg
from oceanlab.rand48 import Rand48
from oceanlab.striped import StripedIterator
from oceanlab.wator import (
    Outputs,
    SettingsError,
    Simulation,
    Variant,
    parse_settings,
)


def default_workers() -> int:
    """Number of worker threads to use: one per available CPU, at least one."""
    return os.cpu_count() or 1


def _usage() -> str:
    return "\n".join(
        [
            "Options are:",
            "\t[ -h To show this help ]",
            "\t  -r   <n rows image>\t\t\t[102]",
            "\t  -c   <n columns image>\t\t[102]",
            "\t  -nf  <n fishes>\t\t\t[2500]",
            "\t  -ns  <n sharks>\t\t\t[500]",
            "\t  -ni  <max n iter.>\t\t\t[1000]",
            "\t  -fb  <n iter.fish breed >\t\t [5]",
            "\t  -sb  <n iter.shark breed>\t\t[40]",
            "\t  -sie <shak init.energy>\t\t[10]",
            "\t  -sef <shark eat fish energy>\t\t[3]",
            "\t  -fg <graphical file> \t\t\t[Image]",
            "\t  -ffmpeg : to visualise video creating a pipe to:",
            "\t\t | ffplay -f rawvideo -pixel_format rgb24",
            "\t\t -video_size <rows>x<cols> -",
            "\t  -o  (graphical output with eog [Image].",
            "\t  -fd <data file> \t\t\t[data.txt]",
            "\t  -d  (data output is generated.",
        ]
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the simulation with the ocean iterated by a striped worker pool."""
    argv = list(sys.argv[1:] if argv is None else argv)
    if exist_arg("-h", argv):
        print(_usage())
        return 0
    try:
        settings = parse_settings(argv, Variant.FIXED)
    except SettingsError as err:
        print(err)
        return 1

    workers = default_workers()
    print("------------")
    print(f"Parallel with {workers} threads")

    simulation = Simulation(settings, Rand48(int(time.time())))
    try:
        with StripedIterator(simulation.ocean, simulation.rules, workers) as pool:
            simulation.iterate = pool.iterate
            with Outputs(settings) as outputs:
                sim_iter, n_fishes, n_sharks = simulation.run(outputs)
    except OSError as err:
        print(f"Can not open the file {err.filename}", file=sys.stderr)
        return 1
    print(f"Wa-tor ends. Niter={sim_iter}, NFishes= {n_fishes}, NSharks={n_sharks}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
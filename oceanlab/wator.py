"""Command-line Wa-tor predator-prey simulation, run one cell at a time."""

from __future__ import annotations

import re
import subprocess
import sys
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import IO, Any

from oceanlab.args import exist_arg, get_arg
from oceanlab.ocean import Ocean, Rules
from oceanlab.rand48 import Rand48

_INT_RE = re.compile(r"\s*([+-]?\d+)")

IterateFn = Callable[[int], "tuple[int, int]"]


class Variant(Enum):
    """Flavour of the program.

    ``CLASSIC`` uses a 100x100 default grid, accepts any size of at least 3,
    seeds from the clock and redraws every 0.2 s.  ``FIXED`` uses a 102x102
    default grid whose sides must be multiples of 3, a fixed seed of 0 and a
    one second redraw delay.
    """

    CLASSIC = "classic"
    FIXED = "fixed"

    @property
    def default_size(self) -> int:
        return 100 if self is Variant.CLASSIC else 102

    @property
    def seed(self) -> int | None:
        """Fixed seed, or None to seed from the current time."""
        return None if self is Variant.CLASSIC else 0

    @property
    def frame_delay(self) -> float:
        return 0.2 if self is Variant.CLASSIC else 1.0


class SettingsError(ValueError):
    """A command-line value is out of range."""


@dataclass(frozen=True)
class Settings:
    rows: int = 100
    cols: int = 100
    n_fishes: int = 2500
    n_sharks: int = 500
    max_iter: int = 1000
    fish_breed: int = 5
    shark_breed: int = 40
    shark_energy: int = 10
    shark_eat_energy: int = 3
    graph_file: str = "Image"
    draw: bool = False
    ffmpeg: bool = False
    data_file: str = "data.txt"
    gen_data: bool = False
    variant: Variant = Variant.CLASSIC

    @property
    def rules(self) -> Rules:
        return Rules(
            fish_breed=self.fish_breed,
            shark_breed=self.shark_breed,
            shark_energy=self.shark_energy,
            shark_eat_energy=self.shark_eat_energy,
        )


def _atoi(text: str | None) -> int:
    match = _INT_RE.match(text or "")
    return int(match.group(1)) if match else 0


def usage(variant: Variant = Variant.CLASSIC) -> str:
    """Help text listing the options of ``variant``."""
    size = variant.default_size
    lines = [
        "Options are:",
        "\t[ -h To show this help ]",
        f"\t  -r   <n rows image>\t\t\t[{size}]",
        f"\t  -c   <n columns image>\t\t[{size}]",
        "\t  -nf  <n fishes>\t\t\t[2500]",
        "\t  -ns  <n sharks>\t\t\t[500]",
        "\t  -ni  <max n iter.>\t\t\t[1000]",
        "\t  -fb  <n iter.fish breed >\t\t [5]",
        "\t  -sb  <n iter.shark breed>\t\t[40]",
        "\t  -sie <shak init.energy>\t\t[10]",
        "\t  -sef <shark eat fish energy>\t\t[3]",
    ]
    if variant is Variant.CLASSIC:
        lines += [
            "\t  -ffmpeg : to visualise creating a pipe to:",
            "\t\t | ffplay -f rawvideo -pixel_format rgb24",
            "\t\t -video_size <rows>x<cols> -",
            "\t  -o  (graphical output with eog [Image].",
            "\t  -fg <graphical file> \t\t\t[Image]",
        ]
    else:
        lines += [
            "\t  -fg <graphical file> \t\t\t[Image]",
            "\t  -ffmpeg : to visualise video creating a pipe to:",
            "\t  -o  (graphical output with eog [Image].",
        ]
    lines += [
        "\t  -fd <data file> \t\t\t[data.txt]",
        "\t  -d  (data output is generated.",
    ]
    return "\n".join(lines)


def _int_option(argv: Sequence[str], flag: str, default: int) -> int:
    return _atoi(get_arg(flag, argv)) if exist_arg(flag, argv) else default


def parse_settings(
    argv: Sequence[str], variant: Variant = Variant.CLASSIC
) -> Settings:
    """Read settings from command-line words; raise SettingsError on bad values."""
    rows = _int_option(argv, "-r", variant.default_size)
    cols = _int_option(argv, "-c", variant.default_size)
    if variant is Variant.CLASSIC:
        if rows < 3:
            raise SettingsError("Rows<3")
        if cols < 3:
            raise SettingsError("Col<3")
    else:
        if rows % 3 != 0:
            raise SettingsError("Rows must be multiple of 3")
        if cols % 3 != 0:
            raise SettingsError("Col must be multiple of 3")

    n_fishes = _int_option(argv, "-nf", 2500)
    if n_fishes <= 0:
        raise SettingsError("NInitFishes<=0")
    n_sharks = _int_option(argv, "-ns", 500)
    if n_sharks <= 0:
        raise SettingsError("NInitSharks<=0")
    if n_fishes + n_sharks > rows * cols:
        raise SettingsError("The number of animals > numbre of pixels")

    max_iter = _int_option(argv, "-ni", 1000)
    if max_iter <= 0:
        raise SettingsError("MaxNIter<=0")
    fish_breed = _int_option(argv, "-fb", 5)
    if fish_breed <= 0:
        raise SettingsError("N. iter. Fish to Breed<=0")
    shark_breed = _int_option(argv, "-sb", 40)
    if shark_breed <= 0:
        raise SettingsError("N. iter Shark to Breed<=0")

    if exist_arg("-sie", argv):
        shark_energy = _atoi(get_arg("-sie", argv))
        # A shark has to eat before it can breed.
        if shark_energy <= 0 or shark_energy > shark_breed:
            raise SettingsError(
                "Shark initial energy <= 0 or\n"
                "Shark initial energy > N. iter Shark to breed"
            )
    else:
        shark_energy = 10

    shark_eat_energy = _int_option(argv, "-sef", 3)
    if shark_eat_energy <= 0:
        raise SettingsError("Shark eaf fish energy <= 0")

    graph_file = (get_arg("-fg", argv) if exist_arg("-fg", argv) else None) or "Image"
    data_file = (get_arg("-fd", argv) if exist_arg("-fd", argv) else None) or "data.txt"

    return Settings(
        rows=rows,
        cols=cols,
        n_fishes=n_fishes,
        n_sharks=n_sharks,
        max_iter=max_iter,
        fish_breed=fish_breed,
        shark_breed=shark_breed,
        shark_energy=shark_energy,
        shark_eat_energy=shark_eat_energy,
        graph_file=graph_file,
        draw=exist_arg("-o", argv),
        ffmpeg=exist_arg("-ffmpeg", argv),
        data_file=data_file,
        gen_data=exist_arg("-d", argv),
        variant=variant,
    )


class Outputs:
    """Image, video and population-data outputs of a simulation run.

    Used as a context manager; :meth:`record` is called once for the initial
    state and then after each iteration.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._data: IO[str] | None = None
        self._ffplay: subprocess.Popen[bytes] | None = None
        self._started = False

    def __enter__(self) -> Outputs:
        s = self.settings
        if s.ffmpeg:
            command = (
                "ffplay -f rawvideo -pixel_format rgb24 "
                " -vf scale=4*iw:4*ih:flags=neighbor "
                f" -video_size {s.rows}x{s.cols} -"
            )
            self._ffplay = subprocess.Popen(command, shell=True, stdin=subprocess.PIPE)
        if s.gen_data:
            self._data = open(s.data_file, "w")
        return self

    def _convert_command(self) -> str:
        s = self.settings
        return f"rawtoppm {s.cols} {s.rows} {s.graph_file} > {s.graph_file}.ppm"

    def record(self, sim_iter: int, n_fishes: int, n_sharks: int, ocean: Ocean) -> None:
        """Emit the state reached after ``sim_iter`` iterations."""
        s = self.settings
        first = not self._started
        self._started = True

        if s.draw:
            ocean.write_rgb(s.graph_file)
            subprocess.run(self._convert_command(), shell=True, check=False)
            if first:
                subprocess.run(f"eog -f -g {s.graph_file}.ppm &", shell=True, check=False)
                time.sleep(1.0)
            else:
                time.sleep(s.variant.frame_delay)

        if self._data is not None:
            self._data.write(f"{sim_iter}\t{n_fishes}\t{n_sharks}\n")

        if not first and self._ffplay is not None and self._ffplay.stdin is not None:
            try:
                self._ffplay.stdin.write(ocean.to_rgb())
                self._ffplay.stdin.flush()
            except BrokenPipeError:
                pass

    def __exit__(self, *args: Any) -> None:
        s = self.settings
        if self._data is not None:
            self._data.close()
            self._data = None
            command = (
                f"echo 'plot \"{s.data_file}\" using 1:2 with lines title \"fishes\","
                f"\"{s.data_file}\" using 1:3 with lines title \"sharks\"' "
                "| gnuplot -persist"
            )
            subprocess.run(command, shell=True, check=False)
        if self._ffplay is not None:
            if self._ffplay.stdin is not None:
                try:
                    self._ffplay.stdin.close()
                except BrokenPipeError:
                    pass
            self._ffplay.wait()
            self._ffplay = None


class Simulation:
    """A populated ocean together with its population counters.

    ``iterate`` is a callable taking the current iteration number and
    returning the change in (fishes, sharks); by default the ocean is
    iterated sequentially with ``rng``.  It may be replaced after
    construction, once :attr:`ocean` exists.
    """

    def __init__(
        self,
        settings: Settings,
        rng: Rand48 | None = None,
        iterate: IterateFn | None = None,
    ) -> None:
        self.settings = settings
        self.rules = settings.rules
        if rng is None:
            seed = settings.variant.seed
            rng = Rand48(int(time.time()) if seed is None else seed)
        self.rng = rng
        self.ocean = Ocean(settings.rows, settings.cols)
        self.ocean.populate(settings.n_fishes, settings.n_sharks, self.rules, rng)
        self.sim_iter = 0
        self.n_fishes = settings.n_fishes
        self.n_sharks = settings.n_sharks
        self.iterate: IterateFn = iterate or self._iterate_sequential

    def _iterate_sequential(self, sim_iter: int) -> tuple[int, int]:
        return self.ocean.iterate(sim_iter, self.rules, self.rng)

    def step(self) -> None:
        """Advance the simulation by one iteration."""
        d_fish, d_shark = self.iterate(self.sim_iter)
        self.n_fishes += d_fish
        self.n_sharks += d_shark
        self.sim_iter += 1

    def running(self) -> bool:
        """True while iterations remain and both species survive."""
        return (
            self.sim_iter < self.settings.max_iter
            and self.n_fishes > 0
            and self.n_sharks > 0
        )

    def run(self, outputs: Outputs | None = None) -> tuple[int, int, int]:
        """Iterate until :meth:`running` is false; return (iterations, fishes, sharks)."""
        if outputs is not None:
            outputs.record(self.sim_iter, self.n_fishes, self.n_sharks, self.ocean)
        while self.running():
            self.step()
            if outputs is not None:
                outputs.record(self.sim_iter, self.n_fishes, self.n_sharks, self.ocean)
        return self.sim_iter, self.n_fishes, self.n_sharks


def _run(argv: Sequence[str] | None, variant: Variant) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if exist_arg("-h", argv):
        print(usage(variant))
        return 0
    try:
        settings = parse_settings(argv, variant)
    except SettingsError as err:
        print(err)
        return 1

    simulation = Simulation(settings)
    try:
        with Outputs(settings) as outputs:
            sim_iter, n_fishes, n_sharks = simulation.run(outputs)
    except OSError as err:
        print(f"Can not open the file {err.filename}", file=sys.stderr)
        return 1
    print(f"Wa-tor ends. Niter={sim_iter}, NFishes= {n_fishes}, NSharks={n_sharks}.")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the clock-seeded simulation on a 100x100 default grid."""
    return _run(argv, Variant.CLASSIC)


def main_fixed(argv: Sequence[str] | None = None) -> int:
    """Run the reproducible simulation on a 102x102 default grid."""
    return _run(argv, Variant.FIXED)


if __name__ == "__main__":
    sys.exit(main())
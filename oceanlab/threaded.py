"""Wa-tor simulation whose iterations are shared out among worker threads.

Rows are handed out in three passes (rows 0, 3, 6, ... then 1, 4, 7, ...
then 2, 5, 8, ...).  Rows processed in the same pass are three apart, so
no two threads ever touch the same or neighbouring cells at once.
"""

from __future__ import annotations

import re
import sys
import threading
from collections.abc import Sequence
from typing import Any

from oceanlab.args import exist_arg, get_arg
from oceanlab.ocean import Ocean, Rules
from oceanlab.rand48 import Rand48
from oceanlab.wator import (
    Outputs,
    SettingsError,
    Simulation,
    Variant,
    parse_settings,
    usage,
)

_INT_RE = re.compile(r"\s*([+-]?\d+)")


class _MissingThreadCount(SettingsError):
    """The mandatory -nt option was not given."""


def _atoi(text: str | None) -> int:
    match = _INT_RE.match(text or "")
    return int(match.group(1)) if match else 0


class ThreadedIterator:
    """Iterate an ocean with ``n_threads`` persistent worker threads.

    Each worker draws its random numbers from its own :class:`Rand48`
    seeded with the worker's index.  Use as a context manager, or call
    :meth:`close` when done.
    """

    def __init__(self, ocean: Ocean, rules: Rules, n_threads: int) -> None:
        if ocean.rows % 3 != 0:
            raise ValueError("Rows must be multiple of 3")
        if n_threads <= 0 or n_threads > ocean.rows // 3:
            raise ValueError("NThreads must be > 0 and <= Rows/3.")
        self.ocean = ocean
        self.rules = rules
        self.n_threads = n_threads

        self._row_lock = threading.Lock()
        self._count_lock = threading.Lock()
        # Workers plus the calling thread meet at the iteration barriers.
        self._iter_start = threading.Barrier(n_threads + 1)
        self._iter_end = threading.Barrier(n_threads + 1)
        # Workers alone meet between the three passes.
        self._loop_start = threading.Barrier(n_threads)
        self._loop_end = threading.Barrier(n_threads)

        self._next_row = 0
        self._sim_iter = 0
        self._d_fish = 0
        self._d_shark = 0
        self._finish = False
        self._closed = False
        self._error: BaseException | None = None

        self._threads = [
            threading.Thread(
                target=self._work,
                args=(tid, Rand48(tid)),
                name=f"wator-worker-{tid}",
                daemon=True,
            )
            for tid in range(n_threads)
        ]
        for thread in self._threads:
            thread.start()

    def _claim_row(self) -> int | None:
        with self._row_lock:
            if self._next_row < self.ocean.rows:
                row = self._next_row
                self._next_row += 3
                return row
        return None

    def _iterate_rows(self, rng: Rand48) -> tuple[int, int]:
        d_fish = d_shark = 0
        while (row := self._claim_row()) is not None:
            for j in range(self.ocean.cols):
                df, ds = self.ocean.iterate_cell(
                    row, j, self._sim_iter, self.rules, rng
                )
                d_fish += df
                d_shark += ds
        return d_fish, d_shark

    def _abort(self) -> None:
        for barrier in (self._iter_start, self._iter_end, self._loop_start, self._loop_end):
            barrier.abort()

    def _work(self, tid: int, rng: Rand48) -> None:
        try:
            while True:
                self._iter_start.wait()
                if self._finish:
                    return
                d_fish = d_shark = 0
                for offset in range(3):
                    if offset:
                        self._loop_end.wait()
                        if tid == 0:
                            self._next_row = offset
                        self._loop_start.wait()
                    df, ds = self._iterate_rows(rng)
                    d_fish += df
                    d_shark += ds
                with self._count_lock:
                    self._d_fish += d_fish
                    self._d_shark += d_shark
                self._iter_end.wait()
        except threading.BrokenBarrierError:
            return
        except BaseException as err:  # noqa: BLE001 - reported to the caller
            self._error = err
            self._abort()

    def iterate(self, sim_iter: int) -> tuple[int, int]:
        """Run one iteration; return the change in (fishes, sharks)."""
        if self._closed:
            raise RuntimeError("iterator is closed")
        self._sim_iter = sim_iter
        self._next_row = 0
        self._d_fish = 0
        self._d_shark = 0
        try:
            self._iter_start.wait()
            self._iter_end.wait()
        except threading.BrokenBarrierError:
            error = self._error
            self.close()
            if error is not None:
                raise error
            raise RuntimeError("worker threads stopped") from None
        return self._d_fish, self._d_shark

    def close(self) -> None:
        """Stop and join the worker threads; safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._finish = True
        try:
            self._iter_start.wait()
        except threading.BrokenBarrierError:
            pass
        for thread in self._threads:
            thread.join()

    def __enter__(self) -> ThreadedIterator:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


def parse_thread_count(argv: Sequence[str], rows: int) -> int:
    """Read the mandatory ``-nt`` option; raise SettingsError when bad."""
    if not exist_arg("-nt", argv):
        raise _MissingThreadCount("Parameter -nt is neccesary.")
    n_threads = _atoi(get_arg("-nt", argv))
    if n_threads <= 0 or n_threads > rows // 3:
        raise SettingsError("NThreads must be > 0 and <= Rows/3.")
    return n_threads


def _usage() -> str:
    return usage(Variant.FIXED) + "\n\t  -nt <Numbre of Threads>"


def main(argv: Sequence[str] | None = None) -> int:
    """Run the simulation with a thread pool given by ``-nt``."""
    argv = list(sys.argv[1:] if argv is None else argv)
    if exist_arg("-h", argv):
        print(_usage())
        return 0
    try:
        settings = parse_settings(argv, Variant.FIXED)
        n_threads = parse_thread_count(argv, settings.rows)
    except _MissingThreadCount as err:
        print(err, file=sys.stderr)
        print(_usage())
        return 0
    except SettingsError as err:
        print(err)
        return 1

    simulation = Simulation(settings, Rand48(0))
    try:
        with ThreadedIterator(simulation.ocean, simulation.rules, n_threads) as workers:
            simulation.iterate = workers.iterate
            with Outputs(settings) as outputs:
                sim_iter, n_fishes, n_sharks = simulation.run(outputs)
    except OSError as err:
        print(f"Can not open the file {err.filename}", file=sys.stderr)
        return 1
    print(f"Wa-tor ends. Niter={sim_iter}, NFishes= {n_fishes}, NSharks={n_sharks}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
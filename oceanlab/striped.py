"""Iterate the Wa-tor ocean in three row stripes spread over a worker pool.

Each iteration has three passes: rows 0, 3, 6, ... then 1, 4, 7, ... and
then 2, 5, 8, ...  Rows handled in one pass are three apart, so their
neighbourhoods never overlap and they can be processed concurrently.
Within a pass the rows are divided into contiguous blocks, one per
worker, and block ``k`` always draws from random stream ``k``.  The
outcome therefore depends only on the seed streams and the worker count,
not on how the threads happen to be scheduled.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from oceanlab.ocean import Ocean, Rules
from oceanlab.rand48 import Rand48


def _static_blocks(items: Sequence[int], parts: int) -> list[Sequence[int]]:
    """Split ``items`` into ``parts`` contiguous blocks of near-equal size."""
    size, extra = divmod(len(items), parts)
    blocks = []
    start = 0
    for k in range(parts):
        stop = start + size + (1 if k < extra else 0)
        blocks.append(items[start:stop])
        start = stop
    return blocks


class StripedIterator:
    """Iterate an ocean with a pool of ``workers`` threads.

    Worker ``k`` uses a :class:`Rand48` stream seeded with ``k``.  Use as a
    context manager, or call :meth:`close` when done.
    """

    def __init__(self, ocean: Ocean, rules: Rules, workers: int) -> None:
        if ocean.rows % 3 != 0:
            raise ValueError("Rows must be multiple of 3")
        if workers <= 0:
            raise ValueError("workers must be positive")
        self.ocean = ocean
        self.rules = rules
        self.workers = workers
        self._rngs = [Rand48(k) for k in range(workers)]
        self._pool = ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="wator-stripe"
        )
        self._closed = False

    def _run_block(
        self, rows: Sequence[int], sim_iter: int, rng: Rand48
    ) -> tuple[int, int]:
        d_fish = d_shark = 0
        for i in rows:
            for j in range(self.ocean.cols):
                df, ds = self.ocean.iterate_cell(i, j, sim_iter, self.rules, rng)
                d_fish += df
                d_shark += ds
        return d_fish, d_shark

    def iterate(self, sim_iter: int) -> tuple[int, int]:
        """Run one iteration; return the change in (fishes, sharks)."""
        if self._closed:
            raise RuntimeError("iterator is closed")
        d_fish = d_shark = 0
        for offset in range(3):
            stripe = range(offset, self.ocean.rows, 3)
            futures = [
                self._pool.submit(self._run_block, block, sim_iter, rng)
                for block, rng in zip(_static_blocks(stripe, self.workers), self._rngs)
                if len(block)
            ]
            for future in futures:
                df, ds = future.result()
                d_fish += df
                d_shark += ds
        return d_fish, d_shark

    def close(self) -> None:
        """Shut the worker pool down; safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._pool.shutdown(wait=True)

    def __enter__(self) -> StripedIterator:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
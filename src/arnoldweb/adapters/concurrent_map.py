# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Concurrent map runner: distributes grid points over worker processes.

Uses ProcessPoolExecutor from stdlib. The grid is split into one
interleaved chunk per worker; every grid point still draws from its own
generator (seeded from the root seed and its coordinates), so the random
draws, and with them the MEGNO values, do not depend on the worker count.

External dependencies (concurrent.futures, os) are confined to this
adapter layer.
"""
import logging
import os
from concurrent.futures import ProcessPoolExecutor, as_completed

from arnoldweb.domain.dynamical_map import (
    MapPoint,
    MapResult,
    grid_tasks,
    root_entropy,
    run_task,
)
from arnoldweb.ports import MapModule

logger = logging.getLogger(__name__)


def _run_chunk(
    module: MapModule,
    tasks: list[tuple[int, int]],
    entropy: int,
    worker: int,
) -> list[MapPoint]:
    """Process one chunk of grid points (runs inside a worker process)."""
    return [run_task(module, i, j, entropy, worker) for i, j in tasks]


class ConcurrentMapRunner:
    """
    Computes dynamical maps with a process pool.

    Args:
        max_workers: Number of worker processes.
            Default: os.cpu_count(). With 1, runs in the calling process.
    """

    def __init__(self, max_workers: int | None = None):
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self._max_workers = max_workers or (os.cpu_count() or 1)

    @property
    def max_workers(self) -> int:
        return self._max_workers

    def run(self, module: MapModule, seed: int | None = None) -> MapResult:
        """
        Compute every grid point of a module.

        Args:
            module: Map module (must be picklable).
            seed: Root seed; None draws fresh entropy.

        Returns:
            MapResult in row-major order.
        """
        entropy = root_entropy(seed)
        tasks = grid_tasks(module.xres, module.yres)
        n_workers = max(1, min(self._max_workers, len(tasks)))
        chunks = [tasks[w::n_workers] for w in range(n_workers)]

        logger.info(
            "Computing %s map %dx%d (%d points) with %d worker(s)",
            module.name, module.xres, module.yres, len(tasks), n_workers,
        )

        points: list[MapPoint] = []
        if n_workers == 1:
            for worker, chunk in enumerate(chunks):
                points.extend(_run_chunk(module, chunk, entropy, worker))
        else:
            with ProcessPoolExecutor(max_workers=n_workers) as executor:
                futures = {
                    executor.submit(_run_chunk, module, chunk, entropy, worker): worker
                    for worker, chunk in enumerate(chunks)
                }
                for future in as_completed(futures):
                    worker = futures[future]
                    chunk_points = future.result()
                    logger.debug(
                        "Worker %d finished %d points", worker, len(chunk_points),
                    )
                    points.extend(chunk_points)

        points.sort(key=lambda p: (p.i, p.j))
        result = MapResult(
            module=module.name,
            columns=tuple(module.columns),
            xres=module.xres,
            yres=module.yres,
            points=tuple(points),
        )

        if result.nonfinite_count:
            logger.warning(
                "%d of %d %s points are non-finite; check eps and step",
                result.nonfinite_count, len(points), module.name,
            )
        return result

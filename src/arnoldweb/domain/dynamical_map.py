# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Dynamical maps: one independent computation per grid point.

A map module turns grid coordinates (i, j) into an initial condition
(prepare) and an initial condition into a fixed-length output vector
(process). The Arnold web module places the initial actions (I1, I2) on a
grid over [xmin, xmax) x [ymin, ymax) and returns the MEGNO value of each
orbit, which draws the resonance web.

Every task owns its random generator, derived from the root seed and the
grid coordinates, so results are reproducible and independent of the order
or the process in which tasks run.

External dependency: numpy (allowed in domain layer).
"""
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from arnoldweb.domain.config import ArnoldConfig
from arnoldweb.domain.megno import run_megno

# Initial angles and third action shared by every grid point
INITIAL_ANGLES = (0.131, 0.132, 0.212)
INITIAL_I3 = 0.01


# --- Types ---

@dataclass(frozen=True)
class MapPoint:
    """Output vector of one grid point."""
    i: int
    j: int
    values: tuple[float, ...]


@dataclass(frozen=True)
class MapResult:
    """All grid points of a computed map, in row-major (i, j) order."""
    module: str
    columns: tuple[str, ...]
    xres: int
    yres: int
    points: tuple[MapPoint, ...]

    @property
    def nonfinite_count(self) -> int:
        """Number of points with at least one NaN or infinite output."""
        return sum(
            1 for p in self.points
            if not all(math.isfinite(v) for v in p.values)
        )

    def as_array(self) -> np.ndarray:
        """Outputs as an (xres, yres, n_columns) array."""
        grid = np.full((self.xres, self.yres, len(self.columns)), np.nan)
        for p in self.points:
            grid[p.i, p.j, :] = p.values
        return grid


# --- Task helpers ---

def map_coordinate(index: int, lo: float, hi: float, resolution: int) -> float:
    """Left edge of grid cell index: lo + index·(hi - lo)/resolution."""
    return lo + index * (hi - lo) / (1.0 * resolution)


def prepare_initial_condition(config: ArnoldConfig, i: int, j: int) -> np.ndarray:
    """Initial state (φ1, φ2, φ3, I1, I2, I3) of grid point (i, j)."""
    x = map_coordinate(i, config.xmin, config.xmax, config.xres)
    y = map_coordinate(j, config.ymin, config.ymax, config.yres)
    return np.array([*INITIAL_ANGLES, x, y, INITIAL_I3], dtype=np.float64)


def task_seed(entropy: int, i: int, j: int) -> np.random.SeedSequence:
    """Seed sequence of grid point (i, j) under a root entropy value."""
    return np.random.SeedSequence(entropy, spawn_key=(i, j))


def grid_tasks(xres: int, yres: int) -> list[tuple[int, int]]:
    """Grid coordinates in row-major order."""
    return [(i, j) for i in range(xres) for j in range(yres)]


# --- Modules ---

class ArnoldWebModule:
    """MEGNO map of the Arnold web over the (I1, I2) action plane."""

    name = "arnoldweb"
    input_length = 6
    output_length = 4
    columns = ("I1", "I2", "megno", "energy_error")

    def __init__(self, config: ArnoldConfig | None = None) -> None:
        self._config = (config or ArnoldConfig()).validate()

    @property
    def config(self) -> ArnoldConfig:
        return self._config

    @property
    def xres(self) -> int:
        return self._config.xres

    @property
    def yres(self) -> int:
        return self._config.yres

    def prepare(self, i: int, j: int) -> np.ndarray:
        return prepare_initial_condition(self._config, i, j)

    def process(
        self,
        initial: Sequence[float],
        rng: np.random.Generator,
        worker: int = 0,
    ) -> tuple[float, ...]:
        cfg = self._config
        return run_megno(
            initial, cfg.step, cfg.tend, cfg.eps, cfg.smod, cfg.driver, rng,
        )


def run_task(
    module,
    i: int,
    j: int,
    entropy: int,
    worker: int = 0,
) -> MapPoint:
    """Prepare and process one grid point."""
    rng = np.random.default_rng(task_seed(entropy, i, j))
    initial = module.prepare(i, j)
    values = module.process(initial, rng, worker)
    return MapPoint(i=i, j=j, values=tuple(float(v) for v in values))


def root_entropy(seed: int | None) -> int:
    """Root entropy for a map run; fresh OS entropy when seed is None."""
    if seed is not None:
        return seed
    return int(np.random.SeedSequence().entropy)


def compute_map(module, seed: int | None = None) -> MapResult:
    """Compute every grid point of a module sequentially.

    Args:
        module: Map module (ArnoldWebModule, MandelbrotModule, ...).
        seed: Root seed; None draws fresh entropy.

    Returns:
        MapResult in row-major order.
    """
    entropy = root_entropy(seed)
    points = tuple(
        run_task(module, i, j, entropy)
        for i, j in grid_tasks(module.xres, module.yres)
    )
    return MapResult(
        module=module.name,
        columns=tuple(module.columns),
        xres=module.xres,
        yres=module.yres,
        points=points,
    )

# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for map modules, configuration and result export.

Adapters implement these to handle file formats and process topology.
"""
from typing import Protocol, Sequence, runtime_checkable

import numpy as np

from arnoldweb.domain.config import ArnoldConfig
from arnoldweb.domain.dynamical_map import MapResult


@runtime_checkable
class MapModule(Protocol):
    """Port for per-grid-point computations driven by a map runner."""

    name: str
    input_length: int
    output_length: int
    columns: tuple[str, ...]
    xres: int
    yres: int

    def prepare(self, i: int, j: int) -> np.ndarray:
        """Initial condition of grid point (i, j)."""
        ...

    def process(
        self,
        initial: Sequence[float],
        rng: np.random.Generator,
        worker: int = 0,
    ) -> tuple[float, ...]:
        """Output vector (output_length values) for an initial condition."""
        ...


@runtime_checkable
class ConfigSource(Protocol):
    """Port for reading run configuration."""

    def read_config(self, path: str) -> ArnoldConfig:
        """Read a configuration file, falling back to defaults."""
        ...


@runtime_checkable
class MapExporter(Protocol):
    """Port for writing computed maps."""

    def export(self, result: MapResult, path: str) -> int:
        """
        Write a computed map to a file.

        Returns:
            Number of grid points written.
        """
        ...

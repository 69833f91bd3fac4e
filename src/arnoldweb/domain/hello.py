# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Hello map module: echoes grid coordinates and run metadata.

Does no computation; each point reports where it sits on the grid and
which worker produced it, which makes task distribution visible.
"""
from typing import Sequence

import numpy as np

HELLO_MARKER = 99.0


class HelloModule:
    """Echo module over an xres x yres grid."""

    name = "hello"
    input_length = 3
    output_length = 6
    columns = ("x", "y", "z", "marker", "xres", "worker")

    def __init__(self, xres: int = 8, yres: int = 8) -> None:
        if xres < 1 or yres < 1:
            raise ValueError(f"Resolution must be positive, got {xres}x{yres}")
        self.xres = xres
        self.yres = yres

    def prepare(self, i: int, j: int) -> np.ndarray:
        return np.array([float(i), float(j), 0.0])

    def process(
        self,
        initial: Sequence[float],
        rng: np.random.Generator,
        worker: int = 0,
    ) -> tuple[float, ...]:
        return (
            float(initial[0]),
            float(initial[1]),
            float(initial[2]),
            HELLO_MARKER,
            float(self.xres),
            float(worker),
        )

# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Mandelbrot set escape-count map.

Minimal map module: no random draws, one escape-time iteration per grid
point. Useful to exercise the grid runner and the exporters on a cheap,
fully deterministic workload.
"""
from typing import Sequence

import numpy as np

REAL_MIN = -2.0
REAL_MAX = 2.0
IMAG_MIN = -2.0
IMAG_MAX = 2.0
ESCAPE_RADIUS_SQ = 4.0
MAX_ITERATIONS = 256


def escape_count(
    a: float,
    b: float,
    c: float = ESCAPE_RADIUS_SQ,
    max_iter: int = MAX_ITERATIONS,
) -> int:
    """Iterations of z <- z² + (a + ib) from z = 0 until |z|² >= c.

    Always performs at least one iteration; returns max_iter for points
    that never escape.
    """
    zr = 0.0
    zi = 0.0
    count = 0
    while True:
        temp = zr * zr - zi * zi + a
        zi = 2.0 * zr * zi + b
        zr = temp
        count += 1
        if zr * zr + zi * zi >= c or count >= max_iter:
            return count


class MandelbrotModule:
    """Escape counts over [-2, 2]², imaginary axis pointing up."""

    name = "mandelbrot"
    input_length = 2
    output_length = 4
    columns = ("real", "imag", "count", "worker")

    def __init__(self, xres: int = 64, yres: int = 64) -> None:
        if xres < 2 or yres < 2:
            raise ValueError(f"Resolution must be at least 2x2, got {xres}x{yres}")
        self.xres = xres
        self.yres = yres
        self._scale_real = (REAL_MAX - REAL_MIN) / (xres - 1.0)
        self._scale_imag = (IMAG_MAX - IMAG_MIN) / (yres - 1.0)

    def prepare(self, i: int, j: int) -> np.ndarray:
        return np.array([
            REAL_MIN + i * self._scale_real,
            IMAG_MAX - j * self._scale_imag,
        ])

    def process(
        self,
        initial: Sequence[float],
        rng: np.random.Generator,
        worker: int = 0,
    ) -> tuple[float, ...]:
        real, imag = float(initial[0]), float(initial[1])
        return (real, imag, float(escape_count(real, imag)), float(worker))

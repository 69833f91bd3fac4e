# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the hello echo module."""

import numpy as np
import pytest

from arnoldweb.domain.dynamical_map import compute_map
from arnoldweb.domain.hello import HELLO_MARKER, HelloModule
from arnoldweb.ports import MapModule


class TestHelloModule:

    def test_satisfies_port(self):
        assert isinstance(HelloModule(), MapModule)

    def test_echoes_coordinates(self):
        module = HelloModule(xres=5, yres=3)
        out = module.process(module.prepare(4, 2), np.random.default_rng(0), worker=2)
        assert out == (4.0, 2.0, 0.0, HELLO_MARKER, 5.0, 2.0)

    def test_map_covers_grid(self):
        result = compute_map(HelloModule(xres=2, yres=2), seed=0)
        assert [p.values[:2] for p in result.points] == [
            (0.0, 0.0), (0.0, 1.0), (1.0, 0.0), (1.0, 1.0),
        ]

    def test_resolution_positive(self):
        with pytest.raises(ValueError, match="Resolution"):
            HelloModule(xres=0, yres=2)

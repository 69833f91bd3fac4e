# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Norm and renormalisation of the tangent (variational) vector.

The magnitude is measured over the operative axes first_axis..5. With the
default first_axis=1 the first angle variation is excluded from the
magnitude and left untouched by norm(); every MEGNO value depends on this
convention, so it is kept explicit rather than folded away.
"""
import numpy as np

TANGENT_DIMENSION = 6
TANGENT_FIRST_AXIS = 1


def checknorm(vector: np.ndarray, first_axis: int = TANGENT_FIRST_AXIS) -> float:
    """Euclidean norm of vector[first_axis:]. Does not modify the vector."""
    operative = vector[first_axis:]
    return np.sqrt(np.dot(operative, operative))


def norm(vector: np.ndarray, first_axis: int = TANGENT_FIRST_AXIS) -> float:
    """Normalise vector[first_axis:] in place.

    Components before first_axis are neither read nor written.

    Returns:
        The magnitude before normalisation.
    """
    magnitude = checknorm(vector, first_axis)
    vector[first_axis:] /= magnitude
    return magnitude


def rescale(vector: np.ndarray, magnitude: float) -> None:
    """Divide every component of vector by magnitude, in place."""
    vector /= magnitude


def seed_tangent(rng: np.random.Generator) -> np.ndarray:
    """Random initial tangent direction, uniform in [0, 1) per component."""
    return rng.random(TANGENT_DIMENSION)

# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Hamiltonian model of the Arnold web with its variational equations.

Three-degree-of-freedom quasi-integrable system of Froeschlé, Guzzo and
Lega (Science 289, 2000):

    H = I1²/2 + I2²/2 + I3 + eps / (cos φ1 + cos φ2 + cos φ3 + 4)

The state is laid out as (φ1, φ2, φ3, I1, I2, I3). The tangent
(variational) vector uses the same layout.

External dependency: numpy (allowed in domain layer).
"""
from dataclasses import dataclass
from typing import Protocol, Sequence, runtime_checkable

import numpy as np

PHASE_DIMENSION = 6


# --- Types ---

@runtime_checkable
class HamiltonianModel(Protocol):
    """Structural typing port for models driven by the symplectic steppers."""

    def vector_field(
        self,
        state: np.ndarray,
        tangent: np.ndarray,
    ) -> tuple[np.ndarray, np.ndarray]: ...

    def drift(self, state: np.ndarray, tangent: np.ndarray, h: float) -> None: ...

    def energy(self, state: np.ndarray) -> float: ...


def as_phase_vector(values: Sequence[float], name: str = "state") -> np.ndarray:
    """Copy a 6-component phase-space vector into a fresh float64 array.

    Raises:
        ValueError: If the vector does not have exactly 6 components.
    """
    arr = np.array(values, dtype=np.float64)
    if arr.shape != (PHASE_DIMENSION,):
        raise ValueError(
            f"{name} must have {PHASE_DIMENSION} components, got shape {arr.shape}"
        )
    return arr


# --- Model ---

@dataclass(frozen=True)
class ArnoldWebHamiltonian:
    """Perturbed rotator with coupling strength eps.

    The integrable part I1²/2 + I2²/2 + I3 is solved exactly by drift();
    the perturbation eps/D only enters through the actions (kicks).
    """
    eps: float

    def vector_field(
        self,
        state: np.ndarray,
        tangent: np.ndarray,
    ) -> tuple[np.ndarray, np.ndarray]:
        """Right-hand sides of the equations of motion and of the variations.

        Args:
            state: Current state (φ1, φ2, φ3, I1, I2, I3).
            tangent: Current tangent vector, same layout.

        Returns:
            (rhs, variational_rhs), two 6-element arrays. Only the action
            components (indices 3..5) are consumed by the kick sub-step.
            The angle components of variational_rhs are the fixed
            placeholders (1, 1, 0).
        """
        # inf angles propagate as NaN
        sf = np.sin(state[:3])
        cf = np.cos(state[:3])

        dif = cf[0] + cf[1] + cf[2] + 4.0
        dif2 = self.eps / (dif * dif)
        dif3 = dif2 / dif

        rhs = np.empty(PHASE_DIMENSION, dtype=np.float64)
        rhs[:3] = state[3:]
        rhs[3:] = -sf * dif2

        dy = tangent[:3]
        cross = 2.0 * (sf[0] * dy[0] + sf[1] * dy[1] + sf[2] * dy[2]) * dif3

        variational = np.empty(PHASE_DIMENSION, dtype=np.float64)
        variational[:3] = (1.0, 1.0, 0.0)
        variational[3:] = -cf * dif2 * dy - cross * sf

        return rhs, variational

    def drift(self, state: np.ndarray, tangent: np.ndarray, h: float) -> None:
        """Exact flow of the integrable part over h, in place.

        dH0/dI = (I1, I2, 1): the third angle turns at unit rate and its
        variation is left unchanged.
        """
        state[0] += state[3] * h
        state[1] += state[4] * h
        state[2] += h

        tangent[0] += tangent[3] * h
        tangent[1] += tangent[4] * h

    def energy(self, state: np.ndarray) -> float:
        """Hamiltonian value at state. Diagnostic only."""
        i1, i2, i3 = np.float64(state[3]), np.float64(state[4]), np.float64(state[5])
        cf = np.cos(np.asarray(state[:3], dtype=np.float64))
        dif = self.eps / (cf[0] + cf[1] + cf[2] + 4.0)
        return i1 * i1 / 2.0 + i2 * i2 / 2.0 + i3 + dif

    def variational_integral(self, state: np.ndarray, tangent: np.ndarray) -> float:
        """Symplectic pairing of the right-hand side with the tangent vector.

        Diagnostic only, never fed back into the integration.
        """
        rhs, _ = self.vector_field(state, tangent)
        return float(
            -rhs[3] * tangent[0] - rhs[4] * tangent[1] - rhs[5] * tangent[2]
            + rhs[0] * tangent[3] + rhs[1] * tangent[4] + rhs[2] * tangent[5]
        )

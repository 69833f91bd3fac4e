# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Symplectic steppers propagating a state and its tangent vector together.

Both schemes are compositions of drift (exact flow of the integrable part,
updates the angles) and kick (perturbation, updates the actions) sub-steps.
Each sub-step advances the state and the tangent vector with the same
fraction of the step.

    Leapfrog: kick(1/2) drift(1) kick(1/2)              2nd order
    SABA3:    drift(c1) kick(d1) drift(c2) kick(d2)     Laskar & Robutel (2001)
              drift(c2) kick(d1) drift(c1)

External dependency: numpy (allowed in domain layer).
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import numpy as np

from arnoldweb.domain.arnold_model import HamiltonianModel

# Golden-ratio conjugate; configured steps are multiplied by it.
STEP_SCALE = (math.sqrt(5.0) - 1.0) / 2.0

# Leapfrog coefficients
LEAPFROG_C1 = 0.5
LEAPFROG_C2 = 1.0

# SABA3 coefficients
SABA3_C1 = 0.5 - math.sqrt(15.0) / 10.0
SABA3_C2 = math.sqrt(15.0) / 10.0
SABA3_D1 = 5.0 / 18.0
SABA3_D2 = 4.0 / 9.0


# --- Types ---

class IntegratorVariant(Enum):
    """Symplectic scheme selection."""
    LEAPFROG = "leapfrog"
    SABA3 = "saba3"

    @classmethod
    def from_driver(cls, code: int) -> "IntegratorVariant":
        """Map the numeric driver code of a configuration file (1 or 2)."""
        try:
            return _DRIVER_CODES[code]
        except KeyError:
            raise ValueError(
                f"Unknown driver code: {code!r}. Use 1 (leapfrog) or 2 (saba3)."
            ) from None

    @classmethod
    def parse(cls, value: "str | int | IntegratorVariant") -> "IntegratorVariant":
        """Accept a variant, its name or its numeric driver code."""
        if isinstance(value, IntegratorVariant):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls.from_driver(value)
        text = str(value).strip().lower()
        if text.isdigit():
            return cls.from_driver(int(text))
        for variant in cls:
            if variant.value == text:
                return variant
        raise ValueError(
            f"Unknown integrator: {value!r}. Use 'leapfrog', 'saba3', 1 or 2."
        )

    @property
    def driver_code(self) -> int:
        return _VARIANT_CODES[self]


_DRIVER_CODES = {1: IntegratorVariant.LEAPFROG, 2: IntegratorVariant.SABA3}
_VARIANT_CODES = {v: k for k, v in _DRIVER_CODES.items()}

StepFn = Callable[[HamiltonianModel, np.ndarray, np.ndarray, float], None]


@dataclass(frozen=True)
class Stepper:
    """A symplectic scheme together with its step-size scaling."""
    variant: IntegratorVariant
    step_fn: StepFn
    step_scale: float = STEP_SCALE

    @property
    def name(self) -> str:
        return self.variant.value

    def scaled_step(self, step: float) -> float:
        """Integration step h derived from a configured step value."""
        return step * self.step_scale

    def step(
        self,
        model: HamiltonianModel,
        state: np.ndarray,
        tangent: np.ndarray,
        h: float,
    ) -> None:
        self.step_fn(model, state, tangent, h)


# --- Sub-steps ---

def kick(
    model: HamiltonianModel,
    state: np.ndarray,
    tangent: np.ndarray,
    h: float,
) -> None:
    """Advance the actions and their variations by h, in place."""
    rhs, variational = model.vector_field(state, tangent)
    state[3:] += rhs[3:] * h
    tangent[3:] += variational[3:] * h


def drift(
    model: HamiltonianModel,
    state: np.ndarray,
    tangent: np.ndarray,
    h: float,
) -> None:
    """Advance the angles and their variations by h, in place."""
    model.drift(state, tangent, h)


# --- Steppers ---

def leapfrog_step(
    model: HamiltonianModel,
    state: np.ndarray,
    tangent: np.ndarray,
    dt: float,
) -> None:
    """Single kick-drift-kick Leapfrog step (2nd order symplectic).

    Args:
        model: Hamiltonian model providing the vector field and the drift.
        state: State vector, modified in place.
        tangent: Tangent vector, modified in place.
        dt: Step size.
    """
    kick(model, state, tangent, LEAPFROG_C1 * dt)
    drift(model, state, tangent, LEAPFROG_C2 * dt)
    kick(model, state, tangent, LEAPFROG_C1 * dt)


def saba3_step(
    model: HamiltonianModel,
    state: np.ndarray,
    tangent: np.ndarray,
    dt: float,
) -> None:
    """Single SABA3 step.

    Error O(eps·dt⁶ + eps²·dt²) for a perturbation of size eps, against
    O(eps·dt²) for Leapfrog.
    """
    drift(model, state, tangent, SABA3_C1 * dt)
    kick(model, state, tangent, SABA3_D1 * dt)
    drift(model, state, tangent, SABA3_C2 * dt)
    kick(model, state, tangent, SABA3_D2 * dt)
    drift(model, state, tangent, SABA3_C2 * dt)
    kick(model, state, tangent, SABA3_D1 * dt)
    drift(model, state, tangent, SABA3_C1 * dt)


_STEPPERS = {
    IntegratorVariant.LEAPFROG: Stepper(IntegratorVariant.LEAPFROG, leapfrog_step),
    IntegratorVariant.SABA3: Stepper(IntegratorVariant.SABA3, saba3_step),
}


def stepper_for(variant: "IntegratorVariant | str | int") -> Stepper:
    """Stepper for a variant, its name or its driver code."""
    return _STEPPERS[IntegratorVariant.parse(variant)]

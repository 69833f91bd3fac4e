# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Symplectic MEGNO driver.

Propagates a state and a random tangent vector with a fixed-step symplectic
scheme and accumulates the Mean Exponential Growth factor of Nearby Orbits
(Cincotta & Simó 2000, Goździewski et al. 2001):

    Y_k  = Y_{k-1}·(k-1)/k + 2·ln(δ_k/δ_{k-1})
    <Y>_k = <Y>_{k-1}·(k-1)/k + Y_k/k

<Y> tends to 2 on regular (quasi-periodic) orbits and grows linearly with
time on chaotic ones. The relative energy error is sampled every smod
steps as an integration-quality diagnostic.

The loop bound is a synthetic time t = k·h compared with t_end after each
step, so the number of steps is floor(t_end/h) + 2 for t_end ≥ 0 and zero
for t_end < 0.

External dependency: numpy (allowed in domain layer).
"""
import logging
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from arnoldweb.domain.arnold_model import (
    ArnoldWebHamiltonian,
    HamiltonianModel,
    as_phase_vector,
)
from arnoldweb.domain.symplectic import IntegratorVariant, Stepper, stepper_for
from arnoldweb.domain.tangent import (
    TANGENT_FIRST_AXIS,
    checknorm,
    norm,
    rescale,
    seed_tangent,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MegnoResult:
    """Summary of one MEGNO integration run."""
    megno: float
    max_energy_error: float
    initial_energy: float
    final_state: tuple[float, ...]
    steps: int

    @property
    def is_finite(self) -> bool:
        """False when the run diverged (overflow or NaN in the indicators)."""
        return math.isfinite(self.megno) and math.isfinite(self.max_energy_error)


def integrate_megno(
    initial_state: Sequence[float],
    stepper: Stepper,
    h: float,
    t_end: float,
    model: HamiltonianModel,
    smod: int,
    rng: np.random.Generator,
    first_axis: int = TANGENT_FIRST_AXIS,
) -> MegnoResult:
    """Integrate state and tangent vector, accumulating MEGNO.

    Args:
        initial_state: (φ1, φ2, φ3, I1, I2, I3). Not modified.
        stepper: Symplectic scheme.
        h: Integration step (already scaled).
        t_end: Synthetic end time.
        model: Hamiltonian model.
        smod: Energy error sampling stride, in steps.
        rng: Generator owned by this run; seeds the tangent vector.
        first_axis: First tangent axis counted in the norm.

    Returns:
        MegnoResult. Non-finite values are returned as-is, no early exit.

    Raises:
        ValueError: If h <= 0, smod < 1 or the state is not 6-dimensional.
    """
    if h <= 0.0:
        raise ValueError(f"Step size must be positive, got {h}")
    if smod < 1:
        raise ValueError(f"Energy sampling stride must be >= 1, got {smod}")

    state = as_phase_vector(initial_state)
    tangent = seed_tangent(rng)

    delta0 = norm(tangent, first_axis)
    en0 = np.float64(model.energy(state))

    y = 0.0
    mean_y = 0.0
    max_error = 0.0
    t = 0.0
    ks = 0

    while t <= t_end:
        stepper.step(model, state, tangent, h)

        t = ks * h
        ks += 1

        delta = checknorm(tangent, first_axis)
        weight = (ks - 1.0) / ks
        y = y * weight + 2.0 * np.log(delta / delta0)
        mean_y = mean_y * weight + y / ks

        rescale(tangent, delta)
        delta0 = checknorm(tangent, first_axis)

        if ks % smod == 0:
            error = abs((model.energy(state) - en0) / en0)
            if error > max_error:
                max_error = error

    logger.debug(
        "%s: %d steps, <Y>=%.6g, max |dE/E0|=%.3g",
        stepper.name, ks, mean_y, max_error,
    )

    return MegnoResult(
        megno=float(mean_y),
        max_energy_error=float(max_error),
        initial_energy=float(en0),
        final_state=tuple(float(x) for x in state),
        steps=ks,
    )


def run_megno(
    initial_state: Sequence[float],
    step: float,
    t_end: float,
    eps: float,
    smod: int,
    variant: "IntegratorVariant | str | int",
    rng: np.random.Generator,
) -> tuple[float, float, float, float]:
    """One grid-point computation: MEGNO and energy error for a state.

    Args:
        initial_state: (φ1, φ2, φ3, I1, I2, I3).
        step: Configured step; scaled by the stepper's step_scale.
        t_end: End time.
        eps: Coupling strength.
        smod: Energy error sampling stride.
        variant: Leapfrog or SABA3 (variant, name or driver code).
        rng: Generator owned by this computation.

    Returns:
        (I1, I2, megno, max_energy_error) with I1, I2 taken from the final
        state.
    """
    stepper = stepper_for(variant)
    result = integrate_megno(
        initial_state,
        stepper,
        stepper.scaled_step(step),
        t_end,
        ArnoldWebHamiltonian(eps),
        smod,
        rng,
    )
    return (
        result.final_state[3],
        result.final_state[4],
        result.megno,
        result.max_energy_error,
    )

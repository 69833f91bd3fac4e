# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Arnold Web

Dynamical maps of the Arnold web: symplectic Leapfrog and SABA3
integration of a three-degree-of-freedom quasi-integrable Hamiltonian
together with its variational equations, the MEGNO chaos indicator and
the relative energy error per grid point, computed over a grid of initial
actions on a pool of worker processes.
"""

from arnoldweb.domain.arnold_model import (
    PHASE_DIMENSION,
    HamiltonianModel,
    ArnoldWebHamiltonian,
    as_phase_vector,
)
from arnoldweb.domain.tangent import (
    checknorm,
    norm,
    rescale,
    seed_tangent,
)
from arnoldweb.domain.symplectic import (
    STEP_SCALE,
    IntegratorVariant,
    Stepper,
    kick,
    drift,
    leapfrog_step,
    saba3_step,
    stepper_for,
)
from arnoldweb.domain.megno import (
    MegnoResult,
    integrate_megno,
    run_megno,
)
from arnoldweb.domain.config import ArnoldConfig
from arnoldweb.domain.dynamical_map import (
    MapPoint,
    MapResult,
    ArnoldWebModule,
    compute_map,
)
from arnoldweb.domain.mandelbrot import (
    MandelbrotModule,
    escape_count,
)
from arnoldweb.domain.hello import HelloModule

__all__ = [
    "PHASE_DIMENSION",
    "HamiltonianModel",
    "ArnoldWebHamiltonian",
    "as_phase_vector",
    "checknorm",
    "norm",
    "rescale",
    "seed_tangent",
    "STEP_SCALE",
    "IntegratorVariant",
    "Stepper",
    "kick",
    "drift",
    "leapfrog_step",
    "saba3_step",
    "stepper_for",
    "MegnoResult",
    "integrate_megno",
    "run_megno",
    "ArnoldConfig",
    "MapPoint",
    "MapResult",
    "ArnoldWebModule",
    "compute_map",
    "MandelbrotModule",
    "escape_count",
    "HelloModule",
]

# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Run configuration for dynamical maps of the Arnold web.

One frozen dataclass carries every recognised option with its default, so a
map can be computed without a configuration file. Adapters build it from
INI files and the CLI applies overrides with with_overrides().
"""
from dataclasses import dataclass, fields, replace

from arnoldweb.domain.symplectic import IntegratorVariant


@dataclass(frozen=True)
class ArnoldConfig:
    """Options of an Arnold web map run.

    step: configured step, multiplied by the stepper's step_scale
    tend: synthetic end time of each integration
    xmin, xmax, ymin, ymax: map range in the (I1, I2) action plane
    eps: coupling strength
    driver: symplectic scheme
    smod: energy error sampling stride (steps)
    xres, yres: map resolution (grid points per axis)
    seed: root seed of the per-task generators (None: fresh entropy)
    """
    step: float = 0.25
    tend: float = 1000.0
    xmin: float = 0.8
    xmax: float = 1.2
    ymin: float = 0.8
    ymax: float = 1.2
    eps: float = 0.01
    driver: IntegratorVariant = IntegratorVariant.LEAPFROG
    smod: int = 1000
    xres: int = 32
    yres: int = 32
    seed: int | None = None

    def validate(self) -> "ArnoldConfig":
        """Check option consistency.

        Returns:
            self, so construction and validation can be chained.

        Raises:
            ValueError: On the first inconsistent option.
        """
        if self.step <= 0.0:
            raise ValueError(f"step must be positive, got {self.step}")
        if self.xmax <= self.xmin:
            raise ValueError(f"Empty x range: xmin={self.xmin}, xmax={self.xmax}")
        if self.ymax <= self.ymin:
            raise ValueError(f"Empty y range: ymin={self.ymin}, ymax={self.ymax}")
        if self.smod < 1:
            raise ValueError(f"smod must be >= 1, got {self.smod}")
        if self.xres < 1 or self.yres < 1:
            raise ValueError(
                f"Resolution must be positive, got {self.xres}x{self.yres}"
            )
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must be non-negative, got {self.seed}")
        return self

    def with_overrides(self, **overrides) -> "ArnoldConfig":
        """Copy with the given options replaced; None values are ignored."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "driver" in changes:
            changes["driver"] = IntegratorVariant.parse(changes["driver"])
        return replace(self, **changes)


CONFIG_OPTIONS = tuple(f.name for f in fields(ArnoldConfig))

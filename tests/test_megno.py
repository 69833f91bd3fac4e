# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the symplectic MEGNO driver."""

import math

import numpy as np
import pytest

from arnoldweb.domain.arnold_model import ArnoldWebHamiltonian
from arnoldweb.domain.megno import MegnoResult, integrate_megno, run_megno
from arnoldweb.domain.symplectic import STEP_SCALE, IntegratorVariant, stepper_for


class FixedTangent:
    """Generator stand-in returning a chosen initial tangent vector."""

    def __init__(self, values):
        self._values = np.array(values, dtype=np.float64)

    def random(self, size):
        assert size == len(self._values)
        return self._values.copy()


@pytest.fixture
def initial_state():
    return (0.131, 0.132, 0.212, 0.95, 1.07, 0.01)


@pytest.fixture
def leapfrog():
    return stepper_for(IntegratorVariant.LEAPFROG)


@pytest.fixture
def saba3():
    return stepper_for(IntegratorVariant.SABA3)


class TestLoopBound:

    def test_step_count(self, initial_state, leapfrog):
        result = integrate_megno(
            initial_state, leapfrog, 0.25, 1.0,
            ArnoldWebHamiltonian(0.01), 1000, np.random.default_rng(0),
        )
        # floor(t_end/h) + 2
        assert result.steps == 6

    def test_zero_end_time_still_steps(self, initial_state, leapfrog):
        result = integrate_megno(
            initial_state, leapfrog, 0.25, 0.0,
            ArnoldWebHamiltonian(0.01), 1000, np.random.default_rng(0),
        )
        assert result.steps == 2

    def test_negative_end_time_runs_no_steps(self, initial_state, leapfrog):
        result = integrate_megno(
            initial_state, leapfrog, 0.25, -1.0,
            ArnoldWebHamiltonian(0.01), 1, np.random.default_rng(0),
        )
        assert result.steps == 0
        assert result.megno == 0.0
        assert result.max_energy_error == 0.0
        assert result.final_state == pytest.approx(initial_state)
        assert result.initial_energy == ArnoldWebHamiltonian(0.01).energy(
            np.array(result.final_state)
        )

    def test_initial_state_not_modified(self, leapfrog):
        state = np.array([0.131, 0.132, 0.212, 0.95, 1.07, 0.01])
        before = state.copy()
        integrate_megno(
            state, leapfrog, 0.25, 10.0,
            ArnoldWebHamiltonian(0.01), 1, np.random.default_rng(0),
        )
        np.testing.assert_array_equal(state, before)


class TestValidation:

    @pytest.mark.parametrize("h", [0.0, -0.1])
    def test_non_positive_step(self, initial_state, leapfrog, h):
        with pytest.raises(ValueError, match="Step size"):
            integrate_megno(
                initial_state, leapfrog, h, 10.0,
                ArnoldWebHamiltonian(0.01), 1, np.random.default_rng(0),
            )

    def test_zero_sampling_stride(self, initial_state, leapfrog):
        with pytest.raises(ValueError, match="stride"):
            integrate_megno(
                initial_state, leapfrog, 0.1, 10.0,
                ArnoldWebHamiltonian(0.01), 0, np.random.default_rng(0),
            )

    def test_wrong_state_dimension(self, leapfrog):
        with pytest.raises(ValueError, match="6 components"):
            integrate_megno(
                (1.0, 1.0), leapfrog, 0.1, 10.0,
                ArnoldWebHamiltonian(0.01), 1, np.random.default_rng(0),
            )


class TestMegnoIndicator:

    @pytest.mark.parametrize("variant", list(IntegratorVariant))
    def test_regular_orbit_tends_to_two(self, initial_state, variant):
        """Integrable flow: tangent grows linearly, MEGNO converges to 2."""
        stepper = stepper_for(variant)
        result = integrate_megno(
            initial_state, stepper, 0.25 * STEP_SCALE, 5000.0,
            ArnoldWebHamiltonian(0.0), 1000,
            FixedTangent([0.0, 0.0, 0.0, 0.0, 1.0, 0.0]),
        )
        assert result.megno == pytest.approx(2.0, abs=0.1)
        assert result.max_energy_error == 0.0

    def test_chaotic_orbit_grows(self, leapfrog):
        """Strong coupling near the double resonance: MEGNO well above 2."""
        result = integrate_megno(
            (3.0, 2.5, 0.0, 0.1, 0.2, 0.0), leapfrog, 0.25 * STEP_SCALE, 2000.0,
            ArnoldWebHamiltonian(1.0), 1000, np.random.default_rng(5),
        )
        assert result.is_finite
        assert result.megno > 4.0

    def test_overflow_returns_non_finite_values(self):
        """Overflowing orbits run to the end and report inf/NaN."""
        with np.errstate(all="ignore"):
            out = run_megno(
                (0.131, 0.132, 0.212, 1.0, 1.0, 0.01), 0.25, 200.0, 1e307, 1, 1,
                np.random.default_rng(0),
            )
        assert len(out) == 4
        assert not all(math.isfinite(v) for v in out)
        assert not math.isfinite(out[3])

    def test_overflow_runs_every_step(self, leapfrog):
        with np.errstate(all="ignore"):
            result = integrate_megno(
                (0.131, 0.132, 0.212, 1.0, 1.0, 0.01), leapfrog, 0.25, 1.0,
                ArnoldWebHamiltonian(1e307), 1, np.random.default_rng(0),
            )
        assert result.steps == 6
        assert not result.is_finite

    def test_deterministic_for_seed(self, initial_state, saba3):
        runs = [
            integrate_megno(
                initial_state, saba3, 0.25 * STEP_SCALE, 200.0,
                ArnoldWebHamiltonian(0.01), 10, np.random.default_rng(42),
            )
            for _ in range(2)
        ]
        assert runs[0] == runs[1]

    def test_result_finite_for_default_options(self, initial_state, leapfrog):
        result = integrate_megno(
            initial_state, leapfrog, 0.25 * STEP_SCALE, 1000.0,
            ArnoldWebHamiltonian(0.01), 1000, np.random.default_rng(1),
        )
        assert isinstance(result, MegnoResult)
        assert result.is_finite
        assert math.isfinite(result.initial_energy)
        assert len(result.final_state) == 6


class TestEnergyError:

    def test_not_sampled_before_stride(self, initial_state, leapfrog):
        result = integrate_megno(
            initial_state, leapfrog, 0.25, 1.0,
            ArnoldWebHamiltonian(0.5), 7, np.random.default_rng(0),
        )
        assert result.steps == 6
        assert result.max_energy_error == 0.0

    def test_sampled_every_step(self, initial_state, leapfrog):
        result = integrate_megno(
            initial_state, leapfrog, 0.25, 1.0,
            ArnoldWebHamiltonian(0.5), 1, np.random.default_rng(0),
        )
        assert result.max_energy_error > 0.0

    def test_saba3_below_leapfrog(self, initial_state, leapfrog, saba3):
        h = 0.25 * STEP_SCALE
        model = ArnoldWebHamiltonian(0.01)
        lf = integrate_megno(initial_state, leapfrog, h, 500.0, model, 1,
                             np.random.default_rng(3))
        sb = integrate_megno(initial_state, saba3, h, 500.0, model, 1,
                             np.random.default_rng(3))
        assert sb.max_energy_error < lf.max_energy_error

    def test_zero_initial_energy_does_not_raise(self, leapfrog):
        """Relative error with E0 = 0 is NaN, which never raises the maximum."""
        with np.errstate(invalid="ignore", divide="ignore"):
            result = integrate_megno(
                (0.0, 0.0, 0.0, 0.0, 0.0, 0.0), leapfrog, 0.1, 1.0,
                ArnoldWebHamiltonian(0.0), 1, np.random.default_rng(0),
            )
        assert result.steps > 0
        assert result.max_energy_error == 0.0


class TestRunMegno:

    def test_returns_final_actions(self, initial_state):
        i1, i2, megno, err = run_megno(
            initial_state, 0.25, 100.0, 0.0, 1000, 1, np.random.default_rng(0),
        )
        # no coupling: actions are constants of motion
        assert i1 == initial_state[3]
        assert i2 == initial_state[4]
        assert math.isfinite(megno)
        assert err == 0.0

    @pytest.mark.parametrize("variant", [1, 2, "leapfrog", "saba3"])
    def test_accepts_driver_codes_and_names(self, initial_state, variant):
        out = run_megno(initial_state, 0.25, 50.0, 0.01, 10, variant,
                        np.random.default_rng(0))
        assert len(out) == 4
        assert all(math.isfinite(v) for v in out)

    def test_reproducible(self, initial_state):
        a = run_megno(initial_state, 0.25, 100.0, 0.01, 10, 2, np.random.default_rng(9))
        b = run_megno(initial_state, 0.25, 100.0, 0.01, 10, 2, np.random.default_rng(9))
        assert a == b

    def test_step_is_scaled(self, initial_state):
        """The configured step is multiplied by the step scale."""
        rng_a, rng_b = np.random.default_rng(4), np.random.default_rng(4)
        out = run_megno(initial_state, 0.25, 20.0, 0.01, 1, 1, rng_a)
        direct = integrate_megno(
            initial_state, stepper_for(1), 0.25 * STEP_SCALE, 20.0,
            ArnoldWebHamiltonian(0.01), 1, rng_b,
        )
        assert out == (
            direct.final_state[3], direct.final_state[4],
            direct.megno, direct.max_energy_error,
        )

    def test_unknown_variant(self, initial_state):
        with pytest.raises(ValueError):
            run_megno(initial_state, 0.25, 10.0, 0.01, 1, 3, np.random.default_rng(0))


class TestEndToEnd:

    @pytest.mark.parametrize("x,y", [(0.8, 0.8), (1.03, 0.97), (1.19, 1.11)])
    def test_web_samples_finite(self, x, y):
        i1, i2, megno, err = run_megno(
            (0.131, 0.132, 0.212, x, y, 0.01), 0.25, 5000.0, 0.01, 1000, 1,
            np.random.default_rng(2026),
        )
        assert all(math.isfinite(v) for v in (i1, i2, megno, err))
        assert megno > 0.0
        assert err < 1e-2

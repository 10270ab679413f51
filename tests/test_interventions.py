"""Tests for intervention policies."""

from __future__ import annotations

import numpy as np
import pytest

from kinetix_bench.exceptions import ConfigurationError
from kinetix_bench.interventions import (
    BlockReactions,
    InitialBlockReactions,
    InitialIntervention,
    InterventionType,
    make_intervention,
    parse_intervention,
)
from kinetix_bench.models.hidden import INITIAL_OBS, THETA_OBS
from kinetix_bench.utils.registry import INTERVENTION_REGISTRY

UNPROTECTED = [0, 1, 2, 5, 7, 8]  # 0-based k1, k2, k3, k6, k8, k9


class TestDispatch:
    @pytest.mark.parametrize(
        "name, cls",
        [
            ("initial", InitialIntervention),
            ("blockreactions", BlockReactions),
            ("initial_blockreactions", InitialBlockReactions),
        ],
    )
    def test_make_intervention(self, model, rng, name, cls):
        policy = make_intervention(name, model, 0.1, rng)
        assert isinstance(policy, cls)

    def test_accepts_enum(self, model, rng):
        policy = make_intervention(InterventionType.BLOCKREACTIONS, model, 0.1, rng)
        assert isinstance(policy, BlockReactions)

    def test_unknown_policy(self, model):
        rng = np.random.default_rng(0)
        state = rng.bit_generator.state
        with pytest.raises(ConfigurationError, match="does not exist"):
            make_intervention("intial_blockreactions", model, 0.1, rng)
        assert rng.bit_generator.state == state

    def test_parse_intervention(self):
        assert parse_intervention("initial") is InterventionType.INITIAL

    def test_negative_par(self, model, rng):
        with pytest.raises(ConfigurationError):
            make_intervention("blockreactions", model, -0.5, rng)

    def test_registry_has_all_policies(self):
        for kind in InterventionType:
            assert kind.value in INTERVENTION_REGISTRY


class TestInitial:
    def test_redraws_species_1_4_5(self, model, rng):
        policy = make_intervention("initial", model, 0.1, rng)
        for _ in range(50):
            initial, theta = policy()
            assert np.all((initial[[0, 3, 4]] >= 0.0) & (initial[[0, 3, 4]] <= 10.0))
            np.testing.assert_array_equal(initial[[1, 2, 5, 6, 7, 8]], 0.0)
            np.testing.assert_array_equal(theta, THETA_OBS)

    def test_draws_differ(self, model, rng):
        policy = make_intervention("initial", model, 0.1, rng)
        first, _ = policy()
        second, _ = policy()
        assert not np.array_equal(first, second)

    def test_returns_fresh_arrays(self, model, rng):
        policy = make_intervention("initial", model, 0.1, rng)
        _, theta = policy()
        theta[:] = 0.0
        _, theta_again = policy()
        np.testing.assert_array_equal(theta_again, THETA_OBS)


class TestBlockReactions:
    def test_initial_is_baseline(self, model, rng):
        policy = make_intervention("blockreactions", model, 0.1, rng)
        initial, _ = policy()
        np.testing.assert_array_equal(initial, INITIAL_OBS)

    def test_protected_rates_unchanged(self, model, rng):
        policy = make_intervention("blockreactions", model, 0.1, rng)
        for _ in range(50):
            _, theta = policy()
            assert theta[3] == THETA_OBS[3]
            assert theta[4] == THETA_OBS[4]

    def test_unprotected_rates_kept_or_zeroed(self, model, rng):
        policy = make_intervention("blockreactions", model, 0.1, rng)
        for _ in range(50):
            _, theta = policy()
            for i in UNPROTECTED:
                assert theta[i] in (0.0, THETA_OBS[i])

    def test_survival_probability(self, model, rng):
        """Each unprotected rate survives with probability 1/6."""
        policy = make_intervention("blockreactions", model, 0.1, rng)
        kept = np.array([policy()[1][UNPROTECTED] > 0 for _ in range(3000)])
        assert kept.mean() == pytest.approx(1.0 / 6.0, abs=0.02)

    def test_k7_perturbation_bounds(self, model, rng):
        par = 0.05
        policy = make_intervention("blockreactions", model, par, rng)
        values = np.array([policy()[1][6] for _ in range(500)])
        assert values.min() >= max(THETA_OBS[6] - par, 0.0)
        assert values.max() <= THETA_OBS[6] + par
        assert values.std() > 0

    def test_k7_clipped_at_zero(self, model, rng):
        policy = make_intervention("blockreactions", model, 1.0, rng)
        values = np.array([policy()[1][6] for _ in range(500)])
        assert values.min() == 0.0

    def test_zero_par_keeps_k7(self, model, rng):
        policy = make_intervention("blockreactions", model, 0.0, rng)
        _, theta = policy()
        assert theta[6] == THETA_OBS[6]

    def test_baseline_not_mutated(self, model, rng):
        policy = make_intervention("blockreactions", model, 0.1, rng)
        for _ in range(20):
            policy()
        np.testing.assert_array_equal(policy.theta_obs, THETA_OBS)
        np.testing.assert_array_equal(model.get_parameters(), THETA_OBS)


class TestInitialBlockReactions:
    def test_combines_both(self, model, rng):
        policy = make_intervention("initial_blockreactions", model, 0.1, rng)
        initial, theta = policy()
        np.testing.assert_array_equal(initial[[1, 2, 5, 6, 7, 8]], 0.0)
        assert not np.array_equal(initial, INITIAL_OBS)
        assert theta[3] == THETA_OBS[3]

    def test_draw_order(self, model):
        """Rate blocking, then the k7 shift, then the three initial values."""
        par = 0.1
        policy = make_intervention("initial_blockreactions", model, par, np.random.default_rng(7))
        initial, theta = policy()

        ref = np.random.default_rng(7)
        keep = ref.binomial(1, 1.0 / 6.0, size=6)
        shift = ref.uniform(-par, par)
        u1, u4, u5 = ref.uniform(0.0, 10.0), ref.uniform(0.0, 10.0), ref.uniform(0.0, 10.0)

        expected_theta = THETA_OBS.copy()
        expected_theta[UNPROTECTED] *= keep
        expected_theta[6] = max(THETA_OBS[6] + shift, 0.0)
        np.testing.assert_array_equal(theta, expected_theta)
        np.testing.assert_array_equal(initial, [u1, 0, 0, u4, u5, 0, 0, 0, 0])

    def test_seeded_reproducible(self, model):
        a = make_intervention("initial_blockreactions", model, 0.1, np.random.default_rng(3))
        b = make_intervention("initial_blockreactions", model, 0.1, np.random.default_rng(3))
        for _ in range(5):
            ia, ta = a()
            ib, tb = b()
            np.testing.assert_array_equal(ia, ib)
            np.testing.assert_array_equal(ta, tb)

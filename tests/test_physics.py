import math

import pytest

from impact_engine import physics as ph


class TestDensityAndMass:

    def test_density_tiers(self):
        assert ph.density_for(50) == 3000
        assert ph.density_for(100) == 3000
        assert ph.density_for(500) == 2600
        assert ph.density_for(5000) == 2000

    def test_mass_of_sphere(self):
        assert ph.impactor_mass(10) == pytest.approx(4 / 3 * math.pi * 5 ** 3 * 3000)

    def test_mass_never_drops_across_tier_boundaries(self):
        ds = [99, 100, 100.5, 101, 104, 106, 999, 1000, 1001, 1050, 1100]
        masses = [ph.impactor_mass(d) for d in ds]
        assert all(a <= b for a, b in zip(masses, masses[1:]))


class TestEnergy:

    def test_small_rock(self):
        # 7.5 m stony body at 12 km/s, ~0.0114 MT
        assert 0.0113 < ph.estimate_energy(7.5, 12) < 0.0115

    def test_clamped_high(self):
        assert ph.estimate_energy(600, 20) == ph.ENERGY_MAX_MT

    def test_clamped_low(self):
        assert ph.estimate_energy(0, 20) == ph.ENERGY_MIN_MT
        assert ph.estimate_energy(10, 0) == ph.ENERGY_MIN_MT
        assert ph.estimate_energy(-5, -5) == ph.ENERGY_MIN_MT

    def test_monotone_in_diameter(self):
        ds = [1, 20, 50, 99, 100, 101, 104, 105, 250, 500, 999, 1000, 1001, 1050, 1100, 3000]
        es = [ph.estimate_energy(d, 5) for d in ds]
        assert all(a <= b for a, b in zip(es, es[1:]))

    def test_nan_falls_back(self):
        e = ph.estimate_energy(float("nan"), 20)
        assert e == ph.fallback_energy(float("nan"), 20)
        assert ph.ENERGY_MIN_MT <= e <= ph.ENERGY_MAX_MT

    @pytest.mark.parametrize("d,v", [(600, 1e200), (1e150, 20), (1e150, 1e200)])
    def test_huge_finite_inputs_saturate(self, d, v):
        assert ph.estimate_energy(d, v) == ph.ENERGY_MAX_MT
        assert ph.fallback_energy(d, v) == ph.ENERGY_MAX_MT


class TestCrater:

    def test_simple_crater(self):
        d, depth = ph.estimate_crater(1.0)
        assert d == pytest.approx(400.0)
        assert depth == pytest.approx(100.0)

    def test_complex_crater_is_shallow(self):
        d, depth = ph.estimate_crater(10_000)
        assert 7_000 < d < 8_500
        assert depth == pytest.approx(min(d * 0.1, 2_000))

    def test_continuous_at_transition(self):
        below, _ = ph.estimate_crater(ph.TRANSITION_MT * 0.999)
        above, _ = ph.estimate_crater(ph.TRANSITION_MT * 1.001)
        assert below == pytest.approx(ph.TRANSITION_M, rel=1e-2)
        assert above == pytest.approx(ph.TRANSITION_M, rel=1e-2)
        assert above >= below

    @pytest.mark.parametrize("energy", [0.001, 0.5, 10, 500, 2000, 10_000])
    def test_bounds_and_depth_below_diameter(self, energy):
        d, depth = ph.estimate_crater(energy)
        assert ph.CRATER_D_MIN <= d <= ph.CRATER_D_MAX
        assert ph.CRATER_DEPTH_MIN <= depth <= ph.CRATER_DEPTH_MAX
        assert depth < d

    def test_nan_falls_back(self):
        d, depth = ph.estimate_crater(float("nan"))
        assert (d, depth) == ph.fallback_crater(float("nan"))
        assert depth < d


class TestAffectedRadius:

    def test_thermal_term_dominates(self):
        r = ph.estimate_affected_radius(10_000)
        assert r == pytest.approx(10_000 ** 0.33 * ph.BLAST_SCALE_KM * ph.THERMAL_MULT)

    def test_bounds(self):
        assert ph.estimate_affected_radius(0.001) == ph.RADIUS_MIN_KM
        assert ph.estimate_affected_radius(1e12) == ph.RADIUS_MAX_KM

    def test_nan_falls_back(self):
        r = ph.estimate_affected_radius(float("nan"))
        assert ph.RADIUS_MIN_KM <= r <= ph.FALLBACK_RADIUS_MAX_KM

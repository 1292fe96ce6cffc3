import pytest

from impact_engine.risk import classify_risk, energy_points, risk_score, size_points, thresholds

from conftest import make_asteroid

NAMES = ["", "a", "TestRock", "SafeRock", "Apophis", "Bennu", "(2024 YR4)", "433 Eros (A898 PA)"]


class TestBands:

    @pytest.mark.parametrize("energy,lo,hi", [
        (5000, 80, 100), (500, 50, 80), (50, 20, 50), (1, 0, 20),
    ])
    def test_energy_band_ranges(self, energy, lo, hi):
        for jitter in (0.0, 0.5, 0.99):
            assert lo <= energy_points(energy, jitter) <= hi

    def test_size_points(self):
        assert size_points(1500) > size_points(700) > size_points(100) == 0

    @pytest.mark.parametrize("name", NAMES)
    def test_thresholds_are_ordered(self, name):
        low, medium, high = thresholds(name)
        assert 30 <= low < 40 <= 60 <= medium < 70 <= 100 <= high < 120


class TestClassifyRisk:

    def test_examples(self, test_rock, safe_rock):
        assert classify_risk(0.12, 10_000, test_rock) in ("HIGH", "CRITICAL")
        assert classify_risk(0.001, 0.0114, safe_rock) == "LOW"

    @pytest.mark.parametrize("name", NAMES)
    def test_extremes(self, name):
        a = make_asteroid(name=name)
        assert classify_risk(0.5, 10_000, a) == "CRITICAL"
        quiet = make_asteroid(name=name, isHazardous=False, diameter={"min": 1, "max": 2})
        assert classify_risk(0.001, 0.001, quiet) == "LOW"

    def test_reproducible(self, test_rock):
        assert classify_risk(0.03, 50, test_rock) == classify_risk(0.03, 50, test_rock)

    @pytest.mark.parametrize("name", NAMES)
    def test_score_grows_with_probability(self, name):
        a = make_asteroid(name=name)
        assert risk_score(0.2, 50, a) > risk_score(0.01, 50, a)

    def test_hazard_flag_adds_points(self):
        haz = make_asteroid(name="Bennu")
        safe = make_asteroid(name="Bennu", isHazardous=False)
        assert risk_score(0.01, 5, haz) > risk_score(0.01, 5, safe)

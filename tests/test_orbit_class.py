import pytest

from impact_engine.orbit_class import (
    classify_orbit, determine_orbit_class, estimate_from_approach, extract_orbital_elements,
    is_earth_crossing, risk_from_class,
)
from impact_engine.schemas import OrbitalElements


class TestClassifyOrbit:

    @pytest.mark.parametrize("a,e,i,expected", [
        (1.5, 0.5, 5, "Apollo"),
        (0.9, 0.2, 5, "Aten"),
        (1.2, 0.1, 5, "Amor"),
        (0.7, 0.1, 5, "Atira"),
        (2.7, 0.1, 10, "Main Belt"),
        (5.2, 0.05, 10, "Trojan"),
        (12.0, 0.2, 10, "Centaur"),
        (44.0, 0.1, 3, "Trans-Neptunian"),
    ])
    def test_classes(self, a, e, i, expected):
        r = classify_orbit(OrbitalElements(semi_major_axis=a, eccentricity=e, inclination=i))
        assert r.orbit_class == expected
        assert r.method == "calculation"

    def test_earth_crossers_are_high_risk(self):
        r = classify_orbit(OrbitalElements(semi_major_axis=1.5, eccentricity=0.5, inclination=5))
        assert r.risk_level == "High"

    def test_zero_eccentricity_is_valid(self):
        r = classify_orbit(OrbitalElements(semi_major_axis=2.5, eccentricity=0.0, inclination=5))
        assert r.orbit_class == "Main Belt"

    def test_missing_elements(self):
        assert classify_orbit(OrbitalElements(semi_major_axis=1.2)).orbit_class == "Unknown"
        r = classify_orbit(OrbitalElements(), is_hazardous=True)
        assert (r.orbit_class, r.method, r.risk_level) == ("Potentially Hazardous", "fallback", "High")


class TestHelpers:

    @pytest.mark.parametrize("cls,expected", [
        ("Apollo", True), ("APO", True), ("aten", True), ("ATE", True),
        ("Amor", False), ("Atira", False), ("Main Belt", False), (None, False), ("", False),
    ])
    def test_is_earth_crossing(self, cls, expected):
        assert is_earth_crossing(cls) is expected

    @pytest.mark.parametrize("cls,expected", [
        ("APO", "High"), ("Amor", "Medium"), ("ATI", "Medium"),
        ("Potentially Hazardous", "Medium"), ("Main Belt", "Low"), (None, "Low"),
    ])
    def test_risk_from_class(self, cls, expected):
        assert risk_from_class(cls) == expected

    def test_extract_elements(self, sample_neo):
        el = extract_orbital_elements(sample_neo)
        assert el.semi_major_axis == pytest.approx(1.52)
        assert el.eccentricity == pytest.approx(0.45)
        assert el.inclination == pytest.approx(12.4)
        assert el.mean_anomaly is None


class TestDetermineOrbitClass:

    def test_jpl_wins(self, sample_neo):
        r = determine_orbit_class(sample_neo, {"object": {"class": "ATE", "class_name": "Aten"}})
        assert (r.orbit_class, r.description, r.method, r.confidence) == ("ATE", "Aten", "api", 95)

    def test_neows_object_form(self, sample_neo):
        r = determine_orbit_class(sample_neo)
        assert r.orbit_class == "APO"
        assert r.method == "api"
        assert r.risk_level == "High"

    def test_neows_string_form(self, sample_neo):
        sample_neo["orbital_data"]["orbit_class"] = "Amor"
        r = determine_orbit_class(sample_neo)
        assert (r.orbit_class, r.description) == ("Amor", "NASA classified as Amor")

    def test_from_elements(self, sample_neo):
        del sample_neo["orbital_data"]["orbit_class"]
        assert determine_orbit_class(sample_neo).orbit_class == "Apollo"

    def test_inferred_from_approach(self):
        neo = {
            "name": "nameless",
            "close_approach_data": [{
                "miss_distance": {"astronomical": "0.02"},
                "relative_velocity": {"kilometers_per_second": "20"},
            }],
        }
        r = estimate_from_approach(neo)
        assert r.orbit_class == "Amor"
        assert r.method == "calculation"

    def test_nothing_known(self):
        assert determine_orbit_class({}).orbit_class == "Unknown"
        assert determine_orbit_class({"is_potentially_hazardous_asteroid": True}).orbit_class == \
            "Potentially Hazardous"

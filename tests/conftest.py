import pytest

from impact_engine.schemas import AsteroidData


def make_asteroid(**overrides) -> AsteroidData:
    data = {
        "name": "TestRock",
        "diameter": {"min": 500, "max": 700},
        "velocity": 20,
        "missDistance": 0.0002,
        "isHazardous": True,
        "approachDate": "2025-06-01",
    }
    data.update(overrides)
    return AsteroidData.model_validate(data)


@pytest.fixture
def test_rock() -> AsteroidData:
    return make_asteroid()


@pytest.fixture
def safe_rock() -> AsteroidData:
    return make_asteroid(name="SafeRock", diameter={"min": 5, "max": 10}, velocity=12,
                         missDistance=2.5, isHazardous=False)


@pytest.fixture
def sample_neo() -> dict:
    """Trimmed NeoWs /neo/{id} document."""
    return {
        "id": "3542519",
        "name": "(2010 PK9)",
        "is_potentially_hazardous_asteroid": True,
        "estimated_diameter": {
            "meters": {"estimated_diameter_min": 120.5, "estimated_diameter_max": 269.4},
        },
        "close_approach_data": [
            {
                "close_approach_date": "2025-07-04",
                "relative_velocity": {"kilometers_per_second": "18.25"},
                "miss_distance": {"astronomical": "0.0213"},
                "orbiting_body": "Earth",
            },
        ],
        "orbital_data": {
            "inclination": "12.4",
            "semi_major_axis": "1.52",
            "eccentricity": "0.45",
            "orbit_class": {
                "orbit_class_type": "APO",
                "orbit_class_description": "Near-Earth asteroid orbits which cross the Earth's orbit",
            },
        },
    }

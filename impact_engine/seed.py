"""
Name-keyed deterministic jitter.

Every estimator that wants "random looking" variation draws it from here so
the same object always renders the same numbers. Not meant for statistics.
"""

from typing import Tuple

# salts handed out to the estimators; keep them distinct per use
RISK_ENERGY = 7
RISK_HAZARD = 13
RISK_FACTOR = 17
RISK_LOW = 19
RISK_MEDIUM = 23
RISK_HIGH = 29
LOCATION_LAT = 31
LOCATION_LON = 37
CONFIDENCE = 41
IMPACT_TIME = 43
FALLBACK = 47


def name_hash(name: str) -> int:
    """Sum of character codes; empty or missing names hash to 0."""
    return sum(ord(c) for c in (name or ""))


def seed(name: str, salt: int) -> float:
    """Stable value in [0, 1) for (name, salt)."""
    return ((name_hash(name) * salt) % 100) / 100


def seeds(name: str, *salts: int) -> Tuple[float, ...]:
    h = name_hash(name)
    return tuple(((h * s) % 100) / 100 for s in salts)

"""
Four-level risk label.

Every band and threshold carries name-seeded jitter so a list of objects does
not look mechanically banded, while any one object always gets the same label.
"""

from . import seed as sd
from .schemas import AsteroidData, RiskLevel
from .utils import finite_or


def energy_points(energy_mt: float, jitter: float) -> float:
    if energy_mt > 1000:
        return 80 + jitter * 20
    if energy_mt > 100:
        return 50 + jitter * 30
    if energy_mt > 10:
        return 20 + jitter * 30
    return jitter * 20


def size_points(avg_diameter_m: float) -> float:
    if avg_diameter_m > 1000:
        return 20.0
    if avg_diameter_m > 500:
        return 10.0
    return 0.0


def risk_score(probability: float, energy_mt: float, a: AsteroidData) -> float:
    e_j, h_j, f_j = sd.seeds(a.name, sd.RISK_ENERGY, sd.RISK_HAZARD, sd.RISK_FACTOR)
    score = finite_or(probability, 0.0) * 1000
    score += energy_points(finite_or(energy_mt, 0.0), e_j)
    if a.is_hazardous:
        score += 10 + h_j * 10
    score += size_points(finite_or(a.avg_diameter, 0.0))
    return score * (0.8 + f_j * 0.4)


def thresholds(name: str) -> tuple[float, float, float]:
    lo, med, hi = sd.seeds(name, sd.RISK_LOW, sd.RISK_MEDIUM, sd.RISK_HIGH)
    return 30 + lo * 10, 60 + med * 10, 100 + hi * 20


def classify_risk(probability: float, energy_mt: float, a: AsteroidData) -> RiskLevel:
    score = risk_score(probability, energy_mt, a)
    low, medium, high = thresholds(a.name)
    if score > high:
        return "CRITICAL"
    if score > medium:
        return "HIGH"
    if score > low:
        return "MEDIUM"
    return "LOW"

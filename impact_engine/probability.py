"""
Impact probability and confidence.

The distance table decays exponentially inside each bucket and every bucket
starts at or below where the previous one ended, so probability never grows
with miss distance. Hazardous objects are held at a per-bucket floor.
"""

import logging
import math

from . import seed as sd
from .orbit_class import is_earth_crossing, risk_from_class
from .schemas import AsteroidData
from .utils import AU_KM, clamp, finite, finite_or

log = logging.getLogger(__name__)

P_MIN, P_MAX = 0.001, 0.5
FALLBACK_P_MAX = 0.3

# (upper bound km, probability at bucket start, e-folding scale km, hazardous floor)
DISTANCE_BUCKETS = [
    (1_000, 0.9, 5_000, 0.05),
    (5_000, 0.7, 4_000, 0.02),
    (20_000, 0.25, 10_000, 0.01),
    (50_000, 0.05, 20_000, 0.005),
    (100_000, 0.01, 30_000, 0.002),
    (500_000, 0.0018, 150_000, 0.001),
]
BEYOND_FLOOR = 0.001

HAZARD_FACTOR = 1.5
SAFE_FACTOR = 0.5


def distance_probability(miss_km: float) -> tuple[float, float]:
    """(base probability, hazardous floor) for a miss distance in km."""
    start = 0.0
    for upper, p0, scale, floor in DISTANCE_BUCKETS:
        if miss_km < upper:
            return p0 * math.exp(-(max(miss_km, 0.0) - start) / scale), floor
        start = upper
    return 0.0, BEYOND_FLOOR


def velocity_factor(velocity_kms: float) -> float:
    # faster encounters leave less time for gravitational deflection
    return clamp(velocity_kms / 15.0, 0.1, 2.0)


def size_factor(avg_diameter_m: float) -> float:
    return clamp(avg_diameter_m / 300.0, 0.5, 3.0)


def orbit_factor(orbit_class) -> float:
    if is_earth_crossing(orbit_class):
        return 1.3
    if risk_from_class(orbit_class) == "Medium":
        return 1.1
    return 1.0


def _probability(a: AsteroidData) -> float:
    miss_km = finite(a.miss_distance, "miss_distance") * AU_KM
    velocity = finite(a.velocity, "velocity")
    avg = finite(a.avg_diameter, "diameter")

    base, floor = distance_probability(miss_km)
    p = (base
         * velocity_factor(velocity)
         * size_factor(avg)
         * (HAZARD_FACTOR if a.is_hazardous else SAFE_FACTOR)
         * orbit_factor(a.orbit_class))
    if a.is_hazardous:
        p = max(p, floor)
    return clamp(finite(p, "probability"), P_MIN, P_MAX)


def fallback_probability(a: AsteroidData) -> float:
    """Bucketed estimate with name-seeded jitter, tolerant of any numeric garbage."""
    miss_au = finite_or(a.miss_distance, 1.0)
    avg = finite_or((finite_or(a.diameter.min, 0.0) + finite_or(a.diameter.max, 0.0)) / 2, 50.0)

    if miss_au < 0.001:
        base = 0.05
    elif miss_au < 0.01:
        base = 0.01
    elif miss_au < 0.05:
        base = 0.002
    else:
        base = 0.0005

    if avg > 1000:
        base *= 2.0
    elif avg > 100:
        base *= 1.5

    base *= 0.8 + sd.seed(a.name, sd.FALLBACK) * 0.4
    if a.is_hazardous:
        base += 0.005
    return clamp(base, P_MIN, FALLBACK_P_MAX)


def estimate_probability(a: AsteroidData) -> float:
    try:
        return _probability(a)
    except Exception as e:
        log.warning("probability fallback for %r: %s", a.name, e)
        return fallback_probability(a)


def estimate_confidence(probability: float, a: AsteroidData) -> float:
    """0-100 score; better constrained objects and larger probabilities read as more certain."""
    conf = 40.0 + min(probability * 100.0, 30.0)
    dmin, dmax = finite_or(a.diameter.min, 0.0), finite_or(a.diameter.max, 0.0)
    if dmax > 0:
        spread = clamp((dmax - dmin) / dmax, 0.0, 1.0)
        conf += 10.0 * (1.0 - spread)
    if a.is_hazardous:
        conf += 5.0  # PHAs get follow-up astrometry
    if a.orbit_class:
        conf += 5.0
    if finite_or(a.miss_distance, 1.0) < 0.05:
        conf += 5.0
    conf += (sd.seed(a.name, sd.CONFIDENCE) - 0.5) * 10.0
    return clamp(conf, 0.0, 95.0)

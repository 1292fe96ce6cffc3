"""
NeoWs -> AsteroidData.

NASA's NeoWs objects carry the diameter range, a list of close approaches and
(for /neo/{id}) orbital data. We keep the first close approach and fall back to
defaults when a piece is missing. Without a NeoWs orbit class the class is
derived from the orbital elements.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from impact_engine.orbit_class import determine_orbit_class
from impact_engine.schemas import AsteroidData, Diameter

DEFAULT_DIAMETER_M = 10.0
DEFAULT_VELOCITY_KMS = 15.0
DEFAULT_MISS_AU = 0.1


def _to_float(x: Any) -> Optional[float]:
    try:
        return None if x is None else float(x)
    except (TypeError, ValueError):
        return None


def _orbit_class(orbital: Dict[str, Any]) -> Optional[str]:
    oc = orbital.get("orbit_class")
    if isinstance(oc, dict):
        return oc.get("orbit_class_type")
    return oc or None


def _known_orbit_class(obj: Dict[str, Any], orbital: Dict[str, Any]) -> Optional[str]:
    """NeoWs class when present, otherwise one derived from the elements or the approach."""
    oc = _orbit_class(orbital)
    if oc:
        return oc
    derived = determine_orbit_class(obj)
    # fallback labels carry no orbit information
    return None if derived.method == "fallback" else derived.orbit_class


def neo_to_asteroid(obj: Dict[str, Any]) -> AsteroidData:
    meters = (obj.get("estimated_diameter") or {}).get("meters") or {}
    dmin = _to_float(meters.get("estimated_diameter_min"))
    dmax = _to_float(meters.get("estimated_diameter_max"))
    if dmin is None or dmax is None:
        dmin = dmax = DEFAULT_DIAMETER_M

    approaches = obj.get("close_approach_data") or []
    ca = approaches[0] if approaches else {}
    velocity = _to_float((ca.get("relative_velocity") or {}).get("kilometers_per_second"))
    miss = _to_float((ca.get("miss_distance") or {}).get("astronomical"))

    orbital = obj.get("orbital_data") or {}
    return AsteroidData(
        name=obj.get("name") or "Unknown Asteroid",
        diameter=Diameter(min=dmin, max=dmax),
        velocity=DEFAULT_VELOCITY_KMS if velocity is None else velocity,
        miss_distance=DEFAULT_MISS_AU if miss is None else miss,
        is_hazardous=bool(obj.get("is_potentially_hazardous_asteroid", False)),
        approach_date=ca.get("close_approach_date") or date.today().isoformat(),
        inclination=_to_float(orbital.get("inclination")),
        orbit_class=_known_orbit_class(obj, orbital),
    )


def feed_to_asteroids(feed: Dict[str, Any]) -> List[AsteroidData]:
    """Flatten a /feed response ({date: [neo, ...]}) in date order."""
    by_date = feed.get("near_earth_objects") or {}
    out = []
    for day in sorted(by_date):
        for obj in by_date[day]:
            out.append(neo_to_asteroid(obj))
    return out

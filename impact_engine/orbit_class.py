"""
Orbit class determination.

Order of preference: JPL class -> NeoWs orbit_class -> Keplerian elements ->
elements inferred from the close approach -> fallback label.
"""

import logging
from typing import Any, Dict, Optional

from .schemas import OrbitalElements, OrbitClassification

log = logging.getLogger(__name__)

EARTH_PERIHELION_AU = 0.983
EARTH_APHELION_AU = 1.017

_EARTH_CROSSING = ("APOLLO", "ATEN", "APO", "ATE")
_HIGH_RISK = ("APOLLO", "ATEN", "APO", "ATE")
_MEDIUM_RISK = ("AMOR", "ATIRA", "AMO", "ATI", "POTENTIALLY HAZARDOUS")


def _norm(orbit_class: Optional[str]) -> str:
    if not orbit_class or not isinstance(orbit_class, str):
        return ""
    return orbit_class.strip().upper()


def is_earth_crossing(orbit_class: Optional[str]) -> bool:
    """Apollo/Aten (or their MPC codes APO/ATE)."""
    c = _norm(orbit_class)
    return bool(c) and c.split()[0] in _EARTH_CROSSING


def risk_from_class(orbit_class: Optional[str]) -> str:
    c = _norm(orbit_class)
    if not c:
        return "Low"
    if c.split()[0] in _HIGH_RISK:
        return "High"
    if any(c == k or c.startswith(k) for k in _MEDIUM_RISK):
        return "Medium"
    return "Low"


def _result(cls: str, desc: str, conf: float, risk: str) -> OrbitClassification:
    return OrbitClassification(orbit_class=cls, description=desc, confidence=conf,
                               method="calculation", risk_level=risk)


def fallback_classification(is_hazardous: Optional[bool] = None) -> OrbitClassification:
    if is_hazardous:
        return OrbitClassification(
            orbit_class="Potentially Hazardous",
            description="Potentially hazardous asteroid with insufficient orbital data for precise classification.",
            confidence=50, method="fallback", risk_level="High",
        )
    return OrbitClassification(
        orbit_class="Unknown",
        description="Orbit class could not be determined due to insufficient orbital data.",
        confidence=0, method="fallback", risk_level="Low",
    )


def classify_orbit(elements: OrbitalElements, is_hazardous: Optional[bool] = None) -> OrbitClassification:
    a, e, i = elements.semi_major_axis, elements.eccentricity, elements.inclination
    if a is None or e is None or i is None:
        return fallback_classification(is_hazardous)

    q = elements.perihelion_distance if elements.perihelion_distance is not None else a * (1 - e)
    Q = elements.aphelion_distance if elements.aphelion_distance is not None else a * (1 + e)

    if Q >= EARTH_PERIHELION_AU and q <= EARTH_APHELION_AU:
        if a > 1.0:
            return _result("Apollo", "Earth-crossing asteroid with semi-major axis > 1 AU.", 85, "High")
        return _result("Aten", "Earth-crossing asteroid with semi-major axis < 1 AU.", 85, "High")
    if EARTH_APHELION_AU < q <= 1.3:
        return _result("Amor", "Near-Earth asteroid that approaches Earth's orbit but does not cross it.", 80, "Medium")
    if Q < EARTH_PERIHELION_AU:
        return _result("Atira", "Orbit entirely within Earth's orbit (Interior Earth Object).", 85, "Medium")
    if 2.1 <= a <= 3.3 and e < 0.3 and i < 30:
        return _result("Main Belt", "Asteroid in the main belt between Mars and Jupiter.", 90, "Low")
    if 5.1 <= a <= 5.4 and e < 0.1 and i < 30:
        return _result("Trojan", "Shares Jupiter's orbit near a stable Lagrange point.", 85, "Low")
    if 5.4 <= a <= 30.1:
        return _result("Centaur", "Small body orbiting between Jupiter and Neptune.", 80, "Low")
    if a > 30.1:
        return _result("Trans-Neptunian", "Orbit beyond Neptune, including Kuiper Belt objects.", 85, "Low")
    if e > 0.7:
        if a > 20:
            return _result("Long Period", "Comet-like orbit with period > 200 years.", 75, "Low")
        return _result("Short Period", "Comet-like orbit with period < 200 years.", 75, "Low")
    if i > 60:
        return _result("High Inclination", "Highly inclined orbit, possibly captured or perturbed.", 70, "Medium")
    if a < 1.5:
        return _result("Inner Solar System", "Inner solar system object with unusual elements.", 60, "Medium")
    if a < 5.5:
        return _result("Outer Asteroid Belt", "Asteroid in the outer regions of the belt.", 65, "Low")
    return _result("Outer Solar System", "Outer solar system object with unusual elements.", 60, "Low")


def _to_float(x: Any) -> Optional[float]:
    try:
        return None if x is None else float(x)
    except (TypeError, ValueError):
        return None


def extract_orbital_elements(neo: Dict[str, Any]) -> OrbitalElements:
    od = neo.get("orbital_data") or {}
    return OrbitalElements(
        semi_major_axis=_to_float(od.get("semi_major_axis")),
        eccentricity=_to_float(od.get("eccentricity")),
        inclination=_to_float(od.get("inclination")),
        perihelion_distance=_to_float(od.get("perihelion_distance")),
        aphelion_distance=_to_float(od.get("aphelion_distance")),
        orbital_period=_to_float(od.get("orbital_period")),
        argument_of_perihelion=_to_float(od.get("perihelion_argument") or od.get("argument_of_perihelion")),
        longitude_of_ascending_node=_to_float(od.get("ascending_node_longitude")
                                              or od.get("longitude_of_ascending_node")),
        mean_anomaly=_to_float(od.get("mean_anomaly")),
    )


def estimate_from_approach(neo: Dict[str, Any]) -> OrbitClassification:
    """Fill missing elements from the first close approach, then classify."""
    hazardous = bool(neo.get("is_potentially_hazardous_asteroid"))
    elements = extract_orbital_elements(neo)
    approaches = neo.get("close_approach_data") or []
    if approaches:
        ap = approaches[0]
        miss = _to_float((ap.get("miss_distance") or {}).get("astronomical")) or 0.0
        vel = _to_float((ap.get("relative_velocity") or {}).get("kilometers_per_second")) or 0.0
        if elements.semi_major_axis is None and vel > 0:
            # rough: faster encounters tend to come from tighter orbits
            elements.semi_major_axis = max(1.0, min(5.0, 30 / vel))
        if miss < 0.1:
            if elements.eccentricity is None:
                elements.eccentricity = 0.3
            if elements.inclination is None:
                elements.inclination = 15.0
    return classify_orbit(elements, hazardous)


def determine_orbit_class(neo: Dict[str, Any], jpl: Optional[Dict[str, Any]] = None) -> OrbitClassification:
    jpl = jpl or {}
    jpl_obj, jpl_orbit = jpl.get("object") or {}, jpl.get("orbit") or {}
    jpl_class = jpl_obj.get("class") or jpl_orbit.get("class")
    if jpl_class:
        return OrbitClassification(
            orbit_class=jpl_class,
            description=jpl_obj.get("class_name") or jpl_orbit.get("class_name") or f"JPL classified as {jpl_class}",
            confidence=95, method="api", risk_level=risk_from_class(jpl_class),
        )

    raw = (neo.get("orbital_data") or {}).get("orbit_class")
    if raw:
        if isinstance(raw, dict):
            cls = raw.get("orbit_class_type") or "Unknown"
            desc = raw.get("orbit_class_description") or f"NASA classified as {cls}"
        else:
            cls, desc = str(raw), f"NASA classified as {raw}"
        return OrbitClassification(orbit_class=cls, description=desc, confidence=95,
                                   method="api", risk_level=risk_from_class(cls))

    try:
        return estimate_from_approach(neo)
    except Exception as e:
        log.warning("orbit class estimate failed for %s: %s", neo.get("name"), e)
        return fallback_classification(neo.get("is_potentially_hazardous_asteroid"))

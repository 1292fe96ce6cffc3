"""
Top-level impact prediction.

predict()   -> nominal ImpactPrediction
scenarios() -> [nominal, worst_case, best_case]

Neither raises for numeric garbage in the input: each estimator has its own
seeded fallback and the whole pipeline has a self-contained one on top.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, List, Mapping, Union

from . import seed as sd
from .location import estimate_location, fallback_coordinates, locate
from .physics import (
    CRATER_D_MIN, CRATER_DEPTH_MIN, ENERGY_MAX_MT, ENERGY_MIN_MT, RADIUS_MAX_KM, RADIUS_MIN_KM,
    clamp_crater, estimate_affected_radius, estimate_crater, estimate_energy,
    fallback_affected_radius, fallback_crater, fallback_energy,
)
from .probability import P_MAX, P_MIN, estimate_confidence, estimate_probability, fallback_probability
from .risk import classify_risk
from .schemas import AsteroidData, CraterSize, ImpactPrediction, Scenario
from .utils import clamp, finite_or, iso_z, parse_date

log = logging.getLogger(__name__)

AsteroidLike = Union[AsteroidData, Mapping[str, Any]]

# multiplier, and the bound the result is clamped against
SCENARIO_ADJUSTMENTS = {
    "worst_case": {
        "probability": 1.8, "energy": 1.4, "radius": 1.5,
        "crater_diameter": 1.3, "crater_depth": 1.2, "confidence": 0.85,
    },
    "best_case": {
        "probability": 0.6, "energy": 0.7, "radius": 0.8,
        "crater_diameter": 0.9, "crater_depth": 0.8, "confidence": 1.1,
    },
}
WORST_CONFIDENCE_FLOOR = 20.0
BEST_CONFIDENCE_CAP = 95.0
IMPACT_WINDOW_HOURS = 24.0


def _coerce(asteroid: AsteroidLike) -> AsteroidData:
    if isinstance(asteroid, AsteroidData):
        return asteroid
    return AsteroidData.model_validate(asteroid)


def impact_time(a: AsteroidData) -> str:
    """Approach date shifted by a name-seeded offset within +/-24 h."""
    offset = (sd.seed(a.name, sd.IMPACT_TIME) * 2 - 1) * IMPACT_WINDOW_HOURS
    try:
        return iso_z(parse_date(a.approach_date) + timedelta(hours=offset))
    except (ValueError, OverflowError) as e:
        log.warning("unparseable approach date %r for %r: %s", a.approach_date, a.name, e)
    today = datetime.now(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    return iso_z(today + timedelta(hours=offset))


def _nominal(a: AsteroidData) -> ImpactPrediction:
    probability = estimate_probability(a)
    energy = estimate_energy(a.avg_diameter, a.velocity)
    crater_d, crater_depth = estimate_crater(energy)
    radius = estimate_affected_radius(energy)
    return ImpactPrediction(
        impact_probability=probability,
        impact_location=estimate_location(a),
        impact_time=impact_time(a),
        impact_energy=energy,
        crater_size=CraterSize(diameter=crater_d, depth=crater_depth),
        affected_radius=radius,
        confidence=estimate_confidence(probability, a),
        risk_level=classify_risk(probability, energy, a),
        scenario="nominal",
    )


def fallback_prediction(a: AsteroidData, scenario: Scenario = "nominal") -> ImpactPrediction:
    """Seed-driven prediction that only uses sanitized numbers."""
    avg = (finite_or(a.diameter.min, 0.0) + finite_or(a.diameter.max, 0.0)) / 2
    probability = fallback_probability(a)
    energy = fallback_energy(avg, a.velocity)
    crater_d, crater_depth = fallback_crater(energy)
    return ImpactPrediction(
        impact_probability=probability,
        impact_location=locate(*fallback_coordinates(a)),
        impact_time=impact_time(a),
        impact_energy=energy,
        crater_size=CraterSize(diameter=crater_d, depth=crater_depth),
        affected_radius=fallback_affected_radius(energy),
        confidence=clamp(50 + (sd.seed(a.name, sd.CONFIDENCE) - 0.5) * 20, 0.0, BEST_CONFIDENCE_CAP),
        risk_level=classify_risk(probability, energy, a),
        scenario=scenario,
    )


def predict(asteroid: AsteroidLike) -> ImpactPrediction:
    a = _coerce(asteroid)
    try:
        return _nominal(a)
    except Exception as e:
        log.warning("prediction fallback for %r: %s", a.name, e)
        return fallback_prediction(a)


def adjust_scenario(base: ImpactPrediction, a: AsteroidData, scenario: Scenario) -> ImpactPrediction:
    """Scale the nominal numbers for a scenario and re-derive its risk label."""
    if scenario == "nominal":
        return base.model_copy(update={"scenario": "nominal"})

    k = SCENARIO_ADJUSTMENTS[scenario]
    if scenario == "worst_case":
        probability = min(base.impact_probability * k["probability"], P_MAX)
        energy = min(base.impact_energy * k["energy"], ENERGY_MAX_MT)
        radius = min(base.affected_radius * k["radius"], RADIUS_MAX_KM)
        confidence = clamp(base.confidence * k["confidence"], WORST_CONFIDENCE_FLOOR, 100.0)
    else:
        probability = max(base.impact_probability * k["probability"], P_MIN)
        energy = max(base.impact_energy * k["energy"], ENERGY_MIN_MT)
        radius = max(base.affected_radius * k["radius"], RADIUS_MIN_KM)
        confidence = clamp(base.confidence * k["confidence"], 0.0, BEST_CONFIDENCE_CAP)

    crater_d, crater_depth = clamp_crater(base.crater_size.diameter * k["crater_diameter"],
                                          base.crater_size.depth * k["crater_depth"])
    return base.model_copy(update={
        "impact_probability": probability,
        "impact_energy": energy,
        "affected_radius": radius,
        "crater_size": CraterSize(diameter=crater_d, depth=crater_depth),
        "confidence": confidence,
        # the nominal label would misstate a scaled scenario
        "risk_level": classify_risk(probability, energy, a),
        "scenario": scenario,
    })


def _sanitized(base: ImpactPrediction) -> ImpactPrediction:
    """base with every number forced finite and back inside its range."""
    crater_d, crater_depth = clamp_crater(finite_or(base.crater_size.diameter, CRATER_D_MIN),
                                          finite_or(base.crater_size.depth, CRATER_DEPTH_MIN))
    return base.model_copy(update={
        "impact_probability": clamp(finite_or(base.impact_probability, P_MIN), P_MIN, P_MAX),
        "impact_energy": clamp(finite_or(base.impact_energy, ENERGY_MIN_MT), ENERGY_MIN_MT, ENERGY_MAX_MT),
        "affected_radius": clamp(finite_or(base.affected_radius, RADIUS_MIN_KM), RADIUS_MIN_KM, RADIUS_MAX_KM),
        "crater_size": CraterSize(diameter=crater_d, depth=crater_depth),
        "confidence": clamp(finite_or(base.confidence, 0.0), 0.0, 100.0),
    })


def scenarios(asteroid: AsteroidLike) -> List[ImpactPrediction]:
    a = _coerce(asteroid)
    base = predict(a)
    out = [base]
    for name in ("worst_case", "best_case"):
        try:
            out.append(adjust_scenario(base, a, name))
        except Exception as e:
            log.warning("%s scenario retried on sanitized nominal for %r: %s", name, a.name, e)
            out.append(adjust_scenario(_sanitized(base), a, name))
    return out

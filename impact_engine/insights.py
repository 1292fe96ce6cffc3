"""
Offline narrative layer: analysis report and mitigation plan.

Used directly when no LLM is configured and as the fallback when the LLM call
fails. Text only; the numeric prediction is never altered here.
"""

from datetime import datetime, timezone
from typing import List, Optional

from .schemas import (
    AnalysisReport, AsteroidData, AsteroidSummary, ImpactPrediction,
    MitigationPlan, Strategy, TimelinePhase,
)
from .utils import finite_or, iso_z

LARGE_M = 1000.0
CLOSE_AU = 0.05
VERY_CLOSE_AU = 0.01


def _now() -> str:
    return iso_z(datetime.now(timezone.utc))


def size_category(avg_diameter_m: float) -> str:
    if avg_diameter_m < 100:
        return "small"
    if avg_diameter_m < LARGE_M:
        return "medium"
    return "large"


def distance_category(miss_au: float) -> str:
    if miss_au < VERY_CLOSE_AU:
        return "very close"
    if miss_au < CLOSE_AU:
        return "close"
    return "distant"


def narrative_risk(a: AsteroidData) -> str:
    avg = finite_or(a.avg_diameter, 0.0)
    miss = finite_or(a.miss_distance, 1.0)
    if a.is_hazardous and miss < VERY_CLOSE_AU and avg > LARGE_M:
        return "critical"
    if a.is_hazardous and (miss < CLOSE_AU or avg > LARGE_M):
        return "high"
    if a.is_hazardous or miss < CLOSE_AU:
        return "medium"
    return "low"


def summarize(a: AsteroidData) -> AsteroidSummary:
    avg = finite_or(a.avg_diameter, 0.0)
    miss = finite_or(a.miss_distance, 1.0)
    return AsteroidSummary(
        name=a.name or "Unknown",
        size=size_category(avg),
        avg_diameter=round(avg),
        risk_level=narrative_risk(a),
        distance=distance_category(miss),
        miss_distance_au=miss,
        velocity=finite_or(a.velocity, 0.0),
        approach_date=a.approach_date,
        orbit_class=a.orbit_class or "Unknown",
        hazardous=a.is_hazardous,
    )


def recommendations(s: AsteroidSummary) -> List[str]:
    return [
        "Enhanced tracking required" if s.distance != "distant" else "Routine monitoring",
        "Radar observations recommended" if s.size == "large" else "Optical observations adequate",
        "Priority monitoring" if s.hazardous else "Standard monitoring",
        "Coordinate with international networks",
        "Update orbital elements post-encounter",
    ]


def _prediction_lines(p: Optional[ImpactPrediction]) -> List[str]:
    if p is None:
        return []
    loc = p.impact_location
    return [
        "",
        f"IMPACT ESTIMATE ({p.scenario}):",
        f"Probability: {p.impact_probability * 100:.3f}%",
        f"Energy: {p.impact_energy:.3f} MT TNT",
        f"Crater: {p.crater_size.diameter:.0f} m wide, {p.crater_size.depth:.0f} m deep",
        f"Affected radius: {p.affected_radius:.1f} km",
        f"Illustrative location: {loc.latitude:.2f}, {loc.longitude:.2f} ({loc.country or 'Unknown'})",
        f"Model risk level: {p.risk_level} (confidence {p.confidence:.0f}%)",
    ]


def offline_analysis(a: AsteroidData, prediction: Optional[ImpactPrediction] = None) -> AnalysisReport:
    s = summarize(a)
    lines = [
        "ASTEROID ANALYSIS REPORT",
        f"Generated: {_now()}",
        "",
        "EXECUTIVE SUMMARY:",
        f"Object: {s.name}",
        f"Risk Level: {s.risk_level.upper()}",
        f"Average Diameter: {s.avg_diameter} meters ({s.size})",
        f"Approach Distance: {s.miss_distance_au:.6f} AU ({s.miss_distance_au * 149.6:.2f} million km, {s.distance})",
        f"Approach Velocity: {s.velocity:.2f} km/s",
        f"Approach Date: {s.approach_date}",
        f"Orbit Class: {s.orbit_class}",
        f"Classification: {'Potentially Hazardous' if s.hazardous else 'Non-Hazardous'}",
        *_prediction_lines(prediction),
        "",
        "MONITORING RECOMMENDATIONS:",
        *recommendations(s),
        "",
        "Figures are educational approximations, not an authoritative hazard assessment.",
    ]
    return AnalysisReport(
        analysis="\n".join(lines),
        risk_level=s.risk_level,
        recommendations=recommendations(s),
        timestamp=_now(),
    )


def offline_mitigation(a: AsteroidData, prediction: Optional[ImpactPrediction] = None) -> MitigationPlan:
    s = summarize(a)
    large = s.size == "large"
    close = s.distance != "distant"
    name = s.name
    strategies = [
        Strategy(
            category="Detection & Tracking",
            title="Enhanced Monitoring System",
            description=f"Track {name} continuously with ground and space telescopes; "
                        "use radar during close approach to refine the orbit and shape.",
            feasibility="high", timeframe="Immediate - 6 months", effectiveness="95%",
            requirements=["Ground-based telescopes", "Radar facilities", "Data processing systems",
                          "International coordination"],
            estimated_cost="$5-10M annually",
        ),
        Strategy(
            category="Kinetic Impactor",
            title="DART-Style Deflection Mission",
            description=f"Strike {name} with a high-speed spacecraft to change its velocity. "
                        "Needs years of warning.",
            feasibility="medium" if large else "high", timeframe="2-5 years",
            effectiveness="60-80%" if large else "80-95%",
            requirements=["Launch vehicle", "Spacecraft design", "Navigation systems", "Impact assessment"],
            estimated_cost="$300-500M",
        ),
        Strategy(
            category="Gravity Tractor",
            title="Gravitational Deflection",
            description=f"Hold a spacecraft near {name} so its gravity slowly pulls the object "
                        "off course. Slow but precise.",
            feasibility="medium", timeframe="5-15 years", effectiveness="70-90%",
            requirements=["Long-duration spacecraft", "Precise navigation", "Power systems",
                          "Extended mission support"],
            estimated_cost="$200-400M",
        ),
        Strategy(
            category="Nuclear Deflection",
            title="Nuclear Standoff Deflection",
            description="Detonate a device at a standoff distance to impart an impulse. "
                        "Last resort for large objects with short warning.",
            feasibility="high" if large and close else "low", timeframe="1-3 years",
            effectiveness="85-95%",
            requirements=["Nuclear device", "Launch capability", "International coordination",
                          "Safety protocols"],
            estimated_cost="$500M-1B",
        ),
        Strategy(
            category="Civil Defense",
            title="Emergency Preparedness",
            description=_civil_defense_text(prediction),
            feasibility="high", timeframe="6 months - 2 years", effectiveness="60-80%",
            requirements=["Emergency management systems", "Public communication",
                          "Infrastructure assessment", "Training programs"],
            estimated_cost="$10-50M",
        ),
    ]
    priority = "high" if s.hazardous else "medium"
    timeline = [
        TimelinePhase(phase="Immediate Assessment", duration="0-6 months",
                      description="Enhanced tracking, orbit refinement and risk assessment", priority="high"),
        TimelinePhase(phase="Mission Planning", duration="6 months - 2 years",
                      description="Design a deflection mission if needed", priority=priority),
        TimelinePhase(phase="Mission Execution", duration="1-3 years",
                      description="Launch and execute the deflection mission", priority=priority),
        TimelinePhase(phase="Monitoring & Verification", duration="1-5 years",
                      description="Confirm the trajectory change", priority="high"),
    ]
    return MitigationPlan(
        strategies=strategies,
        timeline=timeline,
        global_coordination=[
            "International Asteroid Warning Network (IAWN) coordination",
            "UN Committee on the Peaceful Uses of Outer Space (COPUOS)",
            "Space Mission Planning Advisory Group (SMPAG)",
            "NASA Planetary Defense Coordination Office (PDCO)",
            "European Space Agency (ESA) coordination",
            "International data sharing protocols",
        ],
        public_preparedness=[
            "Public education about asteroid threats",
            "Emergency response training for impact zones",
            "Early warning system development",
            "Infrastructure hardening in high-risk areas",
            "International communication protocols",
            "Community preparedness drills",
        ],
        timestamp=_now(),
    )


def _civil_defense_text(p: Optional[ImpactPrediction]) -> str:
    base = "Prepare evacuation and sheltering plans and public warning channels"
    if p is None:
        return base + " for potential impact zones."
    return f"{base} covering roughly {p.affected_radius:.0f} km around the estimated impact point."


def extract_recommendations(text: str) -> List[str]:
    """Bullet lines ('-' or '*') from free text."""
    out = []
    for line in text.splitlines():
        line = line.strip()
        if line.startswith(("-", "*")):
            item = line.lstrip("-* ").strip()
            if item:
                out.append(item)
    return out

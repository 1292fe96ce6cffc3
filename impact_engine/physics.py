"""
Energy, crater and affected-radius estimates.

Heuristic scaling laws for an educational view, not a hazard assessment.
The constants are tuned for plausible-looking numbers, not fitted to data.
"""

import logging
import math
from typing import Tuple

from .utils import MT_TNT_J, clamp, finite, finite_or

log = logging.getLogger(__name__)

ENERGY_MIN_MT, ENERGY_MAX_MT = 0.001, 10_000.0
CRATER_D_MIN, CRATER_D_MAX = 10.0, 200_000.0
CRATER_DEPTH_MIN, CRATER_DEPTH_MAX = 1.0, 5_000.0
RADIUS_MIN_KM, RADIUS_MAX_KM = 1.0, 1_000.0
FALLBACK_RADIUS_MAX_KM = 500.0
# fallback inputs are capped so the powers below stay finite
FALLBACK_D_MAX_M = 1e6
FALLBACK_V_MAX_KMS = 1e3

# density tiers, kg/m^3: (upper diameter bound m, density)
DENSITY_TIERS = [(100.0, 3000.0), (1000.0, 2600.0), (math.inf, 2000.0)]

SIMPLE_K, SIMPLE_EXP = 0.4, 0.33
COMPLEX_EXP = 0.294
TRANSITION_M = 4_000.0
# energy where the simple law reaches the transition; complex law continues from there
TRANSITION_MT = (TRANSITION_M / (SIMPLE_K * 1000.0)) ** (1 / SIMPLE_EXP)
COMPLEX_K = TRANSITION_M / 1000.0 / TRANSITION_MT ** COMPLEX_EXP

BLAST_SCALE_KM = 2.8
THERMAL_MULT = 2.3
SEISMIC_MULT = 1.5


def sphere_volume(diameter_m: float) -> float:
    return (4 / 3) * math.pi * (diameter_m / 2) ** 3


def density_for(diameter_m: float) -> float:
    for upper, rho in DENSITY_TIERS:
        if diameter_m <= upper:
            return rho
    return DENSITY_TIERS[-1][1]


def impactor_mass(diameter_m: float) -> float:
    """
    Mass in kg. Bigger bodies are assumed more porous (rubble piles), so at a
    tier boundary the mass is held at the boundary body's mass in the denser
    tier until the larger volume catches up. Mass never drops with size.
    """
    d = max(diameter_m, 0.0)
    mass = sphere_volume(d) * density_for(d)
    for upper, rho in DENSITY_TIERS[:-1]:
        if d > upper:
            mass = max(mass, sphere_volume(upper) * rho)
    return mass


def kinetic_energy_mt(diameter_m: float, velocity_kms: float) -> float:
    v = max(velocity_kms, 0.0) * 1000.0
    joules = 0.5 * impactor_mass(diameter_m) * v ** 2
    return joules / MT_TNT_J


def _energy(diameter_m: float, velocity_kms: float) -> float:
    e = kinetic_energy_mt(finite(diameter_m, "diameter"), finite(velocity_kms, "velocity"))
    return clamp(finite(e, "energy"), ENERGY_MIN_MT, ENERGY_MAX_MT)


def fallback_energy(diameter_m: float, velocity_kms: float) -> float:
    d = clamp(finite_or(diameter_m, 50.0), 0.0, FALLBACK_D_MAX_M)
    v = clamp(finite_or(velocity_kms, 20.0), 0.0, FALLBACK_V_MAX_KMS) * 1000.0
    e = 0.5 * sphere_volume(d) * 2600.0 * v ** 2 / MT_TNT_J
    return clamp(finite_or(e, ENERGY_MIN_MT), ENERGY_MIN_MT, ENERGY_MAX_MT)


def estimate_energy(diameter_m: float, velocity_kms: float) -> float:
    """Impact energy in megatons TNT, clamped to [0.001, 10000]."""
    try:
        return _energy(diameter_m, velocity_kms)
    except Exception as e:
        log.warning("energy fallback (d=%r, v=%r): %s", diameter_m, velocity_kms, e)
        return fallback_energy(diameter_m, velocity_kms)


def clamp_crater(diameter_m: float, depth_m: float) -> Tuple[float, float]:
    return (clamp(diameter_m, CRATER_D_MIN, CRATER_D_MAX),
            clamp(depth_m, CRATER_DEPTH_MIN, CRATER_DEPTH_MAX))


def _crater(energy_mt: float) -> Tuple[float, float]:
    e = max(finite(energy_mt, "energy"), 0.0)
    diameter = SIMPLE_K * e ** SIMPLE_EXP * 1000.0
    if diameter <= TRANSITION_M:
        depth = diameter * 0.25
    else:
        # complex craters: shallower scaling and central rebound
        diameter = COMPLEX_K * e ** COMPLEX_EXP * 1000.0
        depth = min(diameter * 0.1, 2_000.0)
    return clamp_crater(diameter, depth)


def fallback_crater(energy_mt: float) -> Tuple[float, float]:
    diameter = max(finite_or(energy_mt, ENERGY_MIN_MT), 0.0) ** 0.33 * 1000.0
    return clamp_crater(diameter, diameter * 0.25)


def estimate_crater(energy_mt: float) -> Tuple[float, float]:
    """(diameter m, depth m) of the final crater."""
    try:
        return _crater(energy_mt)
    except Exception as e:
        log.warning("crater fallback (E=%r): %s", energy_mt, e)
        return fallback_crater(energy_mt)


def _affected_radius(energy_mt: float) -> float:
    blast = max(finite(energy_mt, "energy"), 0.0) ** 0.33 * BLAST_SCALE_KM
    radius = max(blast, blast * THERMAL_MULT, blast * SEISMIC_MULT)
    return clamp(finite(radius, "radius"), RADIUS_MIN_KM, RADIUS_MAX_KM)


def fallback_affected_radius(energy_mt: float) -> float:
    r = max(finite_or(energy_mt, ENERGY_MIN_MT), 0.0) ** 0.33 * 5.0
    return clamp(r, RADIUS_MIN_KM, FALLBACK_RADIUS_MAX_KM)


def estimate_affected_radius(energy_mt: float) -> float:
    """Largest of blast, thermal and seismic radius, km."""
    try:
        return _affected_radius(energy_mt)
    except Exception as e:
        log.warning("affected radius fallback (E=%r): %s", energy_mt, e)
        return fallback_affected_radius(energy_mt)

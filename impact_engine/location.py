"""
Synthetic impact point and a coarse geographic lookup.

The coordinates come from the approach time (Earth rotation, season) plus
name-seeded scatter; there is no trajectory propagation behind them.
"""

import logging
import math
from datetime import datetime
from typing import List, Optional, Tuple

from . import seed as sd
from .orbit_class import is_earth_crossing
from .schemas import AsteroidData, ImpactLocation
from .utils import clamp, finite, finite_or, parse_date

log = logging.getLogger(__name__)

AXIAL_TILT_DEG = 23.44
DEG_PER_HOUR = 15.0

# (country, region, lat_min, lat_max, lon_min, lon_max); first match wins,
# so countries go ahead of the continent boxes that contain them
LAND_BOXES: List[Tuple[str, str, float, float, float, float]] = [
    ("Antarctica", "Antarctica", -90, -60, -180, 180),
    ("Greenland", "North America", 60, 84, -73, -12),
    ("United States", "North America", 54, 71, -168, -141),  # Alaska
    ("Canada", "North America", 49, 70, -140, -52),
    ("United States", "North America", 25, 49, -125, -67),
    ("Mexico", "North America", 14, 25, -117, -86),
    ("United Kingdom", "Europe", 50, 59, -8, 2),
    ("Spain", "Europe", 36, 43.5, -9, 3),
    ("France", "Europe", 43.5, 51, -5, 8),
    ("Germany", "Europe", 47, 55, 6, 15),
    ("Italy", "Europe", 37, 47, 7, 18),
    ("Russia", "Asia", 50, 77, 40, 180),
    ("Europe", "Europe", 36, 71, -10, 40),
    ("Egypt", "Africa", 22, 32, 25, 35),
    ("Saudi Arabia", "Asia", 16, 32, 35, 56),
    ("Nigeria", "Africa", 4, 14, 3, 15),
    ("South Africa", "Africa", -35, -22, 16, 33),
    ("Africa", "Africa", -35, 37, -18, 52),
    ("India", "Asia", 8, 35, 68, 90),
    ("Japan", "Asia", 30, 46, 129, 146),
    ("China", "Asia", 18, 50, 73, 128),
    ("Indonesia", "Asia", -11, 6, 95, 141),
    ("Australia", "Oceania", -44, -10, 113, 154),
    ("New Zealand", "Oceania", -47, -34, 166, 179),
    ("Brazil", "South America", -33, 5, -74, -35),
    ("Argentina", "South America", -55, -22, -73, -53),
    ("South America", "South America", -56, 12, -81, -35),
]

INTERNATIONAL_WATERS = "International Waters"


def _ocean_basin(lat: float, lon: float) -> Optional[str]:
    """Name of the ocean the point plausibly lies in, None if it looks like land."""
    if lat >= 66:
        return "Arctic Ocean"
    if lat <= -50:
        return "Southern Ocean"
    if -70 <= lon <= -10 or (-10 < lon <= 10 and lat < 0):
        return "Atlantic Ocean"
    if 40 <= lon <= 110 and lat < 25:
        return "Indian Ocean"
    if lon >= 145 or lon <= -80:
        return "Pacific Ocean"
    if 110 < lon < 145 and lat < -10:
        return "Indian Ocean"
    return None


def locate(lat: float, lon: float) -> ImpactLocation:
    for country, region, la0, la1, lo0, lo1 in LAND_BOXES:
        if la0 <= lat <= la1 and lo0 <= lon <= lo1:
            return ImpactLocation(latitude=lat, longitude=lon, country=country, region=region, is_land=True)
    ocean = _ocean_basin(lat, lon)
    if ocean:
        return ImpactLocation(latitude=lat, longitude=lon, country=ocean, region=INTERNATIONAL_WATERS, is_land=False)
    return ImpactLocation(latitude=lat, longitude=lon, country="Unknown", region="Unknown Land", is_land=True)


def normalize(lat: float, lon: float) -> Tuple[float, float]:
    lat = clamp(lat, -90.0, 90.0)
    lon = ((lon + 180.0) % 360.0) - 180.0
    return lat, lon


def _time_terms(when: datetime) -> Tuple[float, float]:
    hours = when.hour + when.minute / 60 + when.second / 3600
    lon_offset = (hours * DEG_PER_HOUR) % 360
    seasonal = math.sin(2 * math.pi * when.timetuple().tm_yday / 365) * AXIAL_TILT_DEG
    return lon_offset, seasonal


def _coordinates(a: AsteroidData) -> Tuple[float, float]:
    lon_offset, seasonal = _time_terms(parse_date(a.approach_date))
    s1, s2 = sd.seeds(a.name, sd.LOCATION_LAT, sd.LOCATION_LON)

    if is_earth_crossing(a.orbit_class):
        # Earth-crossers arrive near the ecliptic: tighter band, rotation-led longitude
        lat = seasonal + (s1 * 2 - 1) * 30
        lon = lon_offset * 0.7 + (s2 * 360 - 180) * 0.3
    else:
        lat = seasonal * 0.5 + (s1 * 2 - 1) * 60
        lon = lon_offset * 0.3 + (s2 * 360 - 180) * 0.7

    lat += finite_or(a.inclination, 0.0) * 0.1
    vnorm = clamp(finite(a.velocity, "velocity") / 30.0, 0.0, 1.0) - 0.5
    lat += vnorm * 10
    lon += vnorm * 20
    return normalize(finite(lat, "latitude"), finite(lon, "longitude"))


def fallback_coordinates(a: AsteroidData) -> Tuple[float, float]:
    s1, s2 = sd.seeds(a.name, sd.LOCATION_LAT, sd.LOCATION_LON)
    return normalize(s1 * 120 - 60, s2 * 360 - 180)


def estimate_location(a: AsteroidData) -> ImpactLocation:
    try:
        lat, lon = _coordinates(a)
    except Exception as e:
        log.warning("location fallback for %r: %s", a.name, e)
        lat, lon = fallback_coordinates(a)
    return locate(lat, lon)

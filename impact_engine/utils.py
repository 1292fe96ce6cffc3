import math
from datetime import datetime, timezone
from typing import Any

from dateutil import parser as dateparser

AU_KM = 149.6e6
MT_TNT_J = 4.184e15


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def finite(x: Any, what: str = "value") -> float:
    """Return x as float, raising ValueError when it is NaN/inf or not a number."""
    v = float(x)
    if not math.isfinite(v):
        raise ValueError(f"{what} is not finite: {x!r}")
    return v


def finite_or(x: Any, default: float) -> float:
    try:
        v = float(x)
    except (TypeError, ValueError):
        return default
    return v if math.isfinite(v) else default


def parse_date(s: str) -> datetime:
    """ISO date or datetime -> aware UTC datetime. Naive values are taken as UTC."""
    d = dateparser.isoparse(str(s).strip())
    if d.tzinfo is None:
        return d.replace(tzinfo=timezone.utc)
    return d.astimezone(timezone.utc)


def iso_z(d: datetime) -> str:
    return d.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")

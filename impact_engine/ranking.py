"""
Batch ranking table.

One row per object from its nominal prediction, ordered by risk level and
then probability, with an exponential proximity score so far objects still rank.
"""

from typing import Iterable, Tuple

import numpy as np
import pandas as pd

from .schemas import AsteroidData, ImpactPrediction
from .utils import AU_KM

RISK_ORDER = ["LOW", "MEDIUM", "HIGH", "CRITICAL"]
COLUMNS = [
    "name", "approach_date", "miss_distance_au", "avg_diameter_m", "is_hazardous",
    "impact_probability", "impact_energy_mt", "crater_diameter_m", "affected_radius_km",
    "confidence", "risk_level", "country", "proximity_score",
]


def rank_predictions(
    rows: Iterable[Tuple[AsteroidData, ImpactPrediction]],
    proximity_scale_km: float = 1_000_000.0,
) -> pd.DataFrame:
    """
    proximity_score = exp(-miss_km / scale):
    - 0 km -> 1.0
    - one scale away -> ~0.37
    """
    recs = []
    for a, p in rows:
        recs.append({
            "name": a.name,
            "approach_date": a.approach_date,
            "miss_distance_au": a.miss_distance,
            "avg_diameter_m": a.avg_diameter,
            "is_hazardous": a.is_hazardous,
            "impact_probability": p.impact_probability,
            "impact_energy_mt": p.impact_energy,
            "crater_diameter_m": p.crater_size.diameter,
            "affected_radius_km": p.affected_radius,
            "confidence": p.confidence,
            "risk_level": p.risk_level,
            "country": p.impact_location.country,
        })
    if not recs:
        return pd.DataFrame(columns=COLUMNS)

    df = pd.DataFrame(recs)
    miss_km = pd.to_numeric(df["miss_distance_au"], errors="coerce").fillna(np.inf).clip(lower=0) * AU_KM
    df["proximity_score"] = np.exp(-miss_km / proximity_scale_km)
    df["risk_level"] = pd.Categorical(df["risk_level"], categories=RISK_ORDER, ordered=True)
    df = df.sort_values(["risk_level", "impact_probability"], ascending=[False, False])
    return df[COLUMNS].reset_index(drop=True)

from .predictor import predict, scenarios
from .risk import classify_risk
from .schemas import AsteroidData, Diameter, ImpactLocation, ImpactPrediction, CraterSize

__all__ = [
    "predict", "scenarios", "classify_risk",
    "AsteroidData", "Diameter", "ImpactLocation", "ImpactPrediction", "CraterSize",
]

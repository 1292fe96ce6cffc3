from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

RiskLevel = Literal["LOW", "MEDIUM", "HIGH", "CRITICAL"]
Scenario = Literal["nominal", "worst_case", "best_case"]


class _Model(BaseModel):
    # snake_case in Python, camelCase on the wire
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Diameter(_Model):
    min: float
    max: float


class AsteroidData(_Model):
    name: str = ""
    diameter: Diameter
    velocity: float  # km/s
    miss_distance: float  # AU
    is_hazardous: bool = False
    approach_date: str
    inclination: Optional[float] = None  # degrees
    orbit_class: Optional[str] = None

    @property
    def avg_diameter(self) -> float:
        return (self.diameter.min + self.diameter.max) / 2


class ImpactLocation(_Model):
    latitude: float
    longitude: float
    country: Optional[str] = None
    region: Optional[str] = None
    is_land: bool = False


class CraterSize(_Model):
    diameter: float  # m
    depth: float  # m


class ImpactPrediction(_Model):
    impact_probability: float = Field(ge=0.0, le=1.0)
    impact_location: ImpactLocation
    impact_time: str
    impact_energy: float  # megatons TNT
    crater_size: CraterSize
    affected_radius: float  # km
    confidence: float = Field(ge=0.0, le=100.0)
    risk_level: RiskLevel
    scenario: Scenario = "nominal"


class OrbitalElements(_Model):
    semi_major_axis: Optional[float] = None  # AU
    eccentricity: Optional[float] = None
    inclination: Optional[float] = None  # degrees
    perihelion_distance: Optional[float] = None  # AU
    aphelion_distance: Optional[float] = None  # AU
    orbital_period: Optional[float] = None
    argument_of_perihelion: Optional[float] = None
    longitude_of_ascending_node: Optional[float] = None
    mean_anomaly: Optional[float] = None


class OrbitClassification(_Model):
    orbit_class: str
    description: str
    confidence: float
    method: Literal["calculation", "api", "fallback"]
    risk_level: Literal["Low", "Medium", "High"]


class AsteroidSummary(_Model):
    name: str
    size: Literal["small", "medium", "large"]
    avg_diameter: int
    risk_level: Literal["low", "medium", "high", "critical"]
    distance: Literal["very close", "close", "distant"]
    miss_distance_au: float
    velocity: float
    approach_date: str
    orbit_class: str = "Unknown"
    hazardous: bool = False


class AnalysisReport(_Model):
    analysis: str
    risk_level: Literal["low", "medium", "high", "critical"]
    recommendations: List[str]
    timestamp: str
    source: Literal["gemini", "offline"] = "offline"


class Strategy(_Model):
    category: str
    title: str
    description: str
    feasibility: Literal["high", "medium", "low"]
    timeframe: str
    effectiveness: str
    requirements: List[str]
    estimated_cost: Optional[str] = None


class TimelinePhase(_Model):
    phase: str
    duration: str
    description: str
    priority: Literal["high", "medium", "low"]


class MitigationPlan(_Model):
    strategies: List[Strategy]
    timeline: List[TimelinePhase]
    global_coordination: List[str]
    public_preparedness: List[str]
    timestamp: str
    source: Literal["gemini", "offline"] = "offline"

from typing import List

import requests
from fastapi import APIRouter, HTTPException

from adapters.gemini_client import GeminiClient
from adapters.neows_adapter import neo_to_asteroid
from adapters.neows_client import NeoWsClient
from impact_engine import predict, scenarios
from impact_engine.orbit_class import determine_orbit_class
from impact_engine.schemas import AnalysisReport, AsteroidData, ImpactPrediction, MitigationPlan

router = APIRouter(tags=["impact"])


def gemini() -> GeminiClient:
    return GeminiClient()


def neows() -> NeoWsClient:
    return NeoWsClient()


@router.post("/impact/predict", response_model=ImpactPrediction)
def predict_impact(body: AsteroidData):
    return predict(body)


@router.post("/impact/scenarios", response_model=List[ImpactPrediction])
def impact_scenarios(body: AsteroidData):
    return scenarios(body)


@router.post("/impact/analysis", response_model=AnalysisReport)
def impact_analysis(body: AsteroidData):
    return gemini().analyze(body, predict(body))


@router.post("/impact/mitigation", response_model=MitigationPlan)
def impact_mitigation(body: AsteroidData):
    return gemini().mitigation(body, predict(body))


@router.get("/neo/{neo_id}/scenarios")
def neo_scenarios(neo_id: str):
    try:
        neo = neows().fetch_neo(neo_id)
    except requests.RequestException as e:
        raise HTTPException(status_code=502, detail=f"NeoWs lookup failed: {e}")
    asteroid = neo_to_asteroid(neo)
    return {
        "asteroid": asteroid.model_dump(by_alias=True),
        "orbitClassification": determine_orbit_class(neo).model_dump(by_alias=True),
        "scenarios": [p.model_dump(by_alias=True) for p in scenarios(asteroid)],
    }

#!/usr/bin/env python3
"""
run_impact_batch.py
-------------------
NEOWatch batch runner: impact scenarios for many objects + optional narrative.

Features:
- Reads a JSON list, a JSONL file, or a saved NeoWs feed document
- Runs nominal / worst_case / best_case for every object
- Appends one JSONL record per object and writes a ranking CSV
- Optional analysis report per object (Gemini if configured, offline otherwise)
- A failed enrichment is logged as a warning and never stops the run

Usage:
  python run_impact_batch.py                                  # demo object
  python run_impact_batch.py --in data/feed.json              # NeoWs feed
  python run_impact_batch.py --in data/objects.jsonl --enrich --print
  NEOWATCH_LOG_LEVEL=INFO python run_impact_batch.py --ranking-out logs/ranking.csv
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

from adapters.gemini_client import GeminiClient
from adapters.neows_adapter import feed_to_asteroids, neo_to_asteroid
from impact_engine import scenarios
from impact_engine.ranking import rank_predictions
from impact_engine.schemas import AsteroidData

log = logging.getLogger("run_impact_batch")

DEMO_OBJECT: Dict[str, Any] = {
    "name": "(2024 DEMO)",
    "diameter": {"min": 120.0, "max": 270.0},
    "velocity": 18.4,
    "missDistance": 0.0021,
    "isHazardous": True,
    "approachDate": "2025-06-01",
    "orbitClass": "Apollo",
}


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


# ============================================================
# 1) Input
# ============================================================

def to_asteroid(obj: Dict[str, Any]) -> AsteroidData:
    """Accept either our own AsteroidData shape or a raw NeoWs object."""
    if "estimated_diameter" in obj or "close_approach_data" in obj:
        return neo_to_asteroid(obj)
    return AsteroidData.model_validate(obj)


def read_objects(path: Optional[str]) -> Iterator[AsteroidData]:
    """
    Yields AsteroidData. Supports:
      - None (no file): yields a single demo object
      - .json  : list of objects, one object, or a NeoWs feed ({"near_earth_objects": ...})
      - .jsonl : one object per line
    """
    if not path:
        yield AsteroidData.model_validate(DEMO_OBJECT)
        return

    ext = os.path.splitext(path)[1].lower()
    if ext == ".jsonl":
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line:
                    yield to_asteroid(json.loads(line))
    elif ext == ".json":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict) and "near_earth_objects" in data:
            yield from feed_to_asteroids(data)
        elif isinstance(data, list):
            for obj in data:
                yield to_asteroid(obj)
        elif isinstance(data, dict):
            yield to_asteroid(data)
        else:
            raise ValueError("Unsupported JSON structure (expect object, list or NeoWs feed).")
    else:
        raise ValueError(f"Unsupported input extension: {ext}")


# ============================================================
# 2) Output
# ============================================================

def append_jsonl(path: str, obj: Dict[str, Any]) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps(obj, ensure_ascii=False) + "\n")


# ============================================================
# 3) Main pipeline
# ============================================================

def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="NEOWatch batch impact scenarios")
    parser.add_argument("--in", dest="in_path", default=None, help="Input file (.json, .jsonl or NeoWs feed .json)")
    parser.add_argument("--out", default="logs/predictions.jsonl", help="Where to append scenario records (JSONL)")
    parser.add_argument("--ranking-out", default="logs/ranking.csv", help="Ranking table (CSV)")
    parser.add_argument("--enrich", action="store_true", help="Attach an analysis report per object")
    parser.add_argument("--print", dest="do_print", action="store_true", help="Print each nominal prediction")
    args = parser.parse_args(argv)

    logging.basicConfig(level=os.getenv("NEOWATCH_LOG_LEVEL", "WARNING").upper())

    started = _utc_now()
    print(f"NEOWatch batch | start: {started}")
    print(f"• Input: {args.in_path or 'demo object'}")
    print(f"• Out: {args.out}")
    print(f"• Ranking: {args.ranking_out}\n")

    client = GeminiClient() if args.enrich else None
    ranked = []
    count = enriched_ok = 0

    for asteroid in read_objects(args.in_path):
        count += 1
        preds = scenarios(asteroid)
        ranked.append((asteroid, preds[0]))
        record: Dict[str, Any] = {
            "asteroid": asteroid.model_dump(by_alias=True),
            "scenarios": [p.model_dump(by_alias=True) for p in preds],
            "meta": {"ts_utc": _utc_now()},
        }

        if client is not None:
            try:
                record["analysis"] = client.analyze(asteroid, preds[0]).model_dump(by_alias=True)
                enriched_ok += 1
            except Exception as e:
                log.warning("enrichment failed for %r: %s", asteroid.name, e)
                record["warning"] = f"enrichment failed: {e.__class__.__name__}: {e}"

        append_jsonl(args.out, record)

        if args.do_print:
            p = preds[0]
            print(f"{asteroid.name}: p={p.impact_probability:.4f} E={p.impact_energy:.3f} MT "
                  f"risk={p.risk_level} at {p.impact_location.country}")

    df = rank_predictions(ranked)
    os.makedirs(os.path.dirname(args.ranking_out) or ".", exist_ok=True)
    df.to_csv(args.ranking_out, index=False)

    print(f"\nDone. processed={count}, enriched_ok={enriched_ok}, start={started}, end={_utc_now()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Tiberium Alliances Lineup Optimizer - Web API
===============================================
FastAPI server exposing the catalog and the recommendation engine.

Usage:
    python -m ta_lineup.web
    ta-lineup web [--port 8080]
"""

from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
import uvicorn

from ta_lineup.engine import RecommendationEngine, parse_objective
from ta_lineup.io import extracted_from_dict, load_extracted, recommendations_to_dict
from ta_lineup.models import EngineOptions, Objective, UnitStats
from ta_lineup.parity import DEMO_PATH, ENGINE_VERSION

app = FastAPI(title="Tiberium Alliances Lineup Optimizer", version=ENGINE_VERSION)

_engine: Optional[RecommendationEngine] = None


def get_engine() -> RecommendationEngine:
    global _engine
    if _engine is None:
        _engine = RecommendationEngine()
    return _engine


def set_engine(engine: RecommendationEngine):
    """Swap the engine (custom catalog/doctrines, tests)."""
    global _engine
    _engine = engine


# ---------------------------------------------------------------------------
# Pydantic models for request/response
# ---------------------------------------------------------------------------

class AnalyzeRequest(BaseModel):
    objective: str = Objective.MAX_WIN_CHANCE.value
    extracted: Dict[str, Any]
    cp_limit: Optional[float] = None
    player_level: Optional[int] = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _unit_to_dict(u: UnitStats) -> dict:
    return {
        "unit_key": u.unit_key,
        "name": u.name,
        "faction": u.faction.value,
        "type": u.unit_type.value,
        "ap_cost": u.ap_cost,
        "armor_type": u.armor_type.value,
        "range": u.range,
        "speed": u.speed,
        "hp_by_level": u.hp_by_level,
        "dps_by_level": u.dps_by_level,
        "damage_vs": (
            {
                "infantry": u.damage_vs.infantry,
                "vehicle": u.damage_vs.vehicle,
                "structure": u.damage_vs.structure,
                "air": u.damage_vs.air,
            }
            if u.damage_vs else None
        ),
        "economy_tier": u.economy_tier.value,
    }


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------

@app.get("/api/units")
def api_units(faction: Optional[str] = None, unit_type: Optional[str] = None):
    """Return the unit catalog, optionally filtered."""
    units = get_engine().catalog.filter(faction=faction, unit_type=unit_type)
    return {"units": [_unit_to_dict(u) for u in units]}


@app.get("/api/units/{unit_key}")
def api_unit_detail(unit_key: str):
    unit = get_engine().catalog.get(unit_key)
    if unit is None:
        raise HTTPException(404, f"Unit not found: {unit_key}")
    return _unit_to_dict(unit)


@app.post("/api/analyze")
def api_analyze(req: AnalyzeRequest):
    """Run the recommendation engine on extracted roster/target data."""
    try:
        objective = parse_objective(req.objective)
        extracted = extracted_from_dict(req.extracted)
    except (ValueError, TypeError, KeyError) as e:
        raise HTTPException(400, str(e))

    options = EngineOptions(cp_limit=req.cp_limit, player_level=req.player_level)
    recs = get_engine().recommend(extracted, objective, options)
    return recommendations_to_dict(recs)


@app.get("/api/demo")
def api_demo(objective: str = Objective.MAX_WIN_CHANCE.value):
    """Recommendations for the bundled demo outpost."""
    try:
        parsed = parse_objective(objective)
    except ValueError as e:
        raise HTTPException(400, str(e))
    recs = get_engine().recommend(load_extracted(str(DEMO_PATH)), parsed)
    return recommendations_to_dict(recs)


def start_server(port: int = 8080):
    """Start the uvicorn server."""
    print(f"Starting Tiberium Alliances Lineup Optimizer at http://localhost:{port}")
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="info")


if __name__ == "__main__":
    start_server()

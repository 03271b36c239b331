"""
Tiberium Alliances Lineup Optimizer - I/O
===========================================
Load extracted roster/target data from YAML or JSON, export analyses as
JSON and save/load preset lineups as YAML.
"""

import json
from pathlib import Path
from typing import Optional

import yaml

from ta_lineup.models import (
    Analysis, DefenderUnit, DefenseBuilding, ExtractedData, LineupRecommendation,
    LineupUnit, PresetLineup, Recommendations, RosterUnit, Target, TargetType,
    WavePlan,
)

# camelCase keys written by the web frontend / extraction pipeline
_ALIASES = {
    "unitKey": "unit_key",
    "playerRoster": "player_roster",
    "defenderUnits": "defender_units",
    "defenseBuildings": "defense_buildings",
    "buildingKey": "building_key",
    "approxPos": "approx_pos",
    "terrainTags": "terrain_tags",
    "desiredLevel": "desired_level",
    "wavePlan": "wave_plan",
}


def _norm(data: dict) -> dict:
    return {_ALIASES.get(k, k): v for k, v in data.items()}


def _optional_int(value) -> Optional[int]:
    return None if value is None else int(value)


# ---------------------------------------------------------------------------
# Extracted data
# ---------------------------------------------------------------------------

def _parse_roster_unit(item: dict, cls):
    item = _norm(item)
    if not item.get("unit_key"):
        raise ValueError(f"Unit entry without unit_key: {item!r}")
    return cls(
        unit_key=item["unit_key"],
        level=int(item.get("level", 1)),
        count=_optional_int(item.get("count")),
    )


def _parse_building(item: dict) -> DefenseBuilding:
    item = _norm(item)
    if not item.get("building_key"):
        raise ValueError(f"Defense building without building_key: {item!r}")
    pos = item.get("approx_pos")
    if isinstance(pos, dict):
        pos = (float(pos.get("x", 0)), float(pos.get("y", 0)))
    elif pos is not None:
        pos = (float(pos[0]), float(pos[1]))
    return DefenseBuilding(
        building_key=item["building_key"],
        approx_pos=pos,
        level=_optional_int(item.get("level")),
    )


def parse_target_type(value) -> TargetType:
    try:
        return TargetType(value)
    except ValueError:
        raise ValueError(
            f"Unknown target type: {value!r}. Choose from: {[t.value for t in TargetType]}"
        ) from None


def extracted_from_dict(data: dict) -> ExtractedData:
    """Build ExtractedData from a plain dict (snake_case or camelCase keys)."""
    data = _norm(data or {})
    target_data = _norm(data.get("target") or {})
    if "type" not in target_data:
        raise ValueError("Target is missing 'type'")

    target = Target(
        target_type=parse_target_type(target_data["type"]),
        level=_optional_int(target_data.get("level")),
        defender_units=[
            _parse_roster_unit(d, DefenderUnit) for d in target_data.get("defender_units") or []
        ],
        defense_buildings=[
            _parse_building(b) for b in target_data.get("defense_buildings") or []
        ],
        terrain_tags=[str(t) for t in target_data.get("terrain_tags") or []],
    )
    roster = [_parse_roster_unit(r, RosterUnit) for r in data.get("player_roster") or []]
    return ExtractedData(player_roster=roster, target=target)


def load_extracted(filepath: str) -> ExtractedData:
    """Load extracted data from a .json file or a YAML file."""
    with open(filepath, "r") as f:
        if Path(filepath).suffix.lower() == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{filepath}: expected a mapping with player_roster and target")
    return extracted_from_dict(data)


def extracted_to_dict(extracted: ExtractedData) -> dict:
    target = extracted.target
    return {
        "player_roster": [
            {"unit_key": r.unit_key, "level": r.level, "count": r.count}
            for r in extracted.player_roster
        ],
        "target": {
            "type": target.target_type.value,
            "level": target.level,
            "defender_units": [
                {"unit_key": d.unit_key, "level": d.level, "count": d.count}
                for d in target.defender_units
            ],
            "defense_buildings": [
                {
                    "building_key": b.building_key,
                    "approx_pos": (
                        {"x": b.approx_pos[0], "y": b.approx_pos[1]} if b.approx_pos else None
                    ),
                    "level": b.level,
                }
                for b in target.defense_buildings
            ],
            "terrain_tags": list(target.terrain_tags),
        },
    }


# ---------------------------------------------------------------------------
# Recommendations / analysis export
# ---------------------------------------------------------------------------

def _lineup_to_list(lineup) -> list:
    return [
        {"unit_key": u.unit_key, "desired_level": u.desired_level, "count": u.count}
        for u in lineup
    ]


def _waves_to_list(waves) -> list:
    return [
        {"wave": w.wave, "units": _lineup_to_list(w.units), "strategy": w.strategy}
        for w in waves
    ]


def recommendation_to_dict(rec: LineupRecommendation) -> dict:
    return {
        "objective": rec.objective.value if rec.objective else None,
        "doctrine": rec.doctrine,
        "lineup": _lineup_to_list(rec.lineup),
        "wave_plan": _waves_to_list(rec.wave_plan),
        "score": rec.score,
        "risk": rec.risk,
        "explanation": rec.explanation,
        "cp_total": rec.cp_total,
    }


def recommendations_to_dict(recs: Recommendations) -> dict:
    return {
        "top": recommendation_to_dict(recs.top),
        "alternatives": [recommendation_to_dict(a) for a in recs.alternatives],
    }


def analysis_to_dict(analysis: Analysis) -> dict:
    return {
        "id": analysis.analysis_id,
        "version": analysis.version,
        "objective": analysis.objective.value,
        "extracted": extracted_to_dict(analysis.extracted),
        "recommendations": recommendations_to_dict(analysis.recommendations),
    }


def export_analysis_json(analysis: Analysis, filepath: str):
    with open(filepath, "w") as f:
        json.dump(analysis_to_dict(analysis), f, indent=2)


# ---------------------------------------------------------------------------
# Preset lineups
# ---------------------------------------------------------------------------

def preset_from_recommendation(rec: LineupRecommendation, name: str,
                               description: str = "") -> PresetLineup:
    tags = [rec.doctrine] if rec.doctrine else []
    if rec.objective:
        tags.append(rec.objective.value)
    return PresetLineup(
        name=name,
        description=description or rec.explanation,
        lineup=list(rec.lineup),
        wave_plan=list(rec.wave_plan),
        tags=tags,
    )


def save_preset(preset: PresetLineup, filepath: str):
    data = {
        "name": preset.name,
        "description": preset.description,
        "tags": list(preset.tags),
        "lineup": _lineup_to_list(preset.lineup),
        "wave_plan": _waves_to_list(preset.wave_plan),
    }
    with open(filepath, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def _parse_lineup_unit(item: dict) -> LineupUnit:
    item = _norm(item)
    return LineupUnit(
        unit_key=item["unit_key"],
        desired_level=int(item.get("desired_level", 1)),
        count=int(item.get("count", 1)),
    )


def load_preset(filepath: str) -> PresetLineup:
    with open(filepath, "r") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{filepath}: not a preset lineup")
    data = _norm(data)

    return PresetLineup(
        name=data.get("name", Path(filepath).stem),
        description=data.get("description", ""),
        tags=[str(t) for t in data.get("tags") or []],
        lineup=[_parse_lineup_unit(u) for u in data.get("lineup") or []],
        wave_plan=[
            WavePlan(
                wave=int(w["wave"]),
                units=[_parse_lineup_unit(u) for u in w.get("units") or []],
                strategy=w.get("strategy", ""),
            )
            for w in data.get("wave_plan") or []
        ],
    )

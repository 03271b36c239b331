"""
Tiberium Alliances Lineup Optimizer - Unit Catalog
====================================================
Loads unit_stats.yaml once and serves read-only lookups by key,
faction and unit type.

Unknown keys are never an error here: lookups return None and cost
lookups return 0, so callers can keep their arithmetic total.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

from ta_lineup.models import (
    ArmorType, DamageVs, EconomyTier, Faction, UnitStats, UnitType,
)
from ta_lineup.parity import CATALOG_PATH

log = logging.getLogger(__name__)

# Module-level cache: resolved catalog path -> UnitCatalog
_cache: Dict[str, "UnitCatalog"] = {}


class UnitCatalog:
    """Key-indexed, read-only view over a list of UnitStats."""

    def __init__(self, units: List[UnitStats]):
        self._units: List[UnitStats] = list(units)
        self._by_key: Dict[str, UnitStats] = {}
        for unit in self._units:
            if unit.unit_key in self._by_key:
                raise ValueError(f"Duplicate unit key in catalog: {unit.unit_key}")
            self._by_key[unit.unit_key] = unit

    def __len__(self) -> int:
        return len(self._units)

    def __contains__(self, unit_key: str) -> bool:
        return unit_key in self._by_key

    def get(self, unit_key: str) -> Optional[UnitStats]:
        return self._by_key.get(unit_key)

    def all(self) -> List[UnitStats]:
        return list(self._units)

    def by_faction(self, faction: Union[Faction, str]) -> List[UnitStats]:
        wanted = _enum_or_none(Faction, faction)
        return [u for u in self._units if u.faction == wanted]

    def by_type(self, unit_type: Union[UnitType, str]) -> List[UnitStats]:
        wanted = _enum_or_none(UnitType, unit_type)
        return [u for u in self._units if u.unit_type == wanted]

    def filter(self, faction: Optional[Union[Faction, str]] = None,
               unit_type: Optional[Union[UnitType, str]] = None) -> List[UnitStats]:
        """Catalog order, narrowed by faction and/or unit type when given."""
        units = self.all()
        if faction:
            keys = {u.unit_key for u in self.by_faction(faction)}
            units = [u for u in units if u.unit_key in keys]
        if unit_type:
            keys = {u.unit_key for u in self.by_type(unit_type)}
            units = [u for u in units if u.unit_key in keys]
        return units

    def cost_of(self, unit_key: str) -> int:
        unit = self._by_key.get(unit_key)
        return unit.ap_cost if unit else 0


def _enum_or_none(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# YAML loading
# ---------------------------------------------------------------------------

def _parse_enum(enum_cls, value, unit_key: str, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        choices = [e.value for e in enum_cls]
        raise ValueError(
            f"Unit '{unit_key}': invalid {field_name} {value!r} (expected one of {choices})"
        ) from None


def _parse_level_table(table) -> Dict[int, float]:
    if not table:
        return {}
    return {int(level): float(value) for level, value in table.items()}


def _parse_unit(data: dict) -> UnitStats:
    unit_key = data.get("unit_key")
    if not unit_key:
        raise ValueError(f"Catalog entry without unit_key: {data!r}")

    for required in ("name", "faction", "type", "ap_cost", "armor_type"):
        if required not in data:
            raise ValueError(f"Unit '{unit_key}': missing field '{required}'")

    ap_cost = int(data["ap_cost"])
    if ap_cost <= 0:
        raise ValueError(f"Unit '{unit_key}': ap_cost must be positive, got {ap_cost}")

    damage_vs = None
    dv = data.get("damage_vs")
    if dv:
        damage_vs = DamageVs(
            infantry=float(dv.get("infantry", 1.0)),
            vehicle=float(dv.get("vehicle", 1.0)),
            structure=float(dv.get("structure", 1.0)),
            air=float(dv.get("air", 1.0)),
        )

    return UnitStats(
        unit_key=unit_key,
        name=data["name"],
        faction=_parse_enum(Faction, data["faction"], unit_key, "faction"),
        unit_type=_parse_enum(UnitType, data["type"], unit_key, "type"),
        ap_cost=ap_cost,
        armor_type=_parse_enum(ArmorType, data["armor_type"], unit_key, "armor_type"),
        range=float(data.get("range", 0)),
        speed=float(data.get("speed", 0)),
        hp_by_level=_parse_level_table(data.get("hp_by_level")),
        dps_by_level=_parse_level_table(data.get("dps_by_level")),
        damage_vs=damage_vs,
        economy_tier=_parse_enum(
            EconomyTier, data.get("economy_tier", "standard"), unit_key, "economy_tier"
        ),
        source=data.get("source", ""),
        confidence=data.get("confidence", ""),
    )


def load_catalog(filepath: Optional[Union[str, Path]] = None) -> UnitCatalog:
    """Parse a unit_stats.yaml file into a UnitCatalog."""
    path = Path(filepath) if filepath else CATALOG_PATH
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    entries = data.get("units")
    if not isinstance(entries, list):
        raise ValueError(f"{path}: expected a top-level 'units' list")

    catalog = UnitCatalog([_parse_unit(entry) for entry in entries])
    log.info("Loaded %d units from %s", len(catalog), path)
    return catalog


def default_catalog(filepath: Optional[Union[str, Path]] = None) -> UnitCatalog:
    """Return the process-wide catalog, loading it on first use."""
    key = str(Path(filepath).resolve() if filepath else CATALOG_PATH.resolve())
    if key not in _cache:
        _cache[key] = load_catalog(key)
    return _cache[key]


# ---------------------------------------------------------------------------
# Module-level accessors over the default catalog
# ---------------------------------------------------------------------------

def get_unit_stats() -> List[UnitStats]:
    return default_catalog().all()


def get_unit_by_key(unit_key: str) -> Optional[UnitStats]:
    return default_catalog().get(unit_key)


def get_units_by_faction(faction: Union[Faction, str]) -> List[UnitStats]:
    return default_catalog().by_faction(faction)


def get_units_by_type(unit_type: Union[UnitType, str]) -> List[UnitStats]:
    return default_catalog().by_type(unit_type)

"""
Tiberium Alliances Lineup Optimizer - Strategy System
=======================================================
Defender composition analysis, doctrine templates and the doctrine
decision table.

Doctrine templates are data (doctrines.yaml); the selection order below is
code and must stay first-match-wins.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

from ta_lineup.catalog import UnitCatalog
from ta_lineup.models import DefenderUnit, Objective, TargetType, UnitType
from ta_lineup.parity import (
    DEFAULT_DEFENDER_WEIGHT, DOCTRINES_PATH, INFANTRY_HEAVY_SHARE, VEHICLE_HEAVY_SHARE,
)

log = logging.getLogger(__name__)

_cache: Dict[str, Dict["DoctrineName", "Doctrine"]] = {}


# ---------------------------------------------------------------------------
# Defender analysis
# ---------------------------------------------------------------------------

@dataclass
class DefenderAnalysis:
    infantry_heavy: bool = False
    vehicle_heavy: bool = False
    air_present: bool = False
    turret_heavy: bool = False
    total_strength: int = 0         # weighted unit count, a risk proxy only

    infantry_count: int = 0
    vehicle_count: int = 0
    air_count: int = 0


def _defender_weight(defender: DefenderUnit) -> int:
    if defender.count is None:
        return DEFAULT_DEFENDER_WEIGHT
    return defender.count


def analyze_defenders(defenders: List[DefenderUnit], catalog: UnitCatalog) -> DefenderAnalysis:
    """Classify an enemy garrison into threat flags.

    Defenders missing from the catalog are ignored. Defense buildings are
    not analysed yet, so turret_heavy is always False.
    """
    counts = {UnitType.INFANTRY: 0, UnitType.VEHICLE: 0, UnitType.AIR: 0}
    for defender in defenders:
        unit = catalog.get(defender.unit_key)
        if unit is None:
            log.debug("Ignoring unknown defender %s", defender.unit_key)
            continue
        counts[unit.unit_type] += _defender_weight(defender)

    infantry = counts[UnitType.INFANTRY]
    vehicle = counts[UnitType.VEHICLE]
    air = counts[UnitType.AIR]
    total = infantry + vehicle + air

    return DefenderAnalysis(
        infantry_heavy=infantry > total * INFANTRY_HEAVY_SHARE,
        vehicle_heavy=vehicle > total * VEHICLE_HEAVY_SHARE,
        air_present=air > 0,
        turret_heavy=False,
        total_strength=total,
        infantry_count=infantry,
        vehicle_count=vehicle,
        air_count=air,
    )


# ---------------------------------------------------------------------------
# Doctrine templates
# ---------------------------------------------------------------------------

class DoctrineName(Enum):
    ANTI_INFANTRY = "Anti-Infantry"
    ANTI_VEHICLE = "Anti-Vehicle"
    BASE_ASSAULT = "Base Assault"
    BALANCED = "Balanced"


class AttackRole(Enum):
    SOAK = "soak"
    CORE = "core"
    SUPPORT = "support"


@dataclass(frozen=True)
class Doctrine:
    name: DoctrineName
    soak_units: List[str] = field(default_factory=list)
    core_units: List[str] = field(default_factory=list)
    support_units: List[str] = field(default_factory=list)
    priorities: List[str] = field(default_factory=list)     # explanation only

    def role_of(self, unit_key: str) -> Optional[AttackRole]:
        """Role of a unit key; soak wins over core, core over support."""
        if unit_key in self.soak_units:
            return AttackRole.SOAK
        if unit_key in self.core_units:
            return AttackRole.CORE
        if unit_key in self.support_units:
            return AttackRole.SUPPORT
        return None


def _parse_doctrine(name: DoctrineName, block: dict) -> Doctrine:
    if not isinstance(block, dict):
        raise ValueError(f"Doctrine '{name.value}': expected a mapping")
    lists = {}
    for key in ("soak", "core", "support", "priorities"):
        value = block.get(key) or []
        if not isinstance(value, list):
            raise ValueError(f"Doctrine '{name.value}': '{key}' must be a list")
        lists[key] = [str(v) for v in value]
    return Doctrine(
        name=name,
        soak_units=lists["soak"],
        core_units=lists["core"],
        support_units=lists["support"],
        priorities=lists["priorities"],
    )


def load_doctrines(filepath: Optional[Union[str, Path]] = None) -> Dict[DoctrineName, Doctrine]:
    """Parse doctrines.yaml into a DoctrineName-keyed table.

    Every DoctrineName must be present; extra names are rejected.
    """
    path = Path(filepath) if filepath else DOCTRINES_PATH
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    blocks = data.get("doctrines")
    if not isinstance(blocks, dict):
        raise ValueError(f"{path}: expected a top-level 'doctrines' mapping")

    table: Dict[DoctrineName, Doctrine] = {}
    for raw_name, block in blocks.items():
        try:
            name = DoctrineName(raw_name)
        except ValueError:
            raise ValueError(f"{path}: unknown doctrine {raw_name!r}") from None
        table[name] = _parse_doctrine(name, block)

    missing = [n.value for n in DoctrineName if n not in table]
    if missing:
        raise ValueError(f"{path}: missing doctrines {missing}")
    return table


def default_doctrines(filepath: Optional[Union[str, Path]] = None) -> Dict[DoctrineName, Doctrine]:
    key = str(Path(filepath).resolve() if filepath else DOCTRINES_PATH.resolve())
    if key not in _cache:
        _cache[key] = load_doctrines(key)
    return _cache[key]


# ---------------------------------------------------------------------------
# Doctrine selection
# ---------------------------------------------------------------------------

def select_doctrine(
    target_type: TargetType,
    analysis: DefenderAnalysis,
    objective: Objective,
    doctrines: Dict[DoctrineName, Doctrine],
) -> Doctrine:
    """Pick the doctrine for a target. First match wins.

    `objective` does not take part in the decision; it only steers the
    budget and scoring further down the pipeline.
    """
    if analysis.infantry_heavy:
        name = DoctrineName.ANTI_INFANTRY
    elif analysis.vehicle_heavy:
        name = DoctrineName.ANTI_VEHICLE
    elif target_type == TargetType.BASE or analysis.turret_heavy:
        name = DoctrineName.BASE_ASSAULT
    else:
        name = DoctrineName.BALANCED

    log.debug("Doctrine %s for %s target (objective %s)",
              name.value, target_type.value, objective.value)
    return doctrines[name]

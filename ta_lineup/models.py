"""
Tiberium Alliances Lineup Optimizer - Data Models
===================================================
All dataclasses and enums shared by the recommendation engine.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from enum import Enum


# ---------------------------------------------------------------------------
# Enums (values are the wire strings used in data files and the API)
# ---------------------------------------------------------------------------

class Objective(Enum):
    MIN_REPAIR_TIME = "min_repair_time"
    MIN_POWER_COST = "min_power_cost"
    MAX_LOOT_PER_MINUTE = "max_loot_per_minute"
    MAX_WIN_CHANCE = "max_win_chance"


class TargetType(Enum):
    CAMP = "camp"
    OUTPOST = "outpost"
    BASE = "base"


class Faction(Enum):
    NOD = "nod"
    GDI = "gdi"
    FORGOTTEN = "forgotten"


class UnitType(Enum):
    INFANTRY = "infantry"
    VEHICLE = "vehicle"
    AIR = "air"


class ArmorType(Enum):
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"
    AIR = "air"


class EconomyTier(Enum):
    CHEAP = "cheap"          # expendable, cheap to repair
    STANDARD = "standard"
    PREMIUM = "premium"


# ---------------------------------------------------------------------------
# Unit catalog
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DamageVs:
    infantry: float = 1.0
    vehicle: float = 1.0
    structure: float = 1.0
    air: float = 1.0


@dataclass(frozen=True)
class UnitStats:
    unit_key: str
    name: str
    faction: Faction
    unit_type: UnitType
    ap_cost: int
    armor_type: ArmorType
    range: float
    speed: float
    hp_by_level: Dict[int, float] = field(default_factory=dict)
    dps_by_level: Dict[int, float] = field(default_factory=dict)
    damage_vs: Optional[DamageVs] = None
    economy_tier: EconomyTier = EconomyTier.STANDARD
    source: str = ""
    confidence: str = ""    # "high", "medium", "low" or unknown

    @property
    def is_cheap(self) -> bool:
        return self.economy_tier == EconomyTier.CHEAP


# ---------------------------------------------------------------------------
# Extracted input (player roster + enemy target)
# ---------------------------------------------------------------------------

@dataclass
class RosterUnit:
    unit_key: str
    level: int
    count: Optional[int] = None     # None = unknown / unconstrained


@dataclass
class DefenderUnit:
    unit_key: str
    level: int
    count: Optional[int] = None     # None = counts as a single unit


@dataclass
class DefenseBuilding:
    building_key: str
    approx_pos: Optional[Tuple[float, float]] = None
    level: Optional[int] = None


@dataclass
class Target:
    target_type: TargetType
    level: Optional[int] = None
    defender_units: List[DefenderUnit] = field(default_factory=list)
    defense_buildings: List[DefenseBuilding] = field(default_factory=list)
    terrain_tags: List[str] = field(default_factory=list)


@dataclass
class ExtractedData:
    player_roster: List[RosterUnit] = field(default_factory=list)
    target: Target = field(default_factory=lambda: Target(TargetType.CAMP))


@dataclass
class EngineOptions:
    cp_limit: Optional[float] = None        # None = DEFAULT_CP_LIMIT
    player_level: Optional[int] = None


# ---------------------------------------------------------------------------
# Engine output
# ---------------------------------------------------------------------------

@dataclass
class LineupUnit:
    unit_key: str
    desired_level: int
    count: int


@dataclass
class WavePlan:
    wave: int
    units: List[LineupUnit] = field(default_factory=list)
    strategy: str = ""


@dataclass
class LineupRecommendation:
    lineup: List[LineupUnit] = field(default_factory=list)
    wave_plan: List[WavePlan] = field(default_factory=list)
    score: float = 0
    risk: float = 0
    explanation: str = ""
    cp_total: int = 0
    doctrine: str = ""
    objective: Optional[Objective] = None

    @property
    def army_size(self) -> int:
        return sum(u.count for u in self.lineup)


@dataclass
class Recommendations:
    top: LineupRecommendation
    alternatives: List[LineupRecommendation] = field(default_factory=list)


@dataclass
class Analysis:
    """One engine run: what was asked, what it saw and what it recommended."""
    objective: Objective
    extracted: ExtractedData
    recommendations: Recommendations
    version: str = ""
    analysis_id: str = ""


@dataclass
class PresetLineup:
    name: str
    lineup: List[LineupUnit] = field(default_factory=list)
    wave_plan: List[WavePlan] = field(default_factory=list)
    description: str = ""
    tags: List[str] = field(default_factory=list)

"""
Tiberium Alliances Lineup Optimizer - Scoring
===============================================
Heuristic score (suitability, higher is better) and risk (lower is
better) for a lineup. Both are pure and clamped to 0-100.
"""

from typing import List

from ta_lineup.catalog import UnitCatalog
from ta_lineup.models import LineupUnit, Objective, TargetType
from ta_lineup.parity import (
    ARMY_RISK_WEIGHT, BASE_RISK, BASE_SCORE, BASE_TARGET_RISK, CAMP_TARGET_RISK,
    CHEAP_UNIT_BONUS, COUNTER_BONUS, COUNTER_THRESHOLD, DEFENDER_RISK_WEIGHT,
    LOOT_BONUS_CAP, LOOT_COST_DIVISOR, SCORE_MAX, SCORE_MIN, WIN_BONUS_CAP,
    WIN_COST_DIVISOR,
)
from ta_lineup.strategy import DefenderAnalysis


def clamp(value: float, lo: float = SCORE_MIN, hi: float = SCORE_MAX) -> float:
    return min(max(value, lo), hi)


def lineup_cost(lineup: List[LineupUnit], catalog: UnitCatalog) -> int:
    """Total CP of a lineup; unknown units cost nothing."""
    return sum(catalog.cost_of(u.unit_key) * u.count for u in lineup)


def _cheap_entries(lineup: List[LineupUnit], catalog: UnitCatalog) -> int:
    count = 0
    for unit in lineup:
        stats = catalog.get(unit.unit_key)
        if stats and stats.is_cheap:
            count += 1
    return count


def _counter_bonus(lineup: List[LineupUnit], analysis: DefenderAnalysis,
                   catalog: UnitCatalog) -> int:
    bonus = 0
    for unit in lineup:
        stats = catalog.get(unit.unit_key)
        if stats is None or stats.damage_vs is None:
            continue
        if analysis.infantry_heavy and stats.damage_vs.infantry > COUNTER_THRESHOLD:
            bonus += COUNTER_BONUS
        if analysis.vehicle_heavy and stats.damage_vs.vehicle > COUNTER_THRESHOLD:
            bonus += COUNTER_BONUS
    return bonus


def calculate_score(
    lineup: List[LineupUnit],
    objective: Objective,
    analysis: DefenderAnalysis,
    catalog: UnitCatalog,
) -> float:
    score = BASE_SCORE
    total_cost = lineup_cost(lineup, catalog)

    if objective in (Objective.MIN_REPAIR_TIME, Objective.MIN_POWER_COST):
        # Cheap soak infantry repairs fast and costs little power
        score += _cheap_entries(lineup, catalog) * CHEAP_UNIT_BONUS
    elif objective == Objective.MAX_LOOT_PER_MINUTE:
        score += min(total_cost / LOOT_COST_DIVISOR, LOOT_BONUS_CAP)
    elif objective == Objective.MAX_WIN_CHANCE:
        score += min(total_cost / WIN_COST_DIVISOR, WIN_BONUS_CAP)

    score += _counter_bonus(lineup, analysis, catalog)
    return round(clamp(score), 2)


def calculate_risk(
    lineup: List[LineupUnit],
    analysis: DefenderAnalysis,
    target_type: TargetType,
) -> float:
    risk = BASE_RISK
    risk += analysis.total_strength * DEFENDER_RISK_WEIGHT
    risk -= sum(u.count for u in lineup) * ARMY_RISK_WEIGHT

    if target_type == TargetType.BASE:
        risk += BASE_TARGET_RISK
    elif target_type == TargetType.CAMP:
        risk += CAMP_TARGET_RISK

    return clamp(risk)

"""
Tiberium Alliances Lineup Optimizer - Recommendation Engine
=============================================================
Runs the full pipeline (defender analysis -> doctrine -> lineup -> waves
-> score/risk -> explanation) for the requested objective, plus up to two
alternates under different objectives and budgets.

Everything here is a pure function of its inputs: identical inputs give
identical Recommendations, and no input makes the engine raise.
"""

import logging
import uuid
from typing import Dict, Optional, Union

from ta_lineup.catalog import UnitCatalog, default_catalog
from ta_lineup.explain import generate_explanation
from ta_lineup.lineup import build_lineup
from ta_lineup.models import (
    Analysis, EngineOptions, ExtractedData, LineupRecommendation, Objective,
    Recommendations,
)
from ta_lineup.parity import (
    DEFAULT_CP_LIMIT, ENGINE_VERSION, LOOT_ALT_BUDGET_FACTOR, MAX_ALTERNATIVES,
)
from ta_lineup.scoring import calculate_risk, calculate_score, lineup_cost
from ta_lineup.strategy import (
    Doctrine, DoctrineName, analyze_defenders, default_doctrines, select_doctrine,
)
from ta_lineup.waves import generate_wave_plan

log = logging.getLogger(__name__)


def parse_objective(value: Union[Objective, str]) -> Objective:
    """Accept an Objective or its string value."""
    if isinstance(value, Objective):
        return value
    try:
        return Objective(value)
    except ValueError:
        raise ValueError(
            f"Unknown objective: {value!r}. Choose from: {[o.value for o in Objective]}"
        ) from None


def resolve_cp_limit(options: Optional[EngineOptions]) -> float:
    if options is None or options.cp_limit is None:
        return DEFAULT_CP_LIMIT
    return options.cp_limit


def generate_lineup(
    extracted: ExtractedData,
    objective: Objective,
    cp_limit: float,
    options: EngineOptions,
    catalog: UnitCatalog,
    doctrines: Dict[DoctrineName, Doctrine],
) -> LineupRecommendation:
    """One scored lineup for a single objective and budget."""
    target = extracted.target

    analysis = analyze_defenders(target.defender_units, catalog)
    doctrine = select_doctrine(target.target_type, analysis, objective, doctrines)
    lineup = build_lineup(extracted.player_roster, doctrine, cp_limit, catalog, options)
    wave_plan = generate_wave_plan(lineup, doctrine)

    return LineupRecommendation(
        lineup=lineup,
        wave_plan=wave_plan,
        score=calculate_score(lineup, objective, analysis, catalog),
        risk=calculate_risk(lineup, analysis, target.target_type),
        explanation=generate_explanation(doctrine, analysis, objective),
        cp_total=lineup_cost(lineup, catalog),
        doctrine=doctrine.name.value,
        objective=objective,
    )


def generate_recommendations(
    extracted: ExtractedData,
    objective: Union[Objective, str],
    options: Optional[EngineOptions] = None,
    catalog: Optional[UnitCatalog] = None,
    doctrines: Optional[Dict[DoctrineName, Doctrine]] = None,
) -> Recommendations:
    """Top lineup for `objective` plus alternates.

    - min_repair_time alternate at the same budget (unless that is the objective)
    - max_loot_per_minute alternate at 90% of the budget (unless that is the objective)
    """
    objective = parse_objective(objective)
    options = options or EngineOptions()
    catalog = catalog if catalog is not None else default_catalog()
    doctrines = doctrines if doctrines is not None else default_doctrines()
    cp_limit = resolve_cp_limit(options)

    top = generate_lineup(extracted, objective, cp_limit, options, catalog, doctrines)

    alternatives = []
    if objective != Objective.MIN_REPAIR_TIME:
        alternatives.append(generate_lineup(
            extracted, Objective.MIN_REPAIR_TIME, cp_limit, options, catalog, doctrines,
        ))
    if objective != Objective.MAX_LOOT_PER_MINUTE:
        alternatives.append(generate_lineup(
            extracted, Objective.MAX_LOOT_PER_MINUTE, cp_limit * LOOT_ALT_BUDGET_FACTOR,
            options, catalog, doctrines,
        ))

    log.debug("%s: top %s score=%s risk=%s, %d alternates",
              objective.value, top.doctrine, top.score, top.risk, len(alternatives))
    return Recommendations(top=top, alternatives=alternatives[:MAX_ALTERNATIVES])


class RecommendationEngine:
    """Binds a catalog and doctrine table for repeated analyses."""

    def __init__(self, catalog: Optional[UnitCatalog] = None,
                 doctrines: Optional[Dict[DoctrineName, Doctrine]] = None):
        self.catalog = catalog if catalog is not None else default_catalog()
        self.doctrines = doctrines if doctrines is not None else default_doctrines()

    def recommend(self, extracted: ExtractedData, objective: Union[Objective, str],
                  options: Optional[EngineOptions] = None) -> Recommendations:
        return generate_recommendations(
            extracted, objective, options, catalog=self.catalog, doctrines=self.doctrines,
        )

    def analyze(self, extracted: ExtractedData, objective: Union[Objective, str],
                options: Optional[EngineOptions] = None,
                analysis_id: Optional[str] = None) -> Analysis:
        """Run the engine and wrap the result in an Analysis record."""
        objective = parse_objective(objective)
        return Analysis(
            objective=objective,
            extracted=extracted,
            recommendations=self.recommend(extracted, objective, options),
            version=ENGINE_VERSION,
            analysis_id=analysis_id or uuid.uuid4().hex[:12],
        )

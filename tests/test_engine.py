"""End-to-end tests for the recommendation engine."""

import json
import math

import pytest

from ta_lineup.catalog import UnitCatalog
from ta_lineup.engine import (
    RecommendationEngine, generate_recommendations, parse_objective, resolve_cp_limit,
)
from ta_lineup.io import recommendations_to_dict
from ta_lineup.models import (
    EngineOptions, ExtractedData, Objective, RosterUnit, Target, TargetType,
)
from ta_lineup.parity import ENGINE_VERSION
from ta_lineup.scoring import lineup_cost


def _counts(lineup):
    return [(u.unit_key, u.count) for u in lineup]


# ---------------------------------------------------------------------------
# Demo outpost
# ---------------------------------------------------------------------------

def test_demo_top_recommendation(demo_extracted):
    recs = generate_recommendations(demo_extracted, Objective.MAX_WIN_CHANCE)
    top = recs.top
    assert top.doctrine == "Anti-Infantry"
    assert top.objective == Objective.MAX_WIN_CHANCE
    assert _counts(top.lineup) == [
        ("nod_militant", 2), ("nod_reckoner", 3), ("nod_venom", 3),
        ("nod_attack_bike", 2), ("nod_scorpion", 1), ("nod_rocket", 1),
    ]
    assert top.cp_total == 375
    assert top.score == 100
    assert top.risk == 46
    assert top.explanation == (
        "Using Anti-Infantry doctrine. "
        "Enemy has many infantry units - using anti-infantry counters. "
        "Maximum firepower for highest win probability."
    )
    assert [w.wave for w in top.wave_plan] == [1, 2, 3]


def test_demo_alternatives(demo_extracted):
    recs = generate_recommendations(demo_extracted, "max_win_chance")
    repair, loot = recs.alternatives
    assert repair.objective == Objective.MIN_REPAIR_TIME
    assert (repair.score, repair.risk, repair.cp_total) == (70, 46, 375)
    assert loot.objective == Objective.MAX_LOOT_PER_MINUTE
    assert (loot.score, loot.cp_total) == (90, 375)
    assert _counts(loot.lineup) == _counts(recs.top.lineup)


@pytest.mark.parametrize("objective, expected", [
    (Objective.MIN_REPAIR_TIME, [Objective.MAX_LOOT_PER_MINUTE]),
    (Objective.MAX_LOOT_PER_MINUTE, [Objective.MIN_REPAIR_TIME]),
    (Objective.MIN_POWER_COST, [Objective.MIN_REPAIR_TIME, Objective.MAX_LOOT_PER_MINUTE]),
    (Objective.MAX_WIN_CHANCE, [Objective.MIN_REPAIR_TIME, Objective.MAX_LOOT_PER_MINUTE]),
])
def test_alternatives_skip_own_objective(demo_extracted, objective, expected):
    recs = generate_recommendations(demo_extracted, objective)
    assert [a.objective for a in recs.alternatives] == expected
    assert len(recs.alternatives) <= 2


def test_loot_alternate_uses_ninety_percent_budget(demo_extracted):
    recs = generate_recommendations(demo_extracted, Objective.MAX_WIN_CHANCE,
                                    EngineOptions(cp_limit=100))
    loot = recs.alternatives[-1]
    assert loot.cp_total <= 90
    assert recs.top.cp_total <= 100


# ---------------------------------------------------------------------------
# Small scenarios
# ---------------------------------------------------------------------------

def test_militants_against_camp(militant_camp):
    top = generate_recommendations(militant_camp, Objective.MAX_WIN_CHANCE).top
    assert top.doctrine == "Balanced"
    assert _counts(top.lineup) == [("nod_militant", 2)]
    assert top.cp_total == 20
    assert top.score == 52.5
    assert top.risk == 36
    assert len(top.wave_plan) == 1
    assert top.wave_plan[0].wave == 1


def test_tiny_budget_gives_empty_lineup(demo_extracted):
    top = generate_recommendations(demo_extracted, Objective.MAX_WIN_CHANCE,
                                   EngineOptions(cp_limit=5)).top
    assert top.lineup == []
    assert top.cp_total == 0
    assert top.score == 50
    assert top.risk == 70
    assert len(top.wave_plan) == 1
    assert top.wave_plan[0].units == []


def test_empty_inputs_do_not_raise():
    extracted = ExtractedData(player_roster=[], target=Target(TargetType.BASE))
    recs = generate_recommendations(extracted, Objective.MIN_POWER_COST)
    assert recs.top.lineup == []
    assert recs.top.doctrine == "Base Assault"
    assert recs.top.risk == 70


def test_unknown_units_everywhere():
    extracted = ExtractedData(
        player_roster=[RosterUnit("scrin_buzzer", 10, 5)],
        target=Target(TargetType.OUTPOST),
    )
    top = generate_recommendations(extracted, Objective.MAX_WIN_CHANCE).top
    assert top.lineup == []
    assert top.doctrine == "Balanced"


def test_infinite_budget_takes_preferred_counts(militant_camp, demo_extracted):
    top = generate_recommendations(militant_camp, Objective.MAX_WIN_CHANCE,
                                   EngineOptions(cp_limit=math.inf)).top
    assert _counts(top.lineup) == [("nod_militant", 2)]

    recs = generate_recommendations(demo_extracted, Objective.MAX_WIN_CHANCE,
                                    EngineOptions(cp_limit=math.inf))
    assert recs.top.cp_total == 375
    assert all(a.cp_total == 375 for a in recs.alternatives)


@pytest.mark.parametrize("cp_limit", [math.nan, -math.inf, -50])
def test_unusable_budget_gives_empty_lineup(demo_extracted, cp_limit):
    top = generate_recommendations(demo_extracted, Objective.MAX_WIN_CHANCE,
                                   EngineOptions(cp_limit=cp_limit)).top
    assert top.lineup == []
    assert top.cp_total == 0


def test_empty_catalog_is_used_as_given(militant_camp):
    empty = UnitCatalog([])
    top = generate_recommendations(militant_camp, Objective.MAX_WIN_CHANCE, catalog=empty).top
    assert top.lineup == []
    assert RecommendationEngine(catalog=empty).catalog is empty


def test_unknown_objective_rejected(demo_extracted):
    with pytest.raises(ValueError, match="Unknown objective"):
        generate_recommendations(demo_extracted, "max_fun")


# ---------------------------------------------------------------------------
# Laws
# ---------------------------------------------------------------------------

def test_identical_inputs_identical_output(demo_extracted):
    a = generate_recommendations(demo_extracted, Objective.MIN_POWER_COST)
    b = generate_recommendations(demo_extracted, Objective.MIN_POWER_COST)
    assert json.dumps(recommendations_to_dict(a)) == json.dumps(recommendations_to_dict(b))


@pytest.mark.parametrize("cp_limit", [0, 10, 55, 120, 260, 499, 2000])
@pytest.mark.parametrize("objective", list(Objective))
def test_every_recommendation_within_budget(demo_extracted, catalog, cp_limit, objective):
    recs = generate_recommendations(demo_extracted, objective, EngineOptions(cp_limit=cp_limit))
    owned = {r.unit_key for r in demo_extracted.player_roster}
    for rec in [recs.top] + recs.alternatives:
        assert rec.cp_total == lineup_cost(rec.lineup, catalog)
        assert rec.cp_total <= cp_limit
        assert {u.unit_key for u in rec.lineup} <= owned
        assert 0 <= rec.score <= 100
        assert 0 <= rec.risk <= 100


def test_waves_partition_role_units(demo_extracted, doctrines):
    for objective in Objective:
        top = generate_recommendations(demo_extracted, objective).top
        planned = [u.unit_key for w in top.wave_plan for u in w.units]
        assert len(planned) == len(set(planned))
        assert set(planned) <= {u.unit_key for u in top.lineup}


# ---------------------------------------------------------------------------
# Helpers and engine object
# ---------------------------------------------------------------------------

def test_parse_objective():
    assert parse_objective("min_repair_time") == Objective.MIN_REPAIR_TIME
    assert parse_objective(Objective.MAX_LOOT_PER_MINUTE) == Objective.MAX_LOOT_PER_MINUTE


def test_resolve_cp_limit():
    assert resolve_cp_limit(None) == 500
    assert resolve_cp_limit(EngineOptions()) == 500
    assert resolve_cp_limit(EngineOptions(cp_limit=0)) == 0
    assert resolve_cp_limit(EngineOptions(cp_limit=320)) == 320


def test_engine_analyze_wraps_result(demo_extracted, catalog, doctrines):
    engine = RecommendationEngine(catalog=catalog, doctrines=doctrines)
    analysis = engine.analyze(demo_extracted, "max_win_chance", analysis_id="demo-1")
    assert analysis.analysis_id == "demo-1"
    assert analysis.version == ENGINE_VERSION
    assert analysis.objective == Objective.MAX_WIN_CHANCE
    assert analysis.extracted is demo_extracted
    assert analysis.recommendations.top.cp_total == 375


def test_engine_generates_ids(demo_extracted):
    engine = RecommendationEngine()
    a = engine.analyze(demo_extracted, Objective.MAX_WIN_CHANCE)
    b = engine.analyze(demo_extracted, Objective.MAX_WIN_CHANCE)
    assert a.analysis_id != b.analysis_id
    assert len(a.analysis_id) == 12

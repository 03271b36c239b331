"""Tests for defender analysis and doctrine selection."""

import pytest

from ta_lineup.models import DefenderUnit, Objective, TargetType
from ta_lineup.strategy import (
    AttackRole, DefenderAnalysis, Doctrine, DoctrineName, analyze_defenders,
    load_doctrines, select_doctrine,
)


# ---------------------------------------------------------------------------
# Defender analysis
# ---------------------------------------------------------------------------

def test_infantry_heavy(catalog, infantry_defenders):
    a = analyze_defenders(infantry_defenders, catalog)
    assert a.infantry_heavy
    assert not a.vehicle_heavy
    assert a.total_strength == 10
    assert (a.infantry_count, a.vehicle_count, a.air_count) == (8, 2, 0)


def test_vehicle_heavy_needs_only_forty_percent(catalog):
    a = analyze_defenders([
        DefenderUnit("nod_militant", 30, 3),
        DefenderUnit("gdi_predator", 30, 2),
        DefenderUnit("forgotten_jeep", 30, 1),
    ], catalog)
    # 3 vehicles of 6 = 50% > 40%, 3 infantry of 6 is not a majority
    assert a.vehicle_heavy
    assert not a.infantry_heavy


def test_exact_half_infantry_is_not_heavy(catalog):
    a = analyze_defenders([
        DefenderUnit("nod_militant", 30, 2),
        DefenderUnit("nod_scorpion", 30, 1),
        DefenderUnit("nod_venom", 30, 1),
    ], catalog)
    assert not a.infantry_heavy
    assert not a.vehicle_heavy
    assert a.air_present


def test_missing_count_weighs_one(catalog):
    a = analyze_defenders([
        DefenderUnit("nod_militant", 30),
        DefenderUnit("nod_scorpion", 30),
    ], catalog)
    assert a.total_strength == 2
    assert a.vehicle_heavy         # 1 > 0.8
    assert not a.infantry_heavy    # 1 > 1 is false


def test_unknown_defenders_ignored(catalog):
    a = analyze_defenders([
        DefenderUnit("scrin_tripod", 60, 10),
        DefenderUnit("gdi_rifleman", 20, 1),
    ], catalog)
    assert a.total_strength == 1
    assert a.infantry_heavy


def test_zero_count_weighs_nothing(catalog):
    a = analyze_defenders([
        DefenderUnit("nod_militant", 30, 0),
        DefenderUnit("nod_scorpion", 30, 1),
    ], catalog)
    assert a.total_strength == 1
    assert a.infantry_count == 0
    assert a.vehicle_heavy
    assert not a.infantry_heavy


def test_empty_defenders(catalog):
    """No defenders: all flags false, no division by zero."""
    a = analyze_defenders([], catalog)
    assert a == DefenderAnalysis()


def test_turrets_never_flagged(catalog, infantry_defenders):
    assert analyze_defenders(infantry_defenders, catalog).turret_heavy is False


# ---------------------------------------------------------------------------
# Doctrine selection
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("target_type", list(TargetType))
@pytest.mark.parametrize("objective", list(Objective))
def test_infantry_heavy_always_anti_infantry(doctrines, target_type, objective):
    a = DefenderAnalysis(infantry_heavy=True, vehicle_heavy=True, total_strength=10)
    d = select_doctrine(target_type, a, objective, doctrines)
    assert d.name == DoctrineName.ANTI_INFANTRY


def test_vehicle_heavy_beats_base(doctrines):
    a = DefenderAnalysis(vehicle_heavy=True)
    d = select_doctrine(TargetType.BASE, a, Objective.MAX_WIN_CHANCE, doctrines)
    assert d.name == DoctrineName.ANTI_VEHICLE


def test_base_assault_for_bases(doctrines):
    d = select_doctrine(TargetType.BASE, DefenderAnalysis(), Objective.MIN_POWER_COST, doctrines)
    assert d.name == DoctrineName.BASE_ASSAULT


def test_turret_heavy_means_base_assault(doctrines):
    a = DefenderAnalysis(turret_heavy=True)
    d = select_doctrine(TargetType.CAMP, a, Objective.MAX_WIN_CHANCE, doctrines)
    assert d.name == DoctrineName.BASE_ASSAULT


@pytest.mark.parametrize("target_type", [TargetType.CAMP, TargetType.OUTPOST])
def test_balanced_fallback(doctrines, target_type):
    d = select_doctrine(target_type, DefenderAnalysis(), Objective.MAX_WIN_CHANCE, doctrines)
    assert d.name == DoctrineName.BALANCED


def test_objective_does_not_change_doctrine(doctrines):
    a = DefenderAnalysis(vehicle_heavy=True)
    names = {select_doctrine(TargetType.OUTPOST, a, o, doctrines).name for o in Objective}
    assert names == {DoctrineName.ANTI_VEHICLE}


# ---------------------------------------------------------------------------
# Doctrine table
# ---------------------------------------------------------------------------

def test_doctrine_table_contents(doctrines):
    assert set(doctrines) == set(DoctrineName)
    ai = doctrines[DoctrineName.ANTI_INFANTRY]
    assert ai.core_units == ["nod_reckoner", "nod_venom", "gdi_orca"]
    assert ai.priorities == ["anti-infantry", "speed", "soak"]
    for d in doctrines.values():
        assert d.soak_units == ["nod_militant", "gdi_rifleman"]


def test_doctrine_roles_do_not_overlap(doctrines):
    for d in doctrines.values():
        soak, core, support = set(d.soak_units), set(d.core_units), set(d.support_units)
        assert not (soak & core or soak & support or core & support), d.name


def test_role_precedence():
    d = Doctrine(
        name=DoctrineName.BALANCED,
        soak_units=["a"], core_units=["a", "b"], support_units=["b", "c"],
    )
    assert d.role_of("a") == AttackRole.SOAK
    assert d.role_of("b") == AttackRole.CORE
    assert d.role_of("c") == AttackRole.SUPPORT
    assert d.role_of("z") is None


def test_missing_doctrine_rejected(tmp_path):
    path = tmp_path / "doctrines.yaml"
    path.write_text("doctrines:\n  Balanced: {soak: [a], core: [b], support: [], priorities: []}\n")
    with pytest.raises(ValueError, match="missing doctrines"):
        load_doctrines(path)


def test_unknown_doctrine_rejected(tmp_path):
    path = tmp_path / "doctrines.yaml"
    path.write_text("doctrines:\n  Blitz: {soak: [a]}\n")
    with pytest.raises(ValueError, match="Blitz"):
        load_doctrines(path)

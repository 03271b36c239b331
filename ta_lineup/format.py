"""
Tiberium Alliances Lineup Optimizer - Output Formatting
=========================================================
Pretty-printing for recommendations and the unit catalog.
"""

from typing import List, Optional

from ta_lineup.catalog import UnitCatalog
from ta_lineup.models import (
    LineupRecommendation, LineupUnit, Recommendations, Target, UnitStats,
)


def fmt_pct(val: float) -> str:
    return f"{val * 100:.0f}%"


def fmt_objective(rec: LineupRecommendation) -> str:
    return rec.objective.value if rec.objective else "-"


def print_full_report(recs: Recommendations, catalog: UnitCatalog,
                      target: Optional[Target] = None):
    print()
    print("=" * 70)
    print("  TIBERIUM ALLIANCES LINEUP OPTIMIZER")
    if target is not None:
        level = f" (level {target.level})" if target.level is not None else ""
        print(f"  Target: {target.target_type.value}{level}")
    print(f"  Objective: {fmt_objective(recs.top)}")
    print("=" * 70)

    print_recommendation(recs.top, catalog, title="RECOMMENDED LINEUP")
    print_wave_plan(recs.top, catalog)

    for i, alt in enumerate(recs.alternatives, start=1):
        print_recommendation(alt, catalog, title=f"ALTERNATIVE {i} ({fmt_objective(alt)})")


def print_recommendation(rec: LineupRecommendation, catalog: UnitCatalog,
                         title: str = "LINEUP"):
    print()
    print(f"--- {title} ---")
    print(f" Doctrine: {rec.doctrine}")
    print(f" Score: {rec.score:g}   Risk: {rec.risk:g}   Total CP: {rec.cp_total}")
    print(f" {rec.explanation}")
    print()
    print_lineup(rec.lineup, catalog)


def print_lineup(lineup: List[LineupUnit], catalog: UnitCatalog):
    if not lineup:
        print(" (no affordable units)")
        return
    print(f" {'Unit':<24} {'Level':>5} {'Count':>5} {'CP':>6} {'Type':<9}")
    print(f" {'-' * 24} {'-' * 5} {'-' * 5} {'-' * 6} {'-' * 9}")
    for unit in lineup:
        stats = catalog.get(unit.unit_key)
        name = stats.name if stats else unit.unit_key
        cp = catalog.cost_of(unit.unit_key) * unit.count
        utype = stats.unit_type.value if stats else "?"
        print(f" {name:<24} {unit.desired_level:>5} {unit.count:>5} {cp:>6} {utype:<9}")


def print_wave_plan(rec: LineupRecommendation, catalog: UnitCatalog):
    print()
    print("--- WAVE PLAN ---")
    for wave in rec.wave_plan:
        print(f" Wave {wave.wave}: {wave.strategy}")
        for unit in wave.units:
            stats = catalog.get(unit.unit_key)
            name = stats.name if stats else unit.unit_key
            print(f"   {unit.count}x {name} (lvl {unit.desired_level})")


def print_units(units: List[UnitStats]):
    print(f"Units: {len(units)}")
    print(f"{'Key':<20} {'Name':<22} {'Faction':<10} {'Type':<9} {'AP':>4} "
          f"{'Armor':<7} {'Rng':>4} {'Spd':>4}  Damage vs (inf/veh/str/air)")
    print("-" * 110)
    for u in units:
        if u.damage_vs:
            dv = u.damage_vs
            damage = " / ".join(fmt_pct(v) for v in (dv.infantry, dv.vehicle, dv.structure, dv.air))
        else:
            damage = "-"
        print(f"{u.unit_key:<20} {u.name[:21]:<22} {u.faction.value:<10} "
              f"{u.unit_type.value:<9} {u.ap_cost:>4} {u.armor_type.value:<7} "
              f"{u.range:>4g} {u.speed:>4g}  {damage}")

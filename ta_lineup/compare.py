"""
Tiberium Alliances Lineup Optimizer - Comparison
==================================================
Side-by-side comparison of the top lineup and its alternatives.
"""

from typing import List

from ta_lineup.models import LineupRecommendation, Recommendations


def _label(rec: LineupRecommendation, index: int) -> str:
    name = "Top" if index == 0 else f"Alt {index}"
    if rec.objective:
        name += f" ({rec.objective.value})"
    return name


def comparison_rows(recs: List[LineupRecommendation]) -> List[tuple]:
    """(label, values...) rows for the comparison table."""
    unit_keys = []
    for rec in recs:
        for unit in rec.lineup:
            if unit.unit_key not in unit_keys:
                unit_keys.append(unit.unit_key)

    rows = [
        ("Doctrine", [r.doctrine for r in recs]),
        ("Score", [f"{r.score:g}" for r in recs]),
        ("Risk", [f"{r.risk:g}" for r in recs]),
        ("Total CP", [str(r.cp_total) for r in recs]),
        ("Army size", [str(r.army_size) for r in recs]),
        ("Waves", [str(len(r.wave_plan)) for r in recs]),
    ]
    for key in unit_keys:
        counts = []
        for rec in recs:
            entry = next((u for u in rec.lineup if u.unit_key == key), None)
            counts.append(str(entry.count) if entry else "--")
        rows.append((key, counts))
    return rows


def compare_and_print(recommendations: Recommendations):
    recs = [recommendations.top] + list(recommendations.alternatives)
    labels = [_label(r, i) for i, r in enumerate(recs)]
    col_w = max(16, max(len(n) for n in labels) + 2)

    print()
    print("=" * (20 + col_w * len(recs)))
    print("  LINEUP COMPARISON")
    print("=" * (20 + col_w * len(recs)))

    print(f"{'':>20}", end="")
    for label in labels:
        print(f"{label:>{col_w}}", end="")
    print()

    for name, values in comparison_rows(recs):
        print(f" {name:<19}", end="")
        for val in values:
            print(f"{val:>{col_w}}", end="")
        print()

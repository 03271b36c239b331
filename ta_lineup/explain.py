"""
Tiberium Alliances Lineup Optimizer - Explanations
====================================================
"""

from ta_lineup.models import Objective
from ta_lineup.strategy import DefenderAnalysis, Doctrine

OBJECTIVE_SENTENCES = {
    Objective.MIN_REPAIR_TIME: "Prioritizing cheap units to minimize repair time.",
    Objective.MIN_POWER_COST: "Optimizing for low power repair costs.",
    Objective.MAX_LOOT_PER_MINUTE: "Fast attack composition for maximum loot efficiency.",
    Objective.MAX_WIN_CHANCE: "Maximum firepower for highest win probability.",
}

INFANTRY_SENTENCE = "Enemy has many infantry units - using anti-infantry counters."
VEHICLE_SENTENCE = "Enemy has heavy vehicles - deploying anti-vehicle units."


def generate_explanation(doctrine: Doctrine, analysis: DefenderAnalysis,
                         objective: Objective) -> str:
    """Doctrine sentence, defender-profile sentences, then the objective sentence."""
    parts = [f"Using {doctrine.name.value} doctrine."]
    if analysis.infantry_heavy:
        parts.append(INFANTRY_SENTENCE)
    if analysis.vehicle_heavy:
        parts.append(VEHICLE_SENTENCE)
    parts.append(OBJECTIVE_SENTENCES[objective])
    return " ".join(parts)

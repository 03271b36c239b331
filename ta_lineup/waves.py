"""
Tiberium Alliances Lineup Optimizer - Wave Planner
====================================================
Splits a built lineup into attack waves by doctrine role.
"""

import logging
from typing import Dict, List

from ta_lineup.models import LineupUnit, WavePlan
from ta_lineup.strategy import AttackRole, Doctrine

log = logging.getLogger(__name__)

# role -> (wave number, strategy note)
WAVE_FOR_ROLE: Dict[AttackRole, tuple] = {
    AttackRole.SOAK: (
        1, "Send cheap infantry to absorb initial defenses and scout turret positions",
    ),
    AttackRole.CORE: (
        2, "Main attack wave - focus fire on key defensive structures and units",
    ),
    AttackRole.SUPPORT: (
        3, "Cleanup wave - eliminate remaining defenses and secure victory",
    ),
}

SINGLE_WAVE_STRATEGY = "Single wave assault - all units attack together"


def generate_wave_plan(lineup: List[LineupUnit], doctrine: Doctrine) -> List[WavePlan]:
    """Partition the lineup into soak/core/support waves.

    Each entry lands in at most one wave (soak > core > support). Empty
    waves are left out. Entries with no role only appear when no role wave
    exists at all, as a single wave holding the whole lineup.
    """
    by_role: Dict[AttackRole, List[LineupUnit]] = {role: [] for role in WAVE_FOR_ROLE}
    for unit in lineup:
        role = doctrine.role_of(unit.unit_key)
        if role is not None:
            by_role[role].append(unit)

    waves = []
    for role, (wave_no, strategy) in WAVE_FOR_ROLE.items():
        if by_role[role]:
            waves.append(WavePlan(wave=wave_no, units=by_role[role], strategy=strategy))

    if not waves:
        log.debug("No role waves for %s, using a single wave", doctrine.name.value)
        waves.append(WavePlan(wave=1, units=list(lineup), strategy=SINGLE_WAVE_STRATEGY))
    return waves

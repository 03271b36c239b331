"""
Tiberium Alliances Lineup Optimizer - Lineup Builder
======================================================
Greedy, single-pass fill of a CP budget from the player's roster,
driven by the chosen doctrine:

1. soak     - first owned soak unit, up to 2
2. core     - each owned core unit, up to 3 (stop below 50 CP)
3. support  - each owned support unit, up to 2 (stop below 30 CP)
4. fill     - one of every other roster unit, most expensive first
              (stop below 20 CP)
"""

import logging
import math
from typing import Dict, List, Optional

from ta_lineup.catalog import UnitCatalog
from ta_lineup.models import EngineOptions, LineupUnit, RosterUnit
from ta_lineup.parity import (
    CORE_COUNT, CORE_MIN_REMAINING, FILL_COUNT, FILL_MIN_REMAINING,
    SOAK_COUNT, SUPPORT_COUNT, SUPPORT_MIN_REMAINING, UNCONSTRAINED_COUNT,
)
from ta_lineup.strategy import Doctrine

log = logging.getLogger(__name__)


class LineupBuilder:
    """Tracks the lineup under construction and the CP still unspent."""

    def __init__(self, roster: List[RosterUnit], catalog: UnitCatalog, cp_limit: float):
        self.catalog = catalog
        self.remaining_cp = cp_limit
        self.lineup: List[LineupUnit] = []

        # First roster entry per key is the authoritative one
        self._roster: Dict[str, RosterUnit] = {}
        for unit in roster:
            self._roster.setdefault(unit.unit_key, unit)
        self._roster_order = list(roster)

    def owns(self, unit_key: str) -> bool:
        return unit_key in self._roster

    def selected(self, unit_key: str) -> bool:
        return any(u.unit_key == unit_key for u in self.lineup)

    def _affordable(self, cost: int, preferred_count: int) -> int:
        # An infinite budget caps nothing; NaN buys nothing
        if math.isnan(self.remaining_cp):
            return 0
        if math.isinf(self.remaining_cp):
            return preferred_count if self.remaining_cp > 0 else 0
        return int(self.remaining_cp // cost)

    def add_unit(self, unit_key: str, preferred_count: int = 2) -> bool:
        """Add up to `preferred_count` of a unit. Returns False when nothing was added."""
        roster_unit = self._roster.get(unit_key)
        if roster_unit is None:
            return False
        stats = self.catalog.get(unit_key)
        if stats is None or stats.ap_cost <= 0:
            return False
        if self.selected(unit_key):
            return False

        owned = UNCONSTRAINED_COUNT if roster_unit.count is None else roster_unit.count
        affordable = self._affordable(stats.ap_cost, preferred_count)
        count = min(preferred_count, affordable, owned)
        if count <= 0:
            log.debug("Skipped %s (affordable=%d, owned=%d)", unit_key, affordable, owned)
            return False

        self.lineup.append(LineupUnit(
            unit_key=unit_key,
            desired_level=roster_unit.level,
            count=count,
        ))
        self.remaining_cp -= stats.ap_cost * count
        log.debug("Added %dx %s, %.1f CP left", count, unit_key, self.remaining_cp)
        return True

    # -- phases ----------------------------------------------------------

    def add_soak(self, doctrine: Doctrine):
        soak_key: Optional[str] = next(
            (key for key in doctrine.soak_units if self.owns(key)), None
        )
        if soak_key:
            self.add_unit(soak_key, SOAK_COUNT)

    def add_core(self, doctrine: Doctrine):
        for key in doctrine.core_units:
            if self.remaining_cp < CORE_MIN_REMAINING:
                break
            self.add_unit(key, CORE_COUNT)

    def add_support(self, doctrine: Doctrine):
        for key in doctrine.support_units:
            if self.remaining_cp < SUPPORT_MIN_REMAINING:
                break
            self.add_unit(key, SUPPORT_COUNT)

    def fill(self):
        # Stable sort keeps roster order between equally priced units
        leftovers = sorted(
            (u for u in self._roster_order if not self.selected(u.unit_key)),
            key=lambda u: self.catalog.cost_of(u.unit_key),
            reverse=True,
        )
        for unit in leftovers:
            if self.remaining_cp < FILL_MIN_REMAINING:
                break
            self.add_unit(unit.unit_key, FILL_COUNT)


def build_lineup(
    roster: List[RosterUnit],
    doctrine: Doctrine,
    cp_limit: float,
    catalog: UnitCatalog,
    options: Optional[EngineOptions] = None,
) -> List[LineupUnit]:
    """Build a lineup for `doctrine` that never spends more than `cp_limit`.

    An empty lineup is a valid result (e.g. budget below the cheapest unit).
    `options` is accepted for future level-aware selection and is not read.
    """
    builder = LineupBuilder(roster, catalog, cp_limit)
    builder.add_soak(doctrine)
    builder.add_core(doctrine)
    builder.add_support(doctrine)
    builder.fill()
    return builder.lineup

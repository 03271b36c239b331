"""
Tiberium Alliances Lineup Optimizer - Tuning Constants
========================================================
Central registry of every number the recommendation engine depends on.
Values match the lineup heuristics used by the web optimizer so that
recommendations stay reproducible across both.
"""

from pathlib import Path

ENGINE_VERSION = "0.3.0"

# ---------------------------------------------------------------------------
# Data files (shipped inside the package)
# ---------------------------------------------------------------------------

DATA_DIR = Path(__file__).parent / "data"
CATALOG_PATH = DATA_DIR / "unit_stats.yaml"
DOCTRINES_PATH = DATA_DIR / "doctrines.yaml"
DEMO_PATH = DATA_DIR / "demo_outpost.yaml"

# ---------------------------------------------------------------------------
# Budget
# ---------------------------------------------------------------------------

DEFAULT_CP_LIMIT = 500
LOOT_ALT_BUDGET_FACTOR = 0.9    # "fast attack" alternate runs on 90% of the CP
MAX_ALTERNATIVES = 2

# ---------------------------------------------------------------------------
# Defender analysis thresholds (share of weighted defender count)
# ---------------------------------------------------------------------------

INFANTRY_HEAVY_SHARE = 0.5
VEHICLE_HEAVY_SHARE = 0.4
DEFAULT_DEFENDER_WEIGHT = 1

# ---------------------------------------------------------------------------
# Lineup builder phases
# ---------------------------------------------------------------------------
# (preferred count per unit key, stop once remaining CP drops below)

SOAK_COUNT = 2
CORE_COUNT = 3
CORE_MIN_REMAINING = 50
SUPPORT_COUNT = 2
SUPPORT_MIN_REMAINING = 30
FILL_COUNT = 1
FILL_MIN_REMAINING = 20

UNCONSTRAINED_COUNT = 999       # roster entry without a known count

# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

BASE_SCORE = 50
CHEAP_UNIT_BONUS = 10
LOOT_COST_DIVISOR = 10
LOOT_BONUS_CAP = 30
WIN_COST_DIVISOR = 8
WIN_BONUS_CAP = 40
COUNTER_THRESHOLD = 1.2
COUNTER_BONUS = 5

# ---------------------------------------------------------------------------
# Risk (lower is better)
# ---------------------------------------------------------------------------

BASE_RISK = 50
DEFENDER_RISK_WEIGHT = 2
ARMY_RISK_WEIGHT = 2
BASE_TARGET_RISK = 20
CAMP_TARGET_RISK = -10

SCORE_MIN = 0
SCORE_MAX = 100

"""Shared test fixtures for the lineup optimizer test suite."""

import sys
from pathlib import Path

import pytest

# Ensure the repo root is on the path so `ta_lineup` imports work uninstalled
REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from ta_lineup.catalog import load_catalog
from ta_lineup.io import load_extracted
from ta_lineup.models import (
    DefenderUnit, ExtractedData, RosterUnit, Target, TargetType,
)
from ta_lineup.parity import DEMO_PATH
from ta_lineup.strategy import DoctrineName, load_doctrines


@pytest.fixture(scope="session")
def catalog():
    """The bundled unit catalog."""
    return load_catalog()


@pytest.fixture(scope="session")
def doctrines():
    return load_doctrines()


@pytest.fixture
def balanced(doctrines):
    return doctrines[DoctrineName.BALANCED]


@pytest.fixture
def anti_infantry(doctrines):
    return doctrines[DoctrineName.ANTI_INFANTRY]


@pytest.fixture
def anti_vehicle(doctrines):
    return doctrines[DoctrineName.ANTI_VEHICLE]


@pytest.fixture
def demo_extracted():
    """Nod roster vs a level 45 outpost guarded mostly by infantry."""
    return load_extracted(str(DEMO_PATH))


@pytest.fixture
def demo_roster(demo_extracted):
    return demo_extracted.player_roster


@pytest.fixture
def militant_camp():
    """A lone stack of militants against an empty camp."""
    return ExtractedData(
        player_roster=[RosterUnit("nod_militant", 50, 10)],
        target=Target(target_type=TargetType.CAMP),
    )


@pytest.fixture
def infantry_defenders():
    """Defenders that are 80% infantry by weighted count."""
    return [
        DefenderUnit("nod_militant", 40, 6),
        DefenderUnit("gdi_missile", 40, 2),
        DefenderUnit("nod_scorpion", 40, 2),
    ]

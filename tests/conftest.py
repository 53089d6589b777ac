"""
Pytest Configuration and Fixtures

Shared session snapshots for differential engine tests.
"""
import pytest
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from neurodx.core.clinical.presets import empty_session


def make_session(**namespaces):
    """Blank session with the given namespaces merged in (camelCase keys)."""
    session = empty_session()
    for ns, values in namespaces.items():
        session[ns].update(values)
    return session


@pytest.fixture
def session_factory():
    """Factory for sessions built on a blank snapshot."""
    return make_session


@pytest.fixture
def blank_session() -> dict:
    """A freshly reset session, nothing entered."""
    return empty_session()


@pytest.fixture
def equal_pupils() -> dict:
    """Complete pupil data with no anisocoria at all."""
    return {"odLight": 3.0, "osLight": 3.0, "odDark": 6.0, "osDark": 6.0}


@pytest.fixture
def light_dominant_pupils() -> dict:
    """anisL = 2.0, anisD = 0.2 → dominance 'light'."""
    return {"odLight": 4.0, "osLight": 2.0, "odDark": 5.0, "osDark": 4.8}


@pytest.fixture
def dark_dominant_pupils() -> dict:
    """anisL = 0.3, anisD = 2.0 → dominance 'dark'."""
    return {"odLight": 3.3, "osLight": 3.0, "odDark": 6.5, "osDark": 4.5}


@pytest.fixture
def bitemporal_fields() -> dict:
    """Reliable bitemporal defect respecting the vertical meridian."""
    return {
        "bitemporal": True,
        "respectsVerticalMeridian": True,
        "laterality": "binocular",
        "reliability": "good",
    }

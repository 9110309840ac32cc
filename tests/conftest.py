"""Shared fixtures for ClawControl tests."""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

MUTATION_FLAGS = [
    "CLAWCONTROL_ENABLE_STATION_MUTATIONS",
    "NEXT_PUBLIC_ENABLE_STATION_MUTATIONS",
]


@pytest.fixture(autouse=True)
def clear_mutation_flags(monkeypatch):
    """Start every test with station mutations unset."""
    for name in MUTATION_FLAGS:
        monkeypatch.delenv(name, raising=False)

"""Tests for the station mutation policy."""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from config import StationPolicySettings
from stations import (
    CANONICAL_STATION_IDS,
    STATION_MUTATIONS_DISABLED_ERROR,
    STATION_MUTATIONS_DISABLED_MESSAGE,
    StationMutationsDisabled,
    is_canonical_station_id,
    normalize_station_id,
    require_station_mutations,
    station_mutations_enabled,
)


class TestStationMutationsEnabled:
    """Test the mutation gate."""

    def test_disabled_when_unset(self):
        """Test both flags unset keeps mutations locked."""
        assert station_mutations_enabled() is False

    @pytest.mark.parametrize("name", [
        "CLAWCONTROL_ENABLE_STATION_MUTATIONS",
        "NEXT_PUBLIC_ENABLE_STATION_MUTATIONS",
    ])
    def test_enabled_by_either_flag(self, monkeypatch, name):
        """Test either environment flag set to "1" enables mutations."""
        monkeypatch.setenv(name, "1")
        assert station_mutations_enabled() is True

    @pytest.mark.parametrize("value", ["true", "0", "", "yes", " 1", "01"])
    def test_only_exact_one_enables(self, monkeypatch, value):
        """Test values other than "1" keep mutations locked."""
        monkeypatch.setenv("CLAWCONTROL_ENABLE_STATION_MUTATIONS", value)
        monkeypatch.setenv("NEXT_PUBLIC_ENABLE_STATION_MUTATIONS", value)
        assert station_mutations_enabled() is False

    def test_environment_read_at_call_time(self, monkeypatch):
        """Test the gate follows environment changes between calls."""
        assert station_mutations_enabled() is False
        monkeypatch.setenv("CLAWCONTROL_ENABLE_STATION_MUTATIONS", "1")
        assert station_mutations_enabled() is True
        monkeypatch.delenv("CLAWCONTROL_ENABLE_STATION_MUTATIONS")
        assert station_mutations_enabled() is False

    @pytest.mark.parametrize("name", [
        "CLAWCONTROL_NEXT_PUBLIC_ENABLE_STATION_MUTATIONS",
        "clawcontrol_enable_station_mutations",
        "next_public_enable_station_mutations",
        "Clawcontrol_Enable_Station_Mutations",
        "CLAWCONTROL_ENABLE_STATION_MUTATION",
    ])
    def test_other_variable_names_stay_locked(self, monkeypatch, name):
        """Test only the two exact, case-sensitive variable names are honoured."""
        monkeypatch.setenv(name, "1")
        assert station_mutations_enabled() is False

    def test_injected_settings(self):
        """Test an explicit settings object is used instead of the environment."""
        assert station_mutations_enabled(
            StationPolicySettings(_env_file=None, CLAWCONTROL_ENABLE_STATION_MUTATIONS="1")
        ) is True
        assert station_mutations_enabled(
            StationPolicySettings(_env_file=None, NEXT_PUBLIC_ENABLE_STATION_MUTATIONS="1")
        ) is True
        assert station_mutations_enabled(
            StationPolicySettings(_env_file=None, CLAWCONTROL_ENABLE_STATION_MUTATIONS="true")
        ) is False
        assert station_mutations_enabled(StationPolicySettings(_env_file=None)) is False

    def test_injected_settings_ignore_environment(self, monkeypatch):
        """Test an injected object wins over the process environment."""
        config = StationPolicySettings(_env_file=None)
        monkeypatch.setenv("CLAWCONTROL_ENABLE_STATION_MUTATIONS", "1")
        assert station_mutations_enabled(config) is False


class TestRequireStationMutations:
    """Test the raising variant of the gate."""

    def test_raises_when_locked(self):
        with pytest.raises(StationMutationsDisabled) as exc_info:
            require_station_mutations()

        assert exc_info.value.code == STATION_MUTATIONS_DISABLED_ERROR
        assert exc_info.value.to_dict() == {
            "error": STATION_MUTATIONS_DISABLED_MESSAGE,
            "code": "STATION_MUTATIONS_DISABLED",
        }

    def test_passes_when_enabled(self, monkeypatch):
        monkeypatch.setenv("NEXT_PUBLIC_ENABLE_STATION_MUTATIONS", "1")
        require_station_mutations()

    def test_message_explains_lock(self):
        assert "locked" in STATION_MUTATIONS_DISABLED_MESSAGE
        assert "read-only" in STATION_MUTATIONS_DISABLED_MESSAGE


class TestStationCatalog:
    """Test canonical station helpers."""

    def test_canonical_station_ids(self):
        assert CANONICAL_STATION_IDS == [
            "strategic",
            "orchestration",
            "spec",
            "build",
            "qa",
            "security",
            "ops",
            "ship",
            "compound",
            "update",
        ]

    def test_normalize_and_validate(self):
        assert normalize_station_id(" OPS ") == "ops"
        assert normalize_station_id(None) == ""
        assert is_canonical_station_id("OPS") is True
        assert is_canonical_station_id("random") is False

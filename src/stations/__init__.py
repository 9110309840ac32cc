"""Station catalog and mutation policy."""

from .catalog import CANONICAL_STATION_IDS, is_canonical_station_id, normalize_station_id
from .policy import (
    STATION_MUTATIONS_DISABLED_ERROR,
    STATION_MUTATIONS_DISABLED_MESSAGE,
    StationMutationsDisabled,
    require_station_mutations,
    station_mutations_enabled,
)

__all__ = [
    "CANONICAL_STATION_IDS",
    "is_canonical_station_id",
    "normalize_station_id",
    "STATION_MUTATIONS_DISABLED_ERROR",
    "STATION_MUTATIONS_DISABLED_MESSAGE",
    "StationMutationsDisabled",
    "require_station_mutations",
    "station_mutations_enabled",
]

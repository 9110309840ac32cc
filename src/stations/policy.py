"""Station mutation policy.

Station create/update/delete is locked by default in v1. Set
``CLAWCONTROL_ENABLE_STATION_MUTATIONS=1`` (or the front-end mirror
``NEXT_PUBLIC_ENABLE_STATION_MUTATIONS=1``) to enable mutations temporarily.
"""

from typing import Optional
import logging

from config import StationPolicySettings

logger = logging.getLogger(__name__)

STATION_MUTATIONS_DISABLED_ERROR = "STATION_MUTATIONS_DISABLED"
STATION_MUTATIONS_DISABLED_MESSAGE = (
    "Station mutations are locked for v1 defaults. Canonical stations are read-only."
)


class StationMutationsDisabled(Exception):
    """Raised when a station mutation is attempted while the policy is locked."""

    def __init__(
        self,
        message: str = STATION_MUTATIONS_DISABLED_MESSAGE,
        code: str = STATION_MUTATIONS_DISABLED_ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.code = code

    def to_dict(self):
        return {"error": self.message, "code": self.code}


def station_mutations_enabled(config: Optional[StationPolicySettings] = None) -> bool:
    """Check whether station mutations are enabled.

    Args:
        config: Settings to read the flags from. When omitted, settings are
            loaded from the environment at call time.

    Returns:
        True if either flag is exactly "1", False otherwise
    """
    if config is None:
        config = StationPolicySettings()

    return (
        config.enable_station_mutations == "1"
        or config.next_public_enable_station_mutations == "1"
    )


def require_station_mutations(config: Optional[StationPolicySettings] = None) -> None:
    """Raise StationMutationsDisabled unless station mutations are enabled."""
    if not station_mutations_enabled(config):
        logger.warning("Rejected station mutation: mutations are locked")
        raise StationMutationsDisabled()

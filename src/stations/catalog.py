"""Canonical station set for workflow-only v1 defaults."""

from typing import Any, Dict, List, Optional

# (id, icon, description, sort_order)
CANONICAL_STATIONS = [
    ("strategic", "star", "Strategic interface and executive direction", 0),
    ("orchestration", "map", "Workflow orchestration and stage routing", 5),
    ("spec", "file-text", "Planning and specification", 10),
    ("build", "hammer", "Implementation and coding", 20),
    ("qa", "check-circle", "Quality assurance and review", 30),
    ("security", "shield-check", "Security review and risk control", 35),
    ("ops", "settings", "Operations and deployment", 40),
    ("ship", "zap", "Release and rollout", 50),
    ("compound", "brain", "Learning and synthesis", 60),
    ("update", "wrench", "Maintenance and updates", 70),
]

CANONICAL_STATION_IDS: List[str] = [station[0] for station in CANONICAL_STATIONS]


def normalize_station_id(value: Optional[str]) -> str:
    """Trim and lowercase a station id."""
    return (value or "").strip().lower()


def is_canonical_station_id(value: Optional[str]) -> bool:
    return normalize_station_id(value) in CANONICAL_STATION_IDS


def canonical_station_rows() -> List[Dict[str, Any]]:
    """Column values for seeding the canonical stations."""
    return [
        {
            "id": station_id,
            "name": station_id,
            "icon": icon,
            "description": description,
            "color": None,
            "sort_order": sort_order,
        }
        for station_id, icon, description, sort_order in CANONICAL_STATIONS
    ]

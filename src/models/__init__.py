"""Database models for ClawControl."""

from .station import Base, Station

__all__ = [
    "Base",
    "Station"
]

"""API endpoints for stations.

Reads are always allowed. Create, update and delete go through the station
mutation policy and answer 403 with ``STATION_MUTATIONS_DISABLED`` while it
is locked.
"""

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session
from typing import Optional
from pydantic import BaseModel, Field
import logging

from config import StationPolicySettings
from database import get_db
from models import Station
from stations import (
    STATION_MUTATIONS_DISABLED_ERROR,
    STATION_MUTATIONS_DISABLED_MESSAGE,
    is_canonical_station_id,
    normalize_station_id,
    require_station_mutations,
    station_mutations_enabled,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_policy_settings() -> StationPolicySettings:
    """Load policy settings from the environment on every request."""
    return StationPolicySettings()


class StationCreate(BaseModel):
    id: str = Field(..., min_length=1, max_length=64)
    name: Optional[str] = Field(None, max_length=255)
    icon: str = Field("circle", min_length=1, max_length=64)
    description: Optional[str] = Field(None, max_length=1000)
    color: Optional[str] = Field(None, max_length=32)
    sort_order: int = 0


class StationUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    icon: Optional[str] = Field(None, min_length=1, max_length=64)
    description: Optional[str] = Field(None, max_length=1000)
    color: Optional[str] = Field(None, max_length=32)
    sort_order: Optional[int] = None


def _get_station_or_404(db: Session, station_id: str) -> Station:
    station = db.query(Station).filter(Station.id == normalize_station_id(station_id)).first()
    if not station:
        raise HTTPException(status_code=404, detail="Station not found")
    return station


def _station_dict(station: Station) -> dict:
    data = station.to_dict()
    data["canonical"] = is_canonical_station_id(station.id)
    return data


@router.get("/stations")
async def list_stations(db: Session = Depends(get_db)):
    """List all stations ordered for display."""
    stations = db.query(Station).order_by(Station.sort_order, Station.id).all()
    return {
        "total": len(stations),
        "stations": [_station_dict(station) for station in stations]
    }


@router.get("/stations/policy")
async def get_station_policy(config: StationPolicySettings = Depends(get_policy_settings)):
    """Report whether station mutations are currently allowed."""
    return {
        "mutations_enabled": station_mutations_enabled(config),
        "code": STATION_MUTATIONS_DISABLED_ERROR,
        "message": STATION_MUTATIONS_DISABLED_MESSAGE
    }


@router.get("/stations/{station_id}")
async def get_station(station_id: str, db: Session = Depends(get_db)):
    """Get a specific station by ID."""
    return _station_dict(_get_station_or_404(db, station_id))


@router.post("/stations", status_code=201)
async def create_station(
    station: StationCreate,
    db: Session = Depends(get_db),
    config: StationPolicySettings = Depends(get_policy_settings)
):
    """Create a new station."""
    require_station_mutations(config)

    station_id = normalize_station_id(station.id)
    if not station_id:
        raise HTTPException(status_code=422, detail="Station id must not be blank")

    if db.query(Station).filter(Station.id == station_id).first():
        raise HTTPException(status_code=409, detail="Station already exists")

    db_station = Station(
        id=station_id,
        name=(station.name or "").strip() or station_id,
        icon=station.icon,
        description=station.description,
        color=station.color,
        sort_order=station.sort_order
    )

    db.add(db_station)
    db.commit()
    db.refresh(db_station)

    logger.info(f"Created station '{db_station.id}'")
    return _station_dict(db_station)


@router.put("/stations/{station_id}")
async def update_station(
    station_id: str,
    station_update: StationUpdate,
    db: Session = Depends(get_db),
    config: StationPolicySettings = Depends(get_policy_settings)
):
    """Update a station."""
    require_station_mutations(config)

    station = _get_station_or_404(db, station_id)

    if station_update.name is not None:
        station.name = station_update.name
    if station_update.icon is not None:
        station.icon = station_update.icon
    if station_update.description is not None:
        station.description = station_update.description
    if station_update.color is not None:
        station.color = station_update.color
    if station_update.sort_order is not None:
        station.sort_order = station_update.sort_order

    db.commit()
    db.refresh(station)

    logger.info(f"Updated station '{station.id}'")
    return _station_dict(station)


@router.delete("/stations/{station_id}")
async def delete_station(
    station_id: str,
    db: Session = Depends(get_db),
    config: StationPolicySettings = Depends(get_policy_settings)
):
    """Delete a station."""
    require_station_mutations(config)

    station = _get_station_or_404(db, station_id)

    db.delete(station)
    db.commit()

    logger.info(f"Deleted station '{station_id}'")
    return {"message": "Station deleted successfully"}

from fastapi import APIRouter, HTTPException, Query

from househelp.api.v1.schemas import LocationReadingSchema
from househelp.application.use_cases.location_tracking import LocationTracker
from househelp.domain.entities.location import LocationReading
from househelp.wiring.dependencies import (
    get_backend,
    get_location_tracker,
    get_position_source,
    release_location_tracker,
)

router = APIRouter(prefix="/locations")


def _reading(req: LocationReadingSchema) -> LocationReading:
    return LocationReading(latitude=req.latitude, longitude=req.longitude, accuracy=req.accuracy)


@router.post("/{worker_id}/readings")
async def submit_reading(worker_id: str, req: LocationReadingSchema) -> dict[str, bool]:
    """Report a reading now, subject to the significant-change filter."""
    tracker = get_location_tracker(worker_id)
    reported = await tracker.submit_reading(_reading(req))
    return {"reported": reported}


@router.post("/{worker_id}/positions")
def push_position(worker_id: str, req: LocationReadingSchema) -> dict[str, bool]:
    """Queue a reading for the next tracking tick."""
    get_position_source(worker_id).push(_reading(req))
    return {"queued": True}


@router.post("/{worker_id}/tracking/start")
async def start_tracking(worker_id: str) -> dict[str, bool]:
    tracker = get_location_tracker(worker_id)
    if not tracker.start_tracking():
        raise HTTPException(status_code=409, detail="Location tracking could not be started")
    return {"tracking": True}


@router.post("/{worker_id}/tracking/stop")
async def stop_tracking(worker_id: str) -> dict[str, bool]:
    release_location_tracker(worker_id)
    return {"tracking": False}


@router.get("/geofence")
async def check_geofence(
    lat: float = Query(ge=-90, le=90),
    lng: float = Query(ge=-180, le=180),
):
    tracker = LocationTracker(backend=get_backend())
    return await tracker.check_geofence(lat, lng)

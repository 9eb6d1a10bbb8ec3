from __future__ import annotations

import asyncio
import logging

from househelp.application.exceptions import BackendError
from househelp.application.ports.backend import BackendPort
from househelp.application.ports.position_source import PositionSourcePort
from househelp.application.utils.geo import SIGNIFICANT_CHANGE_METERS, is_significant_change
from househelp.domain.entities.location import GeofenceResult, LocationReading


class LocationTracker:
    """
    Reports a worker's position to the backend on a fixed interval.
    Only the last successfully written point is remembered; readings within
    threshold_meters of it are dropped. Failed writes are not retried, the
    next tick simply tries again.
    """

    def __init__(
        self,
        backend: BackendPort,
        position_source: PositionSourcePort | None = None,
        interval_seconds: float = 30.0,
        threshold_meters: float = SIGNIFICANT_CHANGE_METERS,
    ) -> None:
        self._backend = backend
        self._position_source = position_source
        self._interval_seconds = interval_seconds
        self._threshold_meters = threshold_meters
        self._worker_id: str | None = None
        self._task: asyncio.Task[None] | None = None
        self._last_reported: LocationReading | None = None
        self._logger = logging.getLogger(__name__)

    @property
    def worker_id(self) -> str | None:
        return self._worker_id

    @property
    def last_reported(self) -> LocationReading | None:
        return self._last_reported

    @property
    def is_tracking(self) -> bool:
        return self._task is not None and not self._task.done()

    def initialize(self, worker_id: str) -> bool:
        if not worker_id or not worker_id.strip():
            self._logger.error("Worker ID not set")
            return False
        self._worker_id = worker_id
        return True

    def start_tracking(self) -> bool:
        """Start the periodic reporter. Must be called from a running event loop."""
        if not self._worker_id:
            self._logger.error("Worker ID not set")
            return False
        if self._position_source is None:
            self._logger.error("No position source configured", extra={"worker_id": self._worker_id})
            return False

        self.stop_tracking()
        try:
            self._task = asyncio.get_running_loop().create_task(self._run())
        except RuntimeError as e:
            self._logger.error("Error starting location tracking", extra={"error": str(e)})
            return False
        self._logger.info("Location tracking started", extra={"worker_id": self._worker_id})
        return True

    def stop_tracking(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval_seconds)
            await self.report_location()

    async def report_location(self) -> bool:
        """One tick: read the current position and report it if it moved enough."""
        if self._position_source is None:
            return False
        try:
            reading = await self._position_source.get_current_position()
        except Exception as e:
            self._logger.error("Error reporting location", extra={"worker_id": self._worker_id, "error": str(e)})
            return False
        if reading is None:
            return False
        return await self.submit_reading(reading)

    async def submit_reading(self, reading: LocationReading) -> bool:
        """Returns True when the reading was written to the backend."""
        if not self._worker_id:
            self._logger.error("Worker ID not set")
            return False

        if self._last_reported is not None and not is_significant_change(
            reading, self._last_reported, self._threshold_meters
        ):
            return False

        if not await self._update_location(reading):
            return False
        self._last_reported = reading
        return True

    async def _update_location(self, reading: LocationReading) -> bool:
        try:
            await self._backend.rpc(
                "update_worker_location",
                {
                    "worker_id_param": self._worker_id,
                    "lat": reading.latitude,
                    "lng": reading.longitude,
                },
            )
            return True
        except BackendError as e:
            self._logger.error(
                "Error updating location in database",
                extra={"worker_id": self._worker_id, "rpc": "update_worker_location", "error": str(e)},
            )
            return False

    async def check_geofence(self, latitude: float, longitude: float) -> GeofenceResult:
        try:
            rows = await self._backend.rpc("is_within_geofence", {"lat": latitude, "lng": longitude})
            if rows:
                return GeofenceResult(in_zone=True, zone_name=rows[0].get("zone_name"))
            return GeofenceResult(in_zone=False)
        except (BackendError, KeyError, TypeError, AttributeError) as e:
            self._logger.error("Error checking geofence", extra={"error": str(e)})
            return GeofenceResult(in_zone=False)

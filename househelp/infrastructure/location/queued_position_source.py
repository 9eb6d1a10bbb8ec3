from __future__ import annotations

from househelp.application.ports.position_source import PositionSourcePort
from househelp.domain.entities.location import LocationReading


class QueuedPositionSource(PositionSourcePort):
    """Positions pushed by the device; each tick consumes the latest one."""

    def __init__(self) -> None:
        self._latest: LocationReading | None = None

    def push(self, reading: LocationReading) -> None:
        self._latest = reading

    async def get_current_position(self) -> LocationReading | None:
        reading, self._latest = self._latest, None
        return reading

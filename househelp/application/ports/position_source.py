from __future__ import annotations

from abc import ABC, abstractmethod

from househelp.domain.entities.location import LocationReading


class PositionSourcePort(ABC):
    @abstractmethod
    async def get_current_position(self) -> LocationReading | None:
        """Latest known position, or None when no fix is available."""
        raise NotImplementedError

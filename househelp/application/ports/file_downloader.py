from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class FileDownloaderPort(ABC):
    @abstractmethod
    async def download(self, url: str, destination: Path) -> Path:
        """Fetch url into destination. Returns the written path."""
        raise NotImplementedError

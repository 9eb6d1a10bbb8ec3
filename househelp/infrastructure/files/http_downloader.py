from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import httpx

from househelp.application.exceptions import BackendUpstreamError
from househelp.application.ports.file_downloader import FileDownloaderPort


class HttpFileDownloader(FileDownloaderPort):
    def __init__(self, timeout: float = 30.0, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._timeout = timeout
        self._transport = transport
        self._logger = logging.getLogger(__name__)

    async def download(self, url: str, destination: Path) -> Path:
        """Stream url into a sibling .tmp file, then move it over destination."""
        await asyncio.to_thread(destination.parent.mkdir, parents=True, exist_ok=True)
        temp_path = destination.with_suffix(destination.suffix + ".tmp")
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                async with client.stream("GET", url) as resp:
                    resp.raise_for_status()
                    f = await asyncio.to_thread(open, temp_path, "wb")
                    try:
                        async for chunk in resp.aiter_bytes():
                            await asyncio.to_thread(f.write, chunk)
                    finally:
                        await asyncio.to_thread(f.close)
            await asyncio.to_thread(temp_path.replace, destination)
        except httpx.HTTPError as e:
            self._logger.error("File download failed", extra={"error": str(e)})
            raise BackendUpstreamError(f"Download of {url} failed: {e}") from e
        except OSError as e:
            self._logger.error("Could not write downloaded file", extra={"error": str(e)})
            raise
        finally:
            # No-op once the move succeeded.
            await asyncio.to_thread(temp_path.unlink, missing_ok=True)

        self._logger.info("File downloaded", extra={"status": "ok"})
        return destination

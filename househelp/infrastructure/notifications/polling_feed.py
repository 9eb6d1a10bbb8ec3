from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

from househelp.application.exceptions import BackendError
from househelp.application.ports.backend import BackendPort, TableQuery
from househelp.application.ports.notification_feed import (
    FeedSubscription,
    NotificationCallback,
    NotificationFeedPort,
)
from househelp.application.utils.rows import entities_from_rows
from househelp.domain.entities.notification import Notification


class PollingSubscription(FeedSubscription):
    def __init__(self, task: asyncio.Task[None]) -> None:
        self._task = task

    @property
    def active(self) -> bool:
        return not self._task.done()

    def unsubscribe(self) -> None:
        self._task.cancel()


class PollingNotificationFeed(NotificationFeedPort):
    """
    Emulates an insert feed by polling the notifications table for rows
    created after the newest one already delivered.
    """

    def __init__(self, backend: BackendPort, interval_seconds: float = 5.0) -> None:
        self._backend = backend
        self._interval_seconds = interval_seconds
        self._logger = logging.getLogger(__name__)

    def subscribe(self, user_id: str, callback: NotificationCallback) -> PollingSubscription:
        since = datetime.now(timezone.utc).isoformat()
        task = asyncio.get_running_loop().create_task(self._poll(user_id, callback, since))
        return PollingSubscription(task)

    async def _poll(self, user_id: str, callback: NotificationCallback, since: str) -> None:
        while True:
            await asyncio.sleep(self._interval_seconds)
            since = await self.poll_once(user_id, callback, since)

    async def poll_once(self, user_id: str, callback: NotificationCallback, since: str) -> str:
        """Deliver rows newer than since. Returns the new high-water mark."""
        try:
            rows = await self._backend.select(
                "notifications",
                TableQuery(eq={"user_id": user_id}, gt={"created_at": since}, order=(("created_at", True),)),
            )
            notifications = entities_from_rows(Notification, rows)
        except BackendError as e:
            self._logger.error("Error polling notifications", extra={"user_id": user_id, "error": str(e)})
            return since

        for notification in notifications:
            await callback(notification)
            since = notification.created_at
        return since

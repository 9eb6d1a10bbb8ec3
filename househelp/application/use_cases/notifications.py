from __future__ import annotations

import logging
from typing import Any

from househelp.application.exceptions import BackendError
from househelp.application.ports.backend import BackendPort, TableQuery
from househelp.application.ports.notification_feed import (
    FeedSubscription,
    NotificationCallback,
    NotificationFeedPort,
)
from househelp.application.utils.rows import entities_from_rows
from househelp.domain.entities.notification import Notification, NotificationType


class NotificationUseCase:
    def __init__(self, backend: BackendPort, feed: NotificationFeedPort | None = None) -> None:
        self._backend = backend
        self._feed = feed
        self._subscription: FeedSubscription | None = None
        self._user_id: str | None = None
        self._handler: NotificationCallback | None = None
        self._logger = logging.getLogger(__name__)

    @property
    def is_subscribed(self) -> bool:
        return self._subscription is not None

    @property
    def subscribed_user_id(self) -> str | None:
        return self._user_id

    def initialize(self, user_id: str, handler: NotificationCallback | None = None) -> None:
        """Subscribe to new notifications for user_id, replacing any earlier subscription."""
        if self._feed is None:
            self._logger.warning("Notification feed not configured", extra={"user_id": user_id})
            return
        self.cleanup()
        self._handler = handler
        self._subscription = self._feed.subscribe(user_id, self._handle_new_notification)
        self._user_id = user_id
        self._logger.info("Subscribed to notifications", extra={"user_id": user_id})

    def cleanup(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self._user_id = None

    async def _handle_new_notification(self, notification: Notification) -> None:
        try:
            if self._handler is not None:
                await self._handler(notification)
            else:
                self._logger.info(
                    "Notification received: %s",
                    notification.title,
                    extra={"user_id": notification.user_id},
                )
        except Exception as e:
            self._logger.error(
                "Error handling new notification", extra={"user_id": notification.user_id, "error": str(e)}
            )

    async def get_notifications(self, user_id: str) -> list[Notification]:
        try:
            rows = await self._backend.select(
                "notifications",
                TableQuery(eq={"user_id": user_id}, order=(("created_at", False),)),
            )
            return entities_from_rows(Notification, rows)
        except BackendError as e:
            self._logger.error("Error fetching notifications", extra={"user_id": user_id, "error": str(e)})
            return []

    async def get_unread_count(self, user_id: str) -> int:
        try:
            return await self._backend.count(
                "notifications", TableQuery(eq={"user_id": user_id, "is_read": False})
            )
        except BackendError as e:
            self._logger.error("Error fetching unread count", extra={"user_id": user_id, "error": str(e)})
            return 0

    async def mark_as_read(self, user_id: str, notification_ids: list[str] | None = None) -> bool:
        """Mark the given notifications, or all of the user's when ids is None, as read."""
        try:
            await self._backend.rpc(
                "mark_notifications_read",
                {"user_id_param": user_id, "notification_ids": notification_ids},
            )
            return True
        except BackendError as e:
            self._logger.error(
                "Error marking notifications as read", extra={"user_id": user_id, "error": str(e)}
            )
            return False

    async def create_notification(
        self,
        user_id: str,
        title: str,
        body: str,
        type: NotificationType | str,
        data: dict[str, Any] | None = None,
    ) -> str | None:
        type_value = NotificationType(type).value
        try:
            result = await self._backend.rpc(
                "create_notification",
                {
                    "user_id_param": user_id,
                    "title_param": title,
                    "body_param": body,
                    "type_param": type_value,
                    "data_param": data or None,
                },
            )
            return str(result) if result is not None else None
        except BackendError as e:
            self._logger.error("Error creating notification", extra={"user_id": user_id, "error": str(e)})
            return None

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Awaitable, Callable

from househelp.domain.entities.notification import Notification

NotificationCallback = Callable[[Notification], Awaitable[None]]


class FeedSubscription(ABC):
    @abstractmethod
    def unsubscribe(self) -> None:
        raise NotImplementedError


class NotificationFeedPort(ABC):
    @abstractmethod
    def subscribe(self, user_id: str, callback: NotificationCallback) -> FeedSubscription:
        """Deliver notifications inserted for user_id to callback until unsubscribed."""
        raise NotImplementedError

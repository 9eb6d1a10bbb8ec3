from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class NotificationType(str, Enum):
    booking = "booking"
    message = "message"
    payment = "payment"
    system = "system"
    review = "review"


@dataclass(frozen=True)
class Notification:
    id: str
    user_id: str
    title: str
    type: str
    created_at: str
    body: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
    is_read: bool = False

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, TypeVar

from househelp.application.exceptions import BackendError
from househelp.application.ports.backend import BackendPort
from househelp.application.utils.rows import entities_from_rows
from househelp.domain.entities.analytics import (
    BookingTrend,
    PerformanceMetric,
    ServiceMetric,
    TimeDistribution,
    TopLocation,
    TopService,
)

T = TypeVar("T")

# period -> (lookback days, date bucket format, bucket interval)
TREND_PERIODS: dict[str, tuple[int, str, str]] = {
    "week": (7, "YYYY-MM-DD", "1 day"),
    "month": (30, "YYYY-MM-DD", "1 day"),
    "year": (365, "YYYY-MM", "1 month"),
}


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


class AnalyticsUseCase:
    def __init__(self, backend: BackendPort) -> None:
        self._backend = backend
        self._logger = logging.getLogger(__name__)

    async def _fetch(self, cls: type[T], function: str, params: dict[str, Any], message: str) -> list[T]:
        try:
            rows = await self._backend.rpc(function, params)
            return entities_from_rows(cls, rows)
        except BackendError as e:
            self._logger.error(message, extra={"rpc": function, "error": str(e)})
            return []

    async def get_worker_performance_metrics(
        self, worker_id: str, start_date: datetime | None = None, end_date: datetime | None = None
    ) -> list[PerformanceMetric]:
        return await self._fetch(
            PerformanceMetric,
            "get_worker_performance",
            {
                "worker_id_param": worker_id,
                "start_date_param": _iso(start_date),
                "end_date_param": _iso(end_date),
            },
            "Error fetching worker performance metrics",
        )

    async def get_household_metrics(
        self, user_id: str, start_date: datetime | None = None, end_date: datetime | None = None
    ) -> list[PerformanceMetric]:
        return await self._fetch(
            PerformanceMetric,
            "get_household_metrics",
            {
                "user_id_param": user_id,
                "start_date_param": _iso(start_date),
                "end_date_param": _iso(end_date),
            },
            "Error fetching household metrics",
        )

    async def get_service_metrics(
        self,
        service_type: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> list[ServiceMetric]:
        return await self._fetch(
            ServiceMetric,
            "get_service_metrics",
            {
                "service_type_param": service_type,
                "start_date_param": _iso(start_date),
                "end_date_param": _iso(end_date),
            },
            "Error fetching service metrics",
        )

    async def get_booking_trends(
        self,
        user_id: str,
        is_worker: bool,
        period: str = "month",
        now: datetime | None = None,
    ) -> list[BookingTrend]:
        lookback_days, date_format, interval = TREND_PERIODS.get(period, TREND_PERIODS["month"])
        end = now or datetime.now(timezone.utc)
        start = end - timedelta(days=lookback_days)
        return await self._fetch(
            BookingTrend,
            "get_booking_trends",
            {
                "user_id_param": user_id,
                "is_worker_param": is_worker,
                "start_date_param": start.isoformat(),
                "end_date_param": end.isoformat(),
                "date_format_param": date_format,
                "interval_param": interval,
            },
            "Error fetching booking trends",
        )

    async def get_time_distribution(
        self, user_id: str | None = None, is_worker: bool | None = None
    ) -> list[TimeDistribution]:
        return await self._fetch(
            TimeDistribution,
            "get_time_distribution",
            {"user_id_param": user_id, "is_worker_param": is_worker},
            "Error fetching time distribution",
        )

    async def get_top_services(self, user_id: str, is_worker: bool) -> list[TopService]:
        return await self._fetch(
            TopService,
            "get_top_services",
            {"user_id_param": user_id, "is_worker_param": is_worker},
            "Error fetching top services",
        )

    async def get_top_locations(self, user_id: str, is_worker: bool) -> list[TopLocation]:
        return await self._fetch(
            TopLocation,
            "get_top_locations",
            {"user_id_param": user_id, "is_worker_param": is_worker},
            "Error fetching top locations",
        )

from datetime import datetime
from typing import Literal

from fastapi import APIRouter, Depends

from househelp.application.use_cases.analytics import AnalyticsUseCase
from househelp.wiring.dependencies import get_analytics_use_case

router = APIRouter(prefix="/analytics")


@router.get("/workers/{worker_id}/performance")
async def worker_performance(
    worker_id: str,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    uc: AnalyticsUseCase = Depends(get_analytics_use_case),
):
    return await uc.get_worker_performance_metrics(worker_id, start_date, end_date)


@router.get("/households/{user_id}/metrics")
async def household_metrics(
    user_id: str,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    uc: AnalyticsUseCase = Depends(get_analytics_use_case),
):
    return await uc.get_household_metrics(user_id, start_date, end_date)


@router.get("/services")
async def service_metrics(
    service_type: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    uc: AnalyticsUseCase = Depends(get_analytics_use_case),
):
    return await uc.get_service_metrics(service_type, start_date, end_date)


@router.get("/users/{user_id}/trends")
async def booking_trends(
    user_id: str,
    is_worker: bool = False,
    period: Literal["week", "month", "year"] = "month",
    uc: AnalyticsUseCase = Depends(get_analytics_use_case),
):
    return await uc.get_booking_trends(user_id, is_worker, period)


@router.get("/time-distribution")
async def time_distribution(
    user_id: str | None = None,
    is_worker: bool | None = None,
    uc: AnalyticsUseCase = Depends(get_analytics_use_case),
):
    return await uc.get_time_distribution(user_id, is_worker)


@router.get("/users/{user_id}/top-services")
async def top_services(user_id: str, is_worker: bool = False, uc: AnalyticsUseCase = Depends(get_analytics_use_case)):
    return await uc.get_top_services(user_id, is_worker)


@router.get("/users/{user_id}/top-locations")
async def top_locations(user_id: str, is_worker: bool = False, uc: AnalyticsUseCase = Depends(get_analytics_use_case)):
    return await uc.get_top_locations(user_id, is_worker)

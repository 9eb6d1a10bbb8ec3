from dataclasses import dataclass


@dataclass(frozen=True)
class PerformanceMetric:
    metric_name: str
    metric_value: float
    comparison_value: float | None = None
    change_percentage: float | None = None


@dataclass(frozen=True)
class ServiceMetric:
    service_type: str
    total_bookings: int
    total_revenue: float
    average_booking_amount: float
    unique_customers: int
    unique_workers: int
    average_rating: float


@dataclass(frozen=True)
class BookingTrend:
    date: str
    count: int
    amount: float


@dataclass(frozen=True)
class TimeDistribution:
    day_of_week: int
    hour_of_day: int
    total_bookings: int


@dataclass(frozen=True)
class TopService:
    service_type: str
    count: int


@dataclass(frozen=True)
class TopLocation:
    location: str
    count: int

from __future__ import annotations

from functools import lru_cache
import logging

from househelp.application.ports.backend import BackendPort
from househelp.application.use_cases.analytics import AnalyticsUseCase
from househelp.application.use_cases.discounts import DiscountUseCase
from househelp.application.use_cases.invoices import InvoiceUseCase
from househelp.application.use_cases.language import LanguageUseCase
from househelp.application.use_cases.location_tracking import LocationTracker
from househelp.application.use_cases.matching import MatchingUseCase
from househelp.application.use_cases.notifications import NotificationUseCase
from househelp.application.use_cases.payments import PaymentUseCase
from househelp.application.use_cases.pricing import PricingUseCase
from househelp.application.use_cases.reviews import ReviewUseCase
from househelp.core.config import settings
from househelp.infrastructure.backend.memory_procedures import build_memory_backend
from househelp.infrastructure.backend.seed_data import SEED_TABLES
from househelp.infrastructure.backend.supabase_backend import SupabaseBackend
from househelp.infrastructure.files.http_downloader import HttpFileDownloader
from househelp.infrastructure.location.queued_position_source import QueuedPositionSource
from househelp.infrastructure.notifications.polling_feed import PollingNotificationFeed
from househelp.infrastructure.translations.bundled_catalog import BundledTranslationCatalog


_backend: BackendPort | None = None
_trackers: dict[str, LocationTracker] = {}
_position_sources: dict[str, QueuedPositionSource] = {}


def _is_local() -> bool:
    return settings.ENV.lower() in {"dev", "local"}


def get_backend() -> BackendPort:
    global _backend
    if _backend is None:
        logger = logging.getLogger(__name__)
        if settings.SUPABASE_URL and settings.SUPABASE_ANON_KEY:
            logger.info("Using SupabaseBackend")
            _backend = SupabaseBackend()
        elif _is_local():
            logger.info("Using in-memory backend (Supabase credentials missing, ENV=dev/local)")
            _backend = build_memory_backend(SEED_TABLES)
        else:
            raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY are required outside dev/local.")
    return _backend


def set_backend(backend: BackendPort | None) -> None:
    """Swap the process backend; also drops every cached service built on the old one."""
    global _backend
    _backend = backend
    for tracker in _trackers.values():
        tracker.stop_tracking()
    _trackers.clear()
    _position_sources.clear()
    get_language_use_case.cache_clear()
    get_notification_use_case.cache_clear()


def get_pricing_use_case() -> PricingUseCase:
    return PricingUseCase(backend=get_backend(), hours_per_day=settings.HOURS_PER_DAY)


def get_discount_use_case() -> DiscountUseCase:
    return DiscountUseCase(backend=get_backend(), hours_per_day=settings.HOURS_PER_DAY)


def get_review_use_case() -> ReviewUseCase:
    return ReviewUseCase(backend=get_backend())


def get_payment_use_case() -> PaymentUseCase:
    return PaymentUseCase(backend=get_backend(), currency=settings.DEFAULT_CURRENCY)


def get_invoice_use_case() -> InvoiceUseCase:
    return InvoiceUseCase(
        backend=get_backend(),
        downloader=HttpFileDownloader(timeout=settings.BACKEND_TIMEOUT_SECONDS),
        download_dir=settings.INVOICE_DOWNLOAD_DIR,
    )


def get_analytics_use_case() -> AnalyticsUseCase:
    return AnalyticsUseCase(backend=get_backend())


def get_matching_use_case() -> MatchingUseCase:
    return MatchingUseCase(backend=get_backend())


@lru_cache
def get_language_use_case() -> LanguageUseCase:
    return LanguageUseCase(
        backend=get_backend(),
        catalog=BundledTranslationCatalog(),
        default_language=settings.DEFAULT_LANGUAGE,
    )


@lru_cache
def get_notification_use_case() -> NotificationUseCase:
    backend = get_backend()
    feed = PollingNotificationFeed(backend, interval_seconds=settings.NOTIFICATION_POLL_INTERVAL_SECONDS)
    return NotificationUseCase(backend=backend, feed=feed)


def get_position_source(worker_id: str) -> QueuedPositionSource:
    if worker_id not in _position_sources:
        _position_sources[worker_id] = QueuedPositionSource()
    return _position_sources[worker_id]


def get_location_tracker(worker_id: str) -> LocationTracker:
    """One tracker per worker, each holding that worker's last reported point."""
    tracker = _trackers.get(worker_id)
    if tracker is None:
        tracker = LocationTracker(
            backend=get_backend(),
            position_source=get_position_source(worker_id),
            interval_seconds=settings.LOCATION_TRACKING_INTERVAL_SECONDS,
            threshold_meters=settings.LOCATION_SIGNIFICANT_CHANGE_METERS,
        )
        tracker.initialize(worker_id)
        _trackers[worker_id] = tracker
    return tracker


def release_location_tracker(worker_id: str) -> None:
    """Stop and forget the worker's tracker and its queued positions."""
    tracker = _trackers.pop(worker_id, None)
    if tracker is not None:
        tracker.stop_tracking()
    _position_sources.pop(worker_id, None)


async def shutdown() -> None:
    for tracker in _trackers.values():
        tracker.stop_tracking()
    if get_notification_use_case.cache_info().currsize:
        get_notification_use_case().cleanup()
    if _backend is not None:
        await _backend.aclose()

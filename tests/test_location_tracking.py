import asyncio

from househelp.application.use_cases.location_tracking import LocationTracker
from househelp.domain.entities.location import LocationReading
from househelp.infrastructure.location.queued_position_source import QueuedPositionSource

HOME = LocationReading(latitude=-1.9441, longitude=30.0619)
NUDGED = LocationReading(latitude=HOME.latitude + 0.00008, longitude=HOME.longitude)
MOVED = LocationReading(latitude=HOME.latitude + 0.0001, longitude=HOME.longitude)


def _location_writes(backend):
    return [params for name, params in backend.rpc_calls if name == "update_worker_location"]


def test_initialize_requires_worker_id(backend):
    tracker = LocationTracker(backend)
    assert not tracker.initialize("  ")
    assert tracker.initialize("w1")
    assert tracker.worker_id == "w1"


def test_first_reading_is_always_reported(backend):
    tracker = LocationTracker(backend)
    tracker.initialize("w1")

    assert asyncio.run(tracker.submit_reading(HOME))
    assert tracker.last_reported == HOME
    assert _location_writes(backend) == [{"worker_id_param": "w1", "lat": HOME.latitude, "lng": HOME.longitude}]
    assert backend.rows("worker_locations")[0]["latitude"] == HOME.latitude


def test_small_moves_are_filtered(backend):
    tracker = LocationTracker(backend)
    tracker.initialize("w1")
    asyncio.run(tracker.submit_reading(HOME))

    assert not asyncio.run(tracker.submit_reading(NUDGED))
    assert asyncio.run(tracker.submit_reading(MOVED))
    assert len(_location_writes(backend)) == 2
    assert tracker.last_reported == MOVED


def test_failed_write_keeps_previous_point(backend):
    tracker = LocationTracker(backend)
    tracker.initialize("w1")
    asyncio.run(tracker.submit_reading(HOME))

    backend.fail("update_worker_location")
    assert not asyncio.run(tracker.submit_reading(MOVED))
    assert tracker.last_reported == HOME

    backend.recover("update_worker_location")
    assert asyncio.run(tracker.submit_reading(MOVED))
    assert tracker.last_reported == MOVED


def test_submit_without_worker_does_nothing(backend):
    tracker = LocationTracker(backend)
    assert not asyncio.run(tracker.submit_reading(HOME))
    assert backend.rpc_calls == []


def test_start_tracking_needs_worker_and_source(backend):
    async def scenario():
        no_source = LocationTracker(backend)
        no_source.initialize("w1")
        no_worker = LocationTracker(backend, position_source=QueuedPositionSource())
        return no_source.start_tracking(), no_worker.start_tracking()

    assert asyncio.run(scenario()) == (False, False)


def test_tracking_loop_reports_queued_positions(backend):
    source = QueuedPositionSource()
    tracker = LocationTracker(backend, position_source=source, interval_seconds=0.01)
    tracker.initialize("w1")

    async def scenario():
        source.push(HOME)
        assert tracker.start_tracking()
        assert tracker.is_tracking
        await asyncio.sleep(0.1)
        tracker.stop_tracking()

    asyncio.run(scenario())

    assert not tracker.is_tracking
    assert len(_location_writes(backend)) == 1
    assert tracker.last_reported == HOME


def test_report_location_with_empty_source(backend):
    tracker = LocationTracker(backend, position_source=QueuedPositionSource())
    tracker.initialize("w1")
    assert not asyncio.run(tracker.report_location())


def test_geofence(backend):
    tracker = LocationTracker(backend)

    inside = asyncio.run(tracker.check_geofence(-1.95, 30.06))
    assert inside.in_zone
    assert inside.zone_name == "Kigali"

    outside = asyncio.run(tracker.check_geofence(0.0, 0.0))
    assert not outside.in_zone
    assert outside.zone_name is None


def test_geofence_defaults_to_outside_on_error(backend):
    backend.fail("is_within_geofence")
    result = asyncio.run(LocationTracker(backend).check_geofence(-1.95, 30.06))
    assert not result.in_zone

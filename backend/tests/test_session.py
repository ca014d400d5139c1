"""Tests for the live simulation session."""

import time

import pytest

from wifisim.schemas.access_point import WiFiBand
from wifisim.services.session import SimulationSession

TIMEOUT = 5.0


def wait_for(predicate, timeout=TIMEOUT):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


@pytest.fixture
def session():
    session = SimulationSession(resolution=50, debounce_seconds=0.01)
    yield session
    session.close()


def test_update_builds_map_and_performance(session, make_survey, make_ap, make_client):
    session.update_survey(make_survey([make_ap()], [make_client(x=500)]))

    assert wait_for(lambda: session.signal_map is not None and session.performance is not None)
    assert session.signal_map.signal_at(WiFiBand.GHZ_5, 0, 0) > -120
    assert session.performance.per_client["c1"].associated_ap_id == "ap1"


def test_toggle_client_disabled(session, make_survey, make_ap, make_client):
    session.update_survey(make_survey([make_ap()], [make_client(x=500)]))

    assert session.toggle_client_disabled("c1") is True
    assert session.disabled_client_ids == frozenset({"c1"})
    assert wait_for(
        lambda: session.performance is not None and session.performance.per_client["c1"].is_disabled
    )

    assert session.toggle_client_disabled("c1") is False
    assert wait_for(lambda: not session.performance.per_client["c1"].is_disabled)


def test_removing_all_aps_clears_signal_map(session, make_survey, make_ap, make_client):
    session.update_survey(make_survey([make_ap()], [make_client()]))
    assert wait_for(lambda: session.signal_map is not None)

    session.update_survey(make_survey([], [make_client()]))

    assert session.signal_map is None
    assert wait_for(lambda: session.performance is not None and session.performance.per_ap == {})


def test_survey_without_floor_plan_still_computes_performance(session, make_survey, make_ap, make_client):
    session.update_survey(make_survey([make_ap()], [make_client(x=250)], floor_plan=None))

    assert wait_for(lambda: session.performance is not None)
    assert session.signal_map is None
    assert session.performance.per_client["c1"].associated_ap_id == "ap1"


def test_listener_is_notified(make_survey, make_ap, make_client):
    notified = []
    session = SimulationSession(resolution=50, debounce_seconds=0.01, on_change=notified.append)
    try:
        session.update_survey(make_survey([make_ap()], [make_client()]))
        assert wait_for(lambda: len(notified) >= 2)
        assert notified[0] is session
    finally:
        session.close()

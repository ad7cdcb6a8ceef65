from __future__ import annotations

import pytest

from tests.helpers.clock import ManualScheduler
from webb_deploy.sim.playback import PlaybackController
from webb_deploy.web import session as session_module


@pytest.fixture
def small_store(monkeypatch: pytest.MonkeyPatch):
    scheduler = ManualScheduler()
    monkeypatch.setattr(session_module, "MAX_SESSIONS", 2)
    monkeypatch.setattr(session_module, "_sessions", session_module.OrderedDict())
    monkeypatch.setattr(
        session_module,
        "_new_session",
        lambda: session_module.PlaybackSession(controller=PlaybackController(scheduler=scheduler)),
    )
    yield scheduler
    session_module.close_all_sessions()


def test_existing_cookie_reuses_session(small_store) -> None:
    first_id, first = session_module.get_or_create_session(None)
    same_id, same = session_module.get_or_create_session(first_id)
    assert same_id == first_id
    assert same is first


def test_unknown_cookie_gets_a_fresh_session(small_store) -> None:
    session_id, _ = session_module.get_or_create_session("stale-cookie")
    assert session_id != "stale-cookie"
    assert session_module.get_session(session_id) is not None


def test_store_is_bounded_and_closes_least_recently_used(small_store) -> None:
    scheduler = small_store
    oldest_id, oldest = session_module.get_or_create_session(None)
    oldest.controller.play()
    assert oldest.controller.tick_active

    recent_id, _ = session_module.get_or_create_session(None)
    # Touching the oldest session makes the other one the eviction candidate.
    session_module.get_or_create_session(oldest_id)
    session_module.get_or_create_session(None)

    assert len(session_module._sessions) == 2
    assert session_module.get_session(recent_id) is None
    assert session_module.get_session(oldest_id) is oldest
    assert oldest.controller.tick_active

    session_module.get_or_create_session(None)
    assert session_module.get_session(oldest_id) is None
    assert not oldest.controller.tick_active
    assert scheduler.pending == []

from __future__ import annotations

import asyncio
import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field

from webb_deploy.sim.playback import PlaybackController

logger = logging.getLogger(__name__)

# Least recently used sessions beyond this are closed.
MAX_SESSIONS = 64


@dataclass
class PlaybackSession:
    controller: PlaybackController = field(default_factory=PlaybackController)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def close(self) -> None:
        self.controller.close()


_sessions: OrderedDict[str, PlaybackSession] = OrderedDict()


def _new_session() -> PlaybackSession:
    return PlaybackSession()


def get_or_create_session(session_id: str | None) -> tuple[str, PlaybackSession]:
    if session_id and session_id in _sessions:
        _sessions.move_to_end(session_id)
        return session_id, _sessions[session_id]

    new_id = str(uuid.uuid4())
    session = _new_session()
    _sessions[new_id] = session
    _evict_stale_sessions()
    return new_id, session


def get_session(session_id: str) -> PlaybackSession | None:
    return _sessions.get(session_id)


def close_session(session_id: str) -> None:
    session = _sessions.pop(session_id, None)
    if session is not None:
        session.close()


def close_all_sessions() -> None:
    count = len(_sessions)
    for session_id in list(_sessions):
        close_session(session_id)
    if count:
        logger.info("Closed %d playback session(s).", count)


def _evict_stale_sessions() -> None:
    while len(_sessions) > MAX_SESSIONS:
        session_id = next(iter(_sessions))
        logger.debug("Evicting playback session %s.", session_id)
        close_session(session_id)

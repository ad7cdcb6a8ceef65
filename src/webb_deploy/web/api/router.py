from __future__ import annotations

from fastapi import APIRouter, Request, Response

from webb_deploy.domain.actions import (
    Action,
    JumpToEvent,
    JumpToPreset,
    Pause,
    Play,
    Reset,
    Seek,
    SetSpeed,
    SkipToEnd,
    Step,
)
from webb_deploy.sim.reducer import apply_action
from webb_deploy.web.api import mappers, schemas
from webb_deploy.web.session import PlaybackSession, get_or_create_session

router = APIRouter(prefix="/api")


def _session(request: Request, response: Response) -> PlaybackSession:
    session_id, session = get_or_create_session(request.cookies.get("session_id"))
    response.set_cookie("session_id", session_id, httponly=True)
    return session


async def _dispatch(session: PlaybackSession, action: Action) -> schemas.ApiResponse:
    async with session.lock:
        result = apply_action(session.controller, action)
        return schemas.ApiResponse(
            ok=result.ok,
            message=result.message,
            message_kind=result.message_kind or "info",
            state=mappers.build_snapshot_response(result.snapshot),
        )


@router.get("/state", response_model=schemas.PlaybackSnapshot)
async def get_state(request: Request, response: Response):
    session = _session(request, response)
    async with session.lock:
        return mappers.build_snapshot_response(session.controller.snapshot())


@router.get("/timeline", response_model=schemas.TimelineResponse)
async def get_timeline(request: Request, response: Response):
    session = _session(request, response)
    return mappers.build_timeline_response(session.controller.rules)


@router.post("/playback/play", response_model=schemas.ApiResponse)
async def play(request: Request, response: Response):
    return await _dispatch(_session(request, response), Play())


@router.post("/playback/pause", response_model=schemas.ApiResponse)
async def pause(request: Request, response: Response):
    return await _dispatch(_session(request, response), Pause())


@router.post("/playback/reset", response_model=schemas.ApiResponse)
async def reset(request: Request, response: Response):
    return await _dispatch(_session(request, response), Reset())


@router.post("/playback/skip-to-end", response_model=schemas.ApiResponse)
async def skip_to_end(request: Request, response: Response):
    return await _dispatch(_session(request, response), SkipToEnd())


@router.post("/playback/seek", response_model=schemas.ApiResponse)
async def seek(payload: schemas.SeekRequest, request: Request, response: Response):
    return await _dispatch(_session(request, response), Seek(progress=payload.progress))


@router.post("/playback/step", response_model=schemas.ApiResponse)
async def step(payload: schemas.StepRequest, request: Request, response: Response):
    return await _dispatch(_session(request, response), Step(direction=payload.direction))


@router.post("/playback/speed", response_model=schemas.ApiResponse)
async def set_speed(payload: schemas.SpeedRequest, request: Request, response: Response):
    return await _dispatch(_session(request, response), SetSpeed(multiplier=payload.multiplier))


@router.post("/playback/jump", response_model=schemas.ApiResponse)
async def jump(payload: schemas.JumpRequest, request: Request, response: Response):
    return await _dispatch(_session(request, response), JumpToEvent(index=payload.index))


@router.post("/playback/preset", response_model=schemas.ApiResponse)
async def preset(payload: schemas.PresetRequest, request: Request, response: Response):
    return await _dispatch(_session(request, response), JumpToPreset(name=payload.name))

from __future__ import annotations

from typing import cast

from fastapi import APIRouter, HTTPException, Request
from loguru import logger

from ..services.constraints import ConstraintExtractor
from ..services.exceptions import GenerationFailure
from ..services.orchestrator import SongOrchestrator
from .models import Album, AlbumRequest, Constraints, RenderPayload, SimulationState, Song, SongRequest
from .settings import Settings

router = APIRouter()


def get_orchestrator(request: Request) -> SongOrchestrator:
    return cast(SongOrchestrator, request.app.state.orchestrator)


def get_settings_from(request: Request) -> Settings:
    return cast(Settings, request.app.state.settings)


@router.get("/health")
async def health(request: Request) -> dict[str, object]:
    settings = get_settings_from(request)
    orchestrator = get_orchestrator(request)
    library = orchestrator.library
    return {
        "status": "ok",
        "default_genre": settings.default_genre,
        "library_dir": str(settings.library_dir),
        "library_loaded": library is not None,
        "library_sizes": library.sizes() if library is not None else {},
    }


@router.post("/constraints", response_model=Constraints)
async def constraints(payload: SimulationState) -> Constraints:
    return ConstraintExtractor().extract(payload)


@router.post("/songs", response_model=Song)
async def create_song(payload: SongRequest, request: Request) -> Song:
    orchestrator = get_orchestrator(request)
    try:
        return await orchestrator.generate(payload)
    except GenerationFailure as exc:
        logger.exception("Song generation failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.post("/songs/render", response_model=RenderPayload)
async def render_song(payload: SongRequest, request: Request) -> RenderPayload:
    orchestrator = get_orchestrator(request)
    try:
        song = await orchestrator.generate(payload)
    except GenerationFailure as exc:
        logger.exception("Song generation failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return orchestrator.export_for_rendering(song)


@router.post("/albums", response_model=Album)
async def create_album(payload: AlbumRequest, request: Request) -> Album:
    settings = get_settings_from(request)
    if payload.track_count > settings.album_max_tracks:
        raise HTTPException(
            status_code=422,
            detail=f"track_count exceeds the limit of {settings.album_max_tracks}",
        )
    orchestrator = get_orchestrator(request)
    try:
        return await orchestrator.generate_album(payload)
    except GenerationFailure as exc:
        logger.exception("Album generation failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc

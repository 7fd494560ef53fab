"""High-level song orchestrator sequencing constraint extraction and the engines."""

from __future__ import annotations

import asyncio
import re
from typing import Optional

from loguru import logger

from ..app.models import (
    Album,
    AlbumMetadata,
    AlbumRequest,
    Composition,
    Constraints,
    DrumResult,
    HarmonyResult,
    MelodyResult,
    MusicalContent,
    RenderPayload,
    SimulationState,
    Song,
    SongMetadata,
    SongRequest,
)
from ..app.settings import Settings
from .analysis import analyze
from .constraints import ConstraintExtractor
from .drums import DrumEngine
from .harmony import HarmonyEngine
from .library import ContentLibrary, LibraryLoader
from .melody import MelodyEngine
from .seeded_random import derive_seed

DEFAULT_KEY = "C"
_KEY_ROOT = re.compile(r"^([A-G][#b]?)")


def master_seed_for(state: SimulationState, genre: str, seed: object = None) -> str:
    if seed:
        return str(seed)
    return f"{state.band_name}-{state.current_week}-{genre}"


def key_from_chords(chords: list[str]) -> str:
    match = _KEY_ROOT.match(chords[0]) if chords else None
    return match.group(1) if match else DEFAULT_KEY


class SongOrchestrator:
    """Coordinates library loading, the three engines, and song assembly."""

    def __init__(
        self,
        settings: Settings,
        loader: Optional[LibraryLoader] = None,
        *,
        extractor: Optional[ConstraintExtractor] = None,
        drums: Optional[DrumEngine] = None,
        harmony: Optional[HarmonyEngine] = None,
        melody: Optional[MelodyEngine] = None,
    ) -> None:
        self._settings = settings
        self._loader = loader
        self._extractor = extractor or ConstraintExtractor()
        self._drums = drums or DrumEngine()
        self._harmony = harmony or HarmonyEngine()
        self._melody = melody or MelodyEngine()
        self._library: Optional[ContentLibrary] = None

    @property
    def library(self) -> Optional[ContentLibrary]:
        return self._library

    async def load_library(self, *, refresh: bool = False) -> ContentLibrary:
        if self._library is not None and not refresh:
            return self._library
        if self._loader is None:
            self._library = ContentLibrary.builtin()
            return self._library

        timeout = self._settings.library_timeout_seconds
        try:
            library = await asyncio.wait_for(self._loader.load_library(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("Content library load exceeded {}s; using built-in sets", timeout)
            library = ContentLibrary.builtin()
        self._library = library
        logger.info("Content library ready: {}", library.sizes())
        return library

    def compose(
        self,
        state: SimulationState,
        genre: str = "rock",
        *,
        seed: object = None,
        song_name: Optional[str] = None,
        library: Optional[ContentLibrary] = None,
    ) -> Song:
        """Synchronous pipeline: constraints, drums, harmony, then melody."""
        library = library or self._library or ContentLibrary.builtin()
        master_seed = master_seed_for(state, genre, seed)
        constraints = self._extractor.extract(state)
        drums = self._drums.generate(
            constraints, genre, derive_seed(master_seed, "drums"), library=library
        )
        harmony = self._harmony.generate(
            constraints, genre, derive_seed(master_seed, "harmony"), library=library
        )
        melody = self._melody.assemble(
            harmony, constraints, derive_seed(master_seed, "melody"), library=library
        )
        return self._assemble(state, genre, master_seed, song_name, constraints, drums, harmony, melody)

    async def generate(self, request: SongRequest) -> Song:
        library = await self.load_library()
        state = request.state
        genre = request.genre
        master_seed = master_seed_for(state, genre, request.seed)
        constraints = self._extractor.extract(state)

        # drums and harmony share nothing; melody needs the harmony result
        drums, harmony = await asyncio.gather(
            asyncio.to_thread(
                self._drums.generate,
                constraints,
                genre,
                derive_seed(master_seed, "drums"),
                library=library,
            ),
            asyncio.to_thread(
                self._harmony.generate,
                constraints,
                genre,
                derive_seed(master_seed, "harmony"),
                library=library,
            ),
        )
        melody = await asyncio.to_thread(
            self._melody.assemble,
            harmony,
            constraints,
            derive_seed(master_seed, "melody"),
            library=library,
        )
        song = self._assemble(
            state, genre, master_seed, request.song_name, constraints, drums, harmony, melody
        )
        logger.info(
            "Generated '{}' (seed={}, tempo={:.1f}, mode={})",
            song.metadata.name,
            master_seed,
            song.composition.tempo,
            song.composition.mode.value,
        )
        return song

    async def generate_album(self, request: AlbumRequest) -> Album:
        state = request.state
        base_seed = request.seed or state.band_name
        tracks: list[Song] = []
        for index in range(request.track_count):
            track_request = SongRequest(
                state=state,
                genre=request.genre,
                seed=f"{base_seed}-track-{index}",
                song_name=f"Track {index + 1}",
            )
            tracks.append(await self.generate(track_request))
        album_name = request.album_name or f"{state.band_name or 'Untitled'} Album"
        return Album(
            metadata=AlbumMetadata(
                album_name=album_name,
                genre=request.genre,
                track_count=len(tracks),
            ),
            tracks=tracks,
        )

    @staticmethod
    def export_for_rendering(song: Song) -> RenderPayload:
        content = song.musical_content
        return RenderPayload(
            metadata=song.metadata,
            tempo=song.composition.tempo,
            key=song.composition.key,
            mode=song.composition.mode,
            drums=content.drums,
            harmony=content.harmony,
            melody=content.melody,
        )

    @staticmethod
    def _assemble(
        state: SimulationState,
        genre: str,
        master_seed: str,
        song_name: Optional[str],
        constraints: Constraints,
        drums: DrumResult,
        harmony: HarmonyResult,
        melody: MelodyResult,
    ) -> Song:
        name = song_name or f"{state.band_name or 'Untitled'} - Week {state.current_week}"
        return Song(
            metadata=SongMetadata(
                name=name,
                genre=genre,
                band=state.band_name,
                week=state.current_week,
                seed=master_seed,
            ),
            constraints=constraints,
            musical_content=MusicalContent(drums=drums, harmony=harmony, melody=melody),
            composition=Composition(
                tempo=drums.tempo,
                key=key_from_chords(harmony.progression.chords),
                mode=harmony.mode,
                genre=genre,
                structure=melody.song_structure,
            ),
            analysis=analyze(harmony, constraints),
        )

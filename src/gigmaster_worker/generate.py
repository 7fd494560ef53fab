"""
CLI entry point to run a one-off song generation through the orchestrator.

Example:
    python -m gigmaster_worker.generate --state state.json --genre rock --seed demo
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .app.models import AlbumRequest, SimulationState, SongRequest
from .app.settings import Settings
from .services.library import LibraryLoader
from .services.orchestrator import SongOrchestrator


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a song via the GigMaster worker.")
    parser.add_argument(
        "--state",
        type=Path,
        default=None,
        help="Path to a JSON simulation snapshot (defaults to an empty band).",
    )
    parser.add_argument("--genre", default=None, help="Genre to write in (defaults to settings).")
    parser.add_argument("--seed", default=None, help="Optional master seed override.")
    parser.add_argument("--song-name", default=None, help="Optional song title.")
    parser.add_argument(
        "--album",
        type=int,
        default=None,
        help="Generate an album with this many tracks instead of a single song.",
    )
    parser.add_argument(
        "--library-dir",
        type=Path,
        default=None,
        help="Override content library directory (defaults to worker settings).",
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Override config directory (defaults to worker settings).",
    )
    parser.add_argument("--json", action="store_true", help="Print the full JSON record.")
    return parser.parse_args()


def _load_state(path: Optional[Path]) -> SimulationState:
    if path is None:
        return SimulationState()
    return SimulationState.model_validate_json(path.read_text(encoding="utf-8"))


async def _run(
    *,
    state_path: Optional[Path],
    genre: Optional[str],
    seed: Optional[str],
    song_name: Optional[str] = None,
    album: Optional[int] = None,
    library_dir: Optional[Path] = None,
    config_dir: Optional[Path] = None,
    as_json: bool = False,
) -> None:
    settings_kwargs: dict[str, object] = {}
    if library_dir is not None:
        settings_kwargs["library_dir"] = library_dir
    if config_dir is not None:
        settings_kwargs["config_dir"] = config_dir

    settings = Settings(**settings_kwargs)
    settings.ensure_directories()
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)

    orchestrator = SongOrchestrator(settings, LibraryLoader(settings))
    state = _load_state(state_path)
    genre = genre or settings.default_genre

    if album is not None:
        record = await orchestrator.generate_album(
            AlbumRequest(state=state, genre=genre, seed=seed, track_count=album)
        )
        if as_json:
            print(json.dumps(record.model_dump(mode="json", by_alias=True), indent=2))
            return
        print(f"album         : {record.metadata.album_name}")
        print(f"tracks        : {record.metadata.track_count}")
        for track in record.tracks:
            print(
                f"  {track.metadata.name:<12}: {track.composition.mode.value} "
                f"@ {track.composition.tempo:.1f} bpm ({track.metadata.seed})"
            )
        return

    song = await orchestrator.generate(
        SongRequest(state=state, genre=genre, seed=seed, song_name=song_name)
    )
    if as_json:
        print(json.dumps(song.model_dump(mode="json", by_alias=True), indent=2))
        return

    harmony = song.musical_content.harmony
    drums = song.musical_content.drums
    print(f"song          : {song.metadata.name}")
    print(f"seed          : {song.metadata.seed}")
    print(f"tempo         : {song.composition.tempo:.1f}")
    print(f"key           : {song.composition.key} {song.composition.mode.value}")
    print(f"progression   : {' '.join(harmony.progression.chords)} ({harmony.progression.id})")
    print(f"drums         : {drums.pattern.id} ({drums.source})")
    print(f"melody style  : {song.musical_content.melody.characteristic_style}")
    print(f"commercial    : {song.analysis.commercial_viability:.1f}")
    print(f"originality   : {song.analysis.originality_score:.1f}")
    print(f"quality       : {song.analysis.quality_score}")


def main() -> None:
    args = _parse_args()
    asyncio.run(
        _run(
            state_path=args.state,
            genre=args.genre,
            seed=args.seed,
            song_name=args.song_name,
            album=args.album,
            library_dir=args.library_dir,
            config_dir=args.config_dir,
            as_json=args.json,
        )
    )


if __name__ == "__main__":
    main()

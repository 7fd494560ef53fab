"""Content library repository and its asynchronous loader."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Type

from loguru import logger
from pydantic import BaseModel, ValidationError

from ..app.models import ChordProgression, DrumPattern, MelodyPhrase
from ..app.settings import Settings
from .catalog import BUILTIN_PHRASES, BUILTIN_PROGRESSIONS
from .exceptions import LibraryLoadFailure

LIBRARY_KINDS = ("drums", "progressions", "phrases")

_ENTRY_MODELS: dict[str, Type[BaseModel]] = {
    "drums": DrumPattern,
    "progressions": ChordProgression,
    "phrases": MelodyPhrase,
}


@dataclass(frozen=True)
class ContentLibrary:
    """Immutable content handed to the engines for one or more generations.

    An empty drum set means the engine uses its built-in pattern families. Empty
    progression or phrase sets mean the load failed; the built-in sets stand in.
    """

    drums: Tuple[DrumPattern, ...] = ()
    progressions: Tuple[ChordProgression, ...] = ()
    phrases: Tuple[MelodyPhrase, ...] = ()

    @classmethod
    def builtin(cls) -> "ContentLibrary":
        return cls(progressions=BUILTIN_PROGRESSIONS, phrases=BUILTIN_PHRASES)

    def progression_set(self) -> Tuple[ChordProgression, ...]:
        if self.progressions:
            return self.progressions
        logger.warning(
            "Progression library unavailable; using {} built-in progressions",
            len(BUILTIN_PROGRESSIONS),
        )
        return BUILTIN_PROGRESSIONS

    def phrase_set(self) -> Tuple[MelodyPhrase, ...]:
        if self.phrases:
            return self.phrases
        logger.warning(
            "Phrase library unavailable; using {} built-in phrases",
            len(BUILTIN_PHRASES),
        )
        return BUILTIN_PHRASES

    def sizes(self) -> dict[str, int]:
        return {
            "drums": len(self.drums),
            "progressions": len(self.progressions),
            "phrases": len(self.phrases),
        }


class LibraryLoader:
    """Reads curated libraries from disk without blocking the event loop."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    async def load(self, kind: str) -> Optional[Tuple[Any, ...]]:
        """Return the validated entries for ``kind`` or ``None`` when unusable."""
        try:
            return await asyncio.to_thread(self._load_sync, kind)
        except LibraryLoadFailure as exc:
            logger.warning("Falling back to built-in {}: {}", kind, exc.reason)
            return None

    async def load_library(self) -> ContentLibrary:
        drums, progressions, phrases = await asyncio.gather(
            self.load("drums"),
            self.load("progressions"),
            self.load("phrases"),
        )
        return ContentLibrary(
            drums=drums or (),
            progressions=progressions or (),
            phrases=phrases or (),
        )

    def _load_sync(self, kind: str) -> Tuple[Any, ...]:
        if kind not in _ENTRY_MODELS:
            raise LibraryLoadFailure(kind, "unknown library kind")
        path = self._settings.library_path(kind)
        if not path.is_file():
            raise LibraryLoadFailure(kind, f"{path} not found")
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise LibraryLoadFailure(kind, f"unable to read {path}: {exc}") from exc

        raw_entries = self._extract_entries(kind, payload)
        model = _ENTRY_MODELS[kind]
        entries: List[Any] = []
        skipped = 0
        for raw in raw_entries:
            try:
                entry = model.model_validate(raw)
            except ValidationError:
                skipped += 1
                continue
            if isinstance(entry, DrumPattern) and not entry.beats.has_hits():
                skipped += 1
                continue
            entries.append(entry)

        if skipped:
            logger.warning("Skipped {} invalid {} entries in {}", skipped, kind, path)
        if not entries:
            raise LibraryLoadFailure(kind, f"no valid entries in {path}")
        logger.info("Loaded {} {} entries from {}", len(entries), kind, path)
        return tuple(entries)

    @staticmethod
    def _extract_entries(kind: str, payload: Any) -> List[Any]:
        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict):
            for key in (kind, "entries", "patterns"):
                value = payload.get(key)
                if isinstance(value, list):
                    return value
        raise LibraryLoadFailure(kind, "expected a JSON array of entries")

"""Chord progression selection driven by genre, mood and industry pressure."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger

from ..app.models import ChordProgression, Constraints, HarmonyResult, Mode
from .catalog import BUILTIN_PROGRESSIONS
from .library import ContentLibrary
from .selection import jitter, weighted_choice
from .seeded_random import SeededRandom

DEFAULT_GENRE = "rock"

COMPLEXITY_BOUNDS: Dict[str, Tuple[float, float]] = {
    "simple": (0.0, 0.5),
    "medium": (0.0, 0.8),
    "high": (0.3, 1.0),
}


@dataclass(frozen=True)
class GenrePreference:
    modes: Tuple[Mode, ...]
    complexity: str

    @property
    def complexity_bounds(self) -> Tuple[float, float]:
        return COMPLEXITY_BOUNDS[self.complexity]


GENRE_PREFERENCES: Dict[str, GenrePreference] = {
    "rock": GenrePreference((Mode.MAJOR, Mode.MINOR), "medium"),
    "punk": GenrePreference((Mode.MAJOR,), "simple"),
    "funk": GenrePreference((Mode.MIXOLYDIAN, Mode.DORIAN), "high"),
    "metal": GenrePreference((Mode.MINOR,), "high"),
    "folk": GenrePreference((Mode.MAJOR, Mode.MINOR), "simple"),
    "jazz": GenrePreference((Mode.DORIAN, Mode.MIXOLYDIAN), "high"),
    "pop": GenrePreference((Mode.MAJOR,), "simple"),
    "indie": GenrePreference((Mode.MAJOR, Mode.MINOR), "medium"),
    "electronic": GenrePreference((Mode.MINOR, Mode.MAJOR), "medium"),
}

LABEL_HOOKS: Dict[str, Dict[str, float]] = {
    "major": {"safe_progressions": 0.8, "experimental_bonus": 0.1},
    "indie": {"safe_progressions": 0.3, "experimental_bonus": 0.7},
    "punk": {"safe_progressions": 0.2, "experimental_bonus": 0.6, "simplicity": 0.8},
}
DEFAULT_LABEL_HOOKS = {"safe_progressions": 0.5, "experimental_bonus": 0.4}


def genre_preference(genre: str) -> GenrePreference:
    return GENRE_PREFERENCES.get(genre, GENRE_PREFERENCES[DEFAULT_GENRE])


class HarmonyEngine:
    """Filters the progression library and roulette-selects a progression."""

    def generate(
        self,
        constraints: Constraints,
        genre: str = DEFAULT_GENRE,
        seed: object = "",
        *,
        library: Optional[ContentLibrary] = None,
    ) -> HarmonyResult:
        rng = SeededRandom(seed)
        library = library or ContentLibrary.builtin()
        preference = genre_preference(genre)

        mode = self._select_mode(preference, constraints, rng)
        candidates = self._candidates(library.progression_set(), mode, preference, constraints)
        weights = [self._weight(progression, constraints, rng) for progression in candidates]
        chosen = weighted_choice(candidates, weights, rng)
        customized = self._customize(chosen, constraints)

        logger.debug(
            "Harmony: {} ({}) in {} from {} candidates", chosen.id, mode.value, genre, len(candidates)
        )
        return HarmonyResult(progression=customized, mode=mode, genre=genre)

    @staticmethod
    def _select_mode(
        preference: GenrePreference, constraints: Constraints, rng: SeededRandom
    ) -> Mode:
        psych = constraints.psych
        if (psych.depression > 60 or psych.paranoia > 70) and Mode.MINOR in preference.modes:
            return Mode.MINOR
        return rng.choice(preference.modes)

    def _candidates(
        self,
        progressions: Sequence[ChordProgression],
        mode: Mode,
        preference: GenrePreference,
        constraints: Constraints,
    ) -> List[ChordProgression]:
        """Apply the full filter, widening until something survives.

        Order: every filter, then mode only over the supplied set, then the
        built-in set in the same mode, then the whole built-in set.
        """
        filtered = [
            progression
            for progression in progressions
            if progression.mode == mode and self._passes(progression, preference, constraints)
        ]
        if filtered:
            return filtered

        same_mode = [progression for progression in progressions if progression.mode == mode]
        if same_mode:
            logger.debug("No progression passed every filter; widening to {} mode", mode.value)
            return same_mode

        builtin_mode = [progression for progression in BUILTIN_PROGRESSIONS if progression.mode == mode]
        if builtin_mode:
            logger.warning("Library has no {} progressions; using built-in set", mode.value)
            return builtin_mode

        logger.warning("No {} progressions anywhere; using full built-in set", mode.value)
        return list(BUILTIN_PROGRESSIONS)

    @staticmethod
    def _passes(
        progression: ChordProgression, preference: GenrePreference, constraints: Constraints
    ) -> bool:
        band = constraints.band
        psych = constraints.psych
        industry = constraints.industry
        resonance = progression.psychological_resonance

        low, high = preference.complexity_bounds
        if not low <= progression.complexity <= high:
            return False
        if band.confidence < 30 and progression.familiarity < 0.7:
            return False
        if industry.label_pressure > 70 and progression.industry_context.commercial_safety < 0.6:
            return False
        if psych.depression > 60 and resonance.depression_weight < 0.4:
            return False
        if psych.corruption > 60 and resonance.corruption_level < 0.4:
            return False
        if psych.burnout > 60 and progression.familiarity < 0.6:
            return False
        return True

    @staticmethod
    def _weight(progression: ChordProgression, constraints: Constraints, rng: SeededRandom) -> float:
        psych = constraints.psych
        pressure = constraints.industry.label_pressure
        resonance = progression.psychological_resonance
        weight = 1.0
        if pressure > 50:
            weight *= 1 + progression.industry_context.commercial_safety
        if psych.burnout > 60:
            weight *= 1 + progression.familiarity
        if pressure > 70:
            weight *= 1 + progression.catchiness
        if psych.depression > 60:
            weight *= 1 + resonance.depression_weight
        if psych.corruption > 60:
            weight *= 1 + resonance.corruption_level
        return weight * jitter(rng)

    @staticmethod
    def _customize(progression: ChordProgression, constraints: Constraints) -> ChordProgression:
        psych = constraints.psych
        update: Dict[str, object] = {}
        if psych.paranoia > 75:
            analysis = progression.harmonic_analysis
            update["harmonic_tension"] = "high"
            update["harmonic_analysis"] = analysis.model_copy(
                update={"dissonance_level": min(1.0, analysis.dissonance_level + 0.3)}
            )
        if psych.addiction_risk > 60:
            update["has_unusual_substitution"] = True
        return progression.model_copy(update=update)

    @staticmethod
    def commercial_viability(progression: ChordProgression) -> float:
        return progression.familiarity * 0.4 + progression.catchiness * 0.6

    @staticmethod
    def gameplay_hooks(label_type: str) -> Dict[str, float]:
        return dict(LABEL_HOOKS.get(label_type, DEFAULT_LABEL_HOOKS))

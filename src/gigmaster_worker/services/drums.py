"""Drum pattern selection with skill, psychology and equipment mutations."""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger

from ..app.models import Constraints, DrumBeats, DrumPattern, DrumResult
from .catalog import (
    BUILTIN_DRUM_FAMILIES,
    FALLBACK_BUCKET,
    GENRE_DRUM_FAMILIES,
    tempo_bucket,
)
from .library import ContentLibrary
from .selection import jitter, weighted_choice
from .seeded_random import SeededRandom

BASE_TEMPO = 120.0
MIN_TEMPO = 60.0
MAX_TEMPO = 180.0
DEFAULT_GENRE = "rock"
MIN_GENRE_WEIGHT = 0.2


class DrumEngine:
    """Picks a groove for the tempo the band can hold and humanises it."""

    def generate(
        self,
        constraints: Constraints,
        genre: str = DEFAULT_GENRE,
        seed: object = "",
        *,
        library: Optional[ContentLibrary] = None,
    ) -> DrumResult:
        rng = SeededRandom(seed)
        tempo = self._select_tempo(constraints, rng)
        pattern, source = self._select_pattern(constraints, genre, tempo, rng, library)
        mutated = self._mutate(pattern, constraints, rng)
        logger.debug(
            "Drums: {} at {:.1f} bpm for {} ({})", mutated.id, tempo, genre, source
        )
        return DrumResult(pattern=mutated, tempo=tempo, genre=genre, source=source)

    @staticmethod
    def _select_tempo(constraints: Constraints, rng: SeededRandom) -> float:
        psych = constraints.psych
        confidence = constraints.band.confidence
        tempo = BASE_TEMPO - psych.depression * 0.2 + psych.substance_use * 0.1
        if confidence > 75:
            tempo += rng.next() * 20
        elif confidence < 35:
            tempo -= rng.next() * 15
        return max(MIN_TEMPO, min(MAX_TEMPO, tempo))

    def _select_pattern(
        self,
        constraints: Constraints,
        genre: str,
        tempo: float,
        rng: SeededRandom,
        library: Optional[ContentLibrary],
    ) -> Tuple[DrumPattern, str]:
        if library is not None and library.drums:
            candidates = self._filter_library(library.drums, constraints, genre, tempo)
            if candidates:
                weights = [self._library_weight(pattern, constraints, rng) for pattern in candidates]
                return weighted_choice(candidates, weights, rng), "library"
            logger.debug(
                "No curated drum pattern fits {:.1f} bpm for {}; using built-in families",
                tempo,
                genre,
            )
        return self._family_pattern(genre, tempo, rng), "builtin"

    @staticmethod
    def _family_pattern(genre: str, tempo: float, rng: SeededRandom) -> DrumPattern:
        families = GENRE_DRUM_FAMILIES.get(genre, GENRE_DRUM_FAMILIES[DEFAULT_GENRE])
        family = rng.choice(families)
        bucket = tempo_bucket(tempo)
        pattern = BUILTIN_DRUM_FAMILIES[bucket].get(family)
        if pattern is None:
            pattern = next(iter(BUILTIN_DRUM_FAMILIES[FALLBACK_BUCKET].values()))
        return pattern

    @staticmethod
    def _filter_library(
        patterns: Sequence[DrumPattern],
        constraints: Constraints,
        genre: str,
        tempo: float,
    ) -> List[DrumPattern]:
        psych = constraints.psych
        drummer_skill = constraints.band.member_skills.drummer
        candidates: List[DrumPattern] = []
        for pattern in patterns:
            low, high = pattern.bpm_range
            if tempo < low or tempo > high:
                continue
            if pattern.genre_weights.get(genre, 0.0) < MIN_GENRE_WEIGHT:
                continue
            tags = pattern.psychological_tags
            if psych.stress > 70 and not tags.stress_appropriate:
                continue
            if drummer_skill < tags.confidence_required * 100:
                continue
            if psych.substance_use > 60 and tags.substance_vulnerability > 0.7:
                continue
            candidates.append(pattern)
        return candidates

    @staticmethod
    def _library_weight(pattern: DrumPattern, constraints: Constraints, rng: SeededRandom) -> float:
        psych = constraints.psych
        tags = pattern.psychological_tags
        drummer_skill = constraints.band.member_skills.drummer
        weight = 1.0
        if psych.stress > 50 and tags.stress_appropriate:
            weight *= 1.5
        skill_match = 1 - abs(tags.confidence_required - drummer_skill / 100)
        weight *= 0.5 + skill_match * 0.5
        if psych.depression > 60:
            weight *= 1 - tags.chaos_level * 0.5
        return weight * jitter(rng)

    def _mutate(
        self, pattern: DrumPattern, constraints: Constraints, rng: SeededRandom
    ) -> DrumPattern:
        beats = pattern.beats
        kick = list(beats.kick)
        snare = list(beats.snare)
        hihat = list(beats.hihat)
        ghost = list(beats.ghost_snare)
        psych = constraints.psych
        skill = constraints.band.member_skills.drummer

        # skill: timing looseness, ghost notes, fills
        variance = (100 - skill) * 0.005
        kick = [beat + (rng.next() - 0.5) * variance for beat in kick]
        snare = [beat + (rng.next() - 0.5) * variance for beat in snare]
        if skill > 60 and snare:
            ghost_chance = (skill - 60) / 40 * 0.3
            for hit in snare:
                if rng.next() < ghost_chance:
                    ghost.append(hit + (rng.next() - 0.5) * 0.2)
        has_fill = pattern.has_creative_fill
        fill_complexity = pattern.fill_complexity
        if skill > 70:
            has_fill = True
            fill_complexity = (skill - 70) / 30

        # psychology: chaos, impulsive kicks, simplified hats
        if psych.stress > 50:
            chaos = (psych.stress - 50) * 0.01
            kick = [beat + (rng.next() - 0.5) * chaos for beat in kick]
            snare = [beat + (rng.next() - 0.5) * chaos for beat in snare]
        if psych.substance_use > 40:
            impulsiveness = psych.substance_use * 0.005
            if rng.next() < impulsiveness and kick:
                doubled = kick[math.floor(rng.next() * len(kick))]
                kick = sorted(kick + [doubled + 0.1])
        if psych.depression > 60:
            hihat = hihat[: math.ceil(len(hihat) * 0.7)]

        # context: equipment precision
        precision_loss = (100 - constraints.context.equipment_quality) * 0.002
        kick = [beat + (rng.next() - 0.5) * precision_loss for beat in kick]

        return pattern.model_copy(
            update={
                "beats": DrumBeats(kick=kick, snare=snare, hihat=hihat, ghost_snare=ghost),
                "has_creative_fill": has_fill,
                "fill_complexity": fill_complexity,
            }
        )

    @staticmethod
    def gameplay_hooks(skill: float) -> Dict[str, float]:
        return {
            "groove_stability": skill / 100,
            "fill_complexity": max(0.0, (skill - 30) / 70),
            "timing_precision": skill / 100,
            "ghost_note_chance": max(0.0, (skill - 60) / 40),
        }

"""Melody assembly from tagged phrases over the chosen progression."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from loguru import logger

from ..app.models import (
    Constraints,
    HarmonyResult,
    MappedPhrase,
    MelodyPhrase,
    MelodyResult,
    MelodySection,
    SectionContour,
    SongSection,
)
from .catalog import BUILTIN_PHRASES
from .library import ContentLibrary
from .selection import jitter, weighted_choice
from .seeded_random import SeededRandom

STYLE_STEPWISE = "stepwise"
STYLE_ARPEGGIATED = "arpeggiated"
STYLE_ARCH = "arch"
PREFERRED_STYLE_BOOST = 1.25
MIN_MATCH_WEIGHT = 0.1

_LETTER_DEGREES = {"C": 0, "D": 1, "E": 2, "F": 3, "G": 4, "A": 5, "B": 6}
_ROMAN_DEGREES = {"I": 0, "II": 1, "III": 2, "IV": 3, "V": 4, "VI": 5, "VII": 6}
_LETTER_ROOT = re.compile(r"^([A-G])")
_ROMAN_ROOT = re.compile(r"^[b#]?(VII|VI|V|IV|III|II|I)", re.IGNORECASE)


@dataclass(frozen=True)
class PhraseOptions:
    cliche_reuse: float
    phrase_complexity: float
    rare_motif_access: bool
    preferred_style: str


def chord_degree(chord: str) -> Optional[int]:
    """Diatonic degree index (0-6) of a chord symbol's root, if recognisable."""
    letter = _LETTER_ROOT.match(chord)
    if letter:
        return _LETTER_DEGREES[letter.group(1)]
    roman = _ROMAN_ROOT.match(chord)
    if roman:
        return _ROMAN_DEGREES[roman.group(1).upper()]
    return None


def degree_offset(chord: str, tonic: str) -> int:
    """Nearest diatonic shift from the tonic chord's root to ``chord``'s root."""
    root = chord_degree(chord)
    home = chord_degree(tonic)
    if root is None or home is None:
        return 0
    offset = (root - home) % 7
    return offset - 7 if offset > 3 else offset


def section_contour(phrases: Sequence[MappedPhrase]) -> SectionContour:
    degrees = [degree for phrase in phrases for degree in phrase.scale_degrees]
    if not degrees:
        return SectionContour.STABLE
    first = degrees[0]
    last = degrees[-1]
    if max(degrees) > first + 2 and last < first:
        return SectionContour.ARCH
    if last - first > 1:
        return SectionContour.ASCENDING
    if first - last > 1:
        return SectionContour.DESCENDING
    return SectionContour.STABLE


def song_structure(chords: Sequence[str]) -> List[SongSection]:
    full = list(chords)
    return [
        SongSection(name="intro", chords=full[:2]),
        SongSection(name="verse", chords=full),
        SongSection(name="chorus", chords=full),
        SongSection(name="verse", chords=full),
        SongSection(name="chorus", chords=full),
        SongSection(name="bridge", chords=full[:3]),
        SongSection(name="chorus", chords=full),
        SongSection(name="outro", chords=full[:1]),
    ]


class MelodyEngine:
    """Lays phrases over every chord of every section of the song form."""

    def assemble(
        self,
        harmony: HarmonyResult,
        constraints: Constraints,
        seed: object = "",
        *,
        library: Optional[ContentLibrary] = None,
    ) -> MelodyResult:
        rng = SeededRandom(seed)
        library = library or ContentLibrary.builtin()
        phrases = library.phrase_set()
        skill = constraints.band.member_skills.guitarist
        options = self.phrase_options(skill, constraints, rng)

        chords = harmony.progression.chords
        tonic = chords[0]
        structure = song_structure(chords)
        sections: List[MelodySection] = []
        for section in structure:
            mapped: List[MappedPhrase] = []
            for index, chord in enumerate(section.chords):
                length = self._roll_length(options, rng)
                phrase = self._select_phrase(phrases, length, skill, options, constraints, rng)
                mapped.append(self._map_phrase(phrase, chord, tonic, index, section.name))
            sections.append(
                MelodySection(section=section.name, phrases=mapped, contour=section_contour(mapped))
            )

        logger.debug(
            "Melody: {} sections in {} style over {}",
            len(sections),
            options.preferred_style,
            harmony.progression.id,
        )
        return MelodyResult(
            melody=sections,
            song_structure=structure,
            characteristic_style=options.preferred_style,
        )

    @staticmethod
    def phrase_options(skill: float, constraints: Constraints, rng: SeededRandom) -> PhraseOptions:
        psych = constraints.psych
        rare_motif_access = skill > 70 and psych.burnout < 30
        preferred = STYLE_STEPWISE
        if rare_motif_access and rng.next() > 0.5:
            preferred = STYLE_ARPEGGIATED
        if psych.depression > 60:
            preferred = STYLE_ARCH
        return PhraseOptions(
            cliche_reuse=0.7 if psych.burnout > 50 else 0.2,
            phrase_complexity=skill / 100,
            rare_motif_access=rare_motif_access,
            preferred_style=preferred,
        )

    @staticmethod
    def _roll_length(options: PhraseOptions, rng: SeededRandom) -> int:
        roll = rng.next()
        if roll > 0.6 and options.phrase_complexity > 0.7:
            return 4
        if roll > 0.4:
            return 2
        return 1

    def _select_phrase(
        self,
        phrases: Sequence[MelodyPhrase],
        length: int,
        skill: float,
        options: PhraseOptions,
        constraints: Constraints,
        rng: SeededRandom,
    ) -> MelodyPhrase:
        candidates = self._candidates(phrases, length, skill, constraints)
        weights = [
            self._weight(phrase, skill, options, constraints, rng) for phrase in candidates
        ]
        return weighted_choice(candidates, weights, rng)

    def _candidates(
        self,
        phrases: Sequence[MelodyPhrase],
        length: int,
        skill: float,
        constraints: Constraints,
    ) -> List[MelodyPhrase]:
        """Full filter first, then widen through the length bucket and built-in set."""
        bucket = [phrase for phrase in phrases if phrase.length_bars == length]
        filtered = [phrase for phrase in bucket if self._passes(phrase, skill, constraints)]
        if filtered:
            return filtered
        if bucket:
            return bucket

        builtin_bucket = [phrase for phrase in BUILTIN_PHRASES if phrase.length_bars == length]
        if builtin_bucket:
            logger.debug("Library has no {}-bar phrases; using built-in set", length)
            return builtin_bucket
        return list(BUILTIN_PHRASES)

    @staticmethod
    def _passes(phrase: MelodyPhrase, skill: float, constraints: Constraints) -> bool:
        psych = constraints.psych
        if phrase.difficulty_profile.technical_skill * 100 > skill * 1.25:
            return False
        if phrase.style == STYLE_ARCH and psych.depression < 60:
            return False
        if psych.depression > 60 and phrase.emotional_character.melancholy < 0.4:
            return False
        if psych.burnout > 60 and phrase.complexity > 0.7:
            return False
        return True

    @staticmethod
    def _weight(
        phrase: MelodyPhrase,
        skill: float,
        options: PhraseOptions,
        constraints: Constraints,
        rng: SeededRandom,
    ) -> float:
        depression = constraints.psych.depression / 100
        hook = phrase.phrase_function.hook_potential
        melancholy_match = 1 - abs(phrase.emotional_character.melancholy - depression)
        skill_match = 1 - abs(phrase.difficulty_profile.technical_skill - skill / 100)
        weight = max(MIN_MATCH_WEIGHT, melancholy_match)
        weight *= max(MIN_MATCH_WEIGHT, skill_match)
        weight *= (0.5 + hook) * (1 + options.cliche_reuse * hook)
        if phrase.style == options.preferred_style:
            weight *= PREFERRED_STYLE_BOOST
        return weight * jitter(rng)

    @staticmethod
    def _map_phrase(
        phrase: MelodyPhrase, chord: str, tonic: str, index: int, section: str
    ) -> MappedPhrase:
        offset = degree_offset(chord, tonic)
        return MappedPhrase(
            phrase_id=phrase.id,
            style=phrase.style,
            length_bars=phrase.length_bars,
            degree_offset=offset,
            scale_degrees=[degree + offset for degree in phrase.scale_degrees],
            durations=list(phrase.durations),
            target_chord=chord,
            section_context=section,
            phrase_index=index,
        )

    @staticmethod
    def gameplay_hooks(skill: float, burnout: float) -> Dict[str, object]:
        return {
            "cliche_reuse": 0.7 if burnout > 50 else 0.2,
            "creative_fluency": max(0.3, 1 - burnout * 0.007),
            "phrase_complexity": skill / 100,
            "rare_motifs_unlocked": skill > 70 and burnout < 30,
        }

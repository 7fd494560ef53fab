"""Built-in content used whenever a curated library is missing or filtered empty.

Every entry is authored in the same tagged schema the curated libraries use so the
engines filter and weight both sources identically.
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from ..app.models import (
    ChordProgression,
    DifficultyProfile,
    DrumBeats,
    DrumGameplayHooks,
    DrumPattern,
    DrumPsychTags,
    EmotionalCharacter,
    HarmonicAnalysis,
    IndustryContext,
    MelodyPhrase,
    Mode,
    PhraseFunction,
    PsychologicalResonance,
)

QUARTERS = [0.0, 1.0, 2.0, 3.0]
EIGHTHS = [step * 0.5 for step in range(8)]
SIXTEENTHS = [step * 0.25 for step in range(16)]
SWUNG = [0.0, 0.67, 1.0, 1.67, 2.0, 2.67, 3.0, 3.67]
RIDE = [0.0, 1.0, 1.67, 2.0, 3.0, 3.67]

# (bucket, lower bpm inclusive, upper bpm exclusive); the last bucket also takes 180.
TEMPO_BUCKETS: Tuple[Tuple[str, float, float], ...] = (
    ("slow", 60.0, 90.0),
    ("medium", 90.0, 130.0),
    ("fast", 130.0, 180.0),
)
FALLBACK_BUCKET = "medium"

GENRE_DRUM_FAMILIES: Dict[str, Tuple[str, ...]] = {
    "rock": ("backbeat", "driving"),
    "punk": ("driving", "backbeat"),
    "metal": ("blast", "driving", "halftime"),
    "funk": ("syncopated", "four_floor"),
    "folk": ("backbeat", "shuffle"),
    "jazz": ("swing", "shuffle"),
    "pop": ("backbeat", "four_floor"),
    "indie": ("backbeat", "halftime"),
    "electronic": ("four_floor", "syncopated"),
}

_DRUM_SOURCE: Dict[str, List[Tuple[str, str, Dict[str, List[float]]]]] = {
    "slow": [
        ("backbeat", "simple", {"kick": [0.0, 2.0], "snare": [1.0, 3.0], "hihat": EIGHTHS}),
        ("halftime", "simple", {"kick": [0.0, 1.5], "snare": [2.0], "hihat": EIGHTHS}),
        ("shuffle", "simple", {"kick": [0.0, 2.0], "snare": [1.0, 3.0], "hihat": SWUNG}),
        ("swing", "simple", {"kick": [0.0, 2.0], "snare": [1.67, 3.67], "hihat": RIDE}),
    ],
    "medium": [
        ("backbeat", "medium", {"kick": [0.0, 2.0], "snare": [1.0, 3.0], "hihat": EIGHTHS}),
        (
            "driving",
            "medium",
            {"kick": [0.0, 0.5, 2.0, 2.5, 3.5], "snare": [1.0, 3.0], "hihat": SIXTEENTHS},
        ),
        ("halftime", "medium", {"kick": [0.0, 0.75, 1.5], "snare": [2.0], "hihat": EIGHTHS}),
        (
            "four_floor",
            "medium",
            {"kick": QUARTERS, "snare": [1.0, 3.0], "hihat": [0.5, 1.5, 2.5, 3.5]},
        ),
        (
            "syncopated",
            "medium",
            {
                "kick": [0.0, 0.75, 2.5],
                "snare": [1.0, 3.0],
                "hihat": SIXTEENTHS,
                "ghostSnare": [1.75, 3.25],
            },
        ),
        ("shuffle", "medium", {"kick": [0.0, 1.67, 2.0], "snare": [1.0, 3.0], "hihat": SWUNG}),
        ("swing", "medium", {"kick": [0.0, 2.0], "snare": [1.67, 3.67], "hihat": RIDE}),
    ],
    "fast": [
        ("backbeat", "medium", {"kick": [0.0, 1.5, 2.0, 2.5], "snare": [1.0, 3.0], "hihat": EIGHTHS}),
        (
            "driving",
            "complex",
            {"kick": EIGHTHS, "snare": [1.0, 1.5, 2.5, 3.0], "hihat": SIXTEENTHS},
        ),
        ("four_floor", "medium", {"kick": QUARTERS, "snare": [1.0, 3.0], "hihat": EIGHTHS}),
        (
            "syncopated",
            "complex",
            {"kick": [0.0, 0.75, 1.5, 2.5, 3.25], "snare": [1.0, 3.0], "hihat": SIXTEENTHS},
        ),
        ("blast", "complex", {"kick": EIGHTHS, "snare": EIGHTHS, "hihat": EIGHTHS}),
        ("swing", "medium", {"kick": [0.0, 2.0], "snare": [1.67, 3.67], "hihat": RIDE}),
    ],
}


def _genre_weights(family: str) -> Dict[str, float]:
    return {
        genre: 0.8 if family in families else 0.1
        for genre, families in GENRE_DRUM_FAMILIES.items()
    }


def _drum_pattern(
    bucket: str,
    bpm: Tuple[float, float],
    family: str,
    complexity: str,
    beats: Dict[str, List[float]],
) -> DrumPattern:
    complex_pattern = complexity == "complex"
    return DrumPattern(
        id=f"{family}_{bucket}",
        family=family,
        signature="4/4",
        complexity=complexity,
        beats=DrumBeats.model_validate(beats),
        bpm_range=bpm,
        psychological_tags=DrumPsychTags(
            stress_appropriate=complexity == "simple",
            chaos_level=0.6 if complex_pattern else 0.2,
            confidence_required=0.7 if complex_pattern else 0.3,
            substance_vulnerability=0.6 if complex_pattern else 0.3,
            emotional_intensity=0.5,
        ),
        genre_weights=_genre_weights(family),
        gameplay_hooks=DrumGameplayHooks(fills=[3.0, 7.0], showoff_moments=[3.5, 7.5]),
    )


def _build_drum_families() -> Dict[str, Dict[str, DrumPattern]]:
    families: Dict[str, Dict[str, DrumPattern]] = {}
    for bucket, low, high in TEMPO_BUCKETS:
        families[bucket] = {
            family: _drum_pattern(bucket, (low, high), family, complexity, beats)
            for family, complexity, beats in _DRUM_SOURCE[bucket]
        }
    return families


BUILTIN_DRUM_FAMILIES: Dict[str, Dict[str, DrumPattern]] = _build_drum_families()


def tempo_bucket(tempo: float) -> str:
    for bucket, low, high in TEMPO_BUCKETS:
        if low <= tempo < high:
            return bucket
    if tempo >= TEMPO_BUCKETS[-1][2]:
        return TEMPO_BUCKETS[-1][0]
    return TEMPO_BUCKETS[0][0]


def _progression(
    progression_id: str,
    name: str,
    chords: Sequence[str],
    mode: Mode,
    *,
    complexity: float,
    catchiness: float,
    familiarity: float,
    era: str,
    vibe: str,
    resonance: Dict[str, float],
    industry: Dict[str, float],
    dissonance: float = 0.2,
) -> ChordProgression:
    return ChordProgression(
        id=progression_id,
        name=name,
        chords=list(chords),
        mode=mode,
        complexity=complexity,
        catchiness=catchiness,
        familiarity=familiarity,
        era=era,
        vibe=vibe,
        psychological_resonance=PsychologicalResonance(**resonance),
        industry_context=IndustryContext(**industry),
        harmonic_analysis=HarmonicAnalysis(
            key_center_stability=round(1.0 - complexity * 0.5, 2),
            modulation_complexity=round(max(0.0, complexity - 0.5), 2),
            resolution_strength=round(0.4 + familiarity * 0.5, 2),
            dissonance_level=dissonance,
            voice_leading_quality=0.7,
        ),
    )


def _safe(safety: float, cred: float, experimental: float) -> Dict[str, float]:
    return {
        "commercial_safety": safety,
        "underground_cred": cred,
        "label_friendly": safety,
        "experimental_factor": experimental,
    }


BUILTIN_PROGRESSIONS: Tuple[ChordProgression, ...] = (
    # major
    _progression(
        "major_axis", "I-V-vi-IV", ["C", "G", "Am", "F"], Mode.MAJOR,
        complexity=0.2, catchiness=0.9, familiarity=0.95, era="classic", vibe="happy",
        resonance={"redemption_potential": 0.6, "manic_energy": 0.3, "depression_weight": 0.1},
        industry=_safe(0.95, 0.1, 0.05),
    ),
    _progression(
        "major_pop_roman", "pop-progression", ["I", "V", "vi", "IV"], Mode.MAJOR,
        complexity=0.2, catchiness=0.95, familiarity=0.98, era="modern", vibe="happy",
        resonance={"redemption_potential": 0.5, "manic_energy": 0.4},
        industry=_safe(0.98, 0.05, 0.02),
    ),
    _progression(
        "major_doo_wop", "I-vi-IV-V", ["C", "Am", "F", "G"], Mode.MAJOR,
        complexity=0.2, catchiness=0.85, familiarity=0.9, era="classic", vibe="nostalgic",
        resonance={"redemption_potential": 0.5, "depression_weight": 0.2},
        industry=_safe(0.9, 0.15, 0.05),
    ),
    _progression(
        "major_three_chord", "three-chord-thrash", ["G", "C", "D", "C"], Mode.MAJOR,
        complexity=0.1, catchiness=0.8, familiarity=0.9, era="punk", vibe="defiant",
        resonance={"manic_energy": 0.7, "corruption_level": 0.2},
        industry=_safe(0.7, 0.6, 0.1),
    ),
    _progression(
        "major_power", "power-progression", ["C", "F", "C", "G"], Mode.MAJOR,
        complexity=0.3, catchiness=0.8, familiarity=0.75, era="rock", vibe="triumphant",
        resonance={"redemption_potential": 0.7, "manic_energy": 0.5},
        industry=_safe(0.8, 0.3, 0.1),
    ),
    _progression(
        "major_heroic", "heroic-movement", ["I", "IV", "V", "I"], Mode.MAJOR,
        complexity=0.3, catchiness=0.75, familiarity=0.8, era="classic", vibe="triumphant",
        resonance={"redemption_potential": 0.8},
        industry=_safe(0.8, 0.2, 0.05),
    ),
    _progression(
        "major_bittersweet", "minor-plagal", ["C", "Em", "F", "Fm"], Mode.MAJOR,
        complexity=0.55, catchiness=0.6, familiarity=0.55, era="modern", vibe="bittersweet",
        resonance={"depression_weight": 0.45, "redemption_potential": 0.6},
        industry=_safe(0.6, 0.5, 0.3), dissonance=0.3,
    ),
    _progression(
        "major_jazz_standard", "jazz-standard", ["C", "Em7", "Am7", "Dm7", "G7"], Mode.MAJOR,
        complexity=0.75, catchiness=0.5, familiarity=0.6, era="standards", vibe="sophisticated",
        resonance={"redemption_potential": 0.4, "depression_weight": 0.2},
        industry=_safe(0.5, 0.6, 0.4), dissonance=0.35,
    ),
    _progression(
        "major_modal_interchange", "modal-interchange", ["CM7", "Bm7b5", "E7", "Am"], Mode.MAJOR,
        complexity=0.85, catchiness=0.4, familiarity=0.5, era="modern", vibe="restless",
        resonance={"paranoia_tension": 0.4, "depression_weight": 0.35},
        industry=_safe(0.4, 0.7, 0.6), dissonance=0.45,
    ),
    _progression(
        "major_experimental", "experimental-1", ["Cmaj7", "D7alt", "Gm7", "C"], Mode.MAJOR,
        complexity=0.9, catchiness=0.4, familiarity=0.3, era="experimental", vibe="unstable",
        resonance={"paranoia_tension": 0.5, "manic_energy": 0.5, "corruption_level": 0.3},
        industry=_safe(0.25, 0.85, 0.9), dissonance=0.6,
    ),
    # minor
    _progression(
        "minor_classic", "minor-classic", ["Am", "F", "C", "G"], Mode.MINOR,
        complexity=0.3, catchiness=0.85, familiarity=0.9, era="classic", vibe="melancholic",
        resonance={"depression_weight": 0.6, "redemption_potential": 0.4},
        industry=_safe(0.85, 0.3, 0.05),
    ),
    _progression(
        "minor_folk", "folk-minor", ["Em", "Am", "D", "G"], Mode.MINOR,
        complexity=0.3, catchiness=0.75, familiarity=0.8, era="folk", vibe="melancholic",
        resonance={"depression_weight": 0.5, "redemption_potential": 0.3},
        industry=_safe(0.7, 0.5, 0.1),
    ),
    _progression(
        "minor_power", "minor-power", ["Am", "C", "D", "Am"], Mode.MINOR,
        complexity=0.3, catchiness=0.75, familiarity=0.7, era="rock", vibe="aggressive",
        resonance={"manic_energy": 0.6, "depression_weight": 0.3, "corruption_level": 0.3},
        industry=_safe(0.65, 0.5, 0.15),
    ),
    _progression(
        "minor_lament", "lament", ["Am", "Em", "F", "C"], Mode.MINOR,
        complexity=0.35, catchiness=0.7, familiarity=0.7, era="modern", vibe="melancholic",
        resonance={"depression_weight": 0.75, "redemption_potential": 0.3},
        industry=_safe(0.7, 0.4, 0.1),
    ),
    _progression(
        "minor_descending", "descending-minor", ["Am", "G", "F", "E"], Mode.MINOR,
        complexity=0.4, catchiness=0.7, familiarity=0.75, era="classic", vibe="dark",
        resonance={"depression_weight": 0.7, "corruption_level": 0.4, "paranoia_tension": 0.4},
        industry=_safe(0.65, 0.55, 0.15), dissonance=0.3,
    ),
    _progression(
        "minor_spiral", "spiral", ["Am", "Am/G", "F", "E"], Mode.MINOR,
        complexity=0.5, catchiness=0.6, familiarity=0.6, era="modern", vibe="dark",
        resonance={"addiction_spiral": 0.8, "depression_weight": 0.6, "corruption_level": 0.5},
        industry=_safe(0.5, 0.65, 0.3), dissonance=0.35,
    ),
    _progression(
        "minor_tritone_walk", "tritone-walk", ["Em", "Bb", "F#m", "B"], Mode.MINOR,
        complexity=0.8, catchiness=0.5, familiarity=0.4, era="modern", vibe="dark",
        resonance={"depression_weight": 0.8, "corruption_level": 0.7, "paranoia_tension": 0.9},
        industry=_safe(0.3, 0.85, 0.7), dissonance=0.7,
    ),
    _progression(
        "minor_experimental", "experimental-2", ["Am", "B7b9", "E7", "Am"], Mode.MINOR,
        complexity=0.85, catchiness=0.3, familiarity=0.35, era="experimental", vibe="tense",
        resonance={"depression_weight": 0.6, "corruption_level": 0.5, "paranoia_tension": 0.6},
        industry=_safe(0.3, 0.8, 0.8), dissonance=0.6,
    ),
    _progression(
        "minor_advanced_modal", "advanced-modal", ["Am(maj7)", "Bbmaj7", "Am(maj7)", "Gm7"],
        Mode.MINOR,
        complexity=0.9, catchiness=0.4, familiarity=0.3, era="modern", vibe="haunted",
        resonance={"depression_weight": 0.5, "paranoia_tension": 0.6},
        industry=_safe(0.3, 0.8, 0.85), dissonance=0.55,
    ),
    _progression(
        "minor_chromatic_descent", "chromatic-descent", ["Dm7", "Eb7", "Cm7", "B7"], Mode.MINOR,
        complexity=0.95, catchiness=0.3, familiarity=0.2, era="experimental", vibe="dark",
        resonance={"depression_weight": 0.6, "corruption_level": 0.8, "paranoia_tension": 0.7},
        industry=_safe(0.2, 0.9, 0.95), dissonance=0.75,
    ),
    # mixolydian
    _progression(
        "mixolydian_dominant_groove", "dominant-groove", ["D", "C", "G", "D"], Mode.MIXOLYDIAN,
        complexity=0.45, catchiness=0.8, familiarity=0.7, era="funk", vibe="funky",
        resonance={"manic_energy": 0.6, "redemption_potential": 0.4},
        industry=_safe(0.7, 0.5, 0.2),
    ),
    _progression(
        "mixolydian_double_plagal", "double-plagal", ["G", "F", "C", "G"], Mode.MIXOLYDIAN,
        complexity=0.35, catchiness=0.75, familiarity=0.75, era="rock", vibe="anthemic",
        resonance={"redemption_potential": 0.6, "manic_energy": 0.4},
        industry=_safe(0.75, 0.4, 0.15),
    ),
    _progression(
        "mixolydian_vamp", "funk-vamp", ["E7", "E7", "A7", "E7"], Mode.MIXOLYDIAN,
        complexity=0.5, catchiness=0.7, familiarity=0.6, era="funk", vibe="gritty",
        resonance={"manic_energy": 0.7, "addiction_spiral": 0.3, "depression_weight": 0.4},
        industry=_safe(0.6, 0.6, 0.3), dissonance=0.35,
    ),
    _progression(
        "mixolydian_suspended", "suspended-dominant", ["G7", "F/G", "Dm7", "G7sus4"],
        Mode.MIXOLYDIAN,
        complexity=0.7, catchiness=0.55, familiarity=0.5, era="fusion", vibe="sophisticated",
        resonance={"paranoia_tension": 0.3, "redemption_potential": 0.4},
        industry=_safe(0.45, 0.7, 0.55), dissonance=0.4,
    ),
    # dorian
    _progression(
        "dorian_groove", "dorian-groove", ["Dm", "G", "Dm", "A"], Mode.DORIAN,
        complexity=0.5, catchiness=0.75, familiarity=0.6, era="jazz", vibe="sultry",
        resonance={"depression_weight": 0.4, "manic_energy": 0.4},
        industry=_safe(0.6, 0.6, 0.3),
    ),
    _progression(
        "dorian_vamp", "dorian-vamp", ["Am", "D", "Am", "D"], Mode.DORIAN,
        complexity=0.35, catchiness=0.7, familiarity=0.65, era="rock", vibe="brooding",
        resonance={"depression_weight": 0.5, "addiction_spiral": 0.4},
        industry=_safe(0.6, 0.55, 0.2),
    ),
    _progression(
        "dorian_modal_shift", "modal-shift", ["Dm7", "Dm7", "Ebm7", "Dm7"], Mode.DORIAN,
        complexity=0.75, catchiness=0.45, familiarity=0.5, era="jazz", vibe="cool",
        resonance={"paranoia_tension": 0.5, "depression_weight": 0.45},
        industry=_safe(0.4, 0.8, 0.6), dissonance=0.4,
    ),
    _progression(
        "dorian_turnaround", "dorian-turnaround", ["Dm7", "G7", "Em7", "A7"], Mode.DORIAN,
        complexity=0.8, catchiness=0.5, familiarity=0.55, era="jazz", vibe="sophisticated",
        resonance={"redemption_potential": 0.5, "corruption_level": 0.4},
        industry=_safe(0.5, 0.7, 0.5), dissonance=0.4,
    ),
)


def _phrase(
    phrase_id: str,
    degrees: Sequence[int],
    durations: Sequence[float],
    style: str,
    length_bars: int,
    *,
    complexity: float,
    technical: float,
    emotion: Dict[str, float],
    hook: float,
    riff: float = 0.0,
    solo: float = 0.0,
) -> MelodyPhrase:
    return MelodyPhrase(
        id=phrase_id,
        scale_degrees=list(degrees),
        durations=list(durations),
        style=style,
        length_bars=length_bars,
        complexity=complexity,
        difficulty_profile=DifficultyProfile(
            technical_skill=technical,
            timing_precision=round(min(1.0, technical + 0.1), 2),
            pitch_accuracy=technical,
            expression_complexity=complexity,
        ),
        emotional_character=EmotionalCharacter(**emotion),
        phrase_function=PhraseFunction(
            hook_potential=hook,
            verse_suitable=0.6,
            chorus_suitable=hook,
            bridge_suitable=0.5,
            solo_potential=solo,
            riff_potential=riff,
        ),
    )


BUILTIN_PHRASES: Tuple[MelodyPhrase, ...] = (
    # one bar
    _phrase(
        "stepwise_ascent", [0, 1, 2, 3, 4], [0.5, 0.5, 0.5, 0.5, 1.0], "stepwise", 1,
        complexity=0.2, technical=0.2, hook=0.5,
        emotion={"triumph": 0.5, "hope": 0.7, "melancholy": 0.2},
    ),
    _phrase(
        "stepwise_descent", [4, 3, 2, 1, 0], [0.5, 0.5, 0.5, 0.5, 1.0], "stepwise", 1,
        complexity=0.2, technical=0.2, hook=0.4,
        emotion={"melancholy": 0.55, "vulnerability": 0.5},
    ),
    _phrase(
        "neighbor_tone", [0, 1, 0, -1, 0], [0.5, 0.5, 0.5, 0.5, 1.0], "stepwise", 1,
        complexity=0.15, technical=0.15, hook=0.35,
        emotion={"melancholy": 0.4, "vulnerability": 0.4},
    ),
    _phrase(
        "arpeggio_up", [0, 2, 4, 5, 7], [0.25, 0.25, 0.25, 0.25, 1.0], "arpeggiated", 1,
        complexity=0.5, technical=0.55, hook=0.6, solo=0.4,
        emotion={"triumph": 0.6, "hope": 0.5, "melancholy": 0.2},
    ),
    _phrase(
        "sigh_arch", [0, 2, 3, 1, -1], [0.5, 0.5, 1.0, 0.5, 1.5], "arch", 1,
        complexity=0.3, technical=0.3, hook=0.45,
        emotion={"melancholy": 0.7, "vulnerability": 0.6},
    ),
    # two bars
    _phrase(
        "classic_contour", [0, 2, 4, 5, 7, 5, 3, 2], [0.5] * 7 + [1.0], "arch", 2,
        complexity=0.45, technical=0.45, hook=0.7,
        emotion={"melancholy": 0.5, "hope": 0.4},
    ),
    _phrase(
        "rising_arch", [0, 1, 3, 4, 3, 1, 0, -1], [0.5] * 7 + [1.5], "arch", 2,
        complexity=0.35, technical=0.35, hook=0.6,
        emotion={"melancholy": 0.65, "vulnerability": 0.5},
    ),
    _phrase(
        "jump_resolve", [0, 5, 4, 3, 2, 1, 0], [0.25, 0.5, 0.5, 0.5, 0.5, 0.5, 1.0], "intervallic", 2,
        complexity=0.5, technical=0.5, hook=0.55,
        emotion={"triumph": 0.4, "aggression": 0.3, "melancholy": 0.35},
    ),
    _phrase(
        "lament_descent", [4, 3, 2, 1, 0, -1, -2, -3], [0.5] * 7 + [1.5], "stepwise", 2,
        complexity=0.3, technical=0.3, hook=0.5,
        emotion={"melancholy": 0.8, "vulnerability": 0.6},
    ),
    _phrase(
        "broken_chord", [0, 2, 4, 2, 0, 4, 7, 4], [0.25] * 7 + [1.0], "arpeggiated", 2,
        complexity=0.55, technical=0.6, hook=0.6, solo=0.5,
        emotion={"triumph": 0.5, "hope": 0.5, "melancholy": 0.3},
    ),
    # four bars
    _phrase(
        "question_answer", [0, 2, 4, 5, 7, 5, 4, 2, 0], [0.5, 0.5, 0.5, 0.5, 1.0, 0.5, 0.5, 0.5, 1.0],
        "phrase", 4,
        complexity=0.6, technical=0.55, hook=0.75,
        emotion={"hope": 0.5, "melancholy": 0.4, "triumph": 0.4},
    ),
    _phrase(
        "riff_loop", [0, 0, 2, 3, 2, 0, 0, 0], [0.5, 0.25, 0.25, 0.5, 0.25, 0.25, 0.5, 1.0],
        "rhythmic", 4,
        complexity=0.35, technical=0.4, hook=0.8, riff=0.9,
        emotion={"aggression": 0.7, "chaos": 0.3, "melancholy": 0.3},
    ),
    _phrase(
        "stepwise_climb", [0, 1, 2, 3, 4, 5, 6, 7, 5, 4], [0.5] * 9 + [1.5], "stepwise", 4,
        complexity=0.45, technical=0.45, hook=0.55,
        emotion={"hope": 0.7, "triumph": 0.6, "melancholy": 0.35},
    ),
    _phrase(
        "long_arch", [0, 2, 4, 7, 9, 7, 4, 2, -1], [0.5, 0.5, 0.5, 1.0, 1.0, 0.5, 0.5, 0.5, 2.0],
        "arch", 4,
        complexity=0.7, technical=0.65, hook=0.65, solo=0.5,
        emotion={"melancholy": 0.75, "vulnerability": 0.5, "hope": 0.3},
    ),
    _phrase(
        "arpeggio_cascade", [0, 4, 7, 11, 9, 7, 4, 2, 0], [0.25] * 8 + [1.0], "arpeggiated", 4,
        complexity=0.85, technical=0.8, hook=0.5, solo=0.9,
        emotion={"triumph": 0.7, "chaos": 0.4, "melancholy": 0.3},
    ),
)

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class Mode(str, Enum):
    MAJOR = "major"
    MINOR = "minor"
    MIXOLYDIAN = "mixolydian"
    DORIAN = "dorian"


class SectionContour(str, Enum):
    ARCH = "arch"
    ASCENDING = "ascending"
    DESCENDING = "descending"
    STABLE = "stable"


class CamelModel(BaseModel):
    """Input payloads accept both camelCase and snake_case keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        allow_inf_nan=False,
    )


class FrozenCamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class LibraryEntry(BaseModel):
    """Curated library content keeps the snake_case tag schema of the dataset tooling."""

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


# --- simulation snapshot ----------------------------------------------------


class BandMember(CamelModel):
    id: str = ""
    name: Optional[str] = Field(default=None, max_length=128)
    instrument: str = ""
    skill: float = 50.0
    chemistry: dict[str, float] = Field(default_factory=dict)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("skill", mode="before")
    @classmethod
    def _default_skill(cls, value: Any) -> Any:
        return 50.0 if value is None else value


class PsychState(BaseModel):
    """Psychology scalars keep the snake_case keys used by the simulation."""

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    stress: float = 0.0
    addiction_risk: float = 0.0
    moral_integrity: float = 100.0
    depression: float = 0.0
    paranoia: float = 0.0
    ego: float = 50.0
    burnout: float = 0.0
    substance_use: float = 0.0


class LabelDeal(CamelModel):
    pressure: float = 0.0
    type: str = "independent"


class Fanbase(CamelModel):
    primary: str = "mixed"
    size: float = 0.0
    loyalty: float = 50.0


class Venue(CamelModel):
    type: str = "generic"
    capacity: int = 100
    acoustics: str = "standard"


class Audience(CamelModel):
    type: str = "mixed"
    size: int = 100
    expectations: str = "standard"


class Equipment(CamelModel):
    quality: float = 50.0


class Studio(CamelModel):
    quality: float = 50.0


class NarrativeEvent(CamelModel):
    type: str
    genre: Optional[str] = None


class SimulationState(CamelModel):
    band_name: str = ""
    current_week: int = 0
    game_week: float = 0.0
    band_members: list[BandMember] = Field(default_factory=list)
    band_confidence: float = 50.0
    total_gigs: int = 0
    albums_released: int = 0
    psych_state: PsychState = Field(default_factory=PsychState)
    label_deal: Optional[LabelDeal] = None
    fanbase: Fanbase = Field(default_factory=Fanbase)
    media_attention: float = 0.0
    money: float = 0.0
    current_venue: Optional[Venue] = None
    current_audience: Optional[Audience] = None
    equipment: Equipment = Field(default_factory=Equipment)
    current_studio: Optional[Studio] = None
    day_of_week: int = 0
    season: str = "spring"
    recent_events: list[NarrativeEvent] = Field(default_factory=list)


# --- constraint snapshot ----------------------------------------------------


class MemberSkills(FrozenCamelModel):
    vocalist: float = 50.0
    guitarist: float = 50.0
    bassist: float = 50.0
    drummer: float = 50.0
    keyboardist: float = 50.0


class BandConstraints(FrozenCamelModel):
    overall_skill: float = Field(..., ge=0.0, le=100.0)
    member_skills: MemberSkills
    chemistry: float = Field(..., ge=0.0, le=100.0)
    confidence: float = Field(..., ge=0.0, le=100.0)
    experience: float = Field(..., ge=0.0)
    maturity_level: float = Field(..., ge=0.0, le=100.0)


class PsychConstraints(FrozenCamelModel):
    stress: float = Field(..., ge=0.0, le=100.0)
    addiction_risk: float = Field(..., ge=0.0, le=100.0)
    corruption: float = Field(..., ge=0.0, le=100.0)
    depression: float = Field(..., ge=0.0, le=100.0)
    paranoia: float = Field(..., ge=0.0, le=100.0)
    ego: float = Field(..., ge=0.0, le=100.0)
    burnout: float = Field(..., ge=0.0, le=100.0)
    substance_use: float = Field(..., ge=0.0, le=100.0)
    mental_health: float = Field(..., ge=0.0, le=100.0)
    creative_potential: float = Field(..., ge=0.0, le=100.0)


class FanExpectations(FrozenCamelModel):
    familiar_progressions: float = Field(..., ge=0.0, le=1.0)
    complexity: float = Field(..., ge=0.0, le=1.0)
    emphasis: str
    emphasis_weight: float = Field(..., ge=0.0, le=1.0)

    @property
    def catchiness(self) -> Optional[float]:
        if self.emphasis == "catchiness":
            return self.emphasis_weight
        return None


class IndustryConstraints(FrozenCamelModel):
    label_pressure: float = Field(..., ge=0.0, le=100.0)
    label_type: str
    fan_expectations: FanExpectations
    media_scrutiny: float = Field(..., ge=0.0, le=100.0)
    financial_pressure: float = Field(..., ge=0.0)
    commercial_threshold: float = Field(..., ge=0.0, le=1.0)


class ContextConstraints(FrozenCamelModel):
    venue_type: str
    venue_capacity: int
    venue_acoustics: str
    audience_type: str
    audience_size: int
    audience_expectations: str
    equipment_quality: float = Field(..., ge=0.0, le=100.0)
    studio_quality: float = Field(..., ge=0.0, le=100.0)
    day_of_week: int
    season: str


class EmotionalTone(FrozenCamelModel):
    positivity: float = Field(default=0.0, ge=-100.0, le=100.0)
    intensity: float = Field(default=0.0, ge=0.0, le=100.0)
    darkness: float = Field(default=0.0, ge=0.0, le=100.0)


class NarrativeConstraints(FrozenCamelModel):
    lyric_themes: list[str] = Field(default_factory=list)
    unlocked_genres: list[str] = Field(default_factory=list)
    emotional_tone: EmotionalTone = Field(default_factory=EmotionalTone)
    narrative_weight: float = Field(default=0.0, ge=0.0, le=1.0)


class Constraints(FrozenCamelModel):
    band: BandConstraints
    psych: PsychConstraints
    industry: IndustryConstraints
    context: ContextConstraints
    narrative: NarrativeConstraints


# --- content library entries ------------------------------------------------


class DrumBeats(LibraryEntry):
    kick: list[float] = Field(default_factory=list)
    snare: list[float] = Field(default_factory=list)
    hihat: list[float] = Field(default_factory=list)
    ghost_snare: list[float] = Field(default_factory=list, alias="ghostSnare")

    def has_hits(self) -> bool:
        return bool(self.kick or self.snare or self.hihat)


class DrumPsychTags(LibraryEntry):
    stress_appropriate: bool = False
    chaos_level: float = Field(default=0.2, ge=0.0, le=1.0)
    confidence_required: float = Field(default=0.3, ge=0.0, le=1.0)
    substance_vulnerability: float = Field(default=0.3, ge=0.0, le=1.0)
    emotional_intensity: float = Field(default=0.5, ge=0.0, le=1.0)


class DrumGameplayHooks(LibraryEntry):
    fills: list[float] = Field(default_factory=list)
    showoff_moments: list[float] = Field(default_factory=list)


class DrumPattern(LibraryEntry):
    id: str = Field(..., min_length=1, max_length=128)
    family: Optional[str] = Field(default=None, max_length=64)
    signature: str = "4/4"
    complexity: str = "medium"
    beats: DrumBeats
    bpm_range: tuple[float, float] = Field(default=(60.0, 180.0), alias="bpmRange")
    psychological_tags: DrumPsychTags = Field(default_factory=DrumPsychTags)
    genre_weights: dict[str, float] = Field(default_factory=dict)
    gameplay_hooks: DrumGameplayHooks = Field(default_factory=DrumGameplayHooks)
    has_creative_fill: bool = Field(default=False, alias="hasCreativeFill")
    fill_complexity: float = Field(default=0.0, ge=0.0, le=1.0, alias="fillComplexity")


class PsychologicalResonance(LibraryEntry):
    corruption_level: float = Field(default=0.0, ge=0.0, le=1.0)
    addiction_spiral: float = Field(default=0.0, ge=0.0, le=1.0)
    depression_weight: float = Field(default=0.0, ge=0.0, le=1.0)
    manic_energy: float = Field(default=0.0, ge=0.0, le=1.0)
    paranoia_tension: float = Field(default=0.0, ge=0.0, le=1.0)
    redemption_potential: float = Field(default=0.0, ge=0.0, le=1.0)


class IndustryContext(LibraryEntry):
    commercial_safety: float = Field(default=0.5, ge=0.0, le=1.0)
    underground_cred: float = Field(default=0.5, ge=0.0, le=1.0)
    label_friendly: float = Field(default=0.5, ge=0.0, le=1.0)
    experimental_factor: float = Field(default=0.3, ge=0.0, le=1.0)


class HarmonicAnalysis(LibraryEntry):
    key_center_stability: float = Field(default=0.7, ge=0.0, le=1.0)
    modulation_complexity: float = Field(default=0.0, ge=0.0, le=1.0)
    resolution_strength: float = Field(default=0.7, ge=0.0, le=1.0)
    dissonance_level: float = Field(default=0.2, ge=0.0, le=1.0)
    voice_leading_quality: float = Field(default=0.7, ge=0.0, le=1.0)


class ChordProgression(LibraryEntry):
    id: str = Field(..., min_length=1, max_length=128)
    name: str = Field(..., min_length=1, max_length=128)
    chords: list[str] = Field(..., min_length=1)
    mode: Mode
    complexity: float = Field(default=0.3, ge=0.0, le=1.0)
    catchiness: float = Field(default=0.5, ge=0.0, le=1.0)
    familiarity: float = Field(default=0.5, ge=0.0, le=1.0)
    era: str = "modern"
    vibe: str = "neutral"
    psychological_resonance: PsychologicalResonance = Field(
        default_factory=PsychologicalResonance
    )
    industry_context: IndustryContext = Field(default_factory=IndustryContext)
    harmonic_analysis: HarmonicAnalysis = Field(default_factory=HarmonicAnalysis)
    harmonic_tension: Optional[str] = None
    has_unusual_substitution: bool = False


class DifficultyProfile(LibraryEntry):
    technical_skill: float = Field(default=0.3, ge=0.0, le=1.0)
    timing_precision: float = Field(default=0.3, ge=0.0, le=1.0)
    pitch_accuracy: float = Field(default=0.3, ge=0.0, le=1.0)
    expression_complexity: float = Field(default=0.3, ge=0.0, le=1.0)


class EmotionalCharacter(LibraryEntry):
    triumph: float = Field(default=0.0, ge=0.0, le=1.0)
    melancholy: float = Field(default=0.0, ge=0.0, le=1.0)
    aggression: float = Field(default=0.0, ge=0.0, le=1.0)
    vulnerability: float = Field(default=0.0, ge=0.0, le=1.0)
    chaos: float = Field(default=0.0, ge=0.0, le=1.0)
    hope: float = Field(default=0.0, ge=0.0, le=1.0)


class PhraseFunction(LibraryEntry):
    hook_potential: float = Field(default=0.5, ge=0.0, le=1.0)
    verse_suitable: float = Field(default=0.5, ge=0.0, le=1.0)
    chorus_suitable: float = Field(default=0.5, ge=0.0, le=1.0)
    bridge_suitable: float = Field(default=0.5, ge=0.0, le=1.0)
    solo_potential: float = Field(default=0.0, ge=0.0, le=1.0)
    riff_potential: float = Field(default=0.0, ge=0.0, le=1.0)


class MelodyPhrase(LibraryEntry):
    id: str = Field(..., min_length=1, max_length=128)
    scale_degrees: list[int] = Field(..., min_length=1)
    durations: list[float] = Field(default_factory=list)
    style: str = "stepwise"
    length_bars: Literal[1, 2, 4] = 1
    complexity: float = Field(default=0.3, ge=0.0, le=1.0)
    difficulty_profile: DifficultyProfile = Field(default_factory=DifficultyProfile)
    emotional_character: EmotionalCharacter = Field(default_factory=EmotionalCharacter)
    phrase_function: PhraseFunction = Field(default_factory=PhraseFunction)


# --- engine results ---------------------------------------------------------


class DrumResult(FrozenCamelModel):
    pattern: DrumPattern
    tempo: float = Field(..., ge=60.0, le=180.0)
    genre: str
    source: Literal["library", "builtin"] = "builtin"
    timestamp: datetime = Field(default_factory=_utc_now)


class HarmonyResult(FrozenCamelModel):
    progression: ChordProgression
    mode: Mode
    genre: str
    timestamp: datetime = Field(default_factory=_utc_now)


class MappedPhrase(FrozenCamelModel):
    phrase_id: str
    style: str
    length_bars: int
    degree_offset: int
    scale_degrees: list[int]
    durations: list[float]
    target_chord: str
    section_context: str
    phrase_index: int


class MelodySection(FrozenCamelModel):
    section: str
    phrases: list[MappedPhrase]
    contour: SectionContour


class SongSection(FrozenCamelModel):
    name: str
    chords: list[str]


class MelodyResult(FrozenCamelModel):
    melody: list[MelodySection]
    song_structure: list[SongSection]
    characteristic_style: str
    timestamp: datetime = Field(default_factory=_utc_now)


# --- song aggregate ---------------------------------------------------------


class SongMetadata(FrozenCamelModel):
    name: str
    genre: str
    band: str
    week: int
    seed: str
    generated_at: datetime = Field(default_factory=_utc_now)


class MusicalContent(FrozenCamelModel):
    drums: DrumResult
    harmony: HarmonyResult
    melody: MelodyResult


class Composition(FrozenCamelModel):
    tempo: float
    key: str
    mode: Mode
    genre: str
    structure: list[SongSection]


class SongAnalysis(FrozenCamelModel):
    commercial_viability: float = Field(..., ge=0.0, le=100.0)
    originality_score: float = Field(..., ge=0.0, le=100.0)
    quality_score: int
    emotional_tone: EmotionalTone


class Song(FrozenCamelModel):
    metadata: SongMetadata
    constraints: Constraints
    musical_content: MusicalContent
    composition: Composition
    analysis: SongAnalysis


class AlbumMetadata(FrozenCamelModel):
    album_name: str
    genre: str
    track_count: int
    generated_at: datetime = Field(default_factory=_utc_now)


class Album(FrozenCamelModel):
    metadata: AlbumMetadata
    tracks: list[Song]


class RenderPayload(FrozenCamelModel):
    metadata: SongMetadata
    tempo: float
    key: str
    mode: Mode
    drums: DrumResult
    harmony: HarmonyResult
    melody: MelodyResult


# --- API requests -----------------------------------------------------------


class SongRequest(CamelModel):
    state: SimulationState = Field(default_factory=SimulationState)
    genre: str = Field(default="rock", min_length=1, max_length=32)
    seed: Optional[str | int] = Field(default=None)
    song_name: Optional[str] = Field(default=None, max_length=128)

    @field_validator("genre")
    @classmethod
    def _normalise_genre(cls, value: str) -> str:
        return value.strip().lower() or "rock"


class AlbumRequest(CamelModel):
    state: SimulationState = Field(default_factory=SimulationState)
    genre: str = Field(default="rock", min_length=1, max_length=32)
    seed: Optional[str | int] = Field(default=None)
    album_name: Optional[str] = Field(default=None, max_length=128)
    track_count: int = Field(default=10, ge=1, le=20)

    @field_validator("genre")
    @classmethod
    def _normalise_genre(cls, value: str) -> str:
        return value.strip().lower() or "rock"

"""Map a simulation snapshot onto the immutable generation constraints."""

from __future__ import annotations

from itertools import combinations
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np
from loguru import logger

from ..app.models import (
    BandConstraints,
    BandMember,
    Constraints,
    ContextConstraints,
    EmotionalTone,
    FanExpectations,
    IndustryConstraints,
    MemberSkills,
    NarrativeConstraints,
    NarrativeEvent,
    PsychConstraints,
    SimulationState,
)

DEFAULT_SKILL = 50.0
DEFAULT_CHEMISTRY = 50.0
WEEKS_PER_YEAR = 52.0
TRACKED_INSTRUMENTS = ("vocalist", "guitarist", "bassist", "drummer", "keyboardist")

FAN_EXPECTATIONS: Dict[str, FanExpectations] = {
    "mainstream": FanExpectations(
        familiar_progressions=0.9, complexity=0.3, emphasis="catchiness", emphasis_weight=0.9
    ),
    "underground": FanExpectations(
        familiar_progressions=0.2, complexity=0.8, emphasis="originality", emphasis_weight=0.9
    ),
    "niche": FanExpectations(
        familiar_progressions=0.4, complexity=0.7, emphasis="references", emphasis_weight=0.9
    ),
    "crossover": FanExpectations(
        familiar_progressions=0.6, complexity=0.5, emphasis="balance", emphasis_weight=0.8
    ),
    "mixed": FanExpectations(
        familiar_progressions=0.5, complexity=0.5, emphasis="variety", emphasis_weight=0.8
    ),
}

EVENT_THEMES: Dict[str, Tuple[str, ...]] = {
    "relationship_drama": ("betrayal", "longing", "conflict"),
    "addiction_struggle": ("darkness", "escape", "degradation"),
    "success_pressure": ("spotlight", "corruption", "fame"),
    "creative_block": ("emptiness", "silence", "searching"),
    "inspiration": ("revelation", "clarity", "energy"),
}

# (positivity, intensity, darkness)
TONE_DELTAS: Dict[str, Tuple[float, float, float]] = {
    "success": (20.0, 10.0, 0.0),
    "inspiration": (20.0, 10.0, 0.0),
    "addiction_struggle": (0.0, 15.0, 25.0),
    "breakup": (0.0, 15.0, 25.0),
    "success_pressure": (0.0, 20.0, 0.0),
    "creative_block": (-10.0, 0.0, 15.0),
}


def _clamp(
    value: float, low: float = 0.0, high: float = 100.0, fallback: Optional[float] = None
) -> float:
    """Clip into ``[low, high]``; NaN from overflowing arithmetic becomes ``fallback`` (or ``low``)."""
    if np.isnan(value):
        return low if fallback is None else fallback
    return float(np.clip(value, low, high))


def _dedupe(values: Iterable[str]) -> List[str]:
    seen: set[str] = set()
    ordered: List[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        ordered.append(value)
    return ordered


class ConstraintExtractor:
    """Pure mapping from simulation state to a constraint snapshot."""

    def extract(self, state: SimulationState) -> Constraints:
        constraints = Constraints(
            band=self._band(state),
            psych=self._psych(state),
            industry=self._industry(state),
            context=self._context(state),
            narrative=self._narrative(state),
        )
        logger.debug(
            "Extracted constraints for '{}' week {} (skill={:.1f}, depression={:.1f})",
            state.band_name or "unnamed",
            state.current_week,
            constraints.band.overall_skill,
            constraints.psych.depression,
        )
        return constraints

    def _band(self, state: SimulationState) -> BandConstraints:
        members = state.band_members
        if members:
            overall = float(np.mean([member.skill for member in members]))
        else:
            overall = DEFAULT_SKILL
        skills = {
            instrument: _clamp(self._member_skill(members, instrument))
            for instrument in TRACKED_INSTRUMENTS
        }
        return BandConstraints(
            overall_skill=_clamp(overall, fallback=DEFAULT_SKILL),
            member_skills=MemberSkills(**skills),
            chemistry=_clamp(self._chemistry(members), fallback=DEFAULT_CHEMISTRY),
            confidence=_clamp(state.band_confidence),
            experience=max(0.0, float(state.total_gigs + 5 * state.albums_released)),
            maturity_level=_clamp(state.total_gigs / 10),
        )

    @staticmethod
    def _member_skill(members: List[BandMember], instrument: str) -> float:
        for member in members:
            if member.instrument == instrument:
                return member.skill
        return DEFAULT_SKILL

    @staticmethod
    def _chemistry(members: List[BandMember]) -> float:
        if len(members) < 2:
            return DEFAULT_CHEMISTRY
        scores = [
            first.chemistry.get(second.id, DEFAULT_CHEMISTRY)
            for first, second in combinations(members, 2)
        ]
        return float(np.mean(scores))

    def _psych(self, state: SimulationState) -> PsychConstraints:
        psych = state.psych_state
        stress = _clamp(psych.stress)
        depression = _clamp(psych.depression)
        burnout = _clamp(psych.burnout)
        corruption = _clamp(100.0 - psych.moral_integrity)
        mental_health = max(0.0, 100.0 - float(np.mean([stress, depression, burnout])))
        creative_potential = max(0.0, 100.0 - (burnout * 0.6 + corruption * 0.3))
        return PsychConstraints(
            stress=stress,
            addiction_risk=_clamp(psych.addiction_risk),
            corruption=corruption,
            depression=depression,
            paranoia=_clamp(psych.paranoia),
            ego=_clamp(psych.ego),
            burnout=burnout,
            substance_use=_clamp(psych.substance_use),
            mental_health=_clamp(mental_health),
            creative_potential=_clamp(creative_potential),
        )

    def _industry(self, state: SimulationState) -> IndustryConstraints:
        deal = state.label_deal
        pressure = _clamp(deal.pressure) if deal is not None else 0.0
        expectations = FAN_EXPECTATIONS.get(state.fanbase.primary, FAN_EXPECTATIONS["mixed"])
        financial = abs(state.money) / 1000 if state.money < 0 else 0.0
        threshold = (pressure / 100) * 0.8 if deal is not None else 0.3
        return IndustryConstraints(
            label_pressure=pressure,
            label_type=deal.type if deal is not None else "independent",
            fan_expectations=expectations,
            media_scrutiny=_clamp(state.media_attention),
            financial_pressure=financial,
            commercial_threshold=_clamp(threshold, 0.0, 1.0),
        )

    def _context(self, state: SimulationState) -> ContextConstraints:
        venue = state.current_venue
        audience = state.current_audience
        studio = state.current_studio
        return ContextConstraints(
            venue_type=venue.type if venue is not None else "generic",
            venue_capacity=venue.capacity if venue is not None else 100,
            venue_acoustics=venue.acoustics if venue is not None else "standard",
            audience_type=audience.type if audience is not None else "mixed",
            audience_size=audience.size if audience is not None else 100,
            audience_expectations=audience.expectations if audience is not None else "standard",
            equipment_quality=_clamp(state.equipment.quality),
            studio_quality=_clamp(studio.quality) if studio is not None else 50.0,
            day_of_week=state.day_of_week,
            season=state.season or "spring",
        )

    def _narrative(self, state: SimulationState) -> NarrativeConstraints:
        events = state.recent_events
        themes = _dedupe(theme for event in events for theme in EVENT_THEMES.get(event.type, ()))
        unlocked = _dedupe(
            event.genre for event in events if event.type == "inspiration" and event.genre
        )
        return NarrativeConstraints(
            lyric_themes=themes,
            unlocked_genres=unlocked,
            emotional_tone=self._emotional_tone(events),
            narrative_weight=_clamp(state.game_week / WEEKS_PER_YEAR, 0.0, 1.0),
        )

    @staticmethod
    def _emotional_tone(events: List[NarrativeEvent]) -> EmotionalTone:
        positivity = intensity = darkness = 0.0
        for event in events:
            delta = TONE_DELTAS.get(event.type)
            if delta is None:
                continue
            positivity += delta[0]
            intensity += delta[1]
            darkness += delta[2]
        return EmotionalTone(
            positivity=_clamp(positivity, -100.0, 100.0),
            intensity=_clamp(intensity),
            darkness=_clamp(darkness),
        )


def extract_constraints(state: SimulationState) -> Constraints:
    return ConstraintExtractor().extract(state)

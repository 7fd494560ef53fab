"""Deterministic scoring of a generated song."""

from __future__ import annotations

import numpy as np

from ..app.models import Constraints, HarmonyResult, SongAnalysis
from .harmony import HarmonyEngine

BASE_ORIGINALITY = 50.0


def commercial_viability(harmony: HarmonyResult, constraints: Constraints) -> float:
    industry = constraints.industry
    score = HarmonyEngine.commercial_viability(harmony.progression)
    if industry.label_pressure > 70:
        score *= 1.2
    catchiness = industry.fan_expectations.catchiness
    if catchiness:
        score *= 0.5 + catchiness
    return float(np.clip(score * 100, 0.0, 100.0))


def originality_score(constraints: Constraints) -> float:
    narrative = constraints.narrative
    score = BASE_ORIGINALITY
    score += (constraints.band.confidence - 50) * 0.3
    score -= constraints.psych.burnout * 0.3
    if len(narrative.lyric_themes) > 2:
        score += 15
    if narrative.unlocked_genres:
        score += 20
    return float(np.clip(score, 0.0, 100.0))


def quality_score(constraints: Constraints) -> int:
    band = constraints.band
    context = constraints.context
    production = (context.equipment_quality + context.studio_quality) / 2
    return round(band.overall_skill * 0.5 + production * 0.3 + band.chemistry * 0.2)


def analyze(harmony: HarmonyResult, constraints: Constraints) -> SongAnalysis:
    return SongAnalysis(
        commercial_viability=commercial_viability(harmony, constraints),
        originality_score=originality_score(constraints),
        quality_score=quality_score(constraints),
        emotional_tone=constraints.narrative.emotional_tone,
    )

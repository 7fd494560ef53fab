import pytest
from pydantic import ValidationError

from gigmaster_worker.app.models import SimulationState
from gigmaster_worker.services.constraints import (
    FAN_EXPECTATIONS,
    ConstraintExtractor,
    _clamp,
    extract_constraints,
)


def _state(**payload: object) -> SimulationState:
    return SimulationState.model_validate(payload)


def test_empty_roster_uses_defaults() -> None:
    constraints = extract_constraints(_state(bandMembers=[]))
    assert constraints.band.overall_skill == 50
    assert constraints.band.chemistry == 50
    assert constraints.band.member_skills.drummer == 50


def test_minimal_state_never_raises() -> None:
    constraints = ConstraintExtractor().extract(SimulationState())
    assert constraints.psych.ego == 50
    assert constraints.psych.corruption == 0
    assert constraints.industry.label_type == "independent"
    assert constraints.context.venue_type == "generic"
    assert constraints.narrative.lyric_themes == []


def test_band_skills_and_chemistry() -> None:
    state = _state(
        bandMembers=[
            {"id": "a", "instrument": "guitarist", "skill": 80, "chemistry": {"b": 80, "c": 60}},
            {"id": "b", "instrument": "drummer", "skill": 70, "chemistry": {}},
            {"id": "c", "instrument": "bassist", "skill": 30},
        ],
        totalGigs=40,
        albumsReleased=2,
        bandConfidence=65,
    )
    band = extract_constraints(state).band
    assert band.overall_skill == pytest.approx(60.0)
    assert band.member_skills.guitarist == 80
    assert band.member_skills.drummer == 70
    assert band.member_skills.vocalist == 50
    assert band.chemistry == pytest.approx((80 + 60 + 50) / 3)
    assert band.experience == 50
    assert band.maturity_level == pytest.approx(4.0)
    assert band.confidence == 65


def test_numeric_member_ids_match_chemistry_keys() -> None:
    state = _state(
        bandMembers=[
            {"id": 1, "instrument": "vocalist", "skill": 60, "chemistry": {"2": 90}},
            {"id": 2, "instrument": "drummer", "skill": 60},
        ]
    )
    assert extract_constraints(state).band.chemistry == pytest.approx(90.0)


def test_psychology_derivations() -> None:
    state = _state(
        psychState={
            "stress": 30,
            "depression": 60,
            "burnout": 30,
            "moral_integrity": 70,
            "addiction_risk": 20,
            "substance_use": 10,
        }
    )
    psych = extract_constraints(state).psych
    assert psych.corruption == pytest.approx(30.0)
    assert psych.mental_health == pytest.approx(100 - 40)
    assert psych.creative_potential == pytest.approx(100 - (30 * 0.6 + 30 * 0.3))
    assert psych.addiction_risk == 20
    assert psych.substance_use == 10


def test_out_of_range_inputs_are_clamped() -> None:
    state = _state(
        bandConfidence=-20,
        psychState={"stress": 150, "moral_integrity": -50, "burnout": 100},
        bandMembers=[{"id": "x", "instrument": "drummer", "skill": 140}],
        equipment={"quality": 300},
    )
    constraints = extract_constraints(state)
    assert constraints.band.confidence == 0
    assert constraints.band.overall_skill == 100
    assert constraints.band.member_skills.drummer == 100
    assert constraints.psych.stress == 100
    assert constraints.psych.corruption == 100
    assert constraints.psych.creative_potential == pytest.approx(10.0)
    assert constraints.context.equipment_quality == 100


def test_industry_without_deal() -> None:
    industry = extract_constraints(_state(money=-2500)).industry
    assert industry.label_pressure == 0
    assert industry.commercial_threshold == pytest.approx(0.3)
    assert industry.financial_pressure == pytest.approx(2.5)
    assert industry.fan_expectations == FAN_EXPECTATIONS["mixed"]


def test_industry_with_deal_and_fanbase() -> None:
    state = _state(
        labelDeal={"pressure": 80, "type": "major"},
        fanbase={"primary": "mainstream"},
        mediaAttention=40,
        money=500,
    )
    industry = extract_constraints(state).industry
    assert industry.label_pressure == 80
    assert industry.label_type == "major"
    assert industry.commercial_threshold == pytest.approx(0.64)
    assert industry.fan_expectations.catchiness == pytest.approx(0.9)
    assert industry.media_scrutiny == 40
    assert industry.financial_pressure == 0


def test_unknown_fanbase_falls_back_to_mixed() -> None:
    industry = extract_constraints(_state(fanbase={"primary": "cult"})).industry
    assert industry.fan_expectations.emphasis == "variety"
    assert industry.fan_expectations.catchiness is None


def test_context_passthrough() -> None:
    state = _state(
        currentVenue={"type": "club", "capacity": 250, "acoustics": "boomy"},
        currentAudience={"type": "punks", "size": 180},
        currentStudio={"quality": 85},
        dayOfWeek=5,
        season="winter",
    )
    context = extract_constraints(state).context
    assert context.venue_type == "club"
    assert context.venue_capacity == 250
    assert context.venue_acoustics == "boomy"
    assert context.audience_type == "punks"
    assert context.audience_size == 180
    assert context.audience_expectations == "standard"
    assert context.studio_quality == 85
    assert context.equipment_quality == 50
    assert context.day_of_week == 5
    assert context.season == "winter"


def test_narrative_themes_unlocks_and_tone() -> None:
    state = _state(
        gameWeek=26,
        recentEvents=[
            {"type": "addiction_struggle"},
            {"type": "addiction_struggle"},
            {"type": "inspiration", "genre": "jazz"},
            {"type": "creative_block"},
            {"type": "unknown_event"},
        ],
    )
    narrative = extract_constraints(state).narrative
    assert narrative.lyric_themes == [
        "darkness",
        "escape",
        "degradation",
        "revelation",
        "clarity",
        "energy",
        "emptiness",
        "silence",
        "searching",
    ]
    assert narrative.unlocked_genres == ["jazz"]
    assert narrative.emotional_tone.positivity == pytest.approx(10.0)
    assert narrative.emotional_tone.intensity == pytest.approx(40.0)
    assert narrative.emotional_tone.darkness == pytest.approx(65.0)
    assert narrative.narrative_weight == pytest.approx(0.5)


def test_emotional_tone_is_clamped() -> None:
    state = _state(
        gameWeek=200,
        recentEvents=[{"type": "breakup"}] * 6 + [{"type": "creative_block"}] * 12,
    )
    narrative = extract_constraints(state).narrative
    assert narrative.emotional_tone.darkness == 100
    assert narrative.emotional_tone.positivity == -100
    assert narrative.emotional_tone.intensity == 90
    assert narrative.narrative_weight == 1


def test_constraints_are_immutable_and_pure() -> None:
    state = _state(psychState={"depression": 45})
    first = extract_constraints(state)
    second = extract_constraints(state)
    assert first == second
    with pytest.raises(Exception):
        first.psych.depression = 10  # type: ignore[misc]


def test_constraints_serialize_with_camel_case() -> None:
    payload = extract_constraints(SimulationState()).model_dump(by_alias=True)
    assert "overallSkill" in payload["band"]
    assert "addictionRisk" in payload["psych"]
    assert "fanExpectations" in payload["industry"]
    assert "narrativeWeight" in payload["narrative"]


@pytest.mark.parametrize(
    "payload",
    [
        {"psychState": {"stress": float("nan")}},
        {"psychState": {"depression": float("inf")}},
        {"bandConfidence": float("nan")},
        {"bandMembers": [{"id": "a", "skill": float("nan")}]},
        {"bandMembers": [{"id": "a", "chemistry": {"b": float("-inf")}}]},
        {"equipment": {"quality": float("nan")}},
    ],
)
def test_non_finite_inputs_are_rejected_before_extraction(payload: dict) -> None:
    with pytest.raises(ValidationError):
        _state(**payload)


def test_extreme_finite_inputs_never_raise() -> None:
    state = _state(
        psychState={"stress": 1e308, "depression": -1e308, "moral_integrity": 1e308},
        bandConfidence=1e308,
    )
    constraints = extract_constraints(state)
    assert constraints.psych.stress == 100
    assert constraints.psych.depression == 0
    assert constraints.band.confidence == 100


def test_clamp_maps_nan_to_fallback() -> None:
    assert _clamp(float("nan")) == 0
    assert _clamp(float("nan"), fallback=50.0) == 50
    assert _clamp(float("inf")) == 100
    assert _clamp(-3.0) == 0

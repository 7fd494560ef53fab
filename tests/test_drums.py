import math

import pytest

from gigmaster_worker.app.models import Constraints, DrumBeats, DrumPattern, SimulationState
from gigmaster_worker.services.catalog import BUILTIN_DRUM_FAMILIES, GENRE_DRUM_FAMILIES, tempo_bucket
from gigmaster_worker.services.constraints import extract_constraints
from gigmaster_worker.services.drums import DrumEngine
from gigmaster_worker.services.library import ContentLibrary


def _constraints(**payload: object) -> Constraints:
    return extract_constraints(SimulationState.model_validate(payload))


def _builtin(pattern_id: str) -> DrumPattern:
    for bucket in BUILTIN_DRUM_FAMILIES.values():
        for pattern in bucket.values():
            if pattern.id == pattern_id:
                return pattern
    raise AssertionError(f"{pattern_id} is not a built-in pattern")


def test_skilled_calm_drummer_scenario() -> None:
    constraints = _constraints(
        bandMembers=[{"instrument": "drummer", "skill": 90}],
        psychState={"depression": 10, "stress": 10},
    )
    result = DrumEngine().generate(constraints, "rock", "t1")
    assert 110 <= result.tempo <= 160
    assert result.pattern.has_creative_fill is True
    assert result.pattern.fill_complexity == pytest.approx(20 / 30)
    assert result.genre == "rock"
    assert result.source == "builtin"


@pytest.mark.parametrize(
    "payload",
    [
        {"psychState": {"depression": 100}, "bandConfidence": 0},
        {"psychState": {"substance_use": 100}, "bandConfidence": 100},
        {"psychState": {"depression": 100, "substance_use": 100, "stress": 100}},
        {"bandConfidence": 90},
        {},
    ],
)
def test_tempo_stays_in_bounds(payload: dict) -> None:
    constraints = _constraints(**payload)
    engine = DrumEngine()
    for index in range(25):
        result = engine.generate(constraints, "metal", f"tempo-{index}-{index * 7}")
        assert 60 <= result.tempo <= 180


def test_depression_slows_tempo() -> None:
    engine = DrumEngine()
    calm = engine.generate(_constraints(psychState={"depression": 0}), "rock", "s")
    low = engine.generate(_constraints(psychState={"depression": 90}), "rock", "s")
    assert calm.tempo == pytest.approx(120.0)
    assert low.tempo == pytest.approx(102.0)


def test_same_inputs_reproduce_pattern() -> None:
    constraints = _constraints(
        bandMembers=[{"instrument": "drummer", "skill": 75}],
        psychState={"stress": 80, "substance_use": 70, "depression": 65},
    )
    first = DrumEngine().generate(constraints, "punk", "repeat")
    second = DrumEngine().generate(constraints, "punk", "repeat")
    assert first.pattern == second.pattern
    assert first.tempo == second.tempo


def test_pattern_family_matches_genre_and_tempo_bucket() -> None:
    constraints = _constraints()
    result = DrumEngine().generate(constraints, "jazz", "swing-it")
    original = _builtin(result.pattern.id)
    assert original.family in GENRE_DRUM_FAMILIES["jazz"]
    assert result.pattern.id.endswith(tempo_bucket(result.tempo))


def test_unknown_genre_uses_rock_families() -> None:
    result = DrumEngine().generate(_constraints(), "polka", "oompah")
    assert result.pattern.family in GENRE_DRUM_FAMILIES["rock"]


def test_missing_family_falls_back_to_medium_backbeat() -> None:
    # blast beats only exist in the fast bucket
    constraints = _constraints(psychState={"depression": 100})
    engine = DrumEngine()
    ids = {engine.generate(constraints, "metal", f"m-{i}-{i ** 3}").pattern.id for i in range(30)}
    assert "blast_medium" not in ids
    assert ids <= {"backbeat_medium", "driving_medium", "halftime_medium"}


def test_depression_thins_hihats() -> None:
    constraints = _constraints(psychState={"depression": 100})
    result = DrumEngine().generate(constraints, "rock", "sad")
    original = _builtin(result.pattern.id)
    assert len(result.pattern.beats.hihat) == math.ceil(len(original.beats.hihat) * 0.7)


def test_library_patterns_are_never_mutated() -> None:
    snapshot = {
        bucket: {family: pattern.model_dump() for family, pattern in patterns.items()}
        for bucket, patterns in BUILTIN_DRUM_FAMILIES.items()
    }
    constraints = _constraints(
        bandMembers=[{"instrument": "drummer", "skill": 95}],
        psychState={"stress": 90, "substance_use": 90, "depression": 70},
        equipment={"quality": 10},
    )
    engine = DrumEngine()
    for index in range(10):
        engine.generate(constraints, "rock", f"mutate-{index}")
    assert snapshot == {
        bucket: {family: pattern.model_dump() for family, pattern in patterns.items()}
        for bucket, patterns in BUILTIN_DRUM_FAMILIES.items()
    }


def test_low_skill_jitters_kick_positions() -> None:
    constraints = _constraints(bandMembers=[{"instrument": "drummer", "skill": 0}])
    result = DrumEngine().generate(constraints, "rock", "sloppy")
    original = _builtin(result.pattern.id)
    assert result.pattern.beats.kick != original.beats.kick
    assert len(result.pattern.beats.kick) == len(original.beats.kick)
    assert result.pattern.has_creative_fill is False


def test_curated_library_is_preferred_when_it_fits() -> None:
    custom = DrumPattern(
        id="custom_groove",
        beats=DrumBeats(kick=[0.0, 2.0], snare=[1.0, 3.0], hihat=[0.0, 1.0, 2.0, 3.0]),
        bpm_range=(60.0, 180.0),
        genre_weights={"rock": 1.0},
    )
    library = ContentLibrary(drums=(custom,))
    result = DrumEngine().generate(_constraints(), "rock", "curated", library=library)
    assert result.source == "library"
    assert result.pattern.id == "custom_groove"


def test_curated_library_without_match_uses_builtin_families() -> None:
    jazz_only = DrumPattern(
        id="jazz_only",
        beats=DrumBeats(kick=[0.0], snare=[2.0], hihat=[0.0, 1.0]),
        genre_weights={"jazz": 1.0},
    )
    library = ContentLibrary(drums=(jazz_only,))
    result = DrumEngine().generate(_constraints(), "rock", "curated", library=library)
    assert result.source == "builtin"
    assert result.pattern.family in GENRE_DRUM_FAMILIES["rock"]


def test_gameplay_hooks() -> None:
    hooks = DrumEngine.gameplay_hooks(80)
    assert hooks["groove_stability"] == pytest.approx(0.8)
    assert hooks["fill_complexity"] == pytest.approx(50 / 70)
    assert hooks["ghost_note_chance"] == pytest.approx(0.5)
    assert DrumEngine.gameplay_hooks(20)["fill_complexity"] == 0

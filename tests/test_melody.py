import pytest

from gigmaster_worker.app.models import (
    ChordProgression,
    Constraints,
    HarmonyResult,
    MappedPhrase,
    Mode,
    SectionContour,
    SimulationState,
)
from gigmaster_worker.services.catalog import BUILTIN_PHRASES
from gigmaster_worker.services.constraints import extract_constraints
from gigmaster_worker.services.library import ContentLibrary
from gigmaster_worker.services.melody import (
    MelodyEngine,
    degree_offset,
    section_contour,
    song_structure,
)

PHRASES = {phrase.id: phrase for phrase in BUILTIN_PHRASES}


def _constraints(**payload: object) -> Constraints:
    return extract_constraints(SimulationState.model_validate(payload))


def _harmony(chords: list[str], mode: Mode = Mode.MINOR) -> HarmonyResult:
    progression = ChordProgression(id="test", name="test", chords=chords, mode=mode)
    return HarmonyResult(progression=progression, mode=mode, genre="rock")


def _mapped(degrees: list[int]) -> MappedPhrase:
    return MappedPhrase(
        phrase_id="p",
        style="stepwise",
        length_bars=1,
        degree_offset=0,
        scale_degrees=degrees,
        durations=[1.0] * len(degrees),
        target_chord="C",
        section_context="verse",
        phrase_index=0,
    )


def test_song_structure_template() -> None:
    structure = song_structure(["Am", "F", "C", "G"])
    assert [section.name for section in structure] == [
        "intro",
        "verse",
        "chorus",
        "verse",
        "chorus",
        "bridge",
        "chorus",
        "outro",
    ]
    assert structure[0].chords == ["Am", "F"]
    assert structure[1].chords == ["Am", "F", "C", "G"]
    assert structure[5].chords == ["Am", "F", "C"]
    assert structure[7].chords == ["Am"]


def test_assembled_melody_covers_every_chord() -> None:
    harmony = _harmony(["Am", "F", "C", "G"])
    result = MelodyEngine().assemble(harmony, _constraints(), "melody")
    assert len(result.melody) == 8
    for section, template in zip(result.melody, result.song_structure):
        assert section.section == template.name
        assert [phrase.target_chord for phrase in section.phrases] == template.chords
        assert [phrase.phrase_index for phrase in section.phrases] == list(range(len(template.chords)))
        assert all(phrase.section_context == section.section for phrase in section.phrases)


def test_depressed_guitarist_prefers_arch_and_melancholy() -> None:
    constraints = _constraints(
        bandMembers=[{"instrument": "guitarist", "skill": 60}],
        psychState={"depression": 90},
    )
    result = MelodyEngine().assemble(_harmony(["Am", "F", "C", "G"]), constraints, "blue")
    assert result.characteristic_style == "arch"
    for section in result.melody:
        for phrase in section.phrases:
            assert PHRASES[phrase.phrase_id].emotional_character.melancholy >= 0.4


def test_arch_phrases_excluded_without_depression() -> None:
    constraints = _constraints(bandMembers=[{"instrument": "guitarist", "skill": 50}])
    result = MelodyEngine().assemble(_harmony(["C", "G", "Am", "F"], Mode.MAJOR), constraints, "bright")
    assert result.characteristic_style == "stepwise"
    styles = {phrase.style for section in result.melody for phrase in section.phrases}
    assert "arch" not in styles


def test_burnout_caps_phrase_complexity() -> None:
    constraints = _constraints(
        bandMembers=[{"instrument": "guitarist", "skill": 95}],
        psychState={"burnout": 80},
    )
    result = MelodyEngine().assemble(_harmony(["Am", "F", "C", "G"]), constraints, "tired")
    for section in result.melody:
        for phrase in section.phrases:
            assert PHRASES[phrase.phrase_id].complexity <= 0.7


def test_low_skill_widens_to_length_bucket() -> None:
    constraints = _constraints(bandMembers=[{"instrument": "guitarist", "skill": 5}])
    result = MelodyEngine().assemble(_harmony(["C", "G"], Mode.MAJOR), constraints, "novice")
    lengths = {phrase.length_bars for section in result.melody for phrase in section.phrases}
    assert lengths <= {1, 2}


def test_same_inputs_reproduce_melody() -> None:
    constraints = _constraints(
        bandMembers=[{"instrument": "guitarist", "skill": 85}],
        psychState={"burnout": 10},
    )
    harmony = _harmony(["Em", "C", "G", "D"])
    first = MelodyEngine().assemble(harmony, constraints, "repeat")
    second = MelodyEngine().assemble(harmony, constraints, "repeat")
    assert first.melody == second.melody
    assert first.characteristic_style == second.characteristic_style


def test_failed_phrase_library_uses_builtin_set() -> None:
    library = ContentLibrary(phrases=())
    result = MelodyEngine().assemble(
        _harmony(["Am", "G"]), _constraints(), "fallback", library=library
    )
    assert all(
        phrase.phrase_id in PHRASES for section in result.melody for phrase in section.phrases
    )


def test_phrases_shift_to_chord_roots() -> None:
    result = MelodyEngine().assemble(_harmony(["Am", "F"]), _constraints(), "shift")
    verse = result.melody[1]
    tonic_phrase, f_phrase = verse.phrases
    assert tonic_phrase.degree_offset == 0
    assert f_phrase.degree_offset == -2
    original = PHRASES[f_phrase.phrase_id]
    assert f_phrase.scale_degrees == [degree - 2 for degree in original.scale_degrees]


@pytest.mark.parametrize(
    ("chord", "tonic", "expected"),
    [
        ("F", "Am", -2),
        ("G", "C", -3),
        ("D", "C", 1),
        ("IV", "I", 3),
        ("vi", "I", -2),
        ("bVII", "I", -1),
        ("N.C.", "C", 0),
    ],
)
def test_degree_offset(chord: str, tonic: str, expected: int) -> None:
    assert degree_offset(chord, tonic) == expected


def test_section_contours() -> None:
    assert section_contour([_mapped([0, 2, 4]), _mapped([5, 3, -1])]) == SectionContour.ARCH
    assert section_contour([_mapped([0, 1, 2, 3])]) == SectionContour.ASCENDING
    assert section_contour([_mapped([4, 3, 2, 1])]) == SectionContour.DESCENDING
    assert section_contour([_mapped([0, 1, 0, 1])]) == SectionContour.STABLE
    assert section_contour([]) == SectionContour.STABLE


def test_gameplay_hooks() -> None:
    hooks = MelodyEngine.gameplay_hooks(80, 10)
    assert hooks["rare_motifs_unlocked"] is True
    assert hooks["cliche_reuse"] == 0.2
    assert MelodyEngine.gameplay_hooks(80, 100)["creative_fluency"] == pytest.approx(0.3)

from mentor_core.domain.models import Mode
from mentor_core.prompts.modes import MODE_PROFILES, resolve, resolve_mode


def test_every_mode_has_distinct_non_empty_profile():
    pairs = [resolve(m.value) for m in Mode]
    assert set(MODE_PROFILES) == set(Mode)
    for task, framing in pairs:
        assert task.strip()
        assert framing.strip()
    assert len(set(pairs)) == len(pairs)


def test_unknown_values_fall_back_to_career():
    career = resolve("career")
    for value in [None, "", "Resume", "unknown", 42, ["study"], {"mode": "study"}]:
        assert resolve(value) == career
        assert resolve_mode(value).mode is Mode.CAREER


def test_mode_specific_instructions():
    assert "quantifiable" in resolve("resume")[0]
    assert "6-month" in resolve("study")[0]
    assert "monthly milestones" in resolve("study")[0]
    assert "5 common technical" in resolve("interview")[0]
    assert "3 behavioral" in resolve("interview")[0]
    assert "2-year" in resolve("career")[0]


def test_parse_accepts_enum_members():
    assert Mode.parse(Mode.STUDY) is Mode.STUDY
    assert Mode.parse("interview") is Mode.INTERVIEW

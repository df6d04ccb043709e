"""Stage validator tests: the gate on forward navigation."""

import pytest

from health_quiz.models.answers import AnswerRecord, ScaleResponses
from health_quiz.models.question import BooleanQuestion, ChoiceQuestion, NumberQuestion, Option
from health_quiz.models.stage import StageDescriptor
from health_quiz.validator import can_advance, field_is_answered, missing_fields


@pytest.fixture
def stage():
    return StageDescriptor(
        id="basic",
        title="Basic",
        questions=[
            NumberQuestion(id="age", label="Age"),
            ChoiceQuestion(
                id="gender",
                label="Gender",
                options=[Option(value="male", label="Male"), Option(value="female", label="Female")],
            ),
            BooleanQuestion(id="smoker", label="Smoker"),
        ],
        required=["age", "gender"],
    )


def test_no_required_fields_always_passes(store):
    """Stages without required fields pass regardless of answers."""
    kidney = store.get_stage_by_id("kidney")
    assert kidney.required == []
    assert can_advance(kidney, AnswerRecord())
    assert can_advance(kidney, {"creatinine": None})


def test_missing_fields_blocks(stage):
    answers = AnswerRecord({"age": 40})
    assert not can_advance(stage, answers)
    assert missing_fields(stage, answers) == ["gender"]


def test_all_required_present_passes(stage):
    answers = AnswerRecord({"age": 40, "gender": "female"})
    assert can_advance(stage, answers)
    assert missing_fields(stage, answers) == []


def test_validation_is_pure(stage):
    answers = AnswerRecord({"age": 40})
    before = answers.snapshot()
    can_advance(stage, answers)
    assert answers.snapshot() == before


class TestFieldIsAnswered:
    """Per-value validity rules."""

    @pytest.mark.parametrize("value", [0, 0.0, False, "never", 12.5])
    def test_present_scalars(self, value):
        assert field_is_answered(value), f"{value!r} should count as answered"

    @pytest.mark.parametrize("value", [None, ""])
    def test_absent_scalars(self, value):
        assert not field_is_answered(value)

    def test_empty_array_fails(self):
        assert not field_is_answered([])
        assert not field_is_answered(ScaleResponses(slots=[]))

    def test_array_with_unanswered_fails(self):
        assert not field_is_answered([0, 1, -1])
        assert not field_is_answered(ScaleResponses.from_sentinels([0, 1, -1]))

    def test_custom_slots_pass(self):
        """Free-text answers count as answered."""
        assert field_is_answered([-2, -2, -2])
        assert field_is_answered(ScaleResponses.from_sentinels([-2, 0, 3]))

"""AnswerRecord and ScaleResponses tests.

Covers the single ``update(key, value)`` write path, the fixed-kind
invariant, default pre-population and the tagged scale slot variants.
"""

import pytest

from health_quiz.models.answers import (
    AnswerRecord,
    CustomSlot,
    ScaleResponses,
    SelectedSlot,
    UnansweredSlot,
)


# =====================================================================
# AnswerRecord: writes
# =====================================================================


class TestUpdate:
    """update() is the only write path."""

    def test_set_and_read(self, answers):
        answers.update("age", 45.0)
        assert answers["age"] == 45.0
        assert answers.get("gender") is None
        assert "age" in answers and len(answers) == 1

    def test_none_clears(self, answers):
        answers.update("age", 45.0)
        answers.update("age", None)
        assert "age" not in answers

    def test_clearing_absent_key_is_noop(self, answers):
        answers.update("age", None)
        assert len(answers) == 0

    def test_idempotent(self, answers):
        answers.update("gender", "male")
        answers.update("gender", "male")
        assert answers.snapshot() == {"gender": "male"}

    def test_arbitrary_keys_allowed(self, answers):
        answers.update("waistCircumference", 92)
        assert answers["waistCircumference"] == 92


class TestFixedKind:
    """Once written, a key keeps its semantic kind for the session."""

    def test_kind_mismatch_raises(self, answers):
        answers.update("age", 45)
        with pytest.raises(ValueError):
            answers.update("age", "forty-five")

    def test_kind_survives_clear(self, answers):
        answers.update("age", 45)
        answers.update("age", None)
        with pytest.raises(ValueError):
            answers.update("age", "forty-five")
        assert answers.kind_of("age") == "number"

    def test_bool_is_not_a_number(self, answers):
        """True must not be accepted where a number was recorded."""
        answers.update("diabetesHistory", True)
        assert answers.kind_of("diabetesHistory") == "boolean"
        with pytest.raises(ValueError):
            answers.update("diabetesHistory", 1)

    def test_int_and_float_share_kind(self, answers):
        answers.update("weight", 70)
        answers.update("weight", 70.5)
        assert answers["weight"] == 70.5

    def test_unsupported_type_raises(self, answers):
        with pytest.raises(ValueError):
            answers.update("notes", {"free": "text"})

    def test_reset_replaces_kind(self, answers):
        answers.update("phq9Responses", 3)
        answers.reset("phq9Responses", ScaleResponses.blank(9))
        assert answers.kind_of("phq9Responses") == "scale"
        assert answers["phq9Responses"].to_sentinels() == [-1] * 9
        with pytest.raises(ValueError):
            answers.update("phq9Responses", 3)


class TestScaleValues:
    """Raw integer lists are coerced into ScaleResponses."""

    def test_list_is_coerced(self, answers):
        answers.update("phq9Responses", [0, -2, -1])
        value = answers["phq9Responses"]
        assert isinstance(value, ScaleResponses)
        assert isinstance(value.slots[0], SelectedSlot) and value.slots[0].value == 0
        assert isinstance(value.slots[1], CustomSlot)
        assert isinstance(value.slots[2], UnansweredSlot)
        assert answers.kind_of("phq9Responses") == "scale"

    def test_scale_kind_fixed(self, answers):
        answers.update("phq9Responses", [0, 1])
        with pytest.raises(ValueError):
            answers.update("phq9Responses", 3)


def test_snapshot_is_a_copy(answers):
    answers.update("age", 30)
    snap = answers.snapshot()
    snap["age"] = 99
    assert answers["age"] == 30


def test_initial_values_go_through_update():
    record = AnswerRecord({"age": 30, "gad7Responses": [1, 1]})
    assert record["age"] == 30
    assert isinstance(record["gad7Responses"], ScaleResponses)


def test_from_defaults_prefills_config_defaults(store):
    """Only questions with a default value are pre-populated."""
    record = AnswerRecord.from_defaults(store.stages)
    assert record.snapshot() == {
        "smokingStatus": "never",
        "diabetesHistory": False,
        "familyDiabetes": False,
    }


# =====================================================================
# ScaleResponses
# =====================================================================


class TestScaleResponses:

    def test_blank(self):
        r = ScaleResponses.blank(9)
        assert r.length == 9
        assert r.first_unanswered() == 0
        assert not r.is_complete

    def test_empty_is_not_complete(self):
        assert not ScaleResponses(slots=[]).is_complete

    def test_custom_counts_as_answered(self):
        r = ScaleResponses.from_sentinels([-2, -2, 3])
        assert r.is_complete
        assert r.selected_values() == [3]

    def test_legacy_encoding_round_trip(self):
        values = [0, 3, -2, -1]
        assert ScaleResponses.from_sentinels(values).to_sentinels() == values

    def test_unknown_sentinel_treated_as_unanswered(self):
        r = ScaleResponses.from_sentinels([-7, 1])
        assert isinstance(r.slots[0], UnansweredSlot)

    def test_with_slot_copies(self):
        r = ScaleResponses.blank(3)
        r2 = r.with_slot(1, SelectedSlot(value=2))
        assert r.to_sentinels() == [-1, -1, -1], "original must be unchanged"
        assert r2.to_sentinels() == [-1, 2, -1]

    def test_with_slot_out_of_range(self):
        with pytest.raises(IndexError):
            ScaleResponses.blank(3).with_slot(3, SelectedSlot(value=0))

    def test_healed(self):
        r = ScaleResponses.from_sentinels([1, 2])
        assert r.healed(2) is r
        assert r.healed(9).to_sentinels() == [-1] * 9

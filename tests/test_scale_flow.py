"""ScaleInterview tests: the one-item-at-a-time scale state machine.

Combined flow: the mental stage of v1/stages.yaml (PHQ-9 then GAD-7,
9 + 7 items, no free text).  Single flow: the depression stage of
v1/stages_chat.yaml (PHQ-9 only, free text enabled).
"""

import pytest

from health_quiz.models.answers import CustomSlot, ScaleResponses
from health_quiz.scale_flow import ScaleInterview


@pytest.fixture
def combined(store, answers):
    flow = ScaleInterview(store.get_stage_by_id("mental").scale_questions, answers)
    flow.start()
    return flow


@pytest.fixture
def single(chat_store, answers):
    flow = ScaleInterview(chat_store.get_stage_by_id("depression").scale_questions, answers)
    flow.start()
    return flow


# =====================================================================
# Initialisation / self-healing
# =====================================================================


class TestStart:

    def test_missing_arrays_are_created(self, combined, answers):
        assert answers["phq9Responses"].to_sentinels() == [-1] * 9
        assert answers["gad7Responses"].to_sentinels() == [-1] * 7
        assert combined.cursor == (0, 0)

    def test_wrong_length_is_reinitialised(self, store, answers):
        answers.update("phq9Responses", [0, 1])
        flow = ScaleInterview(store.get_stage_by_id("mental").scale_questions, answers)
        flow.start()
        assert answers["phq9Responses"].to_sentinels() == [-1] * 9

    def test_resumes_at_first_unanswered(self, store, answers):
        answers.update("phq9Responses", [1, 2] + [-1] * 7)
        flow = ScaleInterview(store.get_stage_by_id("mental").scale_questions, answers)
        flow.start()
        assert flow.cursor == (0, 2)
        assert answers["phq9Responses"].to_sentinels()[:2] == [1, 2], "valid array is kept"

    def test_requires_a_scale(self, answers):
        with pytest.raises(ValueError):
            ScaleInterview([], answers)


# =====================================================================
# Combined flow transitions
# =====================================================================


class TestCombinedFlow:

    def test_walks_every_item_then_completes(self, combined, answers):
        """N+M selections pass through exactly N+M active states."""
        seen = []
        while combined.cursor is not None:
            seen.append(combined.cursor)
            assert combined.to_state().state == "active"
            assert combined.select(3)
        assert seen == [(0, i) for i in range(9)] + [(1, i) for i in range(7)]
        assert combined.is_complete
        assert combined.to_state().state == "complete"
        assert answers["phq9Responses"].to_sentinels() == [3] * 9
        assert answers["gad7Responses"].to_sentinels() == [3] * 7

    def test_switches_section_after_last_item(self, combined):
        for _ in range(9):
            combined.select(0)
        assert combined.cursor == (1, 0)
        assert combined.current_question.id == "gad7Responses"
        assert combined.current_prompt == "Feeling nervous, anxious, or on edge"

    def test_passed_items_are_not_modified(self, combined, answers):
        combined.select(2)
        combined.select(1)
        combined.select(0)
        assert answers["phq9Responses"].to_sentinels()[:3] == [2, 1, 0]

    def test_complete_is_terminal(self, combined, answers):
        for _ in range(16):
            combined.select(1)
        before = answers.snapshot()
        assert combined.select(0) is False
        assert answers.snapshot() == before

    @pytest.mark.parametrize("value", [4, -1, -2, True])
    def test_invalid_value_rejected(self, combined, answers, value):
        assert combined.select(value) is False
        assert combined.cursor == (0, 0)
        assert answers["phq9Responses"].to_sentinels() == [-1] * 9

    def test_free_text_not_offered(self, combined, answers):
        assert not combined.allow_free_text
        assert combined.submit_text("on and off") is False
        assert combined.cursor == (0, 0)


# =====================================================================
# Single flow with free text
# =====================================================================


class TestSingleFlow:

    def test_free_text_writes_custom_slot(self, single, answers):
        assert single.allow_free_text
        assert single.submit_text("  only when work is busy ") is True
        slot = answers["phq9Responses"].slots[0]
        assert isinstance(slot, CustomSlot)
        assert slot.text == "only when work is busy"
        assert single.cursor == (0, 1)

    def test_blank_text_ignored(self, single):
        assert single.submit_text("   ") is False
        assert single.cursor == (0, 0)

    def test_free_text_answers_complete_the_scale(self, single, answers):
        for _ in range(9):
            single.submit_text("sometimes")
        assert single.is_complete
        assert answers["phq9Responses"].to_sentinels() == [-2] * 9


# =====================================================================
# Views
# =====================================================================


def test_transcript_lists_answered_items(single):
    single.select(0)
    single.submit_text("hard to say")
    entries = single.transcript()
    assert [(e.number, e.answer, e.custom) for e in entries] == [
        (1, "Not at all", False),
        (2, "hard to say", True),
    ]
    assert entries[0].prompt == "Little interest or pleasure in doing things"


def test_transcript_of_legacy_custom_slot(store, answers):
    answers.update("gad7Responses", ScaleResponses.from_sentinels([-2] + [-1] * 6))
    flow = ScaleInterview([store.find_question("gad7Responses")[1]], answers)
    flow.start()
    assert flow.transcript()[0].answer == "(custom response)"


def test_active_state_payload(combined):
    state = combined.to_state()
    assert state.scale == "PHQ-9"
    assert state.scale_title == "Depression Screening (PHQ-9)"
    assert state.item_number == 1
    assert [r["label"] for r in state.responses] == [
        "Not at all", "Several days", "More than half the days", "Nearly every day",
    ]
    assert state.transcript == []


def test_flow_heals_record_changed_underneath(combined, answers):
    """A cleared array is re-created on the next read."""
    combined.select(1)
    answers.update("phq9Responses", None)
    assert combined.cursor == (0, 0)
    assert answers["phq9Responses"].to_sentinels() == [-1] * 9


def test_flow_skips_slots_answered_underneath(combined, answers):
    """An array rewritten at the same length moves the cursor past its answers."""
    combined.select(1)
    answers.update("phq9Responses", [2] * 9)
    assert combined.cursor == (1, 0)
    assert combined.select(0)
    assert answers["phq9Responses"].to_sentinels() == [2] * 9
    assert answers["gad7Responses"].to_sentinels()[0] == 0


@pytest.mark.parametrize("malformed", [3, "often", True])
def test_scalar_under_scale_key_is_reinitialised(store, answers, malformed):
    answers.update("phq9Responses", malformed)
    flow = ScaleInterview(store.get_stage_by_id("mental").scale_questions, answers)
    flow.start()
    assert answers["phq9Responses"].to_sentinels() == [-1] * 9
    assert answers.kind_of("phq9Responses") == "scale"
    assert flow.cursor == (0, 0)

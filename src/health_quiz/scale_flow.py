"""ScaleInterview: one-item-at-a-time flow over one or more scales.

The flow walks the scale questions of a stage in order (for example PHQ-9
then GAD-7) and presents a single item at a time.  Answered items move into
a read-only transcript and can no longer be changed from within the flow.

States:
    Active(section, item_index)  - an item is waiting for a response
    Complete                     - every slot of every managed scale is answered

Transitions:
    select(value)     write SelectedSlot(value) at the cursor, then move on
    submit_text(text) write CustomSlot(text) at the cursor, then move on
                      (single-scale flow with free text enabled only)

"Move on" means the next item of the same scale, else the first item of the
next scale, else Complete.  There is no backward transition.

:meth:`start` must run before the first render: it re-initialises any
missing or wrongly-sized response array to all-unanswered.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from health_quiz.models.answers import (
    AnswerRecord,
    CustomSlot,
    ScaleResponses,
    SelectedSlot,
    UnansweredSlot,
)
from health_quiz.models.question import ScaleQuestion
from health_quiz.models.session import ScaleInterviewState, TranscriptEntry

logger = logging.getLogger(__name__)

# Transcript text for a custom slot whose text was not kept (legacy -2).
_CUSTOM_PLACEHOLDER = "(custom response)"


class ScaleInterview:
    """Sequential interview over the scale questions of one stage.

    Args:
        sections: scale questions in presentation order
        answers: the session's answer record; every write goes through
            ``answers.update``
    """

    def __init__(self, sections: Sequence[ScaleQuestion], answers: AnswerRecord) -> None:
        if not sections:
            raise ValueError("ScaleInterview needs at least one scale question")
        self._sections = list(sections)
        self._answers = answers
        # (section, item_index) or None when complete
        self._cursor: tuple[int, int] | None = (0, 0)
        self._started = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Heal response arrays and place the cursor on the first open item.

        On a fresh record this is section 0, item 0.  On a stage revisited
        after back-navigation it resumes at the first unanswered slot.
        """
        for q in self._sections:
            self._heal(q)
        self._cursor = self._next_open(0, 0)
        self._started = True

    def _heal(self, q: ScaleQuestion) -> None:
        current = self._answers.get(q.id)
        length = q.scale.length
        if isinstance(current, ScaleResponses) and current.length == length:
            return
        logger.info(
            "Initialising %s with %d unanswered slots (was %r)",
            q.id, length, current,
        )
        self._answers.reset(q.id, ScaleResponses.blank(length))

    def _sync(self) -> None:
        """Re-heal if the record was changed underneath the flow.

        The cursor is recomputed on every read so it never points at a slot
        that was answered outside the flow.
        """
        if not self._started:
            self.start()
            return
        for q in self._sections:
            current = self._answers.get(q.id)
            if not isinstance(current, ScaleResponses) or current.length != q.scale.length:
                self.start()
                return
        self._cursor = self._next_open(0, 0)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def allow_free_text(self) -> bool:
        """Typed responses are only offered in a single-scale flow."""
        return len(self._sections) == 1 and self._sections[0].allow_free_text

    @property
    def sections(self) -> list[ScaleQuestion]:
        return list(self._sections)

    @property
    def is_complete(self) -> bool:
        """True iff every slot across all managed arrays is answered."""
        for q in self._sections:
            responses = self._answers.get(q.id)
            if not isinstance(responses, ScaleResponses) or not responses.is_complete:
                return False
        return True

    @property
    def cursor(self) -> tuple[int, int] | None:
        """``(section, item_index)`` while active, ``None`` once complete."""
        self._sync()
        return self._cursor

    @property
    def current_question(self) -> ScaleQuestion | None:
        cursor = self.cursor
        if cursor is None:
            return None
        return self._sections[cursor[0]]

    @property
    def current_prompt(self) -> str | None:
        cursor = self.cursor
        if cursor is None:
            return None
        section, item = cursor
        return self._sections[section].scale.items[item]

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def select(self, value: int) -> bool:
        """Answer the current item with one of the scale's response values.

        Returns False (and changes nothing) if the flow is complete or the
        value is not a response of the current scale.
        """
        cursor = self.cursor
        if cursor is None:
            logger.debug("select(%r) ignored: interview complete", value)
            return False
        question = self._sections[cursor[0]]
        if isinstance(value, bool) or question.scale.response_label(value) is None:
            logger.warning(
                "select(%r) ignored: not a response of scale %s", value, question.scale.name,
            )
            return False
        self._write(cursor, SelectedSlot(value=value))
        return True

    def submit_text(self, text: str) -> bool:
        """Answer the current item with free text.

        Returns False if free text is not enabled for this flow, the text is
        blank, or the flow is complete.
        """
        if not self.allow_free_text:
            logger.warning("submit_text ignored: free text is not enabled for this flow")
            return False
        cleaned = (text or "").strip()
        if not cleaned:
            return False
        cursor = self.cursor
        if cursor is None:
            logger.debug("submit_text ignored: interview complete")
            return False
        self._write(cursor, CustomSlot(text=cleaned))
        return True

    def _write(self, cursor: tuple[int, int], slot) -> None:
        section, item = cursor
        question = self._sections[section]
        responses: ScaleResponses = self._answers[question.id]
        self._answers.update(question.id, responses.with_slot(item, slot))
        self._cursor = self._next_open(section, item + 1)

    def _next_open(self, section: int, item: int) -> tuple[int, int] | None:
        """First unanswered slot at or after ``(section, item)``."""
        while section < len(self._sections):
            responses = self._answers.get(self._sections[section].id)
            slots = responses.slots if isinstance(responses, ScaleResponses) else []
            while item < len(slots):
                if isinstance(slots[item], UnansweredSlot):
                    return section, item
                item += 1
            section += 1
            item = 0
        return None

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def transcript(self) -> list[TranscriptEntry]:
        """Answered items in presentation order (read-only)."""
        self._sync()
        entries: list[TranscriptEntry] = []
        for q in self._sections:
            responses = self._answers.get(q.id)
            if not isinstance(responses, ScaleResponses):
                continue
            for i, slot in enumerate(responses.slots):
                if isinstance(slot, SelectedSlot):
                    answer = q.scale.response_label(slot.value) or str(slot.value)
                    custom = False
                elif isinstance(slot, CustomSlot):
                    answer = slot.text or _CUSTOM_PLACEHOLDER
                    custom = True
                else:
                    continue
                entries.append(TranscriptEntry(
                    scale=q.scale.name,
                    number=i + 1,
                    prompt=q.scale.items[i],
                    answer=answer,
                    custom=custom,
                ))
        return entries

    def to_state(self) -> ScaleInterviewState:
        """Snapshot for the presentation layer."""
        cursor = self.cursor
        transcript = self.transcript()
        if cursor is None:
            return ScaleInterviewState(state="complete", transcript=transcript)

        section, item = cursor
        question = self._sections[section]
        return ScaleInterviewState(
            state="active",
            scale=question.scale.name,
            scale_title=question.scale.title,
            item_index=item,
            item_number=item + 1,
            prompt=question.scale.items[item],
            responses=[{"value": r.value, "label": r.label} for r in question.scale.responses],
            allow_free_text=self.allow_free_text,
            transcript=transcript,
        )

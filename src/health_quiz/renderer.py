"""QuestionRenderer: normalises raw widget input into typed answer values.

Every question kind has one handler, registered in an explicit mapping at
construction time:

    number   raw text / number -> float, or None (clears the answer)
    choice   one of the option values; anything else is logged and ignored
    boolean  strict bool; None reads as False
    scale    delegated to :class:`~health_quiz.scale_flow.ScaleInterview`

Unknown kinds raise ``ValueError`` from :meth:`QuestionRenderer.dispatch`
instead of falling back to a default widget.

Usage::

    renderer = QuestionRenderer()
    renderer.answer(question, "72.5", answers)      # one answers.update()
    payload = renderer.to_payload(question, answers)
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping
from typing import Any

from health_quiz.models.answers import AnswerRecord, ScaleResponses
from health_quiz.models.question import (
    BooleanQuestion,
    ChoiceQuestion,
    NumberQuestion,
    Question,
    ScaleQuestion,
)
from health_quiz.models.session import QuestionPayload
from health_quiz.scale_flow import ScaleInterview

logger = logging.getLogger(__name__)

# Returned by a normaliser when the input must not touch the record.
_IGNORE = object()

_TRUE_STRINGS = {"true"}
_FALSE_STRINGS = {"false"}


# ---------------------------------------------------------------------------
# Normalisers (one per scalar kind)
# ---------------------------------------------------------------------------

def normalize_number(question: NumberQuestion, raw: Any) -> float | None:
    """Parse ``raw`` as a float; anything unparseable becomes ``None``."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            logger.debug("%s: unparseable number %r, clearing", question.id, raw)
            return None
    if not math.isfinite(value):
        return None
    return value


def normalize_choice(question: ChoiceQuestion, raw: Any) -> Any:
    """Accept only one of the question's option values."""
    if raw in question.option_values:
        return raw
    logger.warning(
        "%s: %r is not one of %s, ignoring", question.id, raw, question.option_values,
    )
    return _IGNORE


def normalize_boolean(question: BooleanQuestion, raw: Any) -> Any:
    """Strict bool.  ``None`` is False; "true"/"false" strings are accepted."""
    if raw is None:
        return False
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        lowered = raw.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    logger.warning("%s: %r is not a boolean, ignoring", question.id, raw)
    return _IGNORE


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------

class QuestionRenderer:
    """Dispatches questions to their per-kind input behaviour."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[Any, Any, AnswerRecord], bool]] = {
            "number": self._answer_scalar(normalize_number),
            "choice": self._answer_scalar(normalize_choice),
            "boolean": self._answer_scalar(normalize_boolean),
            "scale": self._answer_scale,
        }

    @property
    def kinds(self) -> list[str]:
        return list(self._handlers)

    def dispatch(self, question: Question) -> Callable[[Any, Any, AnswerRecord], bool]:
        """Return the answer handler for ``question``.

        Raises:
            ValueError: if the question kind has no handler.
        """
        kind = getattr(question, "question_type", None)
        handler = self._handlers.get(kind)
        if handler is None:
            raise ValueError(f"No input handler for question kind '{kind}'")
        return handler

    def answer(self, question: Question, raw: Any, answers: AnswerRecord) -> bool:
        """Normalise ``raw`` and write it with a single ``answers.update``.

        Returns True if a value was written, False if the input was ignored.
        """
        return self.dispatch(question)(question, raw, answers)

    # --- Handlers ---

    @staticmethod
    def _answer_scalar(normalize: Callable[[Any, Any], Any]):
        def handler(question: Any, raw: Any, answers: AnswerRecord) -> bool:
            value = normalize(question, raw)
            if value is _IGNORE:
                return False
            try:
                answers.update(question.id, value)
            except ValueError as exc:
                logger.warning("%s: %s", question.id, exc)
                return False
            return True
        return handler

    @staticmethod
    def _answer_scale(question: ScaleQuestion, raw: Any, answers: AnswerRecord) -> bool:
        """Answer the next open item of a single scale.

        Integers select a response; strings go through the free-text path.
        """
        interview = ScaleInterview([question], answers)
        interview.start()
        if isinstance(raw, str):
            return interview.submit_text(raw)
        return interview.select(raw)

    # --- Display ---

    def display_value(self, question: Question, answers: Mapping[str, Any]) -> Any:
        """Value a widget should show for ``question`` right now."""
        self.dispatch(question)
        value = answers.get(question.id)
        if isinstance(question, ChoiceQuestion):
            if value is None:
                return question.default_value or ""
            return value
        if isinstance(question, BooleanQuestion):
            return bool(value)
        if isinstance(question, ScaleQuestion):
            if isinstance(value, ScaleResponses):
                return value.to_sentinels()
            return None
        return value

    def to_payload(self, question: Question, answers: Mapping[str, Any]) -> QuestionPayload:
        """Flatten ``question`` and its current answer for a presentation layer."""
        payload = QuestionPayload(
            qid=question.id,
            label=question.label,
            question_type=question.question_type,
            description=question.description,
            value=self.display_value(question, answers),
        )
        if isinstance(question, ChoiceQuestion):
            payload.options = [{"value": o.value, "label": o.label} for o in question.options]
        elif isinstance(question, NumberQuestion):
            payload.constraints = {
                "min": question.min_value,
                "max": question.max_value,
                "step": question.step,
                "placeholder": question.placeholder,
            }
        elif isinstance(question, ScaleQuestion):
            payload.scale = {
                "name": question.scale.name,
                "title": question.scale.title,
                "items": list(question.scale.items),
                "responses": [
                    {"value": r.value, "label": r.label} for r in question.scale.responses
                ],
            }
        return payload

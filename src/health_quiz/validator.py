"""Stage validator: decides whether the user may move past a stage.

A stage lists its required answer keys.  Each key passes when:

  - scale responses (``ScaleResponses`` or a raw integer list): the array is
    non-empty and no slot is unanswered; free-text answers count
  - any other value: it is present and is not ``None`` or ``""``

The check is pure: it reads the answers and never writes them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from health_quiz.constants import UNANSWERED_SENTINEL
from health_quiz.models.answers import ScaleResponses
from health_quiz.models.stage import StageDescriptor


def field_is_answered(value: Any) -> bool:
    """Validity of one stored answer."""
    if isinstance(value, ScaleResponses):
        return value.is_complete
    if isinstance(value, (list, tuple)):
        return len(value) > 0 and all(v != UNANSWERED_SENTINEL for v in value)
    return value is not None and value != ""


def missing_fields(stage: StageDescriptor, answers: Mapping[str, Any]) -> list[str]:
    """Required keys of ``stage`` that do not pass yet, in declaration order."""
    return [f for f in stage.required if not field_is_answered(answers.get(f))]


def can_advance(stage: StageDescriptor, answers: Mapping[str, Any]) -> bool:
    """True if every required field of ``stage`` is answered."""
    if not stage.required:
        return True
    return all(field_is_answered(answers.get(f)) for f in stage.required)

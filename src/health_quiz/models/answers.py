"""Answer store: the one piece of mutable state in a questionnaire session.

``AnswerRecord`` maps question ids to answer values.  A value is one of:

  - number  (int / float, never bool)
  - string  (a choice option value)
  - boolean
  - ``ScaleResponses`` (fixed-length list of scale slots)

Writes go through :meth:`AnswerRecord.update`, the single message every
widget sends.  The semantic kind of a key is fixed the first time it is
written and stays fixed for the session, even across a clear.

Scale slots are an explicit tagged variant rather than magic integers:

  - ``UnansweredSlot``      - not reached yet
  - ``CustomSlot(text)``    - answered with free text, no numeric value
  - ``SelectedSlot(value)`` - answered with one of the scale's responses

``ScaleResponses.from_sentinels`` / ``to_sentinels`` convert to and from
the legacy ``-1`` / ``-2`` / ``0..K-1`` integer encoding.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Annotated, Any, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from health_quiz.constants import CUSTOM_SENTINEL, UNANSWERED_SENTINEL

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Scale slots
# ---------------------------------------------------------------------------

class UnansweredSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["unanswered"] = "unanswered"


class CustomSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["custom"] = "custom"
    text: str = ""


class SelectedSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["selected"] = "selected"
    value: int


ScaleSlot = Annotated[
    Union[UnansweredSlot, CustomSlot, SelectedSlot],
    Field(discriminator="kind"),
]


class ScaleResponses(BaseModel):
    """Fixed-length ordered responses to one scale.

    Instances are immutable; :meth:`with_slot` returns a copy so that every
    change reaches the record through ``AnswerRecord.update``.
    """

    model_config = ConfigDict(frozen=True)

    slots: List[ScaleSlot]

    # --- Constructors ---

    @classmethod
    def blank(cls, length: int) -> ScaleResponses:
        return cls(slots=[UnansweredSlot() for _ in range(length)])

    @classmethod
    def from_sentinels(cls, values: Iterable[int]) -> ScaleResponses:
        """Build from the legacy integer encoding."""
        slots: list = []
        for v in values:
            if v == UNANSWERED_SENTINEL:
                slots.append(UnansweredSlot())
            elif v == CUSTOM_SENTINEL:
                slots.append(CustomSlot())
            elif isinstance(v, int) and not isinstance(v, bool) and v >= 0:
                slots.append(SelectedSlot(value=v))
            else:
                logger.warning("Unrecognised scale slot value %r, treating as unanswered", v)
                slots.append(UnansweredSlot())
        return cls(slots=slots)

    # --- Queries ---

    @property
    def length(self) -> int:
        return len(self.slots)

    @property
    def is_complete(self) -> bool:
        """True when non-empty and no slot is unanswered."""
        return bool(self.slots) and not any(
            isinstance(s, UnansweredSlot) for s in self.slots
        )

    def first_unanswered(self) -> int | None:
        for i, s in enumerate(self.slots):
            if isinstance(s, UnansweredSlot):
                return i
        return None

    def selected_values(self) -> list[int]:
        """Numeric values of selected slots; custom and unanswered are skipped."""
        return [s.value for s in self.slots if isinstance(s, SelectedSlot)]

    def to_sentinels(self) -> list[int]:
        out: list[int] = []
        for s in self.slots:
            if isinstance(s, SelectedSlot):
                out.append(s.value)
            elif isinstance(s, CustomSlot):
                out.append(CUSTOM_SENTINEL)
            else:
                out.append(UNANSWERED_SENTINEL)
        return out

    # --- Copy-on-write helpers ---

    def healed(self, length: int) -> ScaleResponses:
        """Return self if it already has ``length`` slots, else a blank array."""
        if self.length == length:
            return self
        return ScaleResponses.blank(length)

    def with_slot(self, index: int, slot: Any) -> ScaleResponses:
        """Copy with slot ``index`` replaced.  Length never changes.

        Raises:
            IndexError: if ``index`` is outside the array.
        """
        if not 0 <= index < self.length:
            raise IndexError(f"slot index {index} out of range for length {self.length}")
        slots = list(self.slots)
        slots[index] = slot
        return ScaleResponses(slots=slots)


# ---------------------------------------------------------------------------
# AnswerRecord
# ---------------------------------------------------------------------------

def _semantic_kind(value: Any) -> str:
    """Classify a stored value.  bool is checked before int on purpose."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, ScaleResponses):
        return "scale"
    raise ValueError(f"Unsupported answer value type: {type(value).__name__}")


class AnswerRecord(Mapping):
    """Mutable answer store passed by reference to every component.

    Read access follows the ``Mapping`` protocol; the only write path is
    :meth:`update`.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = {}
        # Semantic kind recorded on first write, kept after clears
        self._kinds: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.update(key, value)

    @classmethod
    def from_defaults(cls, stages: Iterable[Any]) -> AnswerRecord:
        """Create a record pre-populated with every question's default value."""
        record = cls()
        for stage in stages:
            for question in stage.questions:
                default = getattr(question, "default_value", None)
                if default is not None:
                    record.update(question.id, default)
        return record

    # --- Mapping protocol ---

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"AnswerRecord({self._values!r})"

    # --- Writes ---

    def update(self, key: str, value: Any) -> None:
        """Set ``key`` to ``value``; ``None`` clears the key.

        Integer lists are accepted in the legacy sentinel encoding and stored
        as ``ScaleResponses``.

        Raises:
            ValueError: if ``value`` has a different semantic kind than the
                one first recorded for ``key``, or an unsupported type.
        """
        if value is None:
            if key in self._values:
                logger.debug("Cleared answer %s", key)
                del self._values[key]
            return

        if isinstance(value, (list, tuple)):
            value = ScaleResponses.from_sentinels(value)

        kind = _semantic_kind(value)
        fixed = self._kinds.get(key)
        if fixed is not None and fixed != kind:
            raise ValueError(
                f"Answer '{key}' was recorded as {fixed}, cannot store {kind}"
            )

        self._kinds[key] = kind
        self._values[key] = value

    def reset(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` with a fresh semantic kind.

        Used to re-initialise a key that holds a malformed value of another
        kind.  Every other write goes through :meth:`update`.
        """
        old = self._kinds.pop(key, None)
        self._values.pop(key, None)
        if old is not None:
            logger.info("Reset answer %s (was %s)", key, old)
        self.update(key, value)

    def kind_of(self, key: str) -> str | None:
        """Semantic kind fixed for ``key``, or None if never written."""
        return self._kinds.get(key)

    def snapshot(self) -> dict[str, Any]:
        """Plain dict copy for read-only consumers."""
        return dict(self._values)

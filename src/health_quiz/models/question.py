"""Question type models for the health questionnaire.

Each question type maps to one input-widget behaviour and one answer
normalisation rule:

    - number:  numeric input with optional min/max/step
    - choice:  pick one option from an ordered list of (value, label)
    - boolean: a single checkbox
    - scale:   a multi-item standardised scale answered one item at a time

The discriminated ``Question`` union uses ``question_type`` as its
discriminator.  The ``question_mapper`` dict maps type strings to their
Pydantic classes for dynamic deserialisation from YAML.
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator


# --- Base question type ---

class BaseQuestion(BaseModel):
    """Fields shared by all question types."""

    id: str
    label: str
    description: Optional[str] = None


# --- Shared option / scale models ---

class Option(BaseModel):
    """A selectable option with a stored value and display label."""

    value: str
    label: str


class ScaleResponseOption(BaseModel):
    """One response shared by every item of a scale (e.g. 0 = "Not at all")."""

    value: int
    label: str


class ScaleDescriptor(BaseModel):
    """A standardised multi-item scale such as PHQ-9 or GAD-7."""

    name: str
    title: str
    items: List[str]
    responses: List[ScaleResponseOption]

    @model_validator(mode="after")
    def _chk(self):
        if not self.items:
            raise ValueError(f"scale '{self.name}' must have at least one item")
        if not self.responses:
            raise ValueError(f"scale '{self.name}' must have at least one response")
        values = [r.value for r in self.responses]
        if len(set(values)) != len(values):
            raise ValueError(f"scale '{self.name}' has duplicate response values")
        # Negative values collide with the legacy sentinel encoding
        if min(values) < 0:
            raise ValueError(f"scale '{self.name}' response values must be >= 0")
        return self

    @property
    def length(self) -> int:
        return len(self.items)

    def response_label(self, value: int) -> Optional[str]:
        for r in self.responses:
            if r.value == value:
                return r.label
        return None


# --- Question types ---

class NumberQuestion(BaseQuestion):
    """Numeric input with optional min/max/step constraints."""

    question_type: Literal["number"] = "number"
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    step: Optional[float] = None
    placeholder: Optional[str] = None
    default_value: Optional[float] = None

    @model_validator(mode="after")
    def _chk(self):
        if (
            self.min_value is not None
            and self.max_value is not None
            and self.min_value >= self.max_value
        ):
            raise ValueError(f"{self.id}: min_value must be < max_value")
        return self


class ChoiceQuestion(BaseQuestion):
    """Pick exactly one option; the stored answer is the option's value."""

    question_type: Literal["choice"] = "choice"
    options: List[Option]
    default_value: Optional[str] = None

    @model_validator(mode="after")
    def _chk(self):
        if not self.options:
            raise ValueError(f"{self.id}: choice question needs at least one option")
        if self.default_value is not None and self.default_value not in self.option_values:
            raise ValueError(
                f"{self.id}: default_value '{self.default_value}' is not one of "
                f"{self.option_values}"
            )
        return self

    @property
    def option_values(self) -> list[str]:
        return [o.value for o in self.options]


class BooleanQuestion(BaseQuestion):
    """A single checkbox; absent answers read as False."""

    question_type: Literal["boolean"] = "boolean"
    default_value: Optional[bool] = None


class ScaleQuestion(BaseQuestion):
    """A multi-item scale, answered through the scale interview flow.

    ``allow_free_text`` enables the typed-response path; it only takes
    effect when the scale is the single scale of its stage.
    """

    question_type: Literal["scale"] = "scale"
    scale: ScaleDescriptor
    allow_free_text: bool = False


# --- Discriminated union of all question types ---

Question = Annotated[
    Union[
        NumberQuestion,
        ChoiceQuestion,
        BooleanQuestion,
        ScaleQuestion,
    ],
    Field(discriminator="question_type"),
]

# Maps question_type string → Pydantic class for dynamic deserialization from YAML.
question_mapper = {
    "number": NumberQuestion,
    "choice": ChoiceQuestion,
    "boolean": BooleanQuestion,
    "scale": ScaleQuestion,
}

"""Step models: the contract between the session and a presentation layer.

These models describe what a UI needs to render the current position of a
session.  They are flat and carry no routing details.

Step types:
  - StageStep:   a questionnaire stage with its questions (or scale interview)
  - ResultsStep: the results stage, carrying the computed ``ResultsRecord``

The ``StepResult`` union covers both cases so callers can dispatch on ``type``.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel

from .results import BMIResult, ResultsRecord


class QuestionPayload(BaseModel):
    """Flattened question for rendering.

    Carries the answer currently held for the question so that a revisited
    stage can pre-fill its widgets.
    """

    qid: str
    label: str
    question_type: str
    description: Optional[str] = None
    # [{value, label}] for choice questions
    options: list[dict] | None = None
    # {min, max, step, placeholder} for number questions
    constraints: dict | None = None
    # {name, title, items, responses} for scale questions
    scale: dict | None = None
    value: Any = None


class TranscriptEntry(BaseModel):
    """One answered scale item, shown read-only once passed."""

    scale: str
    number: int
    prompt: str
    answer: str
    custom: bool = False


class ScaleInterviewState(BaseModel):
    """Position of the scale interview flow.

    ``state`` is "active" while an item is waiting for a response and
    "complete" once every managed slot is answered.
    """

    state: Literal["active", "complete"]
    scale: Optional[str] = None
    scale_title: Optional[str] = None
    item_index: Optional[int] = None
    item_number: Optional[int] = None
    prompt: Optional[str] = None
    responses: list[dict] = []
    allow_free_text: bool = False
    transcript: list[TranscriptEntry] = []


class StageStep(BaseModel):
    """Present a stage and wait for answers."""

    type: Literal["stage"] = "stage"
    index: int
    stage_id: str
    title: str
    description: str
    icon: str
    layout: str
    questions: list[QuestionPayload]
    can_advance: bool
    can_retreat: bool
    progress: float
    stage_statuses: list[str]
    footer: dict | None = None
    bmi: BMIResult | None = None
    grid_columns: int | None = None
    interview: ScaleInterviewState | None = None


class ResultsStep(BaseModel):
    """Final stage: scored results ready to display."""

    type: Literal["results"] = "results"
    index: int
    stage_id: str
    title: str
    description: str
    can_retreat: bool
    results: ResultsRecord


# Callers can match on step.type to dispatch rendering logic.
StepResult = StageStep | ResultsStep

"""Stage descriptor models: one per questionnaire page.

These models mirror ``v1/stages.yaml``.  A stage groups related questions,
declares which of them must be answered before the user may move on, and
optionally names a specialised component that takes over the whole stage.
"""

from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, model_validator

from .enums import StageComponent, StageIcon, StageLayout
from .question import Question, ScaleQuestion


class InfoListContent(BaseModel):
    """A titled bullet list shown beneath the questions."""

    title: str
    items: List[str]


class StageFooter(BaseModel):
    """Optional footer content: plain text or a titled item list."""

    type: Literal["info"] = "info"
    content: Union[str, InfoListContent]


class StageDescriptor(BaseModel):
    """A single questionnaire stage.

    ``required`` lists the answer keys that must be filled before
    :func:`~health_quiz.validator.can_advance` lets the user move forward.
    """

    id: str
    title: str
    description: str = ""
    icon: StageIcon = StageIcon.USER
    layout: StageLayout = StageLayout.VERTICAL
    questions: List[Question] = []
    required: List[str] = []
    footer: Optional[StageFooter] = None
    component: Optional[StageComponent] = None
    grid_columns: Optional[int] = None
    show_bmi: bool = False

    @model_validator(mode="after")
    def _chk(self):
        ids = [q.id for q in self.questions]
        if len(set(ids)) != len(ids):
            raise ValueError(f"stage '{self.id}' has duplicate question ids")

        unknown = [f for f in self.required if f not in ids]
        if unknown:
            raise ValueError(
                f"stage '{self.id}' requires fields it never asks: {unknown}"
            )

        if self.component in (StageComponent.SCALE_INTERVIEW, StageComponent.SCALE_CHAT):
            if not self.scale_questions:
                raise ValueError(
                    f"stage '{self.id}' uses component '{self.component.value}' "
                    "but declares no scale questions"
                )
            if self.component == StageComponent.SCALE_CHAT and len(self.scale_questions) != 1:
                raise ValueError(
                    f"stage '{self.id}': scale_chat takes exactly one scale"
                )

        if self.layout == StageLayout.RESULTS and self.component is None:
            self.component = StageComponent.RESULTS_SUMMARY
        return self

    @property
    def scale_questions(self) -> list[ScaleQuestion]:
        return [q for q in self.questions if isinstance(q, ScaleQuestion)]

    @property
    def is_results(self) -> bool:
        return self.component == StageComponent.RESULTS_SUMMARY

    @property
    def uses_scale_flow(self) -> bool:
        return self.component in (StageComponent.SCALE_INTERVIEW, StageComponent.SCALE_CHAT)

    def get_question(self, qid: str) -> Question:
        """Return the question with id ``qid``.

        Raises:
            KeyError: if the stage has no such question.
        """
        for q in self.questions:
            if q.id == qid:
                return q
        raise KeyError(qid)

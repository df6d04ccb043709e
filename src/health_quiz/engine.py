"""QuizEngine: orchestrates a questionnaire session over a loaded StageStore.

The engine is stateless; each :class:`QuizSession` it starts owns the one
mutable ``AnswerRecord`` plus the navigator and scale-interview cursors.
Sessions live in memory only and are discarded when the caller drops them.

Flow:
    current_step()          -> StageStep, or ResultsStep on the results stage
    answer(qid, raw)        -> normalise and store one answer of the current stage
    select_scale(value)     -> answer the active scale item
    submit_scale_text(text) -> free-text answer (single-scale stages only)
    advance() / retreat() / jump_to(i)
"""

from __future__ import annotations

import logging
from typing import Any

from health_quiz.models.answers import AnswerRecord
from health_quiz.models.question import ScaleQuestion
from health_quiz.models.results import ResultsRecord
from health_quiz.models.session import ResultsStep, StageStep, StepResult
from health_quiz.models.stage import StageDescriptor
from health_quiz.navigator import StageNavigator
from health_quiz.renderer import QuestionRenderer
from health_quiz.scale_flow import ScaleInterview
from health_quiz.scoring import bmi_result, compute_results
from health_quiz.stageset import StageStore
from health_quiz.validator import missing_fields

logger = logging.getLogger(__name__)


class QuizSession:
    """One user's pass through the questionnaire.

    Args:
        store: a loaded :class:`StageStore`
        renderer: question renderer shared with the engine
    """

    def __init__(self, store: StageStore, renderer: QuestionRenderer) -> None:
        self._store = store
        self._renderer = renderer
        self.answers = AnswerRecord.from_defaults(store.stages)
        self.navigator = StageNavigator(store.stages, self.answers)
        # stage id -> interview, created when a scale stage is first shown
        self._interviews: dict[str, ScaleInterview] = {}
        self._enter_stage()

    # ==================================================================
    # Stage state
    # ==================================================================

    @property
    def current_stage(self) -> StageDescriptor:
        return self.navigator.current_stage

    @property
    def current_index(self) -> int:
        return self.navigator.current_index

    def interview(self, stage: StageDescriptor | None = None) -> ScaleInterview | None:
        """Scale interview of ``stage`` (default: current), or None."""
        stage = stage or self.current_stage
        if not stage.uses_scale_flow:
            return None
        interview = self._interviews.get(stage.id)
        if interview is None:
            interview = ScaleInterview(stage.scale_questions, self.answers)
            self._interviews[stage.id] = interview
        return interview

    def _enter_stage(self) -> None:
        """Self-heal the scale arrays of the stage just entered."""
        interview = self.interview()
        if interview is not None:
            interview.start()

    def missing_fields(self) -> list[str]:
        return missing_fields(self.current_stage, self.answers)

    # ==================================================================
    # Render surface
    # ==================================================================

    def current_step(self) -> StepResult:
        """Describe the current stage for a presentation layer."""
        stage = self.current_stage
        nav = self.navigator

        if stage.is_results:
            return ResultsStep(
                index=nav.current_index,
                stage_id=stage.id,
                title=stage.title,
                description=stage.description,
                can_retreat=nav.can_retreat,
                results=self.compute_results(),
            )

        interview = self.interview(stage)
        return StageStep(
            index=nav.current_index,
            stage_id=stage.id,
            title=stage.title,
            description=stage.description,
            icon=stage.icon.value,
            layout=stage.layout.value,
            questions=[self._renderer.to_payload(q, self.answers) for q in stage.questions],
            can_advance=nav.can_advance,
            can_retreat=nav.can_retreat,
            progress=nav.progress,
            stage_statuses=[nav.stage_status(i).value for i in range(nav.stage_count)],
            footer=stage.footer.model_dump() if stage.footer else None,
            bmi=bmi_result(self.answers) if stage.show_bmi else None,
            grid_columns=stage.grid_columns,
            interview=interview.to_state() if interview is not None else None,
        )

    # ==================================================================
    # Inputs
    # ==================================================================

    def answer(self, qid: str, raw: Any) -> bool:
        """Normalise and store one answer for a question of the current stage.

        Scale questions on an interview stage are routed to the interview:
        integers select a response and strings go through free text.
        """
        stage = self.current_stage
        try:
            question = stage.get_question(qid)
        except KeyError:
            logger.warning("answer(%s) ignored: not a question of stage '%s'", qid, stage.id)
            return False

        if isinstance(question, ScaleQuestion) and stage.uses_scale_flow:
            if isinstance(raw, str):
                return self.submit_scale_text(raw)
            return self.select_scale(raw)
        return self._renderer.answer(question, raw, self.answers)

    def select_scale(self, value: int) -> bool:
        interview = self.interview()
        if interview is None:
            logger.warning("select_scale ignored: stage '%s' has no scale flow", self.current_stage.id)
            return False
        return interview.select(value)

    def submit_scale_text(self, text: str) -> bool:
        interview = self.interview()
        if interview is None:
            logger.warning(
                "submit_scale_text ignored: stage '%s' has no scale flow", self.current_stage.id,
            )
            return False
        return interview.submit_text(text)

    # ==================================================================
    # Navigation
    # ==================================================================

    def advance(self) -> bool:
        moved = self.navigator.advance()
        if moved:
            self._enter_stage()
        return moved

    def retreat(self) -> bool:
        moved = self.navigator.retreat()
        if moved:
            self._enter_stage()
        return moved

    def jump_to(self, index: int) -> bool:
        moved = self.navigator.jump_to(index)
        if moved:
            self._enter_stage()
        return moved

    # ==================================================================
    # Results
    # ==================================================================

    def compute_results(self) -> ResultsRecord:
        return compute_results(self.answers)


class QuizEngine:
    """Starts questionnaire sessions over one loaded configuration.

    Args:
        store: a loaded :class:`StageStore` instance
    """

    def __init__(self, store: StageStore) -> None:
        if not store.stages:
            raise ValueError("StageStore has no stages; call store.load() first")
        self._store = store
        self._renderer = QuestionRenderer()

    @property
    def store(self) -> StageStore:
        return self._store

    def start_session(self) -> QuizSession:
        session = QuizSession(self._store, self._renderer)
        logger.info(
            "Session started: %d stages, %d defaults pre-filled",
            self._store.stage_count,
            len(session.answers),
        )
        return session

"""health_quiz: multi-stage health-risk questionnaire SDK.

Public API:
    StageStore        - loads and validates the YAML stage configuration
    QuizEngine        - starts sessions over a loaded store
    QuizSession       - one user's pass: answers, navigation, scale interviews
    StageNavigator    - stage cursor with validation-gated advance
    QuestionRenderer  - per-kind input normalisation
    ScaleInterview    - one-item-at-a-time scale flow
    compute_results   - scoring engine entry point
    ReportRenderer    - Jinja2 text rendering of steps and results
"""

from health_quiz.config import QuizSettings, load_settings
from health_quiz.engine import QuizEngine, QuizSession
from health_quiz.models.answers import AnswerRecord, ScaleResponses
from health_quiz.models.results import ResultsRecord
from health_quiz.navigator import StageNavigator
from health_quiz.renderer import QuestionRenderer
from health_quiz.report import ReportRenderer
from health_quiz.scale_flow import ScaleInterview
from health_quiz.scoring import compute_results
from health_quiz.stageset import StageStore
from health_quiz.validator import can_advance

__all__ = [
    "AnswerRecord",
    "QuestionRenderer",
    "QuizEngine",
    "QuizSession",
    "QuizSettings",
    "ReportRenderer",
    "ResultsRecord",
    "ScaleInterview",
    "ScaleResponses",
    "StageNavigator",
    "StageStore",
    "can_advance",
    "compute_results",
    "load_settings",
]

"""Public model re-exports for health_quiz.

Consumers should import from ``health_quiz.models`` rather than reaching
into sub-modules directly.
"""

# --- Answers ---
from health_quiz.models.answers import (
    AnswerRecord,
    CustomSlot,
    ScaleResponses,
    ScaleSlot,
    SelectedSlot,
    UnansweredSlot,
)

# --- Enums ---
from health_quiz.models.enums import (
    RiskLevel,
    StageComponent,
    StageIcon,
    StageLayout,
    StageStatus,
)

# --- Questions ---
from health_quiz.models.question import (
    BaseQuestion,
    BooleanQuestion,
    ChoiceQuestion,
    NumberQuestion,
    Option,
    Question,
    ScaleDescriptor,
    ScaleQuestion,
    ScaleResponseOption,
    question_mapper,
)

# --- Results ---
from health_quiz.models.results import (
    BMIResult,
    CategoryResult,
    Recommendation,
    ResultsRecord,
)

# --- Session / step ---
from health_quiz.models.session import (
    QuestionPayload,
    ResultsStep,
    ScaleInterviewState,
    StageStep,
    StepResult,
    TranscriptEntry,
)

# --- Stages ---
from health_quiz.models.stage import (
    InfoListContent,
    StageDescriptor,
    StageFooter,
)

__all__ = [
    # Answers
    "AnswerRecord",
    "CustomSlot",
    "ScaleResponses",
    "ScaleSlot",
    "SelectedSlot",
    "UnansweredSlot",
    # Enums
    "RiskLevel",
    "StageComponent",
    "StageIcon",
    "StageLayout",
    "StageStatus",
    # Questions
    "BaseQuestion",
    "BooleanQuestion",
    "ChoiceQuestion",
    "NumberQuestion",
    "Option",
    "Question",
    "ScaleDescriptor",
    "ScaleQuestion",
    "ScaleResponseOption",
    "question_mapper",
    # Results
    "BMIResult",
    "CategoryResult",
    "Recommendation",
    "ResultsRecord",
    # Session
    "QuestionPayload",
    "ResultsStep",
    "ScaleInterviewState",
    "StageStep",
    "StepResult",
    "TranscriptEntry",
    # Stages
    "InfoListContent",
    "StageDescriptor",
    "StageFooter",
]

"""Enumerations shared by the stage configuration and results models."""

import enum


class StageIcon(str, enum.Enum):
    """Icon identifiers a stage may declare.

    The presentation layer maps each member to its own asset; unknown
    identifiers are rejected when the configuration is loaded.
    """

    USER = "user"
    HEART = "heart"
    ACTIVITY = "activity"
    BRAIN = "brain"
    DROPLETS = "droplets"
    CHECK_CIRCLE = "check_circle"


class StageLayout(str, enum.Enum):
    """How a stage arranges its questions."""

    VERTICAL = "vertical"
    GRID = "grid"
    SPECIAL = "special"
    RESULTS = "results"


class StageComponent(str, enum.Enum):
    """Specialised full-stage components.

    scale_interview: every scale on the stage, one item at a time, back to back
    scale_chat:      a single scale with an optional typed-response path
    results_summary: the scored results view
    """

    SCALE_INTERVIEW = "scale_interview"
    SCALE_CHAT = "scale_chat"
    RESULTS_SUMMARY = "results_summary"


class RiskLevel(str, enum.Enum):
    """Three-tier risk label used per category and overall."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class StageStatus(str, enum.Enum):
    """Position of a stage relative to the navigator's cursor.

    Transitions:
        upcoming -> current   (advance)
        current -> complete   (advance)
        complete -> current   (retreat / jump back)
    """

    COMPLETE = "complete"
    CURRENT = "current"
    UPCOMING = "upcoming"

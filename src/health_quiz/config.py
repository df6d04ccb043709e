"""Runtime configuration: reads settings from environment variables.

Scoring thresholds live in :mod:`health_quiz.constants` and are read at
import time.  The settings here are used by drivers when loading the
configuration and setting up logging.
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class QuizSettings:
    """Immutable quiz configuration read from environment at startup."""

    # Ruleset directory (None → StageStore default, which is v1/ from repo root)
    ruleset_dir: str | None = None

    # Stage list file inside the ruleset directory
    stages_file: str = "stages.yaml"

    # Logging
    log_level: str = "INFO"


def load_settings() -> QuizSettings:
    """Build settings from ``QUIZ_*`` environment variables."""
    return QuizSettings(
        ruleset_dir=os.getenv("QUIZ_RULESET_DIR") or None,
        stages_file=os.getenv("QUIZ_STAGES_FILE", "stages.yaml"),
        log_level=os.getenv("QUIZ_LOG_LEVEL", "INFO").upper(),
    )

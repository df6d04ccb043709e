from pathlib import Path

import pytest
import yaml

from health_quiz.engine import QuizEngine
from health_quiz.models.answers import AnswerRecord
from health_quiz.stageset import StageStore

V1_DIR = Path(__file__).resolve().parent.parent / "v1"


@pytest.fixture(scope="session")
def store():
    """Load the bundled stage configuration once for the entire test session."""
    s = StageStore(V1_DIR)
    s.load()
    return s


@pytest.fixture(scope="session")
def chat_store():
    """Configuration variant with one chat-style stage per scale."""
    s = StageStore(V1_DIR, stages_file="stages_chat.yaml")
    s.load()
    return s


@pytest.fixture
def engine(store):
    return QuizEngine(store)


@pytest.fixture
def session(engine):
    """A fresh session per test."""
    return engine.start_session()


@pytest.fixture
def answers():
    return AnswerRecord()


@pytest.fixture
def write_config(tmp_path):
    """Write a throwaway ruleset directory and return its path.

    Usage: ``write_config(stages, scales={"phq2": {...}})``
    """
    def _write(stages, scales=None):
        (tmp_path / "stages.yaml").write_text(
            yaml.safe_dump(stages, sort_keys=False), encoding="utf-8",
        )
        if scales:
            scale_dir = tmp_path / "scales"
            scale_dir.mkdir(exist_ok=True)
            for name, body in scales.items():
                (scale_dir / f"{name}.yaml").write_text(
                    yaml.safe_dump(body, sort_keys=False), encoding="utf-8",
                )
        return tmp_path
    return _write

#!/usr/bin/env python3
"""Simulate a health-quiz session end-to-end.

Walks every stage of the configuration, answering each question, printing
the rendered stage, the scale-interview transcript and the final report.

By default answers are **randomised** (``--random``, on by default) so each
run lands in a different risk tier.  Use ``--no-random`` for a fixed
low-risk profile.

Usage::

    # Default run (random answers, v1/stages.yaml)
    python scripts/simulate_quiz.py

    # Deterministic run
    python scripts/simulate_quiz.py --no-random

    # Chat-style scale stages with typed answers
    python scripts/simulate_quiz.py --stages-file stages_chat.yaml

    # Verbose mode (print every rendered stage and DEBUG logs)
    python scripts/simulate_quiz.py -v
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Any

# ---------------------------------------------------------------------------
# Ensure the src/ layout is importable without installing.
# ---------------------------------------------------------------------------
_SCRIPT_DIR = Path(__file__).resolve().parent
_REPO_ROOT = _SCRIPT_DIR.parent
sys.path.insert(0, str(_REPO_ROOT / "src"))

from health_quiz.config import load_settings  # noqa: E402
from health_quiz.engine import QuizEngine, QuizSession  # noqa: E402
from health_quiz.models.question import (  # noqa: E402
    BooleanQuestion,
    ChoiceQuestion,
    NumberQuestion,
    Question,
)
from health_quiz.models.session import ResultsStep  # noqa: E402
from health_quiz.report import ReportRenderer  # noqa: E402
from health_quiz.stageset import StageStore  # noqa: E402

logger = logging.getLogger("simulate_quiz")

# Fixed answers for --no-random (a healthy 35-year-old).
_FIXED_ANSWERS: dict[str, Any] = {
    "age": "35",
    "gender": "female",
    "totalCholesterol": "185",
    "hdlCholesterol": "55",
    "systolicBP": "118",
    "smokingStatus": "never",
    "diabetesHistory": False,
    "weight": "62",
    "height": "168",
    "familyDiabetes": False,
    "physicalActivity": "moderate",
    "creatinine": "0.9",
    "ethnicity": "other",
}

_FREE_TEXT_REPLIES = [
    "Hard to say, it comes and goes",
    "Only when work is busy",
    "Maybe once or twice",
]


# ---------------------------------------------------------------------------
# Logging helpers
# ---------------------------------------------------------------------------

_DOUBLE_LINE = "═" * 62
_SINGLE_LINE = "─" * 62

# Module-level flags toggled by CLI args.
_random_mode = True
_quiet = False


def _print(*args, **kwargs) -> None:
    """Print wrapper that respects the --quiet flag."""
    if not _quiet:
        print(*args, **kwargs)


def log_stage_header(index: int, title: str, kind: str) -> None:
    _print(f"\n{_DOUBLE_LINE}")
    _print(f" STAGE {index}: {title} ({kind})")
    _print(_DOUBLE_LINE)


def log_answer(qid: str, raw: Any, accepted: bool) -> None:
    mark = "ok" if accepted else "ignored"
    _print(f"  {qid:<20s} <- {raw!r} [{mark}]")


def log_transition(next_desc: str) -> None:
    _print(f"\n{_SINGLE_LINE}")
    _print(f" Next: {next_desc}")
    _print(_SINGLE_LINE)


# ---------------------------------------------------------------------------
# Answer generation
# ---------------------------------------------------------------------------

def _random_number(q: NumberQuestion) -> str:
    low = q.min_value if q.min_value is not None else 0
    high = q.max_value if q.max_value is not None else low + 100
    # Keep random profiles in a plausible adult range
    if q.id == "age":
        low, high = 25, 80
    value = random.uniform(low, high)
    if q.step is not None and q.step >= 1:
        return str(int(value))
    return f"{value:.1f}"


def mock_answer(q: Question) -> Any:
    """Raw widget input for one scalar question."""
    if not _random_mode:
        return _FIXED_ANSWERS.get(q.id)
    if isinstance(q, NumberQuestion):
        return _random_number(q)
    if isinstance(q, ChoiceQuestion):
        return random.choice(q.option_values)
    if isinstance(q, BooleanQuestion):
        return random.random() < 0.3
    return None


def answer_scales(session: QuizSession) -> None:
    """Drive the scale interview of the current stage to completion."""
    interview = session.interview()
    while interview.cursor is not None:
        state = interview.to_state()
        if state.allow_free_text and _random_mode and random.random() < 0.2:
            reply = random.choice(_FREE_TEXT_REPLIES)
            session.submit_scale_text(reply)
        else:
            values = [r["value"] for r in state.responses]
            session.select_scale(random.choice(values) if _random_mode else values[0])

    for entry in interview.transcript():
        suffix = " (typed)" if entry.custom else ""
        _print(f"  {entry.scale} #{entry.number:<2d} {entry.answer}{suffix}")


# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------

def run_simulation(stages_file: str, verbose: bool) -> int:
    settings = load_settings()
    store = StageStore(settings.ruleset_dir, stages_file=stages_file)
    store.load()

    session = QuizEngine(store).start_session()
    report = ReportRenderer()

    while True:
        stage = session.current_stage
        kind = stage.component.value if stage.component else stage.layout.value
        log_stage_header(session.current_index, stage.title, kind)

        step = session.current_step()
        if isinstance(step, ResultsStep):
            _print(report.render_step(step))
            return 0

        if stage.uses_scale_flow:
            answer_scales(session)
        else:
            for q in stage.questions:
                raw = mock_answer(q)
                if raw is None:
                    continue
                log_answer(q.id, raw, session.answer(q.id, raw))

        if verbose:
            _print(report.render_step(session.current_step()))

        if not session.advance():
            logger.error(
                "Stage '%s' did not validate; missing %s", stage.id, session.missing_fields(),
            )
            return 1
        log_transition(session.current_stage.title)


def main() -> None:
    global _random_mode, _quiet

    parser = argparse.ArgumentParser(
        description="Simulate a health-quiz session end-to-end.",
    )
    parser.add_argument(
        "--stages-file",
        default=None,
        help="Stage list inside the ruleset directory (default: stages.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print every rendered stage and enable DEBUG logging",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress all print output (exit code still reflects success/failure)",
    )
    parser.add_argument(
        "--random",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Randomise answers (default: on). Use --no-random for deterministic mode.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random answer generator",
    )
    args = parser.parse_args()

    settings = load_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    _random_mode = args.random
    _quiet = args.quiet
    if args.seed is not None:
        random.seed(args.seed)

    sys.exit(run_simulation(args.stages_file or settings.stages_file, args.verbose))


if __name__ == "__main__":
    main()

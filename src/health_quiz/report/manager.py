"""ReportRenderer: Jinja2-based text renderer for quiz steps and results.

Loads templates from the ``template/`` directory.  Stage steps are
dispatched by what they carry: a scale interview gets the interview
template, every other stage the generic question list.
"""

from __future__ import annotations

from pathlib import Path

import jinja2

from health_quiz.models.enums import StageIcon
from health_quiz.models.results import ResultsRecord
from health_quiz.models.session import ResultsStep, StageStep, StepResult

_STAGE_TEMPLATE = "stage.jinja2"
_INTERVIEW_TEMPLATE = "interview.jinja2"
_RESULTS_TEMPLATE = "results.jinja2"

# Text markers for the progress indicator.
_STATUS_MARKERS: dict[str, str] = {
    "complete": "[x]",
    "current": "[>]",
    "upcoming": "[ ]",
}

# Text glyph per stage icon.  Every StageIcon member must have an entry.
_ICON_GLYPHS: dict[StageIcon, str] = {
    StageIcon.USER: "(i)",
    StageIcon.HEART: "<3",
    StageIcon.ACTIVITY: "~^~",
    StageIcon.BRAIN: "(@)",
    StageIcon.DROPLETS: "(o)",
    StageIcon.CHECK_CIRCLE: "(v)",
}
_missing = set(StageIcon) - set(_ICON_GLYPHS)
if _missing:
    raise RuntimeError(f"No glyph for stage icons: {sorted(i.value for i in _missing)}")
_DEFAULT_GLYPH = _ICON_GLYPHS[StageIcon.USER]


def _glyph(icon: str) -> str:
    try:
        return _ICON_GLYPHS[StageIcon(icon)]
    except ValueError:
        return _DEFAULT_GLYPH


def _bar(fraction: float, width: int = 20) -> str:
    """Fixed-width text progress bar."""
    fraction = max(0.0, min(fraction, 1.0))
    filled = int(round(fraction * width))
    return "#" * filled + "-" * (width - filled)


class ReportRenderer:
    """Jinja2-based renderer for ``StepResult`` objects.

    Args:
        template_dir: optional override for the template directory.
            Defaults to ``template/`` sibling of this module.
    """

    def __init__(self, template_dir: Path | None = None) -> None:
        if template_dir is None:
            template_dir = Path(__file__).parent / "template"
        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=jinja2.StrictUndefined,
        )
        self._env.filters["bar"] = _bar
        self._env.filters["marker"] = lambda status: _STATUS_MARKERS.get(status, "[?]")
        self._env.filters["glyph"] = _glyph

    def render_step(self, step: StepResult) -> str:
        """Render any step; dispatches on ``step.type``."""
        if isinstance(step, ResultsStep):
            return self.render_results(step.results, title=step.title)
        if isinstance(step, StageStep):
            if step.interview is not None:
                return self.render(_INTERVIEW_TEMPLATE, step=step)
            return self.render(_STAGE_TEMPLATE, step=step)
        raise ValueError(f"Cannot render step of type {type(step).__name__}")

    def render_results(self, results: ResultsRecord, *, title: str = "Your Health Assessment") -> str:
        return self.render(_RESULTS_TEMPLATE, results=results, title=title)

    def render(self, template_name: str, **context) -> str:
        """Render a named template with arbitrary context."""
        template = self._env.get_template(template_name)
        return template.render(**context)

"""Plain-text rendering of session steps and results.

Provides ``ReportRenderer``, a Jinja2-based template engine that renders
``StageStep`` and ``ResultsStep`` objects for console drivers.
"""

from health_quiz.report.manager import ReportRenderer

__all__ = ["ReportRenderer"]

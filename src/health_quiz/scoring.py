"""Scoring engine: maps a complete or partial answer record to risk results.

Pure functions over any ``Mapping[str, Any]``.  Missing or malformed
inputs contribute zero; nothing here raises on bad answers.

Categories (each clamped to its maximum, see ``constants.MAX_SCORES``):

    cardiovascular  age/sex points + smoking + diabetes + cholesterol + BP
    diabetes        age + family history + inactivity + BMI
    mental          (PHQ-9 total + GAD-7 total) / 3, rounded half-up
    kidney          age + diabetes + BP + creatinine above the sex limit

Usage::

    results = compute_results(answers)
    results.overall_risk            # RiskLevel.MODERATE
    results.category("mental").score
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any, Optional

from health_quiz import constants
from health_quiz.models.answers import ScaleResponses
from health_quiz.models.enums import RiskLevel
from health_quiz.models.results import (
    BMIResult,
    CategoryResult,
    Recommendation,
    ResultsRecord,
)

logger = logging.getLogger(__name__)

CATEGORY_ORDER = ("cardiovascular", "diabetes", "mental", "kidney")


# ---------------------------------------------------------------------------
# Input helpers
# ---------------------------------------------------------------------------

def _number(answers: Mapping[str, Any], key: str) -> Optional[float]:
    """Finite numeric answer, or None.  Booleans are not numbers here."""
    value = answers.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def _flag(answers: Mapping[str, Any], key: str) -> bool:
    return answers.get(key) is True


def _scale_total(answers: Mapping[str, Any], key: str) -> int:
    """Sum of selected response values; custom and unanswered slots add 0."""
    value = answers.get(key)
    if isinstance(value, (list, tuple)):
        value = ScaleResponses.from_sentinels(value)
    if not isinstance(value, ScaleResponses):
        return 0
    return sum(value.selected_values())


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


# ---------------------------------------------------------------------------
# BMI
# ---------------------------------------------------------------------------

def bmi(answers: Mapping[str, Any]) -> Optional[float]:
    """weight (kg) / (height (m))², or None if either is missing or not positive."""
    weight = _number(answers, "weight")
    height = _number(answers, "height")
    if not weight or not height or weight <= 0 or height <= 0:
        return None
    return weight / (height / 100) ** 2


def bmi_category(value: float) -> str:
    for upper, label in constants.BMI_BANDS:
        if value < upper:
            return label
    return constants.BMI_OBESE_LABEL


def bmi_result(answers: Mapping[str, Any]) -> Optional[BMIResult]:
    """Display summary: BMI rounded to one decimal plus its band."""
    value = bmi(answers)
    if value is None:
        return None
    return BMIResult(value=round(value, 1), category=bmi_category(value))


# ---------------------------------------------------------------------------
# Category scores
# ---------------------------------------------------------------------------

def cardiovascular_score(answers: Mapping[str, Any]) -> int:
    """Simplified Framingham-style points; 0 when age or gender is missing."""
    age = _number(answers, "age")
    gender = answers.get("gender")
    if not age or not gender:
        return 0

    male = gender == "male"
    score = 0
    for min_age, points in constants.CARDIO_AGE_POINTS["male" if male else "female"]:
        if age >= min_age:
            score += points
            break

    if answers.get("smokingStatus") == "current":
        score += 4 if male else 3
    if _flag(answers, "diabetesHistory"):
        score += 3 if male else 4

    cholesterol = _number(answers, "totalCholesterol")
    if cholesterol is not None and cholesterol > 240:
        score += 2
    systolic = _number(answers, "systolicBP")
    if systolic is not None and systolic > 140:
        score += 2

    return min(score, constants.MAX_SCORES["cardiovascular"])


def diabetes_score(answers: Mapping[str, Any]) -> int:
    score = 0
    age = _number(answers, "age")
    if age is not None and age >= 45:
        score += 1
    if _flag(answers, "familyDiabetes"):
        score += 1
    if answers.get("physicalActivity") == "none":
        score += 1

    value = bmi(answers)
    if value is not None:
        if value >= 30:
            score += 2
        elif value >= 25:
            score += 1

    return min(score, constants.MAX_SCORES["diabetes"])


def mental_wellbeing_score(answers: Mapping[str, Any]) -> int:
    total = _scale_total(answers, "phq9Responses") + _scale_total(answers, "gad7Responses")
    return min(_round_half_up(total / 3), constants.MAX_SCORES["mental"])


def kidney_score(answers: Mapping[str, Any]) -> int:
    score = 0
    age = _number(answers, "age")
    if age is not None and age >= 60:
        score += 2
    if _flag(answers, "diabetesHistory"):
        score += 3
    systolic = _number(answers, "systolicBP")
    if systolic is not None and systolic > 140:
        score += 2

    creatinine = _number(answers, "creatinine")
    if creatinine:
        limit = (
            constants.CREATININE_MALE_MAX
            if answers.get("gender") == "male"
            else constants.CREATININE_FEMALE_MAX
        )
        if creatinine > limit:
            score += 3

    return min(score, constants.MAX_SCORES["kidney"])


_SCORERS = {
    "cardiovascular": cardiovascular_score,
    "diabetes": diabetes_score,
    "mental": mental_wellbeing_score,
    "kidney": kidney_score,
}


# ---------------------------------------------------------------------------
# Risk levels
# ---------------------------------------------------------------------------

def risk_level(category: str, score: int) -> RiskLevel:
    """Per-category level from the inclusive low / moderate upper bounds.

    Raises:
        KeyError: if ``category`` is not a scored category.
    """
    low_max, moderate_max = constants.RISK_THRESHOLDS[category]
    if score <= low_max:
        return RiskLevel.LOW
    if score <= moderate_max:
        return RiskLevel.MODERATE
    return RiskLevel.HIGH


def overall_tier(total: int) -> RiskLevel:
    if total <= constants.OVERALL_LOW_MAX:
        return RiskLevel.LOW
    if total <= constants.OVERALL_MODERATE_MAX:
        return RiskLevel.MODERATE
    return RiskLevel.HIGH


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

def compute_results(answers: Mapping[str, Any]) -> ResultsRecord:
    """Score every category and derive the overall tier and recommendation."""
    categories: list[CategoryResult] = []
    for name in CATEGORY_ORDER:
        score = _SCORERS[name](answers)
        info = constants.CATEGORY_INFO[name]
        categories.append(CategoryResult(
            category=name,
            title=info["title"],
            description=info["description"],
            score=score,
            max_score=constants.MAX_SCORES[name],
            risk=risk_level(name, score),
            recommendations=list(info["recommendations"]),
        ))

    total = sum(c.score for c in categories)
    tier = overall_tier(total)
    results = ResultsRecord(
        categories=categories,
        total_score=total,
        overall_risk=tier,
        recommendation=Recommendation(**constants.TIER_MESSAGES[tier.value]),
        bmi=bmi_result(answers),
    )
    logger.info(
        "Results computed: total=%d overall=%s (%s)",
        total,
        tier.value,
        ", ".join(f"{c.category}={c.score}" for c in categories),
    )
    return results

"""Questionnaire constants shared across the SDK.

These values are referenced by the validator, scale flow, and scoring
engine.  They mirror conventions encoded in the YAML configuration under
``v1/``.

The overall-tier cut-offs and the creatinine limits can be overridden via
environment variables so that deployments can adjust thresholds without
code changes.
"""

import os

# Legacy integer encoding of scale slots (raw arrays from older clients).
UNANSWERED_SENTINEL = -1
CUSTOM_SENTINEL = -2

# Per-category score caps.
MAX_SCORES: dict[str, int] = {
    "cardiovascular": 20,
    "diabetes": 5,
    "mental": 20,
    "kidney": 10,
}

# Inclusive upper bounds for the "low" and "moderate" levels per category.
# Anything above the moderate bound is "high".
RISK_THRESHOLDS: dict[str, tuple[int, int]] = {
    "cardiovascular": (5, 12),
    "diabetes": (1, 3),
    "mental": (5, 12),
    "kidney": (2, 5),
}

# Overall tier from the sum of all four category scores.
OVERALL_LOW_MAX = int(os.getenv("QUIZ_OVERALL_LOW_MAX", "10"))
OVERALL_MODERATE_MAX = int(os.getenv("QUIZ_OVERALL_MODERATE_MAX", "25"))

# Creatinine upper limit of normal (mg/dL) by sex.
CREATININE_MALE_MAX = float(os.getenv("QUIZ_CREATININE_MALE_MAX", "1.3"))
CREATININE_FEMALE_MAX = float(os.getenv("QUIZ_CREATININE_FEMALE_MAX", "1.1"))

# BMI band edges: (exclusive upper bound, label).  Last band is open-ended.
BMI_BANDS: list[tuple[float, str]] = [
    (18.5, "Underweight"),
    (25.0, "Normal weight"),
    (30.0, "Overweight"),
]
BMI_OBESE_LABEL = "Obese"

# Cardiovascular age points: (minimum age, points), checked high to low.
CARDIO_AGE_POINTS: dict[str, list[tuple[int, int]]] = {
    "male": [(70, 11), (65, 10), (60, 8), (55, 6), (50, 4), (45, 2)],
    "female": [(70, 12), (65, 9), (60, 7), (55, 4), (50, 2)],
}

# Category display copy, in results order.
CATEGORY_INFO: dict[str, dict] = {
    "cardiovascular": {
        "title": "Cardiovascular Health",
        "description": "Risk assessment for heart disease and stroke",
        "recommendations": [
            "Regular cardio exercise 150min/week",
            "Mediterranean diet",
            "Blood pressure monitoring",
            "Lipid panel every 2 years",
        ],
    },
    "diabetes": {
        "title": "Diabetes Risk",
        "description": "Likelihood of developing type 2 diabetes",
        "recommendations": [
            "Weight management",
            "Regular physical activity",
            "Balanced nutrition",
            "Annual glucose screening",
        ],
    },
    "mental": {
        "title": "Mental Wellbeing",
        "description": "Mental health and stress assessment",
        "recommendations": [
            "Stress management techniques",
            "Regular sleep schedule",
            "Social connections",
            "Professional counseling if needed",
        ],
    },
    "kidney": {
        "title": "Kidney Function",
        "description": "Kidney health and function indicators",
        "recommendations": [
            "Stay hydrated",
            "Limit sodium intake",
            "Blood pressure control",
            "Annual kidney function tests",
        ],
    },
}

# Recommendation shown for each overall tier.
TIER_MESSAGES: dict[str, dict[str, str]] = {
    "low": {
        "title": "Excellent Health Foundation",
        "description": (
            "Your assessment shows low risk across most categories. "
            "You're on the right track with your health management."
        ),
        "action": (
            "Continue with regular check-ups and consider our wellness "
            "optimization programs to maintain your health."
        ),
    },
    "moderate": {
        "title": "Opportunities for Improvement",
        "description": (
            "Some areas show moderate risk levels. Early intervention now can "
            "significantly improve your long-term health outcomes."
        ),
        "action": (
            "We recommend connecting with our healthcare specialists for a "
            "personalized prevention strategy."
        ),
    },
    "high": {
        "title": "Immediate Medical Attention Recommended",
        "description": (
            "Your assessment indicates several risk factors that warrant "
            "prompt medical evaluation and intervention."
        ),
        "action": (
            "Please consult with our medical team immediately for a "
            "comprehensive health evaluation and treatment plan."
        ),
    },
}

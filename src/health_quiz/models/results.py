"""Results models: the derived, immutable output of the scoring engine."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict

from .enums import RiskLevel

CategoryId = Literal["cardiovascular", "diabetes", "mental", "kidney"]


class CategoryResult(BaseModel):
    """Score and risk level for one category."""

    model_config = ConfigDict(frozen=True)

    category: CategoryId
    title: str
    description: str
    score: int
    max_score: int
    risk: RiskLevel
    recommendations: List[str]

    @property
    def fraction(self) -> float:
        """Score as a share of the category maximum (for progress bars)."""
        return self.score / self.max_score if self.max_score else 0.0


class Recommendation(BaseModel):
    """Message shown for the overall risk tier."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    action: str


class BMIResult(BaseModel):
    """Display-only BMI summary."""

    model_config = ConfigDict(frozen=True)

    value: float
    category: str


class ResultsRecord(BaseModel):
    """Four category entries, the overall tier, and its recommendation."""

    model_config = ConfigDict(frozen=True)

    categories: List[CategoryResult]
    total_score: int
    overall_risk: RiskLevel
    recommendation: Recommendation
    bmi: Optional[BMIResult] = None

    def category(self, category: str) -> CategoryResult:
        """Look up one category entry.

        Raises:
            KeyError: if ``category`` is not one of the four categories.
        """
        for c in self.categories:
            if c.category == category:
                return c
        raise KeyError(category)

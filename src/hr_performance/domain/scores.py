"""Assessment value objects.

``AssessmentScore`` is one rated dimension (a KPI or a competency).
``FinalScore`` is the bounded aggregate produced by ``ScoreEngine``.
Both are frozen; neither is owned by the event log.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from hr_performance.core.errors import InvalidAssessmentError

MIN_RATING = Decimal("1.0")
MAX_RATING = Decimal("5.0")
MIN_ACHIEVEMENT = Decimal("0")
MAX_ACHIEVEMENT = Decimal("100")


def to_decimal(value: Any, what: str) -> Decimal:
    """Coerce *value* to ``Decimal`` without going through binary floats.

    Floats are converted via ``str`` so ``3.3`` becomes ``Decimal("3.3")``.
    """
    if value is None:
        raise InvalidAssessmentError(f"{what} cannot be None")
    if isinstance(value, bool):
        raise InvalidAssessmentError(f"{what} must be numeric, got {value!r}")
    if isinstance(value, Decimal):
        d = value
    else:
        try:
            d = Decimal(str(value))
        except (InvalidOperation, ValueError) as exc:
            raise InvalidAssessmentError(
                f"{what} must be numeric, got {value!r}"
            ) from exc
    if not d.is_finite():
        raise InvalidAssessmentError(f"{what} must be finite, got {value!r}")
    return d


@dataclass(frozen=True)
class AssessmentScore:
    """A single rating for one KPI or competency dimension.

    ``rating_value`` must lie in [1.0, 5.0].  ``achievement_percentage``,
    when given, must lie in [0, 100].
    """

    rating_value: Decimal
    kpi_id: str = ""
    achievement_percentage: Decimal | None = None
    comment: str | None = None

    def __post_init__(self) -> None:
        rating = to_decimal(self.rating_value, "Rating value")
        if rating < MIN_RATING or rating > MAX_RATING:
            raise InvalidAssessmentError(
                f"Rating must be between 1.0 and 5.0, got: {rating}"
            )
        object.__setattr__(self, "rating_value", rating)

        if self.achievement_percentage is not None:
            achievement = to_decimal(
                self.achievement_percentage, "Achievement percentage",
            )
            if achievement < MIN_ACHIEVEMENT or achievement > MAX_ACHIEVEMENT:
                raise InvalidAssessmentError(
                    "Achievement percentage must be between 0 and 100, "
                    f"got: {achievement}"
                )
            object.__setattr__(self, "achievement_percentage", achievement)

    @classmethod
    def of(cls, rating: Any, **kw: Any) -> AssessmentScore:
        """Shorthand used by workflows that start from raw inputs."""
        return cls(rating_value=to_decimal(rating, "Rating value"), **kw)


@dataclass(frozen=True)
class FinalScore:
    """Weighted, rounded aggregate of a set of assessment scores."""

    value: Decimal
    kpi_average: Decimal
    competency_average: Decimal
    competency_fallback: bool = True  # competency average borrowed from KPIs

    def __str__(self) -> str:
        return str(self.value)

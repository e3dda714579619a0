"""Final performance score calculation.

Business rule
-------------
``final = round2(kpi_average * 0.7 + competency_average * 0.3)``

Averages are arithmetic means of the rating values, rounded half-up to two
places before weighting; the weighted sum is rounded again.  When no
competency scores are supplied the KPI average stands in for the competency
average.  That substitution is a fallback, not the business rule: callers
that have competency ratings should pass them.

The engine is pure.  It holds only immutable configuration and never
touches the event log, so one instance can be shared across threads.
"""

from __future__ import annotations

import decimal
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from hr_performance.core.config import ScoringConfig
from hr_performance.core.errors import InvalidAssessmentError
from hr_performance.domain.scores import AssessmentScore, FinalScore

# Enough digits that sums and quotients are exact before quantizing.
_PRECISION = 50


class ScoreEngine:
    """Turns per-dimension ratings into a bounded ``FinalScore``.

    Parameters
    ----------
    config
        Weights, scale and bounds.  Defaults to 0.7 / 0.3, two places,
        [1.0, 5.0].
    """

    def __init__(self, config: ScoringConfig | None = None) -> None:
        cfg = config or ScoringConfig()
        cfg.validate_weights()
        self._kpi_weight = cfg.kpi_weight
        self._competency_weight = cfg.competency_weight
        self._min = cfg.min_score
        self._max = cfg.max_score
        self._quantum = Decimal(1).scaleb(-cfg.scale)

    @property
    def weights(self) -> tuple[Decimal, Decimal]:
        return self._kpi_weight, self._competency_weight

    def calculate_final_score(
        self,
        scores: Sequence[AssessmentScore] | None,
        competency_scores: Sequence[AssessmentScore] | None = None,
    ) -> FinalScore:
        """Compute the final score for *scores*.

        Raises
        ------
        InvalidAssessmentError
            If *scores* is missing or empty, contains something other than
            an ``AssessmentScore``, or the weighted result falls outside
            the configured bounds.
        """
        if not scores:
            raise InvalidAssessmentError("scores required")

        with decimal.localcontext() as ctx:
            ctx.prec = _PRECISION
            kpi_average = self._average(scores)
            if competency_scores:
                competency_average = self._average(competency_scores)
                fallback = False
            else:
                competency_average = kpi_average
                fallback = True

            weighted = (
                kpi_average * self._kpi_weight
                + competency_average * self._competency_weight
            )
            value = weighted.quantize(self._quantum, rounding=ROUND_HALF_UP)

        if value < self._min or value > self._max:
            raise InvalidAssessmentError(
                f"final score out of bounds: {value} not in "
                f"[{self._min}, {self._max}]"
            )

        return FinalScore(
            value=value,
            kpi_average=kpi_average,
            competency_average=competency_average,
            competency_fallback=fallback,
        )

    def _average(self, scores: Sequence[AssessmentScore]) -> Decimal:
        total = Decimal(0)
        for s in scores:
            if not isinstance(s, AssessmentScore):
                raise InvalidAssessmentError(
                    f"expected AssessmentScore, got {type(s).__name__}"
                )
            total += s.rating_value
        return (total / len(scores)).quantize(
            self._quantum, rounding=ROUND_HALF_UP,
        )

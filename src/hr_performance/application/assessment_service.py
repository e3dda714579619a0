"""Assessment workflows.

Each method is one unit of work: validate inputs, compute whatever the fact
needs to carry, then publish the fact.  If validation or scoring fails the
exception propagates and nothing is published.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from hr_performance.core.clock import IClock, MonotonicClock
from hr_performance.core.enums import KPICategory
from hr_performance.core.ids import new_id
from hr_performance.domain.facts import (
    KPIDefinitionCreated,
    KPIDefinitionUpdated,
    ManagerAssessmentSubmitted,
    SelfAssessmentSubmitted,
)
from hr_performance.domain.scores import AssessmentScore, FinalScore
from hr_performance.domain.scoring import ScoreEngine
from hr_performance.infrastructure.event_publisher import EventPublisher

logger = logging.getLogger(__name__)


def scores_from_ratings(ratings: Mapping[str, Any]) -> list[AssessmentScore]:
    """Build one ``AssessmentScore`` per ``{kpi_id: rating}`` entry."""
    return [
        AssessmentScore.of(rating, kpi_id=kpi_id)
        for kpi_id, rating in ratings.items()
    ]


class AssessmentService:
    """Records KPI definitions and assessment submissions."""

    def __init__(
        self,
        publisher: EventPublisher,
        score_engine: ScoreEngine,
        clock: IClock | None = None,
    ) -> None:
        self._publisher = publisher
        self._engine = score_engine
        self._clock = clock or MonotonicClock()

    # -- KPI definitions ---------------------------------------------------

    def define_kpi(
        self,
        name: str,
        category: KPICategory,
        created_by: str,
        kpi_id: str | None = None,
    ) -> KPIDefinitionCreated:
        fact = KPIDefinitionCreated(
            aggregate_id=kpi_id or new_id(),
            occurred_at=self._clock.now(),
            name=name,
            category=KPICategory(category),
            created_by=created_by,
        )
        self._publisher.publish(fact)
        return fact

    def rename_kpi(self, kpi_id: str, name: str) -> KPIDefinitionUpdated:
        fact = KPIDefinitionUpdated(
            aggregate_id=kpi_id,
            occurred_at=self._clock.now(),
            name=name,
        )
        self._publisher.publish(fact)
        return fact

    # -- Assessments -------------------------------------------------------

    def submit_self_assessment(
        self,
        cycle_id: str,
        participant_id: str,
        employee_id: str,
        supervisor_id: str,
        kpi_scores: Sequence[AssessmentScore],
        comments: str = "",
        extra_mile_efforts: str = "",
    ) -> SelfAssessmentSubmitted:
        """Record an employee's self-assessment.  No score is computed."""
        fact = SelfAssessmentSubmitted(
            aggregate_id=cycle_id,
            occurred_at=self._clock.now(),
            participant_id=participant_id,
            employee_id=employee_id,
            supervisor_id=supervisor_id,
            kpi_scores=tuple(kpi_scores),
            comments=comments,
            extra_mile_efforts=extra_mile_efforts,
        )
        self._publisher.publish(fact)
        return fact

    def submit_manager_assessment(
        self,
        cycle_id: str,
        participant_id: str,
        employee_id: str,
        supervisor_id: str,
        kpi_scores: Sequence[AssessmentScore],
        competency_scores: Sequence[AssessmentScore] | None = None,
        overall_comments: str = "",
    ) -> tuple[ManagerAssessmentSubmitted, FinalScore]:
        """Score a manager assessment and record it.

        Raises
        ------
        InvalidAssessmentError
            If the scores are missing or the final score is out of bounds.
            Nothing is published in that case.
        """
        final = self._engine.calculate_final_score(kpi_scores, competency_scores)
        if final.competency_fallback:
            logger.debug(
                "No competency scores for participant %s; using KPI average",
                participant_id,
            )

        fact = ManagerAssessmentSubmitted(
            aggregate_id=cycle_id,
            occurred_at=self._clock.now(),
            participant_id=participant_id,
            employee_id=employee_id,
            supervisor_id=supervisor_id,
            kpi_scores=tuple(kpi_scores),
            overall_comments=overall_comments,
            final_score=final.value,
        )
        self._publisher.publish(fact)
        logger.info(
            "Manager assessment recorded for participant %s: final score %s",
            participant_id,
            final.value,
        )
        return fact, final

"""Domain facts recorded by the performance services.

Design invariants
-----------------
1.  Every fact is **immutable** (``frozen=True``).
2.  The variant set is **closed**: ``FACT_TYPES`` maps each ``fact_type``
    discriminator to exactly one class, and the event log rejects anything
    not registered there.  Consumers can branch on ``fact.fact_type``
    exhaustively without relying on method overrides.
3.  ``fact_id`` is a UUID4 generated at creation time.
4.  ``occurred_at`` comes from the process-wide monotonic clock, so facts
    created one after another never go back in time.
5.  ``aggregate_id`` names the entity the fact concerns (a KPI definition,
    a review cycle, a feedback record, a report).
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar

from hr_performance.core.enums import FeedbackType, KPICategory, ReportFormat
from hr_performance.core.errors import InvalidFactError
from hr_performance.core.ids import new_id as _uuid
from hr_performance.core.ids import utc_now as _now
from hr_performance.domain.scores import AssessmentScore

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DomainFact:
    """Immutable base for every domain fact.

    Shared fields
    ~~~~~~~~~~~~~
    fact_id         Unique identity (UUID4).
    aggregate_id    Identity of the entity the fact concerns.
    occurred_at     UTC recording time.
    version         Schema version of the fact shape.

    Class-level tags
    ~~~~~~~~~~~~~~~~
    fact_type       Discriminator; empty on the abstract base.
    aggregate_type  Kind of aggregate the fact belongs to.
    """

    fact_type: ClassVar[str] = ""
    aggregate_type: ClassVar[str] = ""

    fact_id: str = field(default_factory=_uuid)
    aggregate_id: str = ""
    occurred_at: datetime = field(default_factory=_now)
    version: int = 1

    def payload(self) -> dict[str, Any]:
        """Variant-specific fields as a plain dict."""
        return {
            name: getattr(self, name)
            for name in payload_fields(self.fact_type)
        }


_BASE_FIELDS: frozenset[str] = frozenset(
    f.name for f in dataclasses.fields(DomainFact)
)


# =========================================================================
# KPI management  (aggregate: KPIDefinition)
# =========================================================================

@dataclass(frozen=True)
class KPIDefinitionCreated(DomainFact):
    """A KPI definition was created."""

    fact_type: ClassVar[str] = "KPIDefinitionCreated"
    aggregate_type: ClassVar[str] = "KPIDefinition"

    name: str = ""
    category: KPICategory | None = None
    created_by: str = ""


@dataclass(frozen=True)
class KPIDefinitionUpdated(DomainFact):
    """A KPI definition was renamed or otherwise edited."""

    fact_type: ClassVar[str] = "KPIDefinitionUpdated"
    aggregate_type: ClassVar[str] = "KPIDefinition"

    name: str = ""


# =========================================================================
# Performance management  (aggregate: ReviewCycle)
# =========================================================================

@dataclass(frozen=True)
class SelfAssessmentSubmitted(DomainFact):
    """An employee submitted a self-assessment within a review cycle."""

    fact_type: ClassVar[str] = "SelfAssessmentSubmitted"
    aggregate_type: ClassVar[str] = "ReviewCycle"

    participant_id: str = ""
    employee_id: str = ""
    supervisor_id: str = ""
    kpi_scores: tuple[AssessmentScore, ...] = ()
    comments: str = ""
    extra_mile_efforts: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "kpi_scores", tuple(self.kpi_scores))


@dataclass(frozen=True)
class ManagerAssessmentSubmitted(DomainFact):
    """A supervisor submitted an assessment; carries the final score."""

    fact_type: ClassVar[str] = "ManagerAssessmentSubmitted"
    aggregate_type: ClassVar[str] = "ReviewCycle"

    participant_id: str = ""
    employee_id: str = ""
    supervisor_id: str = ""
    kpi_scores: tuple[AssessmentScore, ...] = ()
    overall_comments: str = ""
    final_score: Decimal | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "kpi_scores", tuple(self.kpi_scores))


@dataclass(frozen=True)
class ReviewCycleCompleted(DomainFact):
    """A review cycle was closed."""

    fact_type: ClassVar[str] = "ReviewCycleCompleted"
    aggregate_type: ClassVar[str] = "ReviewCycle"

    cycle_name: str = ""
    participant_count: int = 0
    average_score: Decimal | None = None


# =========================================================================
# Feedback  (aggregate: FeedbackRecord)
# =========================================================================

@dataclass(frozen=True)
class FeedbackProvided(DomainFact):
    """Feedback was given about an employee, optionally on one KPI."""

    fact_type: ClassVar[str] = "FeedbackProvided"
    aggregate_type: ClassVar[str] = "FeedbackRecord"

    giver_id: str = ""
    receiver_id: str = ""
    kpi_id: str = ""
    feedback_type: FeedbackType | None = None


@dataclass(frozen=True)
class FeedbackResponseProvided(DomainFact):
    """The receiver of feedback responded to it."""

    fact_type: ClassVar[str] = "FeedbackResponseProvided"
    aggregate_type: ClassVar[str] = "FeedbackRecord"

    response_id: str = ""
    responder_id: str = ""


# =========================================================================
# Analytics  (aggregate: Report)
# =========================================================================

@dataclass(frozen=True)
class ReportGenerated(DomainFact):
    fact_type: ClassVar[str] = "ReportGenerated"
    aggregate_type: ClassVar[str] = "Report"

    report_name: str = ""
    report_format: ReportFormat | None = None
    generated_by: str = ""


@dataclass(frozen=True)
class ReportGenerationFailed(DomainFact):
    fact_type: ClassVar[str] = "ReportGenerationFailed"
    aggregate_type: ClassVar[str] = "Report"

    report_name: str = ""
    error_message: str = ""
    generated_by: str = ""


# =========================================================================
# Registry
# =========================================================================

#: All fact variants in a deterministic order.
ALL_FACT_TYPES: tuple[type[DomainFact], ...] = (
    KPIDefinitionCreated,
    KPIDefinitionUpdated,
    SelfAssessmentSubmitted,
    ManagerAssessmentSubmitted,
    ReviewCycleCompleted,
    FeedbackProvided,
    FeedbackResponseProvided,
    ReportGenerated,
    ReportGenerationFailed,
)

#: Discriminator → variant class.
FACT_TYPES: dict[str, type[DomainFact]] = {
    cls.fact_type: cls for cls in ALL_FACT_TYPES
}

#: Discriminator → payload field names, in declaration order.
PAYLOAD_SHAPES: dict[str, tuple[str, ...]] = {
    cls.fact_type: tuple(
        f.name for f in dataclasses.fields(cls) if f.name not in _BASE_FIELDS
    )
    for cls in ALL_FACT_TYPES
}


def payload_fields(fact_type: str) -> tuple[str, ...]:
    """Return the payload shape for *fact_type*.

    Raises ``InvalidFactError`` for an unknown discriminator.
    """
    try:
        return PAYLOAD_SHAPES[fact_type]
    except KeyError:
        raise InvalidFactError(f"unknown fact type {fact_type!r}") from None


def fact_from_payload(
    fact_type: str,
    aggregate_id: str,
    payload: dict[str, Any],
    **base: Any,
) -> DomainFact:
    """Build the variant named by *fact_type* from a payload dict.

    *base* may carry ``fact_id``, ``occurred_at`` or ``version``.
    """
    shape = payload_fields(fact_type)
    unknown = set(payload) - set(shape)
    if unknown:
        raise InvalidFactError(
            f"unexpected payload fields for {fact_type}: {sorted(unknown)}"
        )
    cls = FACT_TYPES[fact_type]
    return cls(aggregate_id=aggregate_id, **base, **payload)


def validate_fact(fact: object) -> None:
    """Raise ``InvalidFactError`` unless *fact* may enter the event log."""
    if fact is None:
        raise InvalidFactError("fact is None")
    if not isinstance(fact, DomainFact):
        raise InvalidFactError(
            f"expected DomainFact, got {type(fact).__name__}", fact,
        )
    registered = FACT_TYPES.get(fact.fact_type)
    if registered is None or type(fact) is not registered:
        raise InvalidFactError(
            f"unregistered fact type {type(fact).__name__!r}", fact,
        )
    if not isinstance(fact.aggregate_id, str) or not fact.aggregate_id.strip():
        raise InvalidFactError(
            f"{fact.fact_type} has no aggregate_id", fact,
        )
    if not isinstance(fact.occurred_at, datetime):
        raise InvalidFactError(
            f"{fact.fact_type} has no occurred_at timestamp", fact,
        )


# ---------------------------------------------------------------------------
# JSON-safe rendering (diagnostics only; facts are not persisted)
# ---------------------------------------------------------------------------

def _jsonable(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, AssessmentScore):
        return {k: _jsonable(v) for k, v in dataclasses.asdict(value).items()}
    if isinstance(value, (tuple, list)):
        return [_jsonable(v) for v in value]
    return value


def fact_to_dict(fact: DomainFact) -> dict[str, Any]:
    """Render *fact* as a JSON-safe dict with a ``fact_type`` discriminator."""
    d: dict[str, Any] = {
        "fact_type": fact.fact_type,
        "aggregate_type": fact.aggregate_type,
        "fact_id": fact.fact_id,
        "aggregate_id": fact.aggregate_id,
        "occurred_at": fact.occurred_at.isoformat(),
        "version": fact.version,
    }
    d["payload"] = {k: _jsonable(v) for k, v in fact.payload().items()}
    return d

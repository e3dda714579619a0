"""ServiceContext: the explicitly owned set of core components.

One context is built per service (or per test) and passed by reference to
whatever needs to publish facts, query them, or compute scores.  There is
no module-level event log.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .application.assessment_service import AssessmentService
from .core.clock import IClock, MonotonicClock
from .core.config import Settings
from .domain.scoring import ScoreEngine
from .infrastructure.event_log import EventLog
from .infrastructure.event_publisher import EventPublisher


@dataclass
class ServiceContext:
    """Components shared by the workflows of one service."""

    settings: Settings
    event_log: EventLog
    publisher: EventPublisher
    score_engine: ScoreEngine
    clock: IClock = field(default_factory=MonotonicClock)

    @property
    def assessments(self) -> AssessmentService:
        """Assessment workflows bound to this context's publisher."""
        return AssessmentService(self.publisher, self.score_engine, self.clock)

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        clock: IClock | None = None,
    ) -> ServiceContext:
        """Wire a fresh log, publisher and engine from *settings*."""
        settings = settings or Settings()
        event_log = EventLog(
            log_appends=settings.event_log.log_appends,
            log_level=settings.event_log.log_level,
        )
        return cls(
            settings=settings,
            event_log=event_log,
            publisher=EventPublisher(event_log),
            score_engine=ScoreEngine(settings.scoring),
            clock=clock or MonotonicClock(),
        )

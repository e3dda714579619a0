"""Publisher facade in front of the event log.

Producers depend on ``EventPublisher`` rather than on ``EventLog`` so the
storage behind it can be swapped (e.g. for a durable broker) without
touching callers.  The facade holds no state of its own.
"""

from __future__ import annotations

from collections.abc import Iterable

from hr_performance.domain.facts import DomainFact
from hr_performance.infrastructure.event_log import IEventLog


class EventPublisher:
    """Delegates every publish to an ``IEventLog``."""

    def __init__(self, event_log: IEventLog) -> None:
        self._event_log = event_log

    def publish(self, fact: DomainFact) -> None:
        """Publish a single fact."""
        self._event_log.append(fact)

    def publish_all(self, facts: Iterable[DomainFact]) -> None:
        """Publish several facts, preserving their order."""
        self._event_log.append_all(facts)

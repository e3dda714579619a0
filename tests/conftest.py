"""Shared fixtures for the hr-performance test suite."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import pytest
import structlog

from hr_performance.context import ServiceContext
from hr_performance.core.clock import SimClock
from hr_performance.core.config import Settings
from hr_performance.domain.scoring import ScoreEngine
from hr_performance.infrastructure.event_log import EventLog
from hr_performance.infrastructure.event_publisher import EventPublisher
from hr_performance.observability.logger import _HANDLER_NAME


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop any handler installed by ``setup_logging`` during a test."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)
    structlog.reset_defaults()


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------

@pytest.fixture
def event_log() -> EventLog:
    return EventLog(log_appends=False)


@pytest.fixture
def publisher(event_log: EventLog) -> EventPublisher:
    return EventPublisher(event_log)


@pytest.fixture
def engine() -> ScoreEngine:
    return ScoreEngine()


@pytest.fixture
def sim_clock() -> SimClock:
    return SimClock(datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def ctx(sim_clock: SimClock) -> ServiceContext:
    return ServiceContext.from_settings(Settings(), clock=sim_clock)

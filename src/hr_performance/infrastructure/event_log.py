"""Append-only, thread-safe log of domain facts.

Design invariants
-----------------
1.  ``append()`` and ``append_all()`` validate before writing; a rejected
    call leaves the log untouched.
2.  Reads return facts in **append order**.  Per-aggregate and per-type
    views preserve the relative order of matching facts.
3.  The log is **append-only**: facts are never modified or removed.
    ``clear()`` exists only for test isolation.
4.  Storage is a copy-on-write tuple.  Writers build a new tuple and swap
    the reference under ``_write_lock``; readers grab the current reference
    without locking, so a reader never sees a half-appended fact and never
    waits on a writer.
5.  A batch from ``append_all()`` is swapped in as one unit: no other
    writer's facts interleave inside it.

This module provides:

*  ``IEventLog``: the protocol.
*  ``EventLog``: the in-process implementation.
*  ``FactHandler``: callback type for ``subscribe()``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from typing import Protocol

from hr_performance.core.errors import InvalidFactError
from hr_performance.domain.facts import DomainFact, validate_fact

logger = logging.getLogger(__name__)

# Synchronous callback run after a fact has been appended.
FactHandler = Callable[[DomainFact], None]


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------

class IEventLog(Protocol):
    """Ordered, append-only record of domain facts."""

    def append(self, fact: DomainFact) -> None:
        """Append *fact*.  Raises ``InvalidFactError`` if it is malformed."""
        ...

    def append_all(self, facts: Iterable[DomainFact]) -> None:
        """Append *facts* in the given order as one batch."""
        ...

    def all_facts(self) -> tuple[DomainFact, ...]:
        """Snapshot of every fact, in append order."""
        ...

    def facts_for_aggregate(self, aggregate_id: str) -> tuple[DomainFact, ...]:
        ...

    def facts_of_type(self, fact_type: str) -> tuple[DomainFact, ...]:
        ...

    def count(self) -> int:
        ...


# ---------------------------------------------------------------------------
# In-process implementation
# ---------------------------------------------------------------------------

class EventLog:
    """Copy-on-write fact log for many readers and occasional writers.

    Parameters
    ----------
    log_appends
        When ``True`` (default) every appended fact is logged at
        *log_level* with its type and representation.
    log_level
        Level name for the per-append log record.
    """

    def __init__(
        self,
        *,
        log_appends: bool = True,
        log_level: str = "INFO",
    ) -> None:
        self._facts: tuple[DomainFact, ...] = ()
        self._write_lock = threading.Lock()
        self._handlers: list[tuple[str | None, FactHandler]] = []
        self._handlers_lock = threading.Lock()
        self._dead_letters: list[tuple[DomainFact, str]] = []
        self._log_appends = log_appends
        self._log_level = logging.getLevelName(log_level.upper())
        if not isinstance(self._log_level, int):
            self._log_level = logging.INFO

    # -- Writes ------------------------------------------------------------

    def append(self, fact: DomainFact) -> None:
        """Append *fact* at the end of the log.

        Raises
        ------
        InvalidFactError
            If *fact* is ``None``, not a registered fact variant, or has no
            ``aggregate_id``.
        """
        validate_fact(fact)
        with self._write_lock:
            self._facts = self._facts + (fact,)
        self._after_append((fact,))

    def append_all(self, facts: Iterable[DomainFact]) -> None:
        """Append *facts* in order, as one batch.

        Every element is validated first; if any is rejected nothing is
        appended.
        """
        if facts is None:
            raise InvalidFactError("fact batch is None")
        batch = tuple(facts)
        for fact in batch:
            validate_fact(fact)
        if not batch:
            return
        with self._write_lock:
            self._facts = self._facts + batch
        self._after_append(batch)

    def clear(self) -> None:
        """Remove all facts.  Testing only."""
        with self._write_lock:
            self._facts = ()
        self._dead_letters.clear()
        logger.debug("Cleared all facts from event log")

    # -- Reads (lock-free against the current snapshot) -----------------------

    def all_facts(self) -> tuple[DomainFact, ...]:
        return self._facts

    def facts_for_aggregate(self, aggregate_id: str) -> tuple[DomainFact, ...]:
        return tuple(f for f in self._facts if f.aggregate_id == aggregate_id)

    def facts_of_type(self, fact_type: str) -> tuple[DomainFact, ...]:
        return tuple(f for f in self._facts if f.fact_type == fact_type)

    def count(self) -> int:
        return len(self._facts)

    def __len__(self) -> int:
        return len(self._facts)

    # -- Subscribers -------------------------------------------------------

    def subscribe(
        self,
        handler: FactHandler,
        fact_type: str | None = None,
    ) -> None:
        """Run *handler* after each appended fact of *fact_type* (or all).

        Handlers run on the appending thread, after the fact is visible to
        readers.  A failing handler is logged and recorded in
        ``dead_letters``; the append itself still succeeds.
        """
        with self._handlers_lock:
            self._handlers.append((fact_type, handler))
        logger.debug(
            "Registered fact handler %s for %s",
            getattr(handler, "__name__", type(handler).__name__),
            fact_type or "all fact types",
        )

    @property
    def dead_letters(self) -> list[tuple[DomainFact, str]]:
        """Facts whose handlers failed, with the error message."""
        return list(self._dead_letters)

    # -- Internals ---------------------------------------------------------

    def _after_append(self, batch: tuple[DomainFact, ...]) -> None:
        with self._handlers_lock:
            handlers = list(self._handlers)
        for fact in batch:
            if self._log_appends:
                logger.log(
                    self._log_level,
                    "Fact appended: %s - %r",
                    fact.fact_type,
                    fact,
                )
            for wanted, handler in handlers:
                if wanted is not None and wanted != fact.fact_type:
                    continue
                try:
                    handler(fact)
                except Exception as exc:
                    self._dead_letters.append((fact, str(exc)))
                    logger.exception(
                        "Handler error on %s: %s", fact.fact_type, exc,
                    )

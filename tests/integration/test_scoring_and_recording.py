"""End-to-end: several workflows on threads share one context.

Each worker scores a manager assessment and records it; afterwards the log
holds exactly one fact per worker, each carrying the score the engine
returned, and per-cycle views keep their relative order.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

from hr_performance.application.assessment_service import scores_from_ratings
from hr_performance.context import ServiceContext
from hr_performance.core.config import load_settings
from hr_performance.core.enums import KPICategory


def test_concurrent_workflows_record_every_assessment():
    ctx = ServiceContext.from_settings(
        load_settings(overrides={"event_log": {"log_appends": False}})
    )
    seen: list[str] = []
    lock = threading.Lock()

    def on_manager_assessment(fact) -> None:
        with lock:
            seen.append(fact.participant_id)

    ctx.event_log.subscribe(on_manager_assessment, fact_type="ManagerAssessmentSubmitted")

    kpi = ctx.assessments.define_kpi("Delivery", KPICategory.OPERATIONS, "admin")
    n_workers, per_worker = 6, 40
    barrier = threading.Barrier(n_workers)
    returned: dict[str, Decimal] = {}

    def worker(w: int) -> None:
        svc = ctx.assessments
        barrier.wait()
        for i in range(per_worker):
            pid = f"w{w}-p{i}"
            rating = Decimal(1 + (w + i) % 5)
            _, final = svc.submit_manager_assessment(
                cycle_id=f"cycle-{w}",
                participant_id=pid,
                employee_id=pid,
                supervisor_id=f"sup-{w}",
                kpi_scores=scores_from_ratings({kpi.aggregate_id: rating}),
            )
            with lock:
                returned[pid] = final.value

    with ThreadPoolExecutor(max_workers=n_workers) as pool:
        list(pool.map(worker, range(n_workers)))

    assessments = ctx.event_log.facts_of_type("ManagerAssessmentSubmitted")
    assert len(assessments) == n_workers * per_worker
    assert ctx.event_log.count() == n_workers * per_worker + 1
    assert ctx.event_log.all_facts()[0] is kpi
    assert {f.participant_id: f.final_score for f in assessments} == returned
    assert sorted(seen) == sorted(returned)

    for w in range(n_workers):
        cycle = ctx.event_log.facts_for_aggregate(f"cycle-{w}")
        assert [f.participant_id for f in cycle] == [
            f"w{w}-p{i}" for i in range(per_worker)
        ]

    assert ctx.event_log.dead_letters == []

"""CLI entry point for the performance core."""

from __future__ import annotations

import json

import click

from .core.config import load_settings
from .core.enums import KPICategory
from .core.errors import PerformanceError
from .domain.facts import fact_to_dict
from .domain.scores import AssessmentScore
from .observability.logger import get_logger, new_trace_id, setup_logging


def _bootstrap(config: str | None):
    settings = load_settings(config_path=config)
    setup_logging(
        level=settings.observability.log_level,
        format=settings.observability.log_format.value,
    )
    new_trace_id()
    return settings


@click.group()
def main() -> None:
    """HR performance scoring and fact log."""


@main.command()
@click.argument("ratings", nargs=-1, required=True)
@click.option("--competency", "competency", multiple=True, help="Competency rating (repeatable)")
@click.option("--config", default=None, help="Config file path")
def score(ratings: tuple[str, ...], competency: tuple[str, ...], config: str | None) -> None:
    """Compute the final score for one or more KPI RATINGS."""
    from .domain.scoring import ScoreEngine

    try:
        settings = _bootstrap(config)
        engine = ScoreEngine(settings.scoring)
        result = engine.calculate_final_score(
            [AssessmentScore.of(r) for r in ratings],
            [AssessmentScore.of(r) for r in competency] or None,
        )
    except PerformanceError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"final_score={result.value}")
    click.echo(f"kpi_average={result.kpi_average}")
    click.echo(f"competency_average={result.competency_average}")
    if result.competency_fallback:
        click.echo("note: competency average taken from KPI average")


@main.command()
@click.option("--config", default=None, help="Config file path")
def facts(config: str | None) -> None:
    """Run a sample unit of work and print the recorded facts as JSON lines."""
    from .context import ServiceContext

    try:
        settings = _bootstrap(config)
    except PerformanceError as exc:
        raise click.ClickException(str(exc)) from exc

    log = get_logger(__name__)
    ctx = ServiceContext.from_settings(settings)
    svc = ctx.assessments

    kpi = svc.define_kpi("Quarterly revenue", KPICategory.SALES, created_by="hr-admin")
    svc.submit_manager_assessment(
        cycle_id="cycle-demo",
        participant_id="participant-demo",
        employee_id="employee-demo",
        supervisor_id="supervisor-demo",
        kpi_scores=[AssessmentScore.of("4.0", kpi_id=kpi.aggregate_id)],
    )
    log.info("sample_facts_recorded", count=ctx.event_log.count())

    for fact in ctx.event_log.all_facts():
        click.echo(json.dumps(fact_to_dict(fact), sort_keys=True))


if __name__ == "__main__":
    main()

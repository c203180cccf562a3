"""CLI interface for xfactor."""

import click
import json
import logging
import sys
from datetime import datetime
from typing import Optional
from pydantic import ValidationError
from .models import JobView, JobState
from .plugin import SiteFactorPlugin
from .registry import JobRegistry
from .settings import HostSettings


def get_plugin(with_registry: bool = False) -> SiteFactorPlugin:
    """Create and initialize the plugin from the environment."""
    registry = None
    if with_registry:
        registry = JobRegistry(HostSettings().data_dir)
    plugin = SiteFactorPlugin(registry=registry)
    plugin.init()
    return plugin


def _parse_job(job_json: str) -> JobView:
    try:
        return JobView(**json.loads(job_json))
    except json.JSONDecodeError as e:
        click.echo(f"✗ Invalid JSON: {e}", err=True)
        sys.exit(1)
    except ValidationError as e:
        click.echo(f"✗ Invalid job: {e}", err=True)
        sys.exit(1)


@click.group()
@click.option("--verbose", is_flag=True, help="Show debug diagnostics")
def cli(verbose: bool):
    """xfactor - site factor priority plugin"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@cli.command()
@click.argument("job_json")
def score(job_json: str):
    """Compute the site factor of a single job.

    Example:
        xfactor score '{"id":"job1","accrue_time":"2026-01-01T00:00:00","time_limit":60}'
    """
    job = _parse_job(job_json)
    plugin = get_plugin()
    plugin.set(job)
    factor = job.site_factor - plugin.engine.nice_offset
    click.echo(f"Job {job.id}: factor={factor} site_factor={job.site_factor}")


@cli.command()
@click.argument("job_json")
def add(job_json: str):
    """Add a job to the registry.

    Example:
        xfactor add '{"id":"job1","accrue_time":"2026-01-01T00:00:00","time_limit":60}'
    """
    job = _parse_job(job_json)
    registry = JobRegistry(HostSettings().data_dir)
    if registry.get_job(job.id) is not None:
        registry.update_job(job)
        click.echo(f"✓ Job {job.id} replaced")
    else:
        registry.add_job(job)
        click.echo(f"✓ Job {job.id} added")


@cli.command(name="list")
@click.option("--state", type=click.Choice([s.value for s in JobState]), help="Filter by state")
@click.option("--limit", default=10, help="Maximum jobs to display")
def list_jobs(state: Optional[str], limit: int):
    """List jobs and their site factor.

    Example:
        xfactor list --state pending
    """
    registry = JobRegistry(HostSettings().data_dir)

    if state:
        jobs = registry.get_jobs_by_state(JobState(state))
    else:
        jobs = registry.get_all_jobs()

    jobs = jobs[:limit]

    if not jobs:
        click.echo("No jobs found")
        return

    click.echo(f"\n{'ID':<20} {'State':<12} {'Site Factor':<14} {'Accrue Time':<20}")
    click.echo("-" * 68)
    for job in jobs:
        accrued = job.accrue_time.strftime("%Y-%m-%d %H:%M:%S") if isinstance(job.accrue_time, datetime) else "-"
        click.echo(f"{job.id:<20} {job.state.value:<12} {job.site_factor:<14} {accrued:<20}")
    click.echo()


@cli.command()
def update():
    """Recompute the site factor of all pending jobs in the registry.

    Example:
        xfactor update
    """
    plugin = get_plugin(with_registry=True)
    visited = plugin.update()
    pending = len(plugin.registry.get_jobs_by_state(JobState.PENDING))
    click.echo(f"✓ Updated {pending} pending job(s) out of {visited}")


@cli.group()
def config():
    """Inspect configuration"""
    pass


@config.command()
def show():
    """Show the active xfactor parameters.

    Example:
        XFACTOR_SITE_FACTOR_PARAMS="xfactor_min_time=5,xfactor_max=100,xfactor_weight=2" xfactor config show
    """
    plugin = get_plugin()
    cfg = plugin.config

    click.echo("\nCurrent Configuration:")
    click.echo(f"  xfactor_min_time: {cfg.min_time} minutes")
    click.echo(f"  xfactor_max:      {cfg.max_factor}")
    click.echo(f"  xfactor_weight:   {cfg.weight}")
    click.echo(f"  elapsed unit:     {plugin.settings.elapsed_unit.value}")
    click.echo()


if __name__ == "__main__":
    cli()

"""CLI for dashboard-persistence: save / load / keys commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from dashboard_persistence.core.config import AppSettings, ObservabilityConfig
from dashboard_persistence.core.startup_checks import validate_settings
from dashboard_persistence.dashboard_keys import DASHBOARD_KEYS
from dashboard_persistence.hooks import setup_logging
from dashboard_persistence.jobs.job import Job
from dashboard_persistence.models import FileIdentity, JobState, TaskConfiguration
from dashboard_persistence.persistence import create_resolver
from dashboard_persistence.services.persistence_service import DashboardPersistenceService

app = typer.Typer(name="dashboard-persistence", help="Save and load dashboard state files")
console = Console()
err_console = Console(stderr=True)


def _build_settings(root: Optional[Path], directory: Optional[str], verbose: bool) -> AppSettings:
    """Build settings, overriding env defaults with CLI flags."""
    settings = AppSettings()
    overrides: dict = {}
    if root:
        overrides["root_path"] = root
    if directory:
        overrides["directory"] = directory
    if overrides:
        settings = settings.model_copy(
            update={"persistence": settings.persistence.model_copy(update=overrides)}
        )

    setup_logging(ObservabilityConfig(log_level="DEBUG" if verbose else "WARNING"))
    try:
        validate_settings(settings)
    except ValueError as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2) from exc
    return settings


def _print_log(job: Job) -> None:
    for entry in job.entries:
        style = "red" if entry.level == "failed" else "dim"
        err_console.print(f"[{style}]{entry.text}[/{style}]")


def _run(settings: AppSettings, config: TaskConfiguration) -> tuple[Job, DashboardPersistenceService]:
    """Submit one task, wait for it and print its log. Exits non-zero on failure."""
    service = DashboardPersistenceService.from_settings(settings)
    finished = False
    try:
        job = service.submit(config)
        finished = job.wait(settings.jobs.wait_timeout_seconds)
    finally:
        # an unfinished job is abandoned, not awaited
        service.shutdown(wait=finished)

    if not finished:
        err_console.print(f"[red]Job {job.job_id} did not finish in {settings.jobs.wait_timeout_seconds}s[/red]")
        raise typer.Exit(code=2)

    _print_log(job)
    if job.state is JobState.FAILED:
        err_console.print(f"[bold red]Failed:[/bold red] {job.error}")
        raise typer.Exit(code=1)
    return job, service


@app.command()
def save(
    data_key: str = typer.Argument(..., help="Logical key, e.g. customCards"),
    data: Optional[str] = typer.Option(None, "--data", help="Payload text"),
    file: Optional[Path] = typer.Option(None, "--file", help="Read the payload from this file"),
    directory: Optional[str] = typer.Option(None, "--directory", "-d", help="Target directory"),
    root: Optional[Path] = typer.Option(None, "--root", help="Root path for relative directories"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Write a payload to the file for DATA_KEY."""
    if data is not None and file is not None:
        raise typer.BadParameter("Use either --data or --file, not both")

    payload = data or ""
    if file is not None:
        payload = file.read_text(encoding="utf-8")

    settings = _build_settings(root, directory, verbose)
    config = TaskConfiguration(operation="save", data_key=data_key, payload=payload)
    _run(settings, config)
    console.print(f"[green]Saved {len(payload)} characters for {data_key}[/green]")


@app.command()
def load(
    data_key: str = typer.Argument(..., help="Logical key, e.g. customCards"),
    directory: Optional[str] = typer.Option(None, "--directory", "-d", help="Source directory"),
    root: Optional[Path] = typer.Option(None, "--root", help="Root path for relative directories"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write loaded data here"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Read back the payload stored for DATA_KEY."""
    settings = _build_settings(root, directory, verbose)
    config = TaskConfiguration(operation="load", data_key=data_key)
    job, service = _run(settings, config)

    loaded = service.loaded_data(job.job_id)
    if loaded is None:
        err_console.print(f"[yellow]Nothing stored for {data_key}[/yellow]")
        return
    if output:
        output.write_text(loaded, encoding="utf-8")
        err_console.print(f"[green]Loaded data written to {output}[/green]")
    else:
        console.print(loaded, markup=False, highlight=False, soft_wrap=True)


@app.command()
def keys(
    directory: Optional[str] = typer.Option(None, "--directory", "-d", help="Directory to inspect"),
    root: Optional[Path] = typer.Option(None, "--root", help="Root path for relative directories"),
) -> None:
    """List the dashboard state keys and whether each has a file."""
    settings = _build_settings(root, directory, verbose=False)
    resolved_dir = settings.persistence.directory
    resolver = create_resolver(
        settings.persistence.backend,
        root_path=settings.persistence.root_path,
        encoding=settings.persistence.encoding,
    )

    table = Table(title="Dashboard state keys")
    table.add_column("Key")
    table.add_column("File")
    table.add_column("Stored", justify="center")
    table.add_column("Default")

    for key, default in DASHBOARD_KEYS.items():
        identity = FileIdentity.for_key(resolved_dir or ".", key)
        stored = "-" if resolved_dir is None else ("yes" if resolver.exists(identity) else "no")
        table.add_row(key, identity.file_name, stored, default)

    console.print(table)


if __name__ == "__main__":
    app()

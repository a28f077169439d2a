"""IRIS CLI utilities built with Typer + Rich."""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, Dict, List, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.pretty import Pretty
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from .errors import SDKError
from .iris import IRIS
from .jobs import JobStatus
from .resources.bloqs import INGESTION_SOURCES
from .templates import default_agent_templates

console = Console()
app = typer.Typer(help="Manage IRIS agents, knowledge bases and pages.")


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


_FORMAT_OPTION = typer.Option(
    OutputFormat.TEXT,
    "--format",
    "-f",
    case_sensitive=False,
    help="Output format (text or json).",
)


@app.callback()
def _main(
    debug: bool = typer.Option(False, "--debug", help="Log HTTP traffic to stderr."),
):
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        )


def _iris() -> IRIS:
    return IRIS()


def _fail(exc: SDKError, title: str = "Error") -> None:
    console.print(Panel(str(exc) or exc.__class__.__name__, title=title, border_style="red"))
    raise typer.Exit(code=1)


def _parse_json_option(raw: Optional[str], name: str) -> Dict[str, Any]:
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except ValueError as exc:
        raise typer.BadParameter(f"{name} must be valid JSON: {exc}") from exc
    if not isinstance(value, dict):
        raise typer.BadParameter(f"{name} must be a JSON object")
    return value


def _parse_value(raw: str) -> Any:
    """Interpret a CLI value as JSON when possible, else as a plain string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _status_payload(status: JobStatus) -> Dict[str, Any]:
    return {
        "job_id": status.job_id,
        "status": status.status,
        "progress_percent": status.progress_percent,
        "current_file": status.current_file,
        "current_step": status.current_step,
        "total_units": status.total_units,
        "processed_units": status.processed_units,
        "errors": [str(err) for err in status.error_log],
    }


def _emit(data: Any, *, title: str, output_format: OutputFormat) -> None:
    if output_format is OutputFormat.JSON:
        console.print_json(data=data)
        return
    console.print(Panel(Pretty(data), title=title, border_style="green"))


def _print_status(status: JobStatus, output_format: OutputFormat) -> None:
    payload = _status_payload(status)
    if output_format is OutputFormat.JSON:
        console.print_json(data=payload)
        return
    table = Table(show_header=False)
    table.add_column("field", style="bold")
    table.add_column("value")
    for key in ("job_id", "status", "progress_percent", "processed_units", "total_units", "current_file"):
        table.add_row(key, str(payload[key]))
    border = "red" if status.failed else "green" if status.is_terminal else "cyan"
    console.print(Panel(table, title="Ingestion job", border_style=border))
    if status.error_log:
        errors = Table(show_header=True, header_style="bold magenta")
        errors.add_column("file")
        errors.add_column("error")
        for err in status.error_log:
            errors.add_row(err.unit, err.error)
        console.print(Panel(errors, title="Errors", border_style="red"))


@app.command()
def config(
    api_key: Optional[str] = typer.Option(None, help="API key to export."),
    user_id: Optional[int] = typer.Option(None, help="User id to export."),
    env: Optional[str] = typer.Option(None, help="Environment (production or local)."),
):
    """Show shell commands to export credentials."""

    exports: List[str] = []
    if api_key:
        exports.append(f"export IRIS_API_KEY={api_key}")
    if user_id is not None:
        exports.append(f"export IRIS_USER_ID={user_id}")
    if env:
        exports.append(f"export IRIS_ENV={env}")

    if not exports:
        exports = [
            "export IRIS_API_KEY=<your-key>",
            "export IRIS_USER_ID=<your-user-id>",
            "export IRIS_ENV=<production|local>",
        ]

    console.print(Panel("\n".join(exports), title="Add these to your shell", border_style="cyan"))


@app.command()
def templates(output_format: OutputFormat = _FORMAT_OPTION):
    """List the built-in agent templates."""

    summaries = default_agent_templates().summaries()
    if output_format is OutputFormat.JSON:
        console.print_json(data=summaries)
        return
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("template")
    table.add_column("name")
    table.add_column("description")
    for key, summary in summaries.items():
        table.add_row(key, summary["name"], summary["description"])
    console.print(table)


@app.command("agent-create")
def agent_create(
    template: str = typer.Argument(..., help="Template name (see `iris templates`)."),
    name: Optional[str] = typer.Option(None, help="Agent name override."),
    customizations: Optional[str] = typer.Option(
        None, "--customizations", "-c", help="JSON object deep-merged over the template."
    ),
    output_format: OutputFormat = _FORMAT_OPTION,
):
    """Create an agent from a template."""

    overrides = _parse_json_option(customizations, "--customizations")
    if name:
        overrides["name"] = name
    try:
        agent = _iris().agents.create_from_template(template, overrides)
    except SDKError as exc:
        _fail(exc, title="Agent")
    _emit(agent.to_dict(), title=f"Agent {agent.id}", output_format=output_format)


@app.command()
def ingest(
    bloq_id: int = typer.Argument(..., help="Target bloq id."),
    source: str = typer.Argument(..., help=f"Source: {', '.join(INGESTION_SOURCES)}."),
    path: str = typer.Argument(..., help="Folder path at the source."),
    recursive: bool = typer.Option(False, help="Include subfolders."),
    file_types: Optional[str] = typer.Option(None, help="Comma-separated extensions, e.g. pdf,docx."),
    list_name: Optional[str] = typer.Option(None, help="Name of the list to ingest into."),
    include_images: bool = typer.Option(False, help="Extract and describe images."),
    wait: bool = typer.Option(False, help="Wait for the job and show progress."),
    interval: float = typer.Option(2.0, help="Seconds between status polls."),
    timeout: float = typer.Option(3600.0, help="Seconds to wait before giving up."),
    output_format: OutputFormat = _FORMAT_OPTION,
):
    """Start a folder ingestion job."""

    types = [t.strip() for t in file_types.split(",") if t.strip()] if file_types else None
    try:
        iris = _iris()
        job = iris.bloqs.ingest_folder(
            bloq_id,
            source,
            path,
            recursive=recursive,
            file_types=types,
            list_name=list_name,
            include_images=include_images,
        )
    except SDKError as exc:
        _fail(exc, title="Ingest")

    if not wait:
        _emit(job, title="Ingestion started", output_format=output_format)
        return

    job_id = job.get("job_id") if isinstance(job, dict) else None
    if job_id is None:
        console.print(Panel("Server did not return a job_id", title="Ingest", border_style="red"))
        raise typer.Exit(code=1)

    with Progress(
        TextColumn("[bold]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=output_format is OutputFormat.JSON,
    ) as progress:
        task = progress.add_task(f"job {job_id}", total=100)

        def on_update(status: JobStatus) -> None:
            progress.update(
                task,
                completed=status.progress_percent,
                description=status.current_file or status.status,
            )

        try:
            final = iris.bloqs.wait_for_ingestion(
                job_id, on_update=on_update, poll_interval=interval, timeout=timeout
            )
        except SDKError as exc:
            progress.stop()
            _fail(exc, title="Ingest")
    _print_status(final, output_format)


@app.command("ingest-status")
def ingest_status(
    job_id: str = typer.Argument(..., help="Ingestion job id."),
    output_format: OutputFormat = _FORMAT_OPTION,
):
    """Show the status of an ingestion job."""

    try:
        status = _iris().bloqs.get_ingestion_status(job_id)
    except SDKError as exc:
        _fail(exc, title="Ingestion job")
    _print_status(status, output_format)


@app.command("ingest-jobs")
def ingest_jobs(
    bloq_id: int = typer.Argument(..., help="Bloq id."),
    status: Optional[str] = typer.Option(None, help="Filter by job status."),
    output_format: OutputFormat = _FORMAT_OPTION,
):
    """List ingestion jobs for a bloq."""

    options = {"status": status} if status else {}
    try:
        jobs = _iris().bloqs.list_ingestion_jobs(bloq_id, **options)
    except SDKError as exc:
        _fail(exc, title="Ingestion jobs")
    if output_format is OutputFormat.JSON:
        console.print_json(data=jobs)
        return
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("id")
    table.add_column("status")
    table.add_column("progress")
    table.add_column("source")
    for job in jobs or []:
        table.add_row(
            str(job.get("id", job.get("job_id", ""))),
            str(job.get("status", "")),
            f"{job.get('progress_percent', 0)}%",
            str(job.get("source", "")),
        )
    console.print(table)


@app.command("ingest-cancel")
def ingest_cancel(job_id: str = typer.Argument(..., help="Ingestion job id.")):
    """Cancel a running ingestion job."""

    try:
        _iris().bloqs.cancel_ingestion_job(job_id)
    except SDKError as exc:
        _fail(exc, title="Cancel")
    console.print(Panel(f"Cancelled job {job_id}", title="Cancel", border_style="green"))


@app.command("ingest-retry")
def ingest_retry(
    job_id: str = typer.Argument(..., help="Ingestion job id."),
    output_format: OutputFormat = _FORMAT_OPTION,
):
    """Retry the failed files of an ingestion job."""

    try:
        result = _iris().bloqs.retry_failed_files(job_id)
    except SDKError as exc:
        _fail(exc, title="Retry")
    _emit(result, title="Retry", output_format=output_format)


@app.command("page-set")
def page_set(
    page_id: int = typer.Argument(..., help="Page id."),
    path: str = typer.Argument(..., help="Dot path into json_content, e.g. components.0.props.title."),
    value: str = typer.Argument(..., help="New value (parsed as JSON when possible)."),
):
    """Set a single value inside a page's json_content."""

    try:
        _iris().pages.update_path(page_id, path, _parse_value(value))
    except SDKError as exc:
        _fail(exc, title="Page")
    console.print(Panel(f"Set {path} on page {page_id}", title="Page", border_style="green"))


@app.command("page-theme")
def page_theme(
    page_id: int = typer.Argument(..., help="Page id."),
    updates: List[str] = typer.Argument(..., help="KEY=VALUE pairs, e.g. branding.primaryColor=#10b981."),
):
    """Update theme values of a page."""

    theme: Dict[str, Any] = {}
    for item in updates:
        key, sep, raw = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected KEY=VALUE, got {item!r}")
        theme[key] = _parse_value(raw)
    try:
        _iris().pages.update_theme(page_id, theme)
    except SDKError as exc:
        _fail(exc, title="Theme")
    console.print(Panel(f"Updated {len(theme)} theme value(s) on page {page_id}", title="Theme", border_style="green"))


@app.command()
def servis(
    function: str = typer.Argument(..., help="Servis.ai function, snake_case or camelCase."),
    params: Optional[str] = typer.Option(None, "--params", "-p", help="JSON object of parameters."),
    output_format: OutputFormat = _FORMAT_OPTION,
):
    """Execute a Servis.ai function."""

    parameters = _parse_json_option(params, "--params")
    try:
        result = _iris().servis_ai.dynamic_call(function, (parameters,))
    except SDKError as exc:
        _fail(exc, title="Servis.ai")
    _emit(result, title=function, output_format=output_format)


def main():  # pragma: no cover
    load_dotenv()
    app()


if __name__ == "__main__":  # pragma: no cover
    main()

"""Typer CLI entrypoint for igfetch."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from pydantic import ValidationError

from igfetch.config import DEFAULT_USER_AGENT, FetchConfig
from igfetch.errors import (
    ExtractionTimeoutError,
    InvalidInputError,
    MediaNotFoundError,
)
from igfetch.http import HttpxClient
from igfetch.input import load_url_file
from igfetch.orchestrator import Orchestrator

app = typer.Typer(help="Extract direct media download links from public Instagram posts.", no_args_is_help=True)

_EXIT_CODES = (
    (InvalidInputError, 2),
    (MediaNotFoundError, 4),
    (ExtractionTimeoutError, 5),
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_config(timeout_seconds: float, user_agent: str) -> FetchConfig:
    try:
        return FetchConfig(timeout_seconds=timeout_seconds, user_agent=user_agent)
    except ValidationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2) from exc


def _exit_code_for(exc: Exception) -> int:
    for error_type, code in _EXIT_CODES:
        if isinstance(exc, error_type):
            return code
    return 1


@app.callback()
def main() -> None:
    """igfetch command group."""


@app.command()
def extract(
    url: str = typer.Argument(..., help="Instagram /p/, /reel/ or /tv/ URL"),
    timeout_seconds: float = typer.Option(30.0),
    deadline_seconds: float | None = typer.Option(None, help="Overall time budget across all strategies"),
    user_agent: str = typer.Option(DEFAULT_USER_AGENT),
    indent: int = typer.Option(2, min=0),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Print the download links and metadata of one post as JSON."""

    _configure_logging(verbose)
    config = _build_config(timeout_seconds, user_agent)

    with HttpxClient() as client:
        orchestrator = Orchestrator(client, config=config)
        deadline = None
        if deadline_seconds is not None:
            deadline = orchestrator.now() + deadline_seconds
        try:
            result = orchestrator.orchestrate(url, deadline=deadline)
        except Exception as exc:
            typer.echo(f"Extraction failed: {exc}", err=True)
            raise typer.Exit(code=_exit_code_for(exc)) from exc

    typer.echo(json.dumps(result.to_wire(), indent=indent or None, ensure_ascii=False))


@app.command()
def batch(
    url_file: Path = typer.Option(..., exists=True, readable=True, dir_okay=False),
    timeout_seconds: float = typer.Option(30.0),
    user_agent: str = typer.Option(DEFAULT_USER_AGENT),
    continue_on_error: bool = typer.Option(False),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Extract every post listed in a URL file (one URL per line)."""

    _configure_logging(verbose)
    config = _build_config(timeout_seconds, user_agent)

    try:
        references = load_url_file(url_file)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2) from exc

    try:
        with HttpxClient() as client:
            report = Orchestrator(client, config=config).extract_batch(
                references, continue_on_error=continue_on_error
            )
    except Exception as exc:
        typer.echo(f"Batch failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    payload = {url: result.to_wire() for url, result in report.results.items()}
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    typer.echo(
        f"Processed {report.total} URL(s): {report.succeeded} succeeded, {report.failed} failed.",
        err=True,
    )

    if report.failures:
        typer.echo("Failures:", err=True)
        for failure in report.failures:
            typer.echo(f"- {failure}", err=True)

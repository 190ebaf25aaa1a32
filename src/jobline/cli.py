# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Main CLI entry point for jobline.

Dumb trigger: loads config, builds the registry, executes a job line,
renders the journal. No job logic lives here.
"""

import json
import logging
from typing import List, Optional

import typer

from jobline import __version__
from jobline.config import build_registry, load_config
from jobline.errors import JoblineError, MissingArgumentsError
from jobline.executor import run_job_line
from jobline.registry import Registry
from jobline.render import render_journal
from jobline.schemas import JobStatus


app = typer.Typer(
    name="jobline",
    help="Minimal job line execution engine",
    no_args_is_help=True,
)


def _parse_kv_args(args: Optional[List[str]]) -> dict:
    """Parse key=value arguments into a dict.

    Supports:
    - Booleans: true, false
    - Nulls: null, none
    - Numbers: integers and floats
    - JSON: values starting with { or [ are parsed as JSON
    - Strings: everything else
    """
    if not args:
        return {}
    result = {}
    for arg in args:
        if "=" not in arg:
            raise typer.BadParameter(f"Expected key=value, got: {arg}")
        key, value = arg.split("=", 1)
        if value.lower() == "true":
            result[key] = True
        elif value.lower() == "false":
            result[key] = False
        elif value.lower() in ("null", "none"):
            result[key] = None
        elif value.startswith("{") or value.startswith("["):
            try:
                result[key] = json.loads(value)
            except json.JSONDecodeError:
                result[key] = value
        else:
            try:
                result[key] = int(value)
            except ValueError:
                try:
                    result[key] = float(value)
                except ValueError:
                    result[key] = value
    return result


def _setup_logging(level: str, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_registry(config_path: Optional[str], verbose: bool = False) -> Registry:
    """Load config and build the registry, exiting on failure."""
    try:
        config = load_config(config_path)
        _setup_logging(config["log_level"], verbose)
        return build_registry(config)
    except FileNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except JoblineError as e:
        typer.echo(f"Config error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def run(
    line: str = typer.Argument(..., help="Job line name to run"),
    args: Optional[List[str]] = typer.Argument(None, help="key=value external arguments"),
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config file"),
    format: str = typer.Option("table", "--format", "-f", help="Output format: table, json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Run a job line with external arguments."""
    external = _parse_kv_args(args)
    registry = _load_registry(config_path, verbose)

    try:
        journal = run_job_line(registry, line, external)
    except MissingArgumentsError as e:
        typer.echo(f"Missing arguments for {e.line}: {', '.join(e.missing)}", err=True)
        raise typer.Exit(1)
    except JoblineError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    render_journal(journal, format_type=format)
    if journal.status == JobStatus.EXCEPTION:
        raise typer.Exit(1)


@app.command()
def lines(
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config file"),
):
    """List registered job lines."""
    registry = _load_registry(config_path)
    for job_line in registry.job_lines():
        required = f" ({', '.join(job_line.args)})" if job_line.args else ""
        typer.echo(f"{job_line.name}{required}")


@app.command()
def jobs(
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config file"),
):
    """List registered jobs."""
    registry = _load_registry(config_path)
    for job in registry.jobs():
        if job.label:
            typer.echo(f"{job.name}\t{job.label}")
        else:
            typer.echo(job.name)


@app.command()
def version():
    """Show version information."""
    typer.echo(f"jobline version {__version__}")


from jobline.commands import config

app.add_typer(config.app, name="config")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Config command for jobline.

Validates the configuration file and the registry it builds.
"""

import typer

from jobline.config import build_registry, load_config
from jobline.errors import JoblineError

app = typer.Typer(help="Manage and validate configuration")


@app.command()
def validate(
    config_path: str = typer.Option(None, "--config", "-c", help="Path to config file"),
):
    """
    Validate configuration file.

    Checks that the config is valid YAML and that every jobs module and
    job line file loads.
    """
    typer.echo("Validating configuration...")
    typer.echo()

    try:
        config = load_config(config_path)
        typer.echo(f"Config: {config['path']}")
        registry = build_registry(config)
        typer.echo(f"Jobs: {len(registry.jobs())}")
        typer.echo(f"Job lines: {len(registry.job_lines())}")
        typer.echo()
        typer.echo("Configuration validation complete!")
    except FileNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except JoblineError as e:
        typer.echo(f"Validation failed: {e}", err=True)
        raise typer.Exit(1)

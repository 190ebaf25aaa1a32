# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Render job line journals for the CLI."""

import json
from typing import Any

import typer

from jobline.schemas import JobLineJournal


def render_journal(journal: JobLineJournal, format_type: str = "table") -> None:
    """Render a JobLineJournal to stdout."""
    if format_type == "json":
        typer.echo(json.dumps(journal.to_dict(), indent=2, default=str))
        return
    _render_table(journal)


def _short(value: Any, width: int = 60) -> str:
    text = json.dumps(value, default=str) if value is not None else ""
    if len(text) > width:
        return text[: width - 3] + "..."
    return text


def _render_table(journal: JobLineJournal) -> None:
    """Render step journals as a simple table."""
    typer.echo(f"Job line: {journal.name}")
    typer.echo(f"Status: {journal.status.value}")
    typer.echo(f"Steps: {len(journal.steps)}")
    if not journal.steps:
        return

    rows = [
        {"#": str(i), "job": step.name, "status": step.status.value, "output": _short(step.output)}
        for i, step in enumerate(journal.steps)
    ]
    keys = list(rows[0].keys())
    widths = {k: max(len(k), max(len(r[k]) for r in rows)) for k in keys}
    header = " | ".join(k.ljust(widths[k]) for k in keys)
    typer.echo("")
    typer.echo(header)
    typer.echo("-" * len(header))
    for row in rows:
        typer.echo(" | ".join(row[k].ljust(widths[k]) for k in keys))

"""Shared fixtures: a throwaway jobs module and config on disk."""

import textwrap
import uuid

import pytest

JOBS_MODULE = textwrap.dedent('''
    from jobline import Job, JobLine, JobLineStep, FromPreviousStep


    def fetch(ctx, args, log):
        return {"rows": [args.get("source"), "b"]}


    def count(ctx, args, log):
        return {"n": len(args["rows"])}


    def explode(ctx, args, log):
        raise ValueError("explode")


    JOBS = [
        Job(name="fetch", executor=fetch, args=["source"], label="Fetch rows"),
        Job(name="count", executor=count, args=["rows"]),
        Job(name="explode", executor=explode),
    ]

    LINES = [
        JobLine(
            name="count_rows",
            args=["source"],
            steps=[
                JobLineStep(name="fetch"),
                JobLineStep(name="count", args=[FromPreviousStep("rows", "rows")]),
            ],
        ),
    ]
''')

BROKEN_LINE = """
name: broken
steps:
  - job: fetch
  - job: explode
  - job: count
"""


@pytest.fixture
def jobs_module(tmp_path, monkeypatch):
    """Write an importable jobs module and return its name."""
    name = f"jobline_test_jobs_{uuid.uuid4().hex[:8]}"
    (tmp_path / f"{name}.py").write_text(JOBS_MODULE)
    monkeypatch.syspath_prepend(str(tmp_path))
    return name


@pytest.fixture
def config_file(tmp_path, jobs_module):
    """Write a config with one jobs module and a lines directory."""
    lines_dir = tmp_path / "lines"
    lines_dir.mkdir()
    (lines_dir / "broken.yaml").write_text(BROKEN_LINE)

    path = tmp_path / "config.yaml"
    path.write_text(
        f"jobs_modules:\n  - {jobs_module}\n"
        "lines_dir: lines\n"
        "log_level: warning\n"
    )
    return path

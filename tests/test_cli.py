# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Tests for the jobline CLI."""

import json

import pytest
from typer.testing import CliRunner

from jobline import __version__
from jobline.cli import _parse_kv_args, app

runner = CliRunner()


class TestParseKvArgs:
    """Tests for key=value parsing."""

    def test_types(self):
        """Values are parsed as bool, null, number, JSON or string."""
        result = _parse_kv_args([
            "flag=true", "off=False", "nothing=null", "n=3", "x=1.5",
            "obj={\"a\": 1}", "items=[1, 2]", "name=alice", "expr=a=b",
        ])
        assert result == {
            "flag": True,
            "off": False,
            "nothing": None,
            "n": 3,
            "x": 1.5,
            "obj": {"a": 1},
            "items": [1, 2],
            "name": "alice",
            "expr": "a=b",
        }

    def test_empty(self):
        """No arguments parse to an empty dict."""
        assert _parse_kv_args(None) == {}

    def test_bad_json_kept_as_string(self):
        """Unparseable JSON is kept as the raw string."""
        assert _parse_kv_args(["v={oops"]) == {"v": "{oops"}


class TestRunCommand:
    """Tests for jobline run."""

    def test_run_json(self, config_file):
        """run prints the journal as JSON."""
        result = runner.invoke(
            app, ["run", "count_rows", "source=x", "--config", str(config_file), "--format", "json"]
        )

        assert result.exit_code == 0, result.output
        output = result.stdout
        data = json.loads(output[output.index("{"):])
        assert data["status"] == "done"
        assert data["input"] == {"source": "x"}
        assert data["steps"][0]["output"] == {"rows": ["x", "b"]}
        assert data["steps"][1]["output"] == {"n": 2}

    def test_run_table(self, config_file):
        """Default table output shows line status and steps."""
        result = runner.invoke(app, ["run", "count_rows", "source=x", "-c", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "Job line: count_rows" in result.output
        assert "Status: done" in result.output
        assert "fetch" in result.output

    def test_missing_arguments(self, config_file):
        """Missing required args exit with code 1 and list the names."""
        result = runner.invoke(app, ["run", "count_rows", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "source" in result.output

    def test_unknown_line(self, config_file):
        """Unknown line names exit with code 1."""
        result = runner.invoke(app, ["run", "nope", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "Job line not found: nope" in result.output

    def test_failed_line_exits_nonzero(self, config_file):
        """A line ending in exception prints the journal and exits 1."""
        result = runner.invoke(app, ["run", "broken", "-c", str(config_file), "-f", "json"])

        assert result.exit_code == 1
        assert '"status": "exception"' in result.output

    def test_missing_config(self, tmp_path):
        """A missing config file exits with code 1."""
        result = runner.invoke(app, ["run", "x", "-c", str(tmp_path / "none.yaml")])

        assert result.exit_code == 1
        assert "Config file not found" in result.output


class TestListCommands:
    """Tests for jobs, lines, version and config validate."""

    def test_lines(self, config_file):
        """lines lists line names with their required args."""
        result = runner.invoke(app, ["lines", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "count_rows (source)" in result.output
        assert "broken" in result.output

    def test_jobs(self, config_file):
        """jobs lists job names with their labels."""
        result = runner.invoke(app, ["jobs", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "fetch\tFetch rows" in result.output
        assert "explode" in result.output

    def test_version(self):
        """version prints the package version."""
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_config_validate(self, config_file):
        """config validate reports job and line counts."""
        result = runner.invoke(app, ["config", "validate", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "Jobs: 3" in result.output
        assert "Job lines: 2" in result.output

    def test_config_validate_bad(self, tmp_path):
        """An unimportable jobs module fails validation."""
        path = tmp_path / "config.yaml"
        path.write_text("jobs_modules: [jobline_no_such_module_xyz]\n")
        result = runner.invoke(app, ["config", "validate", "-c", str(path)])

        assert result.exit_code == 1
        assert "Validation failed" in result.output

    def test_config_validate_module_error(self, tmp_path, monkeypatch):
        """A jobs module that fails at import exits 1 instead of crashing."""
        (tmp_path / "jobline_cli_broken_mod.py").write_text("JOBS = [undefined_job]\n")
        monkeypatch.syspath_prepend(str(tmp_path))
        path = tmp_path / "config.yaml"
        path.write_text("jobs_modules: [jobline_cli_broken_mod]\n")

        result = runner.invoke(app, ["config", "validate", "-c", str(path)])

        assert result.exit_code == 1
        assert "Validation failed" in result.output
        assert "Cannot import" in result.output

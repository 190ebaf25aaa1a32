# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Compiler - Transform job line YAML into JobLine definitions.

Step argument values are compiled into ArgSpecs:
- "@external.key"    → FromExternal
- "@previous.key"    → FromPreviousStep
- "@step.N.key"      → FromStepAt (N may be negative)
- "@@text"           → Literal("@text")
- anything else      → Literal

Example:
    name: nightly
    args: [source]
    steps:
      - job: fetch
        args:
          path: "@external.source"
      - job: transform
        inherit_context: false
        args:
          rows: "@previous.rows"
"""

import re
from pathlib import Path
from typing import Any, Dict, List

import yaml

from jobline.errors import CompileError
from jobline.schemas import (
    ArgSpec,
    FromExternal,
    FromPreviousStep,
    FromStepAt,
    JobLine,
    JobLineStep,
    Literal,
)

# @step.<index>.<key>, index may be negative
STEP_REF_PATTERN = re.compile(r"^@step\.(-?\d+)\.(.+)$")


def compile_arg(param: str, value: Any) -> ArgSpec:
    """Compile one step argument value into an ArgSpec."""
    if not isinstance(value, str) or not value.startswith("@"):
        return Literal(param, value)

    if value.startswith("@@"):
        return Literal(param, value[1:])

    if value.startswith("@external."):
        return FromExternal(param, _require_key(value, "@external."))
    if value.startswith("@previous."):
        return FromPreviousStep(param, _require_key(value, "@previous."))
    if value.startswith("@step."):
        match = STEP_REF_PATTERN.match(value)
        if not match:
            raise CompileError(f"Invalid step reference: {value} (expected @step.N.key)")
        return FromStepAt(param, int(match.group(1)), match.group(2))

    namespace = value.split(".", 1)[0]
    raise CompileError(f"Unknown namespace: {namespace}")


def _require_key(value: str, prefix: str) -> str:
    key = value[len(prefix):]
    if not key:
        raise CompileError(f"Missing key in reference: {value}")
    return key


def compile_step(step_data: Dict[str, Any]) -> JobLineStep:
    """Compile one step mapping into a JobLineStep."""
    if not isinstance(step_data, dict) or "job" not in step_data:
        raise CompileError(f"Step must be a mapping with a 'job' key: {step_data!r}")

    args = step_data.get("args") or {}
    if not isinstance(args, dict):
        raise CompileError(f"Step '{step_data['job']}' args must be a mapping")

    inheritable = step_data.get("inherit_context", True)
    if not isinstance(inheritable, bool):
        raise CompileError(
            f"Step '{step_data['job']}' inherit_context must be true or false, got: {inheritable!r}"
        )

    return JobLineStep(
        name=step_data["job"],
        args=tuple(compile_arg(param, value) for param, value in args.items()),
        inheritable=inheritable,
    )


def compile_job_line(line_def: Dict[str, Any]) -> JobLine:
    """
    Compile a job line definition dict → JobLine.

    Args:
        line_def: Parsed YAML dict with name, optional args and steps

    Returns:
        JobLine ready for registration
    """
    if not isinstance(line_def, dict):
        raise CompileError("Job line definition must be a mapping")
    if not line_def.get("name"):
        raise CompileError("Job line definition requires 'name'")

    steps = line_def.get("steps")
    if not isinstance(steps, list):
        raise CompileError(f"Job line '{line_def['name']}' requires a 'steps' list")

    required = line_def.get("args") or []
    if not isinstance(required, list):
        raise CompileError(f"Job line '{line_def['name']}' args must be a list")

    return JobLine(
        name=str(line_def["name"]),
        steps=tuple(compile_step(step) for step in steps),
        args=tuple(str(arg) for arg in required),
    )


def load_job_line_yaml(path: Path) -> JobLine:
    """Load and compile a job line YAML file."""
    path = Path(path)
    if not path.exists():
        raise CompileError(f"Job line file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise CompileError(f"Invalid YAML in {path}: {e}")
    return compile_job_line(data)


def load_job_lines_dir(lines_dir: Path) -> List[JobLine]:
    """Load every *.yaml job line in a directory, sorted by file name."""
    lines_dir = Path(lines_dir)
    if not lines_dir.is_dir():
        raise CompileError(f"Job lines directory not found: {lines_dir}")
    return [load_job_line_yaml(p) for p in sorted(lines_dir.glob("*.yaml"))]

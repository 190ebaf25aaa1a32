# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Argument resolution for job line steps.

Maps a step's ArgSpecs onto the target job's formal parameters:
- Literal            → constant
- FromExternal       → external[key]
- FromPreviousStep   → previous[key]
- FromStepAt         → steps[index].output[key] (negative index is relative)

Formal parameters left unassigned fall back to the same-named external
argument. Anything still unresolved is omitted from the result; executors
must tolerate missing parameters.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Dict, Iterable, List, Optional

from jobline.schemas import (
    ArgSpec,
    FromExternal,
    FromPreviousStep,
    FromStepAt,
    JobJournal,
    Literal,
)


def _lookup(source: Any, key: str) -> Any:
    """Read key from a mapping, or attribute from any other object."""
    if isinstance(source, Mapping):
        return source.get(key)
    return getattr(source, key, None)


def _has_output(output: Any) -> bool:
    # Empty containers still count as present output
    if isinstance(output, Mapping):
        return True
    if isinstance(output, Sequence) and not isinstance(output, (str, bytes)):
        return True
    return bool(output)


def _step_output(steps: Sequence[JobJournal], index: int, current: int) -> Any:
    """Output of the step at absolute index, or relative when negative."""
    position = current + index if index < 0 else index
    # No wrap-around for positions before the first step
    if position < 0 or position >= len(steps):
        return None
    entry = steps[position]
    if entry is None:
        return None
    return entry.output


def build_job_args(
    specs: Iterable[ArgSpec],
    formal_args: Sequence[str],
    external: Optional[Mapping] = None,
    previous: Any = None,
    steps: Optional[List[JobJournal]] = None,
    index: int = 0,
) -> Dict[str, Any]:
    """
    Build the concrete argument mapping for one job invocation.

    Args:
        specs: The step's argument specs
        formal_args: The job's declared parameter names
        external: Caller-supplied external arguments
        previous: Output of the immediately preceding executed step
        steps: Step journals recorded so far in this run
        index: Index of the step being resolved

    Returns:
        Dict of parameter name → resolved value
    """
    result: Dict[str, Any] = {}
    assigned = set()

    for spec in specs or ():
        param = spec.param
        if param not in formal_args:
            continue

        if isinstance(spec, Literal):
            result[param] = spec.value
            assigned.add(param)
        elif isinstance(spec, FromExternal):
            if external is not None:
                result[param] = external.get(spec.key)
                assigned.add(param)
        elif isinstance(spec, FromPreviousStep):
            if _has_output(previous):
                result[param] = _lookup(previous, spec.key)
                assigned.add(param)
        elif isinstance(spec, FromStepAt):
            if steps is not None:
                output = _step_output(steps, spec.index, index)
                if _has_output(output):
                    result[param] = _lookup(output, spec.key)
                    assigned.add(param)
        else:
            raise TypeError(f"Unknown argument spec: {spec!r}")

    # Same-name fallback to external arguments
    if external is not None:
        for param in formal_args:
            if param not in assigned and param in external:
                result[param] = external[param]

    return result

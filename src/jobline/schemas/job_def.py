# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Job and job line definition schemas.

Follows the register -> execute -> journal pattern:
- Job / JobLine are registered once and never mutated
- ArgSpecs bind a step's parameters to literals, external args or prior outputs
- JobJournal / JobLineJournal record one execution attempt
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union


class JobStatus(str, Enum):
    """Journal status. pending -> exception | done, terminal once set."""

    PENDING = "pending"
    EXCEPTION = "exception"
    DONE = "done"


class StepSignal(Enum):
    """Control signal returned by a job executor alongside its output."""

    CONTINUE = "continue"
    STOP_LINE = "stop_line"


@dataclass
class StepResult:
    """Explicit executor result.

    Returning a bare value is equivalent to StepResult(value).
    Return StepResult(value, StepSignal.STOP_LINE) to end the line
    after this step while still marking it done.
    """
    output: Any = None
    signal: StepSignal = StepSignal.CONTINUE


# executor(ctx, args, log) -> output | StepResult | awaitable of either
JobExecutor = Callable[..., Any]


@dataclass(frozen=True)
class Job:
    """An atomic unit of work."""
    name: str
    executor: JobExecutor
    args: Tuple[str, ...] = ()  # formal parameter names
    label: Optional[str] = None
    desc: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "args", tuple(self.args))


# =============================================================================
# Argument specs
# =============================================================================

@dataclass(frozen=True)
class Literal:
    """Constant value."""
    param: str
    value: Any


@dataclass(frozen=True)
class FromExternal:
    """Value of a caller-supplied external argument."""
    param: str
    key: str


@dataclass(frozen=True)
class FromPreviousStep:
    """Field of the immediately preceding step's output."""
    param: str
    key: str


@dataclass(frozen=True)
class FromStepAt:
    """Field of the output of the step at `index`.

    index >= 0 is absolute, index < 0 is relative to the current step.
    """
    param: str
    index: int
    key: str


ArgSpec = Union[Literal, FromExternal, FromPreviousStep, FromStepAt]


@dataclass(frozen=True)
class JobLineStep:
    """One invocation of a registered job within a line."""
    name: str  # job name
    args: Tuple[ArgSpec, ...] = ()
    inheritable: bool = True

    def __post_init__(self):
        object.__setattr__(self, "args", tuple(self.args))


@dataclass(frozen=True)
class JobLine:
    """A named, strictly ordered pipeline of steps."""
    name: str
    steps: Tuple[JobLineStep, ...]
    args: Tuple[str, ...] = ()  # required external args

    def __post_init__(self):
        object.__setattr__(self, "steps", tuple(self.steps))
        object.__setattr__(self, "args", tuple(self.args))


# =============================================================================
# Journals
# =============================================================================

@dataclass
class JobJournal:
    """Record of one job execution attempt."""
    name: str
    input: Dict[str, Any] = field(default_factory=dict)
    output: Any = None
    status: JobStatus = JobStatus.PENDING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "input": dict(self.input),
            "output": self.output,
            "status": self.status.value,
        }


@dataclass
class JobLineJournal:
    """Record of one job line execution, steps index-aligned with the line."""
    name: str
    input: Dict[str, Any] = field(default_factory=dict)
    status: JobStatus = JobStatus.PENDING
    steps: List[JobJournal] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "input": dict(self.input),
            "status": self.status.value,
            "steps": [step.to_dict() for step in self.steps],
        }

# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Minimal job line execution engine."""

__version__ = "0.1.0"

from jobline.errors import (
    CompileError,
    ConfigError,
    DuplicateNameError,
    JobLineNotFoundError,
    JobNotFoundError,
    JoblineError,
    LoaderError,
    MissingArgumentsError,
)
from jobline.executor import JobRunResult, execute_job_line, run_job, run_job_line
from jobline.registry import Registry, register_job, register_job_line
from jobline.resolver import build_job_args
from jobline.schemas import (
    ArgSpec,
    FromExternal,
    FromPreviousStep,
    FromStepAt,
    Job,
    JobJournal,
    JobLine,
    JobLineJournal,
    JobLineStep,
    JobStatus,
    Literal,
    StepResult,
    StepSignal,
)

__all__ = [
    "__version__",
    "Registry",
    "register_job",
    "register_job_line",
    "execute_job_line",
    "run_job_line",
    "run_job",
    "JobRunResult",
    "build_job_args",
    "ArgSpec",
    "FromExternal",
    "FromPreviousStep",
    "FromStepAt",
    "Literal",
    "Job",
    "JobLine",
    "JobLineStep",
    "JobJournal",
    "JobLineJournal",
    "JobStatus",
    "StepResult",
    "StepSignal",
    "JoblineError",
    "DuplicateNameError",
    "JobLineNotFoundError",
    "JobNotFoundError",
    "MissingArgumentsError",
    "CompileError",
    "ConfigError",
    "LoaderError",
]

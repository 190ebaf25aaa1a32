# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Jobline schemas."""

from jobline.schemas.job_def import (
    ArgSpec,
    FromExternal,
    FromPreviousStep,
    FromStepAt,
    Job,
    JobExecutor,
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
    "ArgSpec",
    "FromExternal",
    "FromPreviousStep",
    "FromStepAt",
    "Job",
    "JobExecutor",
    "JobJournal",
    "JobLine",
    "JobLineJournal",
    "JobLineStep",
    "JobStatus",
    "Literal",
    "StepResult",
    "StepSignal",
]

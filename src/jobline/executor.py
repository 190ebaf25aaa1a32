# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Executor - Run jobs and job lines.

run_job executes a single job once and captures success or failure in its
journal. execute_job_line walks a line's steps in order, resolving each
step's arguments from external args and earlier outputs, threading the
context between inheritable steps, and produces a JobLineJournal.

Job failures never propagate: they become journal status "exception".
Structural failures (unknown line or job, missing arguments) raise
JoblineError subclasses.
"""

import asyncio
import dataclasses
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from jobline.errors import JobLineNotFoundError, JobNotFoundError, MissingArgumentsError
from jobline.registry import Registry
from jobline.resolver import build_job_args
from jobline.schemas import (
    Job,
    JobJournal,
    JobLine,
    JobLineJournal,
    JobStatus,
    StepResult,
    StepSignal,
)

logger = logging.getLogger(__name__)

# Parent logger for diagnostics emitted by job executors
JOBS_LOGGER = "jobline.jobs"


@dataclass
class JobRunResult:
    """Result of a single run_job call."""
    ctx: Dict[str, Any]
    journal: JobJournal
    output: Any = None
    stop: bool = False


def _job_logger(job: Job) -> logging.LoggerAdapter:
    """Diagnostic sink handed to a job's executor."""
    return logging.LoggerAdapter(logging.getLogger(JOBS_LOGGER), {"job": job.name})


# =============================================================================
# Single job
# =============================================================================

async def run_job(
    job: Job,
    ctx: Optional[Dict[str, Any]],
    args: Dict[str, Any],
    journal: Optional[JobJournal] = None,
) -> JobRunResult:
    """
    Execute a job once.

    Args:
        job: The job to run
        ctx: Context to hand to the executor; a new dict when None
        args: Resolved arguments
        journal: Journal from a previous attempt, copied as the starting point

    Returns:
        JobRunResult with the (possibly mutated) context, the journal,
        the output and whether the executor asked the line to stop
    """
    if journal is not None:
        job_journal = dataclasses.replace(journal)
    else:
        job_journal = JobJournal(name=job.name, input=args, output=None, status=JobStatus.PENDING)

    job_ctx = ctx if ctx is not None else {}
    output = None
    stop = False

    logger.info(f"Running job: {job.label or job.name}")
    try:
        result = job.executor(job_ctx, args, _job_logger(job))
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, StepResult):
            output = result.output
            stop = result.signal is StepSignal.STOP_LINE
        else:
            output = result
        job_journal.output = output
        job_journal.status = JobStatus.DONE
    except Exception:
        logger.error(f"Job {job.name} failed", exc_info=True)
        job_journal.status = JobStatus.EXCEPTION

    return JobRunResult(ctx=job_ctx, journal=job_journal, output=output, stop=stop)


# =============================================================================
# Job line
# =============================================================================

def _resolve_line(registry: Registry, line: Union[str, JobLine]) -> JobLine:
    if isinstance(line, JobLine):
        return line
    job_line = registry.get_job_line(line)
    if job_line is None:
        raise JobLineNotFoundError(line)
    return job_line


def _external_args(line: JobLine, args: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Collect the line's declared external args, raising on any missing."""
    args = args or {}
    missing = [name for name in line.args if name not in args]
    if missing:
        raise MissingArgumentsError(line.name, missing)
    return {name: args[name] for name in line.args}


async def execute_job_line(
    registry: Registry,
    line: Union[str, JobLine],
    args: Optional[Mapping[str, Any]] = None,
    previous_journal: Optional[JobLineJournal] = None,
) -> JobLineJournal:
    """
    Execute (or resume) a job line.

    Args:
        registry: Registry holding the jobs (and the line, when given by name)
        line: Job line name or JobLine object
        args: External arguments supplied by the caller
        previous_journal: Journal of an earlier attempt to resume from

    Returns:
        JobLineJournal for this run

    Raises:
        JobLineNotFoundError: If the line name is not registered
        MissingArgumentsError: If required external args are absent
        JobNotFoundError: If a step references an unregistered job
    """
    job_line = _resolve_line(registry, line)
    external = _external_args(job_line, args)

    journal = JobLineJournal(name=job_line.name, input=external, status=JobStatus.PENDING, steps=[])
    reference = previous_journal or JobLineJournal(name=job_line.name, input=external, steps=[])

    previous_ctx: Optional[Dict[str, Any]] = None
    logger.info(f"Starting job line {job_line.name}")

    for index, step in enumerate(job_line.steps):
        prior = reference.steps[index] if index < len(reference.steps) else None
        # Resumption stops at the first step already done in the reference
        if prior is not None and prior.status == JobStatus.DONE:
            logger.info(f"Step {index} ({step.name}) already done, stopping")
            break

        job = registry.get_job(step.name)
        if job is None:
            raise JobNotFoundError(step.name)

        job_args = build_job_args(
            step.args,
            job.args,
            external=external,
            previous=journal.steps[-1].output if journal.steps else None,
            steps=journal.steps,
            index=index,
        )
        res = await run_job(
            job,
            previous_ctx if step.inheritable else None,
            job_args,
            prior,
        )
        previous_ctx = res.ctx
        journal.steps.append(res.journal)

        if res.journal.status != JobStatus.DONE:
            journal.status = res.journal.status
            break
        if res.stop:
            logger.info(f"Job {job.name} requested stop")
            break

    if journal.status == JobStatus.PENDING:
        journal.status = JobStatus.DONE

    if journal.status == JobStatus.EXCEPTION:
        logger.warning(f"Job line {job_line.name} finished with errors")
    else:
        logger.info(f"Job line {job_line.name} finished")
    return journal


def run_job_line(
    registry: Registry,
    line: Union[str, JobLine],
    args: Optional[Mapping[str, Any]] = None,
    previous_journal: Optional[JobLineJournal] = None,
) -> JobLineJournal:
    """Blocking wrapper around execute_job_line."""
    return asyncio.run(execute_job_line(registry, line, args, previous_journal))

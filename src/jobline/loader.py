"""Load job modules into a registry.

A jobs module is any importable module defining:
- JOBS: list of Job
- LINES: list of JobLine (optional)

Copyright 2025 Ben Mensi
Licensed under the Apache License, Version 2.0
"""

import importlib
import logging
from typing import Tuple

from jobline.errors import LoaderError
from jobline.registry import Registry
from jobline.schemas import Job, JobLine

logger = logging.getLogger(__name__)


def load_jobs_module(registry: Registry, module_name: str) -> Tuple[int, int]:
    """Import a jobs module and register its JOBS and LINES.

    Args:
        registry: Registry to populate.
        module_name: Dotted module path, e.g. "myproject.jobs".

    Returns:
        (jobs registered, lines registered)

    Raises:
        LoaderError: If the module cannot be imported or defines nothing.
        DuplicateNameError: If a name is already registered.
    """
    try:
        module = importlib.import_module(module_name)
    except Exception as e:
        raise LoaderError(f"Cannot import jobs module '{module_name}': {e}") from e

    jobs = getattr(module, "JOBS", None)
    lines = getattr(module, "LINES", None)
    if jobs is None and lines is None:
        raise LoaderError(f"Module '{module_name}' defines neither JOBS nor LINES")

    jobs = list(jobs or [])
    lines = list(lines or [])
    if not all(isinstance(j, Job) for j in jobs):
        raise LoaderError(f"{module_name}.JOBS must be a list of Job")
    if not all(isinstance(line, JobLine) for line in lines):
        raise LoaderError(f"{module_name}.LINES must be a list of JobLine")

    for job in jobs:
        registry.register_job(job)
    for line in lines:
        registry.register_job_line(line)

    logger.info(f"Loaded {len(jobs)} jobs and {len(lines)} lines from {module_name}")
    return len(jobs), len(lines)

# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Registry - Name-keyed stores of Job and JobLine definitions.

Insert-only: there is no update or delete. A registry is built by the
caller and passed explicitly to execute_job_line, so several isolated
registries can live in one process.
"""

import logging
from typing import Dict, List, Optional

from jobline.errors import DuplicateNameError
from jobline.schemas import Job, JobLine

logger = logging.getLogger(__name__)


class Registry:
    """Registry of jobs and job lines."""

    def __init__(self):
        self._jobs: Dict[str, Job] = {}
        self._job_lines: Dict[str, JobLine] = {}

    def register_job(self, job: Optional[Job]) -> None:
        """
        Register a job.

        Args:
            job: Job definition. None is ignored.

        Raises:
            DuplicateNameError: If a job with the same name exists
        """
        if job is None:
            return
        if job.name in self._jobs:
            raise DuplicateNameError("job", job.name)
        self._jobs[job.name] = job
        logger.debug(f"Registered job {job.name}")

    def register_job_line(self, line: Optional[JobLine]) -> None:
        """
        Register a job line.

        Args:
            line: JobLine definition. None is ignored.

        Raises:
            DuplicateNameError: If a job line with the same name exists
        """
        if line is None:
            return
        if line.name in self._job_lines:
            raise DuplicateNameError("job line", line.name)
        self._job_lines[line.name] = line
        logger.debug(f"Registered job line {line.name}")

    def get_job(self, name: str) -> Optional[Job]:
        return self._jobs.get(name)

    def get_job_line(self, name: str) -> Optional[JobLine]:
        return self._job_lines.get(name)

    def jobs(self) -> List[Job]:
        """Registered jobs in insertion order."""
        return list(self._jobs.values())

    def job_lines(self) -> List[JobLine]:
        """Registered job lines in insertion order."""
        return list(self._job_lines.values())


def register_job(registry: Registry, job: Optional[Job]) -> None:
    """Register a job on the given registry."""
    registry.register_job(job)


def register_job_line(registry: Registry, line: Optional[JobLine]) -> None:
    """Register a job line on the given registry."""
    registry.register_job_line(line)

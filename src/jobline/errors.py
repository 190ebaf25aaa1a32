"""
Error classes for jobline.

Structural errors (unknown line or job, missing arguments, duplicate
registration) are raised as JoblineError subclasses. The engine never exits
the process; the embedding application decides how to react.

Job-level failures are not errors at this level: they are captured and
recorded as journal status "exception".
"""

from typing import Iterable


class JoblineError(Exception):
    """Base exception for jobline."""
    pass


class DuplicateNameError(JoblineError):
    """Raised when registering a job or job line whose name is taken."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"{kind} '{name}' already registered")


class JobLineNotFoundError(JoblineError):
    """Raised when a job line name is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Job line not found: {name}")


class MissingArgumentsError(JoblineError):
    """Raised when required external arguments are absent."""

    def __init__(self, line: str, missing: Iterable[str]):
        self.line = line
        self.missing = list(missing)
        super().__init__(
            f"Job line '{line}' missing arguments: {', '.join(self.missing)}"
        )


class JobNotFoundError(JoblineError):
    """Raised when a step references an unregistered job."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Job not found: {name}")


class CompileError(JoblineError):
    """Raised when a job line definition cannot be compiled."""
    pass


class ConfigError(JoblineError):
    """Raised when the configuration file is invalid."""
    pass


class LoaderError(JoblineError):
    """Raised when a jobs module cannot be loaded."""
    pass

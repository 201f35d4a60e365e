"""Invocation-scoped state and outcome signals for one lazy-crc run."""

from dataclasses import dataclass, field
from enum import Enum

from .config import ChecksumConfig
from .store import ResultStore


class Outcome(Enum):
    """Result of a run, independent of how it is rendered to the user."""
    SUCCESS_WITH_MANIFEST = "success-with-manifest"
    SUCCESS_NO_MANIFEST = "success-no-manifest"
    SUCCESS_NO_ERRORS = "success-no-errors"
    FAILURE_BAD_FILES = "failure-bad-files-found"
    FAILURE_PATH_NOT_FOUND = "failure-path-not-found"
    FAILURE_UNSUPPORTED_INPUT = "failure-unsupported-input-kind"
    FAILURE_MISSING_ARGUMENT = "failure-missing-argument"
    FAILURE_MANIFEST_UNREADABLE = "failure-manifest-unreadable"

    @property
    def succeeded(self) -> bool:
        return self.name.startswith("SUCCESS")

    @property
    def exit_code(self) -> int:
        """Process exit code: 0 success, 1 bad files, 2 fatal input error."""
        if self.succeeded:
            return 0
        if self is Outcome.FAILURE_BAD_FILES:
            return 1
        return 2


@dataclass
class RunContext:
    """State shared by the components of a single run.

    Created empty at the start of a run and discarded afterwards; nothing
    here outlives the files the run writes.
    """
    config: ChecksumConfig = field(default_factory=ChecksumConfig)
    store: ResultStore = field(default_factory=ResultStore)

    @property
    def verify(self) -> bool:
        return self.config.verify

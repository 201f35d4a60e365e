"""Top-level dispatch between build and verify mode."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .builder import BuildResult, ManifestBuilder, manifest_path_for
from .context import Outcome, RunContext
from .errors import (
    InputNotFoundError, ManifestDecodeError, MissingArgumentError,
    SFVError, UnsupportedInputKindError
)
from .verifier import ManifestVerifier, VerificationResult

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Outcome of a run plus whatever the selected mode produced."""
    outcome: Outcome
    build: Optional[BuildResult] = None
    verification: Optional[VerificationResult] = None
    error: Optional[SFVError] = None


def resolve_target(context: RunContext, target_override: Optional[Path] = None) -> Path:
    """Pick the input path: command line first, then config.

    Raises:
        MissingArgumentError: If neither supplies a path
    """
    if target_override is not None:
        return target_override
    if context.config.target_path:
        return Path(context.config.target_path)
    raise MissingArgumentError("No file or directory specified.")


def run_checksums(context: RunContext, target_override: Optional[Path] = None) -> RunResult:
    """Build a manifest for the target, or verify one in verify mode.

    In verify mode a directory stands for its default manifest
    (``D/D.sfv``). Top-level input errors end the run before any output
    is produced and are returned as failure outcomes, not raised.
    """
    try:
        target = resolve_target(context, target_override)
        logger.debug(f"Run: {{'target': {str(target)!r}, 'verify': {context.verify}}}")

        if context.verify:
            manifest_path = target
            if target.is_dir():
                manifest_path = manifest_path_for(target.absolute(), context.config.manifest_suffix)
            verification = ManifestVerifier(context).verify(manifest_path)
            outcome = Outcome.SUCCESS_NO_ERRORS if verification.succeeded else Outcome.FAILURE_BAD_FILES
            return RunResult(outcome=outcome, verification=verification)

        build = ManifestBuilder(context).build(target)
        outcome = Outcome.SUCCESS_WITH_MANIFEST if build.manifest_path else Outcome.SUCCESS_NO_MANIFEST
        return RunResult(outcome=outcome, build=build)

    except MissingArgumentError as e:
        return RunResult(outcome=Outcome.FAILURE_MISSING_ARGUMENT, error=e)
    except InputNotFoundError as e:
        return RunResult(outcome=Outcome.FAILURE_PATH_NOT_FOUND, error=e)
    except UnsupportedInputKindError as e:
        return RunResult(outcome=Outcome.FAILURE_UNSUPPORTED_INPUT, error=e)
    except ManifestDecodeError as e:
        return RunResult(outcome=Outcome.FAILURE_MANIFEST_UNREADABLE, error=e)

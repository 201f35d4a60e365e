"""CLI command for building and verifying SFV manifests."""

import logging
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from lazy_crc import __version__
from lazy_crc.common import ConfigLoader, ConfigurationError, setup_logging
from lazy_crc.common.config_utils import expand_path_variables

from .config import ChecksumConfig, LazyCRCConfig
from .context import Outcome, RunContext
from .runner import RunResult, run_checksums

# Application name derived from package name
_package = __package__ or "lazy_crc.sfv"
APP_NAME = _package.split('.')[0].replace('_', '-')

USAGE_HINT = "usage: lazy-crc [--verify] <file|directory|manifest>"


def render_result(logger: logging.Logger, result: RunResult) -> None:
    """Log the outcome of a run for the user.

    Args:
        logger: Logger instance
        result: Result returned by run_checksums
    """
    outcome = result.outcome

    if result.error is not None:
        logger.error(result.error.message)
        if outcome is Outcome.FAILURE_MISSING_ARGUMENT:
            logger.error(USAGE_HINT)
        return

    if result.build is not None:
        build = result.build
        for failed in build.failed_files:
            logger.warning(f"Skipped (not in manifest): {failed}")
        if outcome is Outcome.SUCCESS_WITH_MANIFEST:
            logger.info(f"SFV file created '{build.manifest_path}' ({build.entries_written} entries)")
        else:
            logger.info(f"Nothing to write, no SFV file created for '{build.target}'")
        return

    if result.verification is not None:
        verification = result.verification
        if outcome is Outcome.SUCCESS_NO_ERRORS:
            logger.info(f"All {verification.good_count} files OK")
        else:
            logger.error(
                f"{len(verification.bad_files)} bad file(s), {verification.good_count} OK; "
                f"report written to '{verification.report_path}'"
            )


def checksum_command(
    config: LazyCRCConfig,
    target_override: Optional[Path] = None,
    verify_override: Optional[bool] = None,
    chunk_size_override: Optional[int] = None,
    worker_threads_override: Optional[int] = None
) -> int:
    """Build or verify an SFV manifest.

    Args:
        config: Configuration object
        target_override: Optional override for the target path
        verify_override: Optional override for verify mode
        chunk_size_override: Optional override for the read chunk size
        worker_threads_override: Optional override for worker threads

    Returns:
        Exit code (0 for success)
    """
    logger_name = __package__ or __name__
    logger = logging.getLogger(logger_name)

    updates = {}
    if verify_override is not None:
        updates["verify"] = verify_override
    if chunk_size_override is not None:
        updates["chunk_size"] = chunk_size_override
    if worker_threads_override is not None:
        updates["worker_threads"] = worker_threads_override
    try:
        checksum_config = ChecksumConfig.model_validate({**config.checksum.model_dump(), **updates})
    except ValidationError as e:
        logger.error(f"Invalid option: {e}")
        return 2

    context = RunContext(config=checksum_config)

    try:
        result = run_checksums(context, target_override)
    except Exception as e:
        logger.exception(f"Run failed: {e}")
        return 1

    render_result(logger, result)
    return result.outcome.exit_code


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the lazy-crc command."""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Compute CRC32 checksums into an SFV manifest, or verify files against one"
    )
    parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        help="File or directory to checksum, or manifest to verify (overrides config)"
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Verify files against an existing manifest instead of creating one"
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        required=False,
        help="Bytes read per iteration (overrides config)"
    )
    parser.add_argument(
        "--worker-threads",
        type=int,
        required=False,
        help="Checksum worker threads, 0 for auto (overrides config)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Log level (overrides config)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (defaults.toml)"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"LazyCRC {__version__}"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the lazy-crc command."""
    args = build_parser().parse_args(argv)

    loader = ConfigLoader(
        app_name=APP_NAME,
        config_class=LazyCRCConfig
    )

    try:
        config = loader.load(defaults_path=args.config)
    except ConfigurationError as e:
        setup_logging(level="ERROR")
        logging.getLogger(APP_NAME).error(e.message)
        return 2

    log_file = Path(expand_path_variables(config.logging.file)) if config.logging.file else None
    setup_logging(
        level=args.log_level or config.logging.level,
        format=config.logging.format,
        log_file=log_file,
    )

    return checksum_command(
        config=config,
        target_override=args.path,
        verify_override=True if args.verify else None,
        chunk_size_override=args.chunk_size,
        worker_threads_override=args.worker_threads
    )


if __name__ == "__main__":
    sys.exit(main())

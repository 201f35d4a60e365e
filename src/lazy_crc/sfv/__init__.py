"""SFV manifest building and verification."""

from .builder import BuildResult, ManifestBuilder, manifest_path_for
from .config import ChecksumConfig, LazyCRCConfig
from .context import Outcome, RunContext
from .manifest import parse_manifest, read_manifest, write_manifest
from .runner import RunResult, run_checksums
from .store import BadFileReason, BadFileRecord, FileEntry, ResultStore
from .verifier import ManifestVerifier, VerificationResult, report_path_for

__all__ = [
    'BuildResult',
    'ManifestBuilder',
    'manifest_path_for',
    'ChecksumConfig',
    'LazyCRCConfig',
    'Outcome',
    'RunContext',
    'parse_manifest',
    'read_manifest',
    'write_manifest',
    'RunResult',
    'run_checksums',
    'BadFileReason',
    'BadFileRecord',
    'FileEntry',
    'ResultStore',
    'ManifestVerifier',
    'VerificationResult',
    'report_path_for',
]

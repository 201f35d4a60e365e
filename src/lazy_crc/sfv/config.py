"""Configuration models for SFV building and verification."""

from pydantic import BaseModel, Field, ConfigDict, field_validator
from lazy_crc.common import LoggingConfig, CRC32_CHUNK_SIZE


class ChecksumConfig(BaseModel):
    """Checksum run configuration."""

    model_config = ConfigDict(extra='forbid')

    target_path: str = Field(
        default="",
        description="File or directory to checksum, or manifest to verify"
    )
    verify: bool = Field(
        default=False,
        description="Verify an existing manifest instead of building one"
    )
    chunk_size: int = Field(
        default=CRC32_CHUNK_SIZE,
        ge=1,
        description="Bytes read per iteration while computing CRC32"
    )
    worker_threads: int = Field(
        default=1,
        ge=0,
        description="Checksum worker threads when building (1: sequential, 0: 2x CPU cores)"
    )
    queue_maxsize: int = Field(
        default=1000,
        ge=1,
        description="Maximum size of the work queue feeding worker threads"
    )
    manifest_suffix: str = Field(
        default=".sfv",
        description="Suffix appended to the target name to form the manifest file name"
    )
    report_suffix: str = Field(
        default=".bad.txt",
        description="Suffix appended to the manifest file name to form the bad-file report name"
    )

    @field_validator('manifest_suffix')
    @classmethod
    def validate_manifest_suffix(cls, v: str) -> str:
        """Manifest suffix must look like a file extension."""
        if not v.startswith('.') or len(v) < 2 or '/' in v or '\\' in v:
            raise ValueError(f"manifest_suffix must be a file extension like '.sfv', got {v!r}")
        return v

    @field_validator('report_suffix')
    @classmethod
    def validate_report_suffix(cls, v: str) -> str:
        """Report suffix must be non-empty and free of path separators."""
        if not v or '/' in v or '\\' in v:
            raise ValueError(f"report_suffix must be a non-empty file name suffix, got {v!r}")
        return v


class LazyCRCConfig(BaseModel):
    """Root configuration for lazy-crc."""

    model_config = ConfigDict(extra='forbid')

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    checksum: ChecksumConfig = Field(default_factory=ChecksumConfig)

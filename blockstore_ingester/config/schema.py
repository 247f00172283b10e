"""
Configuration Schema and Models

Defines Pydantic models for the ingester configuration, providing default
values, validation and type checking. Every model forbids unknown keys, so a
typo in the YAML file is reported instead of silently ignored.

Author: Blockstore Ingester Project
License: MIT
"""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pathlib import Path


class LogLevel(str, Enum):
    """Logging level options."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""
    TEXT = "text"
    JSON = "json"


class StorageBackend(str, Enum):
    """Object storage backends for blocks."""
    FILESYSTEM = "filesystem"
    S3 = "s3"
    GCS = "gcs"


class StrictModel(BaseModel):
    """Base model rejecting unknown fields."""

    model_config = ConfigDict(
        extra="forbid",
        use_enum_values=True,
        validate_assignment=True,
        validate_default=True,
    )


class ServerConfig(StrictModel):
    """HTTP/gRPC server configuration."""

    http_listen_address: str = Field(
        default="0.0.0.0",
        description="HTTP server listen address"
    )
    http_listen_port: int = Field(
        default=8080,
        description="HTTP server listen port"
    )
    grpc_listen_port: int = Field(
        default=9095,
        description="gRPC server listen port"
    )
    metrics_port: int = Field(
        default=0,
        description="Port to expose Prometheus metrics on (0 disables)"
    )

    @field_validator("http_listen_port", "grpc_listen_port", "metrics_port")
    @classmethod
    def validate_port(cls, v):
        """Ensure ports are in range."""
        if not 0 <= v <= 65535:
            raise ValueError(f"Port out of range: {v}")
        return v


class LogConfig(StrictModel):
    """Logging configuration."""

    level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Only log messages with the given severity or above"
    )
    format: LogFormat = Field(
        default=LogFormat.TEXT,
        description="Output log messages in the given format (text or json)"
    )
    file: Optional[str] = Field(
        default=None,
        description="Also write logs to this file"
    )
    rotation_size: int = Field(
        default=10485760,  # 10MB
        description="Log file size before rotation (bytes)"
    )
    retention_count: int = Field(
        default=5,
        description="Number of rotated log files to keep"
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper()
        return v


class StorageConfig(StrictModel):
    """Block object storage configuration."""

    backend: StorageBackend = Field(
        default=StorageBackend.FILESYSTEM,
        description="Backend storage to use (filesystem, s3 or gcs)"
    )
    directory: str = Field(
        default="/data/blocks",
        description="Local directory used by the filesystem backend"
    )
    bucket_name: Optional[str] = Field(
        default=None,
        description="Bucket name for s3 and gcs backends"
    )
    endpoint: Optional[str] = Field(
        default=None,
        description="Custom endpoint for the s3 backend"
    )

    @field_validator("directory")
    @classmethod
    def validate_directory(cls, v):
        """Ensure directory is absolute."""
        if not Path(v).is_absolute():
            raise ValueError(f"Storage directory must be absolute: {v}")
        return v


class IngesterConfig(StrictModel):
    """Ingester lifecycle configuration."""

    replication_factor: int = Field(
        default=3,
        description="Number of ingesters to write series to"
    )
    heartbeat_period: int = Field(
        default=5,
        description="Period at which to heartbeat to the ring (seconds)"
    )
    join_after: int = Field(
        default=0,
        description="Period to wait before joining the ring (seconds)"
    )
    final_sleep: int = Field(
        default=30,
        description="Duration to sleep before exiting, so metrics get scraped (seconds)"
    )

    @field_validator("replication_factor")
    @classmethod
    def validate_replication_factor(cls, v):
        """Ensure at least one replica."""
        if v < 1:
            raise ValueError(f"replication_factor must be at least 1: {v}")
        return v


class BlocksStorageConfig(StrictModel):
    """TSDB block configuration."""

    tsdb_dir: str = Field(
        default="/data/tsdb",
        description="Local directory to store TSDBs in the ingesters"
    )
    block_ranges: List[int] = Field(
        default=[7200],
        description="TSDB block ranges (seconds)"
    )
    retention_period: int = Field(
        default=21600,
        description="TSDB blocks retention in the ingester (seconds)"
    )
    ship_interval: int = Field(
        default=60,
        description="How frequently blocks are shipped to storage (seconds, 0 disables)"
    )


class Config(StrictModel):
    """
    Root configuration model for the block storage ingester.

    Defaults defined here are the values in effect when no config file is
    given. The YAML file overlays them, and explicit command-line flags
    overlay the file.
    """

    server: ServerConfig = Field(default_factory=ServerConfig)
    log: LogConfig = Field(default_factory=LogConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    ingester: IngesterConfig = Field(default_factory=IngesterConfig)
    blocks_storage: BlocksStorageConfig = Field(default_factory=BlocksStorageConfig)

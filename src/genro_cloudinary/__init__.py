# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""genro-cloudinary: Cloudinary filesystem adapter for the Genropy framework.

This package lets path-oriented file storage code (write, read, rename,
delete, list, stat) run against a Cloudinary cloud, which has no real
directories and splits assets into image, video and raw resources.

Main components:
    CloudinaryConfig: Configuration dataclass
    CloudinaryVolume: Configured volume (adapter factory, root URL, CLI)
    CloudinaryAdapter: Filesystem operations on top of ResourceClient
    ResourceClient: Cloudinary Upload/Admin API client
    cloudinary_config_from_env: Factory to build config from environment

Usage:
    from genro_cloudinary import CloudinaryConfig, CloudinaryVolume

    config = CloudinaryConfig(cloud_name="demo", api_key="...", api_secret="...")
    volume = CloudinaryVolume(config=config)
    volume.adapter.write("docs/readme.txt", b"hello")
"""

__version__ = "0.1.0"

from .adapter import CloudinaryAdapter
from .client import ResourceClient
from .config import CloudinaryConfig, cloudinary_config_from_env
from .exceptions import (
    CloudinaryFsError,
    ConfigurationError,
    NotFoundError,
    RemoteApiError,
    UnsupportedOperationError,
)
from .paths import ResourceKind
from .records import UniformMetadata
from .volume import CloudinaryVolume

__all__ = [
    "CloudinaryAdapter",
    "CloudinaryConfig",
    "CloudinaryFsError",
    "CloudinaryVolume",
    "ConfigurationError",
    "NotFoundError",
    "RemoteApiError",
    "ResourceClient",
    "ResourceKind",
    "UniformMetadata",
    "UnsupportedOperationError",
    "cloudinary_config_from_env",
    "main",
]


def main() -> None:
    """CLI entry point. Creates a CloudinaryVolume from the environment and runs the CLI."""
    volume = CloudinaryVolume(config=cloudinary_config_from_env())
    volume.cli()

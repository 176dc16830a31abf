# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Shared pytest fixtures for genro-cloudinary tests."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from genro_cloudinary.adapter import CloudinaryAdapter
from genro_cloudinary.client import ResourceClient
from genro_cloudinary.config import CloudinaryConfig


def _resource(public_id: str, resource_type: str = "image", fmt: str | None = "jpg", **extra: Any) -> dict:
    """Build a Cloudinary resource payload."""
    data = {
        "public_id": public_id,
        "resource_type": resource_type,
        "bytes": extra.pop("bytes", 1024),
        "created_at": extra.pop("created_at", "2024-01-01T00:00:00Z"),
        "secure_url": extra.pop(
            "secure_url",
            f"https://res.cloudinary.com/demo/{resource_type}/upload/{public_id}",
        ),
    }
    if fmt is not None:
        data["format"] = fmt
    data.update(extra)
    return data


@pytest.fixture
def make_resource():
    """Factory for Cloudinary resource payloads."""
    return _resource


@pytest.fixture
def config():
    """Fully populated configuration."""
    return CloudinaryConfig(cloud_name="demo", api_key="key", api_secret="secret")


@pytest.fixture
def mock_client(config):
    """ResourceClient double."""
    client = MagicMock(spec=ResourceClient)
    client.config = config
    return client


@pytest.fixture
def adapter(mock_client):
    """Adapter without path prefix over the mock client."""
    return CloudinaryAdapter(mock_client)


# Marker registration
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")

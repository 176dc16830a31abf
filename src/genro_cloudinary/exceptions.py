# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exception hierarchy for genro-cloudinary.

Hierarchy:
    CloudinaryFsError
        ├── ConfigurationError (also ValueError)
        ├── RemoteApiError
        │       └── NotFoundError
        └── UnsupportedOperationError (also NotImplementedError)

Remote failures are raised by ResourceClient and propagate through the
adapter untouched. Boolean operations (rename, copy, delete) report a
post-condition mismatch as False, never as an exception.
"""

from __future__ import annotations


class CloudinaryFsError(Exception):
    """Base class for all genro-cloudinary errors."""


class ConfigurationError(CloudinaryFsError, ValueError):
    """Missing or invalid volume configuration."""


class RemoteApiError(CloudinaryFsError):
    """Transport or backend-reported failure of a remote call.

    Attributes:
        status_code: HTTP status, or None when the request never got a response.
        method: HTTP method of the failed request.
        url: Target URL of the failed request.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        method: str | None = None,
        url: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.method = method
        self.url = url


class NotFoundError(RemoteApiError):
    """The remote store has no resource with the requested identifier."""


class UnsupportedOperationError(CloudinaryFsError, NotImplementedError):
    """Operation the remote store cannot honour (e.g. visibility)."""


__all__ = [
    "CloudinaryFsError",
    "ConfigurationError",
    "NotFoundError",
    "RemoteApiError",
    "UnsupportedOperationError",
]

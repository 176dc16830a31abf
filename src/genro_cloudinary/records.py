# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Remote resource records and their normalization into uniform metadata.

Cloudinary answers uploads, renames and Admin API lookups with the same
resource shape (public_id, resource_type, bytes, format, created_at,
secure_url, ...). RemoteResourceRecord captures it read-only;
normalize() turns it into UniformMetadata, the shape the adapter hands
back to callers.

Example:
    >>> record = RemoteResourceRecord.from_dict({
    ...     "public_id": "img/cat", "resource_type": "image",
    ...     "format": "jpg", "bytes": 1024,
    ...     "created_at": "2024-01-01T00:00:00Z",
    ... })
    >>> meta = normalize(record)
    >>> meta.path, meta.mimetype, meta.timestamp
    ('img/cat.jpg', 'image/jpeg', 1704067200)
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any

from .paths import ResourceKind, display_path, extension

FALLBACK_MIMETYPE = "application/octet-stream"

# Stored format -> MIME subtype corrections
_SUBTYPE_FIXES = {"jpg": "jpeg"}


@dataclass(frozen=True)
class RemoteResourceRecord:
    """Resource as returned by the remote store."""

    public_id: str
    resource_type: str = ResourceKind.IMAGE.value
    bytes: int = 0
    format: str | None = None
    created_at: str | None = None
    secure_url: str | None = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RemoteResourceRecord:
        """Create record from API response dict."""
        known = {"public_id", "resource_type", "bytes", "format", "created_at", "secure_url"}
        extra = {k: v for k, v in data.items() if k not in known}
        return cls(
            public_id=data["public_id"],
            resource_type=data.get("resource_type", ResourceKind.IMAGE.value),
            bytes=int(data.get("bytes") or 0),
            format=data.get("format") or None,
            created_at=data.get("created_at"),
            secure_url=data.get("secure_url"),
            extra=extra,
        )


@dataclass(frozen=True)
class ResourcePage:
    """One page of a prefix listing."""

    resources: list[RemoteResourceRecord] = field(default_factory=list)
    next_cursor: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ResourcePage:
        """Create page from Admin API listing response."""
        return cls(
            resources=[RemoteResourceRecord.from_dict(r) for r in data.get("resources", [])],
            next_cursor=data.get("next_cursor") or None,
        )


@dataclass(frozen=True)
class UniformMetadata:
    """Adapter-level file metadata.

    Attributes:
        path: Display path (identifier with the stored format re-attached).
        identifier: Remote public_id the path was built from.
        size: Size in bytes.
        mimetype: "<kind>/<format>" with known subtype corrections.
        timestamp: Creation time as Unix seconds, None if unknown.
        kind: Resource kind reported by the remote store.
        format: Stored format, None if the remote gave none.
        url: Secure retrieval URL.
        type: Always "file": the store has no directory objects.
    """

    path: str
    identifier: str
    size: int
    mimetype: str
    timestamp: int | None
    kind: ResourceKind
    format: str | None = None
    url: str | None = None
    type: str = "file"

    def to_dict(self) -> dict[str, Any]:
        """Plain dict view, suitable for JSON output."""
        data = asdict(self)
        data["kind"] = self.kind.value
        return data


def size_of(record: RemoteResourceRecord) -> int:
    """Size in bytes, passed through from the record."""
    return record.bytes


def mimetype_of(record: RemoteResourceRecord) -> str:
    """Compose a MIME type from resource kind and stored format."""
    fmt = record.format or extension(record.public_id)
    if not fmt:
        return FALLBACK_MIMETYPE
    fmt = fmt.lower()
    return f"{record.resource_type}/{_SUBTYPE_FIXES.get(fmt, fmt)}"


def timestamp_of(record: RemoteResourceRecord) -> int | None:
    """Parse created_at (ISO-8601) into Unix seconds."""
    if not record.created_at:
        return None
    parsed = datetime.fromisoformat(record.created_at.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


def normalize(record: RemoteResourceRecord) -> UniformMetadata:
    """Convert a remote record into UniformMetadata."""
    kind = ResourceKind(record.resource_type)
    return UniformMetadata(
        path=display_path(record.public_id, kind, record.format),
        identifier=record.public_id,
        size=size_of(record),
        mimetype=mimetype_of(record),
        timestamp=timestamp_of(record),
        kind=kind,
        format=record.format,
        url=record.secure_url,
    )


__all__ = [
    "FALLBACK_MIMETYPE",
    "RemoteResourceRecord",
    "ResourcePage",
    "UniformMetadata",
    "mimetype_of",
    "normalize",
    "size_of",
    "timestamp_of",
]

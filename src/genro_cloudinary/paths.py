# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Path translation between filesystem paths and Cloudinary public ids.

Cloudinary addresses every asset by (public_id, resource_type). For image
and video assets the public_id carries no extension: the format lives in a
separate field. Raw assets keep the extension inside the public_id. All
functions here are pure and total over non-empty strings.

Example:
    >>> classify("img/photo.JPG")
    <ResourceKind.IMAGE: 'image'>
    >>> to_identifier("img/photo.jpg")
    'img/photo'
    >>> to_identifier("docs/archive.zip")
    'docs/archive.zip'
"""

from __future__ import annotations

import posixpath
from enum import Enum


class ResourceKind(str, Enum):
    """Cloudinary resource_type values."""

    IMAGE = "image"
    VIDEO = "video"
    RAW = "raw"


IMAGE_EXTENSIONS = frozenset(
    {
        "ai", "arw", "bmp", "cr2", "djvu", "eps", "eps3", "ept", "fbx", "flif",
        "gif", "gltf", "hdp", "heic", "heif", "ico", "indd", "jp2", "jpe", "jpeg",
        "jpg", "jxr", "pdf", "png", "ps", "psd", "svg", "tga", "tif", "tiff",
        "wdp", "webp",
    }
)

VIDEO_EXTENSIONS = frozenset(
    {
        "3g2", "3gp", "avi", "flv", "m2ts", "m3u8", "mkv", "mov", "mp4", "mpd",
        "mpeg", "mts", "mxf", "ogv", "ts", "webm", "wmv",
    }
)


def _split(path: str) -> tuple[str, str, str]:
    """Split path into (dirname, filename, extension), pathinfo style."""
    dirname, basename = posixpath.split(path)
    stem, ext = posixpath.splitext(basename)
    return dirname, stem, ext[1:]


def _join(dirname: str, name: str) -> str:
    if dirname in ("", "."):
        return name
    return f"{dirname}/{name}"


def extension(path: str) -> str:
    """Return the final extension of path without the dot ('' if none)."""
    return _split(path)[2]


def filename(path: str) -> str:
    """Return the last path component without its final extension."""
    return _split(path)[1]


def classify(path: str) -> ResourceKind:
    """Infer the resource kind from the (case-insensitive) file extension."""
    ext = extension(path).lower()
    if ext in IMAGE_EXTENSIONS:
        return ResourceKind.IMAGE
    if ext in VIDEO_EXTENSIONS:
        return ResourceKind.VIDEO
    return ResourceKind.RAW


def strip_extension(path: str) -> str:
    """Return dirname/filename of path with the final extension removed.

    Applied regardless of resource kind. A missing or "." directory yields a
    bare filename with no leading separator.
    """
    dirname, stem, _ = _split(path)
    return _join(dirname, stem)


def to_identifier(path: str) -> str:
    """Derive the remote public_id for path.

    Image and video paths lose their final extension; raw paths are
    returned unchanged.
    """
    if classify(path) is ResourceKind.RAW:
        return path
    return strip_extension(path)


def display_path(identifier: str, kind: ResourceKind | str, fmt: str | None) -> str:
    """Rebuild a filesystem path from a stored identifier.

    Image and video identifiers get their stored format re-attached; raw
    identifiers already carry their extension.
    """
    if ResourceKind(kind) is ResourceKind.RAW or not fmt:
        return identifier
    return f"{identifier}.{fmt}"


__all__ = [
    "IMAGE_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    "ResourceKind",
    "classify",
    "display_path",
    "extension",
    "filename",
    "strip_extension",
    "to_identifier",
]

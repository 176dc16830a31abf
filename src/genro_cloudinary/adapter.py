# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Filesystem adapter over a Cloudinary cloud.

CloudinaryAdapter exposes the usual filesystem operation set (write, read,
update, rename, copy, delete, list, stat) addressed by forward-slash paths,
and maps each call onto ResourceClient:

    path --(paths)--> (public_id, kind) --(client)--> record --(records)--> UniformMetadata

The adapter is stateless: every call is an independent request/response
cycle against the remote store, which is the only source of truth.

Directory semantics:
    Cloudinary has no directory objects. create_dir() is a no-op echo,
    delete_dir() deletes by identifier prefix, list_contents() filters by
    prefix (recursive by nature).

Usage:
    adapter = CloudinaryAdapter(ResourceClient(config), path_prefix="site")
    adapter.write("img/cat.jpg", data)
    for meta in adapter.list_contents("img/"):
        print(meta.path, meta.size, meta.mimetype)
"""

from __future__ import annotations

import logging
import posixpath
import tempfile
from collections.abc import Iterable, Iterator
from dataclasses import replace
from typing import IO, Any

from .client import ResourceClient
from .exceptions import RemoteApiError, UnsupportedOperationError
from .paths import ResourceKind, classify, filename, strip_extension, to_identifier
from .records import RemoteResourceRecord, UniformMetadata, normalize

logger = logging.getLogger(__name__)

# In-memory buffer size before write() spills to a temporary file
SPOOL_MAX_SIZE = 8 * 1024 * 1024

# Admin API default resource_type; other kinds are listed on request
DEFAULT_LIST_KINDS = (ResourceKind.IMAGE,)


class CloudinaryAdapter:
    """Path-oriented filesystem facade over ResourceClient.

    Attributes:
        client: ResourceClient performing the remote calls.
        path_prefix: Base path prepended to every logical path ("" for none).
    """

    def __init__(self, client: ResourceClient, path_prefix: str = ""):
        """Initialize adapter.

        Args:
            client: Remote client bound to one cloud.
            path_prefix: Base path applied before translation and removed
                from reported paths.
        """
        self.client = client
        self.path_prefix = path_prefix.strip("/")

    # -------------------------------------------------------------------------
    # Path prefix
    # -------------------------------------------------------------------------

    def _apply_prefix(self, path: str) -> str:
        path = path.lstrip("/")
        if not self.path_prefix:
            return path
        return f"{self.path_prefix}/{path}" if path else f"{self.path_prefix}/"

    def _remove_prefix(self, path: str) -> str:
        if self.path_prefix and path.startswith(f"{self.path_prefix}/"):
            return path[len(self.path_prefix) + 1 :]
        return path

    def _normalize(self, record: RemoteResourceRecord) -> UniformMetadata:
        meta = normalize(record)
        return replace(meta, path=self._remove_prefix(meta.path))

    # -------------------------------------------------------------------------
    # Visibility (not supported: every resource is public-read)
    # -------------------------------------------------------------------------

    def supports_visibility(self) -> bool:
        """Cloudinary has no private/public distinction."""
        return False

    def get_visibility(self, path: str) -> str:
        raise UnsupportedOperationError("Cloudinary does not support visibility")

    def set_visibility(self, path: str, visibility: str) -> bool:
        raise UnsupportedOperationError("Cloudinary does not support visibility")

    # -------------------------------------------------------------------------
    # Write
    # -------------------------------------------------------------------------

    def write(
        self, path: str, contents: bytes, options: dict[str, Any] | None = None
    ) -> UniformMetadata:
        """Write bytes to path.

        Contents are staged in a spooled temporary file, released on every
        exit path, then sent through write_stream().

        Args:
            path: Target path.
            contents: File content.
            options: Write options; "public_id" overrides the derived identifier.

        Returns:
            Metadata of the stored resource.
        """
        with tempfile.SpooledTemporaryFile(max_size=SPOOL_MAX_SIZE) as stream:
            stream.write(contents)
            stream.seek(0)
            return self.write_stream(path, stream, options)

    def write_stream(
        self, path: str, stream: IO[bytes], options: dict[str, Any] | None = None
    ) -> UniformMetadata:
        """Write a binary stream to path (always a full overwrite).

        Raises:
            RemoteApiError: Upload failed or returned no resource.
        """
        options = options or {}
        public_id = options.get("public_id") or to_identifier(self._apply_prefix(path))
        record = self.client.upload(stream, public_id, filename=posixpath.basename(path))
        if record is None:
            raise RemoteApiError(f"Upload of {path} returned no resource")
        return self._normalize(record)

    def update(
        self, path: str, contents: bytes, options: dict[str, Any] | None = None
    ) -> UniformMetadata:
        """Same as write(): Cloudinary has no distinct update."""
        return self.write(path, contents, options)

    def update_stream(
        self, path: str, stream: IO[bytes], options: dict[str, Any] | None = None
    ) -> UniformMetadata:
        """Same as write_stream()."""
        return self.write_stream(path, stream, options)

    # -------------------------------------------------------------------------
    # Rename / copy / delete
    # -------------------------------------------------------------------------

    def rename(self, path: str, newpath: str) -> bool:
        """Rename path to newpath.

        Both sides drop their final extension whatever the kind; the kind
        sent to the remote is the one of the source path.

        Returns:
            True iff the last component of the stored identifier equals the
            requested filename. A collision suffix such as "b (1)" yields False.
        """
        record = self.client.rename(
            strip_extension(self._apply_prefix(path)),
            strip_extension(self._apply_prefix(newpath)),
            classify(path),
        )
        if record is None:
            return False
        return posixpath.basename(record.public_id) == filename(newpath)

    def copy(self, path: str, newpath: str) -> bool:
        """Copy path to newpath by uploading from the source delivery URL.

        Returns:
            True iff the remote stored the copy under the destination identifier.
        """
        url = self.get_url(path)
        if not url:
            logger.warning("Copy %s -> %s: source URL unavailable", path, newpath)
            return False
        destination = to_identifier(self._apply_prefix(newpath))
        record = self.client.upload(url, destination)
        return record is not None and record.public_id == destination

    def delete(self, path: str) -> bool:
        """Delete path. True iff the remote answers "ok"."""
        result = self.client.destroy(to_identifier(self._apply_prefix(path)), classify(path))
        return result == "ok"

    def delete_dir(self, dirname: str) -> bool:
        """Delete every resource under dirname, of every kind.

        Returns:
            Always True once the calls return; matching nothing is not an error.
        """
        prefix = self._apply_prefix(dirname)
        for kind in ResourceKind:
            self.client.delete_by_prefix(prefix, kind)
        return True

    def create_dir(self, dirname: str, options: dict[str, Any] | None = None) -> dict[str, str]:
        """Directories are implicit in identifiers: nothing to create."""
        return {"path": dirname}

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    def get_url(self, path: str) -> str:
        """Secure delivery URL of path, or "" if the lookup fails."""
        try:
            return self._get_resource(path).secure_url or ""
        except RemoteApiError as exc:
            logger.warning("URL lookup for %s failed: %s", path, exc)
            return ""

    def has(self, path: str) -> bool:
        """True iff the delivery URL of path answers 200.

        Not-found and transport failures both yield False; the log keeps
        them apart.
        """
        url = self.get_url(path)
        if not url:
            return False
        try:
            return self.client.url_exists(url)
        except RemoteApiError as exc:
            logger.warning("Existence check for %s failed: %s", path, exc)
            return False

    def read(self, path: str) -> bytes | None:
        """Content of path, or None when its URL cannot be resolved."""
        url = self.get_url(path)
        if not url:
            return None
        return self.client.fetch(url)

    def read_stream(self, path: str) -> Iterator[bytes] | None:
        """Chunk iterator over the content of path, or None when unresolvable."""
        url = self.get_url(path)
        if not url:
            return None
        return self.client.iter_url(url)

    # -------------------------------------------------------------------------
    # Listing and metadata
    # -------------------------------------------------------------------------

    def list_contents(
        self,
        directory: str = "",
        recursive: bool = False,
        kinds: Iterable[ResourceKind] | None = None,
    ) -> list[UniformMetadata]:
        """List every resource whose identifier starts with directory.

        Pages are fetched one after the other following the cursor of the
        previous page; any failing page aborts the listing. Entries keep
        arrival order. recursive is accepted for interface compatibility:
        prefix matching already covers nested paths.

        Args:
            directory: Path prefix to list.
            recursive: Ignored.
            kinds: Resource kinds to list, in order (default: image only).
                Each kind runs its own cursor loop.
        """
        prefix = self._apply_prefix(directory)
        records: list[RemoteResourceRecord] = []
        for kind in kinds or DEFAULT_LIST_KINDS:
            cursor: str | None = None
            while True:
                page = self.client.list_page(prefix, kind, cursor)
                records.extend(page.resources)
                cursor = page.next_cursor
                if not cursor:
                    break
        return [self._normalize(record) for record in records]

    def _get_resource(self, path: str) -> RemoteResourceRecord:
        return self.client.get_resource(to_identifier(self._apply_prefix(path)), classify(path))

    def get_metadata(self, path: str) -> UniformMetadata:
        """Full metadata of path.

        Raises:
            NotFoundError: path does not exist.
        """
        return self._normalize(self._get_resource(path))

    def get_size(self, path: str) -> int:
        return self.get_metadata(path).size

    def get_mimetype(self, path: str) -> str:
        return self.get_metadata(path).mimetype

    def get_timestamp(self, path: str) -> int | None:
        return self.get_metadata(path).timestamp


__all__ = ["CloudinaryAdapter"]

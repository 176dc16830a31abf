# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""HTTP client for the Cloudinary Upload and Admin APIs.

ResourceClient is a thin RPC facade: one HTTP request per public method,
fixed request options, no retries. Upload API calls are signed with the
API secret; Admin API calls use HTTP basic auth.

Features:
    - Explicit configuration per instance (no global driver state)
    - Fresh httpx.Client per call, closed on every exit path
    - Injectable httpx transport for tests
    - Typed records (RemoteResourceRecord, ResourcePage) for responses

Example:
    Upload and look up a file::

        client = ResourceClient(CloudinaryConfig(cloud_name="demo", api_key="k", api_secret="s"))
        with open("cat.jpg", "rb") as f:
            record = client.upload(f, public_id="img/cat")
        record = client.get_resource("img/cat", ResourceKind.IMAGE)

    Walk a listing by cursor::

        page = client.list_page("img/", ResourceKind.IMAGE)
        while page.next_cursor:
            page = client.list_page("img/", ResourceKind.IMAGE, cursor=page.next_cursor)
"""

from __future__ import annotations

import hashlib
import logging
import time
from collections.abc import Iterator
from typing import IO, Any
from urllib.parse import quote

import httpx

from .config import CloudinaryConfig
from .exceptions import NotFoundError, RemoteApiError
from .paths import ResourceKind
from .records import RemoteResourceRecord, ResourcePage

logger = logging.getLogger(__name__)

PAGE_SIZE = 500
"""Admin API max_results used for every listing page."""

STREAM_CHUNK_SIZE = 64 * 1024

# Parameters Cloudinary leaves out of the signature
_UNSIGNED = frozenset({"file", "resource_type", "api_key", "cloud_name"})


def _serialize(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def sign_params(params: dict[str, Any], api_secret: str) -> str:
    """Compute the Upload API signature for params.

    Non-empty parameters are sorted by name, joined as key=value pairs with
    "&", suffixed with the API secret and hashed with SHA-1.
    """
    to_sign = "&".join(
        f"{key}={_serialize(value)}"
        for key, value in sorted(params.items())
        if key not in _UNSIGNED and value is not None and value != ""
    )
    return hashlib.sha1(f"{to_sign}{api_secret}".encode()).hexdigest()


def _error_message(resp: httpx.Response) -> str:
    """Extract Cloudinary's error.message, falling back to the raw body."""
    try:
        return resp.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return resp.text or resp.reason_phrase


class ResourceClient:
    """Cloudinary API client bound to one cloud.

    Attributes:
        config: CloudinaryConfig with credentials and transport settings.
    """

    def __init__(self, config: CloudinaryConfig, transport: httpx.BaseTransport | None = None):
        """Initialize client.

        Args:
            config: Resolved configuration (credentials must be real values).
            transport: Optional httpx transport, used by tests.
        """
        self.config = config
        self._transport = transport

    @property
    def base_url(self) -> str:
        """API root for this cloud."""
        return f"{self.config.api_base_url.rstrip('/')}/{self.config.cloud_name}"

    def _auth(self) -> tuple[str, str]:
        return (self.config.api_key, self.config.api_secret)

    def _http(self) -> httpx.Client:
        return httpx.Client(timeout=self.config.timeout, transport=self._transport)

    def _signed(self, params: dict[str, Any]) -> dict[str, str]:
        """Add timestamp, api_key and signature to Upload API params."""
        payload = {k: _serialize(v) for k, v in params.items() if v is not None}
        payload["timestamp"] = str(int(time.time()))
        payload["signature"] = sign_params(payload, self.config.api_secret)
        payload["api_key"] = self.config.api_key
        return payload

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Perform one request, mapping failures to RemoteApiError."""
        logger.debug("%s %s", method, url)
        try:
            with self._http() as http:
                resp = http.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            raise RemoteApiError(
                f"{method} {url} failed: {exc}", method=method, url=url
            ) from exc

        if resp.status_code == 404:
            raise NotFoundError(
                _error_message(resp), status_code=404, method=method, url=url
            )
        if resp.is_error:
            raise RemoteApiError(
                _error_message(resp), status_code=resp.status_code, method=method, url=url
            )
        return resp

    def _json(self, resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise RemoteApiError(
                f"Invalid JSON from {resp.request.url}",
                status_code=resp.status_code,
                method=resp.request.method,
                url=str(resp.request.url),
            ) from exc

    @staticmethod
    def _record(payload: Any) -> RemoteResourceRecord | None:
        """Record from payload, or None if payload is not a resource."""
        if isinstance(payload, dict) and payload.get("public_id"):
            return RemoteResourceRecord.from_dict(payload)
        return None

    # -------------------------------------------------------------------------
    # Upload API (signed)
    # -------------------------------------------------------------------------

    def upload(
        self,
        file: IO[bytes] | str,
        public_id: str,
        resource_type: str = "auto",
        filename: str | None = None,
    ) -> RemoteResourceRecord | None:
        """Store content under public_id, always overwriting.

        Args:
            file: Binary stream to send, or a URL the remote fetches itself.
            public_id: Target identifier.
            resource_type: Remote resource type; "auto" lets Cloudinary detect it.
            filename: Name sent with the multipart body.

        Returns:
            The stored resource, or None if the response is not a resource.
        """
        params = self._signed(
            {
                "public_id": public_id,
                "overwrite": True,
                "unique_filename": False,
                "invalidate": True,
            }
        )
        url = f"{self.base_url}/{resource_type}/upload"
        if isinstance(file, str):
            resp = self._send("POST", url, data={**params, "file": file})
        else:
            resp = self._send("POST", url, data=params, files={"file": (filename or "file", file)})
        record = self._record(self._json(resp))
        logger.info("Uploaded %s", public_id)
        return record

    def rename(
        self, from_public_id: str, to_public_id: str, kind: ResourceKind
    ) -> RemoteResourceRecord | None:
        """Rename a resource, overwriting any existing target."""
        params = self._signed(
            {
                "from_public_id": from_public_id,
                "to_public_id": to_public_id,
                "overwrite": True,
                "invalidate": True,
            }
        )
        resp = self._send("POST", f"{self.base_url}/{ResourceKind(kind).value}/rename", data=params)
        logger.info("Renamed %s -> %s", from_public_id, to_public_id)
        return self._record(self._json(resp))

    def destroy(self, public_id: str, kind: ResourceKind) -> str | None:
        """Delete one resource.

        Returns:
            The remote "result" field ("ok", "not found"), or None.
        """
        params = self._signed({"public_id": public_id, "invalidate": True})
        resp = self._send("POST", f"{self.base_url}/{ResourceKind(kind).value}/destroy", data=params)
        payload = self._json(resp)
        result = payload.get("result") if isinstance(payload, dict) else None
        logger.info("Destroy %s: %s", public_id, result)
        return result

    # -------------------------------------------------------------------------
    # Admin API (basic auth)
    # -------------------------------------------------------------------------

    def _admin_url(self, kind: ResourceKind, public_id: str | None = None) -> str:
        url = f"{self.base_url}/resources/{ResourceKind(kind).value}/upload"
        if public_id is not None:
            url = f"{url}/{quote(public_id, safe='/')}"
        return url

    def delete_by_prefix(self, prefix: str, kind: ResourceKind) -> dict[str, Any]:
        """Delete every resource of kind whose public_id starts with prefix."""
        resp = self._send(
            "DELETE",
            self._admin_url(kind),
            params={"prefix": prefix, "invalidate": "true"},
            auth=self._auth(),
        )
        logger.info("Deleted %s resources by prefix %r", ResourceKind(kind).value, prefix)
        payload = self._json(resp)
        return payload if isinstance(payload, dict) else {}

    def list_page(
        self, prefix: str, kind: ResourceKind, cursor: str | None = None
    ) -> ResourcePage:
        """Fetch one page of resources whose public_id starts with prefix."""
        params: dict[str, Any] = {"max_results": PAGE_SIZE}
        if prefix:
            params["prefix"] = prefix
        if cursor:
            params["next_cursor"] = cursor
        resp = self._send("GET", self._admin_url(kind), params=params, auth=self._auth())
        page = ResourcePage.from_dict(self._json(resp))
        logger.debug(
            "Listed %d %s resources (more: %s)",
            len(page.resources),
            ResourceKind(kind).value,
            page.next_cursor is not None,
        )
        return page

    def get_resource(self, public_id: str, kind: ResourceKind) -> RemoteResourceRecord:
        """Fetch a single resource record.

        Raises:
            NotFoundError: No resource with that identifier and kind.
        """
        url = self._admin_url(kind, public_id)
        resp = self._send("GET", url, auth=self._auth())
        record = self._record(self._json(resp))
        if record is None:
            raise RemoteApiError(
                f"Unexpected response for {public_id}", status_code=resp.status_code,
                method="GET", url=url,
            )
        return record

    # -------------------------------------------------------------------------
    # Public delivery URLs
    # -------------------------------------------------------------------------

    def url_exists(self, url: str) -> bool:
        """True iff a HEAD on the delivery URL answers 200."""
        logger.debug("HEAD %s", url)
        try:
            with self._http() as http:
                resp = http.head(url, follow_redirects=True)
        except httpx.RequestError as exc:
            raise RemoteApiError(f"HEAD {url} failed: {exc}", method="HEAD", url=url) from exc
        return resp.status_code == 200

    def fetch(self, url: str) -> bytes:
        """Download the full content behind a delivery URL."""
        return self._send("GET", url, follow_redirects=True).content

    def iter_url(self, url: str, chunk_size: int = STREAM_CHUNK_SIZE) -> Iterator[bytes]:
        """Stream the content behind a delivery URL in chunks.

        The request starts on first iteration; the connection is released
        when the iterator is exhausted or closed.
        """
        logger.debug("GET (stream) %s", url)
        try:
            with self._http() as http, http.stream("GET", url, follow_redirects=True) as resp:
                if resp.is_error:
                    raise RemoteApiError(
                        f"GET {url} answered {resp.status_code}",
                        status_code=resp.status_code, method="GET", url=url,
                    )
                yield from resp.iter_bytes(chunk_size)
        except httpx.RequestError as exc:
            raise RemoteApiError(f"GET {url} failed: {exc}", method="GET", url=url) from exc


__all__ = ["PAGE_SIZE", "ResourceClient", "sign_params"]

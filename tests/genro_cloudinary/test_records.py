# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for remote records and metadata normalization."""

from __future__ import annotations

from genro_cloudinary.paths import ResourceKind
from genro_cloudinary.records import (
    FALLBACK_MIMETYPE,
    RemoteResourceRecord,
    ResourcePage,
    mimetype_of,
    normalize,
    timestamp_of,
)


class TestRemoteResourceRecord:
    """Tests for RemoteResourceRecord.from_dict."""

    def test_from_dict_full(self, make_resource):
        """from_dict parses known fields and keeps the rest in extra."""
        record = RemoteResourceRecord.from_dict(
            make_resource("img/cat", bytes=2048, width=640, version=17)
        )

        assert record.public_id == "img/cat"
        assert record.resource_type == "image"
        assert record.bytes == 2048
        assert record.format == "jpg"
        assert record.secure_url.endswith("/image/upload/img/cat")
        assert record.extra == {"width": 640, "version": 17}

    def test_from_dict_minimal(self):
        """Missing fields get defaults."""
        record = RemoteResourceRecord.from_dict({"public_id": "x"})

        assert record.resource_type == "image"
        assert record.bytes == 0
        assert record.format is None
        assert record.created_at is None

    def test_page_from_dict(self, make_resource):
        """ResourcePage keeps resource order and the cursor."""
        page = ResourcePage.from_dict(
            {"resources": [make_resource("a"), make_resource("b")], "next_cursor": "abc"}
        )

        assert [r.public_id for r in page.resources] == ["a", "b"]
        assert page.next_cursor == "abc"

    def test_last_page_has_no_cursor(self):
        """A page without next_cursor ends the listing."""
        assert ResourcePage.from_dict({"resources": []}).next_cursor is None


class TestMimetype:
    """Tests for MIME type derivation."""

    def test_jpg_reported_as_jpeg(self, make_resource):
        """Stored format jpg becomes image/jpeg."""
        record = RemoteResourceRecord.from_dict(make_resource("a", fmt="jpg"))
        assert mimetype_of(record) == "image/jpeg"

    def test_png_passthrough(self, make_resource):
        """Other formats are used as subtype verbatim."""
        record = RemoteResourceRecord.from_dict(make_resource("a", fmt="png"))
        assert mimetype_of(record) == "image/png"

    def test_only_exact_jpg_is_corrected(self, make_resource):
        """Formats merely containing "jpg" are not rewritten."""
        record = RemoteResourceRecord.from_dict(make_resource("a", fmt="jpg2"))
        assert mimetype_of(record) == "image/jpg2"

    def test_video_kind(self, make_resource):
        """Video records compose video/<format>."""
        record = RemoteResourceRecord.from_dict(make_resource("v", resource_type="video", fmt="mp4"))
        assert mimetype_of(record) == "video/mp4"

    def test_raw_without_format_uses_identifier_extension(self, make_resource):
        """Raw records without format fall back to the public_id extension."""
        record = RemoteResourceRecord.from_dict(
            make_resource("docs/a.zip", resource_type="raw", fmt=None)
        )
        assert mimetype_of(record) == "raw/zip"

    def test_no_format_anywhere(self, make_resource):
        """No format and no extension gives the generic binary type."""
        record = RemoteResourceRecord.from_dict(
            make_resource("docs/blob", resource_type="raw", fmt=None)
        )
        assert mimetype_of(record) == FALLBACK_MIMETYPE


class TestTimestamp:
    """Tests for created_at parsing."""

    def test_zulu_timestamp(self, make_resource):
        """Trailing Z is UTC."""
        record = RemoteResourceRecord.from_dict(make_resource("a", created_at="2024-01-01T00:00:00Z"))
        assert timestamp_of(record) == 1704067200

    def test_offset_timestamp(self, make_resource):
        """Explicit offsets are honoured."""
        record = RemoteResourceRecord.from_dict(
            make_resource("a", created_at="2024-01-01T01:00:00+01:00")
        )
        assert timestamp_of(record) == 1704067200

    def test_naive_timestamp_is_utc(self, make_resource):
        """Timestamps without zone are read as UTC."""
        record = RemoteResourceRecord.from_dict(make_resource("a", created_at="2024-01-01T00:00:00"))
        assert timestamp_of(record) == 1704067200

    def test_missing_timestamp(self):
        """No created_at gives None."""
        assert timestamp_of(RemoteResourceRecord(public_id="a")) is None


class TestNormalize:
    """Tests for normalize()."""

    def test_image_record(self, make_resource):
        """Image records get their format re-attached to the path."""
        meta = normalize(RemoteResourceRecord.from_dict(make_resource("docs/report", fmt="pdf", bytes=5)))

        assert meta.path == "docs/report.pdf"
        assert meta.identifier == "docs/report"
        assert meta.size == 5
        assert meta.mimetype == "image/pdf"
        assert meta.timestamp == 1704067200
        assert meta.kind is ResourceKind.IMAGE
        assert meta.type == "file"

    def test_raw_record_path_is_identifier(self, make_resource):
        """Raw records already carry the extension."""
        meta = normalize(
            RemoteResourceRecord.from_dict(make_resource("docs/a.zip", resource_type="raw", fmt=None))
        )

        assert meta.path == "docs/a.zip"
        assert meta.kind is ResourceKind.RAW

    def test_to_dict(self, make_resource):
        """to_dict flattens the kind enum."""
        data = normalize(RemoteResourceRecord.from_dict(make_resource("a"))).to_dict()

        assert data["kind"] == "image"
        assert data["path"] == "a.jpg"
        assert data["type"] == "file"

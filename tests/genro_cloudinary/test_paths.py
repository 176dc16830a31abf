# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for path translation: classification, identifiers, display paths."""

from __future__ import annotations

import pytest

from genro_cloudinary.paths import (
    IMAGE_EXTENSIONS,
    VIDEO_EXTENSIONS,
    ResourceKind,
    classify,
    display_path,
    extension,
    filename,
    strip_extension,
    to_identifier,
)


class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize(
        "path, kind",
        [
            ("a/b/c.png", ResourceKind.IMAGE),
            ("a/b/c.mp4", ResourceKind.VIDEO),
            ("a/b/c.psd", ResourceKind.IMAGE),
            ("a/b/c.zip", ResourceKind.RAW),
            ("docs/report.pdf", ResourceKind.IMAGE),
            ("clip.m3u8", ResourceKind.VIDEO),
            ("README", ResourceKind.RAW),
        ],
    )
    def test_classify_by_extension(self, path, kind):
        """classify maps extensions onto the fixed image/video tables."""
        assert classify(path) is kind

    def test_classify_is_case_insensitive(self):
        """Upper-case extensions are classified like lower-case ones."""
        assert classify("img/PHOTO.JPG") is ResourceKind.IMAGE
        assert classify("vid/Clip.MoV") is ResourceKind.VIDEO

    @pytest.mark.parametrize(
        "path", ["x/y.gif", "img/PHOTO.JPG", "v/clip.mp4", "docs/a.zip", "docs/report.pdf", "README"]
    )
    def test_classify_stable_through_display_path(self, path):
        """A display path rebuilt from the identifier keeps the original kind."""
        kind = classify(path)
        rebuilt = display_path(to_identifier(path), kind, extension(path))

        assert rebuilt == path
        assert classify(rebuilt) is kind

    def test_extension_tables_are_disjoint(self):
        """No extension is both image and video."""
        assert not IMAGE_EXTENSIONS & VIDEO_EXTENSIONS

    def test_only_last_extension_counts(self):
        """archive.png.zip is raw, photo.zip.png is image."""
        assert classify("archive.png.zip") is ResourceKind.RAW
        assert classify("photo.zip.png") is ResourceKind.IMAGE


class TestToIdentifier:
    """Tests for to_identifier()."""

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("img/cat.jpg", "img/cat"),
            ("a/b/clip.mp4", "a/b/clip"),
            ("docs/report.pdf", "docs/report"),
            ("photo.tar.png", "photo.tar"),
        ],
    )
    def test_media_paths_lose_final_extension(self, path, expected):
        """Image and video identifiers drop exactly the final extension."""
        assert to_identifier(path) == expected

    @pytest.mark.parametrize("path", ["docs/archive.zip", "notes.txt", "a/b/noext", "./data.csv"])
    def test_raw_paths_unchanged(self, path):
        """Raw identifiers are the path itself."""
        assert to_identifier(path) == path

    def test_root_level_file(self):
        """A file without directory yields a bare name."""
        assert to_identifier("cat.png") == "cat"

    def test_current_directory_marker(self):
        """A "./" directory is dropped, no leading separator remains."""
        assert to_identifier("./cat.png") == "cat"

    def test_distinct_raw_paths_stay_distinct(self):
        """Raw files differing only in extension keep distinct identifiers."""
        assert to_identifier("a/file.zip") != to_identifier("a/file.txt")

    def test_media_paths_differing_in_extension_collapse(self):
        """Known lossy edge: cat.jpg and cat.png share one identifier."""
        assert to_identifier("img/cat.jpg") == to_identifier("img/cat.png")


class TestHelpers:
    """Tests for extension, filename, strip_extension, display_path."""

    def test_extension_and_filename(self):
        """pathinfo-like split of the last component."""
        assert extension("a/b/c.tar.gz") == "gz"
        assert filename("a/b/c.tar.gz") == "c.tar"
        assert extension("a/b/c") == ""
        assert filename("img/b (1)") == "b (1)"

    def test_strip_extension_ignores_kind(self):
        """strip_extension also strips raw extensions."""
        assert strip_extension("docs/archive.zip") == "docs/archive"
        assert strip_extension("./a.jpg") == "a"
        assert strip_extension("a.jpg") == "a"

    def test_display_path_reattaches_format(self):
        """Media identifiers get their stored format back."""
        assert display_path("docs/report", ResourceKind.IMAGE, "pdf") == "docs/report.pdf"
        assert display_path("v/clip", "video", "mp4") == "v/clip.mp4"

    def test_display_path_raw_and_missing_format(self):
        """Raw identifiers and records without format are left alone."""
        assert display_path("docs/a.zip", ResourceKind.RAW, "zip") == "docs/a.zip"
        assert display_path("img/cat", ResourceKind.IMAGE, None) == "img/cat"

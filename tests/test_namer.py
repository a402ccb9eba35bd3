"""Tests for unembed.extract.namer — filenames, timestamps and vault paths."""

import re
from datetime import datetime, timedelta, timezone

import pytest

from unembed.extract.namer import (
    document_directory,
    locate,
    make_timestamp,
    name_for,
    normalize_path,
    output_directory,
)

DEFAULT_TEMPLATE = "image-{{date}}-{{index}}"


class TestMakeTimestamp:
    def test_format(self):
        now = datetime(2026, 10, 18, 9, 5, 3, 42_000, tzinfo=timezone.utc)
        assert make_timestamp(now) == "2026-10-18T09-05-03-042Z"

    def test_converts_to_utc(self):
        now = datetime(2026, 10, 18, 11, 5, 3, tzinfo=timezone(timedelta(hours=2)))
        assert make_timestamp(now) == "2026-10-18T09-05-03-000Z"

    def test_default_is_filesystem_safe(self):
        ts = make_timestamp()
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}-\d{2}-\d{2}-\d{3}Z", ts)
        assert ":" not in ts and "." not in ts


class TestNameFor:
    def test_default_template(self):
        assert name_for(1, "png", "TS", DEFAULT_TEMPLATE) == "image-TS-1.png"

    def test_type_placeholder(self):
        assert name_for(3, "gif", "TS", "{{type}}_{{index}}") == "gif_3.png"

    def test_always_png_extension(self):
        assert name_for(1, "jpeg", "TS", DEFAULT_TEMPLATE).endswith(".png")

    def test_only_first_placeholder_occurrence_filled(self):
        assert name_for(1, "png", "T", "{{index}}-{{index}}") == "1-{{index}}.png"
        assert name_for(2, "gif", "T", "{{date}}{{type}}{{date}}{{type}}") == "Tgif{{date}}{{type}}.png"

    def test_template_without_placeholders(self):
        assert name_for(7, "png", "TS", "pasted") == "pasted.png"

    def test_index_keeps_names_unique_under_same_timestamp(self):
        names = {name_for(i, "png", "TS", DEFAULT_TEMPLATE) for i in range(1, 51)}
        assert len(names) == 50


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("attachments", "attachments"),
        ("/attachments/", "attachments"),
        ("notes//daily///img.png", "notes/daily/img.png"),
        ("notes\\daily\\img.png", "notes/daily/img.png"),
        ("my notes/a.md", "my notes/a.md"),
        ("", ""),
    ],
)
def test_normalize_path(raw, expected):
    assert normalize_path(raw) == expected


class TestLocations:
    def test_document_directory(self):
        assert document_directory("note.md") == ""
        assert document_directory("projects/alpha/note.md") == "projects/alpha"

    def test_output_directory_at_root(self):
        assert output_directory("", "attachments") == "attachments"

    def test_output_directory_nested(self):
        assert output_directory("projects/alpha", "attachments") == "projects/alpha/attachments"

    def test_locate_at_root(self):
        loc = locate("", "attachments", "image-TS-1.png")
        assert loc.absolute_path == "attachments/image-TS-1.png"
        assert loc.relative_path == "attachments/image-TS-1.png"

    def test_locate_nested(self):
        loc = locate("projects/alpha", "assets/img", "x.png")
        assert loc.relative_path == "assets/img/x.png"
        assert loc.absolute_path == "projects/alpha/assets/img/x.png"

    def test_absolute_is_relative_resolved_against_document_dir(self):
        loc = locate("a/b", "out/", "x.png")
        assert loc.absolute_path == normalize_path(f"a/b/{loc.relative_path}")

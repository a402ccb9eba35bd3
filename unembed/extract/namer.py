"""Output filenames and vault paths for extracted images."""

from __future__ import annotations

import posixpath
import re
from datetime import datetime, timezone

from .models import OutputLocation

# Extracted images always get a .png extension, whatever subtype was declared.
OUTPUT_EXTENSION = ".png"

_SLASHES_RE = re.compile(r"/+")


def make_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC instant with `:` and `.` swapped for `-`.

    2026-10-18T09:05:03.042Z -> 2026-10-18T09-05-03-042Z
    """
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    iso = now.strftime("%Y-%m-%dT%H:%M:%S") + f".{now.microsecond // 1000:03d}Z"
    return iso.replace(":", "-").replace(".", "-")


def name_for(index: int, subtype: str, timestamp: str, template: str) -> str:
    """Fill `{{date}}`, `{{index}}` and `{{type}}` in `template` and add the extension.

    Only the first occurrence of each placeholder is substituted.
    """
    name = (
        template.replace("{{date}}", timestamp, 1)
        .replace("{{index}}", str(index), 1)
        .replace("{{type}}", subtype, 1)
    )
    return name + OUTPUT_EXTENSION


def normalize_path(path: str) -> str:
    """Normalize a vault path: forward slashes, no duplicate/edge slashes.

    An empty result stands for the vault root.
    """
    path = path.replace("\\", "/").replace("\u00a0", " ").replace("\u202f", " ")
    path = _SLASHES_RE.sub("/", path)
    return path.strip("/")


def document_directory(document_path: str) -> str:
    """Vault directory containing `document_path` ("" for the vault root)."""
    return posixpath.dirname(normalize_path(document_path))


def output_directory(document_dir: str, output_folder: str) -> str:
    return normalize_path(f"{document_dir}/{output_folder}")


def locate(document_dir: str, output_folder: str, filename: str) -> OutputLocation:
    relative = normalize_path(f"{output_folder}/{filename}")
    return OutputLocation(
        absolute_path=normalize_path(f"{document_dir}/{relative}"),
        relative_path=relative,
    )

"""Find embedded-image links in markdown text."""

from __future__ import annotations

import re

from .models import EmbeddedImageMatch

# ![alt](data:image/<subtype>;base64,<payload>)
# The payload stops at the first ")", so a payload containing ")" is cut short.
EMBEDDED_IMAGE_RE = re.compile(r"!\[(.*?)\]\(data:image/([a-zA-Z]+);base64,([^)]+)\)")


def scan(text: str) -> list[EmbeddedImageMatch]:
    """Return every embedded-image link in `text`, left to right."""
    return [
        EmbeddedImageMatch(
            full_text=m.group(0),
            alt_text=m.group(1),
            subtype=m.group(2),
            payload=m.group(3),
        )
        for m in EMBEDDED_IMAGE_RE.finditer(text)
    ]


def contains_embedded_image(text: str) -> bool:
    return EMBEDDED_IMAGE_RE.search(text) is not None

"""Replace an embedded-image link with a link to the extracted file."""

from __future__ import annotations

from .models import EmbeddedImageMatch


def build_link(alt_text: str, relative_path: str) -> str:
    return f"![{alt_text}]({relative_path})"


def rewrite(document_text: str, match: EmbeddedImageMatch, relative_path: str) -> str:
    """Swap `match.full_text` for a link to `relative_path`.

    Substitution is by literal text, so identical embedded fragments elsewhere
    in the document are rewritten along with this one.
    """
    return document_text.replace(match.full_text, build_link(match.alt_text, relative_path))

"""Detect, decode, write and relink base64 images embedded in markdown."""

from unembed.extract.decoder import DecodeError, decode
from unembed.extract.models import (
    ConversionReport,
    DocumentError,
    EmbeddedImageMatch,
    MatchError,
    OutputLocation,
)
from unembed.extract.namer import locate, make_timestamp, name_for, normalize_path
from unembed.extract.pipeline import ImageExtractor
from unembed.extract.rewriter import rewrite
from unembed.extract.scanner import contains_embedded_image, scan

__all__ = [
    "ConversionReport",
    "DecodeError",
    "DocumentError",
    "EmbeddedImageMatch",
    "ImageExtractor",
    "MatchError",
    "OutputLocation",
    "contains_embedded_image",
    "decode",
    "locate",
    "make_timestamp",
    "name_for",
    "normalize_path",
    "rewrite",
    "scan",
]

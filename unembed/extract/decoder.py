"""Base64 payload decoding."""

from __future__ import annotations

import base64
import binascii
import re

_WHITESPACE_RE = re.compile(r"[\t\n\f\r ]+")


class DecodeError(ValueError):
    """Raised when an embedded payload is not valid base64."""

    def __init__(self, payload_length: int, cause: Exception) -> None:
        self.payload_length = payload_length
        super().__init__(f"invalid base64 payload ({payload_length} chars): {cause}")
        self.__cause__ = cause


def decode(payload: str) -> bytes:
    """Decode a standard-alphabet base64 string to raw bytes.

    ASCII whitespace is ignored and missing `=` padding is restored, matching
    how browsers decode data URIs. Any other deviation raises DecodeError.
    """
    data = _WHITESPACE_RE.sub("", payload)
    if len(data) % 4 == 1:
        raise DecodeError(len(payload), binascii.Error("truncated base64 input"))
    data += "=" * (-len(data) % 4)
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(len(payload), exc) from exc

"""Tests for unembed.extract.decoder."""

import base64
import binascii
import os

import pytest

from unembed.extract.decoder import DecodeError, decode


def test_decodes_hello():
    assert decode("aGVsbG8=") == b"hello"


@pytest.mark.parametrize("size", [0, 1, 2, 3, 57, 1024])
def test_round_trip_arbitrary_bytes(size):
    data = os.urandom(size)
    assert decode(base64.b64encode(data).decode()) == data


def test_missing_padding_is_restored():
    assert decode("aGVsbG8") == b"hello"


def test_whitespace_is_ignored():
    assert decode("aGVs\nbG8=\n") == b"hello"


def test_invalid_characters_raise():
    with pytest.raises(DecodeError) as exc_info:
        decode("!!!!")
    assert isinstance(exc_info.value.__cause__, binascii.Error)
    assert exc_info.value.payload_length == 4


def test_truncated_input_raises():
    with pytest.raises(DecodeError):
        decode("aGVsb")


def test_non_ascii_raises():
    with pytest.raises(DecodeError):
        decode("aGVsbG8é")


def test_decode_error_is_value_error():
    with pytest.raises(ValueError):
        decode("not base64!")

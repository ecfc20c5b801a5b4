"""Custom error code constants shared by the registry and its callers."""
from __future__ import annotations

AV_ERROR_MAX_STRING_SIZE = 64


def _tag_byte(value: str | int) -> int:
    if isinstance(value, str):
        return ord(value)
    return int(value)


def fferrtag(a: str | int, b: str | int, c: str | int, d: str | int) -> int:
    """Pack four tag bytes into a negative custom error code."""

    packed = _tag_byte(a) | (_tag_byte(b) << 8) | (_tag_byte(c) << 16) | (_tag_byte(d) << 24)
    return -packed


def averror(errnum: int) -> int:
    """Return the error code for a positive platform error number."""

    return -errnum


def averror_to_errnum(code: int) -> int:
    return -code


AVERROR_BSF_NOT_FOUND = fferrtag(0xF8, "B", "S", "F")
AVERROR_BUG = fferrtag("B", "U", "G", "!")
AVERROR_BUFFER_TOO_SMALL = fferrtag("B", "U", "F", "S")
AVERROR_DECODER_NOT_FOUND = fferrtag(0xF8, "D", "E", "C")
AVERROR_DEMUXER_NOT_FOUND = fferrtag(0xF8, "D", "E", "M")
AVERROR_ENCODER_NOT_FOUND = fferrtag(0xF8, "E", "N", "C")
AVERROR_EOF = fferrtag("E", "O", "F", " ")
AVERROR_EXIT = fferrtag("E", "X", "I", "T")
AVERROR_EXTERNAL = fferrtag("E", "X", "T", " ")
AVERROR_FILTER_NOT_FOUND = fferrtag(0xF8, "F", "I", "L")
AVERROR_INVALIDDATA = fferrtag("I", "N", "D", "A")
AVERROR_MUXER_NOT_FOUND = fferrtag(0xF8, "M", "U", "X")
AVERROR_OPTION_NOT_FOUND = fferrtag(0xF8, "O", "P", "T")
AVERROR_PATCHWELCOME = fferrtag("P", "A", "W", "E")
AVERROR_PROTOCOL_NOT_FOUND = fferrtag(0xF8, "P", "R", "O")
AVERROR_STREAM_NOT_FOUND = fferrtag(0xF8, "S", "T", "R")
AVERROR_BUG2 = fferrtag("B", "U", "G", " ")
AVERROR_UNKNOWN = fferrtag("U", "N", "K", "N")
AVERROR_EXPERIMENTAL = -0x2BB2AFA8
AVERROR_INPUT_CHANGED = -0x636E6701
AVERROR_OUTPUT_CHANGED = -0x636E6702
# Flags combine on the magnitude; OR-ing the negative values would collapse
# back onto AVERROR_INPUT_CHANGED.
AVERROR_INPUT_AND_OUTPUT_CHANGED = -(
    averror_to_errnum(AVERROR_INPUT_CHANGED) | averror_to_errnum(AVERROR_OUTPUT_CHANGED)
)

AVERROR_HTTP_BAD_REQUEST = fferrtag(0xF8, "4", "0", "0")
AVERROR_HTTP_UNAUTHORIZED = fferrtag(0xF8, "4", "0", "1")
AVERROR_HTTP_FORBIDDEN = fferrtag(0xF8, "4", "0", "3")
AVERROR_HTTP_NOT_FOUND = fferrtag(0xF8, "4", "0", "4")
AVERROR_HTTP_TOO_MANY_REQUESTS = fferrtag(0xF8, "4", "2", "9")
AVERROR_HTTP_OTHER_4XX = fferrtag(0xF8, "4", "X", "X")
AVERROR_HTTP_SERVER_ERROR = fferrtag(0xF8, "5", "X", "X")

__all__ = [
    "AV_ERROR_MAX_STRING_SIZE",
    "AVERROR_BSF_NOT_FOUND",
    "AVERROR_BUFFER_TOO_SMALL",
    "AVERROR_BUG",
    "AVERROR_BUG2",
    "AVERROR_DECODER_NOT_FOUND",
    "AVERROR_DEMUXER_NOT_FOUND",
    "AVERROR_ENCODER_NOT_FOUND",
    "AVERROR_EOF",
    "AVERROR_EXIT",
    "AVERROR_EXPERIMENTAL",
    "AVERROR_EXTERNAL",
    "AVERROR_FILTER_NOT_FOUND",
    "AVERROR_HTTP_BAD_REQUEST",
    "AVERROR_HTTP_FORBIDDEN",
    "AVERROR_HTTP_NOT_FOUND",
    "AVERROR_HTTP_OTHER_4XX",
    "AVERROR_HTTP_SERVER_ERROR",
    "AVERROR_HTTP_TOO_MANY_REQUESTS",
    "AVERROR_HTTP_UNAUTHORIZED",
    "AVERROR_INPUT_AND_OUTPUT_CHANGED",
    "AVERROR_INPUT_CHANGED",
    "AVERROR_INVALIDDATA",
    "AVERROR_MUXER_NOT_FOUND",
    "AVERROR_OPTION_NOT_FOUND",
    "AVERROR_OUTPUT_CHANGED",
    "AVERROR_PATCHWELCOME",
    "AVERROR_PROTOCOL_NOT_FOUND",
    "AVERROR_STREAM_NOT_FOUND",
    "AVERROR_UNKNOWN",
    "averror",
    "averror_to_errnum",
    "fferrtag",
]

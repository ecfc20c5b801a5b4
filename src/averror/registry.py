"""Static registry of custom error codes and their descriptions."""
from __future__ import annotations

import errno
from collections.abc import Iterable, Iterator

from . import codes
from .codes import averror
from .models import ErrorEntry

_TAG_PREFIX = "AVERROR_"


class DuplicateErrorCodeError(ValueError):
    """Raised when two registry entries share the same code."""


class ErrorRegistry:
    """Ordered, immutable collection of :class:`ErrorEntry` rows.

    Lookups scan the rows in order and return the first exact match. The
    row count is small and fixed, so no index is kept. Duplicate codes are
    rejected at construction time.
    """

    def __init__(self, entries: Iterable[ErrorEntry]):
        rows = tuple(entries)
        seen: dict[int, ErrorEntry] = {}
        for entry in rows:
            if entry.code in seen:
                raise DuplicateErrorCodeError(
                    f"duplicate error code {entry.code} for {entry.tag!r} "
                    f"(already used by {seen[entry.code].tag!r})"
                )
            seen[entry.code] = entry
        self._entries = rows

    def __iter__(self) -> Iterator[ErrorEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, int) and self.get_entry(code) is not None

    def get_entry(self, code: int) -> ErrorEntry | None:
        for entry in self._entries:
            if entry.code == code:
                return entry
        return None

    def lookup(self, code: int) -> str | None:
        """Return the message registered for ``code`` or ``None``."""

        entry = self.get_entry(code)
        if entry is None:
            return None
        return entry.message

    def find_tag(self, tag: str) -> ErrorEntry | None:
        """Return the entry whose tag matches ``tag`` (``EOF`` or ``AVERROR_EOF``)."""

        wanted = tag.strip().upper()
        if wanted.startswith(_TAG_PREFIX):
            wanted = wanted[len(_TAG_PREFIX):]
        for entry in self._entries:
            if entry.tag == wanted:
                return entry
        return None


def _custom(tag: str, message: str) -> ErrorEntry:
    return ErrorEntry(code=getattr(codes, _TAG_PREFIX + tag), tag=tag, message=message)


def _standard(tag: str, message: str) -> ErrorEntry:
    return ErrorEntry(code=averror(getattr(errno, tag)), tag=tag, message=message)


ERROR_ENTRIES: tuple[ErrorEntry, ...] = (
    _custom("BSF_NOT_FOUND", "Bitstream filter not found"),
    _custom("BUG", "Internal bug, should not have happened"),
    _custom("BUG2", "Internal bug, should not have happened"),
    _custom("BUFFER_TOO_SMALL", "Buffer too small"),
    _custom("DECODER_NOT_FOUND", "Decoder not found"),
    _custom("DEMUXER_NOT_FOUND", "Demuxer not found"),
    _custom("ENCODER_NOT_FOUND", "Encoder not found"),
    _custom("EOF", "End of file"),
    _custom("EXIT", "Immediate exit requested"),
    _custom("EXTERNAL", "Generic error in an external library"),
    _custom("FILTER_NOT_FOUND", "Filter not found"),
    _custom("INPUT_CHANGED", "Input changed"),
    _custom("INVALIDDATA", "Invalid data found when processing input"),
    _custom("MUXER_NOT_FOUND", "Muxer not found"),
    _custom("OPTION_NOT_FOUND", "Option not found"),
    _custom("OUTPUT_CHANGED", "Output changed"),
    _custom("PATCHWELCOME", "Not yet implemented in FFmpeg, patches welcome"),
    _custom("PROTOCOL_NOT_FOUND", "Protocol not found"),
    _custom("STREAM_NOT_FOUND", "Stream not found"),
    _custom("UNKNOWN", "Unknown error occurred"),
    _custom("EXPERIMENTAL", "Experimental feature"),
    _custom("INPUT_AND_OUTPUT_CHANGED", "Input and output changed"),
    _custom("HTTP_BAD_REQUEST", "Server returned 400 Bad Request"),
    _custom("HTTP_UNAUTHORIZED", "Server returned 401 Unauthorized (authorization failed)"),
    _custom("HTTP_FORBIDDEN", "Server returned 403 Forbidden (access denied)"),
    _custom("HTTP_NOT_FOUND", "Server returned 404 Not Found"),
    _custom("HTTP_TOO_MANY_REQUESTS", "Server returned 429 Too Many Requests"),
    _custom("HTTP_OTHER_4XX", "Server returned 4XX Client Error, but not one of 40{0,1,3,4}"),
    _custom("HTTP_SERVER_ERROR", "Server returned 5XX Server Error reply"),
    # Platform error numbers with fixed wording; checked before the platform.
    _standard("EINVAL", "Invalid argument"),
    _standard("ENOMEM", "Cannot allocate memory"),
    _standard("EIO", "I/O error"),
    _standard("ENOENT", "No such file or directory"),
    _standard("ESPIPE", "Illegal seek"),
)

DEFAULT_REGISTRY = ErrorRegistry(ERROR_ENTRIES)

__all__ = [
    "DEFAULT_REGISTRY",
    "DuplicateErrorCodeError",
    "ERROR_ENTRIES",
    "ErrorRegistry",
]

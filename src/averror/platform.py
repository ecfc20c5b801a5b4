"""Platform error string lookup for codes the registry does not know."""
from __future__ import annotations

import errno
import os
from collections.abc import Callable

FORMAT_MESSAGE_IGNORE_INSERTS = 0x00000200
FORMAT_MESSAGE_FROM_SYSTEM = 0x00001000
# Wide characters requested from FormatMessageW. Longer system messages make
# the call fail, so those numbers resolve to the "Unknown error code" text.
WINDOWS_MESSAGE_BUFFER_SIZE = 512

FormatMessageFunc = Callable[[int, int], str]


class PlatformLookupError(LookupError):
    """Raised when the platform has no description for an error number."""


class PlatformErrorStrings:
    """Describe positive platform error numbers.

    Subclasses raise :class:`PlatformLookupError` when the number is not
    recognised; they never return an empty string.
    """

    name = "base"

    def describe(self, errnum: int) -> str:
        raise NotImplementedError


class PosixErrorStrings(PlatformErrorStrings):
    """Descriptions from the C library via ``os.strerror``.

    Only 0 ("no error") and numbers present in :data:`errno.errorcode` count
    as recognised, since most C libraries answer anything else with a generic
    "Unknown error N".
    """

    name = "posix"

    def describe(self, errnum: int) -> str:
        if errnum != 0 and errnum not in errno.errorcode:
            raise PlatformLookupError(f"unrecognised error number {errnum}")
        try:
            text = os.strerror(errnum)
        except ValueError as exc:
            raise PlatformLookupError(f"strerror failed for {errnum}: {exc}") from exc
        if not text:
            raise PlatformLookupError(f"empty description for {errnum}")
        return text


_FORMAT_MESSAGE_W = None


def _bind_format_message_w():  # pragma: no cover - Windows only
    global _FORMAT_MESSAGE_W
    if _FORMAT_MESSAGE_W is None:
        # Local imports keep ctypes Windows bindings out of POSIX processes.
        import ctypes
        from ctypes import wintypes

        kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)
        format_message = kernel32.FormatMessageW
        format_message.argtypes = [
            wintypes.DWORD,
            wintypes.LPCVOID,
            wintypes.DWORD,
            wintypes.DWORD,
            wintypes.LPWSTR,
            wintypes.DWORD,
            ctypes.c_void_p,
        ]
        format_message.restype = wintypes.DWORD
        _FORMAT_MESSAGE_W = format_message
    return _FORMAT_MESSAGE_W


def _format_message_w(errnum: int, size: int) -> str:
    import ctypes

    format_message = _bind_format_message_w()
    buffer = ctypes.create_unicode_buffer(size)
    length = format_message(
        FORMAT_MESSAGE_FROM_SYSTEM | FORMAT_MESSAGE_IGNORE_INSERTS,
        None,
        errnum & 0xFFFFFFFF,
        0,
        buffer,
        size,
        None,
    )
    return buffer.value[:length]


class WindowsErrorStrings(PlatformErrorStrings):
    """Descriptions from the Windows system message table (``FormatMessageW``)."""

    name = "windows"

    def __init__(
        self,
        format_message: FormatMessageFunc | None = None,
        buffer_size: int = WINDOWS_MESSAGE_BUFFER_SIZE,
    ):
        self._format_message = format_message or _format_message_w
        self._buffer_size = buffer_size

    def describe(self, errnum: int) -> str:
        text = self._format_message(errnum, self._buffer_size)
        # The system table terminates messages with CR/LF.
        text = (text or "").rstrip()
        if not text:
            raise PlatformLookupError(f"FormatMessage has no text for {errnum}")
        return text


def default_platform_strings() -> PlatformErrorStrings:
    """Return the lookup variant for the running platform."""

    if os.name == "nt":  # pragma: no cover - Windows-only selection
        return WindowsErrorStrings()
    return PosixErrorStrings()


__all__ = [
    "PlatformErrorStrings",
    "PlatformLookupError",
    "PosixErrorStrings",
    "WindowsErrorStrings",
    "default_platform_strings",
]

"""Translate error codes into bounded, NUL-terminated descriptions."""
from __future__ import annotations

import logging
import threading

from .codes import (
    AV_ERROR_MAX_STRING_SIZE,
    AVERROR_BUFFER_TOO_SMALL,
    AVERROR_UNKNOWN,
    averror_to_errnum,
)
from .platform import PlatformErrorStrings, PlatformLookupError, default_platform_strings
from .registry import DEFAULT_REGISTRY, ErrorRegistry
from .utils import buffer_to_str, check_capacity, copy_bounded

LOGGER = logging.getLogger(__name__)

UNKNOWN_ERROR_TEMPLATE = "Unknown error code: {code}"


class Translator:
    """Resolve codes through a registry first, then the platform.

    Instances hold no mutable state besides the per-thread buffer used by
    :meth:`err2str`, so one instance can be shared by every thread.
    """

    def __init__(
        self,
        registry: ErrorRegistry | None = None,
        platform: PlatformErrorStrings | None = None,
        max_string_size: int = AV_ERROR_MAX_STRING_SIZE,
    ):
        # One byte of text plus the terminator keeps err2str output non-empty.
        if max_string_size < 2:
            raise ValueError(f"max_string_size must be at least 2: {max_string_size}")
        self.registry = registry if registry is not None else DEFAULT_REGISTRY
        self.platform = platform if platform is not None else default_platform_strings()
        self.max_string_size = max_string_size
        self._local = threading.local()

    def translate(self, code: int, buffer: bytearray, capacity: int | None = None) -> int:
        """Write the description of ``code`` into ``buffer``.

        Returns 0 when the registry or the platform described the code, even
        if the text was truncated. Returns ``AVERROR_UNKNOWN`` after writing
        the "Unknown error code" fallback, and ``AVERROR_BUFFER_TOO_SMALL``
        without writing anything when ``capacity`` is 0.
        """

        size = check_capacity(buffer, capacity)
        if size == 0:
            LOGGER.debug("Zero capacity buffer for error code %s", code)
            return AVERROR_BUFFER_TOO_SMALL
        buffer[0] = 0

        message = self.registry.lookup(code)
        if message is not None:
            copy_bounded(buffer, message, size)
            return 0

        try:
            message = self.platform.describe(averror_to_errnum(code))
        except PlatformLookupError as exc:
            LOGGER.debug("Unresolved error code %s: %s", code, exc)
            copy_bounded(buffer, UNKNOWN_ERROR_TEMPLATE.format(code=code), size)
            return AVERROR_UNKNOWN
        copy_bounded(buffer, message, size)
        return 0

    def strerror(self, code: int, size: int = AV_ERROR_MAX_STRING_SIZE) -> tuple[int, str]:
        """Translate into a fresh buffer of ``size`` bytes and return (status, text)."""

        buffer = bytearray(size)
        status = self.translate(code, buffer)
        return status, buffer_to_str(buffer)

    def err2str(self, code: int) -> str:
        """Return the description of ``code`` using this thread's buffer.

        The buffer is created on a thread's first call and overwritten by each
        later call on that thread; it is never shared between threads.
        """

        buffer = getattr(self._local, "buffer", None)
        if buffer is None:
            buffer = bytearray(self.max_string_size)
            self._local.buffer = buffer
        self.translate(code, buffer)
        return buffer_to_str(buffer)


_DEFAULT_TRANSLATOR = Translator()


def get_translator() -> Translator:
    return _DEFAULT_TRANSLATOR


def translate(code: int, buffer: bytearray, capacity: int | None = None) -> int:
    """Module-level :meth:`Translator.translate` on the default translator."""

    return _DEFAULT_TRANSLATOR.translate(code, buffer, capacity)


def err2str(code: int) -> str:
    """Module-level :meth:`Translator.err2str` on the default translator."""

    return _DEFAULT_TRANSLATOR.err2str(code)


def make_error_string(code: int, size: int = AV_ERROR_MAX_STRING_SIZE) -> str:
    """Return the description of ``code`` bounded to ``size`` bytes."""

    _, text = _DEFAULT_TRANSLATOR.strerror(code, size)
    return text


__all__ = [
    "Translator",
    "UNKNOWN_ERROR_TEMPLATE",
    "err2str",
    "get_translator",
    "make_error_string",
    "translate",
]

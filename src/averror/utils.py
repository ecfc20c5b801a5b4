"""Bounded buffer helpers shared by the translator."""
from __future__ import annotations

NUL = 0


def check_capacity(buffer: bytearray, capacity: int | None) -> int:
    """Return the usable capacity, rejecting values that would overrun ``buffer``."""

    if capacity is None:
        return len(buffer)
    if capacity < 0:
        raise ValueError(f"capacity must not be negative: {capacity}")
    if capacity > len(buffer):
        raise ValueError(f"capacity {capacity} exceeds buffer length {len(buffer)}")
    return capacity


def copy_bounded(buffer: bytearray, text: str, capacity: int) -> int:
    """Copy ``text`` into ``buffer`` as NUL-terminated UTF-8.

    At most ``capacity - 1`` bytes of text are written, followed by a NUL
    byte. A multi-byte character that does not fit is dropped whole rather
    than split. Bytes after the terminator are left untouched. Returns the
    number of text bytes written; nothing is written when ``capacity`` is 0.
    """

    if capacity <= 0:
        return 0
    encoded = text.encode("utf-8")
    if len(encoded) >= capacity:
        encoded = encoded[: capacity - 1]
        encoded = encoded.decode("utf-8", errors="ignore").encode("utf-8")
    size = len(encoded)
    buffer[:size] = encoded
    buffer[size] = NUL
    return size


def buffer_to_str(buffer: bytes | bytearray) -> str:
    """Decode ``buffer`` up to its first NUL byte."""

    end = buffer.find(NUL)
    if end < 0:
        end = len(buffer)
    return bytes(buffer[:end]).decode("utf-8", errors="replace")

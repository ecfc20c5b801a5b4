"""Tests for the translator and the thread-local accessor."""
from __future__ import annotations

import errno
import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from averror import codes
from averror.models import ErrorEntry
from averror.platform import PlatformErrorStrings, PlatformLookupError, PosixErrorStrings
from averror.registry import DEFAULT_REGISTRY, ErrorRegistry
from averror.translator import (
    Translator,
    err2str,
    get_translator,
    make_error_string,
    translate,
)
from averror.utils import buffer_to_str

SENTINEL = 0xFF


class FakePlatform(PlatformErrorStrings):
    name = "fake"

    def __init__(self, messages: dict[int, str]):
        self.messages = messages
        self.calls: list[int] = []

    def describe(self, errnum: int) -> str:
        self.calls.append(errnum)
        try:
            return self.messages[errnum]
        except KeyError as exc:
            raise PlatformLookupError(errnum) from exc


def _sentinel_buffer(size: int) -> bytearray:
    return bytearray([SENTINEL] * size)


@pytest.mark.parametrize("entry", list(DEFAULT_REGISTRY), ids=lambda entry: entry.tag)
def test_translate_returns_registry_message(entry: ErrorEntry):
    buffer = bytearray(64)

    assert translate(entry.code, buffer) == 0
    assert buffer_to_str(buffer) == entry.message


def test_translate_eof_example():
    buffer = bytearray(64)

    assert translate(codes.AVERROR_EOF, buffer, 64) == 0
    assert buffer_to_str(buffer) == "End of file"


def test_translate_truncates_registry_message_silently():
    buffer = _sentinel_buffer(32)

    status = translate(codes.AVERROR_INVALIDDATA, buffer, 8)

    assert status == 0
    assert bytes(buffer[:8]) == b"Invalid\x00"
    assert all(byte == SENTINEL for byte in buffer[8:])


def test_registry_entries_override_platform_wording():
    platform = FakePlatform({errno.ENOENT: "platform wording"})
    translator = Translator(platform=platform)

    status, text = translator.strerror(-errno.ENOENT)

    assert status == 0
    assert text == "No such file or directory"
    assert platform.calls == []


def test_translate_falls_back_to_platform_description():
    buffer = bytearray(64)

    status = translate(-errno.EACCES, buffer)

    assert status == 0
    assert buffer_to_str(buffer) == os.strerror(errno.EACCES)[:63]
    assert buffer_to_str(buffer)


def test_translate_passes_negated_code_to_platform():
    platform = FakePlatform({42: "Forty-two happened"})
    translator = Translator(registry=ErrorRegistry([]), platform=platform)

    status, text = translator.strerror(-42)

    assert status == 0
    assert text == "Forty-two happened"
    assert platform.calls == [42]


def test_platform_description_truncation_is_not_an_error():
    platform = FakePlatform({7: "A fairly long platform description"})
    translator = Translator(registry=ErrorRegistry([]), platform=platform)
    buffer = _sentinel_buffer(16)

    status = translator.translate(-7, buffer, 6)

    assert status == 0
    assert bytes(buffer[:6]) == b"A fai\x00"
    assert all(byte == SENTINEL for byte in buffer[6:])


def test_unknown_code_example_is_truncated_fallback():
    buffer = bytearray(16)

    status = translate(-999999, buffer, 16)

    assert status == codes.AVERROR_UNKNOWN
    assert buffer_to_str(buffer) == "Unknown error c"
    assert buffer[15] == 0


def test_unknown_code_fallback_contains_decimal_code():
    translator = Translator(platform=FakePlatform({}))

    status, text = translator.strerror(-123456)

    assert status == codes.AVERROR_UNKNOWN
    assert text == "Unknown error code: -123456"
    assert "-123456" in text


def test_positive_codes_are_unknown_on_posix():
    translator = Translator(platform=PosixErrorStrings())

    status, text = translator.strerror(5)

    assert status == codes.AVERROR_UNKNOWN
    assert "5" in text


def test_unknown_code_is_logged_at_debug(caplog):
    translator = Translator(platform=FakePlatform({}))

    with caplog.at_level(logging.DEBUG, logger="averror.translator"):
        translator.strerror(-77777)

    assert "Unresolved error code -77777" in caplog.text


@pytest.mark.parametrize("code", [codes.AVERROR_EOF, -errno.EACCES, -999999])
@pytest.mark.parametrize("capacity", [1, 2, 5, 15, 40])
def test_output_is_terminated_within_capacity(code, capacity):
    buffer = _sentinel_buffer(48)

    translate(code, buffer, capacity)

    assert 0 in buffer[:capacity]
    assert all(byte == SENTINEL for byte in buffer[capacity:])


def test_capacity_one_yields_empty_string():
    buffer = _sentinel_buffer(4)

    assert translate(codes.AVERROR_EOF, buffer, 1) == 0
    assert buffer[0] == 0
    assert buffer[1:] == bytearray([SENTINEL] * 3)


@pytest.mark.parametrize("code", [codes.AVERROR_EOF, -errno.EACCES, -999999])
def test_zero_capacity_writes_nothing(code):
    buffer = _sentinel_buffer(8)

    status = translate(code, buffer, 0)

    assert status == codes.AVERROR_BUFFER_TOO_SMALL
    assert buffer == _sentinel_buffer(8)


def test_capacity_larger_than_buffer_is_rejected():
    buffer = _sentinel_buffer(8)

    with pytest.raises(ValueError):
        translate(codes.AVERROR_EOF, buffer, 9)
    assert buffer == _sentinel_buffer(8)


def test_translate_clears_stale_content_first():
    buffer = bytearray(b"stale text\x00" + bytes(21))
    translator = Translator(platform=FakePlatform({}))

    translator.translate(-31337, buffer)

    assert buffer_to_str(buffer).startswith("Unknown error code")


def test_make_error_string_uses_requested_size():
    assert make_error_string(codes.AVERROR_EOF) == "End of file"
    assert make_error_string(codes.AVERROR_EOF, 4) == "End"


def test_translator_rejects_tiny_thread_buffer():
    with pytest.raises(ValueError):
        Translator(max_string_size=1)


def test_err2str_overwrites_previous_result():
    first = err2str(codes.AVERROR_EOF)
    second = err2str(codes.AVERROR_EXIT)

    assert first == "End of file"
    assert second == "Immediate exit requested"


def test_err2str_truncates_to_max_string_size():
    translator = Translator(
        registry=ErrorRegistry([ErrorEntry(code=-1, tag="LONG", message="x" * 200)]),
        platform=FakePlatform({}),
    )

    assert translator.err2str(-1) == "x" * (codes.AV_ERROR_MAX_STRING_SIZE - 1)


def test_err2str_always_returns_text():
    text = err2str(-987654321)

    assert text
    assert "-987654321" in text


def test_err2str_reuses_buffer_within_thread():
    translator = Translator(platform=FakePlatform({}))
    translator.err2str(codes.AVERROR_EOF)
    buffer = translator._local.buffer

    translator.err2str(codes.AVERROR_EXIT)

    assert translator._local.buffer is buffer
    assert len(buffer) == codes.AV_ERROR_MAX_STRING_SIZE


def test_err2str_buffers_are_private_to_each_thread():
    translator = get_translator()
    entries = list(DEFAULT_REGISTRY)[:8]
    barrier = threading.Barrier(len(entries))

    def worker(entry: ErrorEntry) -> list[str]:
        barrier.wait()
        seen = []
        for _ in range(200):
            seen.append(translator.err2str(entry.code))
        return seen

    with ThreadPoolExecutor(max_workers=len(entries)) as pool:
        results = list(pool.map(worker, entries))

    for entry, seen in zip(entries, results):
        expected = entry.message[: codes.AV_ERROR_MAX_STRING_SIZE - 1]
        assert set(seen) == {expected}


def test_code_zero_resolves_to_platform_no_error_text():
    translator = Translator(platform=PosixErrorStrings())

    status, text = translator.strerror(0)

    assert status == 0
    assert text == os.strerror(0)

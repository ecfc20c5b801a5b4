"""Error code to description translation exposing the translator and registry."""
from __future__ import annotations

from .codes import AV_ERROR_MAX_STRING_SIZE, AVERROR_UNKNOWN, averror, fferrtag
from .models import ErrorEntry
from .registry import DEFAULT_REGISTRY, ErrorRegistry
from .translator import Translator, err2str, make_error_string, translate

__all__ = [
    "AV_ERROR_MAX_STRING_SIZE",
    "AVERROR_UNKNOWN",
    "DEFAULT_REGISTRY",
    "ErrorEntry",
    "ErrorRegistry",
    "Translator",
    "averror",
    "err2str",
    "fferrtag",
    "make_error_string",
    "translate",
]

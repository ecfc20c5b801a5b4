"""Core data models for the error string registry."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ErrorEntry:
    """One registry row: a code, its symbolic tag and its description."""

    code: int
    tag: str
    message: str

    def to_dict(self) -> dict[str, object]:
        return {
            "code": self.code,
            "tag": self.tag,
            "message": self.message,
        }

"""Severity buckets reported by the scanning service."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping


class Severity(str, Enum):
    """Fixed set of buckets in ``sbom.vulnerability_count``."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    OTHER = "other"
    LOW = "low"


CONCERNING = (Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.OTHER)


@dataclass(frozen=True)
class SeverityCounts:
    critical: int = 0
    high: int = 0
    medium: int = 0
    other: int = 0
    low: int = 0

    @classmethod
    def from_mapping(cls, raw: object) -> "SeverityCounts":
        """Build counts from an untrusted mapping; anything unusable becomes zero."""

        if not isinstance(raw, Mapping):
            return cls()
        return cls(**{level.value: _coerce_count(raw.get(level.value)) for level in Severity})

    def get(self, severity: Severity) -> int:
        return getattr(self, severity.value)

    @property
    def concerning(self) -> int:
        return sum(self.get(level) for level in CONCERNING)

    def to_dict(self) -> Dict[str, int]:
        return {level.value: self.get(level) for level in Severity}

    def __add__(self, other: "SeverityCounts") -> "SeverityCounts":
        if not isinstance(other, SeverityCounts):
            return NotImplemented
        return SeverityCounts(**{level.value: self.get(level) + other.get(level) for level in Severity})


def _coerce_count(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        return int(value) if value.is_integer() and value >= 0 else 0
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return 0

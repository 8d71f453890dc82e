from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple

__all__ = ["Severity", "ClassificationResult", "NO_MATCH"]


class Severity(str, Enum):
    """Risk tier of a single utterance. Ordered: none < low < moderate < high."""

    NONE = "none"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank

    __hash__ = str.__hash__


_RANK = {Severity.NONE: 0, Severity.LOW: 1, Severity.MODERATE: 2, Severity.HIGH: 3}


@dataclass(frozen=True)
class ClassificationResult:
    severity: Severity = Severity.NONE
    matched_keywords: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_detected(self) -> bool:
        return self.severity is not Severity.NONE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_detected": self.is_detected,
            "severity": self.severity.value,
            "matched_keywords": list(self.matched_keywords),
        }


NO_MATCH = ClassificationResult()

"""Notifications delivered to engine consumers."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..pitch import Pitch


class NotificationKind(Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    THRESHOLD_SKIP = "threshold-skip"


@dataclass(frozen=True)
class Notification:
    """Outcome for one frame, or a source failure (``sequence`` is None)."""

    kind: NotificationKind
    sequence: Optional[int] = None  # Frame arrival number, 0-based
    time: Optional[float] = None  # Frame arrival time in seconds
    level: Optional[float] = None  # Frame level in dBFS
    pitch: Optional[Pitch] = None
    frequency: Optional[float] = None  # Raw estimate in Hz, when one was made
    error: Optional[Exception] = None

    @classmethod
    def success(cls, pitch: Pitch, sequence: int, time: float, level: float) -> "Notification":
        return cls(
            kind=NotificationKind.SUCCESS,
            sequence=sequence,
            time=time,
            level=level,
            pitch=pitch,
            frequency=pitch.frequency,
        )

    @classmethod
    def failure(
        cls,
        error: Exception,
        sequence: Optional[int] = None,
        time: Optional[float] = None,
        level: Optional[float] = None,
        frequency: Optional[float] = None,
    ) -> "Notification":
        return cls(
            kind=NotificationKind.FAILURE,
            sequence=sequence,
            time=time,
            level=level,
            frequency=frequency,
            error=error,
        )

    @classmethod
    def skip(cls, sequence: int, time: float, level: float) -> "Notification":
        return cls(
            kind=NotificationKind.THRESHOLD_SKIP,
            sequence=sequence,
            time=time,
            level=level,
        )

    @property
    def is_success(self) -> bool:
        return self.kind is NotificationKind.SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.kind is NotificationKind.FAILURE

    @property
    def is_skip(self) -> bool:
        return self.kind is NotificationKind.THRESHOLD_SKIP

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        result: Dict[str, Any] = {
            "kind": self.kind.value,
            "sequence": self.sequence,
            "time": self.time,
            "level": self.level,
        }
        if self.pitch is not None:
            result["pitch"] = self.pitch.to_dict()
        elif self.frequency is not None:
            result["frequency"] = self.frequency
        if self.error is not None:
            result["error"] = {"type": type(self.error).__name__, "message": str(self.error)}
        return result

"""Base classes for signal sources."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable
import numpy as np

from ..core import SourceError


class SourceMode(Enum):
    """How a source produces audio."""

    RECORD = "record"  # Live capture
    PLAYBACK = "playback"  # File or in-memory signal


@dataclass(frozen=True, eq=False)
class Frame:
    """One fixed-size block of mono samples."""

    samples: np.ndarray
    sample_rate: float
    time: float  # Arrival time in seconds (stream clock or playback position)

    def __len__(self) -> int:
        return len(self.samples)


FrameCallback = Callable[[Frame], None]
ErrorCallback = Callable[[SourceError], None]


class SignalSource(ABC):
    """Abstract base class for audio frame producers.

    A started source calls ``on_frame`` once per captured frame from its own
    capture context, and ``on_error`` at most once if it breaks down while
    running.
    """

    mode: SourceMode = SourceMode.RECORD

    def __init__(self, frame_size: int):
        if frame_size < 1:
            raise ValueError(f"frame_size must be positive, got {frame_size}")
        self.frame_size = frame_size

    @abstractmethod
    def start(self, on_frame: FrameCallback, on_error: ErrorCallback) -> None:
        """
        Start producing frames.

        Raises:
            SourceError: If the device or file is unavailable
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop producing frames. No-op if not running."""
        pass

    @property
    @abstractmethod
    def is_running(self) -> bool:
        pass

    def check_permission(self) -> bool:
        """Whether the source may be read. Consulted before playback starts."""
        return True

"""Engine configuration."""

from dataclasses import dataclass
from typing import Optional, Union

from ..core.constants import DEFAULT_FRAME_SIZE, DEFAULT_BACKLOG_WARNING
from ..estimation import EstimationStrategy
from ..input import SignalSource, FileSource, MicrophoneSource


@dataclass
class EngineConfig:
    """Configuration for a PitchEngine.

    Attributes:
        frame_size: Samples per frame; a power of two is recommended (default: 4096)
        strategy: Estimation strategy (default: YIN)
        level_threshold: Frames at or below this level in dBFS are skipped (default: None, no gating)
        backlog_warning: Pending frames that trigger a BacklogWarning (0 = never, default: 64)
        audio_path: Audio file to play; None selects the microphone (default: None)
        sample_rate: Resample rate for files, capture rate for the microphone (default: native)
        realtime: Pace file playback at the file's own rate (default: False)
        device: sounddevice input device for the microphone (default: system default)
    """

    frame_size: int = DEFAULT_FRAME_SIZE
    strategy: Union[EstimationStrategy, str] = EstimationStrategy.YIN
    level_threshold: Optional[float] = None
    backlog_warning: int = DEFAULT_BACKLOG_WARNING
    audio_path: Optional[str] = None
    sample_rate: Optional[int] = None
    realtime: bool = False
    device: Optional[Union[int, str]] = None

    def __post_init__(self):
        if self.frame_size < 2:
            raise ValueError(f"frame_size must be at least 2, got {self.frame_size}")
        if self.backlog_warning < 0:
            raise ValueError(f"backlog_warning must be >= 0, got {self.backlog_warning}")
        if isinstance(self.strategy, str):
            self.strategy = EstimationStrategy.from_name(self.strategy)

    @property
    def is_live(self) -> bool:
        return self.audio_path is None

    def create_source(self) -> SignalSource:
        """Signal source selected by this configuration."""
        if self.is_live:
            return MicrophoneSource(
                frame_size=self.frame_size,
                sample_rate=self.sample_rate,
                device=self.device,
            )
        return FileSource(
            self.audio_path,
            frame_size=self.frame_size,
            sample_rate=self.sample_rate,
            realtime=self.realtime,
        )

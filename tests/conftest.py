"""Shared fixtures: synthetic signals and a hand-driven signal source."""

import threading
from typing import List, Optional

import numpy as np
import pytest

from pitchengine.core import SourceError, SourceUnavailableError
from pitchengine.input import SignalSource, SourceMode, Frame


def generate_sine(
    freq: float,
    n_samples: int,
    sr: int = 44100,
    amplitude: float = 0.5,
    harmonics: int = 1,
) -> np.ndarray:
    """Sine wave, optionally with decaying harmonics (1/k amplitude)."""
    t = np.arange(n_samples) / sr
    audio = np.zeros(n_samples)
    for k in range(1, harmonics + 1):
        audio += np.sin(2 * np.pi * freq * k * t) / k
    return (audio * amplitude).astype(np.float32)


class ManualSource(SignalSource):
    """Source driven by the test: ``push`` runs on the caller's thread."""

    def __init__(
        self,
        frame_size: int = 4096,
        sample_rate: float = 44100.0,
        mode: SourceMode = SourceMode.RECORD,
        fail_start: bool = False,
    ):
        super().__init__(frame_size)
        self.mode = mode
        self.sample_rate = sample_rate
        self.fail_start = fail_start
        self.start_calls = 0
        self.stop_calls = 0
        self.pushed = 0
        self._running = False
        self._on_frame = None
        self._on_error = None

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self, on_frame, on_error) -> None:
        self.start_calls += 1
        if self.fail_start:
            raise SourceUnavailableError("No input device")
        self._on_frame = on_frame
        self._on_error = on_error
        self._running = True

    def stop(self) -> None:
        self.stop_calls += 1
        self._running = False

    def push(self, samples: np.ndarray) -> None:
        time = self.pushed * self.frame_size / self.sample_rate
        self.pushed += 1
        self._on_frame(Frame(samples=samples, sample_rate=self.sample_rate, time=time))

    def fail(self, message: str = "Device unplugged") -> None:
        self._running = False
        self._on_error(SourceError(message))


class Collector:
    """Thread-safe notification sink."""

    def __init__(self):
        self.notifications: List = []
        self._lock = threading.Lock()

    def __call__(self, notification) -> None:
        with self._lock:
            self.notifications.append(notification)

    @property
    def kinds(self) -> List[str]:
        return [n.kind.value for n in self.notifications]


@pytest.fixture
def sample_rate():
    return 44100


@pytest.fixture
def sine():
    return generate_sine


@pytest.fixture
def manual_source():
    return ManualSource()


@pytest.fixture
def collector():
    return Collector()


@pytest.fixture
def wav_file(tmp_path):
    """Write a 1 second 440 Hz tone to a temporary WAV file."""
    import soundfile as sf

    def write(freq: float = 440.0, sr: int = 22050, seconds: float = 1.0, name: Optional[str] = None):
        path = tmp_path / (name or f"tone_{int(freq)}.wav")
        sf.write(str(path), generate_sine(freq, int(sr * seconds), sr=sr), sr)
        return path

    return write


@pytest.fixture
def source_factory():
    return ManualSource

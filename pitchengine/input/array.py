"""In-memory signal playback."""

import threading
from typing import Iterator, Optional
import numpy as np

from .base import SignalSource, SourceMode, Frame, FrameCallback, ErrorCallback
from ..core import SourceError, SourceUnavailableError, DEFAULT_FRAME_SIZE


class ArraySource(SignalSource):
    """Plays a mono signal as consecutive frames on a background thread."""

    mode = SourceMode.PLAYBACK

    def __init__(
        self,
        audio: Optional[np.ndarray],
        sample_rate: Optional[float],
        frame_size: int = DEFAULT_FRAME_SIZE,
        realtime: bool = False,
    ):
        """
        Initialize ArraySource.

        Args:
            audio: Mono samples
            sample_rate: Sample rate in Hz
            frame_size: Samples per frame; the last frame is zero-padded
            realtime: Pace frames at the signal's own rate if True
        """
        super().__init__(frame_size)
        self.audio = audio
        self.sample_rate = sample_rate
        self.realtime = realtime
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    @property
    def is_running(self) -> bool:
        return (
            self._thread is not None
            and self._thread.is_alive()
            and not self._stop_event.is_set()
        )

    @property
    def frame_count(self) -> int:
        if self.audio is None:
            return 0
        return -(-len(self.audio) // self.frame_size)

    def start(self, on_frame: FrameCallback, on_error: ErrorCallback) -> None:
        if self.is_running:
            return

        self._load()
        if self.audio is None or self.sample_rate is None or self.sample_rate <= 0:
            raise SourceUnavailableError("No audio to play")

        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            args=(on_frame, on_error, self._stop_event),
            name=f"{type(self).__name__}-playback",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until playback has delivered every frame.

        Returns:
            True if playback finished within the timeout
        """
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def frames(self) -> Iterator[Frame]:
        """Split the signal into frames, zero-padding the last one."""
        audio = np.asarray(self.audio, dtype=np.float32).ravel()

        for index in range(self.frame_count):
            start = index * self.frame_size
            samples = audio[start : start + self.frame_size]
            if len(samples) < self.frame_size:
                samples = np.pad(samples, (0, self.frame_size - len(samples)))
            yield Frame(
                samples=samples,
                sample_rate=float(self.sample_rate),
                time=start / self.sample_rate,
            )

    def _load(self) -> None:
        """Hook for subclasses that fetch audio lazily."""
        pass

    def _run(
        self,
        on_frame: FrameCallback,
        on_error: ErrorCallback,
        stop_event: threading.Event,
    ) -> None:
        frame_duration = self.frame_size / self.sample_rate
        try:
            for frame in self.frames():
                if stop_event.is_set():
                    break
                on_frame(frame)
                if self.realtime and stop_event.wait(frame_duration):
                    break
        except Exception as e:
            error = SourceError(f"Playback failed: {e}")
            error.__cause__ = e
            on_error(error)

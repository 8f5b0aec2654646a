"""Live microphone capture using sounddevice."""

import warnings
from typing import Optional, Union

from .base import SignalSource, SourceMode, Frame, FrameCallback, ErrorCallback
from ..core import (
    SourceError,
    SourceUnavailableError,
    InputOverflowWarning,
    DEFAULT_FRAME_SIZE,
)


class MicrophoneSource(SignalSource):
    """Captures mono frames from an input device."""

    mode = SourceMode.RECORD

    def __init__(
        self,
        frame_size: int = DEFAULT_FRAME_SIZE,
        sample_rate: Optional[float] = None,
        device: Optional[Union[int, str]] = None,
    ):
        """
        Initialize MicrophoneSource.

        Args:
            frame_size: Samples per frame (stream block size)
            sample_rate: Capture rate in Hz (None uses the device default)
            device: sounddevice input device id or name (None = system default)
        """
        super().__init__(frame_size)
        self.sample_rate = sample_rate
        self.device = device
        self._stream = None
        self._stopping = False

    @property
    def is_running(self) -> bool:
        return self._stream is not None and self._stream.active

    def start(self, on_frame: FrameCallback, on_error: ErrorCallback) -> None:
        if self.is_running:
            return

        try:
            import sounddevice as sd
        except (ImportError, OSError) as e:
            raise SourceUnavailableError(
                "sounddevice (and PortAudio) is required for live capture. "
                "Run: pip install sounddevice"
            ) from e

        try:
            if self.sample_rate is None:
                info = sd.query_devices(self.device, "input")
                self.sample_rate = float(info["default_samplerate"])

            sample_rate = float(self.sample_rate)

            def callback(indata, frames, time_info, status):
                if status.input_overflow:
                    warnings.warn(f"Input overflow: {status}", InputOverflowWarning)
                on_frame(
                    Frame(
                        samples=indata[:, 0].copy(),
                        sample_rate=sample_rate,
                        time=time_info.inputBufferAdcTime,
                    )
                )

            def finished():
                if not self._stopping:
                    on_error(SourceError("Input stream stopped unexpectedly"))

            self._stopping = False
            self._stream = sd.InputStream(
                samplerate=sample_rate,
                blocksize=self.frame_size,
                device=self.device,
                channels=1,
                dtype="float32",
                callback=callback,
                finished_callback=finished,
            )
            self._stream.start()
        except (sd.PortAudioError, ValueError) as e:
            self._stream = None
            raise SourceUnavailableError(f"Input device unavailable: {e}") from e

    def stop(self) -> None:
        if self._stream is None:
            return

        self._stopping = True
        self._stream.stop()
        self._stream.close()
        self._stream = None

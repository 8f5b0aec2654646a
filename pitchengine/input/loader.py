"""Decoding audio files into mono sample arrays for playback sources."""

from pathlib import Path
from typing import Optional, Tuple, Union

import librosa
import numpy as np


class AudioLoader:
    """Decodes an audio file to a mono float32 signal at a chosen rate."""

    SUPPORTED_FORMATS = {".wav", ".mp3", ".flac", ".ogg", ".m4a", ".mp4", ".aiff", ".aif"}

    def __init__(self, target_sr: Optional[int] = None):
        """
        Initialize AudioLoader.

        Args:
            target_sr: Resample to this rate in Hz (None keeps the file's rate)
        """
        self.target_sr = target_sr

    @classmethod
    def check_format(cls, path: Union[str, Path]) -> Path:
        """
        Check that ``path`` exists and has a decodable extension.

        Raises:
            FileNotFoundError: If the file is missing
            ValueError: If the extension is not supported
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")

        if path.suffix.lower() not in cls.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {sorted(cls.SUPPORTED_FORMATS)}"
            )
        return path

    def load(self, path: Union[str, Path]) -> Tuple[np.ndarray, int]:
        """
        Decode a file, downmixing multi-channel audio.

        Returns:
            Tuple of (float32 samples, sample rate)
        """
        path = self.check_format(path)

        # librosa downmixes and resamples in one pass
        audio, sr = librosa.load(str(path), sr=self.target_sr, mono=True)
        return np.ascontiguousarray(audio, dtype=np.float32), int(sr)

    @staticmethod
    def duration(audio: np.ndarray, sr: int) -> float:
        """Length of a signal in seconds."""
        return len(audio) / sr

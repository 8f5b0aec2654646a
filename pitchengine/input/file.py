"""Audio file playback."""

import os
from pathlib import Path
from typing import Optional

from .array import ArraySource
from .loader import AudioLoader
from ..core import SourceUnavailableError, DEFAULT_FRAME_SIZE


class FileSource(ArraySource):
    """Plays an audio file as frames. The file is decoded on start."""

    def __init__(
        self,
        path: str,
        frame_size: int = DEFAULT_FRAME_SIZE,
        sample_rate: Optional[int] = None,
        realtime: bool = False,
        loader: Optional[AudioLoader] = None,
    ):
        """
        Initialize FileSource.

        Args:
            path: Audio file path
            frame_size: Samples per frame
            sample_rate: Resample to this rate (None keeps the file's rate)
            realtime: Pace frames at the file's own rate if True
            loader: AudioLoader to decode with
        """
        super().__init__(None, None, frame_size=frame_size, realtime=realtime)
        self.path = Path(path)
        self.loader = loader or AudioLoader(target_sr=sample_rate)

    def check_permission(self) -> bool:
        return self.path.is_file() and os.access(self.path, os.R_OK)

    def _load(self) -> None:
        if self.audio is not None:
            return

        try:
            self.audio, self.sample_rate = self.loader.load(str(self.path))
        except (FileNotFoundError, ValueError) as e:
            raise SourceUnavailableError(str(e)) from e
        except Exception as e:
            raise SourceUnavailableError(f"Could not decode {self.path}: {e}") from e

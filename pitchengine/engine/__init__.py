"""Engine layer - Staged, ordered pitch detection.

Pipeline: Source frame → level gate → Transformer → Estimator → Pitch → consumer
"""

from .config import EngineConfig
from .engine import PitchEngine, PitchEngineDelegate
from .level import rms, level_db
from .notifications import Notification, NotificationKind

__all__ = [
    "EngineConfig",
    "PitchEngine",
    "PitchEngineDelegate",
    "Notification",
    "NotificationKind",
    "rms",
    "level_db",
]

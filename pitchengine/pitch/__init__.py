"""Pitch layer - Frequencies to notes, offsets and acoustic waves.

Accepts only frequencies inside the supported musical range (20-4190 Hz).
"""

from .validator import FrequencyValidator
from .wave import WaveCalculator, AcousticWave
from .note import Note, NoteLetter, NoteCalculator
from .pitch import Pitch, PitchCalculator, Offset, Offsets

__all__ = [
    "FrequencyValidator",
    "WaveCalculator",
    "AcousticWave",
    "Note",
    "NoteLetter",
    "NoteCalculator",
    "Pitch",
    "PitchCalculator",
    "Offset",
    "Offsets",
]

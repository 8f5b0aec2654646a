"""Musical notes on the equal-tempered scale, indexed from A4."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .validator import FrequencyValidator
from .wave import AcousticWave
from ..core import NoteIndexError, OctaveRangeError, PITCH_NAMES
from ..core.constants import STANDARD_FREQUENCY, STANDARD_OCTAVE


class NoteLetter(Enum):
    """Note letter in English notation."""

    C = "C"
    C_SHARP = "C#"
    D = "D"
    D_SHARP = "D#"
    E = "E"
    F = "F"
    F_SHARP = "F#"
    G = "G"
    G_SHARP = "G#"
    A = "A"
    A_SHARP = "A#"
    B = "B"

    def __str__(self) -> str:
        return self.value


class NoteCalculator:
    """Index/letter/octave/frequency conversions. Index 0 is A4."""

    letters = [NoteLetter(name) for name in PITCH_NAMES]

    @classmethod
    def index_bounds(cls) -> Tuple[int, int]:
        """(minimum, maximum) index for the supported frequency range."""
        return (
            cls.index_for_frequency(FrequencyValidator.minimum_frequency),
            cls.index_for_frequency(FrequencyValidator.maximum_frequency),
        )

    @classmethod
    def octave_bounds(cls) -> Tuple[int, int]:
        minimum, maximum = cls.index_bounds()
        return cls.octave_for_index(minimum), cls.octave_for_index(maximum)

    # Validators

    @classmethod
    def is_valid_index(cls, index: int) -> bool:
        minimum, maximum = cls.index_bounds()
        return minimum <= index <= maximum

    @classmethod
    def validate_index(cls, index: int) -> None:
        if not cls.is_valid_index(index):
            raise NoteIndexError(index)

    @classmethod
    def is_valid_octave(cls, octave: int) -> bool:
        minimum, maximum = cls.octave_bounds()
        return minimum <= octave <= maximum

    @classmethod
    def validate_octave(cls, octave: int) -> None:
        if not cls.is_valid_octave(octave):
            raise OctaveRangeError(octave)

    # Conversions

    @classmethod
    def frequency_for_index(cls, index: int) -> float:
        cls.validate_index(index)
        return STANDARD_FREQUENCY * 2 ** (index / 12.0)

    @classmethod
    def letter_for_index(cls, index: int) -> NoteLetter:
        cls.validate_index(index)
        return cls.letters[index % 12]

    @classmethod
    def octave_for_index(cls, index: int) -> int:
        # Octaves start at C, nine semitones below A
        return STANDARD_OCTAVE + math.floor((index + 9) / 12)

    @staticmethod
    def index_for_frequency(frequency: float) -> int:
        FrequencyValidator.validate(frequency)
        return int(round(12 * math.log2(frequency / STANDARD_FREQUENCY)))

    @classmethod
    def index_for_letter(cls, letter: NoteLetter, octave: int) -> int:
        cls.validate_octave(octave)
        position = cls.letters.index(letter)
        # Letters after G# belong to the next octave when counting from C
        if position >= cls.letters.index(NoteLetter.C):
            position -= 12
        index = position + (octave - STANDARD_OCTAVE) * 12
        cls.validate_index(index)
        return index


@dataclass(frozen=True)
class Note:
    """A note of the chromatic scale."""

    index: int  # Semitones from A4
    letter: NoteLetter
    octave: int
    frequency: float  # Equal-tempered frequency in Hz
    wave: AcousticWave

    @classmethod
    def from_index(cls, index: int) -> "Note":
        frequency = NoteCalculator.frequency_for_index(index)
        return cls(
            index=index,
            letter=NoteCalculator.letter_for_index(index),
            octave=NoteCalculator.octave_for_index(index),
            frequency=frequency,
            wave=AcousticWave.from_frequency(frequency),
        )

    @classmethod
    def from_frequency(cls, frequency: float) -> "Note":
        """Nearest note to ``frequency``; the wave keeps the given frequency."""
        index = NoteCalculator.index_for_frequency(frequency)
        return cls(
            index=index,
            letter=NoteCalculator.letter_for_index(index),
            octave=NoteCalculator.octave_for_index(index),
            frequency=NoteCalculator.frequency_for_index(index),
            wave=AcousticWave.from_frequency(frequency),
        )

    @classmethod
    def from_letter(cls, letter: NoteLetter, octave: int) -> "Note":
        return cls.from_index(NoteCalculator.index_for_letter(letter, octave))

    @property
    def name(self) -> str:
        """Note name with octave (e.g., 'A4', 'C#3')."""
        return f"{self.letter}{self.octave}"

    def lower(self) -> "Note":
        """One semitone lower."""
        return Note.from_index(self.index - 1)

    def higher(self) -> "Note":
        """One semitone higher."""
        return Note.from_index(self.index + 1)

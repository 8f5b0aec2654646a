"""Pitch - a measured frequency located against its nearest notes."""

import math
from dataclasses import dataclass

from .note import Note
from .validator import FrequencyValidator
from .wave import AcousticWave


@dataclass(frozen=True)
class Offset:
    """Distance from a frequency to a reference note."""

    note: Note
    frequency: float  # Hz above (+) or below (-) the note
    percentage: float  # Share of the semitone gap to the neighbor note
    cents: float


@dataclass(frozen=True)
class Offsets:
    """Offsets to the two notes bracketing a frequency."""

    lower: Offset
    higher: Offset

    @classmethod
    def of(cls, first: Offset, second: Offset) -> "Offsets":
        """Order two offsets by their note frequency."""
        if first.note.frequency < second.note.frequency:
            return cls(lower=first, higher=second)
        return cls(lower=second, higher=first)

    @property
    def closest(self) -> Offset:
        if abs(self.lower.frequency) < abs(self.higher.frequency):
            return self.lower
        return self.higher


class PitchCalculator:
    """Offsets of a frequency from its nearest note and closest neighbor."""

    @staticmethod
    def cents(frequency1: float, frequency2: float) -> float:
        """Interval from frequency1 to frequency2 in cents."""
        FrequencyValidator.validate(frequency1)
        FrequencyValidator.validate(frequency2)
        return 1200.0 * math.log2(frequency2 / frequency1)

    @classmethod
    def offsets(cls, frequency: float) -> Offsets:
        note = Note.from_frequency(frequency)
        higher = note.higher()
        lower = note.lower()

        if abs(higher.frequency - frequency) < abs(lower.frequency - frequency):
            neighbor = higher
        else:
            neighbor = lower

        gap = abs(note.frequency - neighbor.frequency)

        return Offsets.of(
            cls._offset(note, frequency, gap),
            cls._offset(neighbor, frequency, gap),
        )

    @classmethod
    def _offset(cls, note: Note, frequency: float, gap: float) -> Offset:
        delta = frequency - note.frequency
        return Offset(
            note=note,
            frequency=delta,
            percentage=delta * 100.0 / gap,
            cents=cls.cents(note.frequency, frequency),
        )


@dataclass(frozen=True)
class Pitch:
    """A frequency mapped onto the chromatic scale."""

    frequency: float
    wave: AcousticWave
    offsets: Offsets

    @classmethod
    def from_frequency(cls, frequency: float) -> "Pitch":
        """
        Map a frequency to a Pitch.

        Raises:
            PitchRangeError: If the frequency or a neighboring note is out of range
        """
        FrequencyValidator.validate(frequency)
        return cls(
            frequency=frequency,
            wave=AcousticWave.from_frequency(frequency),
            offsets=PitchCalculator.offsets(frequency),
        )

    @property
    def note(self) -> Note:
        """Closest note."""
        return self.offsets.closest.note

    @property
    def closest_offset(self) -> Offset:
        return self.offsets.closest

    def to_dict(self) -> dict:
        """Summary for JSON output."""
        closest = self.closest_offset
        return {
            "frequency": self.frequency,
            "note": self.note.name,
            "octave": self.note.octave,
            "offset_hz": closest.frequency,
            "offset_cents": closest.cents,
            "offset_percentage": closest.percentage,
        }

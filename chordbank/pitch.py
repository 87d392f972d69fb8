"""
Pitch classes, pitch sets and the keyboard range.

Note numbers follow the MIDI convention (60 = C4) but are not limited to
0-127; anything an int can hold reduces to a pitch class.
"""
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from .constants import NOTE_TO_PC, NOTES_SHARP, OCTAVE, PIANO_LOW, PIANO_HIGH


def pitch_class(note: int) -> int:
    """Reduce a note number to its pitch class (0-11)."""
    return note % OCTAVE


def note_name(pc: int) -> str:
    """Sharp spelling for a pitch class, e.g. 1 -> 'C#'."""
    return NOTES_SHARP[pitch_class(pc)]


def note_label(note: int) -> str:
    """Name plus octave, e.g. 60 -> 'C4', 21 -> 'A0'."""
    return f"{note_name(note)}{note // OCTAVE - 1}"


def parse_pitch_class(value: str) -> int:
    """
    Pitch class from a note name ('G', 'f#') or a number ('7', '-5').

    Numbers are reduced mod 12. Raises ValueError for anything else.
    """
    value = value.strip()
    if value.lstrip("-").isdigit():
        return pitch_class(int(value))
    name = value[:1].upper() + value[1:]
    if name not in NOTE_TO_PC:
        raise ValueError(f"Unknown pitch class '{value}' (use C, C#, ... B or 0-11)")
    return NOTE_TO_PC[name]


def pitch_class_names(notes: Iterable[int]) -> list[str]:
    """Unique pitch-class names in ascending note order."""
    names = []
    for n in sorted(notes):
        name = note_name(n)
        if name not in names:
            names.append(name)
    return names


# ── Range ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class NoteRange:
    """Closed interval [low, high] of playable note numbers."""
    low: int = PIANO_LOW
    high: int = PIANO_HIGH

    def __post_init__(self):
        if self.low > self.high:
            raise ValueError(f"Empty note range: low={self.low} > high={self.high}")

    @classmethod
    def from_octaves(cls, start: int, octaves: int) -> "NoteRange":
        """A keyboard of `octaves` full octaves starting at `start`."""
        if octaves < 1:
            raise ValueError(f"A keyboard needs at least one octave, got {octaves}")
        return cls(start, start + octaves * OCTAVE - 1)

    def __contains__(self, note: int) -> bool:
        return self.low <= note <= self.high

    @property
    def span(self) -> int:
        return self.high - self.low + 1


DEFAULT_RANGE = NoteRange()


def wrap_notes(notes: Iterable[int], note_range: NoteRange = DEFAULT_RANGE) -> np.ndarray:
    """
    Shift each note by whole octaves into `note_range`.

    Equivalent to adding 12 while below `low`, then subtracting 12 while above
    `high`. For ranges narrower than an octave a note may end up below `low`
    after the second step; the result is still defined for every int.

    The array holds Python ints (dtype=object) so arbitrarily large note
    numbers wrap exactly instead of overflowing int64.
    """
    arr = np.array([int(n) for n in notes], dtype=object)
    low, high = note_range.low, note_range.high
    arr = np.where(arr < low, arr + OCTAVE * ((low - arr + OCTAVE - 1) // OCTAVE), arr)
    arr = np.where(arr > high, arr - OCTAVE * ((arr - high + OCTAVE - 1) // OCTAVE), arr)
    return arr


def wrap_into_range(note: int, note_range: NoteRange = DEFAULT_RANGE) -> int:
    return int(wrap_notes([note], note_range)[0])


# ── Pitch sets ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PitchSet:
    """
    A selection of notes reduced for naming.

    ordered_notes keeps every note (ascending) so the bass can be found;
    pitch_classes is the deduplicated ascending set used for matching.
    """
    ordered_notes: tuple[int, ...] = ()
    pitch_classes: tuple[int, ...] = ()

    @classmethod
    def from_notes(cls, notes: Iterable[int]) -> "PitchSet":
        ordered = tuple(sorted(notes))
        pcs = tuple(sorted({pitch_class(n) for n in ordered}))
        return cls(ordered, pcs)

    @classmethod
    def from_pitch_classes(cls, pcs: Iterable[int]) -> "PitchSet":
        unique = tuple(sorted({pitch_class(p) for p in pcs}))
        return cls(unique, unique)

    def __len__(self) -> int:
        return len(self.pitch_classes)

    def __bool__(self) -> bool:
        return bool(self.pitch_classes)

    @property
    def bass_note(self) -> int | None:
        return self.ordered_notes[0] if self.ordered_notes else None

    @property
    def bass_pc(self) -> int | None:
        if not self.ordered_notes:
            return None
        return pitch_class(self.ordered_notes[0])

    def chroma(self) -> np.ndarray:
        """12-element 0/1 vector with a 1 at each present pitch class."""
        v = np.zeros(OCTAVE, dtype=np.float32)
        if self.pitch_classes:
            v[list(self.pitch_classes)] = 1.0
        return v

    def relative_chroma(self, root: int) -> np.ndarray:
        """Chroma rotated so `root` sits at index 0."""
        return np.roll(self.chroma(), -pitch_class(root))

    def offsets_from(self, root: int) -> frozenset[int]:
        return frozenset(pitch_class(p - root) for p in self.pitch_classes)

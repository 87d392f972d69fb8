"""
Chord recognition from a set of played notes.

Every pitch class in the selection is tried as a root. The selection's chroma
is rotated so that root sits at index 0 and compared against each pattern mask
in CHORD_PATTERNS; a pattern matches when all of its offsets are present.
Extra notes are allowed but cost EXTRA_NOTE_PENALTY points each.
"""
from dataclasses import dataclass, field
from typing import Iterable

import numpy as np

from .constants import CHORD_PATTERNS, EXTENSIONS, EXTRA_NOTE_PENALTY, OCTAVE
from .pitch import PitchSet, note_name, pitch_class, pitch_class_names


@dataclass(frozen=True)
class ChordPattern:
    suffix: str
    intervals: tuple[int, ...]
    score: int
    mask: np.ndarray = field(compare=False, repr=False)

    @property
    def size(self) -> int:
        return len(self.intervals)


@dataclass(frozen=True)
class ChordMatch:
    root_pc: int
    suffix: str
    intervals_matched: frozenset[int]
    score: int


@dataclass(frozen=True)
class RecognizedChord:
    """
    Result of recognition.

    root_pc and suffix feed the degree labeller; suffix includes any
    extension but never the slash bass or the "(add)" hint. root_pc is None
    only when nothing was selected.
    """
    name: str
    root_pc: int | None
    suffix: str
    bass_pc: int | None

    @property
    def is_empty(self) -> bool:
        return self.root_pc is None


NO_CHORD = RecognizedChord("", None, "", None)


def _pattern_mask(intervals):
    """Boolean 12-vector with True at each interval."""
    v = np.zeros(OCTAVE, dtype=bool)
    v[list(intervals)] = True
    return v


PATTERNS: tuple[ChordPattern, ...] = tuple(
    ChordPattern(suffix, intervals, score, _pattern_mask(intervals))
    for suffix, intervals, score in CHORD_PATTERNS
)


def find_best_match(pitch_set: PitchSet) -> ChordMatch | None:
    """
    Highest-scoring (root, pattern) pair, or None when no pattern fits.

    Roots are tried in ascending pitch-class order and patterns in table
    order; only a strictly higher score replaces the current best.
    """
    best = None
    n_pcs = len(pitch_set)
    for root in pitch_set.pitch_classes:
        rel = pitch_set.relative_chroma(root) > 0
        for pat in PATTERNS:
            if not np.all(rel[pat.mask]):
                continue
            score = pat.score - (n_pcs - pat.size) * EXTRA_NOTE_PENALTY
            if best is None or score > best.score:
                best = ChordMatch(root, pat.suffix, pitch_set.offsets_from(root), score)
    return best


def _extension_suffix(rel: frozenset[int]) -> str:
    """'13' / '11' / '9' when a seventh is present, 'addN' otherwise, '' if none."""
    highest = next((number for offset, number in EXTENSIONS if offset in rel), None)
    if highest is None:
        return ""
    has_seventh = 10 in rel or 11 in rel
    return str(highest) if has_seventh else f"add{highest}"


def _needs_add_hint(rel: frozenset[int], n_pcs: int) -> bool:
    # Root, plus one third and one fifth of any flavour.
    expected = 1 + (3 in rel or 4 in rel) + (6 in rel or 7 in rel or 8 in rel)
    return n_pcs > max(3, expected + 1)


def recognize(pitch_set: PitchSet | Iterable[int], bass_pc: int | None = None) -> RecognizedChord:
    """
    Name the chord formed by a set of pitch classes.

    Args:
        pitch_set: a PitchSet, or any iterable of pitch classes.
        bass_pc: pitch class of the lowest sounding note. Defaults to the
            PitchSet's own bass (the lowest pitch class for a bare iterable).

    Returns:
        RecognizedChord. Never raises: when no pattern matches, the name is
        the hyphen-joined pitch-class names and the bass stands in as root.
    """
    if not isinstance(pitch_set, PitchSet):
        pitch_set = PitchSet.from_pitch_classes(pitch_set)
    if not pitch_set:
        return NO_CHORD
    if bass_pc is None:
        bass_pc = pitch_set.bass_pc
    bass_pc = pitch_class(bass_pc)

    pcs = pitch_set.pitch_classes
    if len(pcs) == 1:
        return RecognizedChord(note_name(pcs[0]), pcs[0], "", bass_pc)

    best = find_best_match(pitch_set)
    if best is None:
        name = "-".join(note_name(pc) for pc in pcs)
        return RecognizedChord(name, bass_pc, "", bass_pc)

    rel = best.intervals_matched
    suffix = best.suffix + _extension_suffix(rel)
    name = note_name(best.root_pc) + suffix
    if bass_pc != best.root_pc:
        name += "/" + note_name(bass_pc)
    if _needs_add_hint(rel, len(pcs)):
        name += " (add)"
    return RecognizedChord(name, best.root_pc, suffix, bass_pc)


def detect_chord(notes: Iterable[int]) -> RecognizedChord:
    """Recognise a chord straight from note numbers; the lowest note is the bass."""
    return recognize(PitchSet.from_notes(notes))


def chord_label_from_notes(notes: Iterable[int]) -> str:
    """Plain 'C-E-G' style label, no chord semantics."""
    return "-".join(pitch_class_names(notes))

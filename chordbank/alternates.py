"""
Alternate chord suggestions for the current selection.

Given the selected notes and the detected root, suggest inversions, sevenths,
suspensions, 9th/11th extensions and the relative / parallel major-minor
triads. Each suggestion is a concrete voicing wrapped into the keyboard range,
built upward from an actual note of the selection so it stays close to what
the player has under their hands.
"""
from dataclasses import dataclass
from typing import Iterable

from .pitch import DEFAULT_RANGE, NoteRange, note_name, pitch_class, wrap_into_range, wrap_notes


@dataclass(frozen=True)
class AlternateChord:
    notes: tuple[int, ...]
    name: str
    description: str


def _make_chord(root_note, intervals, name, description, note_range):
    notes = wrap_notes([root_note + i for i in intervals], note_range)
    return AlternateChord(tuple(sorted(int(n) for n in notes)), name, description)


def _root_note_for(ordered_notes, root_pc):
    """Lowest selected note with pitch class root_pc, else the bass raised to it."""
    for n in ordered_notes:
        if pitch_class(n) == root_pc:
            return n
    bass = ordered_notes[0]
    return bass + pitch_class(root_pc - bass)


def generate_alternates(notes: Iterable[int],
                        detected_root: int | None = None,
                        note_range: NoteRange = DEFAULT_RANGE) -> list[AlternateChord]:
    """
    Suggest related chords for a selection.

    Args:
        notes: selected note numbers (any order, duplicates allowed).
        detected_root: root pitch class from recognition; the bass pitch
            class is used when None.
        note_range: every generated note is wrapped into this range.

    Returns:
        list of AlternateChord in a fixed order: inversions, sevenths/sixths,
        suspensions, extensions, relative, parallel. Empty when fewer than two
        distinct pitch classes are selected.
    """
    ordered = sorted(notes)
    pcs = sorted({pitch_class(n) for n in ordered})
    if len(pcs) < 2:
        return []

    root_pc = pitch_class(detected_root) if detected_root is not None else pitch_class(ordered[0])
    root = _root_note_for(ordered, root_pc)
    root_name = note_name(root_pc)

    rel = {pitch_class(pc - root_pc) for pc in pcs}
    is_major = 4 in rel
    is_minor = 3 in rel
    has_third = is_major or is_minor
    has_fifth = 7 in rel
    has_seventh = 10 in rel or 11 in rel

    third = 4 if is_major else 3
    quality = "" if is_major else "m"
    out = []

    def add(root_note, intervals, name, description):
        out.append(_make_chord(root_note, intervals, name, description, note_range))

    # Inversions
    if len(pcs) >= 3 and has_third and has_fifth:
        add(root + third, [0, 7 - third, 12 - third],
            f"{root_name}{quality}/1st", "First inversion (3rd in bass)")
        add(root + 7, [0, 5, 5 + third],
            f"{root_name}{quality}/2nd", "Second inversion (5th in bass)")

    # Sevenths and sixths, only on plain triads
    if is_major and not has_seventh:
        add(root, [0, 4, 7, 11], f"{root_name}maj7", "Add major 7th")
        add(root, [0, 4, 7, 10], f"{root_name}7", "Add dominant 7th")
        add(root, [0, 4, 7, 9], f"{root_name}6", "Add major 6th")
    if is_minor and not has_seventh:
        add(root, [0, 3, 7, 10], f"{root_name}m7", "Add minor 7th")
        add(root, [0, 3, 7, 11], f"{root_name}mMaj7", "Add major 7th")
        add(root, [0, 3, 7, 9], f"{root_name}m6", "Add major 6th")

    # Suspensions replace the third
    if has_third and has_fifth:
        add(root, [0, 5, 7], f"{root_name}sus4", "Replace 3rd with 4th")
        add(root, [0, 2, 7], f"{root_name}sus2", "Replace 3rd with 2nd")

    # 9th / 11th keep the seventh and third already present
    if has_seventh:
        seventh = 11 if 11 in rel else 10
        ext_third = 4 if is_major else 3 if is_minor else 4
        ext_quality = "m" if is_minor else ""
        add(root, [0, ext_third, 7, seventh, 14],
            f"{root_name}{ext_quality}9", "Add 9th extension")
        add(root, [0, ext_third, 7, seventh, 17],
            f"{root_name}{ext_quality}11", "Add 11th extension")

    # Relative and parallel triads
    if is_major and has_fifth:
        rel_minor = wrap_into_range(root - 3, note_range)
        add(rel_minor, [0, 3, 7], f"{note_name(root_pc - 3)}m", "Relative minor (shares notes)")
        add(root, [0, 3, 7], f"{root_name}m", "Parallel minor (same root)")
    elif is_minor and has_fifth:
        rel_major = wrap_into_range(root + 3, note_range)
        add(rel_major, [0, 4, 7], note_name(root_pc + 3), "Relative major (shares notes)")
        add(root, [0, 4, 7], root_name, "Parallel major (same root)")

    return out

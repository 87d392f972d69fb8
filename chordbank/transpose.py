"""
Semitone transposition of the live selection, optionally linked to memory.

Linking is explicit: pass a MemoryStore and it is rotated by the same delta;
pass the active bank and it advances by delta mod 12. Leave them out and only
the selection moves.
"""
from dataclasses import dataclass
from typing import Iterable

from .memory import MemoryStore
from .pitch import DEFAULT_RANGE, NoteRange, pitch_class, wrap_notes


@dataclass(frozen=True)
class TransposeResult:
    selection: tuple[int, ...]
    store: MemoryStore | None = None
    active_bank: int | None = None


def transpose_notes(notes: Iterable[int], delta: int,
                    note_range: NoteRange = DEFAULT_RANGE) -> tuple[int, ...]:
    """Shift each note by `delta` semitones, wrap by octaves, return sorted unique notes."""
    shifted = wrap_notes([n + delta for n in notes], note_range)
    return tuple(sorted({int(n) for n in shifted}))


def transpose(delta: int,
              selection: Iterable[int],
              note_range: NoteRange = DEFAULT_RANGE,
              store: MemoryStore | None = None,
              active_bank: int | None = None) -> TransposeResult:
    """
    Transpose the selection and, when given, the memory and active bank.

    An empty selection stays empty, but a passed store is still rotated and a
    passed bank still advances so degree labels keep matching stored chords.

    Returns:
        TransposeResult. `store` / `active_bank` are None when not passed in.
    """
    new_selection = transpose_notes(selection, delta, note_range)
    new_store = store.rotate(delta, note_range) if store is not None else None
    new_bank = pitch_class(active_bank + delta) if active_bank is not None else None
    return TransposeResult(new_selection, new_store, new_bank)

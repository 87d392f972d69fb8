"""
Chord memory: 12 banks (one per tonal center, C..B) × 12 slots.

MemoryStore is an immutable value. save / clear / rotate / rewrap return a
new store, so the caller decides which instance is canonical and nothing is
shared behind its back.
"""
from dataclasses import dataclass
from typing import Iterable

from .constants import NUM_BANKS, NUM_SLOTS
from .pitch import NoteRange, pitch_class, wrap_notes


def _normalise_notes(notes: Iterable[int]) -> tuple[int, ...]:
    return tuple(sorted({int(n) for n in notes}))


@dataclass(frozen=True)
class Slot:
    """A saved chord: unique ascending notes plus its label."""
    notes: tuple[int, ...]
    label: str = ""

    @classmethod
    def create(cls, notes: Iterable[int], label: str = "") -> "Slot":
        return cls(_normalise_notes(notes), label or "")

    def wrapped(self, note_range: NoteRange) -> "Slot":
        return Slot.create((int(n) for n in wrap_notes(self.notes, note_range)), self.label)

    def shifted(self, delta: int, note_range: NoteRange) -> "Slot":
        return Slot.create(
            (int(n) for n in wrap_notes([n + delta for n in self.notes], note_range)),
            self.label,
        )


def _check_index(bank: int, slot: int) -> None:
    if not 0 <= bank < NUM_BANKS:
        raise IndexError(f"Bank index out of range: {bank}")
    if not 0 <= slot < NUM_SLOTS:
        raise IndexError(f"Slot index out of range: {slot}")


Grid = tuple[tuple[Slot | None, ...], ...]


@dataclass(frozen=True)
class MemoryStore:
    grid: Grid

    def __post_init__(self):
        if len(self.grid) != NUM_BANKS or any(len(row) != NUM_SLOTS for row in self.grid):
            raise ValueError(f"MemoryStore needs exactly {NUM_BANKS}×{NUM_SLOTS} slots")

    @classmethod
    def empty(cls) -> "MemoryStore":
        return cls(tuple((None,) * NUM_SLOTS for _ in range(NUM_BANKS)))

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Slot | None]]) -> "MemoryStore":
        return cls(tuple(tuple(row) for row in rows))

    # ── Reading ─────────────────────────────────────────────────────────────

    def get(self, bank: int, slot: int) -> Slot | None:
        _check_index(bank, slot)
        return self.grid[bank][slot]

    def bank(self, bank: int) -> tuple[Slot | None, ...]:
        _check_index(bank, 0)
        return self.grid[bank]

    def load(self, bank: int, slot: int, note_range: NoteRange | None = None) -> Slot | None:
        """Stored chord, wrapped into `note_range` if one is given."""
        stored = self.get(bank, slot)
        if stored is None or note_range is None:
            return stored
        return stored.wrapped(note_range)

    def filled_slots(self, bank: int) -> list[int]:
        return [i for i, s in enumerate(self.bank(bank)) if s is not None]

    def is_empty(self) -> bool:
        return all(s is None for row in self.grid for s in row)

    def to_grid(self) -> list[list[Slot | None]]:
        return [list(row) for row in self.grid]

    # ── Writing ─────────────────────────────────────────────────────────────

    def _replace(self, bank: int, slot: int, value: Slot | None) -> "MemoryStore":
        _check_index(bank, slot)
        rows = self.to_grid()
        rows[bank][slot] = value
        return MemoryStore.from_rows(rows)

    def save(self, bank: int, slot: int, notes: Iterable[int], label: str = "") -> "MemoryStore":
        """Overwrite a slot; notes are deduplicated and sorted."""
        return self._replace(bank, slot, Slot.create(notes, label))

    def clear(self, bank: int, slot: int) -> "MemoryStore":
        return self._replace(bank, slot, None)

    def rotate(self, delta: int, note_range: NoteRange) -> "MemoryStore":
        """
        Transpose the whole memory by `delta` semitones.

        Bank b moves to bank (b + delta) mod 12 and every stored note is
        shifted by delta, then wrapped into `note_range`. Slot positions
        within a bank are kept.
        """
        rows: list[list[Slot | None]] = [[None] * NUM_SLOTS for _ in range(NUM_BANKS)]
        for b, row in enumerate(self.grid):
            target = pitch_class(b + delta)
            for i, stored in enumerate(row):
                if stored is not None:
                    rows[target][i] = stored.shifted(delta, note_range)
        return MemoryStore.from_rows(rows)

    def rewrap(self, note_range: NoteRange) -> "MemoryStore":
        """Re-wrap every stored chord after the keyboard range changes."""
        return MemoryStore.from_rows(
            [s.wrapped(note_range) if s is not None else None for s in row]
            for row in self.grid
        )

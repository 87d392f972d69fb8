"""
ChordSession: the single owner of the live state a front end works with.

Holds the selection, keyboard range, current bank, chord memory, active slot
and the undo stack for applied alternates. Front ends call these methods in
response to user events and render the attributes; every call runs to
completion synchronously.
"""
from .alternates import AlternateChord, generate_alternates
from .chord_detection import RecognizedChord, detect_chord
from .constants import MAX_UNDO_STEPS
from .degrees import format_chord_display
from .memory import MemoryStore, Slot
from .persistence import export_state, import_state
from .pitch import DEFAULT_RANGE, NoteRange, note_name, pitch_class, wrap_notes
from .transpose import transpose


class ChordSession:
    """
    Usage:
        session = ChordSession()
        session.toggle_note(60); session.toggle_note(64); session.toggle_note(67)
        session.display_name()        # 'I — C'
        session.save_slot(0)          # label defaults to the chord name
        session.transpose(+2)         # selection, memory and bank move together
    """

    def __init__(self, note_range: NoteRange = DEFAULT_RANGE,
                 store: MemoryStore | None = None, current_bank: int = 0):
        self.note_range = note_range
        self.store = store if store is not None else MemoryStore.empty()
        self.current_bank = pitch_class(current_bank)
        self.selection: set[int] = set()
        self.active_slot: int | None = None
        self.active_bank: int | None = None
        self.chord_name = ""
        self.undo_history: list[tuple[frozenset[int], str]] = []

    # ── Selection ───────────────────────────────────────────────────────────

    def _reset_active_slot(self):
        self.active_slot = None
        self.active_bank = None

    def toggle_note(self, note: int) -> None:
        """Manual edits detach from any loaded slot and forget undo history."""
        self._reset_active_slot()
        self.undo_history.clear()
        if note in self.selection:
            self.selection.discard(note)
        else:
            self.selection.add(note)
        self.refresh_chord_name()

    def clear_selection(self) -> None:
        self.selection.clear()
        self.refresh_chord_name()

    def ordered_selection(self) -> list[int]:
        return sorted(self.selection)

    def detect(self) -> RecognizedChord:
        return detect_chord(self.selection)

    def display_name(self) -> str:
        """Degree-prefixed chord name for the current selection and bank."""
        return format_chord_display(self.detect(), self.current_bank)

    def refresh_chord_name(self) -> None:
        """Recompute chord_name unless a loaded slot's label should stay."""
        if self.active_slot is not None and self.active_bank == self.current_bank:
            loaded = self.store.get(self.current_bank, self.active_slot)
            if loaded is not None and loaded.label:
                return
        if not self.selection:
            self.chord_name = ""
            return
        self.chord_name = self.display_name()

    # ── Alternates / undo ───────────────────────────────────────────────────

    def alternates(self) -> list[AlternateChord]:
        if not self.selection:
            return []
        return generate_alternates(self.selection, self.detect().root_pc, self.note_range)

    def apply_alternate(self, alt: AlternateChord) -> None:
        self.undo_history.append((frozenset(self.selection), self.chord_name))
        del self.undo_history[:-MAX_UNDO_STEPS]
        self.selection = set(alt.notes)
        self.chord_name = alt.name

    def can_undo(self) -> bool:
        return bool(self.undo_history)

    def undo(self) -> bool:
        if not self.undo_history:
            return False
        notes, name = self.undo_history.pop()
        self.selection = set(notes)
        self.chord_name = name
        return True

    # ── Transposition / banks ───────────────────────────────────────────────

    def transpose(self, delta: int, linked: bool = True) -> None:
        """
        Shift the selection by `delta` semitones.

        When linked, the memory rotates and the current bank advances by the
        same amount, even if nothing is selected.
        """
        if linked:
            result = transpose(delta, self.selection, self.note_range,
                               store=self.store, active_bank=self.current_bank)
            self.store = result.store
            self.set_bank(result.active_bank)
        else:
            result = transpose(delta, self.selection, self.note_range)
        self.selection = set(result.selection)
        self.refresh_chord_name()

    def set_bank(self, pc: int) -> None:
        self.current_bank = pitch_class(pc)
        self._reset_active_slot()
        self.chord_name = ""

    def change_bank(self, direction: int) -> None:
        self.set_bank(self.current_bank + direction)

    def bank_name(self) -> str:
        return note_name(self.current_bank)

    def set_range(self, note_range: NoteRange) -> None:
        """Resize the keyboard; selection and memory are re-wrapped into it."""
        self.note_range = note_range
        self.selection = {int(n) for n in wrap_notes(self.selection, note_range)}
        self.store = self.store.rewrap(note_range)
        self.refresh_chord_name()

    # ── Memory slots ────────────────────────────────────────────────────────

    def save_slot(self, slot: int, label: str | None = None) -> bool:
        """
        Store the selection in `slot` of the current bank.

        A blank label falls back to the current chord name, then to the
        detected name. Returns False (and stores nothing) when the selection
        is empty.
        """
        self.active_slot = slot
        self.active_bank = self.current_bank
        if not self.selection:
            return False
        auto_name = self.detect().name
        final = (label or "").strip() or self.chord_name.strip() or auto_name
        notes = [int(n) for n in wrap_notes(self.selection, self.note_range)]
        self.store = self.store.save(self.current_bank, slot, notes, final)
        self.chord_name = final
        return True

    def load_slot(self, slot: int) -> Slot | None:
        loaded = self.store.load(self.current_bank, slot, self.note_range)
        if loaded is None:
            return None
        self.active_slot = slot
        self.active_bank = self.current_bank
        self.selection = set(loaded.notes)
        self.chord_name = loaded.label
        return loaded

    def clear_slot(self, slot: int) -> bool:
        if self.store.get(self.current_bank, slot) is None:
            return False
        self.store = self.store.clear(self.current_bank, slot)
        if self.active_slot == slot and self.active_bank == self.current_bank:
            self._reset_active_slot()
            self.chord_name = ""
        return True

    # ── Persistence ─────────────────────────────────────────────────────────

    def export_state(self) -> dict:
        return export_state(self.store, self.current_bank)

    def import_state(self, payload) -> None:
        """Replace memory (and bank, if given) from a backup; raises BankImportError."""
        store, bank = import_state(payload)
        self.store = store
        if bank is not None:
            self.current_bank = bank
        self._reset_active_slot()
        self.refresh_chord_name()

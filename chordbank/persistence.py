"""
Saved-state contract for the chord memory.

    {
      "version": "1.0",                       # written on export, ignored on import
      "timestamp": "2024-01-01T12:00:00",     # idem
      "currentBankPitchClass": 0,
      "bankChords": [[null | {"midis": [60, 64, 67], "name": "C"}, ... ×12] ×12]
    }

Two readers:
  import_state  – strict, for user-supplied backups. Any structural problem
                  rejects the whole payload with BankImportError.
  restore_state – lenient, for the app's own autosave. Bad rows/slots are
                  skipped with a warning and the rest is kept.
"""
import datetime
import json
import math
import os
import warnings
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, Field, StrictInt, StrictStr, ValidationError

from .constants import NUM_BANKS, NUM_SLOTS, STATE_VERSION
from .memory import MemoryStore, Slot
from .pitch import pitch_class


class BankImportError(ValueError):
    """A saved state was rejected; the message says where and why."""


# ── Schema ────────────────────────────────────────────────────────────────────

class SlotPayload(BaseModel):
    midis: List[StrictInt]
    name: StrictStr


BankRow = Annotated[List[Optional[SlotPayload]], Field(min_length=NUM_SLOTS, max_length=NUM_SLOTS)]


class BankStatePayload(BaseModel):
    currentBankPitchClass: Any = None
    bankChords: Annotated[List[BankRow], Field(min_length=NUM_BANKS, max_length=NUM_BANKS)]


def _describe_validation_error(err: ValidationError) -> str:
    problems = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e["loc"]) or "<root>"
        problems.append(f"{loc}: {e['msg']}")
    return "Invalid chord bank data – " + "; ".join(problems)


def _valid_bank(value) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value < NUM_BANKS:
        return value
    return None


# ── Export ────────────────────────────────────────────────────────────────────

def export_state(store: MemoryStore, current_bank: int) -> dict:
    """Plain-data snapshot of the memory and the current bank."""
    return {
        "version": STATE_VERSION,
        "timestamp": datetime.datetime.now().isoformat(),
        "currentBankPitchClass": pitch_class(current_bank),
        "bankChords": [
            [
                {"midis": list(s.notes), "name": s.label} if s is not None else None
                for s in row
            ]
            for row in store.grid
        ],
    }


def dumps_state(store: MemoryStore, current_bank: int) -> str:
    return json.dumps(export_state(store, current_bank), indent=2)


# ── Import ────────────────────────────────────────────────────────────────────

def import_state(payload) -> tuple[MemoryStore, int | None]:
    """
    Validate and convert a saved state.

    Args:
        payload: a dict, or a JSON string.

    Returns:
        (store, current_bank). current_bank is None when the payload has no
        usable currentBankPitchClass, in which case the caller keeps its own.

    Raises:
        BankImportError: on invalid JSON or any deviation from 12×12 slots of
            null / {"midis": [int], "name": str}. Nothing is returned, so the
            caller's state stays as it was.
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            raise BankImportError(f"Invalid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise BankImportError("Invalid backup file structure: expected a JSON object")
    try:
        parsed = BankStatePayload.model_validate(payload)
    except ValidationError as e:
        raise BankImportError(_describe_validation_error(e)) from e

    store = MemoryStore.from_rows(
        [Slot.create(s.midis, s.name) if s is not None else None for s in row]
        for row in parsed.bankChords
    )
    return store, _valid_bank(parsed.currentBankPitchClass)


def _coerce_note(value) -> int | None:
    """Integral number or numeric string ("64", 60.0, " 64.0 ") as an int, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def restore_state(payload) -> tuple[MemoryStore, int | None]:
    """
    Best-effort restore of an autosaved state.

    Rows that are not lists of 12 are skipped. Notes given as integral floats
    or numeric strings are converted; anything else is dropped. Missing names
    become "" and the bank is reduced mod 12. Each problem is reported through
    warnings.warn.
    """
    if not isinstance(payload, dict):
        warnings.warn("Saved state is not an object; starting empty")
        return MemoryStore.empty(), None

    bank = payload.get("currentBankPitchClass")
    current_bank = pitch_class(bank) if isinstance(bank, int) and not isinstance(bank, bool) else None

    rows: list[list[Slot | None]] = [[None] * NUM_SLOTS for _ in range(NUM_BANKS)]
    banks = payload.get("bankChords")
    if not isinstance(banks, list) or len(banks) != NUM_BANKS:
        warnings.warn("Saved state has no 12-bank chord memory; starting empty")
        return MemoryStore.from_rows(rows), current_bank

    for b, row in enumerate(banks):
        if not isinstance(row, list) or len(row) != NUM_SLOTS:
            warnings.warn(f"Skipping malformed bank {b}")
            continue
        for i, s in enumerate(row):
            if not s:
                continue
            if not isinstance(s, dict):
                warnings.warn(f"Skipping malformed slot at bank {b}, slot {i}")
                continue
            midis = s.get("midis")
            if not isinstance(midis, list):
                midis = []
            notes = [n for n in (_coerce_note(m) for m in midis) if n is not None]
            if len(notes) != len(midis):
                warnings.warn(f"Dropped {len(midis) - len(notes)} invalid note(s) at bank {b}, slot {i}")
            name = s.get("name")
            rows[b][i] = Slot.create(notes, name if isinstance(name, str) else "")
    return MemoryStore.from_rows(rows), current_bank


# ── Files ─────────────────────────────────────────────────────────────────────

def save_state_file(path: str, store: MemoryStore, current_bank: int) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(export_state(store, current_bank), f, indent=2)


def import_state_file(path: str) -> tuple[MemoryStore, int | None]:
    """Strict import of a backup file (see import_state)."""
    try:
        with open(path, encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise BankImportError(f"Cannot read {path}: {e}") from e
    return import_state(content)


def load_state_file(path: str) -> tuple[MemoryStore, int | None]:
    """Lenient load of an autosave; a missing or unreadable file gives an empty store."""
    if not os.path.isfile(path):
        return MemoryStore.empty(), None
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        warnings.warn(f"Could not read saved state {path}: {e}")
        return MemoryStore.empty(), None
    return restore_state(payload)

#!/usr/bin/env python3
"""
scripts/bank_tool.py — inspect and edit a chord-bank file.

The file uses the same JSON layout the app exports (12 banks × 12 slots).

Usage:
    python scripts/bank_tool.py show --file banks.json
    python scripts/bank_tool.py show --file banks.json --bank G
    python scripts/bank_tool.py save --file banks.json --slot 1 60 64 67 --label "Tonic"
    python scripts/bank_tool.py clear --file banks.json --slot 1
    python scripts/bank_tool.py transpose --file banks.json --delta 2
    python scripts/bank_tool.py check backup.json
"""
import os
import sys
import argparse

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT)

from chordbank.chord_detection import detect_chord
from chordbank.constants import NOTES_SHARP, NUM_BANKS
from chordbank.degrees import format_chord_display
from chordbank.persistence import (
    BankImportError,
    import_state_file,
    load_state_file,
    save_state_file,
)
from chordbank.pitch import NoteRange, note_label, parse_pitch_class, wrap_notes
from chordbank.transpose import transpose

DEFAULT_FILE = "chord_banks.json"


def _slot_index(value: str) -> int:
    """Slots are numbered 1-12 on the command line."""
    i = int(value)
    if not 1 <= i <= 12:
        raise argparse.ArgumentTypeError(f"Slot must be 1-12, got {value}")
    return i - 1


def _print_bank(store, bank: int) -> None:
    print(f"\n── Bank {NOTES_SHARP[bank]} ──────────────────────────────────────────")
    filled = store.filled_slots(bank)
    if not filled:
        print("   (empty)")
        return
    for i in filled:
        s = store.get(bank, i)
        detected = format_chord_display(detect_chord(s.notes), bank)
        notes = " ".join(note_label(n) for n in s.notes)
        print(f"   {i + 1:>2}. {s.label:<20}  {detected:<20}  {notes}")


def cmd_show(args) -> int:
    store, current = load_state_file(args.file)
    current = current if current is not None else 0
    print(f"[bank_tool] {args.file}  current bank: {NOTES_SHARP[current]}")
    banks = [args.bank] if args.bank is not None else range(NUM_BANKS)
    for bank in banks:
        if args.bank is None and not store.filled_slots(bank):
            continue
        _print_bank(store, bank)
    if store.is_empty():
        print("   No chords stored.")
    return 0


def cmd_save(args) -> int:
    store, current = load_state_file(args.file)
    current = current if current is not None else 0
    bank = args.bank if args.bank is not None else current
    try:
        note_range = NoteRange(*args.range) if args.range else NoteRange()
    except ValueError as e:
        print(f"[bank_tool] Error: {e}", file=sys.stderr)
        return 1
    notes = [int(n) for n in wrap_notes(args.notes, note_range)]
    label = (args.label or "").strip() or detect_chord(notes).name
    store = store.save(bank, args.slot, notes, label)
    save_state_file(args.file, store, current)
    print(f"[bank_tool] Saved slot {args.slot + 1} for {NOTES_SHARP[bank]}: {label}")
    return 0


def cmd_clear(args) -> int:
    store, current = load_state_file(args.file)
    current = current if current is not None else 0
    bank = args.bank if args.bank is not None else current
    if store.get(bank, args.slot) is None:
        print(f"[bank_tool] Slot {args.slot + 1} of {NOTES_SHARP[bank]} is already empty.")
        return 0
    save_state_file(args.file, store.clear(bank, args.slot), current)
    print(f"[bank_tool] Cleared slot {args.slot + 1} of {NOTES_SHARP[bank]}.")
    return 0


def cmd_transpose(args) -> int:
    store, current = load_state_file(args.file)
    current = current if current is not None else 0
    try:
        note_range = NoteRange(*args.range) if args.range else NoteRange()
    except ValueError as e:
        print(f"[bank_tool] Error: {e}", file=sys.stderr)
        return 1
    result = transpose(args.delta, [], note_range, store=store, active_bank=current)
    save_state_file(args.file, result.store, result.active_bank)
    print(f"[bank_tool] Transposed by {args.delta:+d} semitone(s): "
          f"bank {NOTES_SHARP[current]} → {NOTES_SHARP[result.active_bank]}")
    return 0


def cmd_check(args) -> int:
    try:
        store, bank = import_state_file(args.path)
    except BankImportError as e:
        print(f"[bank_tool] Import failed: {e}", file=sys.stderr)
        return 1
    n = sum(len(store.filled_slots(b)) for b in range(NUM_BANKS))
    bank_str = NOTES_SHARP[bank] if bank is not None else "(not set)"
    print(f"[bank_tool] {args.path} is valid: {n} chord(s), current bank {bank_str}")
    if args.install:
        save_state_file(args.file, store, bank if bank is not None else 0)
        print(f"[bank_tool] Chord banks imported into {args.file}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Inspect and edit a chord-bank file.")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_common(p):
        p.add_argument("--file", default=DEFAULT_FILE,
                       help=f"Chord-bank JSON file (default: {DEFAULT_FILE})")
        p.add_argument("--bank", type=parse_pitch_class, default=None,
                       help="Bank (C, C#, ... B or 0-11); defaults to the file's current bank")

    p_show = sub.add_parser("show", help="List stored chords")
    add_common(p_show)
    p_show.set_defaults(func=cmd_show)

    p_save = sub.add_parser("save", help="Store notes in a slot")
    add_common(p_save)
    p_save.add_argument("--slot", type=_slot_index, required=True, help="Slot 1-12")
    p_save.add_argument("--label", default=None, help="Chord label (default: detected name)")
    p_save.add_argument("--range", nargs=2, type=int, metavar=("LOW", "HIGH"), default=None)
    p_save.add_argument("notes", nargs="+", type=int)
    p_save.set_defaults(func=cmd_save)

    p_clear = sub.add_parser("clear", help="Empty a slot")
    add_common(p_clear)
    p_clear.add_argument("--slot", type=_slot_index, required=True, help="Slot 1-12")
    p_clear.set_defaults(func=cmd_clear)

    p_tr = sub.add_parser("transpose", help="Rotate all banks and stored chords")
    p_tr.add_argument("--file", default=DEFAULT_FILE)
    p_tr.add_argument("--delta", type=int, required=True, help="Semitones (may be negative)")
    p_tr.add_argument("--range", nargs=2, type=int, metavar=("LOW", "HIGH"), default=None)
    p_tr.set_defaults(func=cmd_transpose)

    p_check = sub.add_parser("check", help="Validate a backup file (strict import)")
    p_check.add_argument("path")
    p_check.add_argument("--install", action="store_true",
                         help="Write the validated backup to --file")
    p_check.add_argument("--file", default=DEFAULT_FILE)
    p_check.set_defaults(func=cmd_check)

    args = parser.parse_args()
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

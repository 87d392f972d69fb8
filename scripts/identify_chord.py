#!/usr/bin/env python3
"""
scripts/identify_chord.py — name a chord from note numbers.

Prints the detected chord, its roman-numeral degree in the chosen bank and,
optionally, the alternate chord suggestions.

Usage:
    python scripts/identify_chord.py 60 64 67
    python scripts/identify_chord.py 52 60 67 --bank G
    python scripts/identify_chord.py 57 60 64 --alternates --range 48 83
    python scripts/identify_chord.py --all-banks 55 59 62 65
"""
import os
import sys
import argparse

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT)

from chordbank.alternates import generate_alternates
from chordbank.chord_detection import detect_chord
from chordbank.constants import NOTES_SHARP, UNKNOWN_DEGREE
from chordbank.degrees import format_chord_display, label_degree
from chordbank.pitch import NoteRange, note_label, parse_pitch_class

# ── ANSI colours ──────────────────────────────────────────────────────────────
BOLD  = "\033[1m"
CYAN  = "\033[96m"
GREEN = "\033[92m"
DIM   = "\033[2m"
RESET = "\033[0m"


def main() -> int:
    parser = argparse.ArgumentParser(description="Identify a chord from note numbers.")
    parser.add_argument("notes", nargs="+", type=int, help="Note numbers, e.g. 60 64 67")
    parser.add_argument("--bank", type=parse_pitch_class, default=0,
                        help="Tonal center for the degree label (default: C)")
    parser.add_argument("--all-banks", action="store_true",
                        help="Show the degree label in every bank")
    parser.add_argument("--alternates", action="store_true",
                        help="List alternate chord suggestions")
    parser.add_argument("--range", nargs=2, type=int, metavar=("LOW", "HIGH"),
                        default=None, help="Keyboard range for alternates (default: 21 108)")
    args = parser.parse_args()

    try:
        note_range = NoteRange(*args.range) if args.range else NoteRange()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    chord = detect_chord(args.notes)
    notes_str = " ".join(note_label(n) for n in sorted(args.notes))
    print(f"{DIM}{notes_str}{RESET}")
    print(f"{BOLD}{format_chord_display(chord, args.bank)}{RESET}  "
          f"(bank {CYAN}{NOTES_SHARP[args.bank]}{RESET})")

    if args.all_banks:
        print(f"\n   {'Bank':<6}  Degree")
        print(f"   {'─'*6}  {'─'*8}")
        for bank in range(12):
            degree = label_degree(chord.root_pc, chord.suffix, bank)
            col = GREEN if degree in ("I", "i") else ""
            print(f"   {NOTES_SHARP[bank]:<6}  {col}{degree if degree != UNKNOWN_DEGREE else '—'}{RESET}")

    if args.alternates:
        alts = generate_alternates(args.notes, chord.root_pc, note_range)
        print(f"\n{BOLD}Alternates ({len(alts)}){RESET}")
        if not alts:
            print("   No alternate suggestions available for this selection.")
        for alt in alts:
            voicing = " ".join(note_label(n) for n in alt.notes)
            print(f"   {alt.name:<10}  {alt.description:<32}  {DIM}{voicing}{RESET}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

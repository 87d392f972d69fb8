# ── Pitch-class lookup tables ─────────────────────────────────────────────────

# Sharp-only spelling; pitch class 0 = C.
NOTES_SHARP: list[str] = [
    "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"
]
NOTE_TO_PC: dict[str, int] = {name: pc for pc, name in enumerate(NOTES_SHARP)}

# ── Keyboard range ────────────────────────────────────────────────────────────

# Full 88-key piano: A0 (21) to C8 (108), inclusive.
PIANO_LOW, PIANO_HIGH = 21, 108
OCTAVE = 12

# ── Chord patterns ────────────────────────────────────────────────────────────

# (suffix, semitone offsets from root, priority). Order matters: on equal
# scores the earlier entry wins.
CHORD_PATTERNS: tuple[tuple[str, tuple[int, ...], int], ...] = (
    ("maj7",  (0, 4, 7, 11), 90),
    ("7",     (0, 4, 7, 10), 88),
    ("m7",    (0, 3, 7, 10), 87),
    ("mMaj7", (0, 3, 7, 11), 86),
    ("dim7",  (0, 3, 6, 9),  85),
    ("m7b5",  (0, 3, 6, 10), 84),
    ("6",     (0, 4, 7, 9),  82),
    ("m6",    (0, 3, 7, 9),  81),
    ("",      (0, 4, 7),     75),   # major triad
    ("m",     (0, 3, 7),     74),   # minor triad
    ("dim",   (0, 3, 6),     73),
    ("aug",   (0, 4, 8),     72),
    ("sus2",  (0, 2, 7),     71),
    ("sus4",  (0, 5, 7),     70),
    ("5",     (0, 7),        45),   # power chord
)
EXTRA_NOTE_PENALTY = 2

# Extension offset → number, highest first.
EXTENSIONS: tuple[tuple[int, int], ...] = ((9, 13), (5, 11), (2, 9))

# ── Scale degrees ─────────────────────────────────────────────────────────────

# Chromatic distance above the tonal center → major-key roman numeral
DEGREE_NAMES: dict[int, str] = {
    0:  "I",
    1:  "bII",
    2:  "II",
    3:  "bIII",
    4:  "III",
    5:  "IV",
    6:  "bV",
    7:  "V",
    8:  "bVI",
    9:  "VI",
    10: "bVII",
    11: "VII",
}
UNKNOWN_DEGREE = "?"

# ── Memory banks ──────────────────────────────────────────────────────────────

NUM_BANKS = 12
NUM_SLOTS = 12
MAX_UNDO_STEPS = 5
STATE_VERSION = "1.0"

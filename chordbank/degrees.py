"""
Roman-numeral degree of a chord root relative to a tonal center (bank).

Numerals are major-key relative: a chord a fifth above the center is "V"
regardless of its quality; quality only changes case and adds °/+ markers.
"""
from .chord_detection import RecognizedChord
from .constants import DEGREE_NAMES, UNKNOWN_DEGREE
from .pitch import pitch_class

_DISPLAY_SEPARATOR = " — "


def roman_for_root(root_pc: int | None, center_pc: int) -> str:
    """Plain numeral for the distance root - center, or UNKNOWN_DEGREE."""
    if root_pc is None:
        return UNKNOWN_DEGREE
    return DEGREE_NAMES.get(pitch_class(root_pc - center_pc), UNKNOWN_DEGREE)


def is_minor_suffix(suffix: str) -> bool:
    s = (suffix or "").lower()
    return (s.startswith("m") and not s.startswith("maj")) or "m7" in s or "m6" in s


def apply_quality(roman: str, suffix: str) -> str:
    """
    Adjust a numeral for chord quality.

    Minor chords are lowercased (maj7 is not minor); dim / m7b5 get '°'
    and aug gets '+'. UNKNOWN_DEGREE passes through untouched.
    """
    if roman == UNKNOWN_DEGREE:
        return roman
    s = (suffix or "").lower()
    r = roman
    if is_minor_suffix(s):
        r = r.lower()
    if "dim" in s or "m7b5" in s:
        r += "°"
    if "aug" in s:
        r += "+"
    return r


def label_degree(root_pc: int | None, suffix: str, center_pc: int) -> str:
    """
    Roman numeral for a detected chord in the key of `center_pc`.

    >>> label_degree(7, "", 0)
    'V'
    >>> label_degree(9, "m", 0)
    'vi'
    """
    return apply_quality(roman_for_root(root_pc, center_pc), suffix)


def format_chord_display(chord: RecognizedChord, center_pc: int) -> str:
    """'V — G7' style display name; just the name when the degree is unknown."""
    if chord.is_empty:
        return chord.name
    roman = label_degree(chord.root_pc, chord.suffix, center_pc)
    if roman == UNKNOWN_DEGREE:
        return chord.name
    return roman + _DISPLAY_SEPARATOR + chord.name

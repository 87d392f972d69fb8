import unittest
from chordbank.chord_detection import (
    NO_CHORD,
    PATTERNS,
    chord_label_from_notes,
    detect_chord,
    find_best_match,
    recognize,
)
from chordbank.constants import NOTES_SHARP
from chordbank.pitch import PitchSet

class TestPatternTable(unittest.TestCase):
    def test_table_order_and_scores(self):
        suffixes = [p.suffix for p in PATTERNS]
        self.assertEqual(suffixes, ["maj7", "7", "m7", "mMaj7", "dim7", "m7b5", "6", "m6",
                                    "", "m", "dim", "aug", "sus2", "sus4", "5"])
        scores = [p.score for p in PATTERNS]
        self.assertEqual(scores, sorted(scores, reverse=True))

    def test_masks_match_intervals(self):
        for p in PATTERNS:
            self.assertEqual(set(p.mask.nonzero()[0].tolist()), set(p.intervals))


class TestRecognize(unittest.TestCase):
    def test_single_pitch_class(self):
        for pc in range(12):
            chord = detect_chord([pc + 48, pc + 60, pc + 72])
            self.assertEqual(chord.name, NOTES_SHARP[pc])
            self.assertEqual(chord.suffix, "")
            self.assertEqual(chord.root_pc, pc)

    def test_basic_qualities(self):
        self.assertEqual(recognize({0, 4, 7}).name, "C")
        self.assertEqual(recognize({0, 3, 7}).name, "Cm")
        self.assertEqual(recognize({0, 4, 7, 11}).name, "Cmaj7")
        self.assertEqual(recognize({0, 4, 7, 10}).name, "C7")
        self.assertEqual(recognize({0, 3, 6}).name, "Cdim")
        # The 2nd of a sus2 is also read as the 9th
        self.assertEqual(recognize({0, 2, 7}).name, "Csus2add9")
        # C F G reads better as a sus2 on F (71) than a sus4 on C (70)
        self.assertEqual(recognize({0, 5, 7}).name, "Fsus2add9/C")
        self.assertEqual(recognize({0, 7}).name, "C5")

    def test_dominant_seventh_in_root_position(self):
        chord = detect_chord([55, 59, 62, 65])
        self.assertEqual(chord.name, "G7")
        self.assertEqual(chord.root_pc, 7)
        self.assertEqual(chord.suffix, "7")

    def test_slash_chord(self):
        chord = detect_chord([52, 60, 67])
        self.assertEqual(chord.name, "C/E")
        self.assertEqual(chord.root_pc, 0)
        self.assertEqual(chord.bass_pc, 4)
        self.assertEqual(chord.suffix, "")

    def test_explicit_bass(self):
        self.assertEqual(recognize({0, 4, 7}, 7).name, "C/G")

    def test_sixth_chord_prefers_minor_seventh_reading(self):
        # C E G A scores higher as Am7 than as C6
        self.assertEqual(detect_chord([57, 60, 64, 67]).name, "Am7")
        chord = detect_chord([60, 64, 67, 69])
        self.assertEqual(chord.name, "Am7/C")
        self.assertEqual(chord.root_pc, 9)
        self.assertEqual(chord.suffix, "m7")

    def test_add_extension_without_seventh(self):
        chord = detect_chord([60, 62, 64, 67])
        self.assertEqual(chord.name, "Cadd9")
        self.assertEqual(chord.suffix, "add9")

    def test_extension_with_seventh_is_bare_number(self):
        chord = detect_chord([60, 64, 67, 70, 74])
        self.assertEqual(chord.root_pc, 0)
        self.assertEqual(chord.suffix, "79")

    def test_only_highest_extension_named(self):
        # dim7 contains offset 9, which names as the 13th
        chord = detect_chord([60, 63, 66, 69])
        self.assertEqual(chord.name, "Cdim7add13")

    def test_extra_notes_hint(self):
        chord = detect_chord([60, 62, 64, 65, 67])
        self.assertEqual(chord.name, "Cadd11 (add)")
        self.assertEqual(chord.suffix, "add11")
        self.assertEqual(chord.root_pc, 0)

    def test_fallback_descriptive_name(self):
        chord = detect_chord([60, 61, 62])
        self.assertEqual(chord.name, "C-C#-D")
        self.assertEqual(chord.root_pc, 0)
        self.assertEqual(chord.suffix, "")

    def test_fallback_root_is_bass(self):
        chord = detect_chord([62, 72, 73])
        self.assertEqual(chord.name, "C-C#-D")
        self.assertEqual(chord.root_pc, 2)
        self.assertEqual(chord.bass_pc, 2)

    def test_empty(self):
        self.assertEqual(detect_chord([]), NO_CHORD)
        self.assertTrue(detect_chord([]).is_empty)
        self.assertEqual(recognize(PitchSet()), NO_CHORD)

    def test_pure_function(self):
        notes = [52, 60, 67, 70]
        self.assertEqual(detect_chord(notes), detect_chord(list(reversed(notes))))
        detect_chord([60, 63, 67])
        self.assertEqual(detect_chord(notes), detect_chord(notes))

    def test_transposition_invariance(self):
        for t in range(12):
            self.assertEqual(detect_chord([60 + t, 64 + t, 67 + t, 71 + t]).name,
                             NOTES_SHARP[t] + "maj7")
            self.assertEqual(detect_chord([60 + t, 63 + t, 67 + t]).name,
                             NOTES_SHARP[t] + "m")


class TestFindBestMatch(unittest.TestCase):
    def test_best_match(self):
        m = find_best_match(PitchSet.from_pitch_classes([0, 4, 7]))
        self.assertEqual((m.root_pc, m.suffix, m.score), (0, "", 75))
        self.assertEqual(m.intervals_matched, frozenset({0, 4, 7}))

    def test_extra_note_penalty(self):
        m = find_best_match(PitchSet.from_pitch_classes([0, 4, 7, 10, 2]))
        self.assertEqual((m.root_pc, m.suffix, m.score), (0, "7", 86))

    def test_tie_keeps_first_root(self):
        # Diminished seventh is symmetric; every root scores 85.
        m = find_best_match(PitchSet.from_pitch_classes([3, 6, 9, 0]))
        self.assertEqual((m.root_pc, m.suffix), (0, "dim7"))

    def test_no_match(self):
        self.assertIsNone(find_best_match(PitchSet.from_pitch_classes([0, 1, 2])))


class TestChordLabel(unittest.TestCase):
    def test_label(self):
        self.assertEqual(chord_label_from_notes([64, 60, 67, 72]), "C-E-G")
        self.assertEqual(chord_label_from_notes([]), "")

if __name__ == "__main__":
    unittest.main()

import unittest
from chordbank.constants import NUM_BANKS, NUM_SLOTS
from chordbank.memory import MemoryStore, Slot
from chordbank.pitch import NoteRange

class TestSlot(unittest.TestCase):
    def test_create_dedupes_and_sorts(self):
        s = Slot.create([67, 60, 64, 60], "C")
        self.assertEqual(s.notes, (60, 64, 67))
        self.assertEqual(s.label, "C")
        self.assertEqual(Slot.create([60], None).label, "")

    def test_shifted_wraps(self):
        s = Slot.create([100, 104, 107], "E")
        self.assertEqual(s.shifted(5, NoteRange(21, 108)).notes, (97, 100, 105))
        self.assertEqual(s.shifted(5, NoteRange(21, 108)).label, "E")


class TestMemoryStore(unittest.TestCase):
    def setUp(self):
        self.store = MemoryStore.empty()

    def test_empty_shape(self):
        grid = self.store.to_grid()
        self.assertEqual(len(grid), NUM_BANKS)
        self.assertTrue(all(len(row) == NUM_SLOTS for row in grid))
        self.assertTrue(self.store.is_empty())

    def test_bad_grid_rejected(self):
        with self.assertRaises(ValueError):
            MemoryStore.from_rows([[None] * 12] * 11)
        with self.assertRaises(ValueError):
            MemoryStore.from_rows([[None] * 11] * 12)

    def test_save_load_clear(self):
        s1 = self.store.save(3, 4, [67, 60, 64, 60], "C")
        self.assertEqual(s1.get(3, 4), Slot((60, 64, 67), "C"))
        self.assertEqual(s1.filled_slots(3), [4])
        self.assertEqual(s1.filled_slots(0), [])
        s2 = s1.clear(3, 4)
        self.assertIsNone(s2.get(3, 4))
        self.assertTrue(s2.is_empty())

    def test_stores_are_immutable(self):
        s1 = self.store.save(0, 0, [60, 64, 67], "C")
        self.assertIsNone(self.store.get(0, 0))
        s1.clear(0, 0)
        self.assertIsNotNone(s1.get(0, 0))
        grid = s1.to_grid()
        grid[0][0] = None
        self.assertIsNotNone(s1.get(0, 0))

    def test_index_errors(self):
        with self.assertRaises(IndexError):
            self.store.get(12, 0)
        with self.assertRaises(IndexError):
            self.store.get(0, -1)
        with self.assertRaises(IndexError):
            self.store.save(0, 12, [60], "")
        with self.assertRaises(IndexError):
            self.store.bank(-1)

    def test_load_wraps_into_range(self):
        store = self.store.save(0, 0, [100, 104, 107], "E")
        self.assertEqual(store.load(0, 0).notes, (100, 104, 107))
        self.assertEqual(store.load(0, 0, NoteRange(48, 71)).notes, (64, 68, 71))
        self.assertIsNone(store.load(0, 1, NoteRange(48, 71)))

    def test_rotate_moves_banks_and_notes(self):
        store = self.store.save(0, 0, [60, 64, 67], "C").save(11, 5, [59, 62, 66], "Bm")
        rotated = store.rotate(2, NoteRange())
        self.assertIsNone(rotated.get(0, 0))
        self.assertEqual(rotated.get(2, 0), Slot((62, 66, 69), "C"))
        # bank 11 + 2 wraps to bank 1
        self.assertEqual(rotated.get(1, 5), Slot((61, 64, 68), "Bm"))

    def test_rotate_round_trip(self):
        store = self.store.save(0, 0, [48, 55, 64, 71], "Cmaj7").save(7, 11, [55, 59, 62, 65], "G7")
        for d in (-12, -7, -1, 1, 5, 12):
            self.assertEqual(store.rotate(d, NoteRange()).rotate(-d, NoteRange()), store)

    def test_rotate_by_octave_keeps_banks(self):
        store = self.store.save(4, 2, [64, 67, 71], "Em")
        rotated = store.rotate(12, NoteRange())
        self.assertEqual(rotated.get(4, 2).notes, (76, 79, 83))

    def test_rotate_wraps_into_range(self):
        store = self.store.save(0, 1, [100, 104, 107], "E")
        rotated = store.rotate(5, NoteRange(21, 108))
        self.assertEqual(rotated.get(5, 1).notes, (97, 100, 105))
        for n in rotated.get(5, 1).notes:
            self.assertIn(n, NoteRange(21, 108))

    def test_rewrap(self):
        store = self.store.save(2, 3, [100, 104, 107], "E")
        rewrapped = store.rewrap(NoteRange(48, 71))
        self.assertEqual(rewrapped.get(2, 3), Slot((64, 68, 71), "E"))
        self.assertIsNone(rewrapped.get(0, 0))

if __name__ == "__main__":
    unittest.main()

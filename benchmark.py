import time
import numpy as np
from chordbank.chord_detection import detect_chord
from chordbank.memory import MemoryStore
from chordbank.pitch import NoteRange

def run_benchmark():
    rng = np.random.default_rng(42)
    # 100,000 random selections of 2-6 notes on an 88-key piano
    sizes = rng.integers(2, 7, size=100000)
    selections = [rng.integers(21, 109, size=k).tolist() for k in sizes]

    # Pre-warm
    detect_chord(selections[0])

    start_time = time.perf_counter()
    for notes in selections:
        detect_chord(notes)
    duration = time.perf_counter() - start_time
    print(f"Recognition: {len(selections)} selections in {duration:.4f} seconds")

    store = MemoryStore.empty()
    for bank in range(12):
        for slot in range(12):
            store = store.save(bank, slot, selections[bank * 12 + slot], "")

    start_time = time.perf_counter()
    for _ in range(1000):
        store = store.rotate(1, NoteRange(21, 108))
    duration = time.perf_counter() - start_time
    print(f"Rotation: 1000 full-grid rotations in {duration:.4f} seconds")


if __name__ == '__main__':
    run_benchmark()

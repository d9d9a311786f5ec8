"""
Test cases for converting MediaPipe results into FrameResults.
"""
import unittest
import sys
from pathlib import Path
from types import SimpleNamespace

import numpy as np

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from mathiverse.tracker import HandsTracker


def _mp_hand(visibility: float):
    points = [SimpleNamespace(x=0.1 * (i % 10), y=0.5, z=-0.01, visibility=visibility) for i in range(21)]
    return SimpleNamespace(landmark=points)


def _mp_label(label: str, score: float):
    return SimpleNamespace(classification=[SimpleNamespace(label=label, score=score)])


class _StubHands:
    """Stands in for mp.solutions.hands.Hands and returns canned results."""

    def __init__(self, results):
        self.results = results
        self.closed = False

    def process(self, frame_rgb):
        return self.results

    def close(self):
        self.closed = True


def _tracker(results) -> HandsTracker:
    tracker = HandsTracker.__new__(HandsTracker)
    tracker.hands = _StubHands(results)
    return tracker


class TestHandsTrackerProcess(unittest.TestCase):

    def setUp(self):
        self.frame = np.zeros((4, 4, 3), dtype=np.uint8)

    def test_no_hands(self):
        tracker = _tracker(SimpleNamespace(multi_hand_landmarks=None, multi_handedness=None))
        self.assertTrue(tracker.process(self.frame).is_empty)

    def test_landmarks_and_labels(self):
        results = SimpleNamespace(
            multi_hand_landmarks=[_mp_hand(0.0), _mp_hand(0.8)],
            multi_handedness=[_mp_label("Left", 0.97), _mp_label("Right", 0.91)]
        )
        frame_result = _tracker(results).process(self.frame)

        self.assertEqual(len(frame_result.hands), 2)
        left, right = frame_result.hands
        self.assertEqual((left.handedness, left.score), ("Left", 0.97))
        self.assertEqual(right.handedness, "Right")
        self.assertEqual(len(left.landmarks), 21)
        self.assertAlmostEqual(left.landmarks[3].x, 0.3)
        self.assertEqual(left.landmarks[0].z, -0.01)

    def test_visibility_is_passed_through(self):
        results = SimpleNamespace(
            multi_hand_landmarks=[_mp_hand(0.0), _mp_hand(0.8)],
            multi_handedness=[_mp_label("Left", 0.97), _mp_label("Right", 0.91)]
        )
        left, right = _tracker(results).process(self.frame).hands
        self.assertEqual(left.landmarks[0].visibility, 0.0)
        self.assertEqual(right.landmarks[0].visibility, 0.8)

    def test_close(self):
        tracker = _tracker(None)
        tracker.close()
        self.assertTrue(tracker.hands.closed)


if __name__ == '__main__':
    unittest.main()

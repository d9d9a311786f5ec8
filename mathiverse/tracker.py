"""
Hand landmark detection using MediaPipe.
"""
import logging
from typing import List, Tuple

import cv2
import mediapipe as mp
import numpy as np

from .types import FrameResult, Hand, Landmark


logger = logging.getLogger(__name__)


class TrackerUnavailableError(RuntimeError):
    """The hand tracker or the camera it reads from could not be started."""


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, max_num_hands: int = 2, model_complexity: int = 1,
                 min_detection_conf: float = 0.5, min_tracking_conf: float = 0.5):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect
            model_complexity: MediaPipe model complexity (0 or 1)
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking

        Raises:
            TrackerUnavailableError: if MediaPipe Hands cannot be constructed
        """
        try:
            self.mp_hands = mp.solutions.hands
            self.hands = self.mp_hands.Hands(
                static_image_mode=False,
                max_num_hands=max_num_hands,
                model_complexity=model_complexity,
                min_detection_confidence=min_detection_conf,
                min_tracking_confidence=min_tracking_conf
            )
        except (AttributeError, RuntimeError, OSError) as e:
            raise TrackerUnavailableError(f"MediaPipe Hands unavailable: {e}") from e
        logger.info("Hands tracker ready (max_num_hands=%d)", max_num_hands)

    def process(self, frame_bgr: np.ndarray) -> FrameResult:
        """
        Process a frame and return every detected hand.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            FrameResult with one Hand per detection, in tracker order
        """
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.hands.process(frame_rgb)

        if not results.multi_hand_landmarks:
            return FrameResult()

        handedness = results.multi_handedness or []
        hands = []
        for i, hand_landmarks in enumerate(results.multi_hand_landmarks):
            landmarks = tuple(
                Landmark(lm.x, lm.y, lm.z, lm.visibility)
                for lm in hand_landmarks.landmark
            )
            label, score = "Right", 0.0
            if i < len(handedness):
                classification = handedness[i].classification[0]
                label, score = classification.label, classification.score
            hands.append(Hand(landmarks=landmarks, handedness=label, score=score))

        return FrameResult(hands=tuple(hands))

    def close(self) -> None:
        """Release the MediaPipe graph."""
        self.hands.close()


def draw_landmarks(frame: np.ndarray, landmarks: List[Landmark], mirror_x: bool = False,
                   color: Tuple[int, int, int] = (0, 255, 0)) -> np.ndarray:
    """
    Draw hand landmarks on the frame.

    Args:
        frame: Input frame
        landmarks: List of normalized landmarks
        mirror_x: Draw at 1 - x, for a mirrored preview
        color: BGR color of the joints

    Returns:
        Frame with landmarks drawn
    """
    height, width = frame.shape[:2]

    for lm in landmarks:
        x = 1.0 - lm.x if mirror_x else lm.x
        px = int(x * width)
        py = int(lm.y * height)
        cv2.circle(frame, (px, py), 3, color, -1)

    return frame

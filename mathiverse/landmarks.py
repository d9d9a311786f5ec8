"""
Gesture interpretation from MediaPipe hand landmarks.

All functions here are pure: they look at one hand's landmark list and never
keep state between calls. A missing, empty or truncated list means "no
gesture" and yields the neutral result instead of raising.
"""
import math
from typing import Optional, Sequence

from .types import GestureState, Landmark, Point


NUM_LANDMARKS = 21

WRIST = 0
THUMB_IP = 3
THUMB_TIP = 4
INDEX_TIP = 8
PINKY_MCP = 17

FINGER_TIPS = (8, 12, 16, 20)
FINGER_PIPS = (6, 10, 14, 18)

PINCH_THRESHOLD = 0.05


def _usable(landmarks: Optional[Sequence[Landmark]]) -> bool:
    return landmarks is not None and len(landmarks) >= NUM_LANDMARKS


def count_fingers(landmarks: Optional[Sequence[Landmark]]) -> int:
    """
    Count the number of extended fingers.

    The thumb is judged horizontally. A thumb tip left of the pinky MCP is
    taken as a right hand, which is extended when the tip is left of the IP
    joint; a left hand uses the mirrored comparison. The other fingers are
    extended when the tip is above (smaller y than) the PIP joint. No rotation
    correction is done, so the hand is assumed upright.

    Args:
        landmarks: List of 21 hand landmarks

    Returns:
        Number of extended fingers (0-5)
    """
    if not _usable(landmarks):
        return 0

    extended_count = 0

    thumb_tip_x = landmarks[THUMB_TIP][0]
    thumb_ip_x = landmarks[THUMB_IP][0]
    is_right_hand = thumb_tip_x < landmarks[PINKY_MCP][0]
    if is_right_hand:
        if thumb_tip_x < thumb_ip_x:
            extended_count += 1
    elif thumb_tip_x > thumb_ip_x:
        extended_count += 1

    for tip_idx, pip_idx in zip(FINGER_TIPS, FINGER_PIPS):
        if landmarks[tip_idx][1] < landmarks[pip_idx][1]:  # tip y < pip y (inverted y-axis)
            extended_count += 1

    return extended_count


def pinch_distance(landmarks: Optional[Sequence[Landmark]]) -> Optional[float]:
    """Distance between thumb tip and index tip in normalized x/y, or None."""
    if not _usable(landmarks):
        return None
    thumb = landmarks[THUMB_TIP]
    index = landmarks[INDEX_TIP]
    return math.hypot(thumb[0] - index[0], thumb[1] - index[1])


def is_pinching(landmarks: Optional[Sequence[Landmark]], threshold: float = PINCH_THRESHOLD) -> bool:
    """
    Check if thumb tip and index tip are pinched together.

    Args:
        landmarks: List of 21 hand landmarks
        threshold: Maximum (exclusive) tip distance in normalized units

    Returns:
        True if the tips are closer than the threshold
    """
    distance = pinch_distance(landmarks)
    return distance is not None and distance < threshold


def index_finger_tip(landmarks: Optional[Sequence[Landmark]]) -> Optional[Point]:
    """Raw (x, y) of the index fingertip, or None when there is no hand."""
    if not _usable(landmarks):
        return None
    tip = landmarks[INDEX_TIP]
    return Point(tip[0], tip[1])


def gesture_state(landmarks: Optional[Sequence[Landmark]], pinch_threshold: float = PINCH_THRESHOLD) -> GestureState:
    """Bundle finger count, pinch and index tip for one hand."""
    return GestureState(
        finger_count=count_fingers(landmarks),
        is_pinching=is_pinching(landmarks, pinch_threshold),
        index_tip=index_finger_tip(landmarks)
    )


def to_screen(point: Point, mirror_x: bool = True) -> Point:
    """Map a camera-space point onto the (optionally mirrored) preview."""
    if mirror_x:
        return Point(1.0 - point.x, point.y)
    return Point(point.x, point.y)

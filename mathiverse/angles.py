"""
Angle geometry for the angle-measuring game.

Angles are in degrees, measured counter-clockwise from the positive x axis
in a Y-up convention. Inputs are screen coordinates (Y grows downward), so
the vertical delta is negated before taking the arctangent.
"""
import logging
import math
from typing import Optional, Tuple

import numpy as np

from .landmarks import INDEX_TIP, THUMB_TIP, WRIST, NUM_LANDMARKS
from .types import AngleReading, FrameResult, Hand, Point


logger = logging.getLogger(__name__)

COMPLETE = "Complete (360°)"
ACUTE = "Acute"
RIGHT = "Right"
OBTUSE = "Obtuse"
STRAIGHT = "Straight"
REFLEX = "Reflex"

DEFAULT_PARALLEL_DET_EPS = 1.0


def vector_angle(p1: Point, p2: Point) -> float:
    """
    Angle of the vector p1 -> p2.

    Args:
        p1: Start point in screen coordinates
        p2: End point in screen coordinates

    Returns:
        Degrees in [0, 360)
    """
    dy = -(p2[1] - p1[1])
    dx = p2[0] - p1[0]
    theta = math.degrees(math.atan2(dy, dx))
    if theta < 0:
        theta += 360.0
    # -0.0 and tiny negatives can round up to exactly 360.0
    return theta if theta < 360.0 else 0.0


def angle_difference(angle1: float, angle2: float) -> float:
    """Counter-clockwise sweep from angle1 to angle2, in [0, 360)."""
    diff = (angle2 - angle1) % 360.0
    return diff if diff < 360.0 else 0.0


def classify_angle(angle: float) -> str:
    """Name the angle category, with a few degrees of tolerance for jitter."""
    if angle < 5 or angle > 355:
        return COMPLETE
    if angle < 85:
        return ACUTE
    if angle <= 95:
        return RIGHT
    if angle < 175:
        return OBTUSE
    if angle <= 185:
        return STRAIGHT
    return REFLEX


def _to_pixels(hand: Hand, index: int, frame_wh: Tuple[int, int], mirror_x: bool) -> Point:
    width, height = frame_wh
    lm = hand.landmarks[index]
    x = 1.0 - lm.x if mirror_x else lm.x
    return Point(x * width, lm.y * height)


def ray_intersection(origin1: Point, through1: Point, origin2: Point, through2: Point,
                     det_eps: float = DEFAULT_PARALLEL_DET_EPS) -> Optional[Point]:
    """
    Intersection of the lines origin1->through1 and origin2->through2.

    Returns None when the lines are near-parallel, i.e. when the determinant
    of the two direction vectors has magnitude <= det_eps.
    """
    o1 = np.array(origin1, dtype=float)
    o2 = np.array(origin2, dtype=float)
    d1 = np.array(through1, dtype=float) - o1
    d2 = np.array(through2, dtype=float) - o2

    system = np.column_stack((d1, -d2))
    det = np.linalg.det(system)
    if abs(det) <= det_eps:
        return None

    t, _ = np.linalg.solve(system, o2 - o1)
    hit = o1 + t * d1
    return Point(float(hit[0]), float(hit[1]))


def measure_angle(frame: FrameResult, frame_wh: Tuple[int, int], mirror_x: bool = True,
                  use_ray_intersection: bool = True,
                  parallel_det_eps: float = DEFAULT_PARALLEL_DET_EPS) -> Optional[AngleReading]:
    """
    Measure the angle formed by one or two hands.

    Two hands (one labelled Left, one Right): the base ray runs to the Right
    hand's index tip, the target ray to the Left hand's index tip. The vertex
    is where the two wrist->index lines cross, or the midpoint of the wrists
    when the lines are near-parallel or intersection is disabled.

    One hand: the vertex is the wrist, the base ray runs to the thumb tip and
    the target ray to the index tip.

    Args:
        frame: Hands detected in the current frame
        frame_wh: Frame dimensions (width, height) used as pixel space
        mirror_x: Map x to 1 - x for a mirrored preview
        use_ray_intersection: Allow the intersection vertex in two-hand mode
        parallel_det_eps: Determinant magnitude treated as parallel

    Returns:
        AngleReading, or None when no usable hand is present
    """
    usable = FrameResult(hands=tuple(
        hand for hand in frame.hands if len(hand.landmarks) >= NUM_LANDMARKS
    ))
    if usable.is_empty:
        return None

    left = usable.by_label("Left")
    right = usable.by_label("Right")

    if left is not None and right is not None:
        left_wrist = _to_pixels(left, WRIST, frame_wh, mirror_x)
        right_wrist = _to_pixels(right, WRIST, frame_wh, mirror_x)
        base = _to_pixels(right, INDEX_TIP, frame_wh, mirror_x)
        target = _to_pixels(left, INDEX_TIP, frame_wh, mirror_x)

        vertex = None
        if use_ray_intersection:
            vertex = ray_intersection(right_wrist, base, left_wrist, target, parallel_det_eps)
            if vertex is None:
                logger.debug("Index rays near-parallel, using wrist midpoint")
        if vertex is None:
            vertex = Point((left_wrist.x + right_wrist.x) / 2.0,
                           (left_wrist.y + right_wrist.y) / 2.0)
        two_hands = True
    else:
        hand = usable.hands[0]
        vertex = _to_pixels(hand, WRIST, frame_wh, mirror_x)
        base = _to_pixels(hand, THUMB_TIP, frame_wh, mirror_x)
        target = _to_pixels(hand, INDEX_TIP, frame_wh, mirror_x)
        two_hands = False

    degrees = angle_difference(vector_angle(vertex, base), vector_angle(vertex, target))
    return AngleReading(
        degrees=degrees,
        category=classify_angle(degrees),
        vertex=vertex,
        base=base,
        target=target,
        two_hands=two_hands
    )

"""
Mathiverse - Hand Gesture Math Games

A Python app that reads webcam frames, detects hand landmarks using MediaPipe,
and turns finger counts, pinches and hand angles into answers for five small
math games.
"""

__version__ = "0.1.0"

from .types import (Landmark, Hand, FrameResult, GestureState, GameMode, GameView, Feedback,
                    ArithmeticProblem, NumberPickerProblem, MathPuzzleProblem, RightBoxLevel,
                    DraggableNumber, AngleReading, RendererProto)
from .config import load_config, Cfg
from .renderer_mock import MockRenderer
from .landmarks import count_fingers, is_pinching, index_finger_tip, gesture_state
from .angles import vector_angle, angle_difference, classify_angle, measure_angle
from .games import (ArithmeticGame, NumberPickerGame, MathPuzzleGame, RightBoxGame, AngleGame,
                    create_game)

__all__ = [
    "Landmark",
    "Hand",
    "FrameResult",
    "GestureState",
    "GameMode",
    "GameView",
    "Feedback",
    "ArithmeticProblem",
    "NumberPickerProblem",
    "MathPuzzleProblem",
    "RightBoxLevel",
    "DraggableNumber",
    "AngleReading",
    "RendererProto",
    "load_config",
    "Cfg",
    "MockRenderer",
    "count_fingers",
    "is_pinching",
    "index_finger_tip",
    "gesture_state",
    "vector_angle",
    "angle_difference",
    "classify_angle",
    "measure_angle",
    "ArithmeticGame",
    "NumberPickerGame",
    "MathPuzzleGame",
    "RightBoxGame",
    "AngleGame",
    "create_game",
]

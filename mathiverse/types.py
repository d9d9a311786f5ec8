"""
Type definitions for the hand-gesture math games.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, NamedTuple, Optional, Protocol, Tuple, runtime_checkable


Handedness = Literal["Left", "Right"]
NumberType = Literal["even", "odd", "prime", "fibonacci"]
Parity = Literal["even", "odd"]
FeedbackColor = Literal["green", "red"]


class GameMode(Enum):
    """Screens offered by the navigation shell."""
    MENU = "MENU"
    ARITHMETIC = "ARITHMETIC"
    NUMBER_PICKER = "NUMBER_PICKER"
    MATH_PUZZLE = "MATH_PUZZLE"
    RIGHT_BOX = "RIGHT_BOX"
    ANGLE_MAGIC = "ANGLE_MAGIC"


class Landmark(NamedTuple):
    """One normalized hand joint. x, y in [0..1], z is camera-relative depth."""
    x: float
    y: float
    z: float = 0.0
    visibility: Optional[float] = None


class Point(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class Hand:
    """A detected hand: 21 landmarks in the MediaPipe order plus its label."""
    landmarks: Tuple[Landmark, ...]
    handedness: Handedness = "Right"
    score: float = 1.0


@dataclass(frozen=True)
class FrameResult:
    """All hands detected in a single camera frame (0-2 in practice)."""
    hands: Tuple[Hand, ...] = ()

    @property
    def is_empty(self) -> bool:
        return len(self.hands) == 0

    def by_label(self, label: Handedness) -> Optional[Hand]:
        """First hand carrying the given handedness label, if any."""
        for hand in self.hands:
            if hand.handedness == label:
                return hand
        return None


@dataclass(frozen=True)
class GestureState:
    """Per-hand gesture summary, recomputed from scratch every frame."""
    finger_count: int
    is_pinching: bool
    index_tip: Optional[Point]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in normalized screen space."""
    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def around(cls, center: Point, size: float) -> "Rect":
        half = size / 2.0
        return cls(center.x - half, center.y - half, center.x + half, center.y + half)

    def overlaps(self, other: "Rect") -> bool:
        return (self.left < other.right and self.right > other.left and
                self.top < other.bottom and self.bottom > other.top)


@dataclass(frozen=True)
class Feedback:
    """Transient message shown after an answer; dropped once expires_at passes."""
    message: str
    color: FeedbackColor
    kind: str  # correct, wrong, wrong_count, wrong_box
    expires_at: float


@dataclass(frozen=True)
class ArithmeticProblem:
    num1: int
    num2: int
    answer: int


@dataclass(frozen=True)
class NumberPickerProblem:
    numbers: Tuple[int, ...]
    type: NumberType
    correct_answer: int


@dataclass(frozen=True)
class MathPuzzleProblem:
    question: str
    options: Tuple[int, ...]
    correct_answer: int


@dataclass(frozen=True)
class DraggableNumber:
    """A number tile in the sorting game. Positions are normalized screen coords."""
    id: str
    value: int
    x: float
    y: float
    is_dragging: bool = False


@dataclass(frozen=True)
class RightBoxLevel:
    target_type: Parity
    numbers: Tuple[DraggableNumber, ...]

    def find(self, item_id: Optional[str]) -> Optional[DraggableNumber]:
        for item in self.numbers:
            if item.id == item_id:
                return item
        return None


@dataclass(frozen=True)
class AngleReading:
    """Angle measured between a base ray and a target ray, in pixel space."""
    degrees: float
    category: str
    vertex: Point
    base: Point
    target: Point
    two_hands: bool

    @property
    def rounded(self) -> int:
        return int(round(self.degrees))


@dataclass
class GameView:
    """Everything an external renderer needs to draw one game screen."""
    mode: GameMode
    score: int = 0
    feedback: Optional[Feedback] = None
    cursor: Optional[Point] = None
    is_pinching: bool = False
    problem: Any = None
    targets: Tuple[Rect, ...] = field(default_factory=tuple)
    angle: Optional[AngleReading] = None


@runtime_checkable
class RendererProto(Protocol):
    """Abstract protocol for collaborators that draw a game's display model."""

    async def render(self, view: GameView) -> None:
        """Draw the given display model."""
        ...

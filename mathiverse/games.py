"""
Per-game interaction state machines.

Each game consumes one FrameResult per camera frame and keeps its own
interaction state: cursor, previous-frame pinch, dragged item, feedback and
pending deferred callbacks. Nothing is shared between game instances.
"""
import logging
import random
from dataclasses import replace
from typing import Callable, Dict, Optional, Sequence, Tuple, Type

from .angles import measure_angle
from .config import Cfg
from .generators import (NUMBER_CHECKERS, generate_arithmetic_problem, generate_math_puzzle_problem,
                         generate_number_picker_problem, generate_right_box_level, random_number_type,
                         random_spawn_position)
from .landmarks import count_fingers, index_finger_tip, is_pinching, to_screen
from .scheduler import DeferredCallbacks
from .types import (AngleReading, ArithmeticProblem, DraggableNumber, Feedback, FeedbackColor, FrameResult,
                    GameMode, GameView, Hand, MathPuzzleProblem, NumberPickerProblem, Point, Rect,
                    RightBoxLevel)


logger = logging.getLogger(__name__)


def layout_targets(count: int, y_center: float = 0.6, width: float = 0.14, height: float = 0.2,
                   spacing: float = 0.04) -> Tuple[Rect, ...]:
    """Centred row of equal option boxes in normalized screen space."""
    total = count * width + (count - 1) * spacing
    left = 0.5 - total / 2.0
    top = y_center - height / 2.0
    rects = []
    for i in range(count):
        x = left + i * (width + spacing)
        rects.append(Rect(x, top, x + width, top + height))
    return tuple(rects)


class GameSession:
    """
    Common shape of every game screen.

    Subclasses implement _process(), which sees each frame after due deferred
    callbacks have run and expired feedback has been dropped.
    """

    mode: GameMode = GameMode.MENU

    def __init__(self, cfg: Cfg, rng: Optional[random.Random] = None,
                 on_exit: Optional[Callable[[], None]] = None):
        self.cfg = cfg
        self.rng = rng
        self.on_exit = on_exit
        self.timers = DeferredCallbacks()
        self.score = 0
        self.feedback: Optional[Feedback] = None
        self.cursor: Optional[Point] = None
        self.was_pinching = False

    def update(self, frame: FrameResult, t_now: float) -> GameView:
        """
        Process one frame.

        Args:
            frame: Hands detected in the current frame
            t_now: Current timestamp in seconds

        Returns:
            Display model after this frame's reactions
        """
        self.timers.run_due(t_now)
        if self.feedback is not None and t_now >= self.feedback.expires_at:
            self.feedback = None
        self._process(frame, t_now)
        return self.view()

    def _process(self, frame: FrameResult, t_now: float) -> None:
        raise NotImplementedError

    def view(self) -> GameView:
        return GameView(
            mode=self.mode,
            score=self.score,
            feedback=self.feedback,
            cursor=self.cursor,
            is_pinching=self.was_pinching
        )

    def reset(self, t_now: float = 0.0) -> None:
        """Start over with a zero score and a fresh problem."""
        self.timers.clear()
        self.timers.advance()
        self.score = 0
        self.feedback = None
        self.cursor = None
        self.was_pinching = False

    def back_to_menu(self) -> None:
        """Drop pending work and hand control back to the navigation shell."""
        self.timers.clear()
        self.timers.advance()
        self.cursor = None
        self.was_pinching = False
        if self.on_exit is not None:
            self.on_exit()

    def _show_feedback(self, message: str, color: FeedbackColor, kind: str,
                       t_now: float, duration_ms: int) -> None:
        self.feedback = Feedback(message=message, color=color, kind=kind,
                                 expires_at=t_now + duration_ms / 1000.0)

    def _primary_hand(self, frame: FrameResult) -> Optional[Hand]:
        return frame.hands[0] if frame.hands else None

    def _screen_cursor(self, hand: Hand) -> Optional[Point]:
        tip = index_finger_tip(hand.landmarks)
        if tip is None:
            return None
        return to_screen(tip, self.cfg.gestures.mirror_x)


class ArithmeticGame(GameSession):
    """Show the sum of two numbers with extended fingers on one or two hands."""

    mode = GameMode.ARITHMETIC

    def __init__(self, cfg: Cfg, rng: Optional[random.Random] = None,
                 on_exit: Optional[Callable[[], None]] = None,
                 problem: Optional[ArithmeticProblem] = None):
        super().__init__(cfg, rng, on_exit)
        self.game_cfg = cfg.games.arithmetic
        self.problem = problem or generate_arithmetic_problem(rng)
        self.last_detection_time: Optional[float] = None

    def _process(self, frame: FrameResult, t_now: float) -> None:
        if frame.is_empty:
            return

        total_fingers = sum(count_fingers(hand.landmarks) for hand in frame.hands)

        if self.feedback is not None:
            return
        cooldown_s = self.game_cfg.cooldown_ms / 1000.0
        if self.last_detection_time is not None and t_now - self.last_detection_time < cooldown_s:
            return
        if total_fingers <= 0:
            return

        self.last_detection_time = t_now
        if total_fingers == self.problem.answer:
            self.score += self.game_cfg.points
            self._show_feedback("Correct!", "green", "correct", t_now, self.game_cfg.cooldown_ms)
            self.timers.schedule(cooldown_s, t_now, self._next_problem)
            logger.info("Arithmetic %d + %d solved, score %d",
                        self.problem.num1, self.problem.num2, self.score)
        else:
            self._show_feedback(f"Not quite! That's {total_fingers}.", "red", "wrong_count",
                                t_now, self.game_cfg.wrong_feedback_ms)
            logger.debug("Arithmetic wrong count %d (expected %d)", total_fingers, self.problem.answer)

    def _next_problem(self) -> None:
        self.timers.advance()
        self.problem = generate_arithmetic_problem(self.rng)
        self.feedback = None

    def view(self) -> GameView:
        view = super().view()
        view.problem = self.problem
        return view

    def reset(self, t_now: float = 0.0) -> None:
        super().reset(t_now)
        self.last_detection_time = None
        self.problem = generate_arithmetic_problem(self.rng)


class SelectionGame(GameSession):
    """
    Pinch-to-select over a row of option boxes.

    A rising pinch edge while no feedback shows hit-tests the cursor square
    against the option boxes; the first overlapping box is the selection.
    """

    correct_message = "Correct!"
    wrong_message = "Wrong!"

    def __init__(self, cfg: Cfg, rng: Optional[random.Random] = None,
                 on_exit: Optional[Callable[[], None]] = None):
        super().__init__(cfg, rng, on_exit)
        self.targets: Tuple[Rect, ...] = ()

    @property
    def options(self) -> Sequence[int]:
        raise NotImplementedError

    def set_targets(self, targets: Sequence[Rect]) -> None:
        """Replace the option hit boxes, e.g. with the renderer's real layout."""
        self.targets = tuple(targets)

    def hit_test(self, cursor: Point) -> Optional[int]:
        """Option under the cursor square, first match in display order."""
        cursor_rect = Rect.around(cursor, self.cfg.gestures.cursor_size)
        for value, rect in zip(self.options, self.targets):
            if cursor_rect.overlaps(rect):
                return value
        return None

    def _process(self, frame: FrameResult, t_now: float) -> None:
        hand = self._primary_hand(frame)
        if hand is None:
            self.cursor = None
            self.was_pinching = False
            return

        self.cursor = self._screen_cursor(hand)
        pinching = is_pinching(hand.landmarks, self.cfg.gestures.pinch_threshold)
        rising_edge = pinching and not self.was_pinching
        self.was_pinching = pinching

        if not rising_edge or self.feedback is not None or self.cursor is None:
            return

        selected = self.hit_test(self.cursor)
        if selected is not None:
            self._resolve(selected, t_now)

    def _resolve(self, selected: int, t_now: float) -> None:
        game_cfg = self.game_cfg
        if selected == self.problem.correct_answer:
            self.score += game_cfg.points
            self._show_feedback(self.correct_message, "green", "correct", t_now, game_cfg.next_problem_ms)
            self.timers.schedule(game_cfg.next_problem_ms / 1000.0, t_now, self._next_problem)
            logger.info("%s: picked %d, score %d", self.mode.value, selected, self.score)
        else:
            self._show_feedback(self.wrong_message, "red", "wrong", t_now, game_cfg.wrong_feedback_ms)
            logger.debug("%s: picked %d, expected %d", self.mode.value, selected, self.problem.correct_answer)

    def _next_problem(self) -> None:
        self.timers.advance()
        self._new_problem()
        self.feedback = None

    def _new_problem(self) -> None:
        raise NotImplementedError

    def view(self) -> GameView:
        view = super().view()
        view.problem = self.problem
        view.targets = self.targets
        return view

    def reset(self, t_now: float = 0.0) -> None:
        super().reset(t_now)
        self._new_problem()


class NumberPickerGame(SelectionGame):
    """Pinch the one number of the requested type (even, odd, prime, fibonacci)."""

    mode = GameMode.NUMBER_PICKER
    correct_message = "Awesome!"
    wrong_message = "Try Again!"

    def __init__(self, cfg: Cfg, rng: Optional[random.Random] = None,
                 on_exit: Optional[Callable[[], None]] = None,
                 problem: Optional[NumberPickerProblem] = None):
        super().__init__(cfg, rng, on_exit)
        self.game_cfg = cfg.games.number_picker
        self.problem = problem or generate_number_picker_problem("even", rng)
        self.targets = layout_targets(len(self.problem.numbers))

    @property
    def options(self) -> Sequence[int]:
        return self.problem.numbers

    def _new_problem(self) -> None:
        self.problem = generate_number_picker_problem(random_number_type(self.rng), self.rng)


class MathPuzzleGame(SelectionGame):
    """Pinch the correct result of a single-operation question."""

    mode = GameMode.MATH_PUZZLE

    def __init__(self, cfg: Cfg, rng: Optional[random.Random] = None,
                 on_exit: Optional[Callable[[], None]] = None,
                 problem: Optional[MathPuzzleProblem] = None):
        super().__init__(cfg, rng, on_exit)
        self.game_cfg = cfg.games.math_puzzle
        self.problem = problem or generate_math_puzzle_problem(rng)
        self.targets = layout_targets(len(self.problem.options), width=0.18, height=0.22)

    @property
    def options(self) -> Sequence[int]:
        return self.problem.options

    def _new_problem(self) -> None:
        self.problem = generate_math_puzzle_problem(self.rng)


class RightBoxGame(GameSession):
    """
    Drag number tiles into the box on the right when they have the target parity.

    Features:
    - Drag starts only on a rising pinch edge over a tile
    - The dragged tile follows the cursor while the pinch is held
    - Release inside the drop zone scores or penalizes the tile
    - Losing the hand ends the drag without evaluating the drop zone
    - Once a level is cleared, tiles ignore pinches until the next level
    - The item collection is replaced as a new tuple on every change
    """

    mode = GameMode.RIGHT_BOX

    def __init__(self, cfg: Cfg, rng: Optional[random.Random] = None,
                 on_exit: Optional[Callable[[], None]] = None,
                 level: Optional[RightBoxLevel] = None):
        super().__init__(cfg, rng, on_exit)
        self.game_cfg = cfg.games.right_box
        self.level = level or generate_right_box_level(self.game_cfg.item_count, rng)
        self.dragged_id: Optional[str] = None
        self.level_pending = False

    def _process(self, frame: FrameResult, t_now: float) -> None:
        hand = self._primary_hand(frame)
        cursor = self._screen_cursor(hand) if hand is not None else None
        if cursor is None:
            self.cursor = None
            self.was_pinching = False
            self._end_drag()
            return

        self.cursor = cursor
        pinching = is_pinching(hand.landmarks, self.cfg.gestures.pinch_threshold)

        if self.level_pending:
            # cleared level: leftover tiles stay put until the next one arrives
            self._end_drag()
        elif pinching:
            if not self.was_pinching:
                hit = self.hit_test(cursor)
                if hit is not None:
                    self.dragged_id = hit.id
                    self._replace_item(hit.id, is_dragging=True)
                    logger.debug("Dragging %s (%d)", hit.id, hit.value)
            elif self.dragged_id is not None:
                self._replace_item(self.dragged_id, x=cursor.x, y=cursor.y)
        elif self.was_pinching and self.dragged_id is not None:
            self._release(t_now)

        self.was_pinching = pinching

    def hit_test(self, cursor: Point) -> Optional[DraggableNumber]:
        """First tile whose centre lies within the hit radius of the cursor."""
        for item in self.level.numbers:
            dx = item.x - cursor.x
            dy = item.y - cursor.y
            if dx * dx + dy * dy < self.game_cfg.hit_radius_sq:
                return item
        return None

    def _release(self, t_now: float) -> None:
        item = self.level.find(self.dragged_id)
        self.dragged_id = None
        if item is None:
            return
        if item.x > self.game_cfg.drop_zone_x:
            self._evaluate_drop(item, t_now)
        else:
            self._replace_item(item.id, is_dragging=False)

    def _matches_target(self, value: int) -> bool:
        return NUMBER_CHECKERS[self.level.target_type](value)

    def _evaluate_drop(self, item: DraggableNumber, t_now: float) -> None:
        if self._matches_target(item.value):
            self.score += self.game_cfg.points
            remaining = tuple(n for n in self.level.numbers if n.id != item.id)
            self.level = replace(self.level, numbers=remaining)
            logger.info("Sorted %d into the %s box, score %d", item.value, self.level.target_type, self.score)

            if not any(self._matches_target(n.value) for n in remaining):
                self._show_feedback("Correct!", "green", "correct", t_now, self.game_cfg.next_level_ms)
                if not self.level_pending:
                    self.level_pending = True
                    self.timers.schedule(self.game_cfg.next_level_ms / 1000.0, t_now, self._next_level)
            else:
                self._show_feedback("Correct!", "green", "correct", t_now, self.game_cfg.feedback_ms)
        else:
            self.score = max(0, self.score - self.game_cfg.penalty)
            x, y = random_spawn_position(self.rng)
            self._replace_item(item.id, x=x, y=y, is_dragging=False)
            self._show_feedback("Wrong Box!", "red", "wrong_box", t_now, self.game_cfg.feedback_ms)
            logger.debug("%d is not %s, score %d", item.value, self.level.target_type, self.score)

    def _next_level(self) -> None:
        self.timers.advance()
        self._set_level(generate_right_box_level(self.game_cfg.item_count, self.rng))
        self.feedback = None

    def _set_level(self, level: RightBoxLevel) -> None:
        self.level = level
        self.level_pending = False
        if self.level.find(self.dragged_id) is None:
            self.dragged_id = None
        logger.debug("New level: %d tiles, target %s", len(level.numbers), level.target_type)

    def _replace_item(self, item_id: str, **changes) -> None:
        numbers = tuple(replace(n, **changes) if n.id == item_id else n for n in self.level.numbers)
        self.level = replace(self.level, numbers=numbers)

    def _end_drag(self) -> None:
        if self.dragged_id is None:
            return
        if self.level.find(self.dragged_id) is not None:
            self._replace_item(self.dragged_id, is_dragging=False)
        self.dragged_id = None

    def view(self) -> GameView:
        view = super().view()
        view.problem = self.level
        return view

    def reset(self, t_now: float = 0.0) -> None:
        self._end_drag()
        super().reset(t_now)
        self._set_level(generate_right_box_level(self.game_cfg.item_count, self.rng))

    def back_to_menu(self) -> None:
        self._end_drag()
        super().back_to_menu()


class AngleGame(GameSession):
    """Live angle readout from one or two hands; no score, no cooldown."""

    mode = GameMode.ANGLE_MAGIC

    def __init__(self, cfg: Cfg, rng: Optional[random.Random] = None,
                 on_exit: Optional[Callable[[], None]] = None):
        super().__init__(cfg, rng, on_exit)
        self.game_cfg = cfg.games.angle
        self.reading: Optional[AngleReading] = None

    def _process(self, frame: FrameResult, t_now: float) -> None:
        self.reading = measure_angle(
            frame,
            frame_wh=(self.cfg.camera.width, self.cfg.camera.height),
            mirror_x=self.cfg.gestures.mirror_x,
            use_ray_intersection=self.game_cfg.use_ray_intersection,
            parallel_det_eps=self.game_cfg.parallel_det_eps
        )

    def view(self) -> GameView:
        view = super().view()
        view.angle = self.reading
        return view

    def reset(self, t_now: float = 0.0) -> None:
        super().reset(t_now)
        self.reading = None


GAME_CLASSES: Dict[GameMode, Type[GameSession]] = {
    GameMode.ARITHMETIC: ArithmeticGame,
    GameMode.NUMBER_PICKER: NumberPickerGame,
    GameMode.MATH_PUZZLE: MathPuzzleGame,
    GameMode.RIGHT_BOX: RightBoxGame,
    GameMode.ANGLE_MAGIC: AngleGame,
}


def create_game(mode: GameMode, cfg: Cfg, rng: Optional[random.Random] = None,
                on_exit: Optional[Callable[[], None]] = None) -> GameSession:
    """Build the game for a screen selected in the navigation shell."""
    if mode not in GAME_CLASSES:
        raise ValueError(f"No game for mode {mode}")
    return GAME_CLASSES[mode](cfg, rng=rng, on_exit=on_exit)

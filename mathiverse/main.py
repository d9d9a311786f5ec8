"""
Main application for the hand-gesture math games.
"""
import asyncio
import logging
import time
from typing import Dict, Optional, Tuple

import cv2
import numpy as np

from .config import Cfg, load_config
from .games import GameSession, create_game
from .tracker import HandsTracker, TrackerUnavailableError, draw_landmarks
from .types import DraggableNumber, GameMode, GameView, Point


logger = logging.getLogger(__name__)

WHITE = (255, 255, 255)
CYAN = (212, 182, 6)
MAGENTA = (239, 70, 217)
YELLOW = (21, 204, 250)
FEEDBACK_COLORS: Dict[str, Tuple[int, int, int]] = {
    "green": (128, 222, 74),
    "red": (113, 113, 248),
}

MENU_KEYS: Dict[int, GameMode] = {
    ord('1'): GameMode.ARITHMETIC,
    ord('2'): GameMode.NUMBER_PICKER,
    ord('3'): GameMode.MATH_PUZZLE,
    ord('4'): GameMode.RIGHT_BOX,
    ord('5'): GameMode.ANGLE_MAGIC,
}

MENU_TITLES: Dict[GameMode, str] = {
    GameMode.ARITHMETIC: "Arithmetic Challenge",
    GameMode.NUMBER_PICKER: "Number Hunt",
    GameMode.MATH_PUZZLE: "Math Puzzle",
    GameMode.RIGHT_BOX: "Right Box Sort",
    GameMode.ANGLE_MAGIC: "Angle Magic",
}


class OverlayRenderer:
    """Draws a game's display model on top of the mirrored camera preview."""

    def __init__(self, cfg: Cfg):
        self.cfg = cfg
        self.frame: Optional[np.ndarray] = None

    def _px(self, point: Point) -> Tuple[int, int]:
        height, width = self.frame.shape[:2]
        return int(point.x * width), int(point.y * height)

    def _text(self, text: str, org: Tuple[int, int], scale: float = 0.7,
              color: Tuple[int, int, int] = WHITE, thickness: int = 2) -> None:
        cv2.putText(self.frame, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, color, thickness)

    async def render(self, view: GameView) -> None:
        """Draw the view onto self.frame."""
        if self.frame is None:
            return
        height, width = self.frame.shape[:2]

        if view.mode == GameMode.ARITHMETIC:
            self._text(f"{view.problem.num1} + {view.problem.num2} = ?", (width // 2 - 80, 60), 1.2)
        elif view.mode == GameMode.NUMBER_PICKER:
            self._text(f"Pinch the {view.problem.type} number", (10, 60))
            self._draw_targets(view, view.problem.numbers)
        elif view.mode == GameMode.MATH_PUZZLE:
            self._text(f"{view.problem.question} = ?", (width // 2 - 80, 60), 1.2)
            self._draw_targets(view, view.problem.options)
        elif view.mode == GameMode.RIGHT_BOX:
            self._draw_right_box(view)
        elif view.mode == GameMode.ANGLE_MAGIC:
            self._draw_angle(view)

        if view.cursor is not None:
            fill = YELLOW if view.is_pinching else WHITE
            cv2.circle(self.frame, self._px(view.cursor), 10, fill, -1 if view.is_pinching else 2)

        if view.mode != GameMode.ANGLE_MAGIC:
            self._text(f"Score: {view.score}", (width - 160, 30))
        if view.feedback is not None:
            self._text(view.feedback.message, (width // 2 - 100, height - 60), 1.1,
                       FEEDBACK_COLORS[view.feedback.color], 3)

    def _draw_targets(self, view: GameView, values) -> None:
        for value, rect in zip(values, view.targets):
            top_left = self._px(Point(rect.left, rect.top))
            bottom_right = self._px(Point(rect.right, rect.bottom))
            cv2.rectangle(self.frame, top_left, bottom_right, CYAN, 2)
            center_y = (top_left[1] + bottom_right[1]) // 2
            self._text(str(value), (top_left[0] + 10, center_y + 10), 1.0)

    def _draw_right_box(self, view: GameView) -> None:
        level = view.problem
        height, width = self.frame.shape[:2]
        zone_left = int(self.cfg.games.right_box.drop_zone_x * width)
        cv2.rectangle(self.frame, (zone_left, 0), (width - 1, height - 1), MAGENTA, 3)
        self._text(f"{level.target_type.upper()}", (zone_left + 10, 60), 0.9, MAGENTA)
        self._text(f"Drag the {level.target_type} numbers into the box", (10, 30), 0.6)
        for item in level.numbers:
            self._draw_item(item)

    def _draw_item(self, item: DraggableNumber) -> None:
        center = self._px(Point(item.x, item.y))
        radius = 28 if item.is_dragging else 22
        cv2.circle(self.frame, center, radius, WHITE if item.is_dragging else CYAN, -1)
        self._text(str(item.value), (center[0] - 12, center[1] + 8), 0.7, (40, 40, 40))

    def _draw_angle(self, view: GameView) -> None:
        reading = view.angle
        if reading is None:
            self._text("Show one or two hands", (10, 60))
            return
        height, width = self.frame.shape[:2]
        sx = width / float(self.cfg.camera.width)
        sy = height / float(self.cfg.camera.height)

        def scaled(p: Point) -> Tuple[int, int]:
            return int(p.x * sx), int(p.y * sy)

        vertex = scaled(reading.vertex)
        cv2.line(self.frame, vertex, scaled(reading.base), CYAN, 6)
        cv2.line(self.frame, vertex, scaled(reading.target), MAGENTA, 6)
        cv2.circle(self.frame, vertex, 8, WHITE, -1)
        self._text(f"{reading.rounded} deg  {reading.category}", (10, 60), 1.0)


class MathGameApp:
    """Main application class: camera, tracker and the active game screen."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize the application with configuration."""
        self.config = load_config(config_path)
        self.tracker = HandsTracker(
            max_num_hands=self.config.mediapipe.max_num_hands,
            model_complexity=self.config.mediapipe.model_complexity,
            min_detection_conf=self.config.mediapipe.min_detection_confidence,
            min_tracking_conf=self.config.mediapipe.min_tracking_confidence
        )
        self.renderer = OverlayRenderer(self.config)
        self.game: Optional[GameSession] = None

        # Initialize camera
        self.cap = cv2.VideoCapture(self.config.camera.index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.camera.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.camera.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.config.camera.fps)

        if not self.cap.isOpened():
            self.tracker.close()
            raise TrackerUnavailableError(f"Failed to open camera {self.config.camera.index}")

    def select_game(self, mode: GameMode) -> None:
        logger.info("Starting %s", MENU_TITLES[mode])
        self.game = create_game(mode, self.config, on_exit=self._show_menu)

    def _show_menu(self) -> None:
        self.game = None

    def _draw_menu(self, frame: np.ndarray) -> None:
        cv2.putText(frame, "MATHIVERSE", (10, 40), cv2.FONT_HERSHEY_SIMPLEX, 1.2, WHITE, 3)
        for i, (key, mode) in enumerate(MENU_KEYS.items()):
            cv2.putText(frame, f"{chr(key)}  {MENU_TITLES[mode]}", (10, 90 + i * 35),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.8, WHITE, 2)

    async def run(self):
        """Run the main application loop."""
        print(f"Starting {self.config.display.window_name}")
        print("🎯 Games:")
        for key, mode in MENU_KEYS.items():
            print(f"  {chr(key)} = {MENU_TITLES[mode]}")
        print("Press 'm' for the menu, 'r' to restart a game, 'q' to quit")

        try:
            while True:
                ret, frame = self.cap.read()
                if not ret:
                    logger.error("Failed to read frame from camera")
                    break

                frame_result = self.tracker.process(frame)
                preview = cv2.flip(frame, 1)

                if self.config.display.show_landmarks:
                    for hand in frame_result.hands:
                        draw_landmarks(preview, hand.landmarks, mirror_x=True)

                if self.game is None:
                    self._draw_menu(preview)
                else:
                    view = self.game.update(frame_result, time.time())
                    self.renderer.frame = preview
                    await self.renderer.render(view)

                cv2.imshow(self.config.display.window_name, preview)

                key = cv2.waitKey(1) & 0xFF
                if key == ord('q'):
                    break
                if key == ord('m') and self.game is not None:
                    self.game.back_to_menu()
                elif key == ord('r') and self.game is not None:
                    self.game.reset(time.time())
                elif key in MENU_KEYS and self.game is None:
                    self.select_game(MENU_KEYS[key])

                await asyncio.sleep(0)
        finally:
            self.close()

    def close(self) -> None:
        """Release the tracker and the camera."""
        if self.cap.isOpened():
            self.cap.release()
        self.tracker.close()
        cv2.destroyAllWindows()


async def main():
    """Entry point for the application."""
    import sys

    logging.basicConfig(level=logging.INFO)
    config_path = sys.argv[1] if len(sys.argv) > 1 else None

    try:
        app = MathGameApp(config_path)
    except (TrackerUnavailableError, FileNotFoundError) as e:
        print(f"❌ Could not start: {e}")
        return

    try:
        await app.run()
    except KeyboardInterrupt:
        print("\nApplication interrupted by user")


def run_cli():
    asyncio.run(main())


if __name__ == "__main__":
    run_cli()

"""
Configuration management for the hand-gesture math games.
"""
import os
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass

from dotenv import load_dotenv


CONFIG_ENV_VAR = "MATHIVERSE_CONFIG"


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int
    width: int
    height: int
    fps: int


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int
    model_complexity: int
    min_detection_confidence: float
    min_tracking_confidence: float


@dataclass
class GestureConfig:
    """Gesture interpretation settings shared by every game."""
    pinch_threshold: float
    mirror_x: bool
    cursor_size: float


@dataclass
class ArithmeticConfig:
    """Finger-count arithmetic game settings."""
    cooldown_ms: int
    wrong_feedback_ms: int
    points: int


@dataclass
class NumberPickerConfig:
    """Pinch-to-select number hunt settings."""
    next_problem_ms: int
    wrong_feedback_ms: int
    points: int


@dataclass
class MathPuzzleConfig:
    """Multiple-choice puzzle settings."""
    next_problem_ms: int
    wrong_feedback_ms: int
    points: int


@dataclass
class RightBoxConfig:
    """Drag-and-sort game settings."""
    hit_radius_sq: float
    drop_zone_x: float
    feedback_ms: int
    next_level_ms: int
    points: int
    penalty: int
    item_count: int


@dataclass
class AngleConfig:
    """Two-hand angle game settings."""
    use_ray_intersection: bool
    parallel_det_eps: float


@dataclass
class GamesConfig:
    """Per-game configuration."""
    arithmetic: ArithmeticConfig
    number_picker: NumberPickerConfig
    math_puzzle: MathPuzzleConfig
    right_box: RightBoxConfig
    angle: AngleConfig


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_landmarks: bool
    window_name: str


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig
    mediapipe: MediaPipeConfig
    gestures: GestureConfig
    games: GamesConfig
    display: DisplayConfig


def default_config_path() -> Path:
    """Location of the config.default.yaml shipped inside the package."""
    return Path(__file__).parent / "config.default.yaml"


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses $MATHIVERSE_CONFIG (a .env
            file is honoured) or config.default.yaml

    Returns:
        Configuration object with all settings
    """
    if path is None:
        load_dotenv()
        path = os.getenv(CONFIG_ENV_VAR) or default_config_path()

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)

    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    camera_data = data['camera']
    camera = CameraConfig(
        index=camera_data['index'],
        width=camera_data['width'],
        height=camera_data['height'],
        fps=camera_data['fps']
    )

    mp_data = data['mediapipe']
    mediapipe = MediaPipeConfig(
        max_num_hands=mp_data['max_num_hands'],
        model_complexity=mp_data['model_complexity'],
        min_detection_confidence=mp_data['min_detection_confidence'],
        min_tracking_confidence=mp_data['min_tracking_confidence']
    )

    gestures_data = data['gestures']
    gestures = GestureConfig(
        pinch_threshold=gestures_data['pinch_threshold'],
        mirror_x=gestures_data['mirror_x'],
        cursor_size=gestures_data['cursor_size']
    )

    games_data = data['games']
    arithmetic = ArithmeticConfig(
        cooldown_ms=games_data['arithmetic']['cooldown_ms'],
        wrong_feedback_ms=games_data['arithmetic']['wrong_feedback_ms'],
        points=games_data['arithmetic']['points']
    )
    number_picker = NumberPickerConfig(
        next_problem_ms=games_data['number_picker']['next_problem_ms'],
        wrong_feedback_ms=games_data['number_picker']['wrong_feedback_ms'],
        points=games_data['number_picker']['points']
    )
    math_puzzle = MathPuzzleConfig(
        next_problem_ms=games_data['math_puzzle']['next_problem_ms'],
        wrong_feedback_ms=games_data['math_puzzle']['wrong_feedback_ms'],
        points=games_data['math_puzzle']['points']
    )
    box_data = games_data['right_box']
    right_box = RightBoxConfig(
        hit_radius_sq=box_data['hit_radius_sq'],
        drop_zone_x=box_data['drop_zone_x'],
        feedback_ms=box_data['feedback_ms'],
        next_level_ms=box_data['next_level_ms'],
        points=box_data['points'],
        penalty=box_data['penalty'],
        item_count=box_data['item_count']
    )
    angle = AngleConfig(
        use_ray_intersection=games_data['angle']['use_ray_intersection'],
        parallel_det_eps=games_data['angle']['parallel_det_eps']
    )
    games = GamesConfig(
        arithmetic=arithmetic,
        number_picker=number_picker,
        math_puzzle=math_puzzle,
        right_box=right_box,
        angle=angle
    )

    display_data = data['display']
    display = DisplayConfig(
        show_landmarks=display_data['show_landmarks'],
        window_name=display_data['window_name']
    )

    return Cfg(
        camera=camera,
        mediapipe=mediapipe,
        gestures=gestures,
        games=games,
        display=display
    )

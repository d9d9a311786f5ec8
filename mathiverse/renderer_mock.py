"""
Mock renderer implementation for testing game display models.
"""
from typing import List

from .types import GameView


class MockRenderer:
    """Mock renderer that records and prints display models instead of drawing them."""

    def __init__(self, verbose: bool = True):
        """Initialize the mock renderer."""
        self.verbose = verbose
        self.views: List[GameView] = []
        self.render_count = 0

    async def render(self, view: GameView) -> None:
        """Record the view and print a one-line summary."""
        self.render_count += 1
        self.views.append(view)
        if self.verbose:
            feedback = view.feedback.message if view.feedback else "-"
            print(f"[MockRenderer] {view.mode.value}: score={view.score} "
                  f"feedback={feedback} cursor={view.cursor} (call #{self.render_count})")

    @property
    def last_view(self) -> GameView:
        return self.views[-1]

    def reset_counters(self) -> None:
        """Reset recorded views for testing."""
        self.views.clear()
        self.render_count = 0


"""
One-shot deferred callbacks for frame-driven games.

Callbacks are not run by a background thread. A game calls run_due() at the
start of each frame, so deferred work and frame reactions never interleave.
Every callback remembers the generation it was scheduled in; advance()
starts a new generation (a new problem or level), and callbacks left over
from an older one are dropped instead of acting on state they no longer own.
"""
import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, List


logger = logging.getLogger(__name__)


@dataclass(order=True)
class _Pending:
    due: float
    seq: int
    generation: int = field(compare=False)
    callback: Callable[[], None] = field(compare=False)


class DeferredCallbacks:
    """Generation-gated timer queue driven by explicit timestamps (seconds)."""

    def __init__(self):
        self.generation = 0
        self._queue: List[_Pending] = []
        self._seq = itertools.count()

    def schedule(self, delay_s: float, t_now: float, callback: Callable[[], None]) -> None:
        """Run callback on the first run_due() at or after t_now + delay_s."""
        heapq.heappush(self._queue, _Pending(t_now + delay_s, next(self._seq), self.generation, callback))

    def advance(self) -> int:
        """Start a new generation; pending callbacks from older ones become no-ops."""
        self.generation += 1
        return self.generation

    def run_due(self, t_now: float) -> int:
        """
        Fire every due callback of the current generation in due order.

        Returns:
            Number of callbacks actually run
        """
        fired = 0
        while self._queue and self._queue[0].due <= t_now:
            pending = heapq.heappop(self._queue)
            if pending.generation != self.generation:
                logger.debug("Dropping stale callback from generation %d", pending.generation)
                continue
            pending.callback()
            fired += 1
        return fired

    def clear(self) -> None:
        self._queue.clear()

    def __len__(self) -> int:
        return len(self._queue)

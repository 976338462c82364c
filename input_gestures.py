from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Deque, Hashable, Optional, Protocol, Sequence, Tuple


class DragState(Enum):
    IDLE = auto()
    DRAGGING = auto()


@dataclass
class DragGesture:
    """Single-pointer Idle/Dragging tracker.

    Only the pointer that started the drag can move or end it; presses from
    any other pointer are ignored until release.
    """

    state: DragState = DragState.IDLE
    pointer_id: Optional[Hashable] = None

    @property
    def dragging(self) -> bool:
        return self.state is DragState.DRAGGING

    def press(self, pointer_id: Optional[Hashable] = None) -> bool:
        if self.dragging:
            return False
        self.state = DragState.DRAGGING
        self.pointer_id = pointer_id
        return True

    def owns(self, pointer_id: Optional[Hashable] = None) -> bool:
        if not self.dragging:
            return False
        return pointer_id is None or self.pointer_id is None or pointer_id == self.pointer_id

    def release(self) -> None:
        self.state = DragState.IDLE
        self.pointer_id = None


class FrameScheduler(Protocol):
    def request(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` once before the next repaint."""


class ImmediateFrameScheduler:
    """Runs every request synchronously. No coalescing happens."""

    def request(self, callback: Callable[[], None]) -> None:
        callback()


@dataclass
class ManualFrameScheduler:
    """Queues requests until :meth:`tick` is called by the host loop."""

    _queue: Deque[Callable[[], None]] = field(default_factory=deque)

    @property
    def pending(self) -> int:
        return len(self._queue)

    def request(self, callback: Callable[[], None]) -> None:
        self._queue.append(callback)

    def tick(self) -> int:
        ran = 0
        while self._queue:
            callback = self._queue.popleft()
            callback()
            ran += 1
        return ran


def touch_position(touch: Any) -> Tuple[float, float]:
    """Read client coordinates from a touch point.

    Accepts ``(x, y)`` pairs or objects exposing ``client_x``/``client_y``
    (or ``x``/``y``).
    """
    if isinstance(touch, (tuple, list)):
        return float(touch[0]), float(touch[1])
    if hasattr(touch, "client_x"):
        return float(touch.client_x), float(touch.client_y)
    return float(touch.x), float(touch.y)


def single_touch(touches: Sequence[Any]) -> Optional[Tuple[float, float]]:
    if len(touches) != 1:
        return None
    return touch_position(touches[0])

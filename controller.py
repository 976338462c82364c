import logging
from typing import Any, Callable, Hashable, Optional, Sequence, Tuple, Union

import numpy as np

import quaternions
from input_gestures import DragGesture, FrameScheduler, ImmediateFrameScheduler, single_touch
from options import TrackballOptions
from projection import BoundingBox
from trackball import AzimuthElevation, DragSession, advance, begin_drag

logger = logging.getLogger(__name__)

BoundsProvider = Callable[[], BoundingBox]
DrawCallback = Callable[[np.ndarray], Any]


class TrackballController:
    """Turns pointer drags over a viewport into an orientation quaternion.

    Two orientations are kept: ``committed`` as of the last finished drag
    and ``orientation`` which follows the drag in progress. They are equal
    whenever no drag is active. ``on_draw`` receives the current
    orientation after every change.

    Pointer moves are coalesced: the latest sample is stored and a single
    update is requested from ``scheduler`` per frame.
    """

    def __init__(
        self,
        options: Optional[TrackballOptions] = None,
        *,
        on_draw: Optional[DrawCallback] = None,
        bounds: Union[BoundingBox, BoundsProvider, None] = None,
        scheduler: Optional[FrameScheduler] = None,
        **overrides,
    ):
        if options is None:
            options = TrackballOptions(**overrides)
        elif overrides:
            raise TypeError("pass either an options object or keyword overrides, not both")
        self._options = options

        if bounds is None:
            bounds = BoundingBox.from_size(1, 1)
        if isinstance(bounds, BoundingBox):
            fixed = bounds
            bounds = lambda: fixed  # noqa: E731
        self._bounds = bounds

        self._on_draw = on_draw or (lambda q: None)
        self._scheduler = scheduler or ImmediateFrameScheduler()

        self._q0 = options.initial_orientation
        self._q = self._q0
        self._azel = AzimuthElevation()

        self._gesture = DragGesture()
        self._drag: Optional[DragSession] = None
        self._last_position: Optional[Tuple[float, float]] = None
        self._update_pending = False

        self._draw()

    # --- state ---
    @property
    def options(self) -> TrackballOptions:
        return self._options

    @property
    def orientation(self) -> np.ndarray:
        return self._q.copy()

    @property
    def committed(self) -> np.ndarray:
        return self._q0.copy()

    @property
    def dragging(self) -> bool:
        return self._drag is not None

    @property
    def session(self) -> Optional[DragSession]:
        return self._drag

    @property
    def azimuth(self) -> float:
        return self._azel.azimuth

    @property
    def elevation(self) -> float:
        return self._azel.elevation

    # --- programmatic ---
    def rotate(self, q) -> None:
        """Right-multiply the committed orientation by ``q``. Ignored mid-drag."""
        if self._drag is not None:
            return
        self._q0 = quaternions.multiply(self._q0, quaternions.as_quaternion(q))
        self._q = self._q0
        self._draw()

    def reset(self) -> None:
        self._drag = None
        self._gesture.release()
        self._last_position = None
        self._q0 = quaternions.identity()
        self._q = self._q0
        self._azel = AzimuthElevation()
        self._draw()

    # --- pointer ---
    def pointer_down(self, x: float, y: float, pointer_id: Optional[Hashable] = None) -> bool:
        if self._gesture.dragging:
            return False
        box = self._bounds()
        if box.degenerate:
            logger.debug("Ignored press on degenerate bounds %s", box)
            return False
        if not box.contains(x, y):
            return False

        method = self._options.rotation_method
        self._drag = begin_drag(method, box, (x, y), self._q0, self._options)
        self._gesture.press(pointer_id)
        logger.debug("Drag started at (%s, %s) with %s", x, y, method.value)

        self._draw()
        return True

    def pointer_move(self, x: float, y: float, pointer_id: Optional[Hashable] = None) -> None:
        if self._drag is None or not self._gesture.owns(pointer_id):
            return

        self._last_position = (x, y)

        if not self._update_pending:
            self._update_pending = True
            self._scheduler.request(self._update)

    def pointer_up(self, x: Optional[float] = None, y: Optional[float] = None,
                   pointer_id: Optional[Hashable] = None) -> None:
        if self._drag is None or not self._gesture.owns(pointer_id):
            return

        self._drag = None
        self._gesture.release()
        self._q0 = self._q
        self._last_position = None
        self._azel = self._azel.snapshot()
        logger.debug("Drag ended")
        self._draw()

    # --- touch ---
    def touch_start(self, touches: Sequence[Any]) -> bool:
        position = single_touch(touches)
        if position is None:
            return False
        return self.pointer_down(*position)

    def touch_move(self, touches: Sequence[Any]) -> None:
        position = single_touch(touches)
        if position is not None:
            self.pointer_move(*position)

    def touch_end(self, changed_touches: Sequence[Any]) -> None:
        position = single_touch(changed_touches)
        if position is not None:
            self.pointer_up(*position)

    # --- frame update ---
    def _update(self) -> None:
        self._update_pending = False

        if self._last_position is None or self._drag is None:
            return

        x, y = self._last_position
        if not self._drag.box.contains(x, y):
            logger.debug("Dropped sample (%s, %s) outside %s", x, y, self._drag.box)
            return

        step = advance(self._options.rotation_method, self._drag, self._azel, (x, y), self._options)
        if step is None:
            return

        self._q = step.current
        self._drag = step.session
        self._azel = step.azel
        self._draw()

    def _draw(self) -> None:
        self._on_draw(self._q.copy())

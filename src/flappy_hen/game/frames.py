# src/flappy_hen/game/frames.py
from __future__ import annotations
from typing import Callable, Dict, List


class FrameScheduler:
    """
    requestAnimationFrame-style scheduling driven by the display loop.

    request_frame() queues a callback for the NEXT frame and returns a handle.
    cancel_frame() revokes a pending request so it never runs.
    run_frame() is called once per display refresh; callbacks requested
    while a frame is running are deferred to the following frame.
    """
    def __init__(self):
        self._pending: Dict[int, Callable[[], None]] = {}
        self._next_handle = 1
        self.frame_count = 0

    def request_frame(self, callback: Callable[[], None]) -> int:
        if not callable(callback):
            raise TypeError("callback must be callable")
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int | None) -> None:
        if handle is not None:
            self._pending.pop(handle, None)

    def is_pending(self, handle: int | None) -> bool:
        return handle in self._pending

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def run_frame(self) -> int:
        """Run the callbacks due this frame. Returns how many ran."""
        self.frame_count += 1
        due: List[int] = list(self._pending)
        ran = 0
        for handle in due:
            # an earlier callback this frame may have cancelled this one
            callback = self._pending.pop(handle, None)
            if callback is None:
                continue
            callback()
            ran += 1
        return ran

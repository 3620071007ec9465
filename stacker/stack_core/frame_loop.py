"""
Frame Loop
==========

Cooperative, single-threaded tick driver.

``FrameScheduler`` stands in for a host's per-frame callback facility:
callbacks requested during a frame run on the next one. ``TickLoop``
schedules exactly one game tick per frame and can be stopped at any time
without leaving a pending callback behind.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from stacker.stack_core.game import CoreGame

FrameCallback = Callable[[float], None]
RenderSink = Callable[[Dict[str, Any]], None]


class FrameScheduler:
    """
    Per-frame callback registry.

    Handles are never reused. Cancelling an unknown or already-run handle
    is a no-op.
    """

    def __init__(self) -> None:
        self._next_handle: int = 1
        self._pending: Dict[int, FrameCallback] = {}
        self._batch: Dict[int, FrameCallback] = {}
        self._frame: int = 0

    @property
    def pending_count(self) -> int:
        """Callbacks waiting for the next frame."""
        return len(self._pending)

    @property
    def frame(self) -> int:
        """Frames run so far."""
        return self._frame

    def request_frame(self, callback: FrameCallback) -> int:
        """Schedule ``callback`` for the next frame and return its handle."""
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        """Unschedule ``handle``, including from a frame already in progress."""
        self._pending.pop(handle, None)
        self._batch.pop(handle, None)

    def run_frame(self, timestamp: float = 0.0) -> int:
        """
        Run every callback that was pending when the frame started.

        Returns:
            Number of callbacks invoked.
        """
        self._frame += 1
        self._batch = self._pending
        self._pending = {}

        ran = 0
        for handle in list(self._batch):
            callback = self._batch.pop(handle, None)
            if callback is None:
                continue
            callback(timestamp)
            ran += 1

        self._batch = {}
        return ran


class TickLoop:
    """
    Drives a CoreGame from a FrameScheduler.

    Each frame: drain queued inputs, tick once, hand render data to the
    sink, then schedule the next frame. The loop halts by itself after
    rendering the first GAMEOVER frame.
    """

    def __init__(
        self,
        game: CoreGame,
        scheduler: FrameScheduler,
        render_sink: Optional[RenderSink] = None,
        debug: bool = False
    ):
        """
        Initialize the loop. Nothing is scheduled until ``start()``.

        Args:
            game: The game to drive.
            scheduler: Frame callback source.
            render_sink: Receives ``game.get_render_data()`` after every tick.
            debug: If True, print loop events to stdout.
        """
        self._game = game
        self._scheduler = scheduler
        self._render_sink = render_sink
        self._debug = debug

        self._pending_drops = 0
        self._handle: Optional[int] = None
        self._running = False
        self._halted_on_gameover = False
        self._frames = 0

    @property
    def game(self) -> CoreGame:
        return self._game

    @property
    def running(self) -> bool:
        return self._running

    @property
    def frames(self) -> int:
        """Ticks driven by this loop."""
        return self._frames

    @property
    def halted_on_gameover(self) -> bool:
        return self._halted_on_gameover

    @property
    def pending_drops(self) -> int:
        """Drop requests waiting for the next tick."""
        return self._pending_drops

    def start(self) -> None:
        """Begin ticking on the next frame. No-op if already running."""
        if self._running:
            return
        self._running = True
        self._halted_on_gameover = False
        self._schedule()
        if self._debug:
            print(f"[DEBUG] TickLoop started (handle={self._handle})")

    def stop(self) -> None:
        """
        Cancel the pending tick. Safe to call repeatedly or mid-frame.

        Also forgets a game over halt, so a later ``reset()`` will not
        restart the loop.
        """
        self._halted_on_gameover = False
        if self._handle is not None:
            self._scheduler.cancel_frame(self._handle)
            self._handle = None
        if self._running and self._debug:
            print(f"[DEBUG] TickLoop stopped after {self._frames} frames")
        self._running = False

    def request_drop(self) -> None:
        """Request a drop; applied at the start of the next tick."""
        self._pending_drops += 1

    def reset(self) -> None:
        """
        Reset the game now. If the loop halted on GAMEOVER it resumes;
        a loop stopped by ``stop()`` stays stopped.
        """
        self._pending_drops = 0
        self._game.reset()
        if self._halted_on_gameover:
            self.start()

    def _schedule(self) -> None:
        self._handle = self._scheduler.request_frame(self._on_frame)

    def _on_frame(self, timestamp: float) -> None:
        self._handle = None

        # Repeated requests collapse into one drop: only BOUNCE accepts it
        if self._pending_drops:
            accepted = self._game.drop()
            if self._debug and (self._pending_drops > 1 or not accepted):
                ignored = self._pending_drops - int(accepted)
                print(f"[DEBUG] {ignored} drop request(s) ignored in mode {self._game.mode.value}")
            self._pending_drops = 0

        self._game.tick()
        self._frames += 1

        if self._render_sink is not None:
            self._render_sink(self._game.get_render_data())

        if self._game.is_over:
            self._running = False
            self._halted_on_gameover = True
            if self._debug:
                print(f"[DEBUG] GAMEOVER at score {self._game.score}, loop halted")
            return

        if self._running:
            self._schedule()

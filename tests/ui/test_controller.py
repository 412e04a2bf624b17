from __future__ import annotations

import asyncio
from typing import Iterable, List, Optional, Tuple

import numpy as np
import pytest

from screenmark.core.engine import OverlayEngine
from screenmark.core.input import Action, InputEvent, KeyInput, Resized
from screenmark.core.time import SimTimeSource
from screenmark.render.canvas import PresentationError
from screenmark.render.frame import FrameRenderer
from screenmark.ui.controllers import OverlayController


class FakeSink:
    """Records presented frames; optionally fails on the n-th present."""

    def __init__(self, size: Tuple[int, int], fail_at: Optional[int] = None) -> None:
        self._size = size
        self.fail_at = fail_at
        self.frames: List[np.ndarray] = []
        self.closed = False

    def size(self) -> Tuple[int, int]:
        return self._size

    def resize(self, width: int, height: int) -> None:
        self._size = (max(1, width), max(1, height))

    def present(self, frame: np.ndarray) -> None:
        if self.fail_at is not None and len(self.frames) + 1 >= self.fail_at:
            raise PresentationError("surface lost")
        self.frames.append(frame.copy())

    def save_png(self, path: str) -> None:
        pass

    def close(self) -> None:
        self.closed = True


class ScriptedInput:
    """Yields a fixed batch of events on each pump, then nothing."""

    def __init__(self, batches: List[List[InputEvent]]) -> None:
        self.batches = list(batches)

    def pump(self) -> Iterable[InputEvent]:
        return self.batches.pop(0) if self.batches else []


def _controller(
    engine: OverlayEngine,
    sink: FakeSink,
    *,
    ts: Optional[SimTimeSource] = None,
    input_source: Optional[ScriptedInput] = None,
    max_frames: Optional[int] = None,
) -> OverlayController:
    return OverlayController(
        engine=engine,
        display=sink,
        renderer=FrameRenderer(),
        ts=ts if ts is not None else SimTimeSource(),
        input_source=input_source,
        max_frames=max_frames,
    )


async def _drive(task: asyncio.Task, ts: SimTimeSource, dt: float) -> None:
    for _ in range(200):
        if task.done():
            break
        ts.advance(dt)
        await asyncio.sleep(0)
    await asyncio.wait_for(task, timeout=1.0)


def test_output_size_follows_sink(engine: OverlayEngine) -> None:
    ctl = _controller(engine, FakeSink((64, 48)))
    assert engine.output_size == (64, 48)
    frame = ctl.tick()
    assert frame.shape == (48, 64, 4)
    assert ctl.frames == 1
    # Image occupies the top-left 40x40, the rest is background
    assert np.array_equal(frame[:40, :40], engine.canvas.pixels)
    assert (frame[:, 40:] == (64, 64, 64, 255)).all()


def test_tick_reuses_frame_buffer(engine: OverlayEngine) -> None:
    ctl = _controller(engine, FakeSink((40, 40)))
    first = ctl.tick()
    assert ctl.tick() is first
    assert ctl.last_frame is first


def test_resize_event_resizes_sink(engine: OverlayEngine) -> None:
    sink = FakeSink((40, 40))
    ctl = _controller(engine, sink, input_source=ScriptedInput([[Resized(20, 10)]]))
    frame = ctl.tick()
    assert sink.size() == (20, 10)
    assert engine.output_size == (20, 10)
    assert frame.shape == (10, 20, 4)


@pytest.mark.asyncio
async def test_run_stops_at_max_frames(engine: OverlayEngine) -> None:
    ts = SimTimeSource()
    sink = FakeSink((40, 40))
    ctl = _controller(engine, sink, ts=ts, max_frames=3)
    task = asyncio.create_task(ctl.run())
    await _drive(task, ts, 1 / 60)
    assert ctl.frames == 3
    assert len(sink.frames) == 3
    assert ctl.error is None


@pytest.mark.asyncio
async def test_run_exits_on_quit_key(engine: OverlayEngine) -> None:
    ts = SimTimeSource()
    quit_batch: List[InputEvent] = [KeyInput(Action.QUIT, True)]
    source = ScriptedInput([[], [], quit_batch])
    ctl = _controller(engine, FakeSink((40, 40)), ts=ts, input_source=source)
    task = asyncio.create_task(ctl.run())
    await _drive(task, ts, 1 / 60)
    assert ctl.frames == 3
    assert not engine.running


@pytest.mark.asyncio
async def test_presentation_error_stops_loop(engine: OverlayEngine) -> None:
    ts = SimTimeSource()
    ctl = _controller(engine, FakeSink((40, 40), fail_at=2), ts=ts)
    task = asyncio.create_task(ctl.run())
    await _drive(task, ts, 1 / 60)
    assert ctl.frames == 1
    assert isinstance(ctl.error, PresentationError)


@pytest.mark.asyncio
async def test_stop_ends_loop(engine: OverlayEngine) -> None:
    ts = SimTimeSource()
    ctl = _controller(engine, FakeSink((40, 40)), ts=ts)
    task = asyncio.create_task(ctl.run())
    await asyncio.sleep(0)
    assert ctl.frames == 1
    ctl.stop()
    await _drive(task, ts, 1 / 60)
    assert ctl.frames == 1

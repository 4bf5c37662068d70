"""
Multi-frame rendering.

Frames render independently of each other, optionally on a thread pool, and
are linked into submission order only once every frame has finished. The
link from each character grid to its predecessor is an index into the
returned list, never a reference to another grid.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from blockpix import codec
from blockpix.errors import EmptySequenceError, GridAssemblyError
from blockpix.model import Frame, FrameCharGrid, RenderedFrame, RenderOptions
from blockpix.renderer import FrameRenderer

logger = logging.getLogger(__name__)


def link(rendered: Sequence[RenderedFrame]) -> list[RenderedFrame]:
    """Point each frame's grid back at the frame submitted before it."""
    linked = []
    for i, frame in enumerate(rendered):
        grid = frame.grid.linked(index=i, previous=i - 1 if i > 0 else None)
        linked.append(RenderedFrame(image=frame.image, grid=grid, delay=frame.delay))
    return linked


def flatten(grids: Sequence[FrameCharGrid]) -> list[FrameCharGrid]:
    """Walk the back-references from the newest grid and return the chain oldest first."""
    if not grids:
        return []
    by_index = {grid.index: grid for grid in grids}
    newest = max(by_index)
    chain = []
    current: int | None = newest
    while current is not None:
        if current not in by_index:
            raise GridAssemblyError(f"Frame {chain[-1].index} links to missing frame {current}")
        grid = by_index[current]
        chain.append(grid)
        current = grid.previous
    chain.reverse()
    return chain


class AnimationAssembler:
    def __init__(self, options: RenderOptions, workers: int = 1):
        self.options = options
        self.workers = workers
        self.renderer = FrameRenderer(options)

    def render(self, frames: Sequence[Frame]) -> list[RenderedFrame]:
        """Render every frame and link the results in submission order."""
        frames = list(frames)
        if not frames:
            raise EmptySequenceError("Animation needs at least one frame")

        if self.workers > 1 and len(frames) > 1:
            # map() yields results in submission order regardless of completion order
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                rendered = list(pool.map(self.renderer.render, frames, range(len(frames))))
        else:
            rendered = [self.renderer.render(frame, i) for i, frame in enumerate(frames)]

        logger.info("Rendered %d frame(s) with %d worker(s)", len(rendered), max(1, self.workers))
        return link(rendered)

    def encode(self, frames: Sequence[Frame], target: codec.Target, loop: int = 0) -> list[RenderedFrame]:
        """Render frames and write them as an animated GIF with their original delays."""
        rendered = self.render(frames)
        codec.encode_gif(
            [frame.image for frame in rendered],
            [frame.delay for frame in rendered],
            target,
            loop=loop,
        )
        return rendered

    def char_grids(self, frames: Sequence[Frame]) -> list[FrameCharGrid]:
        """Render frames and return one character grid per frame, oldest first."""
        return flatten([frame.grid for frame in self.render(frames)])

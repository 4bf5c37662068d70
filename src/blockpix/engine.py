from __future__ import annotations

from typing import Protocol

import numpy as np

from blockpix.model import CharCell, RenderOptions


class RenderStrategy(Protocol):
    name: str

    def render(
        self,
        block: np.ndarray,
        output: np.ndarray,
        options: RenderOptions,
        x: int,
        y: int,
    ) -> CharCell | None:
        """Draw one source block into ``output`` at (x, y).

        ``block`` is the (block_size, block_size, 4) RGBA view of the source and
        ``output`` the whole RGBA output array. Writes stay inside the block's
        own region. Character strategies return the cell they drew.
        """
        ...

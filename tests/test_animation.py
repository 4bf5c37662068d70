import io
import random

import numpy as np
import pytest
from PIL import Image

from blockpix.animation import AnimationAssembler, flatten, link
from blockpix.errors import EmptySequenceError, GridAssemblyError
from blockpix.model import Frame, FrameCharGrid
from blockpix.strategies import PixelStyle


def test_preserves_count_and_delays(options, coloured_frames):
    rendered = AnimationAssembler(options()).render(coloured_frames)
    assert len(rendered) == 3
    assert [f.delay for f in rendered] == [40, 60, 50]


def test_frames_rendered_in_submission_order(options, coloured_frames):
    rendered = AnimationAssembler(options()).render(coloured_frames)
    colours = [tuple(np.asarray(f.image)[0, 0]) for f in rendered]
    assert colours == [(255, 0, 0, 255), (0, 255, 0, 255), (0, 0, 255, 255)]


def test_grids_linked_to_previous(options, coloured_frames):
    rendered = AnimationAssembler(options(PixelStyle.CHAR_COLOR)).render(coloured_frames)
    assert [(f.grid.index, f.grid.previous) for f in rendered] == [(0, None), (1, 0), (2, 1)]


def test_single_frame_has_no_previous(options):
    rendered = AnimationAssembler(options()).render([Frame(Image.new("RGB", (4, 4)))])
    assert rendered[0].grid.previous is None
    assert rendered[0].delay is None


def test_empty_sequence_fails(options):
    with pytest.raises(EmptySequenceError):
        AnimationAssembler(options()).render([])


def test_parallel_matches_sequential(options):
    frames = [
        Frame(image=Image.new("RGB", (16, 16), (i * 20, 255 - i * 20, 128)), delay=10 * (i + 1))
        for i in range(8)
    ]
    opts = options(PixelStyle.CHAR_COLOR, block_size=4)
    sequential = AnimationAssembler(opts).render(frames)
    parallel = AnimationAssembler(opts, workers=4).render(frames)
    assert [f.image.tobytes() for f in parallel] == [f.image.tobytes() for f in sequential]
    assert [f.grid for f in parallel] == [f.grid for f in sequential]
    assert [f.delay for f in parallel] == [f.delay for f in sequential]


def test_char_grids_oldest_first(options):
    palette = "0123456789"
    frames = [Frame(image=Image.new("L", (2, 2), level), delay=50) for level in (0, 140, 255)]
    grids = AnimationAssembler(options(PixelStyle.CHAR_GRAY, palette=palette)).char_grids(frames)
    assert [g.lines() for g in grids] == [["0"], ["5"], ["9"]]


def test_flatten_reproduces_submission_order(options, coloured_frames):
    grids = [f.grid for f in AnimationAssembler(options(PixelStyle.CHAR_COLOR)).render(coloured_frames)]
    shuffled = grids[:]
    random.Random(3).shuffle(shuffled)
    assert [g.index for g in flatten(shuffled)] == [0, 1, 2]


def test_flatten_empty():
    assert flatten([]) == []


def test_flatten_broken_chain_fails():
    grids = [FrameCharGrid(index=0), FrameCharGrid(index=2, previous=1)]
    with pytest.raises(GridAssemblyError, match="missing frame 1"):
        flatten(grids)


def test_link_relinks_indices(options, coloured_frames):
    rendered = AnimationAssembler(options()).render(coloured_frames)
    relinked = link(list(reversed(rendered)))
    assert [f.delay for f in relinked] == [50, 60, 40]
    assert [f.grid.previous for f in relinked] == [None, 0, 1]


def test_encode_writes_gif_with_delays(options, coloured_frames):
    buffer = io.BytesIO()
    AnimationAssembler(options()).encode(coloured_frames, buffer)
    buffer.seek(0)
    with Image.open(buffer) as gif:
        assert gif.format == "GIF"
        assert gif.n_frames == 3
        delays = []
        for i in range(gif.n_frames):
            gif.seek(i)
            delays.append(gif.info["duration"])
    assert delays == [40, 60, 50]

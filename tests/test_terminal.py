import io

from blockpix.model import CharCell, FrameCharGrid
from blockpix.terminal import CLEAR_SCREEN, CURSOR_HOME, RESET, format_grid, get_terminal_size, play


def _grid(*lines, color=(255, 0, 0), index=0, previous=None):
    cells = tuple(
        tuple(CharCell(glyph=ch, color=color, row=r, col=c) for c, ch in enumerate(line)) for r, line in enumerate(lines)
    )
    return FrameCharGrid(cells=cells, index=index, previous=previous)


def test_plain_text():
    assert format_grid(_grid("ab", "cd")) == "ab\ncd"


def test_empty_grid():
    assert format_grid(FrameCharGrid()) == ""


def test_colour_output_contains_ansi_escapes():
    text = format_grid(_grid("#"), colour=True)
    assert text == "\033[38;2;255;0;0m#" + RESET


def test_colour_false_has_no_escapes():
    assert "\033" not in format_grid(_grid("##", "##"))


def test_play_draws_each_frame_with_delay():
    stream = io.StringIO()
    slept = []
    grids = [_grid("a"), _grid("b", index=1, previous=0)]
    play(grids, [40, None], stream=stream, sleep=slept.append, loops=2)
    out = stream.getvalue()
    assert out.startswith(CLEAR_SCREEN)
    assert out.count(CURSOR_HOME) == 4
    assert out.index(CURSOR_HOME + "a") < out.index(CURSOR_HOME + "b")
    assert slept == [0.04, 0.04]


def test_terminal_size_fallback(monkeypatch):
    monkeypatch.setattr("sys.stdout", io.StringIO())
    assert get_terminal_size() == (80, 24)

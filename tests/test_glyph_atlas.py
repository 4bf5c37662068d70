import numpy as np

from blockpix.glyph_atlas import build_atlas, load_font
from blockpix.model import FontMetrics


def test_atlas_shape():
    atlas = build_atlas(" #@", 16, FontMetrics())
    assert atlas.chars == (" ", "#", "@")
    assert atlas.masks.shape == (3, 16, 16)
    assert atlas.masks.dtype == np.float32


def test_atlas_values_in_range():
    atlas = build_atlas(" #@ABCxyz", 16, FontMetrics())
    assert atlas.masks.min() >= 0.0
    assert atlas.masks.max() <= 1.0


def test_space_is_blank():
    atlas = build_atlas(" @", 16, FontMetrics())
    assert atlas.masks[0].sum() == 0.0


def test_dense_char_has_ink():
    atlas = build_atlas(" @", 16, FontMetrics())
    assert atlas.masks[1].sum() > 0.0


def test_dense_char_has_more_ink_than_sparse():
    atlas = build_atlas("@.", 16, FontMetrics())
    assert atlas.masks[0].sum() > atlas.masks[1].sum()


def test_repeated_glyphs_keep_palette_positions():
    atlas = build_atlas("##.", 12, FontMetrics())
    assert atlas.chars == ("#", "#", ".")
    np.testing.assert_array_equal(atlas.masks[0], atlas.masks[1])


def test_atlas_is_cached_and_read_only():
    first = build_atlas(" #", 8, FontMetrics())
    assert build_atlas(" #", 8, FontMetrics()) is first
    assert not first.masks.flags.writeable


def test_block_size_one():
    atlas = build_atlas(" #", 1, FontMetrics())
    assert atlas.masks.shape == (2, 1, 1)


def test_font_size_defaults_to_block_size():
    assert FontMetrics().size_for(12) == 12
    assert FontMetrics(font_size=20).size_for(12) == 20
    font = load_font(FontMetrics(), 12)
    assert font.getbbox("M")[3] > 0

from collections.abc import Iterator

from blockpix.errors import InvalidDimensionError


def _check_block_size(block_size: int) -> None:
    if block_size < 1:
        raise InvalidDimensionError(f"Block size must be at least 1, got {block_size}")


def grid_shape(width: int, height: int, block_size: int) -> tuple[int, int]:
    """Number of whole blocks as (rows, cols). Partial blocks are dropped."""
    _check_block_size(block_size)
    return height // block_size, width // block_size


def truncated_size(width: int, height: int, block_size: int) -> tuple[int, int]:
    """(width, height) of the area covered by whole blocks."""
    rows, cols = grid_shape(width, height, block_size)
    return cols * block_size, rows * block_size


def iter_blocks(width: int, height: int, block_size: int) -> Iterator[tuple[int, int]]:
    """Yield the top-left (x, y) of every whole block, row by row, left to right."""
    covered_width, covered_height = truncated_size(width, height, block_size)
    for y in range(0, covered_height, block_size):
        for x in range(0, covered_width, block_size):
            yield x, y

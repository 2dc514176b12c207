"""Quadkey encoding for quadtree shaped TileMatrixSets.

Adapted from https://github.com/mapbox/mercantile/blob/master/mercantile/__init__.py
"""

from collections.abc import Sequence

from tilegrid.commons import Tile
from tilegrid.errors import QuadKeyError
from tilegrid.models import TileMatrix


def is_power_of_two(number: int) -> bool:
    """Check if a number is a power of 2"""
    return (number & (number - 1) == 0) and number != 0


def check_quadkey_support(matrices: Sequence[TileMatrix]) -> bool:
    """Check if a Tile Matrix Set supports quadkeys.

    Every matrix (but the last) has to be square with a power of 2 width,
    and the next matrix has to be twice as wide.
    """
    return all(
        (t.matrixWidth == t.matrixHeight)
        and is_power_of_two(t.matrixWidth)
        and ((t.matrixWidth * 2) == matrices[i + 1].matrixWidth)
        for i, t in enumerate(matrices[:-1])
    )


def quadkey_root_zoom(matrices: Sequence[TileMatrix]) -> int | None:
    """Level of the 1x1 matrix a quadtree grows from.

    The root can be virtual (e.g `-2` for a quadtree starting with a 4x4 matrix at
    level 0). Returns None when the first matrix isn't a square power of 2.
    """
    first = matrices[0]
    if first.matrixWidth != first.matrixHeight or not is_power_of_two(
        first.matrixWidth
    ):
        return None

    return int(first.id) - (first.matrixWidth.bit_length() - 1)


def tile_to_quadkey(tile: Tile, root_zoom: int = 0) -> str:
    """Get the quadkey of a tile.

    One digit per level below `root_zoom`, the level of the 1x1 root matrix.

    Examples:
        >>> tile_to_quadkey(Tile(486, 332, 10))
        '0313102310'

    """
    qk = []
    for z in range(tile.z, root_zoom, -1):
        digit = 0
        mask = 1 << (z - root_zoom - 1)
        if tile.x & mask:
            digit += 1
        if tile.y & mask:
            digit += 2
        qk.append(str(digit))

    return "".join(qk)


def quadkey_to_tile(qk: str, root_zoom: int = 0) -> Tile:
    """Get the tile corresponding to a quadkey."""
    if len(qk) == 0:
        return Tile(0, 0, root_zoom)

    xtile, ytile = 0, 0
    for i, digit in enumerate(reversed(qk)):
        mask = 1 << i
        if digit == "1":
            xtile = xtile | mask
        elif digit == "2":
            ytile = ytile | mask
        elif digit == "3":
            xtile = xtile | mask
            ytile = ytile | mask
        elif digit != "0":
            raise QuadKeyError(f"Unexpected quadkey digit: {digit!r}")

    return Tile(xtile, ytile, len(qk) + root_zoom)

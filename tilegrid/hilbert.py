"""Hilbert curve tile indexes.

Tiles of the full pyramid are ordered level by level, and along a discrete
Hilbert curve within a level (same ordering as PMTiles tile ids).
"""

from collections.abc import Iterator

from tilegrid.commons import Tile
from tilegrid.errors import HilbertError
from tilegrid.settings import TilegridSettings


def base_id(z: int) -> int:
    """Hilbert index of the first tile of a zoom level.

    Number of tiles in all the levels above: sum(4**i for i in range(z)).
    """
    return ((1 << (z << 1)) - 1) // 3


def _rotate(n: int, x: int, y: int, rx: int, ry: int) -> tuple[int, int]:
    """Rotate/flip a quadrant."""
    if ry == 0:
        if rx == 1:
            x = n - 1 - x
            y = n - 1 - y
        x, y = y, x

    return x, y


def xy_to_hilbert(x: int, y: int, z: int) -> int:
    """Position of (x, y) along the Hilbert curve filling a 2**z x 2**z grid."""
    n = 1 << z
    h = 0
    s = n >> 1
    while s > 0:
        rx = 1 if (x & s) > 0 else 0
        ry = 1 if (y & s) > 0 else 0
        h += s * s * ((3 * rx) ^ ry)
        x, y = _rotate(n, x, y, rx, ry)
        s >>= 1

    return h


def hilbert_to_xy(h: int, z: int) -> tuple[int, int]:
    """(x, y) of the h-th cell along the Hilbert curve filling a 2**z x 2**z grid."""
    n = 1 << z
    x = y = 0
    s = 1
    t = h
    while s < n:
        rx = 1 & (t // 2)
        ry = 1 & (t ^ rx)
        x, y = _rotate(s, x, y, rx, ry)
        x += s * rx
        y += s * ry
        t //= 4
        s *= 2

    return x, y


def tile_id(tile: Tile) -> int:
    """Get the hilbert index of a tile.

    Examples:
        >>> tile_id(Tile(1, 0, 1))
        4

    """
    x, y, z = tile
    if z < 0 or not (0 <= x < (1 << z) and 0 <= y < (1 << z)):
        raise HilbertError(f"Tile {tile} is outside of the level {z} quadtree")

    if z == 0:
        return 0

    return base_id(z) + xy_to_hilbert(x, y, z)


def hilbert_tile(h: int, max_zoom: int | None = None) -> Tile:
    """Get the tile corresponding to a Hilbert index.

    Zoom levels up to `max_zoom` (default to `TILEGRID_HILBERT_MAX_ZOOM`) are searched.
    """
    if max_zoom is None:
        max_zoom = TilegridSettings().hilbert_max_zoom

    if h < 0:
        raise HilbertError(f"Invalid hilbert index: {h}")

    for z in range(0, max_zoom + 1):
        if base_id(z) <= h < base_id(z + 1):
            x, y = hilbert_to_xy(h - base_id(z), z)
            return Tile(x, y, z)

    raise HilbertError(f"Hilbert index {h} is beyond zoom level {max_zoom}")


class HilbertIterator(Iterator[Tile]):
    """Iterate over all the tiles from `z_min` to `z_max` in Hilbert order."""

    def __init__(self, z_min: int, z_max: int):
        """Start at the first tile of `z_min`."""
        self.z = z_min
        self.z_max = z_max
        self.h = base_id(z_min)
        self.base_id = base_id(z_min)
        self.next_base_id = base_id(z_min + 1)

    def __next__(self) -> Tile:
        """Return the current tile and move along the curve."""
        if self.z > self.z_max:
            raise StopIteration

        x, y = hilbert_to_xy(self.h - self.base_id, self.z)
        current = Tile(x, y, self.z)

        self.h += 1
        if self.h >= self.next_base_id:
            self.z += 1
            self.base_id = self.next_base_id
            self.next_base_id = base_id(self.z + 1)

        return current

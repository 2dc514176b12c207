"""TileMatrixSet iterators."""

from collections.abc import Iterator, Sequence

from tilegrid.commons import MinMax, Tile


class XyzIterator(Iterator[Tile]):
    """Level-by-level iterator.

    Yields tiles within per-zoom limits, zoom by zoom, column by column and
    row by row. `limits[i]` holds the tile limits of zoom `minz + i`, levels
    with empty limits (min > max) are skipped.

    Examples:
        >>> list(XyzIterator(0, 1, [MinMax(0, 0, 0, 0), MinMax(0, 1, 0, 0)]))
        [Tile(x=0, y=0, z=0), Tile(x=0, y=0, z=1), Tile(x=1, y=0, z=1)]

    """

    def __init__(self, minz: int, maxz: int, limits: Sequence[MinMax]):
        """Set the cursor on the first tile of `minz`."""
        self.limits = list(limits)
        self.minz = minz
        # can't go further than the available limits
        self.maxz = min(maxz, minz + len(self.limits) - 1)
        self.finished = False
        self.z = minz
        self.x = self.y = 0
        self._start_level(minz)

    def _limit(self) -> MinMax:
        return self.limits[self.z - self.minz]

    def _start_level(self, z: int):
        """Move the cursor to the first tile of the first non-empty level from `z`."""
        while z <= self.maxz:
            limit = self.limits[z - self.minz]
            if limit.x_min <= limit.x_max and limit.y_min <= limit.y_max:
                self.z, self.x, self.y = z, limit.x_min, limit.y_min
                return

            z += 1

        self.finished = True

    def __next__(self) -> Tile:
        """Return the current tile and advance the cursor."""
        if self.finished:
            raise StopIteration

        current = Tile(self.x, self.y, self.z)
        limit = self._limit()
        if self.y < limit.y_max:
            self.y += 1
        elif self.x < limit.x_max:
            self.x += 1
            self.y = limit.y_min
        else:
            self._start_level(self.z + 1)

        return current

"""test hilbert indexes."""

import pytest

from tilegrid import hilbert
from tilegrid.commons import Tile
from tilegrid.errors import HilbertError


@pytest.mark.parametrize(
    "tile,index",
    [
        (Tile(0, 0, 0), 0),
        (Tile(0, 0, 1), 1),
        (Tile(0, 1, 1), 2),
        (Tile(1, 1, 1), 3),
        (Tile(1, 0, 1), 4),
        (Tile(1, 3, 2), 11),
        (Tile(3, 0, 3), 26),
    ],
)
def test_tile_id(tile, index):
    """Hilbert index of a tile."""
    assert hilbert.tile_id(tile) == index
    assert hilbert.hilbert_tile(index) == tile


def test_base_id():
    """Index of the first tile of each zoom."""
    assert hilbert.base_id(0) == 0
    assert hilbert.base_id(1) == 1
    assert hilbert.base_id(2) == 5
    assert hilbert.base_id(20) == 366503875925
    assert hilbert.base_id(21) == 1466015503701
    assert hilbert.base_id(30) == sum(4**i for i in range(30))
    for z in range(1, 40):
        assert hilbert.base_id(z) == hilbert.base_id(z - 1) + 4 ** (z - 1)


def test_roundtrip():
    """decode(encode(tile)) is the tile."""
    for tile in [Tile(486, 332, 10), Tile(12, 7, 4), Tile(2**22 - 1, 0, 22)]:
        assert hilbert.hilbert_tile(hilbert.tile_id(tile)) == tile


def test_curve_is_continuous():
    """Consecutive indexes are neighbor tiles."""
    z = 4
    previous = hilbert.hilbert_to_xy(0, z)
    for h in range(1, 4**z):
        x, y = hilbert.hilbert_to_xy(h, z)
        assert abs(x - previous[0]) + abs(y - previous[1]) == 1
        assert hilbert.xy_to_hilbert(x, y, z) == h
        previous = (x, y)


def test_invalid():
    """Invalid tiles and indexes."""
    with pytest.raises(HilbertError):
        hilbert.tile_id(Tile(2, 0, 1))

    with pytest.raises(HilbertError):
        hilbert.tile_id(Tile(0, -1, 1))

    with pytest.raises(HilbertError):
        hilbert.hilbert_tile(-1)

    with pytest.raises(HilbertError):
        hilbert.hilbert_tile(hilbert.base_id(3), max_zoom=2)

    assert hilbert.hilbert_tile(hilbert.base_id(3) - 1, max_zoom=2).z == 2


def test_max_zoom_setting(monkeypatch):
    """Decoding ceiling comes from settings."""
    monkeypatch.setenv("TILEGRID_HILBERT_MAX_ZOOM", "2")
    with pytest.raises(HilbertError):
        hilbert.hilbert_tile(hilbert.base_id(3))

    monkeypatch.setenv("TILEGRID_HILBERT_MAX_ZOOM", "3")
    assert hilbert.hilbert_tile(hilbert.base_id(3)) == Tile(0, 0, 3)


def test_iterator():
    """Iterate over tiles in hilbert order."""
    tiles = list(hilbert.HilbertIterator(0, 2))
    assert len(tiles) == 1 + 4 + 16
    assert [hilbert.tile_id(t) for t in tiles] == list(range(21))

    tiles = list(hilbert.HilbertIterator(2, 2))
    assert len(tiles) == 16
    assert all(t.z == 2 for t in tiles)

    assert list(hilbert.HilbertIterator(3, 2)) == []

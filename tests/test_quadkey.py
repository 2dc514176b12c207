"""test quadkey encoding."""

import pytest

from tilegrid import quadkey
from tilegrid.commons import Tile
from tilegrid.errors import NoQuadkeySupport, QuadKeyError


def test_quadkey():
    """Encode and decode quadkeys."""
    assert quadkey.tile_to_quadkey(Tile(486, 332, 10)) == "0313102310"
    assert quadkey.quadkey_to_tile("0313102310") == Tile(486, 332, 10)
    assert quadkey.tile_to_quadkey(Tile(0, 0, 0)) == ""
    assert quadkey.quadkey_to_tile("") == Tile(0, 0, 0)


def test_quadkey_roundtrip():
    """decode(encode(tile)) is the tile."""
    for tile in [Tile(1, 0, 1), Tile(3, 2, 2), Tile(1023, 0, 10), Tile(5, 7, 3)]:
        assert quadkey.quadkey_to_tile(quadkey.tile_to_quadkey(tile)) == tile


def test_quadkey_invalid():
    """Only 0, 1, 2 and 3 are quadkey digits."""
    with pytest.raises(QuadKeyError):
        quadkey.quadkey_to_tile("lolwut")

    with pytest.raises(QuadKeyError):
        quadkey.quadkey_to_tile("0134")


def test_is_power_of_two():
    """Check power of 2."""
    assert quadkey.is_power_of_two(1)
    assert quadkey.is_power_of_two(1024)
    assert not quadkey.is_power_of_two(0)
    assert not quadkey.is_power_of_two(6)


def test_quadkey_support(registry):
    """Quadkeys are only supported by quadtree TMS."""
    tms = registry.lookup("EuropeanETRS89_LAEAQuad")
    assert tms.quadkey(Tile(3, 2, 2)) == "31"
    assert tms.quadkey_to_tile("31") == Tile(3, 2, 2)

    tms = registry.lookup("WorldCRS84Quad")
    with pytest.raises(NoQuadkeySupport):
        tms.quadkey(Tile(0, 0, 1))

    with pytest.raises(NoQuadkeySupport):
        tms.quadkey_to_tile("0")


def test_quadkey_root_zoom(registry):
    """Quadkey digits are counted from the 1x1 root matrix."""
    matrices = registry.get("WebMercatorQuad").tileMatrices
    assert quadkey.quadkey_root_zoom(matrices) == 0
    assert quadkey.quadkey_root_zoom(matrices[2:]) == 0
    assert quadkey.quadkey_root_zoom(
        [m.model_copy(update={"id": str(int(m.id) + 3)}) for m in matrices[:4]]
    ) == 3
    assert quadkey.quadkey_root_zoom(registry.get("WorldCRS84Quad").tileMatrices) is None

    assert quadkey.tile_to_quadkey(Tile(5, 3, 5), root_zoom=2) == "123"
    assert quadkey.quadkey_to_tile("123", root_zoom=2) == Tile(5, 3, 5)
    assert quadkey.quadkey_to_tile("", root_zoom=2) == Tile(0, 0, 2)

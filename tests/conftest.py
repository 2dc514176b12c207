"""``pytest`` configuration."""

import pathlib

import pytest

from tilegrid.registry import TileMatrixSets, default_registry

DATA_DIR = pathlib.Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def env(monkeypatch):
    """Make sure we start from a clean environment and default registry."""
    for name in [
        "TILEGRID_TRANSFORM_BACKEND",
        "TILEGRID_TILEMATRIXSET_DIRECTORY",
        "TILEGRID_HILBERT_MAX_ZOOM",
        "TILEGRID_BBOX_PRECISION",
    ]:
        monkeypatch.delenv(name, raising=False)

    default_registry.cache_clear()
    yield
    default_registry.cache_clear()


@pytest.fixture
def registry() -> TileMatrixSets:
    """Default registry."""
    return default_registry()


@pytest.fixture
def web_mercator(registry):
    """WebMercatorQuad engine."""
    return registry.lookup("WebMercatorQuad")

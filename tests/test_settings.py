"""test settings."""

import pytest
from pydantic import ValidationError

from tilegrid.settings import TilegridSettings


def test_default_settings():
    """Default values."""
    settings = TilegridSettings()
    assert settings.transform_backend == "proj"
    assert settings.tilematrixset_directory is None
    assert settings.hilbert_max_zoom == 27
    assert settings.bbox_precision == 5


def test_settings_from_env(monkeypatch):
    """Values from TILEGRID_ environment variables."""
    monkeypatch.setenv("TILEGRID_TRANSFORM_BACKEND", "basic")
    monkeypatch.setenv("TILEGRID_TILEMATRIXSET_DIRECTORY", "/tmp/tms")
    monkeypatch.setenv("TILEGRID_HILBERT_MAX_ZOOM", "20")
    monkeypatch.setenv("TILEGRID_BBOX_PRECISION", "7")

    settings = TilegridSettings()
    assert settings.transform_backend == "basic"
    assert settings.tilematrixset_directory == "/tmp/tms"
    assert settings.hilbert_max_zoom == 20
    assert settings.bbox_precision == 7


def test_invalid_settings(monkeypatch):
    """Invalid values."""
    monkeypatch.setenv("TILEGRID_TRANSFORM_BACKEND", "gdal")
    with pytest.raises(ValidationError):
        TilegridSettings()

    monkeypatch.delenv("TILEGRID_TRANSFORM_BACKEND")
    monkeypatch.setenv("TILEGRID_BBOX_PRECISION", "-1")
    with pytest.raises(ValidationError):
        TilegridSettings()

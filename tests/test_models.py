"""test TileMatrixSet models."""

import pytest
from pydantic import ValidationError

from tilegrid.models import TileMatrix, TileMatrixSet, VariableMatrixWidth
from tilegrid.registry import DATA_DIR as BUNDLED_DIR

from .conftest import DATA_DIR


def test_bundled_definitions():
    """All bundled documents are valid TileMatrixSet."""
    files = sorted(BUNDLED_DIR.glob("*.json"))
    assert len(files) == 10
    for path in files:
        tms = TileMatrixSet.from_file(path)
        assert tms.id == path.stem
        assert tms.crs.startswith("http://www.opengis.net/def/crs/")
        assert tms.boundingBox is not None
        assert tms.tileMatrices


def test_crs_normalization():
    """CRS are stored as OGC URI."""
    tms = TileMatrixSet.from_file(DATA_DIR / "WebMercatorBottomLeft.json")
    assert tms.crs == "http://www.opengis.net/def/crs/EPSG/0/3857"
    assert tms.tileMatrices[0].cornerOfOrigin == "bottomLeft"

    tms = TileMatrixSet.from_file(BUNDLED_DIR / "WorldCRS84Quad.json")
    assert tms.crs == "http://www.opengis.net/def/crs/OGC/1.3/CRS84"
    assert tms.boundingBox.crs == "http://www.opengis.net/def/crs/OGC/1.3/CRS84"


def test_invalid_definitions():
    """Check model validation."""
    definition = TileMatrixSet.from_file(BUNDLED_DIR / "WebMercatorQuad.json")
    payload = definition.model_dump(exclude_none=True)

    with pytest.raises(ValidationError):
        TileMatrixSet.model_validate({**payload, "tileMatrices": []})

    with pytest.raises(ValidationError):
        TileMatrixSet.model_validate({**payload, "crs": "not a crs"})

    with pytest.raises(ValidationError):
        TileMatrixSet.model_validate({**payload, "orderedAxes": ["X"]})

    matrix = payload["tileMatrices"][0]
    with pytest.raises(ValidationError):
        TileMatrix.model_validate({**matrix, "matrixWidth": 0})

    with pytest.raises(ValidationError):
        TileMatrix.model_validate({**matrix, "cornerOfOrigin": "topRight"})


def test_variable_matrix_width():
    """Coalesce factor per row."""
    with pytest.raises(ValidationError):
        VariableMatrixWidth(coalesce=1, minTileRow=0, maxTileRow=0)

    with pytest.raises(ValidationError):
        VariableMatrixWidth(coalesce=2, minTileRow=2, maxTileRow=1)

    tms = TileMatrixSet.from_file(DATA_DIR / "CRS84Variable.json")
    matrix = tms.tileMatrices[1]
    assert matrix.get_coalesce_factor(0) == 2
    assert matrix.get_coalesce_factor(1) == 1
    assert tms.tileMatrices[0].get_coalesce_factor(0) == 1


def test_frozen():
    """Definitions can't be modified."""
    tms = TileMatrixSet.from_file(BUNDLED_DIR / "WebMercatorQuad.json")
    with pytest.raises(ValidationError):
        tms.id = "Another"

    with pytest.raises(ValidationError):
        tms.tileMatrices[0].matrixWidth = 2

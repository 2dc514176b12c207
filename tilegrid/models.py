"""tilegrid.models: OGC TileMatrixSet 2.0 documents.

Ref: https://docs.ogc.org/is/17-083r4/17-083r4.html
"""

from __future__ import annotations

import pathlib
from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from tilegrid.crs import crs_to_uri

axesInfo = Annotated[list[str], Field(min_length=2, max_length=2)]


class TMSBoundingBox(BaseModel):
    """Minimum bounding rectangle surrounding a 2D resource.

    Coordinates follow the CRS axis order.
    """

    lowerLeft: tuple[float, float]
    upperRight: tuple[float, float]
    crs: str | None = None
    orderedAxes: axesInfo | None = None

    model_config = {"frozen": True}

    @field_validator("crs")
    def normalize_crs(cls, v):
        """Store CRS as OGC URI."""
        return crs_to_uri(v) if v is not None else v


class VariableMatrixWidth(BaseModel):
    """Variable Matrix Width.

    Rows from `minTileRow` to `maxTileRow` have `coalesce` tiles merged
    horizontally in one.
    """

    coalesce: int = Field(ge=2)
    minTileRow: int = Field(ge=0)
    maxTileRow: int = Field(ge=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_rows(self):
        """Check row range."""
        if self.minTileRow > self.maxTileRow:
            raise ValueError("minTileRow must be lower or equal to maxTileRow")

        return self


class TileMatrix(BaseModel):
    """Tile Matrix Definition.

    A tile matrix, usually corresponding to a particular zoom level of a TileMatrixSet.
    """

    title: str | None = None
    description: str | None = None
    keywords: list[str] | None = None
    id: str = Field(pattern=r"^[0-9A-Za-z_.-]+$")
    scaleDenominator: float = Field(gt=0)
    cellSize: float = Field(gt=0)
    cornerOfOrigin: Literal["topLeft", "bottomLeft"] = "topLeft"
    pointOfOrigin: tuple[float, float]
    tileWidth: int = Field(ge=1)
    tileHeight: int = Field(ge=1)
    matrixWidth: int = Field(ge=1)
    matrixHeight: int = Field(ge=1)
    variableMatrixWidths: list[VariableMatrixWidth] | None = None

    model_config = {"frozen": True}

    def get_coalesce_factor(self, row: int) -> int:
        """Number of tiles merged horizontally in a row (1 for regular rows)."""
        if self.variableMatrixWidths:
            for matrix_width in self.variableMatrixWidths:
                if matrix_width.minTileRow <= row <= matrix_width.maxTileRow:
                    return matrix_width.coalesce

        return 1


class TileMatrixSet(BaseModel):
    """Tile Matrix Set Definition.

    A definition of a tiled space based on a CRS and an ordered list of tile matrices.
    """

    title: str | None = None
    description: str | None = None
    keywords: list[str] | None = None
    id: str = Field(pattern=r"^[\w\d_\-]+$")
    uri: str | None = None
    orderedAxes: axesInfo | None = None
    crs: str
    wellKnownScaleSet: str | None = None
    boundingBox: TMSBoundingBox | None = None
    tileMatrices: list[TileMatrix] = Field(min_length=1)

    model_config = {"frozen": True}

    @field_validator("crs")
    def normalize_crs(cls, v):
        """Store CRS as OGC URI."""
        return crs_to_uri(v)

    @classmethod
    def from_file(cls, path: str | pathlib.Path) -> TileMatrixSet:
        """Load a TileMatrixSet JSON document."""
        return cls.model_validate_json(pathlib.Path(path).read_text())

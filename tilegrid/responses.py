"""tilegrid.responses: API response models."""

from typing import Annotated

from pydantic import AnyUrl, BaseModel, Field


class Link(BaseModel):
    """Link model.

    Ref: https://github.com/opengeospatial/ogcapi-tiles/blob/master/openapi/schemas/common-core/link.yaml
    """

    href: Annotated[
        AnyUrl,
        Field(
            json_schema_extra={
                "description": "Supplies the URI to a remote resource (or resource fragment).",
                "examples": ["http://data.example.com/buildings/123"],
            }
        ),
    ]
    rel: Annotated[
        str,
        Field(
            json_schema_extra={
                "description": "The type or semantics of the relation.",
                "examples": ["alternate"],
            }
        ),
    ]
    type: str | None = None
    title: str | None = None


class TileMatrixSetRef(BaseModel):
    """
    TileMatrixSetRef model.

    Based on http://docs.opengeospatial.org/per/19-069.html#_tilematrixsets
    """

    id: str
    title: str | None = None
    links: list[Link]


class TileMatrixSetList(BaseModel):
    """
    TileMatrixSetList model.

    Based on http://docs.opengeospatial.org/per/19-069.html#_tilematrixsets
    """

    tileMatrixSets: list[TileMatrixSetRef]


class TileInfo(BaseModel):
    """Tile description."""

    tileMatrixSet: str
    tileMatrix: str
    tileRow: int
    tileCol: int
    bounds: tuple[float, float, float, float]
    xyBounds: tuple[float, float, float, float]
    crs: str
    quadkey: str | None = None
    hilbertId: int | None = None


class PointTile(BaseModel):
    """Tile containing a geographic point."""

    tileMatrixSet: str
    coordinates: tuple[float, float]
    xy: tuple[float, float]
    tileMatrix: str
    tileRow: int
    tileCol: int

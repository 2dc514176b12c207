"""tilegrid.factory: TileMatrixSet router factory."""

import logging
from typing import Annotated, Any, Literal

from attrs import define, field
from fastapi import APIRouter, Path, Query
from starlette.requests import Request
from starlette.routing import compile_path, replace_params

from tilegrid.commons import Tile
from tilegrid.errors import TileOutsideBounds
from tilegrid.models import TileMatrixSet
from tilegrid.registry import TileMatrixSets, default_registry
from tilegrid.responses import PointTile, TileInfo, TileMatrixSetList

logger = logging.getLogger(__name__)


@define(kw_only=True)
class TMSFactory:
    """TileMatrixSet endpoints Factory.

    Attributes:
        supported_tms (TileMatrixSets): TileMatrixSets registry.
        router (fastapi.APIRouter): Application router to register endpoints to.
        router_prefix (str): prefix where the router will be mounted in the application.
        name (str): prefix for the endpoints operationId.

    """

    supported_tms: TileMatrixSets = field(factory=default_registry)

    # FastAPI router
    router: APIRouter = field(factory=APIRouter)

    # Router Prefix is needed to find the path for routes when the router is mounted
    # with a prefix (e.g `/tms`).
    router_prefix: str = ""

    name: str | None = field(default=None)
    operation_prefix: str = field(init=False, default="")

    def __attrs_post_init__(self):
        """Post Init: register routes."""
        # prefix for endpoint's operationId
        name = self.name or self.router_prefix.replace("/", ".")
        self.operation_prefix = f"{name}." if name else ""

        self.register_routes()

    def url_for(self, request: Request, name: str, **path_params: Any) -> str:
        """Return full url (with prefix) for a specific endpoint."""
        url_path = self.router.url_path_for(name, **path_params)
        base_url = str(request.base_url)
        if self.router_prefix:
            prefix = self.router_prefix.lstrip("/")
            # If we have prefix with custom path param we check and replace them with
            # the path params provided
            if "{" in prefix:
                _, path_format, param_convertors = compile_path(prefix)
                prefix, _ = replace_params(
                    path_format, param_convertors, request.path_params.copy()
                )
            base_url += prefix

        return str(url_path.make_absolute_url(base_url=base_url))

    def register_routes(self):
        """Register TMS endpoint routes."""
        TileMatrixSetId = Annotated[
            Literal[tuple(self.supported_tms.list())],
            Path(description="Identifier for a supported TileMatrixSet."),
        ]

        @self.router.get(
            "/tileMatrixSets",
            response_model=TileMatrixSetList,
            response_model_exclude_none=True,
            summary="Retrieve the list of available tiling schemes (tile matrix sets).",
            operation_id=f"{self.operation_prefix}getTileMatrixSetsList",
        )
        async def tilematrixsets(request: Request):
            """
            OGC Specification: http://docs.opengeospatial.org/per/19-069.html#_tilematrixsets
            """
            return TileMatrixSetList(
                tileMatrixSets=[
                    {  # type: ignore
                        "id": tms_id,
                        "links": [
                            {
                                "href": self.url_for(
                                    request,
                                    "tilematrixset",
                                    tileMatrixSetId=tms_id,
                                ),
                                "rel": "http://www.opengis.net/def/rel/ogc/1.0/tiling-scheme",
                                "type": "application/json",
                                "title": f"Definition of {tms_id} tileMatrixSet",
                            }
                        ],
                    }
                    for tms_id in self.supported_tms.list()
                ]
            )

        @self.router.get(
            "/tileMatrixSets/{tileMatrixSetId}",
            response_model=TileMatrixSet,
            response_model_exclude_none=True,
            summary="Retrieve the definition of the specified tiling scheme (tile matrix set).",
            operation_id=f"{self.operation_prefix}getTileMatrixSet",
        )
        async def tilematrixset(tileMatrixSetId: TileMatrixSetId):
            """
            OGC Specification: http://docs.opengeospatial.org/per/19-069.html#_tilematrixset
            """
            return self.supported_tms.get(tileMatrixSetId)

        @self.router.get(
            "/tileMatrixSets/{tileMatrixSetId}/tiles/{z}/{x}/{y}",
            response_model=TileInfo,
            response_model_exclude_none=True,
            summary="Retrieve the description of a tile.",
            operation_id=f"{self.operation_prefix}getTileInfo",
        )
        def tile_info(
            tileMatrixSetId: TileMatrixSetId,
            z: Annotated[
                int,
                Path(
                    description="Identifier (Z) selecting one of the scales defined in the TileMatrixSet and representing the scaleDenominator the tile.",
                ),
            ],
            x: Annotated[
                int,
                Path(
                    description="Column (X) index of the tile on the selected TileMatrix. It cannot exceed the MatrixHeight-1 for the selected TileMatrix.",
                ),
            ],
            y: Annotated[
                int,
                Path(
                    description="Row (Y) index of the tile on the selected TileMatrix. It cannot exceed the MatrixWidth-1 for the selected TileMatrix.",
                ),
            ],
        ):
            """Tile bounds and indexes."""
            tms = self.supported_tms.lookup(tileMatrixSetId)
            tile = Tile(x, y, z)
            if not tms.is_valid(tile):
                raise TileOutsideBounds(
                    f"Tile {z}/{x}/{y} is outside {tileMatrixSetId} TileMatrixSet."
                )

            logger.debug(f"tile info for {tileMatrixSetId} {z}/{x}/{y}")
            return TileInfo(
                tileMatrixSet=tms.id,
                tileMatrix=str(z),
                tileRow=y,
                tileCol=x,
                bounds=tms.bounds(tile),
                xyBounds=tms.xy_bounds(tile),
                crs=tms.crs,
                quadkey=tms.quadkey(tile) if tms.quadkey_support else None,
                hilbertId=tms.hilbert_id(tile) if tms.hilbert_support else None,
            )

        @self.router.get(
            "/tileMatrixSets/{tileMatrixSetId}/point/{lon},{lat}",
            response_model=PointTile,
            summary="Retrieve the tile containing a geographic point.",
            operation_id=f"{self.operation_prefix}getTileForPoint",
        )
        def point(
            tileMatrixSetId: TileMatrixSetId,
            lon: Annotated[float, Path(description="Longitude")],
            lat: Annotated[float, Path(description="Latitude")],
            zoom: Annotated[int, Query(description="Zoom level")],
        ):
            """Tile containing a point."""
            tms = self.supported_tms.lookup(tileMatrixSetId)
            x, y = tms.xy(lon, lat)
            tile = tms.xy_tile(x, y, zoom)

            return PointTile(
                tileMatrixSet=tms.id,
                coordinates=(lon, lat),
                xy=(x, y),
                tileMatrix=str(tile.z),
                tileRow=tile.y,
                tileCol=tile.x,
            )

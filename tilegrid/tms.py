"""tilegrid.tms: TileMatrixSet engine."""

from __future__ import annotations

import logging
import math
import re
import warnings
from collections.abc import Iterator, Sequence
from functools import cached_property
from typing import Any

from tilegrid import hilbert, quadkey
from tilegrid.commons import BoundingBox, Coords, MinMax, Tile
from tilegrid.crs import (
    WGS84_CRS,
    crs_to_authority,
    crs_to_uri,
    is_web_mercator,
    is_wgs84,
    meters_per_unit,
    same_crs,
)
from tilegrid.errors import (
    HilbertError,
    InvalidZoomError,
    InvalidZoomId,
    InvalidZoomLevelStrategy,
    NoQuadkeySupport,
    NonZeroError,
    PointOutsideTMSBounds,
    QuadKeyError,
    TransformationUnsupported,
)
from tilegrid.iterators import XyzIterator
from tilegrid.models import TileMatrix, TileMatrixSet, TMSBoundingBox
from tilegrid.settings import TilegridSettings
from tilegrid.transform import TransformBackend, Transformer, get_backend

logger = logging.getLogger(__name__)

LL_EPSILON = 1e-11

# Standardized rendering pixel size (0.28mm x 0.28mm)
SCREEN_PIXEL_SIZE = 0.28e-3

WEB_MERCATOR_ORIGIN = Coords(-20037508.3427892, 20037508.3427892)

ZOOM_LEVEL_STRATEGIES = ("lower", "upper", "auto")


def ordered_axes_inverted(axes: Sequence[str]) -> bool:
    """Check if ordered axes are in lat,lon order."""
    return axes[0].upper() in ["Y", "LAT", "N"]


def point_in_bbox(point: Coords, bbox: BoundingBox, precision: int = 5) -> bool:
    """Check if a point is in a bounding box."""
    return (
        round(point.x, precision) >= round(bbox.left, precision)
        and round(point.x, precision) <= round(bbox.right, precision)
        and round(point.y, precision) >= round(bbox.bottom, precision)
        and round(point.y, precision) <= round(bbox.top, precision)
    )


def tile_index(distance: float, size: float, magnitude: float) -> int:
    """Index of the tile at `distance` from the matrix origin.

    Distances a few floating point ulps (of the coordinates `magnitude`) below
    a tile edge are snapped to this edge.
    """
    index = math.floor(distance / size)
    if (index + 1) * size - distance <= 16 * math.ulp(magnitude):
        index += 1

    return index


def merc_tile_ul(xtile: int, ytile: int, zoom: int) -> Coords:
    """Upper left longitude and latitude of a Web Mercator quadtree tile.

    Adapted from https://github.com/mapbox/mercantile/blob/master/mercantile/__init__.py
    """
    z2 = 2.0**zoom
    lon_deg = xtile / z2 * 360.0 - 180.0
    lat_rad = math.atan(math.sinh(math.pi * (1 - 2 * ytile / z2)))
    return Coords(lon_deg, math.degrees(lat_rad))


def transformed_bbox(
    extent: Sequence[float],
    crs: str,
    extent_crs: str | None,
    backend: TransformBackend,
) -> BoundingBox:
    """Return the extent in `crs`."""
    left, bottom, right, top = extent
    if extent_crs is not None and not same_crs(extent_crs, crs):
        transform = backend.from_crs(extent_crs, crs)
        left, bottom, right, top = transform.transform_bounds(left, bottom, right, top)

    return BoundingBox(left, bottom, right, top)


class TMS:
    """Tile Matrix Set engine.

    Built once from a `TileMatrixSet` definition. Construction sorts the tile
    matrices, checks quadkey support and creates the coordinate transformers
    from and to the geographic CRS. The engine is read-only: duplicating it
    means running the (expensive) construction again with `rebuild()`.

    Examples:
        >>> tms = TMS(TileMatrixSet.from_file("WebMercatorQuad.json"))
        >>> tms.tile(159.31, -42.0, 4)
        Tile(x=15, y=10, z=4)

    """

    def __init__(
        self,
        definition: TileMatrixSet,
        geographic_crs: str = WGS84_CRS,
        backend: TransformBackend | None = None,
        precision: int | None = None,
    ):
        """Validate the definition and prepare CRS transformations."""
        self.backend = backend or get_backend()
        self.geographic_crs = crs_to_uri(geographic_crs)
        self.precision = (
            precision
            if precision is not None
            else TilegridSettings().bbox_precision
        )

        self.definition = definition.model_copy(
            update={"tileMatrices": self._sort_tile_matrices(definition.tileMatrices)}
        )
        self.is_quadtree = quadkey.check_quadkey_support(self.tileMatrices)
        self._quadkey_root = (
            quadkey.quadkey_root_zoom(self.tileMatrices) if self.is_quadtree else None
        )

        if self.definition.orderedAxes:
            self._invert_axis = ordered_axes_inverted(self.definition.orderedAxes)
        else:
            self._invert_axis = self.backend.axis_inverted(self.crs)

        self._meters_per_unit = meters_per_unit(self.backend.unit_name(self.crs))

        # Make sure the bounding box can be expressed in the TMS CRS
        self._xy_bbox = self._get_xy_bbox()

        self._to_geographic = self._create_transformer(self.crs, self.geographic_crs)
        self._from_geographic = self._create_transformer(
            self.geographic_crs, self.crs
        )

        self._is_web_mercator_quad = self._check_web_mercator_quad()

        logger.debug(
            f"TMS {self.id} ready (crs: {crs_to_authority(self.crs)}, backend: {self.backend.name}, quadtree: {self.is_quadtree})"
        )

    def __repr__(self):
        """TMS representation."""
        return f"<TileMatrixSet title='{self.title}' id='{self.id}' crs='{self.crs}'>"

    def __copy__(self):
        """Engines are not cheap to copy."""
        raise TypeError("TMS can't be copied, use `TMS.rebuild()`.")

    def __deepcopy__(self, memo):
        """Engines are not cheap to copy."""
        raise TypeError("TMS can't be copied, use `TMS.rebuild()`.")

    def rebuild(self) -> TMS:
        """Create a new engine from the same definition.

        This re-creates the coordinate transformers and can be expensive.
        """
        return self.__class__(
            self.definition,
            geographic_crs=self.geographic_crs,
            backend=self.backend,
            precision=self.precision,
        )

    @staticmethod
    def _sort_tile_matrices(matrices: Sequence[TileMatrix]) -> list[TileMatrix]:
        """Sort matrices by identifier"""
        ids = set()
        for matrix in matrices:
            if not re.fullmatch(r"[0-9]+", matrix.id):
                raise InvalidZoomId(f"Invalid tile matrix identifier: `{matrix.id}`")

            if int(matrix.id) in ids:
                raise InvalidZoomId(f"Duplicate tile matrix identifier: `{matrix.id}`")

            ids.add(int(matrix.id))

        return sorted(matrices, key=lambda m: int(m.id))

    def _create_transformer(self, crs_from: str, crs_to: str) -> Transformer | None:
        try:
            return self.backend.from_crs(crs_from, crs_to)
        except TransformationUnsupported as e:
            warnings.warn(
                f"Could not create coordinate Transformer from {crs_from} to {crs_to} ({e}), "
                "some methods might not be available.",
                UserWarning,
                stacklevel=3,
            )
            return None

    @property
    def to_geographic(self) -> Transformer:
        """Transformer from TMS CRS to geographic CRS."""
        if self._to_geographic is None:
            raise TransformationUnsupported(
                f"No transformation from {self.crs} to {self.geographic_crs}"
            )

        return self._to_geographic

    @property
    def from_geographic(self) -> Transformer:
        """Transformer from geographic CRS to TMS CRS."""
        if self._from_geographic is None:
            raise TransformationUnsupported(
                f"No transformation from {self.geographic_crs} to {self.crs}"
            )

        return self._from_geographic

    def _check_web_mercator_quad(self) -> bool:
        """Check if the TMS is the Google Maps compatible quadtree."""
        if not (
            self.is_quadtree
            and is_web_mercator(self.crs)
            and is_wgs84(self.geographic_crs)
        ):
            return False

        matrix = self.tileMatrices[0]
        origin = self._matrix_origin(matrix)
        return (
            matrix.matrixWidth == 2**self.minzoom
            and math.isclose(origin.x, WEB_MERCATOR_ORIGIN.x, abs_tol=1e-3)
            and math.isclose(origin.y, WEB_MERCATOR_ORIGIN.y, abs_tol=1e-3)
        )

    @property
    def id(self) -> str:
        """TileMatrixSet identifier."""
        return self.definition.id

    @property
    def title(self) -> str | None:
        """TileMatrixSet title."""
        return self.definition.title

    @property
    def crs(self) -> str:
        """TileMatrixSet CRS (OGC URI)."""
        return self.definition.crs

    @property
    def tileMatrices(self) -> list[TileMatrix]:
        """Sorted list of TileMatrix."""
        return self.definition.tileMatrices

    @property
    def minzoom(self) -> int:
        """TileMatrixSet minimum TileMatrix identifier"""
        return int(self.tileMatrices[0].id)

    @property
    def maxzoom(self) -> int:
        """TileMatrixSet maximum TileMatrix identifier"""
        return int(self.tileMatrices[-1].id)

    @property
    def is_variable(self) -> bool:
        """Check if TMS has variable width matrix."""
        return any(m.variableMatrixWidths is not None for m in self.tileMatrices)

    @classmethod
    def custom(
        cls,
        extent: Sequence[float],
        crs: str,
        tile_width: int = 256,
        tile_height: int = 256,
        matrix_scale: Sequence[int] | None = None,
        extent_crs: str | None = None,
        minzoom: int = 0,
        maxzoom: int = 24,
        title: str | None = None,
        id: str = "Custom",
        ordered_axes: Sequence[str] | None = None,
        geographic_crs: str = WGS84_CRS,
        backend: TransformBackend | None = None,
        **kwargs: Any,
    ) -> TMS:
        """
        Construct a custom TileMatrixSet.

        Attributes
        ----------
        extent: list
            Bounding box of the Tile Matrix Set, (left, bottom, right, top).
        crs: str
            Tile Matrix Set coordinate reference system.
        tile_width: int
            Width of each tile of this tile matrix in pixels (default is 256).
        tile_height: int
            Height of each tile of this tile matrix in pixels (default is 256).
        matrix_scale: list
            Tiling schema coalescence coefficient (default: [1, 1] for EPSG:3857).
            Should be set to [2, 1] for EPSG:4326.
            see: http://docs.opengeospatial.org/is/17-083r2/17-083r2.html#14
        extent_crs: str
            Extent's coordinate reference system (default: same as input crs).
        minzoom: int
            Tile Matrix Set minimum zoom level (default is 0).
        maxzoom: int
            Tile Matrix Set maximum zoom level (default is 24).
        title: str, optional
            Tile Matrix Set title.
        id: str
            Tile Matrix Set identifier (default is 'Custom').
        ordered_axes: list of str, optional
            Override Axis order (e.g `["N", "S"]`) else default to CRS's metadata.
        geographic_crs: str
            Geographic (lat,lon) coordinate reference system (default is EPSG:4326).
        backend: TransformBackend, optional
            Coordinate transformation backend (default from settings).
        kwargs: any
            Attributes to forward to the TileMatrixSet definition.

        Returns:
        --------
        TMS

        """
        matrix_scale = matrix_scale or [1, 1]
        backend = backend or get_backend()

        bbox = transformed_bbox(extent, crs, extent_crs, backend)
        width = abs(bbox.right - bbox.left)
        height = abs(bbox.top - bbox.bottom)

        resolutions = [
            max(
                width / (tile_width * matrix_scale[0]) / 2.0**zoom,
                height / (tile_height * matrix_scale[1]) / 2.0**zoom,
            )
            for zoom in range(minzoom, maxzoom + 1)
        ]

        return cls.custom_resolutions(
            extent,
            crs,
            resolutions,
            tile_width=tile_width,
            tile_height=tile_height,
            extent_crs=extent_crs,
            minzoom=minzoom,
            title=title,
            id=id,
            ordered_axes=ordered_axes,
            geographic_crs=geographic_crs,
            backend=backend,
            **kwargs,
        )

    @classmethod
    def custom_resolutions(
        cls,
        extent: Sequence[float],
        crs: str,
        resolutions: Sequence[float],
        tile_width: int = 256,
        tile_height: int = 256,
        extent_crs: str | None = None,
        minzoom: int = 0,
        title: str | None = None,
        id: str = "Custom",
        ordered_axes: Sequence[str] | None = None,
        geographic_crs: str = WGS84_CRS,
        backend: TransformBackend | None = None,
        **kwargs: Any,
    ) -> TMS:
        """Construct a custom TileMatrixSet from a list of resolutions.

        One TileMatrix is created per resolution, with identifiers starting at `minzoom`.
        """
        backend = backend or get_backend()
        crs = crs_to_uri(crs)

        if tile_width <= 0 or tile_height <= 0:
            raise NonZeroError("Tile width and height must be greater than 0")

        if ordered_axes:
            is_inverted = ordered_axes_inverted(ordered_axes)
        else:
            is_inverted = backend.axis_inverted(crs)

        bbox = transformed_bbox(extent, crs, extent_crs, backend)

        if is_inverted:
            bounding_box = TMSBoundingBox(
                lowerLeft=(bbox.bottom, bbox.left),
                upperRight=(bbox.top, bbox.right),
                crs=crs,
                orderedAxes=ordered_axes,
            )
            point_of_origin = (bbox.top, bbox.left)
        else:
            bounding_box = TMSBoundingBox(
                lowerLeft=(bbox.left, bbox.bottom),
                upperRight=(bbox.right, bbox.top),
                crs=crs,
                orderedAxes=ordered_axes,
            )
            point_of_origin = (bbox.left, bbox.top)

        mpu = meters_per_unit(backend.unit_name(crs))

        tile_matrices: list[TileMatrix] = []
        for idx, res in enumerate(resolutions):
            if res <= 0:
                raise NonZeroError(f"Invalid resolution: {res}")

            unitwidth = tile_width * res
            unitheight = tile_height * res
            # 1% slack to avoid an extra tile when the extent is a multiple of the tile size
            maxx = math.ceil((bbox.right - bbox.left - 0.01 * unitwidth) / unitwidth)
            maxy = math.ceil((bbox.top - bbox.bottom - 0.01 * unitheight) / unitheight)
            if maxx <= 0 or maxy <= 0:
                raise NonZeroError(
                    f"Resolution {res} gives an empty tile matrix for extent {list(bbox)}"
                )

            tile_matrices.append(
                TileMatrix(
                    id=str(minzoom + idx),
                    scaleDenominator=res * mpu / SCREEN_PIXEL_SIZE,
                    cellSize=res,
                    pointOfOrigin=point_of_origin,
                    tileWidth=tile_width,
                    tileHeight=tile_height,
                    matrixWidth=maxx,
                    matrixHeight=maxy,
                )
            )

        definition = TileMatrixSet(
            title=title,
            id=id,
            crs=crs,
            orderedAxes=ordered_axes,
            boundingBox=bounding_box,
            tileMatrices=tile_matrices,
            **kwargs,
        )
        logger.debug(f"custom TileMatrixSet {id} with {len(tile_matrices)} levels")

        return cls(definition, geographic_crs=geographic_crs, backend=backend)

    def matrix(self, zoom: int) -> TileMatrix:
        """Return the TileMatrix for a specific zoom.

        Zoom levels finer than the last TileMatrix are extrapolated when the
        TileMatrixSet has a constant scale ratio between levels.
        """
        for m in self.tileMatrices:
            if m.id == str(zoom):
                return m

        if zoom < self.maxzoom:
            raise InvalidZoomError(f"TileMatrix not found for level: {zoom}")

        # scale ratio for one level step, whatever the gap between identifiers
        matrix_scale = list(
            {
                round(
                    (
                        self.tileMatrices[idx].scaleDenominator
                        / self.tileMatrices[idx - 1].scaleDenominator
                    )
                    ** (
                        1
                        / (
                            int(self.tileMatrices[idx].id)
                            - int(self.tileMatrices[idx - 1].id)
                        )
                    ),
                    2,
                )
                for idx in range(1, len(self.tileMatrices))
            }
        )
        if len(matrix_scale) != 1:
            raise InvalidZoomError(
                f"TileMatrix not found for level: {zoom} - Unable to construct tileMatrix for TMS with variable scale"
            )

        warnings.warn(
            f"TileMatrix not found for level: {zoom} - Creating values from TMS Scale.",
            UserWarning,
            stacklevel=2,
        )

        tile_matrix = self.tileMatrices[-1]
        factor = 1 / matrix_scale[0]
        while not str(zoom) == tile_matrix.id:
            tile_matrix = TileMatrix(
                id=str(int(tile_matrix.id) + 1),
                scaleDenominator=tile_matrix.scaleDenominator / factor,
                cellSize=tile_matrix.cellSize / factor,
                cornerOfOrigin=tile_matrix.cornerOfOrigin,
                pointOfOrigin=tile_matrix.pointOfOrigin,
                tileWidth=tile_matrix.tileWidth,
                tileHeight=tile_matrix.tileHeight,
                matrixWidth=round(tile_matrix.matrixWidth * factor),
                matrixHeight=round(tile_matrix.matrixHeight * factor),
            )

        return tile_matrix

    def _resolution(self, matrix: TileMatrix) -> float:
        """
        Tile resolution for a TileMatrix.

        From note g in http://docs.opengeospatial.org/is/17-083r2/17-083r2.html#table_2:
            The pixel size of the tile can be obtained from the scaleDenominator
            by multiplying the later by 0.28 10-3 / metersPerUnit.

        """
        return matrix.scaleDenominator * SCREEN_PIXEL_SIZE / self._meters_per_unit

    def _matrix_origin(self, matrix: TileMatrix) -> Coords:
        """Return the top-left corner of the matrix, in x,y order."""
        if self._invert_axis:
            origin_y, origin_x = matrix.pointOfOrigin
        else:
            origin_x, origin_y = matrix.pointOfOrigin

        if matrix.cornerOfOrigin == "bottomLeft":
            origin_y += self._resolution(matrix) * matrix.tileHeight * matrix.matrixHeight

        return Coords(origin_x, origin_y)

    def zoom_for_res(
        self,
        res: float,
        max_z: int | None = None,
        zoom_level_strategy: str = "auto",
        min_z: int | None = None,
    ) -> int:
        """Get TMS zoom level corresponding to a specific resolution.

        Args:
            res (float): Resolution in TMS unit.
            max_z (int): Maximum zoom level (default is tms maxzoom).
            zoom_level_strategy (str): Strategy to determine zoom level (same as in GDAL 3.2).
                LOWER will select the zoom level immediately below the theoretical computed non-integral zoom level.
                On the contrary, UPPER will select the immediately above zoom level.
                Defaults to AUTO which selects the closest zoom level.
                ref: https://gdal.org/drivers/raster/cog.html#raster-cog
            min_z (int): Minimum zoom level (default is tms minzoom).

        Returns:
            int: TMS zoom for a given resolution.

        Examples:
            >>> zoom_for_res(430.021)

        """
        strategy = zoom_level_strategy.lower()
        if strategy not in ZOOM_LEVEL_STRATEGIES:
            raise InvalidZoomLevelStrategy(
                f"Invalid strategy: {zoom_level_strategy}. Should be one of lower|upper|auto"
            )

        max_z = self.maxzoom if max_z is None else max_z
        min_z = self.minzoom if min_z is None else min_z
        if min_z > max_z:
            raise InvalidZoomError(f"Invalid zoom range: {min_z} > {max_z}")

        # Freely adapted from https://github.com/OSGeo/gdal/blob/dc38aa64d779ecc45e3cd15b1817b83216cf96b8/gdal/frmts/gtiff/cogdriver.cpp#L272-L305
        for zoom_level in range(min_z, max_z + 1):
            matrix_res = self._resolution(self.matrix(zoom=zoom_level))
            if res > matrix_res or abs(res - matrix_res) / matrix_res <= 1e-8:
                break

        if zoom_level > 0 and abs(res - matrix_res) / matrix_res > 1e-8:
            if strategy == "lower":
                zoom_level = max(zoom_level - 1, min_z)
            elif strategy == "upper":
                zoom_level = min(zoom_level, max_z)
            elif strategy == "auto":
                if (
                    self._resolution(self.matrix(max(zoom_level - 1, min_z))) / res
                ) < (res / matrix_res):
                    zoom_level = max(zoom_level - 1, min_z)

        return zoom_level

    def lnglat(self, x: float, y: float, truncate: bool = False) -> Coords:
        """Transform point(x,y) to geographic longitude and latitude."""
        if not truncate and not point_in_bbox(
            Coords(x, y), self.xy_bbox, self.precision
        ):
            raise PointOutsideTMSBounds(
                f"Point ({x}, {y}) is outside TMS bounds {list(self.xy_bbox)}."
            )

        lng, lat = self.to_geographic.transform(x, y)

        if truncate:
            lng, lat = self.truncate_lnglat(lng, lat)

        return Coords(lng, lat)

    def xy(self, lng: float, lat: float, truncate: bool = False) -> Coords:
        """Transform geographic longitude and latitude coordinates to TMS CRS."""
        if truncate:
            lng, lat = self.truncate_lnglat(lng, lat)

        elif not point_in_bbox(Coords(lng, lat), self.bbox, self.precision):
            raise PointOutsideTMSBounds(
                f"Point ({lng}, {lat}) is outside TMS bounds {list(self.bbox)}."
            )

        x, y = self.from_geographic.transform(lng, lat)

        return Coords(x, y)

    def truncate_lnglat(self, lng: float, lat: float) -> tuple[float, float]:
        """
        Truncate geographic coordinates to TMS geographic bbox.

        Adapted from https://github.com/mapbox/mercantile/blob/master/mercantile/__init__.py

        """
        bbox = self.bbox
        if lng > bbox.right:
            lng = bbox.right
        elif lng < bbox.left:
            lng = bbox.left

        if lat > bbox.top:
            lat = bbox.top
        elif lat < bbox.bottom:
            lat = bbox.bottom

        return lng, lat

    def xy_tile(self, xcoord: float, ycoord: float, zoom: int) -> Tile:
        """
        Get the tile containing a Point (in TMS CRS).

        Args:
            xcoord, ycoord (float): A `X` and `Y` pair in TMS coordinate reference system.
            zoom (int): The zoom level.

        Returns:
            Tile

        """
        matrix = self.matrix(zoom)
        res = self._resolution(matrix)
        origin_x, origin_y = self._matrix_origin(matrix)

        xtile = (
            tile_index(
                xcoord - origin_x,
                res * matrix.tileWidth,
                max(abs(xcoord), abs(origin_x)),
            )
            if not math.isinf(xcoord)
            else 0
        )
        ytile = (
            tile_index(
                origin_y - ycoord,
                res * matrix.tileHeight,
                max(abs(ycoord), abs(origin_y)),
            )
            if not math.isinf(ycoord)
            else 0
        )

        # avoid out-of-range tiles
        if xtile < 0:
            xtile = 0

        if ytile < 0:
            ytile = 0

        if xtile >= matrix.matrixWidth:
            xtile = matrix.matrixWidth - 1

        if ytile >= matrix.matrixHeight:
            ytile = matrix.matrixHeight - 1

        # coalesced tiles are addressed by their first column
        cf = matrix.get_coalesce_factor(ytile)
        if cf > 1:
            xtile -= xtile % cf

        return Tile(x=xtile, y=ytile, z=zoom)

    def tile(self, lng: float, lat: float, zoom: int, truncate: bool = False) -> Tile:
        """
        Get the tile for a given geographic longitude and latitude pair.

        Args:
            lng, lat (float): A longitude and latitude pair in geographic coordinate reference system.
            zoom (int): The zoom level.
            truncate (bool): Whether or not to truncate inputs to TMS limits.

        Returns:
            Tile

        """
        x, y = self.xy(lng, lat, truncate=truncate)
        return self.xy_tile(x, y, zoom)

    def xy_ul(self, tile: Tile) -> Coords:
        """
        Return the upper left coordinate of the tile in TMS coordinate reference system.

        Args:
            tile (Tile): (x, y, z) tile coordinates or a Tile object we want the upper left coordinates of.

        Returns:
            Coords: The upper left coordinates of the input tile.

        """
        t = Tile(*tile)

        matrix = self.matrix(t.z)
        res = self._resolution(matrix)
        origin_x, origin_y = self._matrix_origin(matrix)

        xcoord = origin_x + t.x * res * matrix.tileWidth
        ycoord = origin_y - t.y * res * matrix.tileHeight
        return Coords(xcoord, ycoord)

    def _coalesced_span(self, t: Tile) -> tuple[int, int]:
        """First and next-after-last columns covered by a (possibly coalesced) tile."""
        cf = self.matrix(t.z).get_coalesce_factor(t.y)
        start = t.x - (t.x % cf)
        return start, start + cf

    def xy_bounds(self, tile: Tile) -> BoundingBox:
        """
        Return the bounding box of the tile in TMS coordinate reference system.

        Args:
            tile (Tile): Tile object we want the bounding box of.

        Returns:
            BoundingBox: The bounding box of the input tile.

        """
        t = Tile(*tile)
        start, end = self._coalesced_span(t)

        left, top = self.xy_ul(Tile(start, t.y, t.z))
        right, bottom = self.xy_ul(Tile(end, t.y + 1, t.z))
        return BoundingBox(left, bottom, right, top)

    def ul(self, tile: Tile) -> Coords:
        """
        Return the upper left coordinates of the tile in geographic coordinate reference system.

        Args:
            tile (Tile): (x, y, z) tile coordinates or a Tile object we want the upper left geographic coordinates of.

        Returns:
            Coords: The upper left geographic coordinates of the input tile.

        """
        t = Tile(*tile)

        if self._is_web_mercator_quad:
            return merc_tile_ul(t.x, t.y, t.z)

        x, y = self.xy_ul(t)
        return self.to_geographic.transform(x, y)

    def bounds(self, tile: Tile) -> BoundingBox:
        """
        Return the bounding box of the tile in geographic coordinate reference system.

        Args:
            tile (Tile): Tile object we want the bounding box of.

        Returns:
            BoundingBox: The bounding box of the input tile.

        """
        t = Tile(*tile)
        start, end = self._coalesced_span(t)

        left, top = self.ul(Tile(start, t.y, t.z))
        right, bottom = self.ul(Tile(end, t.y + 1, t.z))
        return BoundingBox(left, bottom, right, top)

    def _get_xy_bbox(self) -> BoundingBox:
        bounding_box = self.definition.boundingBox
        if not bounding_box:
            zoom = self.minzoom
            matrix = self.matrix(zoom)
            left, top = self.xy_ul(Tile(0, 0, zoom))
            right, bottom = self.xy_ul(
                Tile(matrix.matrixWidth, matrix.matrixHeight, zoom)
            )
            return BoundingBox(left, bottom, right, top)

        bbox_crs = bounding_box.crs or self.crs
        reproject = not same_crs(bbox_crs, self.crs)

        if bounding_box.orderedAxes:
            inverted = ordered_axes_inverted(bounding_box.orderedAxes)
        elif reproject:
            inverted = self.backend.axis_inverted(bbox_crs)
        else:
            inverted = self._invert_axis

        if inverted:
            (bottom, left), (top, right) = bounding_box.lowerLeft, bounding_box.upperRight
        else:
            (left, bottom), (right, top) = bounding_box.lowerLeft, bounding_box.upperRight

        if reproject:
            transform = self.backend.from_crs(bbox_crs, self.crs)
            return transform.transform_bounds(left, bottom, right, top)

        return BoundingBox(left, bottom, right, top)

    @property
    def xy_bbox(self) -> BoundingBox:
        """Return TMS bounding box in TileMatrixSet's CRS."""
        return self._xy_bbox

    @cached_property
    def bbox(self) -> BoundingBox:
        """Return TMS bounding box in geographic coordinate reference system."""
        left, bottom, right, top = self.xy_bbox
        return self.to_geographic.transform_bounds(left, bottom, right, top)

    def intersect_tms(self, bbox: BoundingBox) -> bool:
        """Check if a bounds intersects with the TMS bounds (in TMS CRS)."""
        tms_bounds = self.xy_bbox
        return (
            (bbox[0] < tms_bounds[2])
            and (bbox[2] > tms_bounds[0])
            and (bbox[3] > tms_bounds[1])
            and (bbox[1] < tms_bounds[3])
        )

    def _clip(self, west, south, east, north) -> BoundingBox:
        bbox = self.bbox
        return BoundingBox(
            max(bbox.left, west),
            max(bbox.bottom, south),
            min(bbox.right, east),
            min(bbox.top, north),
        )

    def tiles(
        self,
        west: float,
        south: float,
        east: float,
        north: float,
        zooms: int | Sequence[int],
        truncate: bool = False,
    ) -> Iterator[Tile]:
        """
        Get the tiles overlapped by a geographic bounding box

        Original code from https://github.com/mapbox/mercantile/blob/master/mercantile/__init__.py#L424

        Args:
            west, south, east, north (float): Bounding values in decimal degrees (geographic CRS).
            zooms (int or sequence of int): One or more zoom levels.
            truncate (bool, optional): Whether or not to truncate inputs to TMS limits.

        Yields:
            Tile

        Notes:
            A small epsilon is used on the south and east parameters so that this
            function yields exactly one tile when given the bounds of that same tile.
            Bounding boxes crossing the antimeridian (west > east) are split in two.

        """
        if isinstance(zooms, int):
            zooms = (zooms,)

        if truncate:
            west, south = self.truncate_lnglat(west, south)
            east, north = self.truncate_lnglat(east, north)

        if west > east:
            bbox_west = (self.bbox.left, south, east, north)
            bbox_east = (west, south, self.bbox.right, north)
            bboxes = [bbox_west, bbox_east]
        else:
            bboxes = [(west, south, east, north)]

        for z in zooms:
            for bb in bboxes:
                w, s, e, n = self._clip(*bb)
                if w > e or s > n:
                    continue

                ul_tile = self.tile(w + LL_EPSILON, n - LL_EPSILON, z)
                lr_tile = self.tile(e - LL_EPSILON, s + LL_EPSILON, z)

                for i in range(ul_tile.x, lr_tile.x + 1):
                    for j in range(ul_tile.y, lr_tile.y + 1):
                        yield Tile(i, j, z)

    def extent_limits(
        self,
        extent: BoundingBox,
        minzoom: int,
        maxzoom: int,
        truncate: bool = False,
    ) -> list[MinMax]:
        """Get the tile limits overlapped by a geographic bounding box."""
        left, bottom, right, top = extent
        if left > right or minzoom > maxzoom:
            return []

        w, s, e, n = self._clip(left, bottom, right, top)
        if w > e or s > n:
            return []

        limits = []
        for z in range(minzoom, maxzoom + 1):
            ul_tile = self.tile(w + LL_EPSILON, n - LL_EPSILON, z, truncate=truncate)
            lr_tile = self.tile(e - LL_EPSILON, s + LL_EPSILON, z, truncate=truncate)
            limits.append(MinMax(ul_tile.x, lr_tile.x, ul_tile.y, lr_tile.y))

        return limits

    def extent_limits_xy(
        self, extent: BoundingBox, minzoom: int, maxzoom: int
    ) -> list[MinMax]:
        """Get the tile limits overlapped by a bounding box in TMS CRS."""
        left, bottom, right, top = extent
        if left > right or minzoom > maxzoom:
            return []

        bbox = self.xy_bbox
        w = max(left, bbox.left)
        s = max(bottom, bbox.bottom)
        e = min(right, bbox.right)
        n = min(top, bbox.top)
        if w > e or s > n:
            return []

        limits = []
        for z in range(minzoom, maxzoom + 1):
            res = self._resolution(self.matrix(z)) / 10.0
            ul_tile = self.xy_tile(w + res, n - res, z)
            lr_tile = self.xy_tile(e - res, s + res, z)
            limits.append(MinMax(ul_tile.x, lr_tile.x, ul_tile.y, lr_tile.y))

        return limits

    def xyz_iterator(
        self, extent: BoundingBox, minzoom: int, maxzoom: int
    ) -> XyzIterator:
        """Get iterator over all tiles overlapped by a bounding box in TMS CRS."""
        limits = self.extent_limits_xy(extent, minzoom, maxzoom)
        return XyzIterator(minzoom, maxzoom, limits)

    def xyz_iterator_geographic(
        self, extent: BoundingBox, minzoom: int, maxzoom: int
    ) -> XyzIterator:
        """Get iterator over all tiles overlapped by a geographic bounding box."""
        limits = self.extent_limits(extent, minzoom, maxzoom)
        return XyzIterator(minzoom, maxzoom, limits)

    def minmax(self, zoom: int) -> MinMax:
        """Return TileMatrix Extrema.

        Args:
            zoom (int): The zoom level.

        Returns:
            MinMax: The minimum and maximum tile indices.

        """
        m = self.matrix(zoom)
        return MinMax(0, max(m.matrixWidth - 1, 0), 0, max(m.matrixHeight - 1, 0))

    def is_valid(self, tile: Tile) -> bool:
        """Check if a tile is valid."""
        t = Tile(*tile)

        if t.z < self.minzoom:
            return False

        try:
            extrema = self.minmax(t.z)
        except InvalidZoomError:
            return False

        validx = extrema.x_min <= t.x <= extrema.x_max
        validy = extrema.y_min <= t.y <= extrema.y_max

        return validx and validy

    def neighbors(self, tile: Tile) -> list[Tile]:
        """The neighbors of a tile

        The neighbors function makes no guarantees regarding neighbor tile
        ordering.

        The neighbors function returns up to eight neighboring tiles, where
        tiles will be omitted when they are not valid.

        Args:
            tile (Tile): instance of Tile

        Returns:
            list: list of Tile

        """
        t = Tile(*tile)
        extrema = self.minmax(t.z)

        tiles = []
        for x in range(t.x - 1, t.x + 2):
            for y in range(t.y - 1, t.y + 2):
                if x == t.x and y == t.y:
                    continue
                elif x < extrema.x_min or y < extrema.y_min:
                    continue
                elif x > extrema.x_max or y > extrema.y_max:
                    continue

                tiles.append(Tile(x, y, t.z))

        return tiles

    def _covering_tiles(self, t: Tile, target_zoom: int) -> list[Tile]:
        """Tiles at `target_zoom` covering the tile bounds shrunk by 1/10 of a pixel."""
        res = self._resolution(self.matrix(t.z)) / 10.0

        bbox = self.xy_bounds(t)
        ul_tile = self.xy_tile(bbox.left + res, bbox.top - res, target_zoom)
        lr_tile = self.xy_tile(bbox.right - res, bbox.bottom + res, target_zoom)

        return [
            Tile(i, j, target_zoom)
            for i in range(ul_tile.x, lr_tile.x + 1)
            for j in range(ul_tile.y, lr_tile.y + 1)
        ]

    def parent(self, tile: Tile, zoom: int | None = None) -> list[Tile]:
        """Get the parent of a tile

        The parent is the tile of one zoom level lower that contains the
        given "child" tile.

        Args:
            tile (Tile): instance of Tile
            zoom (int, optional): Determines the *zoom* level of the returned parent tile.
                This defaults to one lower than the tile (the immediate parent).

        Returns:
            list: list of Tile

        """
        t = Tile(*tile)
        if t.z == self.minzoom:
            return []

        if zoom is not None and t.z <= zoom:
            # zoom must be less than that of the input tile
            raise InvalidZoomError(
                f"Parent zoom ({zoom}) must be lower than the tile zoom ({t.z})"
            )

        target_zoom = t.z - 1 if zoom is None else zoom
        if target_zoom < self.minzoom:
            raise InvalidZoomError(
                f"Parent zoom ({target_zoom}) is lower than TMS minzoom ({self.minzoom})"
            )

        return self._covering_tiles(t, target_zoom)

    def children(self, tile: Tile, zoom: int | None = None) -> list[Tile]:
        """Get the children of a tile

        The children are ordered column by column, row by row.

        Args:
            tile (Tile): instance of Tile
            zoom (int, optional): Determines the *zoom* level of the returned child tiles.
                This defaults to one higher than the tile (the immediate children).

        Returns:
            list: list of Tile

        """
        t = Tile(*tile)
        if zoom is not None and t.z > zoom:
            # zoom must be greater than that of the input tile
            raise InvalidZoomError(
                f"Children zoom ({zoom}) must be greater than the tile zoom ({t.z})"
            )

        target_zoom = t.z + 1 if zoom is None else zoom
        return self._covering_tiles(t, target_zoom)

    @property
    def quadkey_support(self) -> bool:
        """Check if the TMS supports quadkeys."""
        return self._quadkey_root is not None

    @property
    def hilbert_support(self) -> bool:
        """Check if the TMS is part of the 2**z x 2**z pyramid indexed by Hilbert ids."""
        return self._quadkey_root == 0

    def quadkey(self, tile: Tile) -> str:
        """Get the quadkey of a tile

        Digits are counted from the level of the 1x1 root matrix of the quadtree.

        Args:
            tile (Tile): instance of Tile

        Returns:
            str

        """
        if self._quadkey_root is None:
            raise NoQuadkeySupport(
                "This Tile Matrix Set doesn't support 2 x 2 quadkeys."
            )

        return quadkey.tile_to_quadkey(Tile(*tile), self._quadkey_root)

    def quadkey_to_tile(self, qk: str) -> Tile:
        """Get the tile corresponding to a quadkey

        Args:
            qk (str): A quadkey string.

        Returns:
            Tile

        """
        if self._quadkey_root is None:
            raise NoQuadkeySupport(
                "This Tile Matrix Set doesn't support 2 x 2 quadkeys."
            )

        tile = quadkey.quadkey_to_tile(qk, self._quadkey_root)
        if tile.z < self.minzoom:
            raise QuadKeyError(
                f"Quadkey {qk!r} is for level {tile.z}, below TMS minzoom ({self.minzoom})"
            )

        return tile

    def _check_hilbert_support(self):
        if not self.hilbert_support:
            raise HilbertError(
                "This Tile Matrix Set is not part of the 2**z x 2**z quadtree pyramid, Hilbert indexes are not supported."
            )

    def hilbert_id(self, tile: Tile) -> int:
        """Get the hilbert index of a tile."""
        self._check_hilbert_support()
        return hilbert.tile_id(Tile(*tile))

    def hilbert_to_tile(self, h: int, max_zoom: int | None = None) -> Tile:
        """Get the tile corresponding to a Hilbert index."""
        self._check_hilbert_support()
        return hilbert.hilbert_tile(h, max_zoom=max_zoom)

    def hilbert_iterator(
        self, minzoom: int | None = None, maxzoom: int | None = None
    ) -> hilbert.HilbertIterator:
        """Iterate over the tiles of each zoom level in Hilbert order."""
        self._check_hilbert_support()
        return hilbert.HilbertIterator(
            self.minzoom if minzoom is None else minzoom,
            self.maxzoom if maxzoom is None else maxzoom,
        )

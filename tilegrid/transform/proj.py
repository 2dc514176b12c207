"""PROJ coordinate transformations (pyproj)."""

import logging

import pyproj
from pyproj.exceptions import CRSError, ProjError

from tilegrid.commons import BoundingBox, Coords
from tilegrid.crs import crs_to_authority
from tilegrid.errors import TransformationError, TransformationUnsupported
from tilegrid.transform.base import TransformBackend, Transformer

logger = logging.getLogger(__name__)


def to_pyproj(crs: str) -> pyproj.CRS:
    """Create a pyproj CRS from a CRS identifier."""
    try:
        return pyproj.CRS.from_user_input(crs_to_authority(crs))
    except CRSError as e:
        raise TransformationUnsupported(f"Invalid CRS: {crs}") from e


class ProjTransformer(Transformer):
    """pyproj.Transformer wrapper."""

    def __init__(self, transformer: pyproj.Transformer, densify_pts: int = 21):
        """Wrap an `always_xy` pyproj Transformer."""
        self._transformer = transformer
        self.densify_pts = densify_pts

    def transform(self, x: float, y: float) -> Coords:
        """Transform a point."""
        try:
            return Coords(*self._transformer.transform(x, y))
        except ProjError as e:
            raise TransformationError(str(e)) from e

    def transform_bounds(
        self, left: float, bottom: float, right: float, top: float
    ) -> BoundingBox:
        """Transform a bounding box, densifying its edges."""
        try:
            return BoundingBox(
                *self._transformer.transform_bounds(
                    left, bottom, right, top, densify_pts=self.densify_pts
                )
            )
        except ProjError as e:
            raise TransformationError(str(e)) from e


class ProjBackend(TransformBackend):
    """Full transform backend using PROJ."""

    name = "proj"

    def from_crs(self, crs_from: str, crs_to: str) -> Transformer:
        """Create a Transformer between two CRS."""
        logger.debug(
            f"creating pyproj transformer {crs_to_authority(crs_from)} -> {crs_to_authority(crs_to)}"
        )
        try:
            transformer = pyproj.Transformer.from_crs(
                to_pyproj(crs_from), to_pyproj(crs_to), always_xy=True
            )
        except ProjError as e:
            raise TransformationUnsupported(
                f"Could not create transformation from {crs_from} to {crs_to}"
            ) from e

        return ProjTransformer(transformer)

    def unit_name(self, crs: str) -> str:
        """Name of the unit of the first CRS axis."""
        return to_pyproj(crs).axis_info[0].unit_name

    def axis_inverted(self, crs: str) -> bool:
        """Check if CRS has inverted AXIS (lat,lon) instead of (lon,lat)."""
        return to_pyproj(crs).axis_info[0].abbrev.upper() in ["Y", "LAT", "N"]

"""WGS84 <-> Web Mercator transformations without PROJ."""

import logging
import math

from attrs import define

from tilegrid.commons import BoundingBox, Coords
from tilegrid.crs import (
    SEMI_MAJOR_METRE,
    crs_to_authority,
    is_web_mercator,
    is_wgs84,
    same_crs,
)
from tilegrid.errors import TransformationError, TransformationUnsupported
from tilegrid.transform.base import TransformBackend, Transformer

logger = logging.getLogger(__name__)


def lnglat_to_merc(lng: float, lat: float) -> Coords:
    """Returns the Spherical Mercator (x, y) in meters.

    Poles are projected to infinity.
    """
    if math.isnan(lng) or math.isnan(lat):
        raise TransformationError(f"Invalid coordinates ({lng}, {lat})")

    x = SEMI_MAJOR_METRE * math.radians(lng)
    if lat <= -90:
        y = float("-inf")
    elif lat >= 90:
        y = float("inf")
    else:
        y = SEMI_MAJOR_METRE * math.log(
            math.tan((math.pi * 0.25) + (0.5 * math.radians(lat)))
        )

    return Coords(x, y)


def merc_to_lnglat(x: float, y: float) -> Coords:
    """Returns longitude and latitude for Spherical Mercator (x, y) in meters."""
    lng = math.degrees(x / SEMI_MAJOR_METRE)
    lat = math.degrees(2 * math.atan(math.exp(y / SEMI_MAJOR_METRE)) - math.pi * 0.5)
    return Coords(lng, lat)


@define
class BasicTransformer(Transformer):
    """Identity, WGS84 -> Web Mercator or Web Mercator -> WGS84."""

    crs_from: str
    crs_to: str

    def _func(self):
        if same_crs(self.crs_from, self.crs_to) or (
            is_wgs84(self.crs_from) and is_wgs84(self.crs_to)
        ):
            return Coords

        if is_wgs84(self.crs_from):
            return lnglat_to_merc

        return merc_to_lnglat

    def transform(self, x: float, y: float) -> Coords:
        """Transform a point."""
        return self._func()(x, y)

    def transform_bounds(
        self, left: float, bottom: float, right: float, top: float
    ) -> BoundingBox:
        """Transform a bounding box.

        Both transformations are monotonic on each axis so transforming the
        corners is enough.
        """
        func = self._func()
        minx, miny = func(left, bottom)
        maxx, maxy = func(right, top)
        return BoundingBox(minx, miny, maxx, maxy)


class BasicBackend(TransformBackend):
    """Restricted backend supporting only WGS84 and Web Mercator."""

    name = "basic"

    def _check_supported(self, crs: str):
        if not (is_wgs84(crs) or is_web_mercator(crs)):
            raise TransformationUnsupported(
                f"Basic transform backend does not support {crs_to_authority(crs)}"
            )

    def from_crs(self, crs_from: str, crs_to: str) -> Transformer:
        """Create a Transformer between two CRS."""
        if not same_crs(crs_from, crs_to):
            self._check_supported(crs_from)
            self._check_supported(crs_to)

        logger.debug(
            f"creating basic transformer {crs_to_authority(crs_from)} -> {crs_to_authority(crs_to)}"
        )
        return BasicTransformer(crs_from, crs_to)

    def unit_name(self, crs: str) -> str:
        """Name of the unit of the first CRS axis."""
        self._check_supported(crs)
        return "degree" if is_wgs84(crs) else "metre"

    def axis_inverted(self, crs: str) -> bool:
        """EPSG:4326 is the only supported CRS in lat,lon order."""
        self._check_supported(crs)
        return crs_to_authority(crs) == "EPSG:4326"

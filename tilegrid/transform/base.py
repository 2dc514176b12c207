"""Coordinate transformation interface."""

import abc

from tilegrid.commons import BoundingBox, Coords


class Transformer(metaclass=abc.ABCMeta):
    """Transform coordinates from one CRS to another.

    Coordinates are always in `x, y` (`lon, lat`) order, whatever the CRS
    axis order.
    """

    @abc.abstractmethod
    def transform(self, x: float, y: float) -> Coords:
        """Transform a point."""
        ...

    @abc.abstractmethod
    def transform_bounds(
        self, left: float, bottom: float, right: float, top: float
    ) -> BoundingBox:
        """Transform a bounding box."""
        ...


class TransformBackend(metaclass=abc.ABCMeta):
    """Coordinate Reference System capabilities used by the TMS engine."""

    name: str = ""

    @abc.abstractmethod
    def from_crs(self, crs_from: str, crs_to: str) -> Transformer:
        """Create a Transformer between two CRS.

        Raises `TransformationUnsupported` if the backend can't handle the pair.
        """
        ...

    @abc.abstractmethod
    def unit_name(self, crs: str) -> str:
        """Name of the unit of the first CRS axis (e.g `metre`)."""
        ...

    @abc.abstractmethod
    def axis_inverted(self, crs: str) -> bool:
        """Check if CRS has inverted AXIS (lat,lon) instead of (lon,lat)."""
        ...

"""CRS identifiers and units."""

import math
import re
from typing import NamedTuple

from tilegrid.errors import UnsupportedUnit

WGS84_CRS = "http://www.opengis.net/def/crs/EPSG/0/4326"
CRS84 = "http://www.opengis.net/def/crs/OGC/1.3/CRS84"
WEB_MERCATOR_CRS = "http://www.opengis.net/def/crs/EPSG/0/3857"

DEFAULT_VERSIONS = {"EPSG": "0", "OGC": "1.3"}

# Equatorial radius of the WGS84 ellipsoid
SEMI_MAJOR_METRE = 6378137.0

_OGC_URI = re.compile(
    r"^https?://www\.opengis\.net/def/crs/(?P<authority>[^/]+)/(?P<version>[^/]+)/(?P<code>[^/]+)/?$"
)
_OGC_URN = re.compile(
    r"^urn:ogc:def:crs:(?P<authority>[^:]+):(?P<version>[^:]*):(?P<code>[^:]+)$",
    re.IGNORECASE,
)
_AUTHORITY_CODE = re.compile(r"^(?P<authority>[A-Za-z]+):(?P<code>[A-Za-z0-9.]+)$")


class CRSIdentifier(NamedTuple):
    """Authority, version and code of a CRS."""

    authority: str
    version: str
    code: str


def parse_crs(crs: str) -> CRSIdentifier:
    """Parse an OGC URI, an OGC URN or an `AUTHORITY:CODE` string.

    Examples:
        >>> parse_crs("EPSG:3857")
        CRSIdentifier(authority='EPSG', version='0', code='3857')
        >>> parse_crs("http://www.opengis.net/def/crs/OGC/1.3/CRS84")
        CRSIdentifier(authority='OGC', version='1.3', code='CRS84')

    """
    value = crs.strip()
    for pattern in (_OGC_URI, _OGC_URN, _AUTHORITY_CODE):
        match = pattern.match(value)
        if match:
            parts = match.groupdict()
            authority = parts["authority"].upper()
            version = parts.get("version") or DEFAULT_VERSIONS.get(authority, "0")
            return CRSIdentifier(authority, version, parts["code"].upper())

    raise ValueError(f"Invalid CRS identifier: {crs!r}")


def crs_to_uri(crs: str) -> str:
    """Normalize a CRS identifier to its OGC URI."""
    authority, version, code = parse_crs(crs)
    return f"http://www.opengis.net/def/crs/{authority}/{version}/{code}"


def crs_to_authority(crs: str) -> str:
    """Return `AUTHORITY:CODE` string (e.g `EPSG:4326`)."""
    authority, _, code = parse_crs(crs)
    return f"{authority}:{code}"


def crs_epsg(crs: str) -> int | None:
    """Return the EPSG code of a CRS or None for other authorities."""
    authority, _, code = parse_crs(crs)
    if authority == "EPSG" and code.isdigit():
        return int(code)

    return None


def same_crs(crs: str, other: str) -> bool:
    """Check if two identifiers point to the same CRS (version is ignored)."""
    a = parse_crs(crs)
    b = parse_crs(other)
    return (a.authority, a.code) == (b.authority, b.code)


def is_wgs84(crs: str) -> bool:
    """Check if the CRS is WGS84 geographic (EPSG:4326 or OGC:CRS84)."""
    authority, _, code = parse_crs(crs)
    return (authority, code) in {("EPSG", "4326"), ("OGC", "CRS84")}


def is_web_mercator(crs: str) -> bool:
    """Check if the CRS is Web Mercator (EPSG:3857)."""
    return crs_epsg(crs) == 3857


def meters_per_unit(unit_name: str) -> float:
    """
    Coefficient to convert the coordinate reference system (CRS)
    units into meters (metersPerUnit).

    From note g in http://docs.opengeospatial.org/is/17-083r2/17-083r2.html#table_2:
        If the CRS uses meters as units of measure for the horizontal dimensions,
        then metersPerUnit=1; if it has degrees, then metersPerUnit=2pa/360
        (a is the Earth maximum radius of the ellipsoid).

    """
    unit_factors = {
        "metre": 1.0,
        "meter": 1.0,
        "degree": 2 * math.pi * SEMI_MAJOR_METRE / 360.0,
        "foot": 0.3048,
        "us survey foot": 1200 / 3937,
    }
    try:
        return unit_factors[unit_name.lower()]
    except KeyError as e:
        raise UnsupportedUnit(f"Unit Name `{unit_name}` is not supported.") from e

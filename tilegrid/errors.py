"""tilegrid error classes."""

from typing import Callable, Dict, Type

from fastapi import FastAPI
from pydantic import ValidationError
from starlette import status
from starlette.requests import Request
from starlette.responses import JSONResponse


class TilegridError(Exception):
    """Base exception class."""


class InvalidIdentifier(TilegridError):
    """Invalid TileMatrixSet identifier."""


class TileMatrixSetAlreadyRegistered(TilegridError):
    """TileMatrixSet identifier is already registered."""


class InvalidZoomId(TilegridError):
    """TileMatrix identifier is not a non-negative integer."""


class InvalidZoomLevelStrategy(TilegridError):
    """Unknown zoom level strategy."""


class InvalidZoomError(TilegridError):
    """Zoom level is not available or violates parent/child ordering."""


class PointOutsideTMSBounds(TilegridError):
    """Point is outside TMS bounds."""


class TransformationUnsupported(TilegridError):
    """The transform backend does not support this pair of CRS."""


class TransformationError(TilegridError):
    """The transform backend failed to transform coordinates."""


class NonZeroError(TilegridError):
    """Zero width or height for a tile or a tile matrix."""


class UnsupportedUnit(TilegridError):
    """CRS unit cannot be converted to meters."""


class NoQuadkeySupport(TilegridError):
    """Raised when a custom TileMatrixSet doesn't support quadkeys."""


class QuadKeyError(TilegridError):
    """Raised when errors occur in computing or parsing quad keys."""


class HilbertError(TilegridError):
    """Raised when errors occur in computing or parsing hilbert indexes."""


class TileOutsideBounds(TilegridError):
    """Tile is not part of its TileMatrix."""


DEFAULT_STATUS_CODES = {
    InvalidIdentifier: status.HTTP_404_NOT_FOUND,
    TileMatrixSetAlreadyRegistered: status.HTTP_409_CONFLICT,
    InvalidZoomId: status.HTTP_500_INTERNAL_SERVER_ERROR,
    InvalidZoomLevelStrategy: status.HTTP_400_BAD_REQUEST,
    InvalidZoomError: status.HTTP_400_BAD_REQUEST,
    PointOutsideTMSBounds: status.HTTP_400_BAD_REQUEST,
    TransformationUnsupported: status.HTTP_501_NOT_IMPLEMENTED,
    TransformationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    NonZeroError: status.HTTP_400_BAD_REQUEST,
    UnsupportedUnit: status.HTTP_500_INTERNAL_SERVER_ERROR,
    NoQuadkeySupport: status.HTTP_400_BAD_REQUEST,
    QuadKeyError: status.HTTP_400_BAD_REQUEST,
    HilbertError: status.HTTP_400_BAD_REQUEST,
    TileOutsideBounds: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    TilegridError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def exception_handler_factory(status_code: int) -> Callable:
    """
    Create a FastAPI exception handler from a status code.
    """

    def handler(request: Request, exc: Exception):
        return JSONResponse(content={"detail": str(exc)}, status_code=status_code)

    return handler


def add_exception_handlers(
    app: FastAPI, status_codes: Dict[Type[Exception], int]
) -> None:
    """
    Add exception handlers to the FastAPI app.
    """
    for (exc, code) in status_codes.items():
        app.add_exception_handler(exc, exception_handler_factory(code))

"""tilegrid"""

__version__ = "0.1.0"

from . import errors, hilbert, quadkey  # noqa
from .commons import BoundingBox, Coords, MinMax, Tile  # noqa
from .models import TileMatrix, TileMatrixSet  # noqa
from .registry import TileMatrixSets, default_registry  # noqa
from .tms import TMS  # noqa

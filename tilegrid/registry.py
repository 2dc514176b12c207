"""tilegrid.registry: TileMatrixSet registry."""

import logging
import pathlib
import threading
import warnings
from collections.abc import Mapping
from functools import lru_cache

from attrs import define, field

from tilegrid.errors import InvalidIdentifier, TileMatrixSetAlreadyRegistered
from tilegrid.models import TileMatrixSet
from tilegrid.settings import TilegridSettings
from tilegrid.tms import TMS
from tilegrid.transform import TransformBackend

logger = logging.getLogger(__name__)

DATA_DIR = pathlib.Path(__file__).parent / "data"

DefinitionType = TileMatrixSet | pathlib.Path


@define(frozen=True)
class TileMatrixSets:
    """Immutable collection of TileMatrixSet definitions.

    Definitions can be given as `TileMatrixSet` or as path to a JSON document,
    in which case they are parsed on first access. Engines (`TMS`) are built on
    first `lookup` and cached.

    Examples:
        >>> tms = TileMatrixSets({"WebMercatorQuad": pathlib.Path("WebMercatorQuad.json")})
        >>> tms.lookup("WebMercatorQuad").tile(159.31, -42.0, 4)
        Tile(x=15, y=10, z=4)

    """

    tilematrixsets: dict[str, DefinitionType] = field(factory=dict)
    backend: TransformBackend | None = field(default=None)

    _definitions: dict[str, TileMatrixSet] = field(
        init=False, factory=dict, repr=False, eq=False
    )
    _engines: dict[str, TMS] = field(init=False, factory=dict, repr=False, eq=False)
    _lock: threading.RLock = field(
        init=False, factory=threading.RLock, repr=False, eq=False
    )

    def get(self, identifier: str) -> TileMatrixSet:
        """Fetch a TileMatrixSet definition."""
        if identifier not in self.tilematrixsets:
            raise InvalidIdentifier(f"Invalid identifier: {identifier}")

        with self._lock:
            if identifier not in self._definitions:
                definition = self.tilematrixsets[identifier]
                if isinstance(definition, pathlib.Path):
                    logger.debug(f"loading TileMatrixSet {identifier} from {definition}")
                    definition = TileMatrixSet.from_file(definition)

                if definition.id != identifier:
                    warnings.warn(
                        f"TileMatrixSet registered as {identifier} has id {definition.id}.",
                        UserWarning,
                        stacklevel=2,
                    )

                self._definitions[identifier] = definition

            return self._definitions[identifier]

    def lookup(self, identifier: str) -> TMS:
        """Fetch the TMS engine for a TileMatrixSet identifier."""
        with self._lock:
            if identifier not in self._engines:
                self._engines[identifier] = TMS(
                    self.get(identifier), backend=self.backend
                )

            return self._engines[identifier]

    def list(self) -> list[str]:
        """List registered TileMatrixSet identifiers."""
        return list(self.tilematrixsets.keys())

    def register(
        self,
        custom_tms: Mapping[str, TileMatrixSet | TMS | pathlib.Path],
        overwrite: bool = False,
    ) -> "TileMatrixSets":
        """Return a new registry with additional TileMatrixSets."""
        for identifier in custom_tms:
            if identifier in self.tilematrixsets:
                if not overwrite:
                    raise TileMatrixSetAlreadyRegistered(
                        f"{identifier} is already a registered TMS."
                    )

                warnings.warn(
                    f"{identifier} TMS will be overwritten.", UserWarning, stacklevel=2
                )

        new = {
            identifier: value.definition if isinstance(value, TMS) else value
            for identifier, value in custom_tms.items()
        }
        logger.info(f"registering TileMatrixSets: {', '.join(new)}")

        return TileMatrixSets({**self.tilematrixsets, **new}, backend=self.backend)


def definitions_from_directory(directory: str | pathlib.Path) -> dict[str, pathlib.Path]:
    """Find TileMatrixSet JSON documents in a directory, by file stem."""
    return {path.stem: path for path in sorted(pathlib.Path(directory).glob("*.json"))}


@lru_cache
def default_registry() -> TileMatrixSets:
    """Default TileMatrixSets registry.

    Bundled definitions, plus the ones found in `TILEGRID_TILEMATRIXSET_DIRECTORY`
    (which take precedence).
    """
    settings = TilegridSettings()

    definitions: dict[str, DefinitionType] = dict(definitions_from_directory(DATA_DIR))
    if settings.tilematrixset_directory:
        user_definitions = definitions_from_directory(settings.tilematrixset_directory)
        logger.debug(
            f"found {len(user_definitions)} TileMatrixSets in {settings.tilematrixset_directory}"
        )
        definitions.update(user_definitions)

    return TileMatrixSets(definitions)

"""tilegrid.transform: coordinate transformation backends."""

from tilegrid.settings import TilegridSettings
from tilegrid.transform.base import TransformBackend, Transformer  # noqa
from tilegrid.transform.basic import BasicBackend, BasicTransformer  # noqa
from tilegrid.transform.proj import ProjBackend, ProjTransformer  # noqa

backends: dict[str, type[TransformBackend]] = {
    "proj": ProjBackend,
    "basic": BasicBackend,
}


def get_backend(name: str | None = None) -> TransformBackend:
    """Return a transform backend by name (default from settings)."""
    name = name or TilegridSettings().transform_backend
    try:
        return backends[name]()
    except KeyError as e:
        raise ValueError(
            f"Invalid transform backend: {name}. Should be one of {list(backends)}"
        ) from e

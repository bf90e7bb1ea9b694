"""Version resolution against an installer catalog."""
from typing import Optional, Sequence

from setup_ruby.errors import UnknownEngine, UnknownVersion
from setup_ruby.logging import get_logger
from setup_ruby.types import EngineVersion, is_head_version

logger = get_logger(__name__)


def resolve_version(
    catalog: Optional[Sequence[str]], requested: EngineVersion, platform: str
) -> str:
    """Pick the concrete catalog version for a request.

    An exact entry wins. Otherwise the newest non-head entry starting with
    the requested version is used; an empty request thus means newest.

    Raises:
        UnknownEngine: If there is no catalog for the engine
        UnknownVersion: If nothing matches
    """
    if catalog is None:
        raise UnknownEngine(requested.engine, platform)

    if requested.version in catalog:
        return requested.version

    for candidate in reversed(catalog):
        if not is_head_version(candidate) and candidate.startswith(requested.version):
            logger.info({
                "event": "version_resolved",
                "engine": requested.engine,
                "requested": requested.version,
                "resolved": candidate,
            })
            return candidate

    raise UnknownVersion(requested.engine, requested.version, platform, list(catalog))

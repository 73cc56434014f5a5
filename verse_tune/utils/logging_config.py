"""Process-wide logging setup for the ``verse-tune`` command line.

Only the CLI entry point calls :func:`configure_logging`; library code just
asks :func:`~verse_tune.utils.observability.get_logger` for a logger and
leaves handler setup to the embedding application.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from ..config import VerseTuneConfig

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_PACKAGE_LOGGER = "verse_tune"

LevelLike = Union[str, int, None]

_installed_level: Optional[int] = None


def resolve_level(level: LevelLike) -> int:
    """Translate a level name, number or numeric string; unknown names mean INFO."""

    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    text = str(level).strip()
    if text.isdigit():
        return int(text)
    resolved = logging.getLevelName(text.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    config: Optional[VerseTuneConfig] = None,
    *,
    level: LevelLike = None,
    force: bool = False,
) -> int:
    """Install the root handler and set the ``verse_tune`` logger level.

    ``level`` wins over ``config.log_level``; without either, the
    ``VERSE_TUNE_*`` environment is read through
    :meth:`VerseTuneConfig.from_env`. The root handler is installed once per
    process (again with ``force``), while later calls still move the package
    logger to the newly resolved level. Returns that level.
    """

    global _installed_level

    if level is None:
        config = config if config is not None else VerseTuneConfig.from_env()
        level = config.log_level
    resolved = resolve_level(level)

    if _installed_level is None or force:
        logging.basicConfig(level=resolved, format=_FORMAT, force=force)
    logging.getLogger(_PACKAGE_LOGGER).setLevel(resolved)

    if resolved != _installed_level:
        logging.getLogger(__name__).debug(
            "Logging level set to %s", logging.getLevelName(resolved)
        )
    _installed_level = resolved
    return resolved


__all__ = ["configure_logging", "resolve_level"]

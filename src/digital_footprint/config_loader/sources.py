"""Discovery and parsing of emission-factor config files."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Final

from digital_footprint.settings import FootprintSettings

LOGGER = logging.getLogger(__name__)

SEARCH_PATHS: Final[tuple[Path, ...]] = (
    Path("config/footprint.yml"),
    Path("configs/footprint.yml"),
    Path("config/footprint.json"),
    Path("configs/footprint.json"),
)

_YAML_SUFFIXES: Final[frozenset[str]] = frozenset({".yml", ".yaml"})


def config_candidates(
    path: str | None, settings: FootprintSettings
) -> tuple[Path, ...]:
    """Return the files to try, most specific first.

    An explicit ``path`` wins over ``FOOTPRINT_CONFIG_PATH``, which wins over
    the working-directory search paths.
    """

    if path is not None:
        return (Path(path),)
    if settings.config_path:
        return (Path(settings.config_path),)
    return SEARCH_PATHS


def load_structured_config(
    path: str | None, settings: FootprintSettings
) -> dict[str, object] | None:
    """Read the first usable config file.

    Args:
        path: Explicit file requested by the caller, if any.
        settings: Environment settings consulted when ``path`` is omitted.

    Returns:
        The parsed top-level mapping, or ``None`` when no candidate exists or
        every candidate is unreadable.
    """

    for candidate in config_candidates(path, settings):
        data = read_config_file(candidate)
        if data is not None:
            LOGGER.debug("Loaded emission factors", extra={"path": str(candidate)})
            return data
    return None


def read_config_file(path: Path) -> dict[str, object] | None:
    """Parse one config file, choosing the format from its suffix.

    A YAML file is read as JSON from its ``.json`` sibling when PyYAML is not
    installed. Malformed files are logged and skipped.
    """

    if not path.is_file():
        return None

    suffix = path.suffix.lower()
    if suffix in _YAML_SUFFIXES:
        parser = _yaml_parser()
        if parser is None:
            LOGGER.debug(
                "PyYAML unavailable; trying JSON sibling", extra={"path": str(path)}
            )
            return read_config_file(path.with_suffix(".json"))
    elif suffix == ".json":
        parser = json.loads
    else:
        return None

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None

    try:
        data = parser(text)
    except Exception as exc:  # json and yaml raise unrelated error types
        LOGGER.warning(
            "Ignoring malformed config file",
            extra={"path": str(path)},
            exc_info=exc,
        )
        return None

    if not isinstance(data, dict):
        LOGGER.warning(
            "Ignoring config file without a top-level mapping",
            extra={"path": str(path)},
        )
        return None
    return {key: value for key, value in data.items() if isinstance(key, str)}


def _yaml_parser() -> Callable[[str], object] | None:
    """Return ``yaml.safe_load`` when PyYAML is installed."""

    try:
        import yaml
    except ModuleNotFoundError:
        return None
    return yaml.safe_load

"""Input port aliases in a REAPER configuration file"""

import configparser
import logging
from pathlib import Path

from .errors import HostRenameError

logger = logging.getLogger(__name__)

ALIAS_SECTION = "alias_in_JackIn"


def _load(path):
    config = configparser.ConfigParser(interpolation=None, strict=False)
    config.optionxform = str  # REAPER keys are case sensitive
    try:
        with open(path, encoding="utf-8") as f:
            config.read_file(f)
    except (OSError, configparser.Error) as e:
        raise HostRenameError(f"Could not read {path}: {e}") from e
    return config


def set_port_aliases(config_path, aliases):
    path = Path(config_path).expanduser().resolve()
    config = _load(path)

    if not config.has_section(ALIAS_SECTION):
        raise HostRenameError(f"{path} has no [{ALIAS_SECTION}] section")

    section = config[ALIAS_SECTION]
    try:
        size = int(section.get("map_size", "0"))
    except ValueError:
        raise HostRenameError(f"Invalid map_size in {path}") from None

    for i in range(size):
        alias = aliases[i] if i < len(aliases) else None
        section[f"name{i}"] = alias if alias is not None else ""

    try:
        with open(path, "w", encoding="utf-8") as f:
            config.write(f, space_around_delimiters=False)
    except OSError as e:
        raise HostRenameError(f"Could not write {path}: {e}") from e

    logger.info(f"Wrote {size} input aliases to {path}")

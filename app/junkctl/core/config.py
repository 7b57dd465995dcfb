"""junkctl settings.

Settings are stored in ~/.config/junkctl/config.toml. A missing file is
not an error: every setting has a default.

Example:
    exclude_roots = ["D:/", "/mnt/backup"]
    include_system_root = false
    workers = 2
    deduplicate = true
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from junkctl.core.paths import get_config_path

logger = logging.getLogger(__name__)


class JunkctlConfig(BaseModel):
    """Settings for discovery, scanning, and presentation.

    Attributes:
        exclude_roots: Roots never scanned by a default all-volumes scan.
        include_system_root: Also scan the operating system volume.
        workers: Number of roots scanned concurrently (1 = sequential).
        deduplicate: Drop repeated matches before listing and deletion.
    """

    model_config = ConfigDict(extra="forbid")

    exclude_roots: Annotated[
        list[str],
        Field(description="Roots left out of the all-volumes scan"),
    ] = []
    include_system_root: Annotated[
        bool,
        Field(description="Scan the operating system volume too"),
    ] = False
    workers: Annotated[
        int,
        Field(ge=1, le=32, description="Roots scanned concurrently (1-32)"),
    ] = 1
    deduplicate: Annotated[
        bool,
        Field(description="Drop repeated matches before listing"),
    ] = True


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file cannot be parsed."""


def load_config(path: Path | None = None) -> JunkctlConfig:
    """Load settings from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated JunkctlConfig. Defaults if the file does not exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or fails validation.
    """
    config_path = path or get_config_path()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        logger.debug("No config at %s, using defaults", config_path)
        return JunkctlConfig()
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return JunkctlConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_config(config: JunkctlConfig, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written to a temporary file in the same directory and
    moved into place with os.replace().

    Args:
        config: The settings to save.
        path: Path to save to. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(), f)
        os.replace(tmp_path, config_path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path

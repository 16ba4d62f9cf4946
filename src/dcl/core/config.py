# src/dcl/core/config.py

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dcl.core.errors import ConfigError
from dcl.core.settings import CONFIG_FILE, PROGNAME

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # Symlink maintenance
    link_dir: Optional[Path] = Field(default=None)
    target: Optional[Path] = Field(default=None)
    config_file: Path = Field(default=CONFIG_FILE)

    # Defaults for the global options; command-line flags are OR'd on top
    verbose: bool = Field(default=False)
    pager: bool = Field(default=False)
    preserve: bool = Field(default=False)
    confirm: bool = Field(default=False)
    debug: int = Field(default=0)

    model_config = SettingsConfigDict(env_prefix="DCL_", extra="ignore")

    def resolve_link_dir(self, invocation_path: str) -> Path:
        """
        Directory that holds the action symlinks.

        Falls back to the directory the dispatcher was invoked from.
        """
        if self.link_dir is not None:
            return self.link_dir.expanduser().absolute()
        return Path(invocation_path).expanduser().absolute().parent

    def resolve_target(self, invocation_path: str) -> Path:
        """The canonical dispatcher executable every symlink must point at."""
        if self.target is not None:
            return self.target.expanduser().absolute()
        return self.resolve_link_dir(invocation_path) / PROGNAME


def read_config_file(path: Path) -> Dict[str, Any]:
    """Read the YAML rc-file; a missing file is an empty configuration."""
    path = Path(path).expanduser()
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"cannot read configuration file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"configuration file {path} must contain a mapping")
    logger.debug("Loaded %d setting(s) from %s", len(data), path)
    return data


def load_settings(config_file: Optional[Path] = None) -> Settings:
    """
    Build the effective settings.

    Precedence, highest first: DCL_* environment variables, the YAML file,
    field defaults.
    """
    from_env = Settings()
    path = config_file or from_env.config_file
    file_values = read_config_file(path)
    merged = {**file_values, **from_env.model_dump(exclude_unset=True)}
    merged["config_file"] = path
    try:
        return Settings(**merged)
    except ValueError as e:
        raise ConfigError(f"invalid configuration in {path}: {e}") from e

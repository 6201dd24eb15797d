"""
Configuration management for the Reportobello CLI.

Settings are stored as JSON in ~/.reportobello/config.json. Environment
variables override the stored values without being written back.
"""

import json
import logging
import os
from dataclasses import dataclass, asdict, fields, replace
from pathlib import Path
from typing import Optional, Dict, Any

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_SERVER_URL = "https://reportobello.com"
DEFAULT_TIMEOUT = 30
DEFAULT_CONFIG_DIR = Path.home() / ".reportobello"
CONFIG_FILENAME = "config.json"

ENV_API_KEY = "REPORTOBELLO_API_KEY"
ENV_SERVER_URL = "REPORTOBELLO_SERVER_URL"
ENV_CONFIG_DIR = "REPORTOBELLO_CONFIG_DIR"


@dataclass
class ReportobelloConfig:
    """Reportobello CLI configuration."""

    api_key: str = ""
    server_url: str = DEFAULT_SERVER_URL
    timeout: int = DEFAULT_TIMEOUT

    def is_configured(self) -> bool:
        """Check whether an API key is available."""
        return bool(self.api_key)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReportobelloConfig":
        """Create a config from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


class ConfigManager:
    """Loads, saves and updates the stored configuration."""

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize the config manager.

        Args:
            config_dir: Custom configuration directory. Falls back to
                REPORTOBELLO_CONFIG_DIR, then ~/.reportobello.
        """
        if config_dir is None:
            env_dir = os.environ.get(ENV_CONFIG_DIR)
            config_dir = Path(env_dir) if env_dir else DEFAULT_CONFIG_DIR

        self.config_dir = Path(config_dir)
        self._config: Optional[ReportobelloConfig] = None

    def get_config_path(self) -> Path:
        """Get the path of the config file."""
        return self.config_dir / CONFIG_FILENAME

    def _load_file(self) -> ReportobelloConfig:
        path = self.get_config_path()

        if not path.exists():
            return ReportobelloConfig()

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Could not read config file {path}", details=str(e))

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a JSON object")

        return ReportobelloConfig.from_dict(data)

    def load(self) -> ReportobelloConfig:
        """Load the stored config and apply environment overrides."""
        config = self._load_file()

        api_key = os.environ.get(ENV_API_KEY)
        if api_key:
            config = replace(config, api_key=api_key)

        server_url = os.environ.get(ENV_SERVER_URL)
        if server_url:
            config = replace(config, server_url=server_url)

        return config

    def get(self) -> ReportobelloConfig:
        """Get the current configuration (cached after the first load)."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def save(self, config: ReportobelloConfig) -> None:
        """Write a configuration to disk."""
        path = self.get_config_path()
        self.config_dir.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2)

        # The file holds an API key
        try:
            os.chmod(path, 0o600)
        except OSError as e:
            logger.debug("Could not restrict permissions on %s: %s", path, e)

        self._config = None
        logger.debug("Configuration saved to %s", path)

    def update(self, **kwargs: Any) -> ReportobelloConfig:
        """
        Update stored settings.

        Only the stored file is changed; environment overrides stay out of it.

        Returns:
            The updated stored configuration
        """
        config = self._load_file()
        known = {f.name for f in fields(ReportobelloConfig)}

        for key in kwargs:
            if key not in known:
                raise ConfigurationError(f"Unknown configuration key: {key}")

        config = replace(config, **kwargs)
        self.save(config)
        return config

    def clear(self) -> None:
        """Delete the stored configuration."""
        path = self.get_config_path()
        if path.exists():
            path.unlink()
        self._config = None


_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_dir: Optional[Path] = None) -> ConfigManager:
    """Get the global config manager, creating it on first use or when a directory is given."""
    global _config_manager
    if _config_manager is None or config_dir is not None:
        _config_manager = ConfigManager(config_dir)
    return _config_manager


def get_config() -> ReportobelloConfig:
    """Get the current configuration."""
    return get_config_manager().get()

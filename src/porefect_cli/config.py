"""Configuration management for Porefect CLI."""

import json
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from porefect_cli.models.config_models import Config
from porefect_cli.utils.logger import get_logger


class ConfigManager:
    """Manages Porefect CLI configuration and credentials for one profile."""

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir("porefect-cli"))
        self.data_dir = Path(user_data_dir("porefect-cli"))
        self.config_file = self.config_dir / f"{profile}.json"
        self.credentials_file = self.data_dir / f"{profile}.credentials.json"

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> Config:
        """Load configuration from file."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
                return Config(**data)
            except (OSError, json.JSONDecodeError, ValidationError) as e:
                # Corrupted config falls back to defaults
                get_logger().warning(
                    "ignoring unreadable config %s: %s", self.config_file, e
                )
                return Config()
        return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config

        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(config.model_dump(), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key."""
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            if k not in current:
                raise KeyError(f"Unknown configuration section '{k}'")
            current = current[k]
        if keys[-1] not in current:
            raise KeyError(f"Unknown configuration key '{key}'")

        current[keys[-1]] = value

        # Re-validate so bad values never reach disk
        self._config = Config(**config_dict)
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset configuration to defaults."""
        if key is None:
            self._config = Config()
        else:
            default_value = self.get_from_config(Config(), key)
            if default_value is not None:
                self.set(key, default_value)
        self.save_config()

    def get_from_config(self, config: Config, key: str) -> Any:
        """Get value from a config object using dot notation."""
        value: Any = config
        for k in key.split("."):
            if isinstance(value, BaseModel):
                value = getattr(value, k, None)
            else:
                return None
        return value

    def save_credentials(self, user_id: str, token: Optional[str] = None) -> None:
        """Save the signed-in user and the identity provider's bearer token."""
        credentials = {"user_id": user_id}
        if token:
            credentials["token"] = token

        with open(self.credentials_file, "w", encoding="utf-8") as f:
            json.dump(credentials, f, indent=2)

        # Readable only by owner
        self.credentials_file.chmod(0o600)

    def load_credentials(self) -> Optional[dict[str, str]]:
        """Load saved credentials, or None when not signed in."""
        if self.credentials_file.exists():
            try:
                with open(self.credentials_file, "r", encoding="utf-8") as f:
                    return json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                get_logger().warning("ignoring unreadable credentials: %s", e)
                return None
        return None

    def clear_credentials(self) -> None:
        """Clear saved credentials."""
        if self.credentials_file.exists():
            self.credentials_file.unlink()

    def list_profiles(self) -> list[str]:
        """List all available profiles."""
        return sorted(
            config_file.stem
            for config_file in self.config_dir.glob("*.json")
            if not config_file.name.startswith(".")
        )


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager

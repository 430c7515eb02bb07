"""
Configuration loader with priority: CLI > env > defaults
"""
import os
from typing import Dict, Any, Optional

from ...core.constants import ENV_PREFIX
from ...core.exceptions import ConfigError
from ...domain.fetch.models import FetchConfig


def parse_size(size_str: str) -> Optional[int]:
    """
    Parse size string (e.g., "40960", "40K", "1M") to bytes.

    Args:
        size_str: Size string

    Returns:
        Size in bytes or None if invalid
    """
    size_str = size_str.strip().upper()

    if not size_str:
        return None

    unit_multipliers = {
        "B": 1,
        "K": 1024,
        "KB": 1024,
        "M": 1024 * 1024,
        "MB": 1024 * 1024,
    }

    # Find unit
    unit = None
    for u in sorted(unit_multipliers.keys(), key=len, reverse=True):
        if size_str.endswith(u):
            unit = u
            break

    if unit:
        number_str = size_str[:-len(unit)]
    else:
        number_str = size_str
        unit = "B"

    try:
        size = int(float(number_str) * unit_multipliers[unit])
    except (ValueError, OverflowError):
        return None
    return size if size > 0 else None


class ConfigLoader:
    """Builds a FetchConfig from environment variables and CLI values"""

    def __init__(self, environ: Optional[Dict[str, str]] = None):
        self._env_prefix = ENV_PREFIX
        self._environ = os.environ if environ is None else environ

    def load_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables"""
        config = {}

        env_mappings = {
            f"{self._env_prefix}CHUNK_SIZE": "chunk_size",
            f"{self._env_prefix}TIMEOUT": "timeout",
            f"{self._env_prefix}USER_AGENT": "user_agent",
            f"{self._env_prefix}EXCLUSIVE": "exclusive",
        }

        for env_key, config_key in env_mappings.items():
            value = self._environ.get(env_key)
            if value:
                config[config_key] = self._convert(config_key, value, env_key)

        return config

    def log_level(self, default: str = "INFO") -> str:
        """Logging level from the environment"""
        return self._environ.get(f"{self._env_prefix}LOG_LEVEL") or default

    def _convert(self, key: str, value: str, source: str) -> Any:
        """Convert string value to the type of the config field"""
        if key == "chunk_size":
            size = parse_size(value)
            if size is None:
                raise ConfigError(f"{source}: invalid size {value!r}")
            return size

        if key == "timeout":
            try:
                timeout = float(value)
            except ValueError:
                raise ConfigError(f"{source}: invalid timeout {value!r}") from None
            if timeout <= 0:
                raise ConfigError(f"{source}: timeout must be positive")
            return timeout

        if key == "exclusive":
            if value.lower() in ("true", "yes", "1"):
                return True
            if value.lower() in ("false", "no", "0"):
                return False
            raise ConfigError(f"{source}: expected a boolean, got {value!r}")

        return value

    def load(self, cli_overrides: Optional[Dict[str, Any]] = None, use_env: bool = True) -> FetchConfig:
        """
        Load configuration with priority: CLI > env > defaults.

        CLI values of None mean "not given" and do not override.

        Args:
            cli_overrides: Values from the command line
            use_env: Whether to load from environment variables

        Returns:
            FetchConfig
        """
        merged = {}

        if use_env:
            merged.update(self.load_env())

        if cli_overrides:
            merged.update({k: v for k, v in cli_overrides.items() if v is not None})

        return FetchConfig.from_dict(merged)

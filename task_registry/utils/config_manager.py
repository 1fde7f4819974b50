"""Configuration management utilities."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..core.constants import CONFIG_FILE_NAME
from ..models.config import RegistryConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages the registry configuration stored beside the task file."""

    def __init__(self, data_dir: Path):
        """Initialize config manager."""
        self.data_dir = Path(data_dir)
        self.config_file = self.data_dir / CONFIG_FILE_NAME

    def _read_raw(self) -> Optional[Dict[str, Any]]:
        if not self.config_file.exists():
            return None
        try:
            data = json.loads(self.config_file.read_text(encoding='utf-8'))
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable config {self.config_file}: {e}")
            return None
        if not isinstance(data, dict):
            logger.warning(f"Ignoring config {self.config_file}: expected a JSON object")
            return None
        return data

    def load_config(self) -> RegistryConfig:
        """Load the registry configuration, using defaults for anything unset.

        A file with out-of-range or non-numeric limits is ignored with a warning.
        """
        try:
            return RegistryConfig.from_dict(self.data_dir, self._read_raw() or {})
        except (TypeError, ValueError) as e:
            logger.warning(f"Ignoring invalid config {self.config_file}: {e}")
            return RegistryConfig(data_dir=self.data_dir)

    def save_config(self, config: RegistryConfig):
        """Save the registry configuration."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(json.dumps(config.to_dict(), indent=2), encoding='utf-8')

    def set_value(self, key: str, value: Any) -> RegistryConfig:
        """Set a single configuration key (camelCase, as stored) and save.

        Raises:
            KeyError: ``key`` is not a known setting
            ValueError: ``value`` is not a valid value for the setting
        """
        config = self.load_config()
        data = config.to_dict()
        if key not in data:
            raise KeyError(key)
        data[key] = type(data[key])(value)
        config = RegistryConfig.from_dict(self.data_dir, data)
        self.save_config(config)
        return config

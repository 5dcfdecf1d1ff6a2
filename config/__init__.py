"""
Configuration for the invoice field extraction engine.

Extraction thresholds, the brand vocabulary and the place-name gazetteer
live in settings.yaml rather than in code. Values are read with dotted
keys such as ``"extraction.rate.min"``.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

PROJECT_ROOT = Path(__file__).parent.parent
DEFAULT_SETTINGS = Path(__file__).parent / "settings.yaml"


class ConfigurationManager:
    """
    Process-wide access to settings.yaml.

    The first instantiation decides which file is loaded; later calls
    return the same instance until ``reset`` is called.

    Example:
        >>> config = ConfigurationManager()
        >>> config.get("extraction.row_tolerance")
        20
        >>> config.get_path("paths.output_dir")
        PosixPath('/srv/invoice-fields/outputs')
    """

    _instance: Optional['ConfigurationManager'] = None

    def __new__(cls, config_path: Optional[str] = None) -> 'ConfigurationManager':
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._initialized = False
            cls._instance = instance
        return cls._instance

    def __init__(self, config_path: Optional[str] = None) -> None:
        if self._initialized:
            return

        self.config_path = Path(config_path) if config_path else DEFAULT_SETTINGS
        self._settings: Dict[str, Any] = {}
        self.reload()
        self._initialized = True

    def reload(self) -> None:
        """
        Re-read the settings file.

        Raises:
            FileNotFoundError: If the settings file doesn't exist.
            yaml.YAMLError: If the file is not valid YAML.
        """
        if not self.config_path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path, 'r', encoding='utf-8') as f:
            self._settings = yaml.safe_load(f) or {}

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a dotted key, returning ``default`` when any part is missing.

        Example:
            >>> config.get("extraction.tax.lookahead_chars")
            80
            >>> config.get("extraction.unknown", 5)
            5
        """
        node: Any = self._settings
        for part in key.split('.'):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_path(self, key: str, default: Union[str, Path, None] = None) -> Optional[Path]:
        """Path setting; relative values are taken from the project root."""
        value = self.get(key, default)
        if not value:
            return None
        path = Path(value)
        return path if path.is_absolute() else PROJECT_ROOT / path

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded instance so the next call reads settings again."""
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    """Shortcut for ``ConfigurationManager().get(key, default)``."""
    return ConfigurationManager().get(key, default)


def get_config_path(key: str, default: Union[str, Path, None] = None) -> Optional[Path]:
    """Shortcut for ``ConfigurationManager().get_path(key, default)``."""
    return ConfigurationManager().get_path(key, default)


__all__ = ['ConfigurationManager', 'get_config', 'get_config_path', 'PROJECT_ROOT']

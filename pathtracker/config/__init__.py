"""Simple YAML configuration loader for PathTracker."""

import copy
import os
import logging
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "server": {
        "host": "0.0.0.0",
        "port": 3000,
        "cors_origin": "*",
    },
    "tracking": {
        "default_min_distance_meters": 10.0,
    },
    "events": {
        "enabled": True,
    },
    "logging": {
        "level": "INFO",
        "console_output": True,
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class PathTrackerConfig:
    """PathTracker configuration loader."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to YAML config file. If None, built-in defaults
                        are used.
        """
        self.config_file = Path(config_path) if config_path else None

        if self.config_file is None:
            logger.info("No configuration file given, using defaults")
            self.config = copy.deepcopy(DEFAULT_CONFIG)
        else:
            if not self.config_file.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_file}")
            logger.info(f"Loading configuration from: {self.config_file}")
            self.config = self._load_config()

        self._apply_environment()

    def _load_config(self) -> Dict[str, Any]:
        """Load and parse YAML configuration file."""
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ValueError("Configuration file must contain a mapping")

        config = _merge(DEFAULT_CONFIG, loaded)
        self._resolve_paths(config)

        logger.info("Configuration loaded successfully")
        return config

    def _resolve_paths(self, config: Dict[str, Any]) -> None:
        """Resolve relative paths in configuration relative to config file location."""
        config_dir = self.config_file.parent

        log_path = config.get('logging', {}).get('file_path')
        if log_path and not os.path.isabs(log_path):
            config['logging']['file_path'] = str(config_dir / log_path)

    def _apply_environment(self) -> None:
        """PORT in the environment overrides server.port."""
        port = os.environ.get("PORT")
        if port:
            try:
                self.set('server.port', int(port))
            except ValueError:
                logger.warning(f"Ignoring non-numeric PORT environment value: {port!r}")

    def get(self, key_path: str, default: Any = None) -> Any:
        """Look up a dotted key such as 'tracking.default_min_distance_meters'.

        Missing sections or keys, or a path that runs into a non-mapping
        value, yield ``default``.
        """
        node: Any = self.config
        for key in key_path.split('.'):
            if not isinstance(node, dict) or key not in node:
                return default
            node = node[key]
        return node

    def set(self, key_path: str, value: Any) -> None:
        """Override a dotted key, e.g. 'server.port' from the CLI or PORT."""
        *parents, leaf = key_path.split('.')
        section = self.config
        for key in parents:
            section = section.setdefault(key, {})
        section[leaf] = value
        logger.debug(f"Config override {key_path} = {value!r}")

    def get_default_min_distance(self) -> float:
        """Simplification threshold used when the caller gives none."""
        return float(self.get('tracking.default_min_distance_meters', 10.0))

    def events_enabled(self) -> bool:
        return bool(self.get('events.enabled', True))

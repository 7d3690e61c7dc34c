"""Configuration settings for the application."""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .project_constants import DEFAULT_EXPORT_FILENAME, EXPORT_MIME_TYPE

logger = logging.getLogger(__name__)

# Default configuration structure
DEFAULT_CONFIG = {
    'export': {
        'filename': DEFAULT_EXPORT_FILENAME,
        'mime_type': EXPORT_MIME_TYPE,
        'last_directory': ''
    },
    'viewer': {
        'alternating_row_colors': True,
        'show_header_row': True  # First row of each table rendered as header
    },
    'logging': {
        'level': 'INFO',
        'log_file': None
    }
}


class Config:
    """Configuration manager."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """Initialize configuration."""
        self.config_dir = Path(config_dir) if config_dir else Path.home() / '.config' / 'clipcsv'
        self.config_file = self.config_dir / 'config.json'
        self.config: Dict[str, Any] = {}  # Start empty, load will merge with defaults
        self.load_config()
        self._ensure_defaults()

    def _ensure_defaults(self):
        """Ensure all default keys exist in the loaded config."""
        changed = False
        for key, default_value in DEFAULT_CONFIG.items():
            if key not in self.config or not isinstance(self.config[key], dict):
                self.config[key] = copy.deepcopy(default_value)
                changed = True
                continue
            for sub_key, sub_default_value in default_value.items():
                if sub_key not in self.config[key]:
                    self.config[key][sub_key] = sub_default_value
                    changed = True
        if changed:
            self.save_config()

    def load_config(self):
        """Load configuration from file."""
        try:
            if self.config_file.exists():
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    loaded = json.load(f)
                self.config = loaded if isinstance(loaded, dict) else {}
            else:
                self.config = copy.deepcopy(DEFAULT_CONFIG)
                self.save_config()
        except json.JSONDecodeError:
            logger.warning("Error decoding %s. Starting with defaults.", self.config_file)
            self.config = copy.deepcopy(DEFAULT_CONFIG)
            self.save_config()
        except OSError as e:
            logger.warning("Error loading config: %s. Starting with defaults.", e)
            self.config = copy.deepcopy(DEFAULT_CONFIG)
            # No save here to avoid overwriting potentially recoverable file

    def save_config(self):
        """Save configuration to file."""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, 'w', encoding='utf-8') as f:
                json.dump(self.config, f, indent=4)
        except OSError as e:
            logger.error("Error saving config: %s", e)

    def _get_section(self, section: str) -> Dict[str, Any]:
        return self.config.get(section, DEFAULT_CONFIG[section])

    def _set_section(self, section: str, **kwargs):
        if section not in self.config:
            self.config[section] = {}
        self.config[section].update(kwargs)
        self.save_config()

    def get_export_config(self) -> Dict[str, Any]:
        """Get export configuration."""
        return self._get_section('export')

    def set_export_config(self, **kwargs):
        """Set export configuration parameters."""
        self._set_section('export', **kwargs)

    def get_viewer_config(self) -> Dict[str, Any]:
        """Get table viewer configuration."""
        return self._get_section('viewer')

    def set_viewer_config(self, **kwargs):
        """Set table viewer configuration parameters."""
        self._set_section('viewer', **kwargs)

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self._get_section('logging')

#!/usr/bin/env python3
"""
Settings loader for Quire static site generator.
Supports configuration from config.toml, config.yml, config.yaml, or config.json files.
"""

import os
import json
import logging
import tomllib
from types import MappingProxyType
from typing import Dict, Any, Optional

import yaml

from .errors import ConfigError

logger = logging.getLogger('Quire.settings')


class SiteConfig:
    """Site-wide metadata handed to every template. Read-only once created."""

    __slots__ = ('_base_url', '_title', '_description', '_extra')

    def __init__(self, base_url: str, title: str, description: str = '',
                 extra: Optional[Dict[str, Any]] = None):
        object.__setattr__(self, '_base_url', base_url.rstrip('/'))
        object.__setattr__(self, '_title', title)
        object.__setattr__(self, '_description', description)
        object.__setattr__(self, '_extra', MappingProxyType(dict(extra or {})))

    def __setattr__(self, name, value):
        raise AttributeError("SiteConfig is read-only")

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> str:
        return self._description

    @property
    def extra(self):
        return self._extra

    def __eq__(self, other):
        if not isinstance(other, SiteConfig):
            return NotImplemented
        return (self.base_url, self.title, self.description, dict(self.extra)) == \
            (other.base_url, other.title, other.description, dict(other.extra))

    def __repr__(self):
        return f"SiteConfig(base_url={self.base_url!r}, title={self.title!r})"


class QuireSettings:
    """Load and manage Quire configuration settings."""

    # Default configuration
    DEFAULT_SETTINGS = {
        'base_url': None,
        'title': None,
        'description': '',
        'extra': {},
        'content': 'content',
        'templates': 'templates',
        'static': 'static',
        'output': 'public',
        'log_file': None,
    }

    # Settings that name directories; trailing slashes are stripped
    PATH_SETTINGS = ('content', 'templates', 'static', 'output', 'log_file')

    # Config file names to look for (in order of preference)
    CONFIG_FILES = ['config.toml', 'config.yml', 'config.yaml', 'config.json']

    def __init__(self, config_dir: str = None, config_file: str = None):
        """
        Initialize settings loader.

        Args:
            config_dir: Directory to look for config files. Defaults to current directory.
            config_file: Explicit config file path; skips the lookup when given.
        """
        self.config_dir = config_dir or os.getcwd()
        self.explicit_config_file = config_file
        self.settings = _copy_defaults(self.DEFAULT_SETTINGS)
        self.config_file_path = None

    def load_settings(self) -> Dict[str, Any]:
        """
        Load settings from configuration file if it exists.

        Returns:
            Dictionary of configuration settings

        Raises:
            ConfigError: The file cannot be read or parsed, or is not a mapping
        """
        config_file = self._find_config_file()

        if config_file:
            self.config_file_path = config_file
            loaded_settings = self._load_config_file(config_file)
            for key in loaded_settings:
                if key not in self.DEFAULT_SETTINGS:
                    logger.debug(f"Ignoring unknown setting '{key}' in {config_file}")
            self.settings.update(
                {k: v for k, v in loaded_settings.items() if k in self.DEFAULT_SETTINGS}
            )
            logger.info(f"Loaded configuration from: {os.path.relpath(config_file)}")
        elif self.explicit_config_file:
            raise ConfigError(self.explicit_config_file, "file does not exist")

        self._normalize_paths(self.settings)
        return self.settings.copy()

    def _find_config_file(self) -> Optional[str]:
        """
        Find the first available configuration file.

        Returns:
            Path to config file or None if not found
        """
        if self.explicit_config_file:
            if os.path.exists(self.explicit_config_file):
                return self.explicit_config_file
            return None
        for filename in self.CONFIG_FILES:
            config_path = os.path.join(self.config_dir, filename)
            if os.path.exists(config_path):
                return config_path
        return None

    def _load_config_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from a file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Dictionary of configuration settings
        """
        file_ext = os.path.splitext(config_path)[1].lower()
        try:
            if file_ext == '.toml':
                with open(config_path, 'rb') as f:
                    data = tomllib.load(f)
            elif file_ext in ['.yml', '.yaml']:
                with open(config_path, 'r', encoding='utf-8') as f:
                    data = yaml.safe_load(f) or {}
            elif file_ext == '.json':
                with open(config_path, 'r', encoding='utf-8') as f:
                    data = json.load(f) or {}
            else:
                raise ConfigError(config_path, f"unsupported config file format: {file_ext}")
        except (IOError, OSError) as e:
            raise ConfigError(config_path, f"cannot be read: {e}") from e
        except UnicodeDecodeError as e:
            raise ConfigError(config_path, f"not valid UTF-8: {e}") from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(config_path, f"invalid TOML: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(config_path, f"invalid YAML: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(config_path, f"invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(config_path, "top level must be a mapping")
        return data

    def _normalize_paths(self, settings: Dict[str, Any]) -> None:
        for key in self.PATH_SETTINGS:
            value = settings.get(key)
            if isinstance(value, str):
                value = os.path.expanduser(value) if value.startswith('~/') else value
                settings[key] = value.rstrip('/\\') or value

    def merge_with_args(self, args_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge configuration settings with command-line arguments.
        Command-line arguments take precedence over config file settings.

        Args:
            args_dict: Dictionary of command-line arguments

        Returns:
            Merged configuration dictionary
        """
        merged = self.settings.copy()

        # Override with non-None command line arguments
        for key, value in args_dict.items():
            if value is not None and key in self.DEFAULT_SETTINGS:
                merged[key] = value

        self._normalize_paths(merged)
        return merged

    def site_config(self, settings: Optional[Dict[str, Any]] = None) -> SiteConfig:
        """
        Build the read-only SiteConfig from loaded settings.

        Raises:
            ConfigError: base_url or title is missing, or a field has the wrong type
        """
        settings = self.settings if settings is None else settings
        source = self.config_file_path or os.path.join(self.config_dir, self.CONFIG_FILES[0])

        for key in ('base_url', 'title'):
            if settings.get(key) is None:
                raise ConfigError(source, f"missing required key '{key}'")
        for key in ('base_url', 'title', 'description'):
            if not isinstance(settings.get(key), str):
                raise ConfigError(source, f"'{key}' must be a string")
        extra = settings.get('extra') or {}
        if not isinstance(extra, dict):
            raise ConfigError(source, "'extra' must be a table")

        return SiteConfig(
            base_url=settings['base_url'],
            title=settings['title'],
            description=settings['description'],
            extra=extra,
        )


def _copy_defaults(defaults: Dict[str, Any]) -> Dict[str, Any]:
    settings = defaults.copy()
    settings['extra'] = {}
    return settings

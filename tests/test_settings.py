"""Tests for configuration loading."""

import pytest
import os
import json
from pathlib import Path

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from quire_pkg.errors import ConfigError
from quire_pkg.settings import QuireSettings, SiteConfig


CONFIG_TOML = """base_url = "https://example.com/"
title = "My Site"
description = "Things I wrote"
output = "dist/"
unknown_key = 1

[extra]
author = "Someone"
menu = ["home", "blog"]
"""


class TestSiteConfig:
    """Test cases for SiteConfig."""

    def test_trailing_slash_stripped(self):
        config = SiteConfig('https://example.com///', 'Site')
        assert config.base_url == 'https://example.com'
        assert config.description == ''

    def test_read_only(self):
        """Test a loaded config cannot be modified."""
        config = SiteConfig('https://example.com', 'Site', extra={'a': 1})

        with pytest.raises(AttributeError):
            config.title = 'Other'
        with pytest.raises(TypeError):
            config.extra['a'] = 2


class TestQuireSettings:
    """Test cases for QuireSettings."""

    def test_defaults_without_config_file(self, temp_dir):
        """Test defaults apply when no config file exists."""
        settings = QuireSettings(config_dir=temp_dir).load_settings()

        assert settings['content'] == 'content'
        assert settings['templates'] == 'templates'
        assert settings['static'] == 'static'
        assert settings['output'] == 'public'

    def test_load_toml(self, temp_dir):
        """Test config.toml is found and normalized."""
        Path(temp_dir, 'config.toml').write_text(CONFIG_TOML)
        loader = QuireSettings(config_dir=temp_dir)

        settings = loader.load_settings()
        config = loader.site_config()

        assert settings['output'] == 'dist'
        assert 'unknown_key' not in settings
        assert config.base_url == 'https://example.com'
        assert config.title == 'My Site'
        assert config.description == 'Things I wrote'
        assert dict(config.extra) == {'author': 'Someone', 'menu': ['home', 'blog']}

    def test_toml_preferred_over_yaml(self, temp_dir):
        """Test lookup order puts config.toml first."""
        Path(temp_dir, 'config.toml').write_text('base_url = "https://toml.example"\ntitle = "T"\n')
        Path(temp_dir, 'config.yml').write_text('base_url: https://yaml.example\ntitle: Y\n')
        loader = QuireSettings(config_dir=temp_dir)
        loader.load_settings()

        assert loader.site_config().base_url == 'https://toml.example'

    def test_load_yaml(self, temp_dir):
        """Test YAML configuration files are supported."""
        Path(temp_dir, 'config.yml').write_text(
            'base_url: https://example.com\ntitle: Yaml Site\nextra:\n  theme: dark\n'
        )
        loader = QuireSettings(config_dir=temp_dir)
        loader.load_settings()

        config = loader.site_config()
        assert config.title == 'Yaml Site'
        assert config.extra['theme'] == 'dark'

    def test_load_json(self, temp_dir):
        """Test JSON configuration files are supported."""
        Path(temp_dir, 'config.json').write_text(json.dumps({
            'base_url': 'https://example.com', 'title': 'Json Site', 'content': 'pages/'
        }))
        loader = QuireSettings(config_dir=temp_dir)

        assert loader.load_settings()['content'] == 'pages'
        assert loader.site_config().title == 'Json Site'

    def test_explicit_config_file(self, temp_dir):
        """Test an explicit path bypasses the lookup."""
        path = Path(temp_dir, 'site.toml')
        path.write_text('base_url = "https://x.example"\ntitle = "X"\n')
        loader = QuireSettings(config_file=str(path))
        loader.load_settings()

        assert loader.site_config().base_url == 'https://x.example'

    def test_explicit_config_file_missing(self, temp_dir):
        """Test a missing explicit config file is an error."""
        loader = QuireSettings(config_file=os.path.join(temp_dir, 'nope.toml'))

        with pytest.raises(ConfigError, match='does not exist'):
            loader.load_settings()

    def test_invalid_toml(self, temp_dir):
        """Test a TOML syntax error is a ConfigError."""
        Path(temp_dir, 'config.toml').write_text('title = \n')

        with pytest.raises(ConfigError, match='invalid TOML'):
            QuireSettings(config_dir=temp_dir).load_settings()

    def test_config_not_utf8(self, temp_dir):
        """Test a config file that is not UTF-8 is a ConfigError naming the file."""
        Path(temp_dir, 'config.toml').write_bytes('title = "Café"\n'.encode('latin-1'))

        with pytest.raises(ConfigError, match='config.toml') as exc_info:
            QuireSettings(config_dir=temp_dir).load_settings()
        assert 'not valid UTF-8' in str(exc_info.value)

    def test_invalid_yaml(self, temp_dir):
        """Test a YAML syntax error is a ConfigError."""
        Path(temp_dir, 'config.yml').write_text('title: [unclosed\n')

        with pytest.raises(ConfigError, match='invalid YAML'):
            QuireSettings(config_dir=temp_dir).load_settings()

    def test_non_mapping_config(self, temp_dir):
        """Test a config file whose top level is not a mapping is rejected."""
        Path(temp_dir, 'config.json').write_text('[1, 2]')

        with pytest.raises(ConfigError, match='mapping'):
            QuireSettings(config_dir=temp_dir).load_settings()

    def test_missing_required_key(self, temp_dir):
        """Test base_url and title are required."""
        Path(temp_dir, 'config.toml').write_text('title = "No URL"\n')
        loader = QuireSettings(config_dir=temp_dir)
        loader.load_settings()

        with pytest.raises(ConfigError, match="'base_url'"):
            loader.site_config()

    def test_merge_with_args(self, temp_dir):
        """Test command-line values override the config file."""
        Path(temp_dir, 'config.toml').write_text(CONFIG_TOML)
        loader = QuireSettings(config_dir=temp_dir)
        loader.load_settings()

        merged = loader.merge_with_args({'output': 'site/', 'content': None, 'verbose': True})

        assert merged['output'] == 'site'
        assert merged['content'] == 'content'
        assert 'verbose' not in merged

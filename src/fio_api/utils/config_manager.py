"""Configuration management for the Fio API client."""

import json
import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Mapping
import logging

from ..models.core import FioConfig
from .error_handler import ConfigError


logger = logging.getLogger(__name__)

ENV_TOKEN = 'FIO_TOKEN'
ENV_TOKEN_FILE = 'FIO_TOKEN_FILE'
ENV_BASE_URL = 'FIO_BASE_URL'

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
VALID_LANGUAGES = ('cs', 'en', 'sk')


class ConfigManager:
    """Manages loading and validation of client configuration"""

    def __init__(self, config_path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None):
        """Initialize configuration manager

        Args:
            config_path: Path to configuration file. If None, searches for default locations.
            environ: Environment to read overrides from, ``os.environ`` by default
        """
        self.config_path = config_path
        self.environ = os.environ if environ is None else environ
        self._config_cache: Optional[FioConfig] = None

    def load_config(self, force_reload: bool = False) -> FioConfig:
        """Load client configuration from file and environment or return default

        Args:
            force_reload: Force reload from file even if cached

        Returns:
            FioConfig instance with loaded or default configuration
        """
        if self._config_cache is not None and not force_reload:
            return self._config_cache

        config_data = self._load_config_file()
        config_data.update(self._environment_overrides())

        defaults = FioConfig()
        self._config_cache = FioConfig(
            token=config_data.get('token', defaults.token),
            token_file=config_data.get('token_file', defaults.token_file),
            base_url=config_data.get('base_url', defaults.base_url),
            min_interval=float(config_data.get('min_interval', defaults.min_interval)),
            timeout=float(config_data.get('timeout', defaults.timeout)),
            user_agent=config_data.get('user_agent', defaults.user_agent),
            language=config_data.get('language', defaults.language),
            log_level=config_data.get('log_level', defaults.log_level).upper(),
        )
        logger.debug(f"Configuration loaded from {self.config_path or 'defaults'}")
        return self._config_cache

    def _load_config_file(self) -> Dict[str, Any]:
        """Load configuration from file

        Returns:
            Dictionary with configuration data or empty dict if no usable file found
        """
        config_file = self._find_config_file()

        if not config_file or not os.path.exists(config_file):
            logger.info("No configuration file found, using defaults")
            return {}

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                if config_file.endswith('.json'):
                    data = json.load(f)
                elif config_file.endswith(('.yml', '.yaml')):
                    data = yaml.safe_load(f)
                else:
                    logger.warning(f"Unsupported config file format: {config_file}")
                    return {}

            self._validate_config_data(data)
            logger.info(f"Configuration loaded from {config_file}")
            return dict(data)

        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Error reading configuration file {config_file}: {e}")
            return {}

    def _find_config_file(self) -> Optional[str]:
        """Find configuration file in standard locations"""
        if self.config_path:
            return self.config_path

        search_paths = [
            'fio_config.json',
            'fio_config.yml',
            'fio_config.yaml',
            'config/fio_config.json',
            'config/fio_config.yml',
            'config/fio_config.yaml',
            os.path.expanduser('~/.fio_api/config.json'),
            os.path.expanduser('~/.fio_api/config.yml'),
        ]

        for path in search_paths:
            if os.path.exists(path):
                return path

        return None

    def _environment_overrides(self) -> Dict[str, Any]:
        overrides = {}
        if self.environ.get(ENV_TOKEN):
            overrides['token'] = self.environ[ENV_TOKEN]
        if self.environ.get(ENV_TOKEN_FILE):
            overrides['token_file'] = self.environ[ENV_TOKEN_FILE]
        if self.environ.get(ENV_BASE_URL):
            overrides['base_url'] = self.environ[ENV_BASE_URL]
        if overrides:
            logger.debug(f"Environment overrides: {sorted(overrides)}")
        return overrides

    def _validate_config_data(self, data: Any) -> None:
        """Validate configuration data structure

        Raises:
            ValueError: If configuration data is invalid
        """
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a dictionary")

        for str_key in ['token', 'token_file', 'base_url', 'user_agent']:
            if str_key in data:
                if not isinstance(data[str_key], str):
                    raise ValueError(f"{str_key} must be a string")
                if not data[str_key].strip():
                    raise ValueError(f"{str_key} cannot be empty")

        for number_key in ['min_interval', 'timeout']:
            if number_key in data:
                value = data[number_key]
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ValueError(f"{number_key} must be a number")
                if value < 0:
                    raise ValueError(f"{number_key} cannot be negative")

        if 'language' in data and data['language'] is not None:
            if data['language'] not in VALID_LANGUAGES:
                raise ValueError(f"language must be one of {', '.join(VALID_LANGUAGES)}")

        if 'log_level' in data:
            if not isinstance(data['log_level'], str) or data['log_level'].upper() not in VALID_LOG_LEVELS:
                raise ValueError(f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}")

    def load_token(self, config: Optional[FioConfig] = None) -> str:
        """Resolve the API token: inline value first, then the token file

        Raises:
            ConfigError: If no token is configured or the token file is unusable
        """
        config = config or self.load_config()
        if config.token and config.token.strip():
            return config.token.strip()

        if config.token_file:
            token_path = Path(config.token_file).expanduser()
            try:
                token = token_path.read_text(encoding='utf-8').strip()
            except OSError as e:
                raise ConfigError(f"Cannot read token file {token_path}: {e}") from e
            if not token:
                raise ConfigError(f"Token file {token_path} is empty")
            logger.debug(f"Token read from {token_path}")
            return token

        raise ConfigError(
            f"No Fio API token configured; set {ENV_TOKEN}, {ENV_TOKEN_FILE} or 'token' in the config file"
        )

    def save_config_template(self, output_path: str) -> None:
        """Generate and save a configuration file template

        Args:
            output_path: Path where to save the template
        """
        defaults = FioConfig()
        template = {
            "token_file": "~/.fio_api/token",
            "base_url": defaults.base_url,
            "min_interval": defaults.min_interval,
            "timeout": defaults.timeout,
            "user_agent": defaults.user_agent,
            "language": "cs",
            "log_level": defaults.log_level,
        }

        try:
            output_dir = os.path.dirname(output_path)
            if output_dir:
                os.makedirs(output_dir, exist_ok=True)

            with open(output_path, 'w', encoding='utf-8') as f:
                if output_path.endswith(('.yml', '.yaml')):
                    yaml.dump(template, f, default_flow_style=False, indent=2)
                else:
                    # Default to JSON
                    json.dump(template, f, indent=2)

            logger.info(f"Configuration template saved to {output_path}")

        except OSError as e:
            logger.error(f"Error saving configuration template: {e}")
            raise

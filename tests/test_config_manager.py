"""Tests for configuration management."""

import json
import os
import tempfile
import unittest

import yaml

from fio_api.utils.config_manager import ConfigManager
from fio_api.utils.error_handler import ConfigError
from fio_api.models.core import FioConfig


class TestConfigManager(unittest.TestCase):
    """Test cases for ConfigManager"""

    def setUp(self):
        """Set up test fixtures"""
        self.temp_dir = tempfile.mkdtemp()
        self.config_file = os.path.join(self.temp_dir, 'test_config.json')

    def tearDown(self):
        """Clean up test fixtures"""
        import shutil
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_default_config_loading(self):
        """Test loading default configuration when no file exists"""
        manager = ConfigManager(config_path="nonexistent_file.json", environ={})
        config = manager.load_config()

        self.assertIsInstance(config, FioConfig)
        self.assertIsNone(config.token)
        self.assertEqual(config.base_url, "https://www.fio.cz/ib_api/rest")
        self.assertEqual(config.min_interval, 30.0)
        self.assertEqual(config.user_agent, "fio-api-py")
        self.assertEqual(config.log_level, "INFO")

    def test_config_file_loading(self):
        """Test loading configuration from JSON file"""
        test_config = {
            "token": "abc",
            "min_interval": 31,
            "timeout": 10,
            "language": "en",
            "log_level": "debug",
        }

        with open(self.config_file, 'w') as f:
            json.dump(test_config, f)

        manager = ConfigManager(config_path=self.config_file, environ={})
        config = manager.load_config()

        self.assertEqual(config.token, "abc")
        self.assertEqual(config.min_interval, 31.0)
        self.assertEqual(config.timeout, 10.0)
        self.assertEqual(config.language, "en")
        self.assertEqual(config.log_level, "DEBUG")

    def test_yaml_config_loading(self):
        """Test loading configuration from YAML file"""
        yaml_file = os.path.join(self.temp_dir, 'config.yml')
        with open(yaml_file, 'w') as f:
            yaml.safe_dump({"base_url": "http://localhost:8080/rest", "token_file": "~/token"}, f)

        config = ConfigManager(config_path=yaml_file, environ={}).load_config()

        self.assertEqual(config.base_url, "http://localhost:8080/rest")
        self.assertEqual(config.token_file, "~/token")

    def test_environment_overrides_file(self):
        """Environment values win over the file"""
        with open(self.config_file, 'w') as f:
            json.dump({"token": "from-file", "base_url": "http://file"}, f)

        environ = {"FIO_TOKEN": "from-env", "FIO_BASE_URL": "http://env"}
        config = ConfigManager(config_path=self.config_file, environ=environ).load_config()

        self.assertEqual(config.token, "from-env")
        self.assertEqual(config.base_url, "http://env")

    def test_config_validation(self):
        """Test configuration validation"""
        invalid_config = {
            "token": "",
            "min_interval": "soon",
            "language": "de",
        }

        with open(self.config_file, 'w') as f:
            json.dump(invalid_config, f)

        manager = ConfigManager(config_path=self.config_file, environ={})
        # Should fall back to defaults on validation error
        config = manager.load_config()

        self.assertIsNone(config.token)
        self.assertEqual(config.min_interval, 30.0)
        self.assertIsNone(config.language)

    def test_load_token_inline(self):
        manager = ConfigManager(config_path="nonexistent_file.json", environ={"FIO_TOKEN": " tkn \n"})
        self.assertEqual(manager.load_token(), "tkn")

    def test_load_token_from_file(self):
        token_file = os.path.join(self.temp_dir, 'token')
        with open(token_file, 'w') as f:
            f.write("secret-token\n")

        manager = ConfigManager(config_path="nonexistent_file.json", environ={"FIO_TOKEN_FILE": token_file})
        self.assertEqual(manager.load_token(), "secret-token")

    def test_load_token_missing(self):
        manager = ConfigManager(config_path="nonexistent_file.json", environ={})
        with self.assertRaises(ConfigError):
            manager.load_token()

    def test_load_token_empty_file(self):
        token_file = os.path.join(self.temp_dir, 'token')
        open(token_file, 'w').close()

        manager = ConfigManager(config_path="nonexistent_file.json", environ={"FIO_TOKEN_FILE": token_file})
        with self.assertRaises(ConfigError):
            manager.load_token()

    def test_config_template_generation(self):
        """Test configuration template generation"""
        template_file = os.path.join(self.temp_dir, 'template.json')

        manager = ConfigManager(environ={})
        manager.save_config_template(template_file)

        self.assertTrue(os.path.exists(template_file))

        with open(template_file, 'r') as f:
            template = json.load(f)

        self.assertIn('token_file', template)
        self.assertIn('base_url', template)
        self.assertEqual(template['min_interval'], 30.0)

        # the template itself is a valid configuration
        config = ConfigManager(config_path=template_file, environ={}).load_config()
        self.assertEqual(config.token_file, "~/.fio_api/token")
        self.assertEqual(config.language, "cs")

    def test_yaml_template_generation(self):
        template_file = os.path.join(self.temp_dir, 'sub', 'template.yml')

        ConfigManager(environ={}).save_config_template(template_file)

        with open(template_file, 'r') as f:
            template = yaml.safe_load(f)
        self.assertEqual(template['user_agent'], "fio-api-py")

    def test_config_caching(self):
        """Test configuration caching"""
        test_config = {"user_agent": "cached_test"}

        with open(self.config_file, 'w') as f:
            json.dump(test_config, f)

        manager = ConfigManager(config_path=self.config_file, environ={})

        # First load
        config1 = manager.load_config()
        self.assertEqual(config1.user_agent, "cached_test")

        # Modify file
        test_config["user_agent"] = "modified_test"
        with open(self.config_file, 'w') as f:
            json.dump(test_config, f)

        # Second load (should use cache)
        config2 = manager.load_config()
        self.assertEqual(config2.user_agent, "cached_test")  # Still cached

        # Force reload
        config3 = manager.load_config(force_reload=True)
        self.assertEqual(config3.user_agent, "modified_test")  # Now updated


if __name__ == '__main__':
    unittest.main()

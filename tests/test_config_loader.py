import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from goco.config.loader import (
    DEFAULT_GEMINI_ENV,
    DEFAULT_GROQ_ENV,
    Config,
    ConfigError,
    create_config_file,
    get_config_path,
    load_config,
)


class TestConfigLoader(unittest.TestCase):
    """Tests for the configuration loader."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "config.json"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, data) -> None:
        self.path.write_text(data if isinstance(data, str) else json.dumps(data))

    def test_missing_file_gives_defaults(self) -> None:
        config = load_config(self.path)
        self.assertEqual(config, Config())
        self.assertEqual(config.get_default_provider(), "gemini")
        self.assertEqual(config.api_key_env("gemini"), DEFAULT_GEMINI_ENV)
        self.assertEqual(config.api_key_env("groq"), DEFAULT_GROQ_ENV)

    def test_load_general_section(self) -> None:
        self._write({
            "general": {
                "api_key_gemini_env_variable": "MY_GEMINI",
                "api_key_groq_env_variable": "MY_GROQ",
                "default_provider": "groq",
            }
        })
        config = load_config(self.path)
        self.assertEqual(config.gemini_api_key_env, "MY_GEMINI")
        self.assertEqual(config.groq_api_key_env, "MY_GROQ")
        self.assertEqual(config.get_default_provider(), "groq")

    def test_empty_values_keep_defaults(self) -> None:
        self._write({"general": {"default_provider": "", "api_key_groq_env_variable": ""}})
        config = load_config(self.path)
        self.assertEqual(config, Config())

    def test_api_keys_read_from_named_variables(self) -> None:
        self._write({"general": {"api_key_gemini_env_variable": "MY_GEMINI"}})
        config = load_config(self.path)
        with patch.dict(os.environ, {"MY_GEMINI": "g-key", DEFAULT_GROQ_ENV: "q-key"}):
            self.assertEqual(config.get_gemini_api_key(), "g-key")
            self.assertEqual(config.get_groq_api_key(), "q-key")
        self.assertEqual(config.get_gemini_api_key(), "")

    def test_invalid_json(self) -> None:
        self._write("{invalid}")
        with self.assertRaises(ConfigError) as ctx:
            load_config(self.path)
        self.assertIn("invalid JSON", str(ctx.exception))

    def test_top_level_must_be_object(self) -> None:
        self._write([1, 2])
        with self.assertRaises(ConfigError):
            load_config(self.path)

    def test_general_must_be_object(self) -> None:
        self._write({"general": "gemini"})
        with self.assertRaises(ConfigError) as ctx:
            load_config(self.path)
        self.assertEqual(ctx.exception.field, "general")

    def test_values_must_be_strings(self) -> None:
        self._write({"general": {"default_provider": 3}})
        with self.assertRaises(ConfigError) as ctx:
            load_config(self.path)
        self.assertEqual(ctx.exception.field, "default_provider")

    def test_unsupported_default_provider(self) -> None:
        self._write({"general": {"default_provider": "openai"}})
        with self.assertRaises(ConfigError) as ctx:
            load_config(self.path)
        self.assertIn("openai", str(ctx.exception))

    def test_create_config_file_round_trips(self) -> None:
        target = Path(self._tmp.name) / "nested" / "goco" / "config.json"
        written = create_config_file(Config(default_provider="groq"), target)
        self.assertEqual(written, target)
        data = json.loads(target.read_text())
        self.assertEqual(data["general"]["default_provider"], "groq")
        self.assertEqual(data["general"]["api_key_gemini_env_variable"], DEFAULT_GEMINI_ENV)
        self.assertEqual(load_config(target).default_provider, "groq")

    def test_config_path_honours_xdg(self) -> None:
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": self._tmp.name}):
            self.assertEqual(get_config_path(), Path(self._tmp.name) / "goco" / "config.json")
        with patch.dict(os.environ, {}, clear=True):
            with patch.object(Path, "home", return_value=Path("/home/dev")):
                self.assertEqual(get_config_path(), Path("/home/dev/.config/goco/config.json"))


if __name__ == "__main__":
    unittest.main()

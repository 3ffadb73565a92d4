"""Tests for the JSON configuration wrapper."""

import json
from pathlib import Path
import sys
import tempfile
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config_manager import ConfigManager
from queenscheck.submission import ChallengeRules


class ConfigManagerTests(unittest.TestCase):
    def test_shipped_config(self):
        config = ConfigManager(ROOT / "config.json")
        self.assertEqual(config.get_benchmark_settings()["sizes"], [4, 8, 12, 16, 24, 32])
        self.assertIn("solver_timeout", config.get_timeout_settings())
        self.assertEqual(
            set(config.get_challenge_presets()),
            {"classic", "puzzle", "speedrun", "no-hint", "hardcore"},
        )

    def test_presets_build_challenge_rules(self):
        config = ConfigManager(ROOT / "config.json")
        for name in config.get_challenge_presets():
            ChallengeRules.from_mapping(config.get_challenge_preset(name))
        hardcore = ChallengeRules.from_mapping(config.get_challenge_preset("hardcore"))
        self.assertEqual(hardcore.move_limit, 50)
        self.assertFalse(hardcore.hints_allowed)

    def test_unknown_preset(self):
        config = ConfigManager(ROOT / "config.json")
        with self.assertRaises(ValueError):
            config.get_challenge_preset("marathon")

    def test_missing_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(FileNotFoundError):
                ConfigManager(Path(tmpdir) / "missing.json")

    def test_update_setting_persists(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.json"
            path.write_text(json.dumps({"benchmark_settings": {"runs": 3}}), encoding="utf-8")
            config = ConfigManager(path)
            self.assertEqual(config.get_timeout_settings(), {})
            config.update_setting("timeout_settings", "solver_timeout", 2.5)
            config.update_setting("benchmark_settings", "runs", 4)
            reloaded = ConfigManager(path)
            self.assertEqual(reloaded.get_timeout_settings(), {"solver_timeout": 2.5})
            self.assertEqual(reloaded.get_benchmark_settings()["runs"], 4)


if __name__ == "__main__":
    unittest.main()

"""Configuration management for the queenscheck tooling.

A thin, explicit wrapper around a JSON configuration file shared by the
benchmark pipeline and the command line.

File format (high-level)
------------------------
- benchmark_settings: board sizes, runs per size, random board density and
  output directory.
- timeout_settings: solver time limit and global benchmark timeout.
- challenge_presets: mapping challenge type -> rules (boardSize, timeLimit,
  moveLimit, hintsAllowed) used by ``queenscheck verify --challenge``.

All methods return Python native types; semantics are validated by the
callers.
"""
import json
from pathlib import Path


class ConfigManager:
    """Load, query, and persist configuration.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Path to the configuration file.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        """Load and parse the JSON configuration file."""
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Create it or copy the default config.json template"
            )

        with open(self.config_path, "r", encoding="utf-8") as f:
            return json.load(f)

    def save_config(self):
        """Write the in-memory configuration back to ``config_path``."""
        with open(self.config_path, "w", encoding="utf-8") as f:
            json.dump(self.config, f, indent=2)

    def get_benchmark_settings(self):
        """Return benchmark settings (sizes, runs, density, output dir)."""
        return self.config.get("benchmark_settings", {})

    def get_timeout_settings(self):
        """Return solver and benchmark timeout settings."""
        return self.config.get("timeout_settings", {})

    def get_challenge_presets(self):
        """Return every challenge preset keyed by challenge type."""
        return self.config.get("challenge_presets", {})

    def get_challenge_preset(self, challenge_type):
        """Return the rules for ``challenge_type``.

        Raises
        ------
        ValueError
            If no preset with that name exists.
        """
        presets = self.get_challenge_presets()
        if challenge_type not in presets:
            known = ", ".join(sorted(presets)) or "none"
            raise ValueError(f"Unknown challenge type '{challenge_type}'. Known: {known}")
        return presets[challenge_type]

    def update_setting(self, section, key, value):
        """Set ``section.key`` (creating the section if needed) and save."""
        if section not in self.config:
            self.config[section] = {}
        self.config[section][key] = value
        self.save_config()

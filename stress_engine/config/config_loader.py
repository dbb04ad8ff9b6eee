"""Configuration loader for StressEngine"""

import yaml
from pathlib import Path
from typing import Any, Dict
import os


PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

VALID_STRATEGIES = ('rms_zcr', 'mfcc')


class Config:
    """Configuration manager for StressEngine"""

    def __init__(self, config_path: str = None):
        if config_path is None:
            config_path = self._find_config()

        self.config_path = Path(config_path)
        self._config = self._load_config()

    @staticmethod
    def _find_config() -> str:
        """Locate the config file, preferring the environment-specific one.

        The working directory is searched first, then the project root.
        """
        env = os.getenv('STRESS_ENGINE_ENV', 'development')
        for base in (Path.cwd(), PROJECT_ROOT):
            env_config = base / "config" / f"config.{env}.yaml"
            if env_config.exists():
                return str(env_config)
            default_config = base / "config" / "config.yaml"
            if default_config.exists():
                return str(default_config)
        return "config/config.yaml"

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file"""
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        with open(self.config_path, 'r') as f:
            return yaml.safe_load(f) or {}

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation

        Args:
            key: Configuration key in dot notation (e.g., 'audio.frame_size')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default

        return value if value is not None else default

    def __getitem__(self, key: str) -> Any:
        """Allow dictionary-style access"""
        return self.get(key)

    def validate(self) -> None:
        """Validate configuration values"""
        frame_size = self.get('audio.frame_size')
        if frame_size is not None and (not isinstance(frame_size, int) or frame_size <= 0):
            raise ValueError(f"Invalid frame_size: {frame_size}, must be a positive integer")

        threshold = self.get('audio.silence_threshold')
        if threshold is not None and not 0 <= threshold < 1:
            raise ValueError(f"Invalid silence_threshold: {threshold}, must be in [0, 1)")

        strategy = self.get('analysis.strategy')
        if strategy is not None and strategy not in VALID_STRATEGIES:
            raise ValueError(f"Unknown analysis strategy: {strategy}, expected one of {VALID_STRATEGIES}")

        for name in VALID_STRATEGIES:
            duration = self.get(f'recording.duration.{name}')
            if duration is not None and duration <= 0:
                raise ValueError(f"Invalid recording duration for {name}: {duration}")


# Global config instance
config = Config()

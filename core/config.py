# core/config.py

"""Configuration management."""
import json
from pathlib import Path
from typing import Optional

from core.data_structures import RunConfig
from utils.platform_utils import default_case_sensitive, default_thread_count

def _positive_int(value, default: int) -> int:
    """A stored count as an int of at least 1, or `default` when it is missing or malformed."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default

class Config:
    """Application configuration manager."""

    def __init__(self, config_file: Optional[Path] = None):
        self.config_file = config_file or Path.home() / '.weight_config.json'
        self.default_config = {
            'language': 'en',
            'threads': None,
            'case_sensitive': None,
            'follow_symlinks': True,
            'queue_capacity': 1024,
            'show_progress': True,
        }
        self.config = self.load_config()

    def load_config(self) -> dict:
        """Load configuration from file."""
        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    loaded = json.load(f)
                if isinstance(loaded, dict):
                    # Merge with defaults
                    config = self.default_config.copy()
                    config.update(loaded)
                    return config
            except (OSError, ValueError):
                pass
        return self.default_config.copy()

    def save_config(self):
        """Save configuration to file."""
        try:
            with open(self.config_file, 'w', encoding='utf-8') as f:
                json.dump(self.config, f, indent=2, ensure_ascii=False)
        except OSError:
            pass

    def get(self, key: str, default=None):
        """Get configuration value."""
        return self.config.get(key, default)

    def set(self, key: str, value):
        """Set configuration value."""
        self.config[key] = value

    def build_run_config(self, threads: Optional[int] = None, case_sensitive: Optional[bool] = None,
                         follow_symlinks: Optional[bool] = None, verbose: bool = False,
                         debug: bool = False) -> RunConfig:
        """Combine stored settings with per-run overrides; None means 'use stored value'."""
        if threads is None:
            threads = _positive_int(self.get('threads'), default_thread_count())
        if case_sensitive is None:
            case_sensitive = self.get('case_sensitive')
            if case_sensitive is None:
                case_sensitive = default_case_sensitive()
        if follow_symlinks is None:
            follow_symlinks = bool(self.get('follow_symlinks', True))
        capacity = _positive_int(self.get('queue_capacity'), self.default_config['queue_capacity'])

        return RunConfig(
            threads=max(1, threads),
            case_sensitive=bool(case_sensitive),
            follow_symlinks=follow_symlinks,
            queue_capacity=capacity,
            verbose=verbose or debug,
            debug=debug,
        )

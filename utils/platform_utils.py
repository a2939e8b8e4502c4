# utils/platform_utils.py

"""Platform-specific defaults."""
import os
import platform
from typing import Dict

def get_platform_info() -> Dict:
    """Gets platform-specific path conventions."""
    system = platform.system().lower()
    if system == 'windows':
        return {
            'name': 'Windows', 'case_sensitive': False,
            'separators': ('/', '\\'),
        }
    if system == 'darwin':
        # APFS and HFS+ are case-insensitive by default
        return {
            'name': 'macOS', 'case_sensitive': False,
            'separators': ('/',),
        }
    return {
        'name': 'Unix-like', 'case_sensitive': True,
        'separators': ('/',),
    }

def default_case_sensitive() -> bool:
    """Whether pattern matching should be case-sensitive on this host."""
    return get_platform_info()['case_sensitive']

def path_separators() -> tuple:
    """Characters accepted as path separators inside glob patterns."""
    return get_platform_info()['separators']

def default_thread_count() -> int:
    """Host-determined parallelism level for size lookups."""
    return max(1, os.cpu_count() or 1)

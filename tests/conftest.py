import os
import sys
from pathlib import Path

import pytest

# Make the flat 'core' / 'utils' packages and main.py importable without installation.
_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))


@pytest.fixture
def make_files(tmp_path):
    """Create files below tmp_path from a {relative path: size in bytes} mapping."""

    def _make(layout):
        for rel, size in layout.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"x" * size)
        return tmp_path

    return _make


@pytest.fixture
def symlink(tmp_path):
    """os.symlink that skips the test where the platform refuses symlinks."""

    def _link(target, link_path, target_is_directory=False):
        try:
            os.symlink(target, link_path, target_is_directory=target_is_directory)
        except (OSError, NotImplementedError) as exc:
            pytest.skip(f"symlinks unavailable: {exc}")

    return _link

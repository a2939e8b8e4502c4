import os
from pathlib import Path, PurePosixPath

import pytest

from utils.file_utils import (
    file_identity,
    filter_overlapping_paths,
    format_size,
    get_display_path,
    is_subdirectory,
)


@pytest.mark.parametrize(
    "size, expected",
    [
        (0, "0 B"),
        (1023, "1023 B"),
        (1024, "1.00 KB"),
        (1536, "1.50 KB"),
        (1024 ** 2, "1.00 MB"),
        (5 * 1024 ** 3, "5.00 GB"),
        (1024 ** 4, "1.00 TB"),
    ],
)
def test_format_size(size, expected):
    assert format_size(size) == expected


def test_identity_uses_device_and_inode(tmp_path):
    path = tmp_path / "f"
    path.write_bytes(b"abc")
    st = os.stat(path)
    if not st.st_ino:
        pytest.skip("filesystem reports no inode numbers")
    assert file_identity(st, path) == (st.st_dev, st.st_ino)


def test_identity_falls_back_to_real_path(tmp_path):
    path = tmp_path / "f"
    path.write_bytes(b"abc")
    real = os.stat(path)
    fake = os.stat_result((real.st_mode, 0, real.st_dev, 1, 0, 0, 3, 0, 0, 0))
    assert file_identity(fake, path) == ("path", os.path.normcase(os.path.realpath(path)))


def test_is_subdirectory_compares_components():
    assert is_subdirectory(PurePosixPath("/a/b"), PurePosixPath("/a"))
    assert is_subdirectory(PurePosixPath("/a"), PurePosixPath("/a"))
    assert not is_subdirectory(PurePosixPath("/ab"), PurePosixPath("/a"))
    assert not is_subdirectory(PurePosixPath("/a"), PurePosixPath("/a/b"))


def test_filter_overlapping_paths():
    paths = [PurePosixPath("/a/b"), PurePosixPath("/a"), PurePosixPath("/c"), PurePosixPath("/a")]
    assert set(filter_overlapping_paths(paths)) == {PurePosixPath("/a"), PurePosixPath("/c")}


def test_display_path_is_relative_when_possible(tmp_path):
    assert get_display_path(tmp_path / "sub" / "x.txt", base=tmp_path) == os.path.join("sub", "x.txt")
    outside = Path(tmp_path.anchor) / "elsewhere"
    assert get_display_path(outside, base=tmp_path) == str(outside)

"""Shared test fixtures."""

import shutil
import tempfile

import pytest

from CubeBrew.config import CubemapConfig
from _dds_helpers import make_cube, write_faces


@pytest.fixture
def tmp_dir():
    d = tempfile.mkdtemp()
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def default_config():
    config = CubemapConfig()
    config.show_progress = False
    return config


@pytest.fixture
def face_paths(tmp_dir):
    """Six valid, matching 16x16 DXT1 faces on disk."""
    return write_faces(tmp_dir, make_cube())

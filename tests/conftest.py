"""Shared fixtures."""

import pytest

from ffmpeg_toolkit.config import reset_config
from ffmpeg_toolkit.config.constants import BUNDLE_ROOT_ENV, DOCUMENT_ROOT_ENV
from ffmpeg_toolkit.core import PathRoots


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep tests away from any ffmpeg_toolkit.yaml or root variables of the developer machine."""
    monkeypatch.delenv(BUNDLE_ROOT_ENV, raising=False)
    monkeypatch.delenv(DOCUMENT_ROOT_ENV, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def roots(tmp_path):
    """Separate bundle and document roots."""
    bundle = tmp_path / "bundle"
    document = tmp_path / "documents"
    bundle.mkdir()
    document.mkdir()
    return PathRoots(bundle_root=bundle, document_root=document)

"""Shared fixtures for gocomplete tests."""

import os
import tempfile
from pathlib import Path

import pytest

# Keep test runs out of the user's state directory
os.environ.setdefault("GOCOMPLETE_LOG_FILE", os.path.join(tempfile.gettempdir(), "gocomplete-tests.log"))


@pytest.fixture
def isolated_path(tmp_path, monkeypatch) -> Path:
    """A bin directory searched before the system ones, with Go tool env vars cleared."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", os.pathsep.join([str(bin_dir), "/usr/bin", "/bin"]))
    for name in ("GOBIN", "GOPATH", "GOCODE_PATH", "GOCOMPLETE_CONFIG"):
        monkeypatch.delenv(name, raising=False)
    return bin_dir

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def make_dir(tmp_path):
    """Create a directory whose children hold their original names as content."""

    def _make(*names: bytes) -> Path:
        directory = tmp_path / "src"
        directory.mkdir()
        base = os.fsencode(directory)
        for name in names:
            with open(os.path.join(base, name), "wb") as f:
                f.write(b"content of " + name)
        return directory

    return _make


@pytest.fixture
def read_dir():
    """Map each child name of a directory to its content."""

    def _read(directory: Path) -> dict:
        base = os.fsencode(directory)
        result = {}
        for name in os.listdir(base):
            with open(os.path.join(base, name), "rb") as f:
                result[name] = f.read()
        return result

    return _read

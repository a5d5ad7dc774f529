import os
from datetime import datetime, timezone

import pytest

from magscan_backend.settings import ScanSettings


def utc_ts(*args) -> float:
    return datetime(*args, tzinfo=timezone.utc).timestamp()


@pytest.fixture
def settings():
    return ScanSettings(timezone="UTC")


@pytest.fixture
def make_file():
    """Write a file and pin its mtime: make_file(folder, name, content, (2024, 2, 3, 12))"""
    def _make(folder, name, content="", when=(2024, 2, 3, 12, 0)):
        folder.mkdir(parents=True, exist_ok=True)
        path = folder / name
        path.write_text(content, encoding="utf-8")
        ts = utc_ts(*when)
        os.utime(path, (ts, ts))
        return path
    return _make

from __future__ import annotations

import json
import pathlib
import sys
from typing import Any

import pytest

REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture(scope="session")
def repo_root() -> pathlib.Path:
    return REPO_ROOT


@pytest.fixture
def read_json():
    def _read(path: pathlib.Path) -> Any:
        return json.loads(path.read_text(encoding="utf-8"))

    return _read

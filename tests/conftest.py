# tests/conftest.py
"""
Pytest configuration and shared fixtures for bitefetch tests
"""
import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from bitefetch import config_utils
from bitefetch.models import ExerciseRecord


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's real API key and ~/.pybites/config.yaml out of tests"""
    monkeypatch.delenv("PYBITES_API_KEY", raising=False)
    monkeypatch.delenv("PYBITES_API_URL", raising=False)
    monkeypatch.delenv("PYBITES_CONFIG", raising=False)
    monkeypatch.setattr(
        config_utils, "GLOBAL_CONFIG_PATH", tmp_path / "no-such-dir" / "config.yaml"
    )


def make_record(name: str, slug: str, level: str, **overrides: str) -> ExerciseRecord:
    fields = {
        "name": name,
        "slug": slug,
        "description": "A test exercise",
        "level": level,
        "template": "fn main() {}",
        "libraries": 'serde = "1.0"\n',
        "author": "testauthor",
    }
    fields.update(overrides)
    return ExerciseRecord(**fields)


@pytest.fixture
def sample_record() -> Callable[..., ExerciseRecord]:
    """Factory for exercise records"""
    return make_record


@pytest.fixture
def exercises_root(tmp_path: Path) -> Path:
    return tmp_path / "exercises"


@pytest.fixture
def record_dicts() -> list:
    return [
        {
            "name": "Hello",
            "slug": "hello",
            "description": "Say hello",
            "level": "intro",
            "template": "pub fn hello() -> &'static str {\n    todo!()\n}\n",
            "libraries": "",
            "author": "bob",
        },
        {
            "name": "Strings",
            "slug": "strings",
            "description": "Work with strings",
            "level": "easy",
            "template": "pub fn shout(s: &str) -> String {\n    todo!()\n}\n",
            "libraries": 'regex = "1"\n',
            "author": "julian",
        },
    ]


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    """Build a requests.Response without touching the network"""

    def _make(
        body: Any = None,
        status_code: int = 200,
        reason: str = "OK",
        headers: Optional[Dict[str, str]] = None,
        raw: Optional[bytes] = None,
    ) -> requests.Response:
        response = requests.Response()
        response.status_code = status_code
        response.reason = reason
        response.url = "https://rustplatform.com/api/"
        response.headers = CaseInsensitiveDict(
            headers or {"Content-Type": "application/json"}
        )
        response._content = raw if raw is not None else json.dumps(body).encode("utf-8")
        response.encoding = "utf-8"
        return response

    return _make


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; undo that after each test"""
    import logging

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)

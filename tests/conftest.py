from __future__ import annotations

import pytest

from app import create_app
from storage import SessionStore


class FixedClock:
    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.value = start

    def __call__(self) -> int:
        return self.value

    def advance(self, ms: int = 1) -> None:
        self.value += ms


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "mockdata"


@pytest.fixture
def store(data_dir, clock):
    s = SessionStore(str(data_dir), clock=clock)
    s.ensure_data_files()
    return s


@pytest.fixture
def app(data_dir, clock):
    application = create_app(DATA_DIR=str(data_dir), TESTING=True)
    application.extensions["session_store"].clock = clock
    return application


@pytest.fixture
def client(app):
    return app.test_client()

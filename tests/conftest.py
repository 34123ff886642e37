from __future__ import annotations

import pytest

from gamestore.infrastructure.db.engine import get_engine
from gamestore.infrastructure.db.schema import ensure_schema


@pytest.fixture
def sqlite_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'store.db'}"


@pytest.fixture
def raw_engine(sqlite_url):
    engine = get_engine(sqlite_url)
    yield engine
    engine.dispose()


@pytest.fixture
def engine(raw_engine):
    report = ensure_schema(raw_engine)
    assert report.failed == ()
    return raw_engine

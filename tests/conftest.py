# tests/conftest.py
from datetime import date

import pytest
from sqlalchemy.orm import sessionmaker

from core.events.domain_events import domain_events
from infra.db.base import Base, build_engine
import infra.db.models  # noqa
from infra.operational_support import OperationalSupport
from infra.services import build_service_graph

TODAY = date(2024, 1, 1)


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = build_engine("sqlite:///:memory:")
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def support(tmp_path):
    return OperationalSupport(events_path=tmp_path / "support-events.jsonl")


@pytest.fixture
def services(session, support):
    graph = build_service_graph(session, support=support, today_provider=lambda: TODAY)
    deps = graph.as_dict()
    deps["support"] = support
    return deps


@pytest.fixture(autouse=True)
def _reset_domain_events():
    yield
    domain_events.reset()

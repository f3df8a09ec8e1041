import json
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sfpulse.database import Base, get_db
from sfpulse.main import app
from sfpulse.schemas import NewsArticle
from sfpulse.services.cache import MemoryCache
from sfpulse.services.llm import ChatCompletionService
import sfpulse.models  # noqa: F401


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def cache():
    return MemoryCache()


def make_article(title, published_date="2025-10-20T12:00:00Z", snippet=None, url=None, source="SF Chronicle"):
    return NewsArticle(
        title=title,
        url=url or f"https://example.com/{abs(hash(title))}",
        snippet=snippet if snippet is not None else f"{title} in San Francisco.",
        published_date=published_date,
        source=source,
    )


def llm_reply(content) -> httpx.Response:
    """Chat completions response carrying ``content`` (dicts are JSON-encoded)"""
    if not isinstance(content, str):
        content = json.dumps(content)
    return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": content}}]})


def llm_with_responses(*responses):
    """
    ChatCompletionService whose HTTP calls return ``responses`` in order

    The last response repeats once the list is exhausted. The returned
    service has a ``requests`` list with every request it sent.
    """
    requests = []
    queue = list(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return queue.pop(0) if len(queue) > 1 else queue[0]

    service = ChatCompletionService(
        api_key="test-key",
        base_url="https://llm.test/v1",
        model="test-model",
        transport=httpx.MockTransport(handler),
    )
    service.requests = requests
    return service


SUMMARY_JSON = {
    "summaryShort": "SF had a busy week.",
    "summaryDetailed": "Several stories shaped the city this week.",
    "bullets": ["One", "Two", "Three", "Four", "Five"],
    "keywords": ["Housing", "Transit", "Budget"],
}

NARRATIVE_JSON = {
    "hypeSummary": "Fans loved it.",
    "backlashSummary": "Residents complained about crowds.",
    "weeklyPulse": "The debate shows a city split over who it is for.",
}

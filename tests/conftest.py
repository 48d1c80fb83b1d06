"""Shared fixtures: in-memory stores, a test app, and article factories."""

import random
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from feed_ranking.models import NewArticle
from feed_server.app import create_app
from feed_server.config import ServerConfig
from feed_server.services import InMemoryFeedStore, InMemoryUserStore
from feed_server.state import AppState

TEST_SECRET = "test-secret-not-for-production"


def make_article(
    n: int,
    embedding: Optional[List[float]] = None,
    source: str = "Wire",
) -> NewArticle:
    return NewArticle(
        title=f"Headline {n}",
        description=f"Description of story {n}",
        article_url=f"https://news.example.com/story/{n}",
        image_url=f"https://img.example.com/{n}.jpg",
        source_name=source,
        embedding=embedding or [1.0, float(n), 0.5],
    )


def make_headline(n: int, **overrides) -> dict:
    """A raw GNews article dict."""
    raw = {
        "title": f"Headline {n}",
        "description": f"Description of story {n}",
        "url": f"https://news.example.com/story/{n}",
        "image": f"https://img.example.com/{n}.jpg",
        "publishedAt": "2024-05-01T12:00:00Z",
        "source": {"name": "Wire", "url": "https://news.example.com"},
    }
    raw.update(overrides)
    return raw


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def feed_store(rng):
    return InMemoryFeedStore(rng=rng)


@pytest.fixture
def user_store():
    return InMemoryUserStore()


@pytest.fixture
def config():
    return ServerConfig(jwt_secret=TEST_SECRET)


@pytest.fixture
def state(config, feed_store, user_store, rng):
    return AppState(config, feed_store, user_store, rng=rng)


@pytest.fixture
def client(config, state):
    return TestClient(create_app(config=config, state=state))


@pytest.fixture
def auth_headers(client):
    """Register + login a user; returns the Authorization header."""
    creds = {"email": "reader@example.com", "password": "hunter22"}
    assert client.post("/auth/register", json=creds).status_code == 201
    token = client.post("/auth/login", json=creds).json()["token"]
    return {"Authorization": f"Bearer {token}"}

"""SQL feed store statements, compiled for Postgres without a database."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from feed_server.services import SqlFeedStore

from .conftest import make_article


@pytest.fixture
def sessions():
    return MagicMock()


@pytest.fixture
def store(sessions):
    return SqlFeedStore(sessions)


def _executed_sql(sessions) -> str:
    """SQL text of the last statement the store executed."""
    session = sessions.return_value.__enter__.return_value
    stmt = session.execute.call_args[0][0]
    return str(stmt.compile(dialect=postgresql.dialect()))


class TestCandidateQueries:
    def test_similarity_ranking_uses_cosine_distance_descending(self, store, sessions):
        store.similar_unswiped(1, [0.1, 0.2, 0.3], 7)
        sql = _executed_sql(sessions)

        assert "- (articles.embedding <=> " in sql
        assert "AS similarity" in sql
        assert "ORDER BY similarity DESC" in sql
        assert "LIMIT" in sql
        assert "NOT IN (SELECT user_swipes.article_id" in sql

    def test_empty_exclusion_list_adds_no_filter(self, store, sessions):
        store.random_unswiped(1, [], 10)
        sql = _executed_sql(sessions)

        # Only the swiped-articles subquery remains
        assert sql.count("NOT IN") == 1
        assert "ORDER BY random()" in sql

    def test_exclusion_list_is_bound(self, store, sessions):
        store.random_unswiped(1, [4, 5], 3)
        sql = _executed_sql(sessions)

        assert sql.count("NOT IN") == 2
        assert "POSTCOMPILE" in sql

    def test_zero_limit_skips_the_query(self, store, sessions):
        assert store.random_unswiped(1, [], 0) == []
        assert store.similar_unswiped(1, [0.1], 0) == []
        sessions.assert_not_called()


class TestArticleInsert:
    def test_insert_is_idempotent_on_article_url(self, store, sessions):
        store.insert_article(make_article(1))
        sql = _executed_sql(sessions)

        assert sql.startswith("INSERT INTO articles")
        assert "ON CONFLICT (article_url) DO NOTHING" in sql
        assert "AS VECTOR" in sql

    def test_insert_reports_duplicates(self, store, sessions):
        session = sessions.return_value.__enter__.return_value
        session.execute.return_value.rowcount = 0
        assert store.insert_article(make_article(1)) is False
        session.execute.return_value.rowcount = 1
        assert store.insert_article(make_article(2)) is True

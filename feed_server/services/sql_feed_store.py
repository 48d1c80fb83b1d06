"""
SQL feed store: articles and user_swipes in Postgres with pgvector.

Similarity ranking is done by the datastore (`1 - (embedding <=> taste)`),
random selection by ORDER BY random(). Exclusion lists are bound as
parameters; an empty list adds no filter at all.
"""

import logging
from typing import Dict, List, Sequence

from pgvector.sqlalchemy import Vector
from sqlalchemy import Text, cast, delete, desc, func, literal, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import sessionmaker

from feed_ranking.models import Article, NewArticle, Swipe
from feed_ranking.utils import format_embedding, parse_embedding

from ..errors import ArticleNotFoundError
from .feed_store import TOP_TOPICS_LIMIT
from .sql_models import ArticleRow, SwipeRow

logger = logging.getLogger(__name__)

_ARTICLE_COLUMNS = (
    ArticleRow.id,
    ArticleRow.title,
    ArticleRow.description,
    ArticleRow.article_url,
    ArticleRow.image_url,
    ArticleRow.source_name,
    ArticleRow.published_at,
)


def _article_from_row(row, similarity=None) -> Article:
    data = {c.key: getattr(row, c.key) for c in _ARTICLE_COLUMNS}
    if similarity is not None:
        data["similarity"] = float(similarity)
    return Article.model_validate(data)


class SqlFeedStore:
    """
    Feed store over a SQLAlchemy session factory.

    The factory may be bound to the pooled engine (serving: one session per
    call) or to a single Connection (ingestion: one connection for the run).
    """

    def __init__(self, session_factory: sessionmaker):
        self._sessions = session_factory

    def _swiped_by(self, user_id: int):
        return select(SwipeRow.article_id).where(SwipeRow.user_id == user_id)

    # --- Corpus -------------------------------------------------------------

    def insert_article(self, article: NewArticle) -> bool:
        stmt = (
            insert(ArticleRow)
            .values(
                title=article.title,
                description=article.description,
                article_url=article.article_url,
                image_url=article.image_url,
                source_name=article.source_name,
                published_at=article.published_at,
                embedding=cast(literal(format_embedding(article.embedding), Text), Vector()),
            )
            .on_conflict_do_nothing(index_elements=[ArticleRow.article_url])
        )
        with self._sessions() as session:
            result = session.execute(stmt)
            session.commit()
        if result.rowcount == 0:
            logger.debug("Skipped duplicate article: url=%s", article.article_url)
            return False
        return True

    def count_articles(self) -> int:
        with self._sessions() as session:
            return session.execute(select(func.count()).select_from(ArticleRow)).scalar_one()

    def similar_unswiped(self, user_id: int, taste: List[float], limit: int) -> List[Article]:
        if limit <= 0:
            return []
        similarity = (1 - ArticleRow.embedding.cosine_distance(taste)).label("similarity")
        stmt = (
            select(*_ARTICLE_COLUMNS, similarity)
            .where(ArticleRow.id.not_in(self._swiped_by(user_id)))
            .order_by(desc("similarity"))
            .limit(limit)
        )
        with self._sessions() as session:
            rows = session.execute(stmt).all()
        return [_article_from_row(r, r.similarity) for r in rows]

    def random_unswiped(
        self,
        user_id: int,
        exclude_ids: Sequence[int],
        limit: int,
    ) -> List[Article]:
        if limit <= 0:
            return []
        stmt = select(*_ARTICLE_COLUMNS).where(ArticleRow.id.not_in(self._swiped_by(user_id)))
        if exclude_ids:
            stmt = stmt.where(ArticleRow.id.not_in(list(exclude_ids)))
        stmt = stmt.order_by(func.random()).limit(limit)
        with self._sessions() as session:
            rows = session.execute(stmt).all()
        return [_article_from_row(r) for r in rows]

    # --- Swipes -------------------------------------------------------------

    def recent_liked_embeddings(self, user_id: int, limit: int) -> List[List[float]]:
        stmt = (
            select(ArticleRow.embedding)
            .join(SwipeRow, SwipeRow.article_id == ArticleRow.id)
            .where(SwipeRow.user_id == user_id, SwipeRow.liked.is_(True))
            .order_by(SwipeRow.swipe_time.desc(), SwipeRow.id.desc())
            .limit(limit)
        )
        with self._sessions() as session:
            values = session.execute(stmt).scalars().all()
        return [parse_embedding(v) for v in values]

    def record_swipe(self, user_id: int, article_id: int, liked: bool) -> Swipe:
        with self._sessions() as session:
            if session.get(ArticleRow, article_id) is None:
                raise ArticleNotFoundError(article_id)
            row = SwipeRow(user_id=user_id, article_id=article_id, liked=bool(liked))
            session.add(row)
            session.commit()
            session.refresh(row)
            return Swipe(
                id=row.id,
                user_id=row.user_id,
                article_id=row.article_id,
                liked=row.liked,
                swipe_time=row.swipe_time,
            )

    def reset_swipes(self, user_id: int) -> int:
        with self._sessions() as session:
            result = session.execute(delete(SwipeRow).where(SwipeRow.user_id == user_id))
            session.commit()
            return result.rowcount

    def count_swipes(self, user_id: int) -> int:
        stmt = select(func.count()).select_from(SwipeRow).where(SwipeRow.user_id == user_id)
        with self._sessions() as session:
            return session.execute(stmt).scalar_one()

    def top_liked_sources(self, user_id: int, limit: int = TOP_TOPICS_LIMIT) -> List[str]:
        like_count = func.count().label("like_count")
        stmt = (
            select(ArticleRow.source_name, like_count)
            .join(SwipeRow, SwipeRow.article_id == ArticleRow.id)
            .where(SwipeRow.user_id == user_id, SwipeRow.liked.is_(True))
            .group_by(ArticleRow.source_name)
            .order_by(desc("like_count"))
            .limit(limit)
        )
        with self._sessions() as session:
            return [r.source_name for r in session.execute(stmt).all()]

    def liked_articles(self, user_id: int) -> List[Dict]:
        stmt = (
            select(ArticleRow.id, ArticleRow.title, ArticleRow.article_url, ArticleRow.source_name)
            .join(SwipeRow, SwipeRow.article_id == ArticleRow.id)
            .where(SwipeRow.user_id == user_id, SwipeRow.liked.is_(True))
            .order_by(SwipeRow.swipe_time.desc(), SwipeRow.id.desc())
        )
        with self._sessions() as session:
            return [dict(r._mapping) for r in session.execute(stmt).all()]

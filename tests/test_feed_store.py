"""In-memory feed store: corpus writes, swipe history and stats queries."""

import pytest

from feed_server.errors import ArticleNotFoundError

from .conftest import make_article


class TestCorpus:
    def test_duplicate_url_is_silent_noop(self, feed_store):
        assert feed_store.insert_article(make_article(1)) is True
        assert feed_store.insert_article(make_article(1, embedding=[9.0, 9.0, 9.0])) is False
        assert feed_store.count_articles() == 1

    def test_random_unswiped_respects_exclusions(self, feed_store):
        for i in range(1, 7):
            feed_store.insert_article(make_article(i))
        feed_store.record_swipe(1, 1, True)

        picked = feed_store.random_unswiped(1, [2, 3], 10)

        assert sorted(a.id for a in picked) == [4, 5, 6]
        assert all(a.similarity is None for a in picked)

    def test_empty_exclusion_list_filters_nothing(self, feed_store):
        for i in range(1, 4):
            feed_store.insert_article(make_article(i))
        assert len(feed_store.random_unswiped(1, [], 10)) == 3

    def test_swipes_of_other_users_do_not_exclude(self, feed_store):
        feed_store.insert_article(make_article(1))
        feed_store.record_swipe(2, 1, True)
        assert [a.id for a in feed_store.random_unswiped(1, [], 10)] == [1]


class TestSwipes:
    def test_unknown_article(self, feed_store):
        with pytest.raises(ArticleNotFoundError):
            feed_store.record_swipe(1, 99, True)
        assert feed_store.count_swipes(1) == 0

    def test_repeat_swipes_are_kept(self, feed_store):
        feed_store.insert_article(make_article(1))
        feed_store.record_swipe(1, 1, True)
        feed_store.record_swipe(1, 1, False)
        assert feed_store.count_swipes(1) == 2

    def test_reset_only_touches_one_user(self, feed_store):
        feed_store.insert_article(make_article(1))
        feed_store.record_swipe(1, 1, True)
        feed_store.record_swipe(1, 1, True)
        feed_store.record_swipe(2, 1, True)

        assert feed_store.reset_swipes(1) == 2
        assert feed_store.count_swipes(1) == 0
        assert feed_store.count_swipes(2) == 1

    def test_top_liked_sources(self, feed_store):
        sources = ["BBC", "BBC", "BBC", "CNN", "CNN", "AP", "Reuters", "Reuters", "Reuters", "Reuters", "AP", "AP"]
        for i, source in enumerate(sources, start=1):
            feed_store.insert_article(make_article(i, source=source))
        for i in range(1, 11):
            feed_store.record_swipe(1, i, True)
        # Dislikes do not count toward the top sources
        feed_store.record_swipe(1, 11, False)
        feed_store.record_swipe(1, 12, False)

        assert feed_store.top_liked_sources(1) == ["Reuters", "BBC", "CNN"]

    def test_liked_articles_newest_first(self, feed_store):
        for i in (1, 2, 3):
            feed_store.insert_article(make_article(i))
        feed_store.record_swipe(1, 1, True)
        feed_store.record_swipe(1, 2, False)
        feed_store.record_swipe(1, 3, True)

        liked = feed_store.liked_articles(1)

        assert [a["id"] for a in liked] == [3, 1]
        assert set(liked[0]) == {"id", "title", "article_url", "source_name"}

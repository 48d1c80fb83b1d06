"""Hybrid feed assembly: cold start, warm blend, exclusions and small corpora."""

import random
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from feed_ranking.models import Article, FeedConfig
from feed_ranking.stages import (
    MODE_COLD_START,
    MODE_WARM,
    HybridFeedAssembler,
    TasteProfileBuilder,
    blend_feed,
)

from .conftest import make_article


def _assembler(store, seed=7):
    rng = random.Random(seed)
    return HybridFeedAssembler(store, TasteProfileBuilder(store), rng=rng)


def _fill(store, count, dims=3):
    for i in range(1, count + 1):
        vec = [0.0] * dims
        vec[i % dims] = 1.0
        vec[(i + 1) % dims] = i / 100.0
        store.insert_article(make_article(i, embedding=vec))


class TestColdStart:
    def test_no_similarity_query_for_users_without_likes(self):
        source = MagicMock()
        source.recent_liked_embeddings.return_value = []
        source.random_unswiped.return_value = [Article(id=i) for i in range(1, 11)]

        assembler = HybridFeedAssembler(source, TasteProfileBuilder(source))
        result = assembler.assemble(user_id=1)

        assert result.mode == MODE_COLD_START
        assert len(result.articles) == 10
        source.similar_unswiped.assert_not_called()
        source.random_unswiped.assert_called_once_with(1, [], 10)

    @pytest.mark.parametrize("corpus_size,expected", [(15, 10), (4, 4), (0, 0)])
    def test_size_is_min_of_feed_size_and_corpus(self, feed_store, corpus_size, expected):
        _fill(feed_store, corpus_size)
        feed = _assembler(feed_store).build_feed(1)
        assert len(feed) == expected
        assert len({a.id for a in feed}) == expected

    def test_only_dislikes_is_still_cold_start(self, feed_store):
        _fill(feed_store, 12)
        feed_store.record_swipe(1, 1, False)
        result = _assembler(feed_store).assemble(1)
        assert result.mode == MODE_COLD_START
        assert 1 not in {a.id for a in result.articles}
        assert len(result.articles) == 10


class TestWarmFeed:
    def test_blend_shape_and_exclusions(self, feed_store):
        _fill(feed_store, 40)
        for article_id in (1, 2, 3, 4):
            feed_store.record_swipe(1, article_id, article_id % 2 == 1)

        result = _assembler(feed_store).assemble(1)
        ids = [a.id for a in result.articles]

        assert result.mode == MODE_WARM
        assert len(ids) <= 10
        assert result.smart_count <= 7
        assert result.dumb_count <= 3
        assert len(ids) == len(set(ids))
        assert not set(ids) & {1, 2, 3, 4}
        smart = [a for a in result.articles if a.similarity is not None]
        assert len(smart) == result.smart_count

    def test_more_similar_article_ranks_higher(self, feed_store):
        feed_store.insert_article(make_article(1, embedding=[1.0, 0.0, 0.0]))  # A
        feed_store.insert_article(make_article(2, embedding=[0.9, 0.1, 0.0]))  # B
        feed_store.insert_article(make_article(3, embedding=[0.0, 1.0, 0.0]))  # C
        feed_store.record_swipe(1, 1, True)

        result = _assembler(feed_store).assemble(1)
        by_id = {a.id: a for a in result.articles}

        assert set(by_id) == {2, 3}
        assert by_id[2].similarity > by_id[3].similarity
        ranked = feed_store.similar_unswiped(1, [1.0, 0.0, 0.0], 7)
        assert [a.id for a in ranked] == [2, 3]

    def test_small_corpus_is_not_padded(self, feed_store):
        _fill(feed_store, 5)
        feed_store.record_swipe(1, 1, True)
        feed = _assembler(feed_store).build_feed(1)
        assert sorted(a.id for a in feed) == [2, 3, 4, 5]

    def test_everything_swiped_gives_empty_feed(self, feed_store):
        _fill(feed_store, 3)
        for i in (1, 2, 3):
            feed_store.record_swipe(1, i, True)
        assert _assembler(feed_store).build_feed(1) == []

    def test_empty_smart_subset_fills_with_random(self):
        source = MagicMock()
        source.recent_liked_embeddings.return_value = [[1.0, 0.0]]
        source.similar_unswiped.return_value = []
        source.random_unswiped.return_value = [Article(id=i) for i in range(20, 30)]

        result = HybridFeedAssembler(source, TasteProfileBuilder(source)).assemble(1)

        source.random_unswiped.assert_called_once_with(1, [], 10)
        assert result.mode == MODE_WARM
        assert len(result.articles) == 10

    def test_dumb_subset_excludes_smart_ids(self):
        source = MagicMock()
        source.recent_liked_embeddings.return_value = [[1.0, 0.0]]
        source.similar_unswiped.return_value = [Article(id=i, similarity=0.9) for i in (1, 2)]
        # A misbehaving source returning a smart id again must not duplicate it
        source.random_unswiped.return_value = [Article(id=2), Article(id=5)]

        result = HybridFeedAssembler(source, TasteProfileBuilder(source)).assemble(1)

        source.random_unswiped.assert_called_once_with(1, [1, 2], 3)
        assert sorted(a.id for a in result.articles) == [1, 2, 5]


class TestBlendAndConfig:
    def test_blend_feed_shuffles_without_duplicates(self):
        smart = [Article(id=i) for i in range(1, 8)]
        dumb = [Article(id=i) for i in (8, 9, 1)]
        feed = blend_feed(smart, dumb, random.Random(3))
        assert sorted(a.id for a in feed) == list(range(1, 10))

    def test_blend_feed_does_not_keep_input_order(self):
        smart = [Article(id=i) for i in range(1, 8)]
        dumb = [Article(id=i) for i in (8, 9, 10)]
        feed = blend_feed(smart, dumb, random.Random(3))
        assert [a.id for a in feed] != list(range(1, 11))

    def test_exploration_items_are_mixed_in_with_ranked_ones(self):
        smart = [Article(id=i, similarity=0.9) for i in range(1, 8)]
        dumb = [Article(id=i) for i in (8, 9, 10)]
        mixed = 0
        for seed in range(50):
            feed = blend_feed(smart, dumb, random.Random(seed))
            if any(a.id >= 8 for a in feed[:7]):
                mixed += 1
        # Uniform shuffle puts all three exploration items last only 1 time in 120
        assert mixed > 25

    def test_config_rejects_blend_larger_than_feed(self):
        with pytest.raises(ValidationError):
            FeedConfig(smart_feed_size=8, dumb_feed_size=3, feed_size=10)


import logging
from concurrent.futures import Future

import pytest

from models import ChapterKey
from tests.conftest import TEST_BOOKS, make_verses
from utils.ai_client import GenerativeServiceError
from utils.chapter_loader import ScriptureUnavailableError, _log_prefetch_failure, submit_prefetch

GENESIS, JOHN, REVELATION = TEST_BOOKS


def test_primary_fetch_is_cached_and_schedules_prefetch(loader, scripture_source, runner):
    scripture_source.chapters[('Genesis', 1, 'almeida')] = make_verses(5)

    verses = loader.load(GENESIS, 1)

    assert [v.number for v in verses] == [1, 2, 3, 4, 5]
    assert ChapterKey('Gênesis', 1) in loader.cache
    assert scripture_source.calls == [('Genesis', 1, 'almeida')]
    assert runner.tasks == [(loader.prefetch_next, (0, 1))]


def test_repeated_load_returns_cached_sequence_without_network(loader, scripture_source, runner):
    scripture_source.chapters[('John', 2, 'almeida')] = make_verses(4)

    first = loader.load(JOHN, 2)
    calls_after_first = list(scripture_source.calls)
    second = loader.load(JOHN, 2)

    assert second is first
    assert scripture_source.calls == calls_after_first
    # a cache hit still triggers prefetch of the following chapter
    assert len(runner.tasks) == 2


def test_fallback_without_translation_keeps_numbering_when_translation_fails(loader, scripture_source, ai_client):
    scripture_source.chapters[('John', 3, None)] = make_verses(20, prefix='english')
    ai_client.queue(GenerativeServiceError("overloaded"))

    verses = loader.load(JOHN, 3)

    assert len(verses) == 20
    assert [v.number for v in verses] == list(range(1, 21))
    assert verses[0].text == 'english 1'
    assert scripture_source.calls == [('John', 3, 'almeida'), ('John', 3, None)]


def test_fallback_result_is_translated_and_cached(loader, scripture_source, ai_client):
    scripture_source.chapters[('Genesis', 2, None)] = make_verses(3, prefix='english')
    ai_client.queue([{"v": 1, "t": "um"}, {"v": 2, "t": "dois"}, {"v": 3, "t": "três"}])

    verses = loader.load(GENESIS, 2)

    assert [(v.number, v.text) for v in verses] == [(1, 'um'), (2, 'dois'), (3, 'três')]
    assert loader.cache.get(ChapterKey('Gênesis', 2)) == tuple(verses)


def test_both_fetches_failing_raises_connection_error(loader, scripture_source, runner):
    with pytest.raises(ScriptureUnavailableError, match="connection failed"):
        loader.load(GENESIS, 1)

    assert len(loader.cache) == 0
    assert runner.tasks == []


def test_chapter_out_of_range_is_rejected(loader, scripture_source):
    with pytest.raises(ValueError):
        loader.load(GENESIS, 3)
    assert scripture_source.calls == []


def test_prefetch_after_last_chapter_of_last_book_is_noop(loader, scripture_source):
    assert loader.prefetch_next(2, REVELATION.chapters) is False
    assert scripture_source.calls == []
    assert len(loader.cache) == 0


def test_prefetch_after_last_chapter_moves_to_next_book(loader, scripture_source, runner):
    scripture_source.chapters[('Genesis', 2, 'almeida')] = make_verses(2)
    scripture_source.chapters[('John', 1, 'almeida')] = make_verses(6)

    loader.load(GENESIS, 2)
    results = runner.run_all()

    assert results == [True]
    assert loader.cache.get(ChapterKey('João', 1)) == tuple(make_verses(6))


def test_prefetch_skips_cached_chapter(loader, scripture_source):
    loader.cache.put(ChapterKey('João', 2), make_verses(1))

    assert loader.prefetch_next(1, 1) is False
    assert scripture_source.calls == []


def test_prefetch_failures_are_swallowed(loader, scripture_source):
    scripture_source.chapters[('John', 2, 'almeida')] = RuntimeError("socket closed")

    assert loader.prefetch_next(1, 1) is False
    assert ChapterKey('João', 2) not in loader.cache


def test_prefetch_uses_translation_fallback(loader, scripture_source, ai_client):
    scripture_source.chapters[('John', 2, None)] = make_verses(2, prefix='english')
    ai_client.queue('not json at all')

    assert loader.prefetch_next(1, 1) is True
    assert loader.cache.get(ChapterKey('João', 2)) == tuple(make_verses(2, prefix='english'))


def test_recent_readings_are_newest_first_and_bounded(loader, scripture_source):
    for chapter in (1, 2):
        scripture_source.chapters[('Genesis', chapter, 'almeida')] = make_verses(1)
    for chapter in (1, 2):
        scripture_source.chapters[('John', chapter, 'almeida')] = make_verses(1)

    loader.load(GENESIS, 1)
    loader.load(GENESIS, 2)
    loader.load(JOHN, 1)
    loader.load(GENESIS, 1)
    loader.load(JOHN, 2)

    assert loader.recent_readings() == [
        ChapterKey('João', 2),
        ChapterKey('Gênesis', 1),
        ChapterKey('João', 1),
    ]


def test_cache_hit_with_next_chapter_cached_schedules_nothing(loader, scripture_source, runner):
    scripture_source.chapters[('John', 1, 'almeida')] = make_verses(3)
    loader.cache.put(ChapterKey('João', 2), make_verses(2))

    loader.load(JOHN, 1)
    loader.load(JOHN, 1)

    assert runner.tasks == []


def test_last_chapter_of_corpus_schedules_nothing(loader, scripture_source, runner):
    scripture_source.chapters[('Revelation', 2, 'almeida')] = make_verses(3)

    loader.load(REVELATION, 2)

    assert runner.tasks == []


def test_submit_prefetch_runs_on_the_shared_pool():
    future = submit_prefetch(lambda book_idx, chapter: (book_idx, chapter), 4, 7)
    assert future.result(timeout=5) == (4, 7)


def test_crashed_prefetch_is_logged(caplog):
    future = Future()
    future.set_exception(RuntimeError("worker died"))

    with caplog.at_level(logging.ERROR, logger='utils.chapter_loader'):
        _log_prefetch_failure(future)

    assert "worker died" in caplog.text

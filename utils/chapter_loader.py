# utils/chapter_loader.py
import logging
import threading
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from config import Config
from models import Book, ChapterKey, Verse
from utils.books import BIBLE_BOOKS, book_index, next_chapter
from utils.chapter_cache import ChapterCache

logger = logging.getLogger(__name__)


class ScriptureUnavailableError(Exception):
    """Both the localized and the fallback scripture requests failed."""

    def __init__(self, message="connection failed"):
        super().__init__(message)


_prefetch_executor = ThreadPoolExecutor(max_workers=max(Config.PREFETCH_WORKERS, 1),
                                       thread_name_prefix='chapter-prefetch')


def _log_prefetch_failure(future):
    if future.cancelled():
        return
    error = future.exception()
    if error is not None:
        logger.error(f"Background prefetch crashed: {error!r}")


def submit_prefetch(func, *args):
    future = _prefetch_executor.submit(func, *args)
    future.add_done_callback(_log_prefetch_failure)
    return future


class ChapterLoader:
    """Read-through chapter cache with next-chapter prefetch.

    A miss fetches the chapter in the default translation; if that fails the
    chapter is fetched without a translation parameter and localized through
    the translation fallback. Every successful load schedules a background
    prefetch of the following chapter unless it is already cached.
    """

    def __init__(self, source, translator, cache=None, books: Sequence[Book] = BIBLE_BOOKS,
                 translation=None, run_in_background=None, recent_limit=None):
        self.source = source
        self.translator = translator
        self.cache = cache if cache is not None else ChapterCache()
        self.books = books
        self.translation = translation or Config.DEFAULT_TRANSLATION
        self._run_in_background = run_in_background or submit_prefetch
        limit = Config.RECENT_READINGS_LIMIT if recent_limit is None else recent_limit
        self._recent = deque(maxlen=max(limit, 1))
        self._recent_lock = threading.Lock()

    def load(self, book: Book, chapter: int):
        if chapter < 1 or chapter > book.chapters:
            raise ValueError(f"{book.name} has no chapter {chapter}")

        key = ChapterKey(book.name, chapter)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info(f"Cache hit for {book.name} {chapter}")
            self._record_recent(key)
            self._schedule_prefetch(book, chapter)
            return cached

        logger.info(f"Cache miss for {book.name} {chapter}, fetching")
        verses = self.fetch_chapter(book, chapter)
        if verses is None:
            logger.error(f"Could not load {book.name} {chapter} from any scripture endpoint")
            raise ScriptureUnavailableError()

        self.cache.put(key, verses)
        self._record_recent(key)
        self._schedule_prefetch(book, chapter)
        return self.cache.get(key) or tuple(verses)

    def fetch_chapter(self, book: Book, chapter: int) -> Optional[List[Verse]]:
        """Primary localized fetch, then the untranslated fallback. None if both fail."""
        verses = self.source.fetch(book, chapter, self.translation)
        if verses is not None:
            return verses

        logger.info(f"Localized fetch failed for {book.api_name} {chapter}, trying default translation")
        raw_verses = self.source.fetch(book, chapter)
        if raw_verses is None:
            return None
        return self.translator.translate(raw_verses)

    def prefetch_next(self, book_idx: int, chapter: int) -> bool:
        """Warm the cache with the chapter after (book_idx, chapter).

        Returns True only if a new chapter was cached. Failures are logged
        and otherwise ignored.
        """
        following = next_chapter(book_idx, chapter, self.books)
        if following is None:
            logger.debug("End of corpus reached, nothing to prefetch")
            return False

        next_book, next_chap = following
        key = ChapterKey(next_book.name, next_chap)
        if key in self.cache:
            return False

        try:
            verses = self.fetch_chapter(next_book, next_chap)
        except Exception as e:
            logger.warning(f"Prefetch of {next_book.name} {next_chap} failed: {e}")
            return False

        if verses is None:
            logger.warning(f"Prefetch of {next_book.name} {next_chap} returned nothing")
            return False

        self.cache.put(key, verses)
        logger.info(f"Prefetched {next_book.name} {next_chap}")
        return True

    def recent_readings(self) -> List[ChapterKey]:
        """Most recently loaded chapters, newest first."""
        with self._recent_lock:
            return list(self._recent)

    def _record_recent(self, key: ChapterKey):
        with self._recent_lock:
            if key in self._recent:
                self._recent.remove(key)
            self._recent.appendleft(key)

    def _schedule_prefetch(self, book: Book, chapter: int):
        try:
            idx = book_index(book, self.books)
        except ValueError:
            logger.warning(f"Cannot prefetch after {book.name}: not in the reference table")
            return
        following = next_chapter(idx, chapter, self.books)
        if following is None:
            return
        next_book, next_chap = following
        if ChapterKey(next_book.name, next_chap) in self.cache:
            return
        self._run_in_background(self.prefetch_next, idx, chapter)

# utils/chapter_cache.py
import threading
from collections import OrderedDict
from typing import Optional, Sequence, Tuple

from models import ChapterKey, Verse


class ChapterCache:
    """In-memory map of ChapterKey -> verses.

    Unbounded unless ``max_size`` is given, in which case the least recently
    used chapter is evicted. Writes to an existing key replace it (last
    writer wins).
    """

    def __init__(self, max_size: Optional[int] = None):
        self.max_size = max_size if max_size and max_size > 0 else None
        self._entries = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: ChapterKey) -> Optional[Tuple[Verse, ...]]:
        with self._lock:
            verses = self._entries.get(key)
            if verses is not None and self.max_size:
                self._entries.move_to_end(key)
            return verses

    def put(self, key: ChapterKey, verses: Sequence[Verse]) -> None:
        with self._lock:
            self._entries[key] = tuple(verses)
            self._entries.move_to_end(key)
            if self.max_size:
                while len(self._entries) > self.max_size:
                    self._entries.popitem(last=False)

    def __contains__(self, key) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def keys(self):
        with self._lock:
            return list(self._entries.keys())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

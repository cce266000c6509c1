# utils/scripture.py
import logging
from typing import List, Optional
from urllib.parse import quote

import requests

from config import Config
from models import Book, Verse

logger = logging.getLogger(__name__)


def _parse_verse(item):
    text = item['text']
    if not isinstance(text, str):
        raise TypeError(f"verse text must be a string, got {type(text).__name__}")
    return Verse(number=int(item['verse']), text=text.strip())


class ScriptureSource:
    """Client for a bible-api.com style endpoint: GET {base}/{book}+{chapter}."""

    def __init__(self, base_url=None, timeout=None):
        self.base_url = (base_url or Config.BIBLE_API_URL).rstrip('/')
        self.timeout = timeout or Config.REQUEST_TIMEOUT

    def chapter_url(self, book: Book, chapter: int) -> str:
        return f"{self.base_url}/{quote(book.api_name, safe='')}+{chapter}"

    def fetch(self, book: Book, chapter: int, translation: Optional[str] = None) -> Optional[List[Verse]]:
        """Return the chapter's verses in order, or None on any failure."""
        url = self.chapter_url(book, chapter)
        params = {'translation': translation} if translation else None

        try:
            response = requests.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Scripture request to {url} failed: {e}")
            return None

        if not response.ok:
            logger.warning(f"Scripture request to {url} returned {response.status_code}")
            return None

        try:
            data = response.json()
            verses = [_parse_verse(item) for item in data['verses']]
        except (ValueError, KeyError, TypeError) as parse_err:
            logger.warning(f"Malformed scripture payload from {url}: {parse_err}")
            return None

        if not verses:
            logger.warning(f"Scripture payload from {url} contained no verses")
            return None
        return verses

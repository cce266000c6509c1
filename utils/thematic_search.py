# utils/thematic_search.py
import logging
from typing import List, Sequence

from pydantic import ValidationError

from config import Config
from models import Book
from schemas.search_schemas import SearchResultEntry, unwrap_search_response
from utils.ai_client import GenerativeServiceError
from utils.books import BIBLE_BOOKS

logger = logging.getLogger(__name__)

MAX_RESULTS = 10


class ThematicSearch:
    """Finds verses about a free-text theme through the generative API."""

    def __init__(self, ai_client, books: Sequence[Book] = BIBLE_BOOKS, language=None):
        self.ai_client = ai_client
        self.books = books
        self.language = language or Config.TARGET_LANGUAGE

    def build_prompt(self, theme):
        book_names = ', '.join(book.name for book in self.books)
        return f"""Find {MAX_RESULTS} Bible verses related to the theme: "{theme}".
RULES: Return ONLY a JSON array of objects with the keys "book", "chapter", "verse" and "text".
Use book names from this list exactly as written: {book_names}.
Verse text in {self.language}."""

    def search(self, theme) -> List[SearchResultEntry]:
        if not theme or not theme.strip():
            logger.warning("Thematic search called with empty theme")
            return []

        logger.info(f"Thematic search for: '{theme}'")
        try:
            payload = self.ai_client.generate_json(self.build_prompt(theme.strip()))
            raw_entries = unwrap_search_response(payload)
        except (GenerativeServiceError, ValueError, ValidationError) as e:
            logger.error(f"Search error: {e}")
            return []

        results = []
        for position, item in enumerate(raw_entries):
            try:
                results.append(SearchResultEntry.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping search entry {position}: {e.error_count()} invalid field(s)")

        logger.info(f"Thematic search returned {len(results)} entries")
        return results[:MAX_RESULTS]

import json

import pytest

from models import Book, Verse
from utils.ai_client import GenerativeServiceError, parse_json_response
from utils.chapter_cache import ChapterCache
from utils.chapter_loader import ChapterLoader
from utils.translation import TranslationFallback

TEST_BOOKS = [
    Book('Gênesis', 'Genesis', 2),
    Book('João', 'John', 3),
    Book('Apocalipse', 'Revelation', 2),
]


def make_verses(count, prefix='text'):
    return [Verse(number=n, text=f"{prefix} {n}") for n in range(1, count + 1)]


class FakeAIClient:
    """Returns queued responses in order; queued exceptions are raised."""

    chat_model = 'fake-chat-model'

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def queue(self, *responses):
        self.responses.extend(responses)

    def generate(self, prompt, system=None, model=None, **kwargs):
        self.calls.append({"prompt": prompt, "system": system, "model": model})
        if not self.responses:
            raise GenerativeServiceError("no response queued")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response()
        if not isinstance(response, str):
            return json.dumps(response)
        return response

    def generate_json(self, prompt, system=None, model=None, **kwargs):
        return parse_json_response(self.generate(prompt, system=system, model=model))


class FakeScriptureSource:
    """Maps (api_name, chapter, translation) to verses; anything else fails."""

    def __init__(self, chapters=None):
        self.chapters = dict(chapters or {})
        self.calls = []

    def fetch(self, book, chapter, translation=None):
        self.calls.append((book.api_name, chapter, translation))
        result = self.chapters.get((book.api_name, chapter, translation))
        if isinstance(result, Exception):
            raise result
        return result


class RecordingRunner:
    """Collects background tasks so tests decide when (or whether) they run."""

    def __init__(self):
        self.tasks = []

    def __call__(self, func, *args):
        self.tasks.append((func, args))

    def run_all(self):
        tasks, self.tasks = self.tasks, []
        return [func(*args) for func, args in tasks]


@pytest.fixture
def ai_client():
    return FakeAIClient()


@pytest.fixture
def scripture_source():
    return FakeScriptureSource()


@pytest.fixture
def runner():
    return RecordingRunner()


@pytest.fixture
def loader(scripture_source, ai_client, runner):
    return ChapterLoader(
        scripture_source,
        TranslationFallback(ai_client, target_language='Brazilian Portuguese'),
        cache=ChapterCache(),
        books=TEST_BOOKS,
        translation='almeida',
        run_in_background=runner,
        recent_limit=3,
    )

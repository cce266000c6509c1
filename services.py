# services.py
"""Process-wide service instances, created lazily on first access."""
import logging
import threading

from config import Config
from utils.ai_client import AnthropicClient
from utils.chapter_cache import ChapterCache
from utils.chapter_loader import ChapterLoader
from utils.counselor import ConversationRegistry
from utils.devotional import DevotionalGenerator
from utils.narration import NarrationGate, NarrationService
from utils.scripture import ScriptureSource
from utils.thematic_search import ThematicSearch
from utils.translation import TranslationFallback

logger = logging.getLogger(__name__)


class ServiceRegistry:
    def __init__(self):
        self._instances = {}
        self._lock = threading.RLock()

    def _get(self, name, factory):
        with self._lock:
            if name not in self._instances:
                logger.info(f"Initializing {name}...")
                self._instances[name] = factory()
            return self._instances[name]

    def override(self, **instances):
        """Replace services, e.g. with fakes in tests."""
        with self._lock:
            self._instances.update(instances)

    def reset(self):
        with self._lock:
            self._instances.clear()

    @property
    def ai_client(self):
        return self._get('ai_client', AnthropicClient)

    @property
    def chapter_loader(self):
        return self._get('chapter_loader', lambda: ChapterLoader(
            ScriptureSource(),
            TranslationFallback(self.ai_client),
            cache=ChapterCache(max_size=Config.CHAPTER_CACHE_MAX_SIZE),
        ))

    @property
    def conversations(self):
        return self._get('conversations', lambda: ConversationRegistry(self.ai_client))

    @property
    def devotional(self):
        return self._get('devotional', lambda: DevotionalGenerator(self.ai_client))

    @property
    def thematic_search(self):
        return self._get('thematic_search', lambda: ThematicSearch(self.ai_client))

    @property
    def narration(self):
        return self._get('narration', NarrationService)

    @property
    def narration_gate(self):
        return self._get('narration_gate', NarrationGate)


_registry_instance = None


def get_services():
    global _registry_instance
    if _registry_instance is None:
        _registry_instance = ServiceRegistry()
    return _registry_instance

# config.py
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent


def _env_int(name, default):
    value = os.getenv(name)
    if value is None or value.strip() == '':
        return default
    return int(value)


class Config:
    # Scripture text service (bible-api.com compatible)
    BIBLE_API_URL = os.getenv('BIBLE_API_URL', 'https://bible-api.com').rstrip('/')
    DEFAULT_TRANSLATION = os.getenv('DEFAULT_TRANSLATION', 'almeida')
    REQUEST_TIMEOUT = _env_int('REQUEST_TIMEOUT', 10)

    # Generative capability
    ANTHROPIC_API_KEY = os.getenv('ANTHROPIC_API_KEY')
    ANTHROPIC_MODEL = os.getenv('ANTHROPIC_MODEL', 'claude-3-haiku-20240307')
    ANTHROPIC_CHAT_MODEL = os.getenv('ANTHROPIC_CHAT_MODEL', 'claude-3-7-sonnet-20250219')
    ANTHROPIC_MAX_RETRIES = _env_int('ANTHROPIC_MAX_RETRIES', 2)
    TARGET_LANGUAGE = os.getenv('TARGET_LANGUAGE', 'Brazilian Portuguese')

    # Reading view
    CHAPTER_CACHE_MAX_SIZE = _env_int('CHAPTER_CACHE_MAX_SIZE', 0)  # 0 = unbounded
    RECENT_READINGS_LIMIT = _env_int('RECENT_READINGS_LIMIT', 3)
    PREFETCH_WORKERS = _env_int('PREFETCH_WORKERS', 2)

    # Counselor sessions
    COUNSELOR_MAX_SESSIONS = _env_int('COUNSELOR_MAX_SESSIONS', 500)
    SESSION_IDLE_SECONDS = _env_int('SESSION_IDLE_SECONDS', 3600)  # 0 = never expire

    # Narration
    NARRATION_LANGUAGE_CODE = os.getenv('NARRATION_LANGUAGE_CODE', 'pt-BR')
    NARRATION_DEFAULT_VOICE = os.getenv('NARRATION_DEFAULT_VOICE', 'female')
    NARRATION_CHUNK_CHARS = _env_int('NARRATION_CHUNK_CHARS', 1200)

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    PORT = _env_int('PORT', 5001)

# utils/ai_client.py
import json
import logging

import anthropic

from config import Config

logger = logging.getLogger(__name__)


class GenerativeServiceError(Exception):
    """Raised when the generative API cannot be reached or rejects a request."""


def strip_code_fences(text):
    """Remove a surrounding ```json ... ``` (or bare ```) block if present."""
    cleaned = (text or '').strip()
    if cleaned.startswith('```json'):
        cleaned = cleaned.split('```json', 1)[1].split('```')[0].strip()
    elif cleaned.startswith('```'):
        cleaned = cleaned.split('```', 1)[1].split('```')[0].strip()
    return cleaned


def parse_json_response(text):
    """Parse a model response that should contain only JSON.

    Raises json.JSONDecodeError (a ValueError) when the payload is not JSON.
    """
    return json.loads(strip_code_fences(text))


class AnthropicClient:
    """Opaque generative capability: natural-language request in, text out."""

    def __init__(self, api_key=None, model=None, chat_model=None, max_retries=None):
        self.api_key = api_key or Config.ANTHROPIC_API_KEY
        self.model = model or Config.ANTHROPIC_MODEL
        self.chat_model = chat_model or Config.ANTHROPIC_CHAT_MODEL
        self.max_retries = Config.ANTHROPIC_MAX_RETRIES if max_retries is None else max_retries
        self._client = None

    def _get_or_init_client(self):
        if self._client is None:
            if not self.api_key:
                raise GenerativeServiceError("ANTHROPIC_API_KEY not set in environment variables")
            logger.info("Initializing Anthropic client...")
            self._client = anthropic.Anthropic(api_key=self.api_key, max_retries=self.max_retries)
        return self._client

    def generate(self, prompt, system=None, model=None, max_tokens=2048, temperature=0.7):
        """Send a single-turn request and return the concatenated text blocks."""
        client = self._get_or_init_client()
        params = {
            "model": model or self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}]
        }
        if system:
            params["system"] = system

        try:
            message = client.messages.create(**params)
        except anthropic.APIError as api_err:
            logger.error(f"Anthropic API error: {api_err}")
            raise GenerativeServiceError(str(api_err)) from api_err

        return ''.join(
            block.text for block in message.content if getattr(block, 'type', None) == 'text'
        )

    def generate_json(self, prompt, system=None, model=None, max_tokens=4096):
        """Request a JSON-only answer and return the decoded payload."""
        instruction = f"{prompt}\n\nRespond ONLY with valid JSON. Do not add commentary or Markdown."
        text = self.generate(instruction, system=system, model=model,
                             max_tokens=max_tokens, temperature=0.0)
        return parse_json_response(text)

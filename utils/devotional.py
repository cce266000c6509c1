# utils/devotional.py
import json
import logging
import threading
from typing import Optional

from pydantic import ValidationError

from config import Config
from models import OperationState
from schemas.devotional_schemas import DevotionalRecord
from utils.ai_client import GenerativeServiceError

logger = logging.getLogger(__name__)


class DevotionalGenerationError(Exception):
    """The generative response was missing, unparseable or incomplete."""


class DevotionalGenerator:
    def __init__(self, ai_client, language=None):
        self.ai_client = ai_client
        self.language = language or Config.TARGET_LANGUAGE
        self.current: Optional[DevotionalRecord] = None
        self.state = OperationState.IDLE
        self._lock = threading.Lock()

    def build_prompt(self):
        schema = json.dumps(DevotionalRecord.model_json_schema()["properties"], ensure_ascii=False)
        return (
            "Generate a short devotional for today, including an inspiring title, "
            "a key Bible verse, a reflection and a brief prayer. "
            f"Answer in {self.language}.\n"
            'Respond with a JSON object with the keys "title", "verse", "message" and "prayer", '
            f"all of them required strings. Property schema: {schema}"
        )

    def generate(self) -> DevotionalRecord:
        """Produce a new record, or raise DevotionalGenerationError.

        On failure the previous record stays current.
        """
        self.state = OperationState.IN_FLIGHT
        try:
            payload = self.ai_client.generate_json(self.build_prompt())
            record = DevotionalRecord.model_validate(payload)
        except (GenerativeServiceError, ValueError, ValidationError) as e:
            logger.error(f"Devotional Error: {e}")
            self.state = OperationState.FAILED
            raise DevotionalGenerationError(str(e)) from e

        with self._lock:
            self.current = record
        self.state = OperationState.SUCCEEDED
        logger.info(f"Generated devotional: {record.title}")
        return record

    def get_or_generate(self) -> DevotionalRecord:
        with self._lock:
            current = self.current
        if current is not None:
            return current
        return self.generate()

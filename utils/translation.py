# utils/translation.py
import json
import logging
from typing import List

from pydantic import ValidationError

from config import Config
from models import Verse
from schemas.translation_schemas import TranslatedVerse
from utils.ai_client import GenerativeServiceError

logger = logging.getLogger(__name__)


class TranslationFallback:
    """Localizes verses fetched in the service's default language.

    Never raises: any failure returns the input verses unchanged, and the
    output always keeps the input's length and verse numbering.
    """

    def __init__(self, ai_client, target_language=None):
        self.ai_client = ai_client
        self.target_language = target_language or Config.TARGET_LANGUAGE

    def build_prompt(self, verses: List[Verse]) -> str:
        payload = json.dumps([{"v": v.number, "t": v.text} for v in verses], ensure_ascii=False)
        return (
            f"Translate the following Bible verses from English into {self.target_language}, "
            f"keeping a solemn and faithful style:\n{payload}\n"
            "Return only a JSON array with the same structure and the same order."
        )

    def translate(self, verses: List[Verse]) -> List[Verse]:
        if not verses:
            return verses

        try:
            translated = self.ai_client.generate_json(self.build_prompt(verses))
        except (GenerativeServiceError, ValueError) as e:
            logger.warning(f"Verse translation failed, keeping original text: {e}")
            return verses

        if not isinstance(translated, list):
            logger.warning(f"Verse translation returned {type(translated).__name__}, expected a list")
            return verses

        if len(translated) != len(verses):
            logger.warning(f"Verse translation returned {len(translated)} items for {len(verses)} verses")

        result = []
        for idx, verse in enumerate(verses):
            text = verse.text
            if idx < len(translated):
                try:
                    item = TranslatedVerse.model_validate(translated[idx])
                    if item.t:
                        text = item.t
                except ValidationError:
                    logger.debug(f"Untranslatable item at position {idx}, keeping verse {verse.number}")
            result.append(Verse(number=verse.number, text=text))
        return result

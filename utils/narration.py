# utils/narration.py
"""Text-to-speech narration through Google Cloud Text-to-Speech.

Long texts are split into chunks under the API's request limit and the MP3
segments are concatenated. Callers serialize narration per scope through
NarrationGate; a request on a busy scope is dropped.
"""
import logging
import re
import threading
from typing import List, Optional

from google.cloud import texttospeech

from config import Config
from models import OperationState, VoiceGender

logger = logging.getLogger(__name__)

_SENTENCE_END = re.compile(r'(?<=[.!?;:])\s+')

_SSML_GENDER = {
    VoiceGender.FEMALE: texttospeech.SsmlVoiceGender.FEMALE,
    VoiceGender.MALE: texttospeech.SsmlVoiceGender.MALE,
}


class NarrationError(Exception):
    """Speech synthesis failed."""


def parse_voice(value, default=None) -> VoiceGender:
    if value is None or value == '':
        value = default or Config.NARRATION_DEFAULT_VOICE
    if isinstance(value, VoiceGender):
        return value
    return VoiceGender(str(value).strip().lower())


def split_text_for_speech(text: str, max_chars: int) -> List[str]:
    """Group sentences into chunks of at most max_chars characters."""
    chunks = []
    current = ''
    for sentence in _SENTENCE_END.split(text.strip()):
        if not sentence:
            continue
        pieces = [sentence]
        if len(sentence) > max_chars:
            pieces = []
            piece = ''
            for word in sentence.split():
                if piece and len(piece) + len(word) + 1 > max_chars:
                    pieces.append(piece)
                    piece = word
                else:
                    piece = f"{piece} {word}" if piece else word
            if piece:
                pieces.append(piece)

        for piece in pieces:
            if current and len(current) + len(piece) + 1 > max_chars:
                chunks.append(current)
                current = piece
            else:
                current = f"{current} {piece}" if current else piece
    if current:
        chunks.append(current)
    return chunks


class NarrationService:
    def __init__(self, language_code=None, chunk_chars=None, client=None):
        self.language_code = language_code or Config.NARRATION_LANGUAGE_CODE
        self.chunk_chars = chunk_chars or Config.NARRATION_CHUNK_CHARS
        self._client = client

    def _get_or_init_client(self):
        if self._client is None:
            logger.info("Initializing Text-to-Speech client...")
            self._client = texttospeech.TextToSpeechClient()
        return self._client

    def speak(self, text: str, voice=VoiceGender.FEMALE) -> bytes:
        """Synthesize text with the given voice gender and return MP3 bytes."""
        if not text or not text.strip():
            raise NarrationError("Nothing to narrate")

        voice = parse_voice(voice)
        voice_params = texttospeech.VoiceSelectionParams(
            language_code=self.language_code,
            ssml_gender=_SSML_GENDER[voice],
        )
        audio_config = texttospeech.AudioConfig(
            audio_encoding=texttospeech.AudioEncoding.MP3
        )

        chunks = split_text_for_speech(text, self.chunk_chars)
        logger.info(f"Narrating {len(text)} chars in {len(chunks)} chunk(s), voice: {voice.value}")

        audio = bytearray()
        try:
            client = self._get_or_init_client()
            for chunk in chunks:
                response = client.synthesize_speech(
                    input=texttospeech.SynthesisInput(text=chunk),
                    voice=voice_params,
                    audio_config=audio_config,
                )
                audio.extend(response.audio_content)
        except Exception as e:
            logger.error(f"Text-to-Speech error: {e}", exc_info=True)
            raise NarrationError(str(e)) from e
        return bytes(audio)


class NarrationGate:
    """Single-flight guard: at most one narration in progress per scope."""

    def __init__(self):
        self._busy = set()
        self._lock = threading.Lock()

    def try_acquire(self, scope: str) -> bool:
        with self._lock:
            if scope in self._busy:
                return False
            self._busy.add(scope)
            return True

    def release(self, scope: str) -> None:
        with self._lock:
            self._busy.discard(scope)

    def state(self, scope: str) -> OperationState:
        with self._lock:
            return OperationState.IN_FLIGHT if scope in self._busy else OperationState.IDLE


def narrate_once(service: NarrationService, gate: NarrationGate, scope: str,
                 text: str, voice=None) -> Optional[bytes]:
    """Speak text unless the scope is already narrating; returns None when dropped."""
    if not gate.try_acquire(scope):
        logger.info(f"Narration for '{scope}' ignored, already in progress")
        return None
    try:
        return service.speak(text, voice)
    finally:
        gate.release(scope)

# utils/phrases.py
import logging

from config import Config

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = 'Brazilian Portuguese'

# Fixed user-facing wording, kept in the same language as the generated content
PHRASES = {
    'Brazilian Portuguese': {
        'empty_reply': "Desculpe, tive um problema ao refletir sobre isso.",
        'connection_error': "Erro de conexão com o mentor. Tente novamente.",
        'verse_analysis': "Explique o contexto e o significado teológico deste versículo: {context_verse}",
        'devotional_narration': ("{title}. O versículo de hoje é: {verse}. Reflexão: {message}. "
                                 "E terminamos com uma oração: {prayer}"),
        'verse_narration': "{text} {book} {chapter}, versículo {verse}.",
    },
    'English': {
        'empty_reply': "Sorry, I had a problem reflecting on that.",
        'connection_error': "Connection error with the mentor. Please try again.",
        'verse_analysis': "Explain the context and theological meaning of this verse: {context_verse}",
        'devotional_narration': ("{title}. Today's verse is: {verse}. Reflection: {message}. "
                                 "And we finish with a prayer: {prayer}"),
        'verse_narration': "{text} {book} chapter {chapter}, verse {verse}.",
    },
}


def phrases_for(language=None):
    """Phrase table for ``language`` (defaults to TARGET_LANGUAGE).

    Unknown languages get the default table so one response never mixes
    two languages of fixed wording.
    """
    language = language or Config.TARGET_LANGUAGE
    for name, table in PHRASES.items():
        if name.lower() == language.strip().lower():
            return table
    logger.warning(f"No phrase table for '{language}', using {DEFAULT_LANGUAGE}")
    return PHRASES[DEFAULT_LANGUAGE]

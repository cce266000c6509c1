# utils/counselor.py
import logging
import threading
import time
import uuid
from collections import OrderedDict
from typing import Dict, List, Optional

from config import Config
from models import ConversationMessage, OperationState
from utils.phrases import phrases_for

logger = logging.getLogger(__name__)


def mentor_persona(language=None):
    language = language or Config.TARGET_LANGUAGE
    return f"""You are a Bible Mentor and Theologian who answers in {language}.
Always respond with wisdom, citing verses and providing historical context.
If the user provides a specific verse, analyze it in depth."""


def verse_analysis_request(context_verse, language=None):
    return phrases_for(language)['verse_analysis'].format(context_verse=context_verse)


class ConversationSession:
    """Append-only chat with the theology assistant.

    The user's message is appended before the request is made and is never
    retracted; every accepted send appends exactly one assistant message.
    """

    def __init__(self, ai_client, session_id=None, persona=None, language=None):
        self.id = session_id or uuid.uuid4().hex
        self.ai_client = ai_client
        self.language = language or Config.TARGET_LANGUAGE
        self.persona = persona or mentor_persona(self.language)
        self.phrases = phrases_for(self.language)
        self.messages: List[ConversationMessage] = []
        self.state = OperationState.IDLE
        self._lock = threading.Lock()

    @property
    def in_flight(self):
        return self.state == OperationState.IN_FLIGHT

    def send(self, text) -> bool:
        """Returns False when the message was rejected (blank, or a reply is pending)."""
        if not text or not text.strip():
            return False

        with self._lock:
            if self.state == OperationState.IN_FLIGHT:
                logger.info(f"Session {self.id}: send ignored, a reply is already pending")
                return False
            self.state = OperationState.IN_FLIGHT
            self.messages.append(ConversationMessage(role='user', content=text))

        try:
            reply = self.ai_client.generate(
                text,
                system=self.persona,
                model=getattr(self.ai_client, 'chat_model', None)
            )
            content = reply.strip() if reply else ''
            self._finish(content or self.phrases['empty_reply'], OperationState.SUCCEEDED)
        except Exception as e:
            logger.error(f"Session {self.id}: assistant request failed: {e}", exc_info=True)
            self._finish(self.phrases['connection_error'], OperationState.FAILED)
        return True

    def analyze_verse(self, context_verse) -> bool:
        return self.send(verse_analysis_request(context_verse, self.language))

    def _finish(self, content, state):
        with self._lock:
            self.messages.append(ConversationMessage(role='assistant', content=content))
            self.state = state

    def to_json(self):
        with self._lock:
            return {
                "id": self.id,
                "state": self.state.value,
                "messages": [m.to_json() for m in self.messages]
            }


class ConversationRegistry:
    """Process-local store of chat sessions, one per counselor view.

    Sessions idle for longer than ``idle_seconds`` are dropped, and once
    ``max_sessions`` is reached the least recently used session makes room
    for a new one.
    """

    def __init__(self, ai_client, max_sessions=None, idle_seconds=None, clock=time.monotonic):
        self.ai_client = ai_client
        self.max_sessions = Config.COUNSELOR_MAX_SESSIONS if max_sessions is None else max_sessions
        self.idle_seconds = Config.SESSION_IDLE_SECONDS if idle_seconds is None else idle_seconds
        self._clock = clock
        self._sessions: "OrderedDict[str, ConversationSession]" = OrderedDict()
        self._last_seen: Dict[str, float] = {}
        self._lock = threading.Lock()

    def create(self) -> ConversationSession:
        session = ConversationSession(self.ai_client)
        with self._lock:
            now = self._clock()
            self._evict_idle(now)
            self._sessions[session.id] = session
            self._last_seen[session.id] = now
            while self.max_sessions > 0 and len(self._sessions) > self.max_sessions:
                oldest_id, _ = self._sessions.popitem(last=False)
                self._last_seen.pop(oldest_id, None)
                logger.info(f"Evicted least recently used conversation session {oldest_id}")
        logger.info(f"Created conversation session {session.id}")
        return session

    def get(self, session_id) -> Optional[ConversationSession]:
        with self._lock:
            now = self._clock()
            self._evict_idle(now)
            session = self._sessions.get(session_id)
            if session is not None:
                self._sessions.move_to_end(session_id)
                self._last_seen[session_id] = now
            return session

    def reset(self, session_id) -> bool:
        with self._lock:
            removed = self._sessions.pop(session_id, None)
            self._last_seen.pop(session_id, None)
        if removed:
            logger.info(f"Reset conversation session {session_id}")
        return removed is not None

    def _evict_idle(self, now):
        if self.idle_seconds <= 0:
            return
        expired = [sid for sid, seen in self._last_seen.items() if now - seen > self.idle_seconds]
        removed = 0
        for sid in expired:
            session = self._sessions.get(sid)
            if session is not None and session.in_flight:
                continue
            self._sessions.pop(sid, None)
            self._last_seen.pop(sid, None)
            removed += 1
        if removed:
            logger.info(f"Expired {removed} idle conversation session(s)")

    def __len__(self):
        with self._lock:
            return len(self._sessions)

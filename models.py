# models.py
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


class OperationState(str, Enum):
    IDLE = 'idle'
    IN_FLIGHT = 'in_flight'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'


class VoiceGender(str, Enum):
    FEMALE = 'female'
    MALE = 'male'


@dataclass(frozen=True)
class Book:
    name: str
    api_name: str
    chapters: int

    def to_json(self):
        return {
            "name": self.name,
            "api_name": self.api_name,
            "chapters": self.chapters
        }


@dataclass(frozen=True)
class Verse:
    number: int
    text: str

    def to_json(self):
        return {"verse": self.number, "text": self.text}


class ChapterKey(NamedTuple):
    book: str
    chapter: int


@dataclass(frozen=True)
class ConversationMessage:
    role: str  # 'user' or 'assistant'
    content: str

    def to_json(self):
        return {"role": self.role, "content": self.content}

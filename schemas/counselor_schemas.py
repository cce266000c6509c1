from pydantic import BaseModel, Field
from typing import Optional


class MessageCreate(BaseModel):
    content: Optional[str] = Field(None, max_length=8000)
    context_verse: Optional[str] = Field(None, max_length=2000)

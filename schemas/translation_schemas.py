from pydantic import BaseModel, Field
from typing import Optional


class TranslatedVerse(BaseModel):
    v: Optional[int] = None
    t: Optional[str] = Field(None, min_length=1)

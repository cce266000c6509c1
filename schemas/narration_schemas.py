from pydantic import BaseModel, Field
from typing import Optional


class NarrationRequest(BaseModel):
    text: str = Field(..., min_length=1)
    scope: str = Field(..., min_length=1, max_length=200)  # single-flight token, e.g. "reader:16"
    voice: Optional[str] = None


class ViewNarrationRequest(BaseModel):
    """Narration of a fixed view (home, devotional) by one client instance."""
    client_id: str = Field(..., min_length=1, max_length=100)
    voice: Optional[str] = None

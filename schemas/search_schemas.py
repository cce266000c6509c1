from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from typing import Any, List, Optional, Union


class SearchResultEntry(BaseModel):
    model_config = ConfigDict(extra='ignore')

    book: str = Field(..., min_length=1)
    chapter: int = Field(..., ge=1)
    verse: int = Field(..., ge=1)
    text: str


class SearchEnvelope(BaseModel):
    """Object form of a search response: the entries wrapped under a known key."""
    verses: Optional[List[Any]] = None
    results: Optional[List[Any]] = None

    def entries(self) -> List[Any]:
        if self.verses is not None:
            return self.verses
        return self.results or []


SearchResponse = Union[List[Any], SearchEnvelope]

search_response_adapter = TypeAdapter(SearchResponse)


def unwrap_search_response(payload) -> List[Any]:
    """Return the raw entries of either response shape, in order.

    Raises pydantic.ValidationError if neither shape matches.
    """
    parsed = search_response_adapter.validate_python(payload)
    if isinstance(parsed, SearchEnvelope):
        return parsed.entries()
    return parsed

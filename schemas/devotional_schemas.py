from pydantic import BaseModel, ConfigDict, Field

from utils.phrases import phrases_for


class DevotionalRecord(BaseModel):
    model_config = ConfigDict(extra='ignore', str_strip_whitespace=True)

    title: str = Field(..., min_length=1)
    verse: str = Field(..., min_length=1)    # key verse text with its reference
    message: str = Field(..., min_length=1)  # the reflection
    prayer: str = Field(..., min_length=1)

    def narration_text(self, language=None):
        return phrases_for(language)['devotional_narration'].format(
            title=self.title, verse=self.verse, message=self.message, prayer=self.prayer
        )

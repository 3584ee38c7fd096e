from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from flashdeck.models.deck import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH
from flashdeck.schemas.card import CardResponse


class DeckCreate(BaseModel):
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)

    @field_validator("description")
    @classmethod
    def blank_description_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class DeckUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)


class DeckResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: Optional[str]
    user_id: str
    created_at: datetime
    updated_at: datetime


class DeckSummary(DeckResponse):
    card_count: int = 0


class DeckDetail(DeckResponse):
    cards: List[CardResponse] = []


class StudyDeckResponse(BaseModel):
    deck: DeckResponse
    cards: List[CardResponse]
    empty: bool


class DeckStats(BaseModel):
    total_decks: int
    total_cards: int

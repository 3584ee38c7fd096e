from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from flashdeck.models.card import SIDE_MAX_LENGTH


class CardCreate(BaseModel):
    front_side: str = Field(min_length=1, max_length=SIDE_MAX_LENGTH)
    back_side: str = Field(min_length=1, max_length=SIDE_MAX_LENGTH)


class CardUpdate(CardCreate):
    pass


class CardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    deck_id: str
    front_side: str
    back_side: str
    created_at: datetime
    updated_at: datetime


class ImportResponse(BaseModel):
    success: bool = True
    imported: int

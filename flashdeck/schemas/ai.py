from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from flashdeck.models.card import SIDE_MAX_LENGTH

MAX_GENERATED_CARDS = 200


class GenerateRequest(BaseModel):
    count: int = Field(ge=1, le=MAX_GENERATED_CARDS)


class GeneratedCard(BaseModel):
    """One front/back pair as returned by the text generation provider."""

    front_side: str = Field(alias="frontSide", min_length=1, max_length=SIDE_MAX_LENGTH)
    back_side: str = Field(alias="backSide", min_length=1, max_length=SIDE_MAX_LENGTH)


class ErrorInfo(BaseModel):
    code: str
    message: str


class GenerateSuccess(BaseModel):
    success: Literal[True] = True
    inserted: int


class GenerateFailure(BaseModel):
    success: Literal[False] = False
    error: ErrorInfo
    stage: Optional[str] = None


GenerateResult = Union[GenerateSuccess, GenerateFailure]

from typing import Any, Dict, Literal

from pydantic import BaseModel


class LocaleSetting(BaseModel):
    locale: Literal["en", "zh-TW"]


class LocaleMessages(BaseModel):
    locale: Literal["en", "zh-TW"]
    messages: Dict[str, Any]

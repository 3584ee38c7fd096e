from fastapi import APIRouter, Depends, Response

from flashdeck.i18n.dictionaries import DICTIONARIES
from flashdeck.i18n.translator import LOCALE_COOKIE, get_locale
from flashdeck.schemas.locale import LocaleMessages, LocaleSetting

router = APIRouter()

# one year
COOKIE_MAX_AGE = 60 * 60 * 24 * 365

@router.get("/", response_model=LocaleSetting)
async def read_locale(locale: str = Depends(get_locale)):
    return LocaleSetting(locale=locale)

@router.put("/", response_model=LocaleSetting)
async def set_locale(payload: LocaleSetting, response: Response):
    response.set_cookie(LOCALE_COOKIE, payload.locale, max_age=COOKIE_MAX_AGE, samesite="lax")
    return payload

@router.get("/messages", response_model=LocaleMessages)
async def read_messages(locale: str = Depends(get_locale)):
    """The whole dictionary for the active locale, for clients rendering UI text."""
    return LocaleMessages(locale=locale, messages=DICTIONARIES[locale])

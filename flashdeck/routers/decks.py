from typing import List

from fastapi import APIRouter, Depends, File, Response, UploadFile
from loguru import logger
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.core.database import get_db
from flashdeck.core.security import get_current_user
from flashdeck.i18n.translator import Translator, get_translator
from flashdeck.models.card import Card
from flashdeck.models.deck import Deck
from flashdeck.schemas.ai import GenerateRequest, GenerateResult
from flashdeck.schemas.card import CardCreate, CardResponse, ImportResponse
from flashdeck.schemas.deck import (
    DeckCreate,
    DeckDetail,
    DeckResponse,
    DeckStats,
    DeckSummary,
    DeckUpdate,
    StudyDeckResponse,
)
from flashdeck.services.access import get_owned_deck
from flashdeck.services.ai_generation import CardGenerator, generate_ai_cards, get_card_generator
from flashdeck.services.csv_import import parse_upload

router = APIRouter()

GENERATE_FAILURE_STATUS = {
    "invalid_input": 422,
    "feature_not_entitled": 403,
    "deck_not_found": 404,
    "missing_title_or_description": 422,
    "provider_not_configured": 503,
    "quota_exceeded": 429,
}


async def _deck_cards(deck_id: str, db: AsyncSession) -> List[Card]:
    q = select(Card).where(Card.deck_id == deck_id).order_by(Card.created_at, Card.id)
    return list((await db.execute(q)).scalars().all())


@router.get("/", response_model=List[DeckSummary])
async def list_decks(current_user=Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    q = (
        select(Deck, func.count(Card.id))
        .outerjoin(Card, Card.deck_id == Deck.id)
        .where(Deck.user_id == current_user.id)
        .group_by(Deck.id)
        .order_by(Deck.updated_at.desc())
    )
    rows = (await db.execute(q)).all()
    return [
        DeckSummary(**DeckResponse.model_validate(deck).model_dump(), card_count=count)
        for deck, count in rows
    ]


@router.get("/stats", response_model=DeckStats)
async def deck_stats(current_user=Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    total_decks = await db.scalar(select(func.count(Deck.id)).where(Deck.user_id == current_user.id))
    total_cards = await db.scalar(
        select(func.count(Card.id)).join(Deck, Card.deck_id == Deck.id).where(Deck.user_id == current_user.id)
    )
    return DeckStats(total_decks=total_decks or 0, total_cards=total_cards or 0)


@router.post("/", response_model=DeckResponse, status_code=201)
async def create_deck(payload: DeckCreate, current_user=Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    deck = Deck(title=payload.title, description=payload.description, user_id=current_user.id)
    db.add(deck)
    await db.commit()
    await db.refresh(deck)
    logger.info(f"User {current_user.id} created deck {deck.id}")
    return deck


@router.get("/{deck_id}", response_model=DeckDetail)
async def get_deck(deck_id: str, current_user=Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    deck = await get_owned_deck(deck_id, current_user, db)
    cards = await _deck_cards(deck.id, db)
    return DeckDetail(
        **DeckResponse.model_validate(deck).model_dump(),
        cards=[CardResponse.model_validate(c) for c in cards],
    )


@router.patch("/{deck_id}", response_model=DeckResponse)
async def update_deck(
    deck_id: str,
    payload: DeckUpdate,
    current_user=Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    deck = await get_owned_deck(deck_id, current_user, db)
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("title") is None:
        changes.pop("title", None)
    if "description" in changes:
        changes["description"] = changes["description"] or None
    for field, value in changes.items():
        setattr(deck, field, value)
    if changes:
        db.add(deck)
        await db.commit()
        await db.refresh(deck)
    return deck


@router.delete("/{deck_id}")
async def delete_deck(deck_id: str, current_user=Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    deck = await get_owned_deck(deck_id, current_user, db)
    await db.execute(delete(Card).where(Card.deck_id == deck.id))
    await db.execute(delete(Deck).where(Deck.id == deck.id))
    await db.commit()
    logger.info(f"User {current_user.id} deleted deck {deck_id}")
    return {"detail": "Deck deleted"}


@router.get("/{deck_id}/study", response_model=StudyDeckResponse)
async def study_deck(deck_id: str, current_user=Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    """Cards for a study session, in stored order.

    Clients drive the session with ``flashdeck.study.session.StudySession``
    over ``cards``; when ``empty`` is true they show an empty state instead.
    """
    deck = await get_owned_deck(deck_id, current_user, db)
    cards = await _deck_cards(deck.id, db)
    return StudyDeckResponse(
        deck=DeckResponse.model_validate(deck),
        cards=[CardResponse.model_validate(c) for c in cards],
        empty=not cards,
    )


@router.post("/{deck_id}/cards", response_model=CardResponse, status_code=201)
async def create_card(
    deck_id: str,
    payload: CardCreate,
    current_user=Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    deck = await get_owned_deck(deck_id, current_user, db)
    card = Card(deck_id=deck.id, front_side=payload.front_side, back_side=payload.back_side)
    db.add(card)
    await db.commit()
    await db.refresh(card)
    return card


@router.post("/{deck_id}/import", response_model=ImportResponse)
async def import_csv(
    deck_id: str,
    file: UploadFile = File(...),
    current_user=Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    deck = await get_owned_deck(deck_id, current_user, db)
    parsed = parse_upload(await file.read())
    db.add_all([Card(deck_id=deck.id, front_side=p.front_side, back_side=p.back_side) for p in parsed])
    await db.commit()
    logger.info(f"Imported {len(parsed)} cards from {file.filename} into deck {deck_id}")
    return ImportResponse(imported=len(parsed))


@router.post("/{deck_id}/generate", response_model=GenerateResult)
async def generate_cards(
    deck_id: str,
    payload: GenerateRequest,
    response: Response,
    current_user=Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    generator: CardGenerator = Depends(get_card_generator),
    t: Translator = Depends(get_translator),
):
    result = await generate_ai_cards(deck_id, payload.count, current_user, db, generator, t)
    if not result.success:
        response.status_code = GENERATE_FAILURE_STATUS.get(result.error.code, 502)
    return result

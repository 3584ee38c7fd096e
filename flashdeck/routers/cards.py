from fastapi import APIRouter, Depends
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.core.database import get_db
from flashdeck.core.security import get_current_user
from flashdeck.models.card import Card
from flashdeck.schemas.card import CardResponse, CardUpdate
from flashdeck.services.access import get_owned_card

router = APIRouter()

@router.get("/{card_id}", response_model=CardResponse)
async def get_card(card_id: str, current_user=Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await get_owned_card(card_id, current_user, db)

@router.put("/{card_id}", response_model=CardResponse)
async def update_card(card_id: str, updated_data: CardUpdate, current_user=Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    card = await get_owned_card(card_id, current_user, db)
    card.front_side = updated_data.front_side
    card.back_side = updated_data.back_side
    db.add(card)
    await db.commit()
    await db.refresh(card)
    return card

@router.delete("/{card_id}")
async def delete_card(card_id: str, current_user=Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    card = await get_owned_card(card_id, current_user, db)
    await db.execute(delete(Card).where(Card.id == card.id))
    await db.commit()
    return {"detail": "Card deleted"}

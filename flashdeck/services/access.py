"""Ownership checks shared by the deck, card, import and generation routes.

A deck belongs to one user. A card has no owner of its own: it is mutable
only by the owner of its parent deck.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.core.errors import AuthorizationError, NotFoundError
from flashdeck.models.card import Card
from flashdeck.models.deck import Deck
from flashdeck.models.user import User


async def get_owned_deck(deck_id: str, user: User, db: AsyncSession) -> Deck:
    res = await db.execute(select(Deck).where(Deck.id == deck_id))
    deck = res.scalars().first()
    if deck is None:
        raise NotFoundError(f"Deck {deck_id} does not exist", code="deck_not_found")
    if deck.user_id != user.id:
        raise AuthorizationError(f"Deck {deck_id} is not owned by {user.id}")
    return deck


async def get_owned_card(card_id: str, user: User, db: AsyncSession) -> Card:
    q = (
        select(Card, Deck.user_id)
        .outerjoin(Deck, Card.deck_id == Deck.id)
        .where(Card.id == card_id)
    )
    row = (await db.execute(q)).first()
    if row is None:
        raise NotFoundError(f"Card {card_id} does not exist", code="card_not_found")
    card, owner_id = row
    if owner_id != user.id:
        raise AuthorizationError(f"Card {card_id} belongs to a deck not owned by {user.id}")
    return card

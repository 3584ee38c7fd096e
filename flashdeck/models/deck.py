from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from flashdeck.core.database import Base
from flashdeck.core.utils import generate_uuid, utc_now

TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000


class Deck(Base):
    __tablename__ = "decks"

    id = Column(String, primary_key=True, default=generate_uuid)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    description = Column(Text, nullable=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    user = relationship("User", back_populates="decks")
    cards = relationship(
        "Card",
        back_populates="deck",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Card.created_at",
    )

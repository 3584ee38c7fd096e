from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from flashdeck.core.database import Base
from flashdeck.core.utils import generate_uuid, utc_now

SIDE_MAX_LENGTH = 1000


class Card(Base):
    __tablename__ = "cards"

    id = Column(String, primary_key=True, default=generate_uuid)
    deck_id = Column(String, ForeignKey("decks.id", ondelete="CASCADE"), nullable=False, index=True)
    front_side = Column(Text, nullable=False)
    back_side = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    deck = relationship("Deck", back_populates="cards")

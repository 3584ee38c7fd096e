from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from flashdeck.core.database import Base
from flashdeck.core.utils import generate_uuid, utc_now


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=generate_uuid)
    email = Column(String, unique=True, nullable=False)
    password = Column(String, nullable=False)
    full_name = Column(String, nullable=True)
    # comma separated entitlement names, e.g. "ai_deck"
    features = Column(String, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), default=utc_now)

    decks = relationship("Deck", back_populates="user", cascade="all, delete-orphan")

    @property
    def feature_list(self) -> list[str]:
        return [f.strip() for f in (self.features or "").split(",") if f.strip()]

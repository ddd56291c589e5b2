from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from salesintel.core.database import Base, utcnow


class Competitor(Base):
    __tablename__ = "competitors"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String, nullable=False, index=True)
    category = Column(String, nullable=False)
    website = Column(String, nullable=True)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    pricing = relationship(
        "CompetitorPricing",
        back_populates="competitor",
        passive_deletes=True,
    )

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from salesintel.core.database import Base, utcnow


class Product(Base):
    __tablename__ = "products"

    __table_args__ = (
        CheckConstraint("our_price IS NULL OR our_price >= 0", name="ck_our_price_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String, nullable=False, index=True)
    category = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    # what we charge; optional until pricing is set
    our_price = Column(Numeric(10, 2), nullable=True)
    currency = Column(String, nullable=False, default="USD")

    created_at = Column(DateTime, default=utcnow, nullable=False)

    competitor_pricing = relationship(
        "CompetitorPricing",
        back_populates="product",
        passive_deletes=True,
    )

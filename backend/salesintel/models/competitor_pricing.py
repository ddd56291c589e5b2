from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from salesintel.core.database import Base, utcnow


class CompetitorPricing(Base):
    __tablename__ = "competitor_pricing"

    __table_args__ = (
        # one current price per competitor/product pair; the upsert relies on it
        UniqueConstraint("competitor_id", "product_id", name="uq_competitor_pricing_pair"),
        CheckConstraint("price >= 0", name="ck_price_non_negative"),
        Index("ix_competitor_pricing_updated_at", "updated_at"),
    )

    id = Column(Integer, primary_key=True, index=True)

    competitor_id = Column(
        Integer,
        ForeignKey("competitors.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    price = Column(Numeric(10, 2), nullable=False)
    currency = Column(String, nullable=False, default="USD")
    notes = Column(Text, nullable=True)

    updated_by = Column(Integer, ForeignKey("users.id"), nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    competitor = relationship("Competitor", back_populates="pricing")
    product = relationship("Product", back_populates="competitor_pricing")
    updated_by_user = relationship("User")

    history = relationship(
        "PriceHistory",
        back_populates="competitor_pricing",
        passive_deletes=True,
    )

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric
from sqlalchemy.orm import relationship

from salesintel.core.database import Base, utcnow


class PriceHistory(Base):
    """One row per price change of a CompetitorPricing record. Never updated."""

    __tablename__ = "price_history"

    id = Column(Integer, primary_key=True, index=True)

    competitor_pricing_id = Column(
        Integer,
        ForeignKey("competitor_pricing.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # change details
    old_price = Column(Numeric(10, 2), nullable=False)
    new_price = Column(Numeric(10, 2), nullable=False)
    # null when the old price was zero
    change_percentage = Column(Numeric(14, 2), nullable=True)

    updated_by = Column(Integer, ForeignKey("users.id"), nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    competitor_pricing = relationship("CompetitorPricing", back_populates="history")
    updated_by_user = relationship("User")

# backend/salesintel/repositories/pricing_repository.py

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload

from salesintel.core.database import utcnow
from salesintel.core.errors import StorageError
from salesintel.models.competitor import Competitor
from salesintel.models.competitor_pricing import CompetitorPricing
from salesintel.models.price_history import PriceHistory
from salesintel.models.product import Product
from salesintel.repositories.base import SessionRepository


class DuplicatePricingError(StorageError):
    """Another writer already holds the pricing row for this pair."""

    error_code = "DUPLICATE_PRICING"


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class PricingRepository(SessionRepository):
    """
    Data access for competitor pricing and its price history.

    Write methods only flush; callers group them with ``transaction()``.
    """

    # ---------- LOOKUPS ----------

    def competitor_exists(self, competitor_id: int) -> bool:
        return self.db.get(Competitor, competitor_id) is not None

    def product_exists(self, product_id: int) -> bool:
        return self.db.get(Product, product_id) is not None

    def find_current_pricing(
        self,
        competitor_id: int,
        product_id: int,
        *,
        for_update: bool = False,
    ) -> Optional[CompetitorPricing]:
        q = self.db.query(CompetitorPricing).filter(
            CompetitorPricing.competitor_id == competitor_id,
            CompetitorPricing.product_id == product_id,
        )
        if for_update:
            q = q.with_for_update()
        return q.first()

    def get_pricing(self, pricing_id: int) -> Optional[CompetitorPricing]:
        return (
            self._enriched_query()
            .filter(CompetitorPricing.id == pricing_id)
            .first()
        )

    # ---------- WRITES ----------

    def insert_pricing(self, **fields) -> CompetitorPricing:
        now = utcnow()
        record = CompetitorPricing(**fields)
        record.created_at = now
        record.updated_at = now

        # savepoint: a lost race must not poison the caller's transaction
        try:
            with self.db.begin_nested():
                self.db.add(record)
        except IntegrityError as exc:
            if self.find_current_pricing(fields["competitor_id"], fields["product_id"]) is not None:
                raise DuplicatePricingError(
                    "Pricing already exists for this competitor and product"
                ) from exc
            raise StorageError("Could not insert pricing") from exc

        return record

    def update_pricing(self, pricing_id: int, **fields) -> Optional[CompetitorPricing]:
        record = self.db.get(CompetitorPricing, pricing_id)
        if record is None:
            return None

        for k, v in fields.items():
            setattr(record, k, v)
        record.updated_at = utcnow()

        self.db.flush()
        return record

    def insert_price_history(self, **entry) -> PriceHistory:
        history = PriceHistory(**entry)
        history.created_at = utcnow()
        self.db.add(history)
        self.db.flush()
        return history

    def delete_pricing(self, pricing_id: int) -> bool:
        # history rows go with it through ON DELETE CASCADE
        result = self.db.execute(
            delete(CompetitorPricing).where(CompetitorPricing.id == pricing_id)
        )
        return (result.rowcount or 0) > 0

    # ---------- LISTINGS ----------

    def _enriched_query(self):
        return self.db.query(CompetitorPricing).options(
            joinedload(CompetitorPricing.competitor, innerjoin=True),
            joinedload(CompetitorPricing.product, innerjoin=True),
            joinedload(CompetitorPricing.updated_by_user, innerjoin=True),
        )

    def list_pricing_filtered(
        self,
        competitor_id: Optional[int] = None,
        product_id: Optional[int] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[CompetitorPricing]:
        q = self._enriched_query()

        if competitor_id is not None:
            q = q.filter(CompetitorPricing.competitor_id == competitor_id)
        if product_id is not None:
            q = q.filter(CompetitorPricing.product_id == product_id)
        if start_date is not None:
            q = q.filter(CompetitorPricing.updated_at >= _naive_utc(start_date))
        if end_date is not None:
            q = q.filter(CompetitorPricing.updated_at <= _naive_utc(end_date))

        return q.order_by(
            CompetitorPricing.updated_at.desc(),
            CompetitorPricing.id.desc(),
        ).all()

    def list_price_history(self, competitor_pricing_id: int) -> List[PriceHistory]:
        return (
            self.db.query(PriceHistory)
            .options(joinedload(PriceHistory.updated_by_user, innerjoin=True))
            .filter(PriceHistory.competitor_pricing_id == competitor_pricing_id)
            .order_by(PriceHistory.created_at.desc(), PriceHistory.id.desc())
            .all()
        )

    # ---------- AGGREGATES ----------

    def count_competitors(self) -> int:
        return self.db.query(func.count(Competitor.id)).scalar() or 0

    def count_products(self) -> int:
        return self.db.query(func.count(Product.id)).scalar() or 0

    def price_pairs_with_our_price(self):
        """(competitor price, our price) for products that carry our_price."""
        return (
            self.db.query(CompetitorPricing.price, Product.our_price)
            .join(Product, CompetitorPricing.product_id == Product.id)
            .filter(Product.our_price.isnot(None))
            .all()
        )

    def price_points_since(self, since: datetime):
        return (
            self.db.query(
                CompetitorPricing.updated_at,
                CompetitorPricing.price,
                Competitor.name,
                Product.name,
            )
            .join(Competitor, CompetitorPricing.competitor_id == Competitor.id)
            .join(Product, CompetitorPricing.product_id == Product.id)
            .filter(CompetitorPricing.updated_at >= _naive_utc(since))
            .order_by(CompetitorPricing.updated_at.asc(), CompetitorPricing.id.asc())
            .all()
        )

    def top_competitors(self, limit: int):
        price_count = func.count(CompetitorPricing.id)
        return (
            self.db.query(
                Competitor.id,
                Competitor.name,
                Competitor.category,
                func.avg(CompetitorPricing.price),
                price_count,
            )
            .outerjoin(CompetitorPricing, Competitor.id == CompetitorPricing.competitor_id)
            .group_by(Competitor.id, Competitor.name, Competitor.category)
            .order_by(price_count.desc(), Competitor.name.asc())
            .limit(limit)
            .all()
        )

# backend/salesintel/services/pricing_upsert.py

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from salesintel.core.errors import NotFoundError, StorageError
from salesintel.models.competitor_pricing import CompetitorPricing
from salesintel.models.price_history import PriceHistory
from salesintel.repositories.pricing_repository import DuplicatePricingError, PricingRepository
from salesintel.services.price_math import (
    PriceInput,
    compute_change_percentage,
    normalize_price,
    prices_differ,
    to_cents,
)

logger = logging.getLogger(__name__)


@dataclass
class PriceObservation:
    competitor_id: int
    product_id: int
    price: PriceInput
    currency: str = "USD"
    notes: Optional[str] = None


@dataclass
class UpsertResult:
    pricing: CompetitorPricing
    created: bool
    history: Optional[PriceHistory] = None


class PricingUpsertService:
    """
    Records a competitor price observation.

    The first observation for a (competitor, product) pair inserts the
    pricing record. Later observations overwrite it, and a PriceHistory row
    is appended whenever the price itself moved. Lookup, write and history
    run in one transaction; the pricing row is locked while it is read so
    concurrent submissions cannot both compute a delta from the same old
    price.
    """

    def __init__(self, repo: PricingRepository):
        self.repo = repo

    def upsert(self, observation: PriceObservation, acting_user_id: int) -> UpsertResult:
        price = normalize_price(observation.price)
        currency = (observation.currency or "").strip() or "USD"
        cid = observation.competitor_id
        pid = observation.product_id

        with self.repo.transaction():
            if not self.repo.competitor_exists(cid):
                raise NotFoundError(f"Competitor {cid} not found")
            if not self.repo.product_exists(pid):
                raise NotFoundError(f"Product {pid} not found")

            existing = self.repo.find_current_pricing(cid, pid, for_update=True)

            if existing is None:
                try:
                    record = self.repo.insert_pricing(
                        competitor_id=cid,
                        product_id=pid,
                        price=price,
                        currency=currency,
                        notes=observation.notes,
                        updated_by=acting_user_id,
                    )
                except DuplicatePricingError:
                    logger.info(
                        "Concurrent insert for competitor=%s product=%s, applying as update",
                        cid,
                        pid,
                    )
                    existing = self.repo.find_current_pricing(cid, pid, for_update=True)
                    if existing is None:
                        raise StorageError("Pricing row vanished during upsert")
                else:
                    logger.info(
                        "Pricing created id=%s competitor=%s product=%s price=%s by user=%s",
                        record.id,
                        cid,
                        pid,
                        price,
                        acting_user_id,
                    )
                    return UpsertResult(pricing=record, created=True)

            return self._apply_update(
                existing,
                price=price,
                currency=currency,
                notes=observation.notes,
                acting_user_id=acting_user_id,
            )

    def _apply_update(
        self,
        existing: CompetitorPricing,
        *,
        price: Decimal,
        currency: str,
        notes: Optional[str],
        acting_user_id: int,
    ) -> UpsertResult:
        # capture before the update overwrites the attribute
        old_price = to_cents(existing.price)

        updated = self.repo.update_pricing(
            existing.id,
            price=price,
            currency=currency,
            notes=notes,
            updated_by=acting_user_id,
        )
        if updated is None:
            raise NotFoundError(f"Pricing entry {existing.id} not found")

        history = None
        if prices_differ(old_price, price):
            history = self.repo.insert_price_history(
                competitor_pricing_id=updated.id,
                old_price=old_price,
                new_price=price,
                change_percentage=compute_change_percentage(old_price, price),
                updated_by=acting_user_id,
            )
            logger.info(
                "Price change pricing=%s %s -> %s (%s%%) by user=%s",
                updated.id,
                old_price,
                price,
                history.change_percentage,
                acting_user_id,
            )
        else:
            logger.debug("Pricing %s updated without price change", updated.id)

        return UpsertResult(pricing=updated, created=False, history=history)

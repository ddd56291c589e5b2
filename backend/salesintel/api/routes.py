# backend/salesintel/api/routes.py

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from salesintel.api.dependencies import get_pricing_repository, get_upsert_service
from salesintel.api.deps_auth import CurrentUser, get_current_user, require_manager
from salesintel.api.schemas import (
    EnrichedPricingOut,
    PriceHistoryOut,
    PricingIn,
    PricingOut,
)
from salesintel.core.errors import NotFoundError
from salesintel.repositories.pricing_repository import PricingRepository
from salesintel.services.pricing_upsert import PriceObservation, PricingUpsertService

router = APIRouter()

logger = logging.getLogger(__name__)


# ---------- COMPETITOR PRICING (any authenticated user can read) ----------

@router.get("/competitor-pricing", response_model=List[EnrichedPricingOut])
def list_competitor_pricing(
    competitor_id: Optional[int] = Query(None, alias="competitorId"),
    product_id: Optional[int] = Query(None, alias="productId"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    repo: PricingRepository = Depends(get_pricing_repository),
    _user: CurrentUser = Depends(get_current_user),
):
    return repo.list_pricing_filtered(
        competitor_id=competitor_id,
        product_id=product_id,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("/competitor-pricing/{pricing_id}", response_model=EnrichedPricingOut)
def get_competitor_pricing(
    pricing_id: int,
    repo: PricingRepository = Depends(get_pricing_repository),
    _user: CurrentUser = Depends(get_current_user),
):
    pricing = repo.get_pricing(pricing_id)
    if pricing is None:
        raise NotFoundError("Pricing entry not found")
    return pricing


# ---------- COMPETITOR PRICING (any authenticated user can submit) ----------

@router.post(
    "/competitor-pricing",
    response_model=PricingOut,
    status_code=status.HTTP_201_CREATED,
)
def submit_competitor_pricing(
    payload: PricingIn,
    response: Response,
    service: PricingUpsertService = Depends(get_upsert_service),
    user: CurrentUser = Depends(get_current_user),
):
    result = service.upsert(
        PriceObservation(
            competitor_id=payload.competitor_id,
            product_id=payload.product_id,
            price=payload.price,
            currency=payload.currency or "USD",
            notes=payload.notes,
        ),
        acting_user_id=user.id,
    )

    # 201 either way; the header tells an insert from an update
    response.headers["X-Pricing-Action"] = "created" if result.created else "updated"
    return result.pricing


# ---------- COMPETITOR PRICING (admin + sales manager can delete) ----------

@router.delete("/competitor-pricing/{pricing_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_competitor_pricing(
    pricing_id: int,
    repo: PricingRepository = Depends(get_pricing_repository),
    user: CurrentUser = Depends(require_manager),
):
    with repo.transaction():
        deleted = repo.delete_pricing(pricing_id)

    if not deleted:
        raise NotFoundError("Pricing entry not found")

    logger.info("Pricing %s deleted by user=%s", pricing_id, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------- PRICE HISTORY (any authenticated user can read) ----------

@router.get("/price-history/{competitor_pricing_id}", response_model=List[PriceHistoryOut])
def list_price_history(
    competitor_pricing_id: int,
    repo: PricingRepository = Depends(get_pricing_repository),
    _user: CurrentUser = Depends(get_current_user),
):
    return repo.list_price_history(competitor_pricing_id)

# backend/salesintel/api/catalog_routes.py

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from salesintel.api.dependencies import get_catalog_repository
from salesintel.api.deps_auth import CurrentUser, get_current_user, require_manager
from salesintel.api.schemas import (
    CompetitorIn,
    CompetitorOut,
    CompetitorUpdate,
    ProductIn,
    ProductOut,
    ProductUpdate,
)
from salesintel.core.errors import NotFoundError
from salesintel.repositories.catalog_repository import CatalogRepository

router = APIRouter()

logger = logging.getLogger(__name__)


def _changes(payload, nullable: tuple) -> dict:
    # explicit nulls only clear optional columns
    return {
        k: v
        for k, v in payload.model_dump(exclude_unset=True).items()
        if v is not None or k in nullable
    }


# ---------- COMPETITORS ----------

@router.get("/competitors", response_model=List[CompetitorOut])
def list_competitors(
    repo: CatalogRepository = Depends(get_catalog_repository),
    _user: CurrentUser = Depends(get_current_user),
):
    return repo.list_competitors()


@router.post("/competitors", response_model=CompetitorOut, status_code=status.HTTP_201_CREATED)
def create_competitor(
    payload: CompetitorIn,
    repo: CatalogRepository = Depends(get_catalog_repository),
    user: CurrentUser = Depends(require_manager),
):
    with repo.transaction():
        c = repo.create_competitor(
            name=payload.name.strip(),
            category=payload.category.strip(),
            website=payload.website,
            description=payload.description,
        )
    logger.info("Competitor %s created by user=%s", c.id, user.id)
    return c


@router.put("/competitors/{competitor_id}", response_model=CompetitorOut)
def update_competitor(
    competitor_id: int,
    payload: CompetitorUpdate,
    repo: CatalogRepository = Depends(get_catalog_repository),
    _user: CurrentUser = Depends(require_manager),
):
    with repo.transaction():
        c = repo.update_competitor(
            competitor_id, **_changes(payload, ("website", "description"))
        )
    if c is None:
        raise NotFoundError("Competitor not found")
    return c


@router.delete("/competitors/{competitor_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_competitor(
    competitor_id: int,
    repo: CatalogRepository = Depends(get_catalog_repository),
    user: CurrentUser = Depends(require_manager),
):
    # pricing and its history cascade
    with repo.transaction():
        deleted = repo.delete_competitor(competitor_id)
    if not deleted:
        raise NotFoundError("Competitor not found")

    logger.info("Competitor %s deleted by user=%s", competitor_id, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------- PRODUCTS ----------

@router.get("/products", response_model=List[ProductOut])
def list_products(
    repo: CatalogRepository = Depends(get_catalog_repository),
    _user: CurrentUser = Depends(get_current_user),
):
    return repo.list_products()


@router.post("/products", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductIn,
    repo: CatalogRepository = Depends(get_catalog_repository),
    user: CurrentUser = Depends(require_manager),
):
    with repo.transaction():
        p = repo.create_product(
            name=payload.name.strip(),
            category=payload.category.strip(),
            description=payload.description,
            our_price=payload.our_price,
            currency=payload.currency.strip() or "USD",
        )
    logger.info("Product %s created by user=%s", p.id, user.id)
    return p


@router.put("/products/{product_id}", response_model=ProductOut)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    repo: CatalogRepository = Depends(get_catalog_repository),
    _user: CurrentUser = Depends(require_manager),
):
    changes = _changes(payload, ("description", "our_price"))
    if "currency" in changes:
        changes["currency"] = changes["currency"].strip() or "USD"

    with repo.transaction():
        p = repo.update_product(product_id, **changes)
    if p is None:
        raise NotFoundError("Product not found")
    return p


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int,
    repo: CatalogRepository = Depends(get_catalog_repository),
    user: CurrentUser = Depends(require_manager),
):
    with repo.transaction():
        deleted = repo.delete_product(product_id)
    if not deleted:
        raise NotFoundError("Product not found")

    logger.info("Product %s deleted by user=%s", product_id, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# backend/salesintel/api/dependencies.py
#
# Per-request construction of repositories and services. Routes depend on
# these factories so tests can swap any layer through dependency_overrides.

from fastapi import Depends
from sqlalchemy.orm import Session

from salesintel.api.deps_auth import get_db
from salesintel.repositories.catalog_repository import CatalogRepository
from salesintel.repositories.pricing_repository import PricingRepository
from salesintel.services.analytics import AnalyticsService
from salesintel.services.pricing_upsert import PricingUpsertService


def get_pricing_repository(db: Session = Depends(get_db)) -> PricingRepository:
    return PricingRepository(db)


def get_catalog_repository(db: Session = Depends(get_db)) -> CatalogRepository:
    return CatalogRepository(db)


def get_upsert_service(
    repo: PricingRepository = Depends(get_pricing_repository),
) -> PricingUpsertService:
    return PricingUpsertService(repo)


def get_analytics_service(
    repo: PricingRepository = Depends(get_pricing_repository),
) -> AnalyticsService:
    return AnalyticsService(repo)

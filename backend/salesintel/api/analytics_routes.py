# backend/salesintel/api/analytics_routes.py

from typing import List

from fastapi import APIRouter, Depends, Query

from salesintel.api.dependencies import get_analytics_service
from salesintel.api.deps_auth import CurrentUser, get_current_user
from salesintel.api.schemas import KpiOut, PriceTrendPoint, TopCompetitorOut
from salesintel.services.analytics import AnalyticsService

router = APIRouter()


@router.get("/kpi", response_model=KpiOut)
def kpi(
    service: AnalyticsService = Depends(get_analytics_service),
    _user: CurrentUser = Depends(get_current_user),
):
    return service.kpi()


@router.get("/price-trends", response_model=List[PriceTrendPoint])
def price_trends(
    days: int = Query(30, ge=1, le=3650),
    service: AnalyticsService = Depends(get_analytics_service),
    _user: CurrentUser = Depends(get_current_user),
):
    return service.price_trends(days)


@router.get("/top-competitors", response_model=List[TopCompetitorOut])
def top_competitors(
    limit: int = Query(5, ge=1, le=100),
    service: AnalyticsService = Depends(get_analytics_service),
    _user: CurrentUser = Depends(get_current_user),
):
    return service.top_competitors(limit)

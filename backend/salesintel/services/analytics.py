from datetime import timedelta
from decimal import Decimal
from typing import Any, Dict, List

from salesintel.core.database import utcnow
from salesintel.repositories.pricing_repository import PricingRepository
from salesintel.services.price_math import CENTS, to_cents


def average_price_difference(pairs) -> Decimal:
    """Mean of (competitor - ours) / ours * 100 over products we price above zero."""
    diffs = []
    for competitor_price, our_price in pairs:
        ours = to_cents(our_price)
        if ours <= 0:
            continue
        diffs.append((to_cents(competitor_price) - ours) / ours * 100)

    if not diffs:
        return Decimal("0.00")
    return (sum(diffs) / len(diffs)).quantize(CENTS)


class AnalyticsService:
    def __init__(self, repo: PricingRepository):
        self.repo = repo

    def kpi(self) -> Dict[str, Any]:
        return {
            "competitors_tracked": self.repo.count_competitors(),
            "products_monitored": self.repo.count_products(),
            "avg_price_difference": average_price_difference(self.repo.price_pairs_with_our_price()),
            # needs sales volume data we do not store
            "market_share": None,
        }

    def price_trends(self, days: int) -> List[Dict[str, Any]]:
        since = utcnow() - timedelta(days=days)
        return [
            {"date": updated_at, "price": to_cents(price), "competitor": competitor, "product": product}
            for updated_at, price, competitor, product in self.repo.price_points_since(since)
        ]

    def top_competitors(self, limit: int) -> List[Dict[str, Any]]:
        rows = []
        for cid, name, category, avg_price, price_count in self.repo.top_competitors(limit):
            rows.append(
                {
                    "id": cid,
                    "name": name,
                    "category": category,
                    "avg_price": to_cents(avg_price) if avg_price is not None else None,
                    "price_count": int(price_count or 0),
                }
            )
        return rows

# backend/salesintel/api/schemas.py
#
# Request/response models. Wire names are camelCase (competitorId, ...),
# Python attributes stay snake_case.

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from salesintel.core.errors import ValidationError
from salesintel.services.price_math import normalize_price


def _parse_price(value):
    try:
        return normalize_price(value)
    except ValidationError as exc:
        raise ValueError(exc.message) from exc


# incoming prices: decimal string or number, >= 0, at most 2dp
PriceField = Annotated[Decimal, BeforeValidator(_parse_price)]

# outgoing prices: fixed 2dp strings, e.g. "49.99"
Money = Annotated[Decimal, PlainSerializer(lambda v: f"{v:.2f}", return_type=str)]

Role = Literal["admin", "sales_manager", "sales_rep"]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---------- USERS / AUTH ----------

class UserOut(CamelModel):
    id: int
    username: str
    email: str
    full_name: str
    role: Role
    created_at: Optional[datetime] = None


class RegisterIn(CamelModel):
    username: str = Field(min_length=3, max_length=64)
    password: str = Field(min_length=6)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    full_name: str = Field(min_length=1)


class LoginIn(CamelModel):
    username: str
    password: str


class LoginOut(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class RoleUpdate(CamelModel):
    role: Role


# ---------- CATALOG ----------

class CompetitorIn(CamelModel):
    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    website: Optional[str] = None
    description: Optional[str] = None


class CompetitorUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1)
    website: Optional[str] = None
    description: Optional[str] = None


class CompetitorOut(CamelModel):
    id: int
    name: str
    category: str
    website: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None


class ProductIn(CamelModel):
    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    description: Optional[str] = None
    our_price: Optional[PriceField] = None
    currency: str = "USD"


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    our_price: Optional[PriceField] = None
    currency: Optional[str] = None


class ProductOut(CamelModel):
    id: int
    name: str
    category: str
    description: Optional[str] = None
    our_price: Optional[Money] = None
    currency: str
    created_at: Optional[datetime] = None


# ---------- PRICING ----------

class PricingIn(CamelModel):
    competitor_id: int
    product_id: int
    price: PriceField
    currency: Optional[str] = "USD"
    notes: Optional[str] = None


class PricingOut(CamelModel):
    id: int
    competitor_id: int
    product_id: int
    price: Money
    currency: str
    notes: Optional[str] = None
    updated_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EnrichedPricingOut(PricingOut):
    competitor: CompetitorOut
    product: ProductOut
    updated_by_user: UserOut


class PriceHistoryOut(CamelModel):
    id: int
    competitor_pricing_id: int
    old_price: Money
    new_price: Money
    change_percentage: Optional[Money] = None
    updated_by: int
    created_at: Optional[datetime] = None
    updated_by_user: UserOut


# ---------- ANALYTICS ----------

class KpiOut(CamelModel):
    competitors_tracked: int
    products_monitored: int
    avg_price_difference: float
    market_share: Optional[float] = None


class PriceTrendPoint(CamelModel):
    date: datetime
    price: Money
    competitor: str
    product: str


class TopCompetitorOut(CamelModel):
    id: int
    name: str
    category: str
    avg_price: Optional[Money] = None
    price_count: int

# backend/salesintel/repositories/catalog_repository.py

from typing import List, Optional

from sqlalchemy import delete, func
from sqlalchemy.exc import IntegrityError

from salesintel.core.errors import StorageError, ValidationError
from salesintel.models.competitor import Competitor
from salesintel.models.product import Product
from salesintel.models.user import User
from salesintel.repositories.base import SessionRepository


class CatalogRepository(SessionRepository):
    """Competitors, products and users. Writes flush; callers commit."""

    # ---------- COMPETITORS ----------

    def list_competitors(self) -> List[Competitor]:
        return self.db.query(Competitor).order_by(Competitor.name.asc(), Competitor.id.asc()).all()

    def get_competitor(self, competitor_id: int) -> Optional[Competitor]:
        return self.db.get(Competitor, competitor_id)

    def create_competitor(self, **fields) -> Competitor:
        c = Competitor(**fields)
        self.db.add(c)
        self.db.flush()
        return c

    def update_competitor(self, competitor_id: int, **fields) -> Optional[Competitor]:
        c = self.get_competitor(competitor_id)
        if c is None:
            return None
        for k, v in fields.items():
            setattr(c, k, v)
        self.db.flush()
        return c

    def delete_competitor(self, competitor_id: int) -> bool:
        result = self.db.execute(delete(Competitor).where(Competitor.id == competitor_id))
        return (result.rowcount or 0) > 0

    # ---------- PRODUCTS ----------

    def list_products(self) -> List[Product]:
        return self.db.query(Product).order_by(Product.name.asc(), Product.id.asc()).all()

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.db.get(Product, product_id)

    def create_product(self, **fields) -> Product:
        p = Product(**fields)
        self.db.add(p)
        self.db.flush()
        return p

    def update_product(self, product_id: int, **fields) -> Optional[Product]:
        p = self.get_product(product_id)
        if p is None:
            return None
        for k, v in fields.items():
            setattr(p, k, v)
        self.db.flush()
        return p

    def delete_product(self, product_id: int) -> bool:
        result = self.db.execute(delete(Product).where(Product.id == product_id))
        return (result.rowcount or 0) > 0

    # ---------- USERS ----------

    def list_users(self) -> List[User]:
        return self.db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(func.lower(User.email) == email.lower()).first()

    def count_users(self) -> int:
        return self.db.query(func.count(User.id)).scalar() or 0

    def create_user(self, **fields) -> User:
        u = User(**fields)

        # savepoint: a concurrent signup may claim the username or email first
        try:
            with self.db.begin_nested():
                self.db.add(u)
        except IntegrityError as exc:
            if self.get_user_by_username(fields.get("username", "")) is not None:
                raise ValidationError("Username already exists") from exc
            if self.get_user_by_email(fields.get("email", "")) is not None:
                raise ValidationError("Email already registered") from exc
            raise StorageError("Could not create user") from exc

        return u

    def update_user_role(self, user_id: int, role: str) -> Optional[User]:
        u = self.get_user(user_id)
        if u is None:
            return None
        u.role = role
        self.db.flush()
        return u

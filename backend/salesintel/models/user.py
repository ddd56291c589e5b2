from sqlalchemy import Column, DateTime, Integer, String

from salesintel.core.database import Base, utcnow

ROLES = ("admin", "sales_manager", "sales_rep")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, nullable=False)

    # "admin" | "sales_manager" | "sales_rep"
    role = Column(String, nullable=False, default="sales_rep")

    password_hash = Column(String, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)

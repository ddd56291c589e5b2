# backend/salesintel/api/deps_auth.py

from typing import Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel
from sqlalchemy.orm import Session

from salesintel.core.database import SessionLocal
from salesintel.core.errors import AuthorizationError
from salesintel.core.security import decode_token
from salesintel.models.user import User as UserModel

# Only used by Swagger UI for the "Authorize" flow.
# It does NOT affect normal Authorization: Bearer <token> parsing.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")


class CurrentUser(BaseModel):
    id: int
    username: str
    full_name: str
    email: str
    role: str  # "admin" | "sales_manager" | "sales_rep"


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> CurrentUser:
    cred_exc = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Authentication required",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_token(token)
    except ValueError:
        raise cred_exc

    # sub is the user id
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise cred_exc

    user = db.get(UserModel, user_id)
    if not user:
        raise cred_exc

    return CurrentUser(
        id=user.id,
        username=user.username,
        full_name=user.full_name,
        email=user.email,
        role=user.role,
    )


def require_roles(*roles: str) -> Callable[..., CurrentUser]:
    def guard(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in roles:
            raise AuthorizationError("Insufficient permissions")
        return user

    return guard


require_admin = require_roles("admin")
require_manager = require_roles("admin", "sales_manager")

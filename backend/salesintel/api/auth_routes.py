# backend/salesintel/api/auth_routes.py

import logging

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm

from salesintel.api.dependencies import get_catalog_repository
from salesintel.api.deps_auth import CurrentUser, get_current_user
from salesintel.api.schemas import LoginIn, LoginOut, RegisterIn, UserOut
from salesintel.core.errors import AuthenticationError, ValidationError
from salesintel.core.security import create_access_token, hash_password, verify_password
from salesintel.models.user import User
from salesintel.repositories.catalog_repository import CatalogRepository

router = APIRouter()

logger = logging.getLogger(__name__)


def _issue_token(user: User) -> LoginOut:
    token = create_access_token({"sub": str(user.id), "role": user.role})
    return LoginOut(access_token=token, user=UserOut.model_validate(user))


def _authenticate(repo: CatalogRepository, username: str, password: str) -> User:
    user = repo.get_user_by_username(username.strip())
    if not user or not verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid username or password")
    return user


@router.post("/register", response_model=LoginOut, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterIn, repo: CatalogRepository = Depends(get_catalog_repository)):
    username = payload.username.strip()
    email = payload.email.strip()

    with repo.transaction():
        if repo.get_user_by_username(username):
            raise ValidationError("Username already exists")
        if repo.get_user_by_email(email):
            raise ValidationError("Email already registered")

        # self-registration always starts as sales_rep; admins promote
        user = repo.create_user(
            username=username,
            email=email,
            full_name=payload.full_name.strip(),
            role="sales_rep",
            password_hash=hash_password(payload.password),
        )

    logger.info("Registered user id=%s username=%s", user.id, user.username)
    return _issue_token(user)


# JSON login
@router.post("/login", response_model=LoginOut)
def login(payload: LoginIn, repo: CatalogRepository = Depends(get_catalog_repository)):
    return _issue_token(_authenticate(repo, payload.username, payload.password))


# OAuth2 form endpoint (Swagger Authorize uses this)
@router.post("/token", response_model=LoginOut)
def token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    repo: CatalogRepository = Depends(get_catalog_repository),
):
    return _issue_token(_authenticate(repo, form_data.username or "", form_data.password or ""))


@router.get("/me", response_model=UserOut)
def me(
    current_user: CurrentUser = Depends(get_current_user),
    repo: CatalogRepository = Depends(get_catalog_repository),
):
    return repo.get_user(current_user.id)

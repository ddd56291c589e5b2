# backend/salesintel/api/user_routes.py

import logging
from typing import List

from fastapi import APIRouter, Depends

from salesintel.api.dependencies import get_catalog_repository
from salesintel.api.deps_auth import CurrentUser, require_admin
from salesintel.api.schemas import RoleUpdate, UserOut
from salesintel.core.errors import NotFoundError
from salesintel.repositories.catalog_repository import CatalogRepository

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get("/users", response_model=List[UserOut])
def list_users(
    repo: CatalogRepository = Depends(get_catalog_repository),
    _admin: CurrentUser = Depends(require_admin),
):
    return repo.list_users()


@router.put("/users/{user_id}/role", response_model=UserOut)
def update_user_role(
    user_id: int,
    payload: RoleUpdate,
    repo: CatalogRepository = Depends(get_catalog_repository),
    admin: CurrentUser = Depends(require_admin),
):
    with repo.transaction():
        user = repo.update_user_role(user_id, payload.role)
    if user is None:
        raise NotFoundError("User not found")

    logger.info("User %s role set to %s by admin=%s", user_id, payload.role, admin.id)
    return user

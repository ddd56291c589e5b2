# backend/salesintel/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from salesintel.api.analytics_routes import router as analytics_router
from salesintel.api.auth_routes import router as auth_router
from salesintel.api.catalog_routes import router as catalog_router
from salesintel.api.error_handlers import register_error_handlers
from salesintel.api.routes import router as pricing_router
from salesintel.api.user_routes import router as user_router
from salesintel.core.config import settings
from salesintel.core.database import SessionLocal, init_db
from salesintel.core.logging import configure_logging
from salesintel.core.seed import seed_users_if_empty

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if settings.auto_create_tables:
        init_db()

    if settings.seed_demo_users:
        db = SessionLocal()
        try:
            seed_users_if_empty(db)
        finally:
            db.close()

    logger.info("Sales Intel API started (env=%s)", settings.app_env)
    yield


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="Sales Intel API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["Authorization", "Content-Type"],
        expose_headers=["X-Pricing-Action"],
    )

    register_error_handlers(app)

    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(pricing_router, prefix="/api", tags=["pricing"])
    app.include_router(catalog_router, prefix="/api", tags=["catalog"])
    app.include_router(user_router, prefix="/api", tags=["users"])
    app.include_router(analytics_router, prefix="/api", tags=["analytics"])

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()

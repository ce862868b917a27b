import logging

from fastapi import FastAPI

from accounthub.shared.config import settings
from accounthub.shared.log import configure_logging
from accounthub.shared.db import SessionLocal, init_db
from accounthub.shared.http import install_error_handlers
from accounthub.shared.auth import BearerAuthMiddleware, get_hasher, get_token_service

# Routers Import
from accounthub.auth.api import router as auth_router
from accounthub.categories.api import router as categories_router
from accounthub.users.api import router as users_router

from accounthub.auth.service import AuthService
from accounthub.categories.service import seed_default_categories

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

TAGS_METADATA = [
    {"name": "Auth", "description": "Sign-up, sign-in, token refresh, session check, password reset"},
    {"name": "Categories", "description": "Service categories providers can pick at sign-up"},
    {"name": "Users", "description": "Basic user administration"},
    {"name": "Health", "description": "Service health"},
]

app = FastAPI(
    title="AccountHub",
    version="0.1.0",
    description="User accounts, JWT sessions and password reset.",
    openapi_tags=TAGS_METADATA,
)

install_error_handlers(app)
app.add_middleware(BearerAuthMiddleware)


@app.on_event("startup")
def _init_db():
    init_db()
    db = SessionLocal()
    try:
        if settings.SEED_CATEGORIES:
            seed_default_categories(db)
        AuthService(db, get_token_service(), get_hasher(), settings).purge_expired_reset_tokens()
    finally:
        db.close()
    logger.info("AccountHub started (env=%s)", settings.ENV)

@app.get("/healthz", tags=["Health"])
def healthz():
    return {"ok": True}

# Routers
app.include_router(auth_router)
app.include_router(categories_router)
app.include_router(users_router)


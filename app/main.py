# app/main.py
from contextlib import asynccontextmanager
import logging
import sys
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from motor.motor_asyncio import AsyncIOMotorClient

from app.core.config import Settings, settings as default_settings
from app.core.errors import register_exception_handlers
from app.core.security import PasswordHasher, TokenService
from app.database.mongo_assignment import MongoAssignmentRepository
from app.database.mongo_user import MongoUserRepository
from app.services.mail_service import WelcomeMailer
from app.routers.v1 import health
from app.routers.v1 import assignment
from app.routers.v1 import auth

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
    stream=sys.stdout,
)

DEV_SECRET = "change-me-in-production"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = AsyncIOMotorClient(settings.mongo_uri, uuidRepresentation="standard", tz_aware=True)
        db = client[settings.mongo_db_name]

        repo = MongoAssignmentRepository(db)
        await repo.ensure_indexes()
        app.state.assignment_repo = repo   # repo disponibili alle routes

        user_repo = MongoUserRepository(db)
        await user_repo.ensure_indexes()
        app.state.user_repo = user_repo

        try:
            yield
        finally:
            client.close()

    app = FastAPI(
        title="Assignment Service",
        description="Assignment, submission e autenticazione per EduPortal",
        version="1.0.0",
        lifespan=lifespan,
    )

    if settings.jwt_secret.get_secret_value() == DEV_SECRET:
        logging.getLogger("assignment.auth").warning("JWT_SECRET di sviluppo in uso: impostarla in produzione")

    # configurazione di processo, letta una sola volta all'avvio
    app.state.settings = settings
    app.state.token_service = TokenService.from_settings(settings)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.mailer = WelcomeMailer.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins, allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    register_exception_handlers(app)

    app.include_router(health.router,     prefix="/api/v1", tags=["health"])
    app.include_router(auth.router,       prefix="/api/v1", tags=["users"])
    app.include_router(assignment.router, prefix="/api/v1", tags=["assignments"])
    return app

app = create_app()

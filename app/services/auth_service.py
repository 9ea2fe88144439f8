import asyncio
import logging
import uuid
from typing import Optional, Sequence

from fastapi import Request

from app.core.deps import get_token_service
from app.core.errors import DuplicateEmail, InvalidCredentials, NotFound, Unauthorized, ValidationError
from app.core.security import PasswordHasher, TokenService
from app.database.user_repo import UserRepo
from app.schemas.context import UserContext
from app.schemas.user import LoginRequest, LoginResponse, User, UserCreate, UserRecord, normalize_email
from app.services.assignment_service import utc_now

logger = logging.getLogger("assignment.auth")

BEARER_PREFIX = "Bearer "


def create_user_id() -> str:
    return f"us-{uuid.uuid4().hex}"


class AuthService:

    @staticmethod
    async def register(data: UserCreate, repo: UserRepo, hasher: PasswordHasher) -> User:
        if not data.name or not data.email or not data.role or not data.password:
            raise ValidationError("Please fill all required fields.")

        email = normalize_email(data.email)
        if await repo.find_by_email(email) is not None:
            raise DuplicateEmail()

        # bcrypt è CPU-bound: fuori dall'event loop
        password_hash = await asyncio.to_thread(hasher.hash, data.password)
        record = UserRecord(
            id=create_user_id(),
            name=data.name,
            email=email,
            phone=data.phone,
            role=data.role,
            createdAt=utc_now(),
            passwordHash=password_hash,
        )
        await repo.create(record)
        logger.info("Registrato utente %s (%s)", record.id, record.role)
        return record.public()

    @staticmethod
    async def list_users(repo: UserRepo) -> Sequence[User]:
        users = await repo.find_all()
        if not users:
            raise NotFound("No users found")
        return users

    @staticmethod
    async def login(
        data: LoginRequest,
        repo: UserRepo,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> LoginResponse:
        """
        Stesso errore (e stesso costo) per email sconosciuta e password errata,
        così la risposta non rivela quali email sono registrate.
        """
        if not data.email or not data.password:
            raise ValidationError("Please provide email and password.")

        user = await repo.find_by_email(normalize_email(data.email))
        if user is None:
            await asyncio.to_thread(hasher.dummy_verify)
            raise InvalidCredentials()

        if not await asyncio.to_thread(hasher.verify, data.password, user.passwordHash):
            raise InvalidCredentials()

        return LoginResponse(token=tokens.issue(user), role=user.role, name=user.name)

    @staticmethod
    def authorize(authorization: Optional[str], tokens: TokenService) -> UserContext:
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            raise Unauthorized()
        token = authorization[len(BEARER_PREFIX):].strip()
        if not token:
            raise Unauthorized()
        return tokens.verify(token)

    @staticmethod
    async def get_current_user(request: Request) -> UserContext:
        """Dependency FastAPI: identità verificata per la sola richiesta corrente."""
        return AuthService.authorize(request.headers.get("Authorization"), get_token_service(request))

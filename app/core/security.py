import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError as SchemaError

from app.core.config import Settings
from app.core.errors import Unauthorized
from app.schemas.context import UserContext
from app.schemas.user import User

logger = logging.getLogger("assignment.auth")


class PasswordHasher:
    """Hash bcrypt con salt; la verifica è a tempo costante (passlib)."""

    def __init__(self, rounds: int = 10):
        self._ctx = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, raw_password: str) -> str:
        return self._ctx.hash(raw_password)

    def verify(self, raw_password: str, password_hash: str) -> bool:
        try:
            return self._ctx.verify(raw_password, password_hash)
        except ValueError:
            logger.warning("Hash password malformato in archivio")
            return False

    def dummy_verify(self) -> None:
        # stesso costo di una verify reale, per email sconosciute
        self._ctx.dummy_verify()


class TokenService:
    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = timedelta(hours=24)):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self.ttl = ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret.get_secret_value(),
            algorithm=settings.jwt_algorithm,
            ttl=timedelta(hours=settings.token_ttl_hours),
        )

    def issue(self, user: User, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": user.id,
            "role": user.role,
            "name": user.name,
            "email": user.email,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> UserContext:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except ExpiredSignatureError as e:
            logger.info("Token scaduto")
            raise Unauthorized() from e
        except JWTError as e:
            logger.info("Token non valido: %s", e)
            raise Unauthorized() from e

        try:
            return UserContext(
                user_id=payload["sub"],
                role=payload["role"],
                name=payload["name"],
                email=payload["email"],
            )
        except (KeyError, SchemaError) as e:
            logger.info("Claims mancanti o non validi nel token")
            raise Unauthorized() from e

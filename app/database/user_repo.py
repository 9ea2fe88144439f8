from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence, Optional
from app.schemas.user import User, UserRecord

class UserRepo(ABC):
    @abstractmethod
    async def create(self, user: UserRecord) -> str:
        """Inserisce un utente. Solleva DuplicateEmail se l'email è già presente."""
        raise NotImplementedError

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        """Ritorna l'utente (con hash) per email, oppure None."""
        raise NotImplementedError

    @abstractmethod
    async def find_all(self) -> Sequence[User]:
        """Tutti gli utenti, senza hash della password."""
        raise NotImplementedError

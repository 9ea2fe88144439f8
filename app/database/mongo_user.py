# app/database/mongo_user.py
from typing import Sequence, Optional, List
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from app.core.errors import DuplicateEmail
from app.database.user_repo import UserRepo
from app.schemas.user import User, UserRecord, normalize_email


class MongoUserRepository(UserRepo):
    def __init__(self, db: AsyncIOMotorDatabase):
        self.col = db["users"]

    async def create(self, user: UserRecord) -> str:
        try:
            await self.col.insert_one(user.model_dump())
        except DuplicateKeyError as e:
            # l'indice unique su email chiude la race tra due registrazioni
            raise DuplicateEmail() from e
        return user.id

    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        d = await self.col.find_one({"email": normalize_email(email)}, {"_id": 0})
        return UserRecord(**d) if d else None

    async def find_all(self) -> Sequence[User]:
        cursor = self.col.find({}, {"_id": 0, "passwordHash": 0})
        docs: List[dict] = [d async for d in cursor]
        return [User(**d) for d in docs]

    async def ensure_indexes(self):
        await self.col.create_index("email", unique=True)

# app/database/mongo_assignment.py
from datetime import datetime
from typing import Any, Iterable, Mapping, Sequence, Optional, List
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument

from app.database.assignment_repo import AssignmentRepo
from app.schemas.assignment import Assignment, Submission


class MongoAssignmentRepository(AssignmentRepo):
    def __init__(self, db: AsyncIOMotorDatabase):
        self.col = db["assignments"]

    def _from_doc(self, d: dict) -> Assignment:
        base = {k: v for k, v in d.items() if k not in {"_id"}}
        return Assignment(**base)

    async def create(self, assignment: Assignment) -> str:
        await self.col.insert_one(assignment.model_dump())
        return assignment.id

    async def _find_sorted(self, filt: dict) -> Sequence[Assignment]:
        cursor = self.col.find(filt).sort("createdAt", DESCENDING)
        docs: List[dict] = [d async for d in cursor]
        return [self._from_doc(d) for d in docs]

    async def find_all(self) -> Sequence[Assignment]:
        return await self._find_sorted({})

    async def find_by_status(self, statuses: Iterable[str]) -> Sequence[Assignment]:
        return await self._find_sorted({"status": {"$in": list(statuses)}})

    async def find_one(self, assignment_id: str) -> Optional[Assignment]:
        d = await self.col.find_one({"id": str(assignment_id)})
        return self._from_doc(d) if d else None

    async def update(self, assignment_id: str, fields: Mapping[str, Any]) -> Optional[Assignment]:
        d = await self.col.find_one_and_update(
            {"id": str(assignment_id)},
            {"$set": dict(fields)},
            return_document=ReturnDocument.AFTER,
        )
        return self._from_doc(d) if d else None

    async def delete(self, assignment_id: str) -> bool:
        # le submission sono embedded: spariscono con il documento
        res = await self.col.delete_one({"id": str(assignment_id)})
        return res.deleted_count > 0

    async def push_submission(self, assignment_id: str, submission: Submission, ts: datetime) -> bool:
        # $push atomico: niente read-modify-write dell'intero array
        res = await self.col.update_one(
            {"id": str(assignment_id)},
            {"$push": {"submissions": submission.model_dump()}, "$set": {"updatedAt": ts}},
        )
        return res.matched_count > 0

    async def mark_submission_reviewed(
        self, assignment_id: str, submission_id: str, ts: datetime
    ) -> Optional[Submission]:
        only_target = {"submissions": {"$elemMatch": {"id": str(submission_id)}}}
        d = await self.col.find_one_and_update(
            {
                "id": str(assignment_id),
                "submissions": {"$elemMatch": {"id": str(submission_id), "reviewed": False}},
            },
            {"$set": {"submissions.$.reviewed": True, "updatedAt": ts}},
            projection=only_target,
            return_document=ReturnDocument.AFTER,
        )
        if d is None:
            # già revisionata (nessuna modifica) oppure inesistente
            d = await self.col.find_one(
                {"id": str(assignment_id), "submissions.id": str(submission_id)},
                only_target,
            )
        if not d or not d.get("submissions"):
            return None
        return Submission(**d["submissions"][0])

    async def ensure_indexes(self):
        await self.col.create_index("id", unique=True)
        await self.col.create_index([("createdAt", DESCENDING)])
        await self.col.create_index([("status", ASCENDING), ("createdAt", DESCENDING)])

from datetime import datetime, timezone
import uuid
from typing import Sequence
from app.core.errors import Forbidden, NotFound, ValidationError
from app.schemas.assignment import (
    VISIBLE_STATUSES,
    Assignment,
    AssignmentCreate,
    AssignmentStatus,
    AssignmentUpdate,
)
from app.schemas.context import UserContext
from app.schemas.user import STAFF_ROLES
from app.database.assignment_repo import AssignmentRepo

# campi che non possono diventare null con un update
_NON_NULLABLE = {"title", "status"}


def create_assignment_id() -> str:
    return f"as-{uuid.uuid4().hex}"


def utc_now() -> datetime:
    ts = datetime.now(timezone.utc)
    # normalizzazione: tronca ai millisecondi (precisione di Mongo)
    return ts.replace(microsecond=(ts.microsecond // 1000) * 1000)


def require_staff(user: UserContext, action: str) -> None:
    if user.role not in STAFF_ROLES:
        raise Forbidden(f"Only admins and teachers can {action}")


class AssignmentService:

    @staticmethod
    async def create_assignment(
        data: AssignmentCreate,
        user: UserContext,
        repo: AssignmentRepo
    ) -> Assignment:
        require_staff(user, "create assignments")
        if not data.title or not data.title.strip():
            raise ValidationError("Title is required")

        ts = utc_now()
        assignment = Assignment(
            id=create_assignment_id(),
            title=data.title,
            description=data.description,
            dueDate=data.dueDate,
            status=AssignmentStatus.DRAFT,
            submissions=[],
            createdAt=ts,
            updatedAt=ts,
        )

        inserted_id = await repo.create(assignment)
        if not inserted_id:
            raise RuntimeError("Creazione assignment fallita")
        return assignment

    @staticmethod
    async def list_assignments(repo: AssignmentRepo) -> Sequence[Assignment]:
        return await repo.find_all()

    @staticmethod
    async def list_published(repo: AssignmentRepo) -> Sequence[Assignment]:
        """Vista studenti: Published e Completed, mai Draft."""
        return await repo.find_by_status(VISIBLE_STATUSES)

    @staticmethod
    async def get_assignment(assignment_id: str, repo: AssignmentRepo) -> Assignment:
        doc = await repo.find_one(assignment_id)
        if not doc:
            raise NotFound("Assignment not found")
        return doc

    @staticmethod
    async def update_assignment(
        assignment_id: str,
        data: AssignmentUpdate,
        user: UserContext,
        repo: AssignmentRepo
    ) -> Assignment:
        """
        Applica solo i campi presenti nella richiesta. Nessun vincolo sulle
        transizioni di stato: qualunque valore di AssignmentStatus è accettato.
        """
        require_staff(user, "update assignments")
        fields = {
            k: v for k, v in data.model_dump(exclude_unset=True).items()
            if not (v is None and k in _NON_NULLABLE)
        }
        if not fields:
            return await AssignmentService.get_assignment(assignment_id, repo)

        fields["updatedAt"] = utc_now()
        updated = await repo.update(assignment_id, fields)
        if not updated:
            raise NotFound("Assignment not found")
        return updated

    @staticmethod
    async def delete_assignment(assignment_id: str, user: UserContext, repo: AssignmentRepo) -> None:
        require_staff(user, "delete assignments")
        if not await repo.delete(assignment_id):
            raise NotFound("Assignment not found")

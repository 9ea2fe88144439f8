import logging
import uuid

from app.core.errors import NotFound, ValidationError
from app.database.assignment_repo import AssignmentRepo
from app.schemas.assignment import Submission, SubmissionCreate
from app.schemas.context import UserContext
from app.services.assignment_service import require_staff, utc_now

logger = logging.getLogger("assignment.submissions")


def create_submission_id() -> str:
    return f"sub-{uuid.uuid4().hex}"


class SubmissionService:

    @staticmethod
    async def submit(
        assignment_id: str,
        data: SubmissionCreate,
        user: UserContext,
        repo: AssignmentRepo
    ) -> Submission:
        """
        Aggiunge la risposta in coda alle submission dell'assignment.
        Nome ed email dello studente arrivano solo dal token verificato.
        Lo status dell'assignment non viene controllato.
        """
        if not data.answer or not data.answer.strip():
            raise ValidationError("Answer is required")

        ts = utc_now()
        submission = Submission(
            id=create_submission_id(),
            studentName=user.name,
            studentEmail=user.email,
            answer=data.answer,
            submittedAt=ts,
            reviewed=False,
        )
        if not await repo.push_submission(assignment_id, submission, ts):
            raise NotFound("Assignment not found")

        logger.info("Submission %s su %s da %s", submission.id, assignment_id, user.user_id)
        return submission

    @staticmethod
    async def mark_reviewed(
        assignment_id: str,
        submission_id: str,
        user: UserContext,
        repo: AssignmentRepo
    ) -> Submission:
        require_staff(user, "review submissions")
        submission = await repo.mark_submission_reviewed(assignment_id, submission_id, utc_now())
        if submission is None:
            if await repo.find_one(assignment_id) is None:
                raise NotFound("Assignment not found")
            raise NotFound("Submission not found")
        return submission

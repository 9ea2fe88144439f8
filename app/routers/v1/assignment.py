from typing import Annotated
from fastapi import APIRouter, Depends, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.schemas.assignment import AssignmentCreate, AssignmentUpdate, SubmissionCreate
from app.schemas.context import UserContext
from app.database.assignment_repo import AssignmentRepo
from app.core.deps import get_repository

from app.services.auth_service import AuthService
from app.services.assignment_service import AssignmentService
from app.services.submission_service import SubmissionService


router = APIRouter()

RepoDep = Annotated[AssignmentRepo, Depends(get_repository)]
UserDep = Annotated[UserContext, Depends(AuthService.get_current_user)]


@router.post("/assignments", status_code=status.HTTP_201_CREATED)
async def create_assignment_endpoint(
    assignment: AssignmentCreate,
    user: UserDep,
    repo: RepoDep,
):
    created = await AssignmentService.create_assignment(assignment, user, repo)
    location = f"/api/v1/assignments/{created.id}"
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"message": "Assignment created successfully", "assignment": jsonable_encoder(created)},
        headers={"Location": location},
    )


@router.get("/assignments")
async def list_assignments_endpoint(repo: RepoDep):
    return {"assignments": await AssignmentService.list_assignments(repo)}


# dichiarata prima di /assignments/{assignment_id}
@router.get("/assignments/published")
async def list_published_endpoint(repo: RepoDep):
    return {"assignments": await AssignmentService.list_published(repo)}


@router.get("/assignments/{assignment_id}")
async def get_assignment_endpoint(assignment_id: str, repo: RepoDep):
    return {"assignment": await AssignmentService.get_assignment(assignment_id, repo)}


@router.put("/assignments/{assignment_id}")
async def update_assignment_endpoint(
    assignment_id: str,
    data: AssignmentUpdate,
    user: UserDep,
    repo: RepoDep,
):
    updated = await AssignmentService.update_assignment(assignment_id, data, user, repo)
    return {"message": "Assignment updated successfully", "assignment": updated}


@router.delete("/assignments/{assignment_id}")
async def delete_assignment_endpoint(
    assignment_id: str,
    user: UserDep,
    repo: RepoDep,
):
    await AssignmentService.delete_assignment(assignment_id, user, repo)
    return {"message": "Assignment deleted successfully"}


@router.post("/assignments/{assignment_id}/submit", status_code=status.HTTP_201_CREATED)
async def submit_answer_endpoint(
    assignment_id: str,
    data: SubmissionCreate,
    user: UserDep,
    repo: RepoDep,
):
    submission = await SubmissionService.submit(assignment_id, data, user, repo)
    return {"message": "Submitted successfully", "submission": submission}


@router.put("/assignments/{assignment_id}/review/{submission_id}")
async def mark_reviewed_endpoint(
    assignment_id: str,
    submission_id: str,
    user: UserDep,
    repo: RepoDep,
):
    submission = await SubmissionService.mark_reviewed(assignment_id, submission_id, user, repo)
    return {"message": "Submission marked as reviewed successfully", "submission": submission}

# test/pytest/test_assignment.py
import asyncio

import pytest
from datetime import datetime, timedelta, timezone

from app.core.errors import Forbidden, NotFound, ValidationError
from app.services.assignment_service import AssignmentService
from app.schemas.assignment import AssignmentCreate, AssignmentUpdate


def _make_create(**overrides):
    future = datetime.now(timezone.utc) + timedelta(days=7)
    base = dict(
        title="Compito",
        description="Desc",
        dueDate=future,
    )
    base.update(overrides)
    return AssignmentCreate(**base)


async def _create_spaced(repo, user, *titles):
    """Crea assignment con createdAt distinti (la precisione è al millisecondo)."""
    created = []
    for title in titles:
        created.append(await AssignmentService.create_assignment(_make_create(title=title), user, repo))
        await asyncio.sleep(0.002)
    return created


# --------------------------------- Tests --------------------------------------
@pytest.mark.asyncio
async def test_create_requires_staff(repo, student):
    with pytest.raises(Forbidden):
        await AssignmentService.create_assignment(_make_create(), student, repo)

@pytest.mark.asyncio
async def test_create_ok_starts_as_draft(repo, teacher):
    created = await AssignmentService.create_assignment(_make_create(), teacher, repo)
    saved = await repo.find_one(created.id)
    assert saved is not None
    assert saved.status == "Draft"
    assert saved.submissions == []
    assert saved.title == "Compito"
    assert saved.createdAt == saved.updatedAt
    assert saved.createdAt.tzinfo is not None

@pytest.mark.asyncio
async def test_admin_can_create(repo, admin):
    created = await AssignmentService.create_assignment(_make_create(description=None, dueDate=None), admin, repo)
    assert created.description is None
    assert created.dueDate is None

@pytest.mark.asyncio
@pytest.mark.parametrize("title", [None, "", "   "])
async def test_create_without_title_fails(repo, teacher, title):
    with pytest.raises(ValidationError) as exc:
        await AssignmentService.create_assignment(_make_create(title=title), teacher, repo)
    assert exc.value.message == "Title is required"
    assert repo.items == {}

@pytest.mark.asyncio
async def test_list_newest_first(repo, teacher):
    a, b, c = await _create_spaced(repo, teacher, "A", "B", "C")
    items = await AssignmentService.list_assignments(repo)
    assert [x.id for x in items] == [c.id, b.id, a.id]

@pytest.mark.asyncio
async def test_list_published_hides_drafts(repo, teacher):
    draft, published, completed = await _create_spaced(repo, teacher, "D", "P", "C")
    await AssignmentService.update_assignment(published.id, AssignmentUpdate(status="Published"), teacher, repo)
    await AssignmentService.update_assignment(completed.id, AssignmentUpdate(status="Completed"), teacher, repo)

    items = await AssignmentService.list_published(repo)
    assert [x.id for x in items] == [completed.id, published.id]
    assert all(x.status != "Draft" for x in items)

@pytest.mark.asyncio
async def test_update_applies_only_present_fields(repo, teacher):
    created = await AssignmentService.create_assignment(_make_create(), teacher, repo)
    await asyncio.sleep(0.002)
    updated = await AssignmentService.update_assignment(
        created.id, AssignmentUpdate(description="Nuova"), teacher, repo
    )
    assert updated.description == "Nuova"
    assert updated.title == created.title
    assert updated.dueDate == created.dueDate
    assert updated.status == "Draft"
    assert updated.updatedAt > created.updatedAt

@pytest.mark.asyncio
async def test_update_null_title_is_ignored(repo, teacher):
    created = await AssignmentService.create_assignment(_make_create(), teacher, repo)
    updated = await AssignmentService.update_assignment(
        created.id, AssignmentUpdate(title=None, dueDate=None), teacher, repo
    )
    assert updated.title == "Compito"
    assert updated.dueDate is None

@pytest.mark.asyncio
async def test_update_allows_any_status_jump(repo, teacher):
    created = await AssignmentService.create_assignment(_make_create(), teacher, repo)
    for target in ("Completed", "Draft", "Published"):
        updated = await AssignmentService.update_assignment(
            created.id, AssignmentUpdate(status=target), teacher, repo
        )
        assert updated.status == target

@pytest.mark.asyncio
async def test_update_not_found(repo, teacher):
    with pytest.raises(NotFound):
        await AssignmentService.update_assignment("nope", AssignmentUpdate(title="X"), teacher, repo)
    with pytest.raises(NotFound):
        await AssignmentService.update_assignment("nope", AssignmentUpdate(), teacher, repo)

@pytest.mark.asyncio
async def test_update_requires_staff(repo, teacher, student):
    created = await AssignmentService.create_assignment(_make_create(), teacher, repo)
    with pytest.raises(Forbidden):
        await AssignmentService.update_assignment(created.id, AssignmentUpdate(status="Published"), student, repo)

@pytest.mark.asyncio
async def test_delete_requires_staff(repo, student):
    with pytest.raises(Forbidden):
        await AssignmentService.delete_assignment("non-existent", student, repo)

@pytest.mark.asyncio
async def test_delete_ok_and_not_found(repo, teacher):
    created = await AssignmentService.create_assignment(_make_create(), teacher, repo)
    await AssignmentService.delete_assignment(created.id, teacher, repo)
    with pytest.raises(NotFound):
        await AssignmentService.get_assignment(created.id, repo)
    with pytest.raises(NotFound):
        await AssignmentService.delete_assignment(created.id, teacher, repo)

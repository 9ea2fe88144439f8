# test/pytest/conftest.py
import asyncio
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.errors import DuplicateEmail
from app.core.security import PasswordHasher, TokenService
from app.main import create_app
from app.schemas.assignment import Assignment, Submission
from app.schemas.context import UserContext
from app.services.mail_service import WelcomeMailer

TEST_SECRET = "test-secret-not-for-prod"


# ------------------------- Fake repositories -------------------------
class FakeAssignmentRepo:
    def __init__(self):
        self.items: dict[str, Assignment] = {}

    async def create(self, assignment: Assignment) -> str:
        # NON genera ID: si aspetta assignment.id già valorizzato
        if not getattr(assignment, "id", None):
            raise ValueError("id must be set by the service")
        self.items[assignment.id] = assignment.model_copy(deep=True)
        return assignment.id

    def _sorted(self, items):
        return [a.model_copy(deep=True) for a in sorted(items, key=lambda a: a.createdAt, reverse=True)]

    async def find_all(self):
        return self._sorted(self.items.values())

    async def find_by_status(self, statuses):
        wanted = set(statuses)
        return self._sorted(a for a in self.items.values() if a.status in wanted)

    async def find_one(self, assignment_id: str):
        a = self.items.get(assignment_id)
        return a.model_copy(deep=True) if a else None

    async def update(self, assignment_id: str, fields):
        a = self.items.get(assignment_id)
        if a is None:
            return None
        self.items[assignment_id] = Assignment(**{**a.model_dump(), **dict(fields)})
        return self.items[assignment_id].model_copy(deep=True)

    async def delete(self, assignment_id: str):
        return self.items.pop(assignment_id, None) is not None

    async def push_submission(self, assignment_id: str, submission: Submission, ts):
        # cede il controllo come farebbe l'I/O verso Mongo
        await asyncio.sleep(0)
        a = self.items.get(assignment_id)
        if a is None:
            return False
        a.submissions.append(submission.model_copy())
        a.updatedAt = ts
        return True

    async def mark_submission_reviewed(self, assignment_id: str, submission_id: str, ts):
        a = self.items.get(assignment_id)
        if a is None:
            return None
        for s in a.submissions:
            if s.id == submission_id:
                if not s.reviewed:
                    s.reviewed = True
                    a.updatedAt = ts
                return s.model_copy()
        return None


class FakeUserRepo:
    def __init__(self):
        self.items = {}

    async def create(self, user):
        if user.email in self.items:
            raise DuplicateEmail()
        self.items[user.email] = user
        return user.id

    async def find_by_email(self, email):
        return self.items.get(email)

    async def find_all(self):
        return [u.public() for u in self.items.values()]


class RecordingMailer(WelcomeMailer):
    def __init__(self):
        super().__init__(api_key=None, sender="test@example.com")
        self.sent = []

    def send_welcome(self, user):
        self.sent.append(user)


# ------------------------------- Fixtures -------------------------------------
@pytest.fixture
def repo():
    return FakeAssignmentRepo()

@pytest.fixture
def user_repo():
    return FakeUserRepo()

@pytest.fixture
def hasher():
    # 4 è il minimo di bcrypt: test veloci
    return PasswordHasher(rounds=4)

@pytest.fixture
def tokens():
    return TokenService(TEST_SECRET, ttl=timedelta(hours=24))

@pytest.fixture
def teacher():
    return UserContext(user_id="t1", role="Teacher", name="Prof Rossi", email="rossi@school.it")

@pytest.fixture
def admin():
    return UserContext(user_id="a1", role="Admin", name="Admin", email="admin@school.it")

@pytest.fixture
def student():
    return UserContext(user_id="s1", role="Student", name="Mario Bianchi", email="mario@school.it")

@pytest.fixture
def student2():
    return UserContext(user_id="s2", role="Student", name="Anna Verdi", email="anna@school.it")

@pytest.fixture
def mailer():
    return RecordingMailer()

@pytest.fixture
def client(repo, user_repo, hasher, tokens, mailer):
    settings = Settings(jwt_secret=TEST_SECRET, bcrypt_rounds=4)
    app = create_app(settings)
    # niente lifespan (niente Mongo): lo state viene popolato a mano
    app.state.assignment_repo = repo
    app.state.user_repo = user_repo
    app.state.password_hasher = hasher
    app.state.token_service = tokens
    app.state.mailer = mailer
    return TestClient(app)

from typing import Any

from fastapi import Request
from app.core.security import PasswordHasher, TokenService
from app.database.assignment_repo import AssignmentRepo
from app.database.user_repo import UserRepo
from app.services.mail_service import WelcomeMailer


def _from_state(request: Request, name: str) -> Any:
    value = getattr(request.app.state, name, None)
    if value is None:
        raise RuntimeError(f"{name} non inizializzato")
    return value

def get_repository(request: Request) -> AssignmentRepo:
    return _from_state(request, "assignment_repo")

def get_user_repository(request: Request) -> UserRepo:
    return _from_state(request, "user_repo")

def get_token_service(request: Request) -> TokenService:
    return _from_state(request, "token_service")

def get_password_hasher(request: Request) -> PasswordHasher:
    return _from_state(request, "password_hasher")

def get_mailer(request: Request) -> WelcomeMailer:
    return _from_state(request, "mailer")

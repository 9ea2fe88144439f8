from typing import Annotated
from fastapi import APIRouter, BackgroundTasks, Depends, status

from app.core.deps import get_mailer, get_password_hasher, get_token_service, get_user_repository
from app.core.security import PasswordHasher, TokenService
from app.database.user_repo import UserRepo
from app.schemas.user import LoginRequest, LoginResponse, UserCreate
from app.services.auth_service import AuthService
from app.services.mail_service import WelcomeMailer


router = APIRouter()

UserRepoDep = Annotated[UserRepo, Depends(get_user_repository)]
HasherDep = Annotated[PasswordHasher, Depends(get_password_hasher)]
TokensDep = Annotated[TokenService, Depends(get_token_service)]
MailerDep = Annotated[WelcomeMailer, Depends(get_mailer)]


@router.post("/users", status_code=status.HTTP_201_CREATED)
async def register_user_endpoint(
    data: UserCreate,
    repo: UserRepoDep,
    hasher: HasherDep,
    mailer: MailerDep,
    background: BackgroundTasks,
):
    user = await AuthService.register(data, repo, hasher)
    # inviata dopo la risposta; un errore SMTP/API non tocca la registrazione
    background.add_task(mailer.send_welcome, user)
    return {"message": "User added successfully", "user": user}


@router.get("/users")
async def list_users_endpoint(repo: UserRepoDep):
    return {"users": await AuthService.list_users(repo)}


@router.post("/login", response_model=LoginResponse)
async def login_endpoint(
    data: LoginRequest,
    repo: UserRepoDep,
    hasher: HasherDep,
    tokens: TokensDep,
):
    return await AuthService.login(data, repo, hasher, tokens)

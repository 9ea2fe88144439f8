from pydantic import BaseModel

from app.schemas.user import Role


class UserContext(BaseModel):
    """Identità verificata dal token, valida solo per la richiesta corrente."""
    user_id: str
    role: Role
    name: str
    email: str

from typing import List, Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db_name: str = "eduportal"

    # DEV ONLY: sovrascrivere con JWT_SECRET in produzione
    jwt_secret: SecretStr = SecretStr("change-me-in-production")
    jwt_algorithm: str = "HS256"
    token_ttl_hours: int = 24
    bcrypt_rounds: int = 10

    resend_api_key: Optional[SecretStr] = None
    mail_from: str = "EduPortal <noreply@eduportal.app>"

    cors_origins: List[str] = ["http://localhost:3000"]


settings = Settings()

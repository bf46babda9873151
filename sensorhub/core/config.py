from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    DATABASE_URL: str
    AUTO_CREATE_TABLES: bool = False

    # Tokens emitidos pelo provedor de autenticação externo (ex.: Supabase Auth)
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str = "authenticated"

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"             # "json" ou "console"

    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5500",
    ]

    READINGS_MAX_LIMIT: int = 1000

    class Config:
        env_file = ".env"

settings = Settings()

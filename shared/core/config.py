import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")

    DB_USER: str | None = os.getenv("DB_USER")
    DB_PASS: str | None = os.getenv("DB_PASS")
    DB_HOST: str | None = os.getenv("DB_HOST")
    DB_PORT: str | None = os.getenv("DB_PORT")
    RENTAL_DB_NAME: str | None = os.getenv("RENTAL_DB_NAME")
    # full url wins over the DB_* parts (sqlite for local runs)
    DATABASE_URL: str | None = os.getenv("DATABASE_URL")

    # Civil calendar used for contract dates and the DATA_*/HORA macros
    CIVIL_TIMEZONE: str = os.getenv("CIVIL_TIMEZONE", "America/Sao_Paulo")
    # Days subtracted from stored dates before display.
    # Set to 0 once stored dates are fixed at the source.
    DATE_COMPENSATION_DAYS: int = int(os.getenv("DATE_COMPENSATION_DAYS", 1))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: str = os.getenv(
        "CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:8002")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()

RENTAL_DATABASE_URL = settings.DATABASE_URL or (
    f"postgresql+psycopg2://{settings.DB_USER}:{settings.DB_PASS}@{settings.DB_HOST}:{settings.DB_PORT}/{settings.RENTAL_DB_NAME}"
)

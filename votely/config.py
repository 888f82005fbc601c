import os
from datetime import timedelta
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent  # project root (where wsgi.py is)
load_dotenv(BASE_DIR / ".env")

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///votely.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "jwt-dev-secret-change-me-in-production")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(
        minutes=int(os.getenv("JWT_ACCESS_TOKEN_EXPIRES_MIN", "30"))
    )
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(
        days=int(os.getenv("JWT_REFRESH_TOKEN_EXPIRES_DAYS", "7"))
    )

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Explore page pagination
    POLLS_DEFAULT_PAGE_SIZE = int(os.getenv("POLLS_DEFAULT_PAGE_SIZE", "10"))
    POLLS_MAX_PAGE_SIZE = int(os.getenv("POLLS_MAX_PAGE_SIZE", "50"))

    SWAGGER = {"title": "Votely API", "uiversion": 3}
    SWAGGER_TITLE = "Votely API"
    SWAGGER_VERSION = "1.0.0"


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "testing-jwt-secret-key-with-enough-length"
    LOG_LEVEL = "DEBUG"

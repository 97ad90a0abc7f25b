"""
Environment-aware configuration.
Values come from the environment (a .env file is loaded if present) and are
read once, when create_app() builds the application.
"""
import os
from dotenv import load_dotenv
from datetime import timedelta

load_dotenv()  # Read .env if present

DEV_JWT_SECRET = "dev-secret-change-me"


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
    DEBUG = False
    TESTING = False
    # CORS: in dev we usually allow '*', in prod supply a comma-separated list in env
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    APP_ENV = os.getenv("APP_ENV", "dev")
    # "dev" unlocks POST /admin/reset
    PLATFORM = os.getenv("PLATFORM", "")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///chirpy.db")
    SQL_ECHO = False
    FILESERVER_ROOT = os.path.abspath(os.getenv("FILESERVER_ROOT", "."))

    # tokens
    JWT_SECRET = os.getenv("JWT_SECRET", DEV_JWT_SECRET)
    JWT_ISSUER = os.getenv("JWT_ISSUER", "chirpy")
    ACCESS_TOKEN_EXPIRES = timedelta(seconds=int(os.getenv("ACCESS_TOKEN_EXPIRES_SECONDS", "360")))
    REFRESH_TOKEN_EXPIRES = timedelta(hours=int(os.getenv("REFRESH_TOKEN_EXPIRES_HOURS", "1440")))

    # Polka webhook key, sent as "Authorization: ApiKey <key>"
    POLKA_KEY = os.getenv("POLKA_KEY", "")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQL_ECHO = os.getenv("SQL_ECHO", "0").lower() in ("1", "true", "yes")


class TestingConfig(BaseConfig):
    TESTING = True
    DATABASE_URL = "sqlite://"
    PLATFORM = "dev"
    JWT_SECRET = "test-secret-key-for-testing-only"
    POLKA_KEY = "test-polka-key"
    LOG_LEVEL = "DEBUG"


class ProductionConfig(BaseConfig):
    DEBUG = False
    PLATFORM = os.getenv("PLATFORM", "prod")


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/test/prod).
    """
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig

import os
from datetime import timedelta

from dotenv import load_dotenv
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    # JWT
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-me")
    JWT_SECRET_KEY = os.getenv(
        "JWT_SECRET_KEY",
        "dev_jwt_secret_key_that_is_long_enough_for_hs256_signing"
    )
    JWT_ALGORITHM = "HS256"
    JWT_TOKEN_LOCATION = ["headers", "cookies"]
    JWT_HEADER_NAME = "Authorization"
    JWT_HEADER_TYPE = "Bearer"
    JWT_COOKIE_SECURE = _env_flag("JWT_COOKIE_SECURE", False)
    JWT_COOKIE_CSRF_PROTECT = False
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.getenv("JWT_EXPIRES_HOURS", "5")))

    # ======= DATABASE =======
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///bodytrack.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # ======= WEEKLY GOAL JOB =======
    SCHEDULER_ENABLED = _env_flag("SCHEDULER_ENABLED", True)
    # unset: the server's local zone, same clock as date.today()
    SCHEDULER_TIMEZONE = os.getenv("SCHEDULER_TIMEZONE") or None

    # ======= PASSWORD RESET / MAIL =======
    FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")
    RESET_TOKEN_EXPIRES = timedelta(minutes=10)
    MAIL_SERVER = os.getenv("MAIL_SERVER", "smtp.gmail.com")
    MAIL_PORT = int(os.getenv("MAIL_PORT", "587"))
    MAIL_USE_TLS = _env_flag("MAIL_USE_TLS", True)
    MAIL_USERNAME = os.getenv("MAIL_USERNAME")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD")
    MAIL_FROM = os.getenv("MAIL_FROM") or MAIL_USERNAME

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    PORT = int(os.getenv("PORT", "5001"))


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_SECRET_KEY = "test_jwt_secret_key_that_is_long_enough_for_hs256"
    SCHEDULER_ENABLED = False
    FRONTEND_URL = "http://frontend.test"
    MAIL_FROM = "BodyTrack <noreply@bodytrack.test>"

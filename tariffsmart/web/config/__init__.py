import os
from decimal import Decimal

from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")
    SQLALCHEMY_DATABASE_URI = os.environ.get("SQLALCHEMY_DATABASE_URI", "sqlite:///tariffsmart.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SESSION_COOKIE_HTTPONLY = _flag("SESSION_COOKIE_HTTPONLY", "1")
    SESSION_COOKIE_SECURE = _flag("SESSION_COOKIE_SECURE", "0")  # 1 in production (HTTPS)
    SESSION_COOKIE_SAMESITE = os.environ.get("SESSION_COOKIE_SAMESITE", "Lax")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Create tables and load reference data on startup when the DB is empty
    AUTO_SEED = _flag("AUTO_SEED", "0")

    # Premium analysis: import cost increase -> estimated shelf price increase
    RETAIL_MARKUP = Decimal(os.environ.get("RETAIL_MARKUP", "1.3"))
    PROJECTION_MONTHS = int(os.environ.get("PROJECTION_MONTHS", "12"))

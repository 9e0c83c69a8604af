import os
from typing import List
from dotenv import load_dotenv

# Load .env at import time so gunicorn workers get env vars
load_dotenv()

class Settings:
    APP_NAME: str = os.getenv("APP_NAME", "Recipe Planner")
    VERSION: str = os.getenv("APP_VERSION", "0.3.0")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Database (SQLite by default; postgresql+psycopg://... in deployments)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./recipe_planner.db")

    # CORS
    _CORS: str = os.getenv("CORS_ORIGINS", "*")
    CORS_ORIGINS: List[str] = [o.strip() for o in _CORS.split(",") if o.strip()]

    # Session cookie (7 days, matches the web login)
    SESSION_SECRET: str = os.getenv("SESSION_SECRET", "dev-session-secret-change-me")
    SESSION_MAX_AGE: int = int(os.getenv("SESSION_MAX_AGE", str(7 * 24 * 3600)))

    # Bearer tokens
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-jwt-secret-change-me")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

    # Password policy
    PASSWORD_MIN_LENGTH: int = int(os.getenv("PASSWORD_MIN_LENGTH", "6"))

    # Reject plans whose dates are inverted or whose items fall outside the plan window
    STRICT_PLAN_DATES: bool = os.getenv("STRICT_PLAN_DATES", "0") == "1"

    # UI/Docs exposure (default: off)
    ENABLE_DOCS: bool = os.getenv("ENABLE_DOCS", "0") == "1"
    ENABLE_DEV_PAGES: bool = os.getenv("ENABLE_DEV_PAGES", "0") == "1"

    # Seeded administrator (skipped unless both are set)
    ADMIN_EMAIL: str | None = os.getenv("ADMIN_EMAIL") or None
    ADMIN_PASSWORD: str | None = os.getenv("ADMIN_PASSWORD") or None
    ADMIN_DISPLAY_NAME: str = os.getenv("ADMIN_DISPLAY_NAME", "Administrator")

settings = Settings()

import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./ats_tracker.db")
    API_PREFIX = data.get("API_PREFIX", "/api/v1")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", ["http://localhost:3000"])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENVIRONMENT = data.get("ENVIRONMENT", "development")
    FRONTEND_URL = data.get("FRONTEND_URL", "http://localhost:3000")

    # Sessions
    SESSION_COOKIE_NAME = data.get("SESSION_COOKIE_NAME", "ats_session")
    SESSION_SECRET = data.get("SESSION_SECRET", "dev-session-secret-change-in-production")
    SESSION_TTL_HOURS = data.get("SESSION_TTL_HOURS", 24)

    # Passwords and reset tokens
    BCRYPT_ROUNDS = data.get("BCRYPT_ROUNDS", 12)
    RESET_TOKEN_TTL_MINUTES = data.get("RESET_TOKEN_TTL_MINUTES", 60)

    # Rate limiting (per client IP)
    RATE_LIMIT_WINDOW_SECONDS = data.get("RATE_LIMIT_WINDOW_SECONDS", 15 * 60)
    RATE_LIMIT_LOGIN_MAX = data.get("RATE_LIMIT_LOGIN_MAX", 10)
    RATE_LIMIT_REGISTER_MAX = data.get("RATE_LIMIT_REGISTER_MAX", 5)
    RATE_LIMIT_RESET_MAX = data.get("RATE_LIMIT_RESET_MAX", 5)

    # Outbound email
    EMAIL_BACKEND = data.get("EMAIL_BACKEND", "log")
    EMAIL_API_URL = data.get("EMAIL_API_URL", "")
    EMAIL_API_KEY = data.get("EMAIL_API_KEY", "")
    EMAIL_FROM = data.get("EMAIL_FROM", "noreply@atstracker.com")

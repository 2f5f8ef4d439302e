import os

from dotenv import load_dotenv

# Loads .env from the project root
load_dotenv()


def _env_flag(name: str, default: str = "") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./menuhub.db")
ENV = os.getenv("ENV", "dev")
ENV_NORMALIZED = ENV.lower()
IS_DEV = ENV_NORMALIZED in {"dev", "development", "local", "test"}
IS_PROD = ENV_NORMALIZED in {"prod", "production"}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# CORS
_cors_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS = [origin.strip() for origin in _cors_env.split(",") if origin.strip() and origin.strip() != "*"]

if not CORS_ORIGINS and IS_DEV:
    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

# Auth (JWT)
DEV_JWT_SECRET_KEY = "dev-only-menuhub-secret"
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "").strip()
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", str(60 * 24)))

# One-time login codes (SMS / email)
VERIFICATION_CODE_DIGITS = int(os.getenv("VERIFICATION_CODE_DIGITS", "6"))
VERIFICATION_CODE_TTL_MINUTES = int(os.getenv("VERIFICATION_CODE_TTL_MINUTES", "5"))

# Admin bootstrap
DEV_BOOTSTRAP_ALLOW = _env_flag("DEV_BOOTSTRAP_ALLOW")
DEV_ADMIN_PHONE = os.getenv("DEV_ADMIN_PHONE", "").strip()
DEV_ADMIN_EMAIL = os.getenv("DEV_ADMIN_EMAIL", "").strip()
DEV_ADMIN_PASSWORD = os.getenv("DEV_ADMIN_PASSWORD", "").strip()


def resolve_jwt_secret() -> str:
    if JWT_SECRET_KEY:
        return JWT_SECRET_KEY
    if IS_PROD:
        raise RuntimeError("JWT_SECRET_KEY is not configured.")
    return DEV_JWT_SECRET_KEY


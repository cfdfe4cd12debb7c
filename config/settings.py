# config/settings.py
"""
Environment-driven settings shared by the app, the repositories and the
outbound market-data client. Values are read once at import; a local .env
file is honoured for development.
"""
import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# ─── JWT ───────────────────────────────────────────────────────────
JWT_SIGNING_KEY = os.getenv("JWT_SIGNING_KEY")
if not JWT_SIGNING_KEY:
    raise RuntimeError("JWT_SIGNING_KEY is not set in the environment")

JWT_ALGORITHM = "HS256"
JWT_ISSUER = os.getenv("JWT_ISSUER", "http://localhost:8000")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "http://localhost:8000")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)))

# ─── Password policy ───────────────────────────────────────────────
PASSWORD_MIN_LENGTH = int(os.getenv("PASSWORD_MIN_LENGTH", "12"))
PASSWORD_REQUIRE_DIGIT = _env_bool("PASSWORD_REQUIRE_DIGIT", True)
PASSWORD_REQUIRE_LOWERCASE = _env_bool("PASSWORD_REQUIRE_LOWERCASE", True)
PASSWORD_REQUIRE_UPPERCASE = _env_bool("PASSWORD_REQUIRE_UPPERCASE", True)
PASSWORD_REQUIRE_NON_ALPHANUMERIC = _env_bool("PASSWORD_REQUIRE_NON_ALPHANUMERIC", True)
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

DEFAULT_ROLE = "User"
SEEDED_ROLES = ("User", "Admin")

# ─── Financial Modeling Prep ───────────────────────────────────────
FMP_API_KEY = os.getenv("FMP_API_KEY")
FMP_BASE_URL = os.getenv("FMP_BASE_URL", "https://financialmodelingprep.com/api/v3").rstrip("/")
FMP_TIMEOUT_SEC = float(os.getenv("FMP_TIMEOUT_SEC", "5"))

# ─── HTTP surface ──────────────────────────────────────────────────
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

RATE_LIMIT_ENABLED = _env_bool("RATE_LIMIT_ENABLED", True)
RATE_LIMIT_AUTH = os.getenv("RATE_LIMIT_AUTH", "10/minute")

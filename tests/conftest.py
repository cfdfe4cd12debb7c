import os

# Settings are read at import time; these must be in place before any app module loads.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("JWT_SIGNING_KEY", "test-signing-key-0123456789abcdef0123456789abcdef")
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.pop("FMP_API_KEY", None)

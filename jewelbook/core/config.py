import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# ======================================================
# Load .env from the project root in dev, or from the
# folder of the frozen executable when packaged
# ======================================================

if getattr(sys, "frozen", False):
    BASE_DIR = Path(sys.executable).parent
else:
    # This file is: <project_root>/jewelbook/core/config.py
    BASE_DIR = Path(__file__).resolve().parents[2]

load_dotenv(dotenv_path=BASE_DIR / ".env")


def _as_bool(value: str) -> bool:
    return str(value).strip().lower() in ("1", "true", "yes", "on")


# ---------------------
# Database
# ---------------------
DATABASE_URL = os.getenv("DATABASE_URL") or f"sqlite:///{BASE_DIR / 'jewelbook.db'}"
DB_ECHO = _as_bool(os.getenv("DB_ECHO", "false"))

# ---------------------
# Auth
# ---------------------
JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
JWT_ALGO = os.getenv("JWT_ALGO", "HS256")
JWT_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", "720"))

# ---------------------
# Logging
# ---------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = Path(os.getenv("LOG_DIR") or BASE_DIR / "logs")

# ---------------------
# Server
# ---------------------
SERVER_HOST = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT = int(os.getenv("SERVER_PORT", "5001"))

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:8080,http://localhost:8081,http://127.0.0.1:8080,http://127.0.0.1:8081",
    ).split(",")
    if o.strip()
]

# ---------------------
# Invoice numbering
# ---------------------
INVOICE_SEQUENCE_WIDTH = int(os.getenv("INVOICE_SEQUENCE_WIDTH", "6"))

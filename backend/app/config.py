"""Runtime configuration read from the environment.

Lookup tables that vary per deployment (agent roster, teacher allow-list,
login accounts) are loaded from JSON files named by environment variables so
they can change without a new release.
"""

import json
import logging
import os

logger = logging.getLogger(__name__)

APP_NAME = "Teacher Report Service"
VERSION = "0.1.0"

# JWT Configuration
JWT_SECRET = os.getenv("JWT_SECRET", "change-me-in-production")
JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
REPORT_PREFIX = os.getenv("REPORT_PREFIX", "/quran-teacher-report").rstrip("/")
STATIC_DIR = os.getenv("STATIC_DIR", "public")
PORT = int(os.getenv("PORT", "8585"))

DEFAULT_AGENT_ROSTER = {
    1001: "Cabdinuur Ciise Aaadan",
    1002: "Cumar Cabdikaafi Axmed",
    1003: "Saadaq Shariif Faarax",
    1004: "Xasan Salaad Tarabi",
    2000: "Team Hamza Campaign",
}

# Row names of the fixed install-attribution buckets
RESERVED_AGENT_NAMES = frozenset({"other agents", "social media", "friend", "other", "total"})


def _read_json(path: str):
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)


def load_agent_roster(path: str = None) -> dict[int, str]:
    """Agent id to display name. Falls back to the built-in roster."""
    path = path or os.getenv("AGENT_ROSTER_FILE")
    if not path:
        return dict(DEFAULT_AGENT_ROSTER)
    roster = {int(agent_id): name for agent_id, name in _read_json(path).items()}
    clashes = sorted(name for name in roster.values() if name.strip().lower() in RESERVED_AGENT_NAMES)
    if clashes:
        raise ValueError(f"Agent names clash with report rows: {', '.join(clashes)}")
    logger.info(f"Loaded {len(roster)} agents from {path}")
    return roster


def load_teacher_allow_list(raw: str = None) -> list[str]:
    """Teacher display names the workload table is limited to; empty means everyone."""
    raw = raw if raw is not None else os.getenv("TEACHER_ALLOW_LIST", "")
    return [name.strip() for name in raw.split(",") if name.strip()]


def load_auth_users(path: str = None) -> list[dict]:
    """Login accounts: ``[{"username", "password" (bcrypt hash), "role"}]``."""
    path = path or os.getenv("AUTH_USERS_FILE")
    if not path:
        logger.warning("AUTH_USERS_FILE is not set; no account can log in")
        return []
    users = _read_json(path)
    logger.info(f"Loaded {len(users)} login accounts from {path}")
    return users

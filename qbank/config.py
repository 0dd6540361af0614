from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    db_path: Path
    admin_users: frozenset[str]
    page_size: int


def _env(name: str, default: str = "") -> str:
    val = (os.environ.get(name) or default).strip()
    # Users often set env vars with quotes (e.g. cmd.exe: set QB_DB_PATH="C:\...").
    if len(val) >= 2 and val[0] == val[-1] and val[0] in ("'", '"'):
        val = val[1:-1].strip()
    return val


def load_settings() -> Settings:
    here = Path(__file__).resolve().parent.parent
    db_path = Path(_env("QB_DB_PATH", str(here / "questions.sqlite3"))).expanduser().resolve()

    admin_users = frozenset(u.strip() for u in _env("QB_ADMIN_USERS").split(",") if u.strip())

    try:
        page_size = int(_env("QB_PAGE_SIZE", "7"))
    except ValueError:
        page_size = 7
    page_size = max(1, min(100, page_size))

    return Settings(
        db_path=db_path,
        admin_users=admin_users,
        page_size=page_size,
    )

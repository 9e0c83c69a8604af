#!/usr/bin/env python3
"""
Reset the application database for a fresh start.

Behavior:
- Drops all SQLModel tables and re-creates them (non-app tables are untouched).
- Works against the same DATABASE_URL the app uses (SQLite or Postgres).

Usage:
  python scripts/reset_db.py           # prompts for confirmation
  python scripts/reset_db.py --yes     # no prompt
"""
from __future__ import annotations
import os
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from sqlmodel import SQLModel

from recipe_planner.core.config import settings
from recipe_planner.core.db import make_engine


def log(msg: str) -> None:
    print(f"[reset-db] {msg}")


def confirm(prompt: str) -> bool:
    try:
        ans = input(f"{prompt} [y/N]: ").strip().lower()
        return ans in ("y", "yes")
    except (EOFError, KeyboardInterrupt):
        return False


def recreate_schema(engine) -> None:
    import recipe_planner.models  # noqa: F401  register models
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)


def main(argv: list[str]) -> int:
    yes = "--yes" in argv or "-y" in argv
    try:
        engine = make_engine(settings.DATABASE_URL)
    except RuntimeError as e:
        log(str(e))
        return 2
    log(f"Using backend={engine.url.get_backend_name()} database={engine.url.database}")

    if not yes:
        if not confirm("This will ERASE all application data. Continue?"):
            log("aborted by user")
            return 1

    recreate_schema(engine)
    log("schema re-created (app tables).")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))

#!/usr/bin/env python3
"""
Ban or unban an account by email. Banned users cannot log in or obtain
tokens; sessions that already exist keep working until they expire.

Usage:
  python scripts/ban_user.py someone@example.com
  python scripts/ban_user.py someone@example.com --unban
"""
from __future__ import annotations
import os
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from sqlmodel import Session, select

from recipe_planner.core.db import engine
from recipe_planner.models import User


def set_banned(session: Session, email: str, banned: bool) -> bool:
    user = session.exec(select(User).where(User.email == email)).first()
    if user is None:
        return False
    user.is_banned = banned
    session.add(user)
    session.commit()
    return True


def main(argv: list[str]) -> int:
    args = [a for a in argv if not a.startswith("-")]
    if len(args) != 1:
        print(__doc__)
        return 2
    banned = "--unban" not in argv
    with Session(engine) as session:
        if not set_banned(session, args[0], banned):
            print(f"ERROR: no user with email {args[0]}")
            return 1
    print(f"{args[0]}: {'banned' if banned else 'unbanned'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))

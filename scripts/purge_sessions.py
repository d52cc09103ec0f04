"""
Delete expired rows from user_sessions.

Expired sessions are already ignored (and removed when presented), so this is
housekeeping only. Safe to run from cron.

Usage:
  python scripts/purge_sessions.py
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.travelsite.store import Store
from scripts._db_utils import script_session


def purge(database_url: str) -> int:
    with script_session(database_url) as s:
        return Store(s).purge_expired_sessions()


def main() -> None:
    db_url = (os.environ.get("DATABASE_URL") or "sqlite:///travelsite.db").strip()
    removed = purge(db_url)
    print(f"Purged {removed} expired session(s).")


if __name__ == "__main__":
    main()

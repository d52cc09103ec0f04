import os
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running as a script (Windows-friendly).
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy import select

from app.travelsite.models import User
from app.travelsite.security import hash_password
from scripts._db_utils import script_session


def seed_only(*, database_url: str | None = None) -> None:
    """
    Seed the admin user in an idempotent way.
    Does NOT overwrite an existing admin user's password.
    """
    admin_username = (os.environ.get("ADMIN_USERNAME") or "admin").strip()
    admin_password = os.environ.get("ADMIN_PASSWORD") or ""

    db_url = (database_url or os.environ.get("DATABASE_URL") or "sqlite:///travelsite.db").strip()

    # Direct engine/session so this can run in release without importing app.wsgi.
    with script_session(db_url) as s:
        user = s.scalars(select(User).where(User.username == admin_username)).one_or_none()
        if user:
            print(f"Admin user '{admin_username}' already exists; password left unchanged.")
            return
        if not admin_password:
            print("ADMIN_PASSWORD not set; skipping admin user creation.")
            return
        if len(admin_password) < 6:
            raise RuntimeError("ADMIN_PASSWORD must be at least 6 characters.")
        s.add(User(username=admin_username, password=hash_password(admin_password)))

    print("Initialized database (seed_only).")
    print(f"Admin username: {admin_username}")
    print("Admin password: (from ADMIN_PASSWORD)")


def main() -> None:
    seed_only(database_url=None)


if __name__ == "__main__":
    main()

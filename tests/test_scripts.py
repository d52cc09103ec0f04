from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine, select

from app.travelsite.models import Base, User, UserSession
from app.travelsite.security import verify_password
from app.travelsite.store import Store
from scripts import init_db, purge_sessions, seed_sample_data
from scripts._db_utils import script_session


@pytest.fixture()
def db_url(tmp_path):
    url = f"sqlite:///{tmp_path/'scripts.db'}"
    engine = create_engine(url)
    Base.metadata.create_all(bind=engine)
    engine.dispose()
    return url


def test_init_db_seeds_admin_once(db_url, monkeypatch):
    monkeypatch.setenv("ADMIN_USERNAME", "admin")
    monkeypatch.setenv("ADMIN_PASSWORD", "first-pw")
    init_db.seed_only(database_url=db_url)

    monkeypatch.setenv("ADMIN_PASSWORD", "second-pw")
    init_db.seed_only(database_url=db_url)

    with script_session(db_url) as s:
        users = s.scalars(select(User)).all()
        assert [u.username for u in users] == ["admin"]
        # never overwrites an existing password
        assert verify_password("first-pw", users[0].password)


def test_init_db_without_password_creates_nothing(db_url, monkeypatch):
    monkeypatch.delenv("ADMIN_PASSWORD", raising=False)
    init_db.seed_only(database_url=db_url)
    with script_session(db_url) as s:
        assert s.scalars(select(User)).all() == []


def test_seed_sample_data_is_idempotent(db_url):
    with script_session(db_url) as s:
        first = seed_sample_data.seed(Store(s))
    with script_session(db_url) as s:
        second = seed_sample_data.seed(Store(s))
        store = Store(s)
        tours = store.get_tours()
        about = store.get_content("about")

    assert first == {"tours": 4, "testimonials": 3, "gallery": 8}
    assert second == {"tours": 0, "testimonials": 0, "gallery": 0}
    assert all([d["day"] for d in t["itinerary"]] == [1, 2, 3] for t in tours)
    assert about["historyText"].startswith("Sacred Bhutan Travels was founded")


def test_purge_sessions_removes_only_expired(db_url):
    now = datetime.utcnow()
    with script_session(db_url) as s:
        user = User(username="admin", password="x.y")
        s.add(user)
        s.flush()
        s.add_all(
            [
                UserSession(id="live", user_id=user.id, expires_at=now + timedelta(days=1)),
                UserSession(id="dead", user_id=user.id, expires_at=now - timedelta(seconds=1)),
            ]
        )

    assert purge_sessions.purge(db_url) == 1
    with script_session(db_url) as s:
        assert [r.id for r in s.scalars(select(UserSession)).all()] == ["live"]

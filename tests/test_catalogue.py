"""Testimonials, gallery entries and newsletter subscriptions."""
import pytest
from sqlalchemy import func, select

from app.travelsite import create_app
from app.travelsite.db import session_scope
from app.travelsite.models import Base, User
from app.travelsite.modules.newsletter.models import NewsletterSubscriber
from app.travelsite.security import hash_password


@pytest.fixture()
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("MEDIA_BACKEND", "local")
    monkeypatch.setenv("MEDIA_ROOT", str(tmp_path / "media"))

    app = create_app()
    engine = app.extensions["sqlalchemy_engine"]
    Base.metadata.create_all(bind=engine)

    with session_scope(app) as s:
        s.add(User(username="admin", password=hash_password("admin-pw")))

    return app.test_client()


def _login(client):
    client.post("/api/login", json={"username": "admin", "password": "admin-pw"})


# ---------- Testimonials ----------
def test_testimonial_crud(client):
    _login(client)
    r = client.post("/api/admin/testimonials", json={"name": "Sarah M.", "content": "A transformation."})
    assert r.status_code == 201
    t = r.json
    assert t["location"] is None

    r = client.patch(f"/api/admin/testimonials/{t['id']}", json={"location": "United States"})
    assert r.status_code == 200
    assert r.json["location"] == "United States"
    assert r.json["content"] == "A transformation."

    assert [x["name"] for x in client.get("/api/testimonials").json] == ["Sarah M."]


def test_deleted_testimonial_leaves_public_list(client):
    _login(client)
    keep = client.post("/api/admin/testimonials", json={"name": "David L.", "content": "Deeply meaningful."}).json
    gone = client.post("/api/admin/testimonials", json={"name": "Aisha K.", "content": "Magical."}).json

    r = client.delete(f"/api/admin/testimonials/{gone['id']}")
    assert r.status_code == 200
    assert r.json["message"] == "Testimonial deleted successfully"

    ids = [t["id"] for t in client.get("/api/testimonials").json]
    assert ids == [keep["id"]]
    assert client.get(f"/api/admin/testimonials/{gone['id']}").status_code == 404


def test_testimonial_requires_content(client):
    _login(client)
    r = client.post("/api/admin/testimonials", json={"name": "Sarah M."})
    assert r.status_code == 400
    assert "content" in r.json["errors"]


# ---------- Gallery ----------
def test_gallery_crud(client):
    assert client.get("/api/gallery").json == []
    assert client.post("/api/admin/gallery", json={"caption": "Dzong", "type": "dzong"}).status_code == 401

    _login(client)
    img = client.post("/api/admin/gallery", json={"caption": "Punakha Dzong at confluence", "type": "dzong"}).json

    r = client.get(f"/api/gallery/{img['id']}")
    assert r.status_code == 200
    assert r.json["type"] == "dzong"

    r = client.patch(f"/api/admin/gallery/{img['id']}", json={"caption": "Punakha Dzong"})
    assert r.json["caption"] == "Punakha Dzong"

    assert client.delete(f"/api/admin/gallery/{img['id']}").status_code == 200
    assert client.get(f"/api/gallery/{img['id']}").status_code == 404
    assert client.get("/api/gallery/x").status_code == 400


# ---------- Newsletter ----------
def test_newsletter_dedup_returns_original(client):
    r1 = client.post("/api/newsletter", json={"email": "pilgrim@example.com"})
    assert r1.status_code == 201
    r2 = client.post("/api/newsletter", json={"email": "Pilgrim@Example.com"})
    assert r2.status_code == 200
    assert r2.json == r1.json

    with session_scope(client.application) as s:
        assert s.scalar(select(func.count()).select_from(NewsletterSubscriber)) == 1


def test_newsletter_rejects_bad_email(client):
    r = client.post("/api/newsletter", json={"email": "nope"})
    assert r.status_code == 400
    assert r.json["message"] == "Invalid email address."


def test_newsletter_admin_list(client):
    client.post("/api/newsletter", json={"email": "a@example.com"})
    assert client.get("/api/admin/newsletter").status_code == 401
    _login(client)
    r = client.get("/api/admin/newsletter")
    assert [s["email"] for s in r.json] == ["a@example.com"]

import pytest

from app.travelsite import create_app
from app.travelsite.db import session_scope
from app.travelsite.models import Base, User
from app.travelsite.security import hash_password


@pytest.fixture()
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("MEDIA_BACKEND", "local")
    monkeypatch.setenv("MEDIA_ROOT", str(tmp_path / "media"))
    monkeypatch.delenv("REGISTRATION_ENABLED", raising=False)

    app = create_app()

    engine = app.extensions["sqlalchemy_engine"]
    Base.metadata.create_all(bind=engine)

    with session_scope(app) as s:
        s.add(User(username="admin", password=hash_password("admin-pw")))

    return app.test_client()


def _login(client):
    r = client.post("/api/login", json={"username": "admin", "password": "admin-pw"})
    assert r.status_code == 200


def test_health_ok(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json["ok"] is True

    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.data == b"ok"


def test_api_responses_carry_request_id(client):
    r = client.get("/api/tours")
    assert r.status_code == 200
    assert len(r.headers["X-Request-ID"]) == 32


def test_unknown_api_route_is_json_404(client):
    r = client.get("/api/nope")
    assert r.status_code == 404
    assert r.json == {"message": "Not found"}


def test_wrong_method_is_json_405(client):
    r = client.put("/api/tours")
    assert r.status_code == 405
    assert r.json["message"] == "Method not allowed"


def test_admin_routes_require_session(client):
    for method, path in (
        ("get", "/api/admin/stats"),
        ("get", "/api/inquiries"),
        ("get", "/api/admin/messages"),
        ("post", "/api/tours"),
        ("patch", "/api/content/about"),
        ("get", "/api/admin/newsletter"),
    ):
        r = getattr(client, method)(path, json={})
        assert r.status_code == 401, path
        assert r.json["message"] == "Unauthorized: Authentication required."


def test_stats_cards_count_unhandled(client):
    _login(client)
    r = client.post(
        "/api/tours",
        json={
            "title": "Tiger's Nest Pilgrimage",
            "description": "Follow the sacred path to Paro Taktsang.",
            "longDescription": "The journey to Paro Taktsang follows in the footsteps of Guru Rinpoche himself.",
            "location": "Paro",
            "duration": "7 Days / 6 Nights",
            "difficulty": "Moderate",
            "accommodation": "Heritage hotels",
            "groupSize": "Maximum 12 pilgrims",
            "price": 2850,
        },
    )
    tour_id = r.json["id"]
    for i in range(2):
        client.post("/api/inquiries", json={"name": f"P{i}", "email": f"p{i}@example.com", "message": "Hello", "tourId": tour_id})
    client.post("/api/contact", json={"name": "Q", "email": "q@example.com", "subject": "Hi", "message": "Question"})
    client.patch("/api/inquiries/1", json={"handled": True})

    r = client.get("/api/admin/stats")
    assert r.status_code == 200
    cards = {c["label"]: c for c in r.json}
    assert cards["Active Tours"]["value"] == 1
    assert cards["Unhandled Inquiries"]["value"] == 1
    assert cards["Unhandled Messages"]["value"] == 1
    assert cards["Unhandled Inquiries"]["link"] == "/admin/inquiries"


def test_unexpected_error_is_500_json(client, monkeypatch):
    from app.travelsite.store import Store

    def boom(self, location=None):
        raise RuntimeError("boom")

    monkeypatch.setattr(Store, "get_tours", boom)
    r = client.get("/api/tours")
    assert r.status_code == 500
    # non-production shows the detail
    assert r.json == {"message": "boom"}


def test_production_requires_postgres(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "a-real-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "production")
    with pytest.raises(RuntimeError, match="Postgres"):
        create_app()

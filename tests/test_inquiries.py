import pytest

from app.travelsite import create_app
from app.travelsite.db import session_scope
from app.travelsite.models import Base, User
from app.travelsite.modules.tours.models import Tour
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
        s.add(
            Tour(
                title="Druk Path Trek",
                description="Walk the ancient mountain route.",
                long_description="The Druk Path is one of Bhutan's classic treks, following an ancient trading route.",
                location="Paro",
                duration="5 Days / 4 Nights",
                difficulty="Challenging",
                accommodation="Camping",
                group_size="Maximum 8 pilgrims",
                price=1950,
            )
        )

    return app.test_client()


def _login(client):
    client.post("/api/login", json={"username": "admin", "password": "admin-pw"})


def _inquiry(client, tour_id=1, **overrides):
    payload = {"name": "Karma", "email": "Karma@Example.com", "message": "Is October a good month?", "tourId": tour_id}
    payload.update(overrides)
    return client.post("/api/inquiries", json=payload)


def test_inquiry_denormalizes_tour_name(client):
    r = _inquiry(client)
    assert r.status_code == 201
    assert r.json["tourName"] == "Druk Path Trek"
    assert r.json["tourId"] == 1
    assert r.json["handled"] is False
    assert r.json["email"] == "karma@example.com"
    assert r.json["createdAt"]


def test_inquiry_for_unknown_tour_is_rejected(client):
    r = _inquiry(client, tour_id=999)
    assert r.status_code == 400
    assert r.json["message"] == "Tour with ID 999 not found."

    _login(client)
    assert client.get("/api/inquiries").json == []


def test_inquiry_validation(client):
    r = _inquiry(client, email="not-an-email", name="")
    assert r.status_code == 400
    assert set(r.json["errors"]) == {"email", "name"}


def test_inquiry_admin_list_newest_first(client):
    _inquiry(client, name="First")
    _inquiry(client, name="Second")
    _login(client)
    r = client.get("/api/inquiries")
    assert r.status_code == 200
    assert [i["name"] for i in r.json] == ["Second", "First"]


def test_mark_handled_is_idempotent(client):
    inquiry = _inquiry(client).json
    _login(client)
    for _ in range(2):
        r = client.patch(f"/api/inquiries/{inquiry['id']}", json={"handled": True})
        assert r.status_code == 200
        assert r.json["handled"] is True
    assert client.get(f"/api/inquiries/{inquiry['id']}").json["handled"] is True


def test_handled_must_be_boolean(client):
    inquiry = _inquiry(client).json
    _login(client)
    r = client.patch(f"/api/inquiries/{inquiry['id']}", json={"handled": "yes"})
    assert r.status_code == 400
    r = client.patch(f"/api/inquiries/{inquiry['id']}", json={})
    assert r.status_code == 400


def test_handled_update_ignores_other_fields(client):
    inquiry = _inquiry(client).json
    _login(client)
    r = client.patch(f"/api/inquiries/{inquiry['id']}", json={"handled": True, "tourName": "Other"})
    assert r.json["tourName"] == "Druk Path Trek"


def test_delete_nonexistent_inquiry_is_404(client):
    _login(client)
    r = client.delete("/api/inquiries/12345")
    assert r.status_code == 404

    inquiry = _inquiry(client).json
    r = client.delete(f"/api/inquiries/{inquiry['id']}")
    assert r.status_code == 200
    assert r.json["message"] == "Inquiry deleted successfully"
    assert client.get(f"/api/inquiries/{inquiry['id']}").status_code == 404


def test_contact_message_lifecycle(client):
    r = client.post(
        "/api/contact",
        json={"name": "Tashi", "email": "tashi@example.com", "subject": "Visa", "message": "How do visas work?"},
    )
    assert r.status_code == 201
    msg = r.json
    assert msg["phone"] is None
    assert msg["handled"] is False

    assert client.get("/api/admin/messages").status_code == 401

    _login(client)
    assert [m["id"] for m in client.get("/api/admin/messages").json] == [msg["id"]]

    r = client.patch(f"/api/admin/messages/{msg['id']}", json={"handled": True})
    assert r.json["handled"] is True

    r = client.delete(f"/api/admin/messages/{msg['id']}")
    assert r.status_code == 200
    assert client.delete(f"/api/admin/messages/{msg['id']}").status_code == 404


def test_contact_message_requires_subject(client):
    r = client.post("/api/contact", json={"name": "Tashi", "email": "tashi@example.com", "message": "Hi"})
    assert r.status_code == 400
    assert "subject" in r.json["errors"]


def test_oversized_ids_are_client_errors(client):
    r = _inquiry(client, tour_id=10**20)
    assert r.status_code == 400
    assert "tourId" in r.json["errors"]

    r = _inquiry(client, tour_id="²")
    assert r.status_code == 400
    assert r.json["errors"]["tourId"] == ["Tour ID must be a whole number."]

    _login(client)
    r = client.delete("/api/inquiries/99999999999999999999")
    assert r.status_code == 404
    assert r.json["message"] == "Inquiry not found"
    assert client.get("/api/inquiries").json == []

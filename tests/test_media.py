import io

import pytest

from app.travelsite import create_app
from app.travelsite.db import session_scope
from app.travelsite.media import ImageKitMediaHost, MediaHostError, folder_path, media_host_from_config
from app.travelsite.models import Base, User
from app.travelsite.security import hash_password


def _make_client(tmp_path, monkeypatch, **env):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("MEDIA_BACKEND", "local")
    monkeypatch.setenv("MEDIA_ROOT", str(tmp_path / "media"))
    for k in ("IMAGEKIT_PUBLIC_KEY", "IMAGEKIT_PRIVATE_KEY", "IMAGEKIT_URL_ENDPOINT", "MAX_UPLOAD_MB"):
        monkeypatch.delenv(k, raising=False)
    for k, v in env.items():
        monkeypatch.setenv(k, v)

    app = create_app()
    Base.metadata.create_all(bind=app.extensions["sqlalchemy_engine"])
    with session_scope(app) as s:
        s.add(User(username="admin", password=hash_password("admin-pw")))
    return app.test_client()


@pytest.fixture()
def client(tmp_path, monkeypatch):
    return _make_client(tmp_path, monkeypatch)


def _login(client):
    client.post("/api/login", json={"username": "admin", "password": "admin-pw"})


def _upload(client, folder="tours", data=b"\x89PNG fake", filename="Tiger Nest.png", mimetype="image/png"):
    return client.post(
        "/api/admin/upload",
        data={"imageFile": (io.BytesIO(data), filename, mimetype), "folderName": folder},
        content_type="multipart/form-data",
    )


class TestFolderPath:
    def test_joins_under_parent(self):
        assert folder_path("/uploads/", "tours") == "/uploads/tours/"
        assert folder_path("uploads", "gallery") == "/uploads/gallery/"

    def test_rejects_nested_or_empty(self):
        for bad in ("", "a/b", ".."):
            with pytest.raises(ValueError):
                folder_path("/uploads/", bad)


def test_local_upload_then_serve(client):
    _login(client)
    r = _upload(client)
    assert r.status_code == 201
    body = r.json
    assert body["url"].startswith("/media/uploads/tours/")
    assert body["name"].endswith("Tiger_Nest.png")

    r = client.get(body["url"])
    assert r.status_code == 200
    assert r.data == b"\x89PNG fake"

    r = client.delete(f"/api/admin/media/{body['fileId']}")
    assert r.status_code == 200
    assert client.get(body["url"]).status_code == 404


def test_upload_requires_admin(client):
    assert _upload(client).status_code == 401


def test_upload_rejects_bad_input(client):
    _login(client)
    r = _upload(client, folder="a/b")
    assert r.status_code == 400
    assert r.json["message"] == "Invalid folder name provided."

    r = _upload(client, mimetype="application/pdf", filename="doc.pdf")
    assert r.status_code == 400

    r = client.post("/api/admin/upload", data={"folderName": "tours"}, content_type="multipart/form-data")
    assert r.status_code == 400
    assert "imageFile" in r.json["errors"]


def test_upload_too_large_is_413(tmp_path, monkeypatch):
    client = _make_client(tmp_path, monkeypatch, MAX_UPLOAD_MB="1")
    _login(client)
    r = _upload(client, data=b"x" * (2 * 1024 * 1024))
    assert r.status_code == 413
    assert r.json["message"] == "File too large. Maximum size is 1MB."


def test_carousel_lists_local_folder(client, tmp_path):
    folder = tmp_path / "media" / "Tiger Nest"
    folder.mkdir(parents=True)
    (folder / "a.jpg").write_bytes(b"a")
    (folder / "b.jpg").write_bytes(b"b")

    r = client.get("/api/carousel-images")
    assert r.status_code == 200
    assert r.json == [
        {"id": "Tiger Nest/a.jpg", "src": "/media/Tiger Nest/a.jpg", "alt": "a.jpg"},
        {"id": "Tiger Nest/b.jpg", "src": "/media/Tiger Nest/b.jpg", "alt": "b.jpg"},
    ]


def test_carousel_empty_when_folder_missing(client):
    assert client.get("/api/carousel-images").json == []


def test_misconfigured_imagekit_is_502(tmp_path, monkeypatch):
    client = _make_client(tmp_path, monkeypatch, MEDIA_BACKEND="imagekit")
    r = client.get("/api/carousel-images")
    assert r.status_code == 502
    assert r.json["message"] == "Media host is not configured."


class _FakeResponse:
    def __init__(self, status_code, payload):
        self.status_code = status_code
        self._payload = payload
        self.text = str(payload)

    def json(self):
        return self._payload


class TestImageKitMediaHost:
    host = ImageKitMediaHost(public_key="pub", private_key="priv", url_endpoint="https://ik.imagekit.io/demo")

    def test_upload_posts_multipart_with_basic_auth(self, monkeypatch):
        seen = {}

        def fake_post(url, auth=None, files=None, data=None, timeout=None):
            seen.update(url=url, auth=auth, files=files, data=data, timeout=timeout)
            return _FakeResponse(200, {"fileId": "f1", "url": "https://ik.imagekit.io/demo/uploads/tours/a.png", "name": "a.png"})

        monkeypatch.setattr("app.travelsite.media.requests.post", fake_post)
        hosted = self.host.upload(b"data", "a.png", "/uploads/tours/", content_type="image/png")

        assert hosted.to_dict() == {"fileId": "f1", "url": "https://ik.imagekit.io/demo/uploads/tours/a.png", "name": "a.png"}
        assert seen["url"] == "https://upload.imagekit.io/api/v1/files/upload"
        assert seen["auth"] == ("priv", "")
        assert seen["data"]["folder"] == "/uploads/tours/"
        assert seen["files"]["file"][0] == "a.png"

    def test_list_files_skips_folders(self, monkeypatch):
        def fake_get(url, auth=None, params=None, timeout=None):
            assert params == {"path": "/Tiger Nest/"}
            return _FakeResponse(
                200,
                [
                    {"type": "folder", "name": "old"},
                    {"type": "file", "fileId": "f2", "url": "https://ik.imagekit.io/demo/Tiger%20Nest/b.jpg", "name": "b.jpg"},
                ],
            )

        monkeypatch.setattr("app.travelsite.media.requests.get", fake_get)
        files = self.host.list_files("/Tiger Nest/")
        assert [f.file_id for f in files] == ["f2"]

    def test_http_error_raises(self, monkeypatch):
        monkeypatch.setattr(
            "app.travelsite.media.requests.delete",
            lambda url, auth=None, timeout=None: _FakeResponse(404, {"message": "No such file"}),
        )
        with pytest.raises(MediaHostError):
            self.host.delete("missing")


def test_imagekit_upload_failure_is_502(tmp_path, monkeypatch):
    client = _make_client(
        tmp_path,
        monkeypatch,
        MEDIA_BACKEND="imagekit",
        IMAGEKIT_PUBLIC_KEY="pub",
        IMAGEKIT_PRIVATE_KEY="priv",
        IMAGEKIT_URL_ENDPOINT="https://ik.imagekit.io/demo",
    )
    monkeypatch.setattr(
        "app.travelsite.media.requests.post",
        lambda *a, **kw: _FakeResponse(500, {"message": "down"}),
    )
    _login(client)
    r = _upload(client)
    assert r.status_code == 502
    assert r.json["message"] == "Image upload failed. Please try again later."


def test_media_host_from_config_defaults_to_local(tmp_path):
    host = media_host_from_config({"MEDIA_ROOT": str(tmp_path)})
    assert type(host).__name__ == "LocalMediaHost"

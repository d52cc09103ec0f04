from __future__ import annotations

import logging
import os
import uuid
from dataclasses import dataclass
from pathlib import Path

import requests
from werkzeug.utils import secure_filename

logger = logging.getLogger(__name__)


class MediaHostError(RuntimeError):
    pass


@dataclass(frozen=True)
class MediaFile:
    file_id: str
    url: str
    name: str

    def to_dict(self) -> dict[str, str]:
        return {"fileId": self.file_id, "url": self.url, "name": self.name}


def folder_path(parent: str, name: str) -> str:
    """"/uploads/" + "tours" -> "/uploads/tours/"."""
    name = (name or "").strip().strip("/")
    if not name or "/" in name or name in (".", ".."):
        raise ValueError("Invalid folder name provided.")
    parent = "/" + (parent or "/").strip("/") + "/"
    return (parent + name + "/").replace("//", "/")


def normalize_folder(path: str) -> str:
    return "/" + (path or "").strip("/") + "/" if (path or "").strip("/") else "/"


def safe_filename(filename: str) -> str:
    return secure_filename(filename or "") or "image.bin"


class MediaHost:
    def upload(self, data: bytes, filename: str, folder: str, *, content_type: str | None = None) -> MediaFile:
        raise NotImplementedError

    def list_files(self, folder: str) -> list[MediaFile]:
        raise NotImplementedError

    def delete(self, file_id: str) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class LocalMediaHost(MediaHost):
    """Writes under `root`; served by routes.media_file in development."""

    root: Path
    url_prefix: str = "/media/"

    def _path(self, key: str) -> Path:
        safe_key = key.lstrip("/").replace("\\", "/")
        p = (self.root / safe_key).resolve()
        if self.root.resolve() not in p.parents and p != self.root.resolve():
            raise MediaHostError(f"Path escapes media root: {key!r}")
        return p

    def _url(self, key: str) -> str:
        return self.url_prefix.rstrip("/") + "/" + key.lstrip("/")

    def upload(self, data: bytes, filename: str, folder: str, *, content_type: str | None = None) -> MediaFile:
        name = f"{uuid.uuid4().hex[:8]}_{safe_filename(filename)}"
        key = normalize_folder(folder).lstrip("/") + name
        p = self._path(key)
        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_bytes(data)
        except OSError as e:
            raise MediaHostError(f"Local media write failed: {e}") from e
        return MediaFile(file_id=key, url=self._url(key), name=name)

    def list_files(self, folder: str) -> list[MediaFile]:
        base = normalize_folder(folder).lstrip("/")
        d = self._path(base) if base else self.root
        if not d.is_dir():
            return []
        out = []
        for p in sorted(d.iterdir()):
            if p.is_file():
                key = base + p.name
                out.append(MediaFile(file_id=key, url=self._url(key), name=p.name))
        return out

    def delete(self, file_id: str) -> None:
        p = self._path(file_id)
        if not p.is_file():
            raise MediaHostError(f"No such media file: {file_id!r}")
        p.unlink()


@dataclass(frozen=True)
class ImageKitMediaHost(MediaHost):
    public_key: str
    private_key: str
    url_endpoint: str
    upload_url: str = "https://upload.imagekit.io/api/v1/files/upload"
    api_url: str = "https://api.imagekit.io/v1"
    timeout_seconds: int = 30

    def _auth(self) -> tuple[str, str]:
        # ImageKit uses HTTP basic auth with the private key as username.
        return (self.private_key, "")

    def _check(self, resp: requests.Response, what: str) -> None:
        if resp.status_code >= 400:
            raise MediaHostError(f"HTTP {resp.status_code} from ImageKit ({what}): {resp.text[:300]}")

    def upload(self, data: bytes, filename: str, folder: str, *, content_type: str | None = None) -> MediaFile:
        name = safe_filename(filename)
        try:
            resp = requests.post(
                self.upload_url,
                auth=self._auth(),
                files={"file": (name, data, content_type or "application/octet-stream")},
                data={"fileName": name, "folder": normalize_folder(folder), "useUniqueFileName": "true"},
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as e:
            raise MediaHostError(f"ImageKit upload failed: {e}") from e
        self._check(resp, "upload")
        j = resp.json()
        logger.info("ImageKit upload ok: %s", j.get("url"))
        return MediaFile(file_id=j.get("fileId") or "", url=j.get("url") or "", name=j.get("name") or name)

    def list_files(self, folder: str) -> list[MediaFile]:
        try:
            resp = requests.get(
                f"{self.api_url}/files",
                auth=self._auth(),
                params={"path": normalize_folder(folder)},
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as e:
            raise MediaHostError(f"ImageKit list failed: {e}") from e
        self._check(resp, "list")
        items = resp.json()
        if not isinstance(items, list):
            return []
        return [
            MediaFile(file_id=i.get("fileId") or "", url=i.get("url") or "", name=i.get("name") or "")
            for i in items
            if isinstance(i, dict) and i.get("type", "file") == "file"
        ]

    def delete(self, file_id: str) -> None:
        try:
            resp = requests.delete(f"{self.api_url}/files/{file_id}", auth=self._auth(), timeout=self.timeout_seconds)
        except requests.RequestException as e:
            raise MediaHostError(f"ImageKit delete failed: {e}") from e
        self._check(resp, "delete")


@dataclass(frozen=True)
class S3MediaHost(MediaHost):
    endpoint: str
    region: str
    bucket: str
    access_key_id: str
    secret_access_key: str
    public_url: str

    def _client(self):
        import boto3

        return boto3.client(
            "s3",
            endpoint_url=f"https://{self.endpoint}" if self.endpoint else None,
            region_name=self.region or None,
            aws_access_key_id=self.access_key_id,
            aws_secret_access_key=self.secret_access_key,
        )

    def _url(self, key: str) -> str:
        base = self.public_url or f"https://{self.bucket}.{self.endpoint}"
        return base.rstrip("/") + "/" + key

    def upload(self, data: bytes, filename: str, folder: str, *, content_type: str | None = None) -> MediaFile:
        name = f"{uuid.uuid4().hex[:8]}_{safe_filename(filename)}"
        key = normalize_folder(folder).lstrip("/") + name
        extra: dict[str, object] = {"ACL": "public-read"}
        if content_type:
            extra["ContentType"] = content_type
        try:
            self._client().put_object(Bucket=self.bucket, Key=key, Body=data, **extra)
        except Exception as e:
            raise MediaHostError(f"S3 upload failed: {e}") from e
        return MediaFile(file_id=key, url=self._url(key), name=name)

    def list_files(self, folder: str) -> list[MediaFile]:
        prefix = normalize_folder(folder).lstrip("/")
        try:
            resp = self._client().list_objects_v2(Bucket=self.bucket, Prefix=prefix)
        except Exception as e:
            raise MediaHostError(f"S3 list failed: {e}") from e
        out = []
        for obj in resp.get("Contents") or []:
            key = obj["Key"]
            if key.endswith("/"):
                continue
            out.append(MediaFile(file_id=key, url=self._url(key), name=key.rsplit("/", 1)[-1]))
        return out

    def delete(self, file_id: str) -> None:
        try:
            self._client().delete_object(Bucket=self.bucket, Key=file_id)
        except Exception as e:
            raise MediaHostError(f"S3 delete failed: {e}") from e


def missing_media_config(config: dict) -> list[str]:
    backend = (config.get("MEDIA_BACKEND") or "local").strip().lower()
    required: tuple[str, ...] = ()
    if backend == "imagekit":
        required = ("IMAGEKIT_PUBLIC_KEY", "IMAGEKIT_PRIVATE_KEY", "IMAGEKIT_URL_ENDPOINT")
    elif backend == "s3":
        required = ("S3_ENDPOINT", "S3_BUCKET", "S3_ACCESS_KEY_ID", "S3_SECRET_ACCESS_KEY")
    return [k for k in required if not config.get(k)]


def media_host_from_config(config: dict) -> MediaHost:
    backend = (config.get("MEDIA_BACKEND") or "local").strip().lower()
    missing = missing_media_config(config)
    if missing:
        raise MediaHostError(f"Media host '{backend}' not configured; missing {', '.join(missing)}")
    if backend == "imagekit":
        return ImageKitMediaHost(
            public_key=config["IMAGEKIT_PUBLIC_KEY"],
            private_key=config["IMAGEKIT_PRIVATE_KEY"],
            url_endpoint=config["IMAGEKIT_URL_ENDPOINT"],
        )
    if backend == "s3":
        return S3MediaHost(
            endpoint=(config.get("S3_ENDPOINT") or "").strip(),
            region=(config.get("S3_REGION") or "nyc3").strip(),
            bucket=(config.get("S3_BUCKET") or "").strip(),
            access_key_id=(config.get("S3_ACCESS_KEY_ID") or "").strip(),
            secret_access_key=(config.get("S3_SECRET_ACCESS_KEY") or "").strip(),
            public_url=(config.get("S3_PUBLIC_URL") or "").strip(),
        )
    # default local
    root = Path(config.get("MEDIA_ROOT") or os.path.join(os.getcwd(), "media"))
    return LocalMediaHost(root=root, url_prefix=config.get("MEDIA_URL_PREFIX") or "/media/")

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    secret_key: str
    env: str
    database_url: str
    log_level: str

    session_lifetime_days: int
    registration_enabled: bool

    media_backend: str
    media_root: str
    media_url_prefix: str
    upload_root_folder: str
    carousel_folder: str
    max_upload_mb: int

    imagekit_public_key: str
    imagekit_private_key: str
    imagekit_url_endpoint: str

    s3_endpoint: str
    s3_region: str
    s3_bucket: str
    s3_access_key_id: str
    s3_secret_access_key: str
    s3_public_url: str


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def _getint(name: str, default: int) -> int:
    raw = _getenv(name)
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def load_settings() -> Settings:
    return Settings(
        secret_key=_getenv("SECRET_KEY") or _getenv("SESSION_SECRET", "change-me"),
        env=_getenv("ENV", "development").lower(),
        database_url=_getenv("DATABASE_URL", "sqlite:///travelsite.db"),
        log_level=_getenv("LOG_LEVEL", "INFO").upper(),
        session_lifetime_days=_getint("SESSION_LIFETIME_DAYS", 7),
        registration_enabled=_getenv("REGISTRATION_ENABLED", "1") not in ("0", "false", "no"),
        media_backend=_getenv("MEDIA_BACKEND", "local").lower(),
        media_root=_getenv("MEDIA_ROOT", os.path.join(os.getcwd(), "media")),
        media_url_prefix=_getenv("MEDIA_URL_PREFIX", "/media/"),
        upload_root_folder=_getenv("UPLOAD_ROOT_FOLDER", "/uploads/"),
        carousel_folder=_getenv("CAROUSEL_FOLDER", "/Tiger Nest/"),
        max_upload_mb=_getint("MAX_UPLOAD_MB", 10),
        imagekit_public_key=_getenv("IMAGEKIT_PUBLIC_KEY"),
        imagekit_private_key=_getenv("IMAGEKIT_PRIVATE_KEY"),
        imagekit_url_endpoint=_getenv("IMAGEKIT_URL_ENDPOINT"),
        s3_endpoint=_getenv("S3_ENDPOINT"),
        s3_region=_getenv("S3_REGION", "nyc3"),
        s3_bucket=_getenv("S3_BUCKET"),
        s3_access_key_id=_getenv("S3_ACCESS_KEY_ID"),
        s3_secret_access_key=_getenv("S3_SECRET_ACCESS_KEY"),
        s3_public_url=_getenv("S3_PUBLIC_URL"),
    )


def is_production(env: str | None) -> bool:
    return (env or "").strip().lower() in ("prod", "production")


def load_config() -> dict:
    s = load_settings()
    production = is_production(s.env)
    return {
        "SECRET_KEY": s.secret_key,
        "ENV": s.env,
        "DATABASE_URL": s.database_url,
        "LOG_LEVEL": s.log_level,
        "SESSION_LIFETIME_DAYS": s.session_lifetime_days,
        "REGISTRATION_ENABLED": s.registration_enabled,
        "MEDIA_BACKEND": s.media_backend,
        "MEDIA_ROOT": s.media_root,
        "MEDIA_URL_PREFIX": s.media_url_prefix,
        "UPLOAD_ROOT_FOLDER": s.upload_root_folder,
        "CAROUSEL_FOLDER": s.carousel_folder,
        "IMAGEKIT_PUBLIC_KEY": s.imagekit_public_key,
        "IMAGEKIT_PRIVATE_KEY": s.imagekit_private_key,
        "IMAGEKIT_URL_ENDPOINT": s.imagekit_url_endpoint,
        "S3_ENDPOINT": s.s3_endpoint,
        "S3_REGION": s.s3_region,
        "S3_BUCKET": s.s3_bucket,
        "S3_ACCESS_KEY_ID": s.s3_access_key_id,
        "S3_SECRET_ACCESS_KEY": s.s3_secret_access_key,
        "S3_PUBLIC_URL": s.s3_public_url,
        # security defaults
        "SESSION_COOKIE_NAME": "sbt.sid",
        "SESSION_COOKIE_HTTPONLY": True,
        "SESSION_COOKIE_SAMESITE": "Lax",
        "SESSION_COOKIE_SECURE": production,  # Require HTTPS in production
        "MAX_CONTENT_LENGTH": s.max_upload_mb * 1024 * 1024,
    }

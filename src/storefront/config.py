"""Application settings read from the environment.

Protean's own configuration (databases, brokers, event store) lives in
``domain.toml``. Everything else the HTTP surface needs (token signing,
OAuth credentials, image storage) is collected here.

Provides get_settings() / set_settings() / reset_settings() so tests can
swap values without touching ``os.environ``.
"""

import os
import re
from dataclasses import dataclass

_DURATION = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(value: str) -> int:
    """Convert durations like ``"7d"``, ``"12h"``, ``"15m"`` or ``"3600"`` into seconds."""
    match = _DURATION.match(str(value).lower())
    if match is None:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return int(amount) * _UNIT_SECONDS[unit]


@dataclass(frozen=True)
class Settings:
    jwt_secret: str = "storefront-dev-secret"
    jwt_algorithm: str = "HS256"
    jwt_expiration: str = "7d"
    google_client_id: str | None = None
    google_client_secret: str | None = None
    google_callback_url: str = "http://localhost:8000/auth/google/callback"
    frontend_url: str = "http://localhost:3000"
    cloudinary_cloud_name: str | None = None
    cloudinary_api_key: str | None = None
    cloudinary_api_secret: str | None = None
    upload_folder: str = "delcarajo/products"

    def __post_init__(self):
        # Fail at startup rather than on the first login
        parse_duration(self.jwt_expiration)

    @property
    def jwt_expires_in(self) -> int:
        return parse_duration(self.jwt_expiration)

    @property
    def google_configured(self) -> bool:
        return bool(self.google_client_id and self.google_client_secret)

    @property
    def cloudinary_configured(self) -> bool:
        return bool(self.cloudinary_cloud_name and self.cloudinary_api_key and self.cloudinary_api_secret)

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            jwt_secret=os.getenv("JWT_SECRET", defaults.jwt_secret),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", defaults.jwt_algorithm),
            jwt_expiration=os.getenv("JWT_EXPIRATION", defaults.jwt_expiration),
            google_client_id=os.getenv("GOOGLE_CLIENT_ID"),
            google_client_secret=os.getenv("GOOGLE_CLIENT_SECRET"),
            google_callback_url=os.getenv("GOOGLE_CALLBACK_URL", defaults.google_callback_url),
            frontend_url=os.getenv("FRONTEND_URL", defaults.frontend_url),
            cloudinary_cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME"),
            cloudinary_api_key=os.getenv("CLOUDINARY_API_KEY"),
            cloudinary_api_secret=os.getenv("CLOUDINARY_API_SECRET"),
            upload_folder=os.getenv("UPLOAD_FOLDER", defaults.upload_folder),
        )


_current_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the active settings, loading them from the environment on first use."""
    global _current_settings
    if _current_settings is None:
        _current_settings = Settings.from_env()
    return _current_settings


def set_settings(settings: Settings) -> None:
    """Override the active settings (useful for tests)."""
    global _current_settings
    _current_settings = settings


def reset_settings() -> None:
    """Forget overrides; the next call re-reads the environment."""
    global _current_settings
    _current_settings = None

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:8080",
    "http://localhost:5000",
    "https://webpall.com",
]


@dataclass(frozen=True, slots=True)
class Settings:
    """Centralised application configuration sourced from environment variables."""

    stripe_publishable_key: str = ""
    stripe_secret_key: str = ""
    stripe_api_version: str = "2024-06-20"
    stripe_reuse_customers: bool = False
    cors_allow_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    host: str = "0.0.0.0"
    port: int = 4242

    @property
    def apple_pay_enabled(self) -> bool:
        return bool(self.stripe_publishable_key) and bool(self.stripe_secret_key)

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        origins = os.getenv("CORS_ALLOW_ORIGINS")
        if origins:
            cors_allow_origins = [item.strip() for item in origins.split(",") if item.strip()]
        else:
            cors_allow_origins = list(DEFAULT_CORS_ORIGINS)
        return cls(
            stripe_publishable_key=os.getenv("STRIPE_PUBLISHABLE_KEY", "").strip(),
            stripe_secret_key=(
                os.getenv("STRIPE_SECRET_KEY_TEST") or os.getenv("STRIPE_SECRET_KEY", "")
            ).strip(),
            stripe_api_version=os.getenv("STRIPE_API_VERSION", "2024-06-20"),
            stripe_reuse_customers=cls._get_bool("STRIPE_REUSE_CUSTOMERS"),
            cors_allow_origins=cors_allow_origins,
            host=os.getenv("HOST", "0.0.0.0"),
            port=cls._get_int("PORT", default=4242),
        )

    @staticmethod
    def _get_bool(key: str, default: bool = False) -> bool:
        value = os.getenv(key)
        if value is None:
            return default
        return value.strip().lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _get_int(key: str, default: Optional[int] = None) -> int:
        value = os.getenv(key)
        if value is None:
            if default is None:
                raise RuntimeError(f"Missing required environment variable: {key}")
            return default
        try:
            return int(value)
        except ValueError as exc:
            raise RuntimeError(f"Environment variable {key} must be an integer") from exc

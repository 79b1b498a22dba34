"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# pydantic-settings reads configuration from TWO sources (in priority order):
#
#   1. **Environment variables** -- e.g., REDIS_HOST=pixumcache
#      (highest priority; this is how compose.yaml sets it)
#   2. **.env file** -- key=value lines in the project root .env file
#      (lower priority, used for local development)
#
# Field `redis_host` maps to env var `REDIS_HOST` automatically.
# Defaults below apply when neither source defines a value.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/108.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    """Pixum application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Cache store ===
    # "redis" for deployments, "memory" for a single process without Redis.
    cache_backend: str = "redis"
    redis_host: str = "redis"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: str = ""
    redis_max_connections: int = 50
    # Pixiv rotates CDN URLs occasionally, so entries live for hours, not days.
    cache_ttl: int = Field(default=3 * 60 * 60, gt=0)
    cache_timeout: float = Field(default=1.0, gt=0)  # seconds per Redis command
    cache_key_prefix: str = "pixum"
    memory_cache_max_size: int = 10_000

    # === Upstream (Pixiv) ===
    upstream_base_url: str = "https://www.pixiv.net"
    upstream_referer: str = "https://www.pixiv.net/"
    upstream_timeout: float = Field(default=10.0, gt=0)
    upstream_user_agent: str = _DEFAULT_USER_AGENT
    upstream_accept_language: str = "en"
    # Retries apply to UpstreamUnavailable only; 0 disables them.
    upstream_max_retries: int = Field(default=0, ge=0)
    upstream_retry_backoff: float = Field(default=0.5, ge=0)

    # === Request handling ===
    # Deadline for one artwork request, covering every upstream call and retry.
    request_timeout: float = Field(default=15.0, gt=0)
    # Requests past this many in flight wait for a slot instead of being served.
    max_concurrent_requests: int = Field(default=100, ge=1)

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 3000
    app_env: str = "development"
    log_level: str = "INFO"

    @property
    def redis_url(self) -> str:
        """Redis URL without credentials, for logging."""
        return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"

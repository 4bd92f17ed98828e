"""
Application settings loaded from environment variables.
"""

from pydantic_settings import BaseSettings


DEFAULT_JWT_SECRET = "secret_fallback"


class Settings(BaseSettings):
    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: str = DEFAULT_JWT_SECRET   # HMAC secret for auth tokens
    jwt_expiry_seconds: int = 3600         # 1 hour

    # ── Database ─────────────────────────────────────────────────────────
    database_url: str = ""                 # overrides the DB_* fields when set
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_pass: str = ""
    db_name: str = "users"
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_create_tables: bool = True

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 3000
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: list = ["*"]

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }

    def get_database_url(self) -> str:
        """Return ``database_url`` or build an asyncpg URL from the DB_* fields."""
        if self.database_url:
            return self.database_url
        auth = self.db_user if not self.db_pass else f"{self.db_user}:{self.db_pass}"
        return f"postgresql+asyncpg://{auth}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET


config = Settings()

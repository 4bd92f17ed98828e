"""
Tests for environment-driven settings.
"""

from config.settings import DEFAULT_JWT_SECRET, Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("JWT_SECRET", "PORT", "DATABASE_URL", "DB_HOST", "DB_PASS"):
            monkeypatch.delenv(name, raising=False)
        s = Settings(_env_file=None)
        assert s.port == 3000
        assert s.jwt_expiry_seconds == 3600
        assert s.uses_default_secret
        assert s.jwt_secret == DEFAULT_JWT_SECRET

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET", "from-env")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("DB_HOST", "db.internal")
        s = Settings(_env_file=None)
        assert s.jwt_secret == "from-env"
        assert not s.uses_default_secret
        assert s.port == 8080
        assert s.db_host == "db.internal"

    def test_database_url_built_from_parts(self):
        s = Settings(
            _env_file=None,
            database_url="",
            db_host="h",
            db_port=5433,
            db_user="u",
            db_pass="pw",
            db_name="accounts",
        )
        assert s.get_database_url() == "postgresql+asyncpg://u:pw@h:5433/accounts"

    def test_database_url_without_password(self):
        s = Settings(_env_file=None, database_url="", db_user="u", db_pass="", db_name="n")
        assert s.get_database_url().startswith("postgresql+asyncpg://u@")

    def test_explicit_database_url_wins(self):
        s = Settings(_env_file=None, database_url="sqlite+aiosqlite:///x.db")
        assert s.get_database_url() == "sqlite+aiosqlite:///x.db"

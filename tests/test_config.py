"""
Blog API — Settings Tests
===========================
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from blogapi.config import Settings


class TestDatabaseUrl:

    @pytest.mark.parametrize(
        "raw",
        ["postgres://u:p@db:5432/blog", "postgresql://u:p@db:5432/blog"],
    )
    def test_plain_postgres_urls_use_asyncpg(self, raw):
        assert Settings(database_url=raw).database_url == "postgresql+asyncpg://u:p@db:5432/blog"

    def test_driver_urls_left_alone(self):
        url = "sqlite+aiosqlite:///./blog.db"
        assert Settings(database_url=url).database_url == url

    def test_postgres_url_env_alias(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.setenv("POSTGRES_URL", "postgres://u:p@db:5432/blog")
        assert Settings().database_url == "postgresql+asyncpg://u:p@db:5432/blog"

    def test_is_sqlite(self):
        assert Settings(database_url="sqlite+aiosqlite://").is_sqlite is True
        assert Settings(database_url="postgres://u:p@db/blog").is_sqlite is False


class TestValidation:

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(log_level="LOUD")

    def test_jwt_secret_required(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET", raising=False)
        with pytest.raises(PydanticValidationError, match="jwt_secret"):
            Settings(_env_file=None)

    def test_empty_jwt_secret_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(jwt_secret="")

    def test_jwt_secret_from_env(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET", "from-the-environment")
        assert Settings().jwt_secret == "from-the-environment"

    def test_cors_origins_list(self):
        s = Settings(cors_origins="http://a.test, http://b.test")
        assert s.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_token_defaults(self):
        s = Settings()
        assert s.access_token_expire_minutes == 60
        assert s.issue_token_on_signup is False

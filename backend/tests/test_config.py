"""
Boutique Backend — Settings Tests
==================================

What:  Tests for URL assembly, CSV list parsing and production checks.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from boutique.config import DEV_JWT_SECRET, Settings


class TestDatabaseUrl:

    def test_full_url_wins(self):
        s = Settings(database_url="sqlite+aiosqlite:///./x.db")
        assert s.sqlalchemy_url == "sqlite+aiosqlite:///./x.db"
        assert s.is_sqlite

    def test_assembled_from_parts(self):
        s = Settings(
            database_url="",
            db_host="db",
            db_port=5433,
            db_user="shop",
            db_password="p@ss:word",
            db_name="boutique",
        )
        url = s.sqlalchemy_url
        assert url.drivername == "postgresql+asyncpg"
        assert url.host == "db"
        assert url.port == 5433
        assert url.password == "p@ss:word"
        assert not s.is_sqlite


class TestCorsLists:

    def test_defaults(self):
        s = Settings(cors_origins="http://localhost:3000", cors_methods="GET,POST", cors_headers="Content-Type")
        assert s.cors_origins_list == ["http://localhost:3000"]
        assert s.cors_methods_list == ["GET", "POST"]
        assert s.cors_headers_list == ["Content-Type"]

    def test_whitespace_and_case(self):
        s = Settings(cors_methods=" get, post ,put,", cors_origins="https://a.test, https://b.test")
        assert s.cors_methods_list == ["GET", "POST", "PUT"]
        assert s.cors_origins_list == ["https://a.test", "https://b.test"]


class TestValidation:

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(log_level="loud")

    def test_short_secret_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(jwt_secret="short")

    def test_dev_secret_rejected_in_production(self):
        s = Settings(environment="production", jwt_secret=DEV_JWT_SECRET)
        with pytest.raises(ValueError, match="JWT_SECRET"):
            s.validate_required_for_production()

    def test_dev_secret_allowed_in_development(self):
        Settings(environment="development", jwt_secret=DEV_JWT_SECRET).validate_required_for_production()

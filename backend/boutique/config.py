"""
Boutique Backend — Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a `settings` object.
Who:   Read by the application factory; everything else receives the values
       it needs through constructor arguments.
When:  Loaded once at module import time; validated before the app starts.

Database connection:
    Either set DATABASE_URL to a complete async SQLAlchemy URL, or leave it
    empty and provide DB_HOST / DB_PORT / DB_USER / DB_PASSWORD / DB_NAME,
    from which a postgresql+asyncpg URL is assembled.
"""

from typing import List, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL, make_url

DEV_JWT_SECRET = "dev-secret-change-me-in-production"


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults. Production deployments MUST
    override JWT_SECRET and the database credentials.
    """

    # ── Environment ───────────────────────────────────────────────────────
    environment: str = Field(default="development")

    # ── Database ──────────────────────────────────────────────────────────
    # A full URL wins over the individual parts below
    database_url: str = Field(default="", description="Async SQLAlchemy connection URL")

    db_host: str = Field(default="localhost")
    db_port: int = Field(default=5432, ge=1, le=65535)
    db_user: str = Field(default="boutique")
    db_password: str = Field(default="boutique_secret")
    db_name: str = Field(default="boutique")

    db_pool_size: int = Field(default=10, ge=1, le=100)
    db_max_overflow: int = Field(default=5, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # ── Session tokens ────────────────────────────────────────────────────
    # Signing secret for HS256 session tokens. Token lifetime is fixed
    # (boutique.security.TOKEN_TTL).
    jwt_secret: str = Field(default=DEV_JWT_SECRET, min_length=16)
    jwt_algorithm: str = Field(default="HS256")

    # ── Product images ────────────────────────────────────────────────────
    image_dir: str = Field(default="./public/images")
    image_url_prefix: str = Field(default="/images")
    # 5MB = 5 * 1024 * 1024
    max_image_size: int = Field(default=5_242_880, ge=1_024, le=52_428_800)

    # ── CORS ──────────────────────────────────────────────────────────────
    # The default policy admits a single frontend origin, GET/POST only and
    # the Content-Type header only. PUT preflights and the Authorization
    # header are therefore refused for browser clients unless widened here.
    cors_origins: str = Field(default="http://localhost:3000")
    cors_methods: str = Field(default="GET,POST")
    cors_headers: str = Field(default="Content-Type")

    @property
    def cors_origins_list(self) -> List[str]:
        return _split_csv(self.cors_origins)

    @property
    def cors_methods_list(self) -> List[str]:
        return [m.upper() for m in _split_csv(self.cors_methods)]

    @property
    def cors_headers_list(self) -> List[str]:
        return _split_csv(self.cors_headers)

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=5001, ge=1024, le=65535)

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def sqlalchemy_url(self) -> Union[str, URL]:
        """
        The URL handed to create_async_engine.

        URL.create escapes special characters in the password, which a
        hand-formatted string would not.
        """
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+asyncpg",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.sqlalchemy_url).get_backend_name() == "sqlite"

    def validate_required_for_production(self) -> None:
        """
        Validates that critical settings are configured.

        Called during app startup (lifespan). Raises ValueError listing every
        problem found.
        """
        errors = []
        if self.environment == "production" and self.jwt_secret == DEV_JWT_SECRET:
            errors.append("JWT_SECRET is still the development default.")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Default instance used by the module-level application in boutique.main
settings = Settings()

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SETTINGS_BASE = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    validate_by_name=True,
)

_INSECURE_SECRETS = ("dev", "development", "test", "secret", "changeme")


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///authportal.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _SETTINGS_BASE


class HashingConfig(BaseSettings):
    # werkzeug method string, work factor included: "scrypt:N:r:p" or "pbkdf2:sha256:iterations"
    method: str = Field("scrypt:32768:8:1", alias="PASSWORD_HASH_METHOD")
    salt_length: int = Field(16, ge=8, alias="PASSWORD_SALT_LENGTH")

    model_config = _SETTINGS_BASE


class SecurityConfig(BaseSettings):
    cookie_name: str = Field("authportal_session", alias="SESSION_COOKIE_NAME")
    cookie_secure: bool = Field(False, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Lax", alias="COOKIE_SAMESITE")
    encrypt_session: bool = Field(False, alias="SESSION_ENCRYPT")
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = _SETTINGS_BASE

    @field_validator("cookie_secure", "encrypt_session", "enable_hsts", mode="before")
    @classmethod
    def _bools(cls, value: str | bool) -> bool:
        return _parse_bool(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _hashing_config_factory() -> HashingConfig:
    return HashingConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    # None means a fresh key is generated at startup and lives only as long as the process
    session_secret: str | None = Field(None, alias="SESSION_SECRET")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    hashing: HashingConfig = Field(default_factory=_hashing_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
        validate_assignment=True,
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.session_secret is not None and (
            self.session_secret.lower() in _INSECURE_SECRETS or len(self.session_secret) < 16
        ):
            print(
                "\n❌ CRITICAL SECURITY ERROR: Insecure SESSION_SECRET detected in production!\n"
                "   Leave SESSION_SECRET unset to generate a per-process key, or use a strong random value.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        warnings = []
        if not self.security.cookie_secure:
            warnings.append("⚠️  Cookie Secure flag is DISABLED (use HTTPS!)")
        if not self.security.enable_hsts:
            warnings.append("⚠️  HSTS is DISABLED (recommended for HTTPS)")

        if warnings:
            print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = ["AppConfig", "DatabaseConfig", "HashingConfig", "SecurityConfig", "load_config"]

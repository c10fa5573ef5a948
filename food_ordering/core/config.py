"""
Application Configuration Module

Centralizes all configuration using environment variables with Pydantic Settings.
Supports three modes:
    - DEVELOPMENT: Seeds the demo menu and exposes verbose errors when DEBUG is on
    - STAGING: Same stack, intended for pre-production smoke tests
    - PRODUCTION: Secure session cookies are expected

All state lives in process memory, so configuration only controls behavior
(session cookie shape, seeding, order status rules), never storage location.

Usage:
    from food_ordering.core.config import get_settings

    settings = get_settings()
    if settings.enforce_admin_transitions:
        # Admin status changes must follow the lifecycle table

Author: Khalil Bannouri
Version: 3.1.0
"""

import logging
import sys
from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentMode(str, Enum):
    """
    Application environment modes.

    Attributes:
        DEVELOPMENT: Local work with the seeded demo menu
        PRODUCTION: Live environment
        STAGING: Pre-production testing
    """
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    STAGING = "staging"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.

    Attributes:
        env_mode: Current environment (development/production/staging)
        debug: Enable verbose logging and error details

        # API Configuration
        api_host: Host to bind the API server
        api_port: Port for the API server

        # Sessions
        session_cookie_name: Cookie carrying the opaque session token
        session_cookie_secure: Send the cookie over HTTPS only
        session_cookie_samesite: SameSite policy of the cookie

        # Identity
        admin_username: Pre-provisioned administrator identity
        forbidden_username: Identity that can never authenticate

        # Business Rules
        seed_menu: Load the demo menu on startup
        enforce_admin_transitions: Restrict admin status changes to the lifecycle table
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================

    env_mode: EnvironmentMode = Field(
        default=EnvironmentMode.DEVELOPMENT,
        description="Application environment mode"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )

    # ==========================================================================
    # APPLICATION
    # ==========================================================================

    app_name: str = Field(
        default="Food Ordering Service",
        description="Application display name"
    )
    app_version: str = Field(
        default="3.1.0",
        description="Application version"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    api_port: int = Field(
        default=3000,
        description="API server port"
    )
    cors_origins: str = Field(
        default="http://localhost:5173,http://localhost:3000",
        description="Comma-separated list of origins allowed to send credentials"
    )

    # ==========================================================================
    # SESSIONS
    # ==========================================================================

    session_cookie_name: str = Field(
        default="sid",
        description="Name of the cookie carrying the session token"
    )
    session_cookie_secure: bool = Field(
        default=False,
        description="Only send the session cookie over HTTPS"
    )
    session_cookie_samesite: str = Field(
        default="lax",
        description="SameSite attribute of the session cookie"
    )

    # ==========================================================================
    # IDENTITY
    # ==========================================================================

    admin_username: str = Field(
        default="admin",
        description="Pre-provisioned administrator username"
    )
    forbidden_username: str = Field(
        default="dog",
        description="Reserved username that can never register or authenticate"
    )

    # ==========================================================================
    # BUSINESS RULES
    # ==========================================================================

    seed_menu: bool = Field(
        default=True,
        description="Populate the catalog with the demo menu on startup"
    )
    enforce_admin_transitions: bool = Field(
        default=False,
        description="Reject admin status changes outside the order lifecycle table"
    )

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("env_mode", mode="before")
    @classmethod
    def validate_env_mode(cls, v: str) -> EnvironmentMode:
        """Convert string to EnvironmentMode enum."""
        if isinstance(v, EnvironmentMode):
            return v
        try:
            return EnvironmentMode(v.lower())
        except ValueError:
            valid = [e.value for e in EnvironmentMode]
            raise ValueError(f"Invalid env_mode. Must be one of: {valid}")

    @field_validator("session_cookie_samesite")
    @classmethod
    def validate_samesite(cls, v: str) -> str:
        """Restrict SameSite to the values browsers understand."""
        value = v.lower()
        if value not in ("lax", "strict", "none"):
            raise ValueError("session_cookie_samesite must be lax, strict or none")
        return value

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.env_mode == EnvironmentMode.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.env_mode == EnvironmentMode.PRODUCTION

    @property
    def cors_origins_list(self) -> list[str]:
        """Get allowed CORS origins as a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    # ==========================================================================
    # VALIDATION METHODS
    # ==========================================================================

    def validate_production_config(self) -> list[str]:
        """
        Check settings that should be hardened outside development.

        Returns:
            List of settings that need attention (empty if all good)
        """
        warnings = []

        if self.is_production:
            if not self.session_cookie_secure:
                warnings.append("SESSION_COOKIE_SECURE")
            if self.debug:
                warnings.append("DEBUG")

        return warnings


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once per process; call ``get_settings.cache_clear()``
    after changing the environment (tests do this).

    Returns:
        Settings: Configured application settings
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured package logger
    """
    settings = get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-25s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return logging.getLogger("food_ordering")

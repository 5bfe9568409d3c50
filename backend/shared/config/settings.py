"""
Application settings loaded from environment variables.
Uses pydantic-settings for type-safe configuration.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


# Signing secrets that must never be accepted in production
WEAK_SECRETS = frozenset({
    "your-secret-key",
    "changeme",
    "secret",
    "password",
    "default",
    "dev-secret",
})


class ConfigurationError(RuntimeError):
    """Raised when a required setting is missing or unusable."""


class Settings(BaseSettings):
    """Application settings with defaults for development."""

    # Database
    database_url: str = "sqlite:///./recipe_master.db"

    # JWT Configuration
    # No default: the service refuses to sign tokens without an explicit secret
    jwt_secret: str | None = None
    jwt_issuer: str = "recipe-master"
    jwt_audience: str = "recipe-master-users"
    jwt_expire_days: int = 7

    # New accounts start on the free plan with a trial expiry
    trial_days: int = 30
    # Length of a paid subscription period after an upgrade
    subscription_period_days: int = 30

    # Comma-separated list of allowed origins (empty uses default localhost list)
    allowed_origins: str = ""

    # Server
    rest_api_port: int = 8000

    # Environment
    environment: str = "development"
    debug: bool = True

    # Rate limiting (slowapi rate strings)
    login_rate_limit: str = "5/minute"
    register_rate_limit: str = "3/minute"

    # Demo tenant created on startup when the database is empty
    seed_demo_data: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    def require_jwt_secret(self) -> str:
        """Return the signing secret or raise if it is not configured."""
        if not self.jwt_secret:
            raise ConfigurationError(
                "JWT_SECRET is not configured; refusing to sign or verify tokens"
            )
        return self.jwt_secret

    def validate_secrets(self) -> list[str]:
        """
        Validate security-relevant configuration.
        Returns a list of validation errors. Empty list means all checks pass.

        A missing JWT secret is an error in every environment. The remaining
        checks only apply to production.
        """
        errors = []

        if not self.jwt_secret:
            errors.append("JWT_SECRET must be set")

        if self.environment == "production":
            if self.jwt_secret and (
                self.jwt_secret.lower() in WEAK_SECRETS or len(self.jwt_secret) < 32
            ):
                errors.append(
                    "JWT_SECRET must be at least 32 characters and not a default value in production"
                )

            if self.debug:
                errors.append("DEBUG must be False in production")

            if not self.allowed_origins:
                errors.append(
                    "ALLOWED_ORIGINS must be set in production (comma-separated list of allowed domains)"
                )

        return errors


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience exports
settings = get_settings()

# Direct access to commonly used settings
DATABASE_URL = settings.database_url
JWT_ISSUER = settings.jwt_issuer
JWT_AUDIENCE = settings.jwt_audience

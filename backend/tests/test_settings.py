"""
Tests for configuration validation and fail-fast startup.
"""

import pytest

import rest_api.core.lifespan as lifespan_module
from shared.config.settings import ConfigurationError, Settings


def make_settings(**values):
    # _env_file=None keeps a developer's .env out of the picture
    return Settings(_env_file=None, **values)


class TestValidateSecrets:
    def test_missing_secret_is_error_everywhere(self):
        assert "JWT_SECRET must be set" in make_settings(jwt_secret=None).validate_secrets()
        assert "JWT_SECRET must be set" in make_settings(
            jwt_secret=None, environment="production"
        ).validate_secrets()

    def test_development_accepts_short_secret(self):
        assert make_settings(jwt_secret="short").validate_secrets() == []

    def test_production_rejects_weak_secret(self):
        errors = make_settings(
            jwt_secret="changeme", environment="production", debug=False, allowed_origins="https://app.com"
        ).validate_secrets()
        assert len(errors) == 1
        assert "32 characters" in errors[0]

    def test_production_requires_debug_off_and_origins(self):
        errors = make_settings(jwt_secret="x" * 40, environment="production", debug=True).validate_secrets()
        assert any("DEBUG" in e for e in errors)
        assert any("ALLOWED_ORIGINS" in e for e in errors)

    def test_good_production_config(self):
        assert make_settings(
            jwt_secret="x" * 40, environment="production", debug=False, allowed_origins="https://app.com"
        ).validate_secrets() == []

    def test_require_jwt_secret(self):
        with pytest.raises(ConfigurationError):
            make_settings(jwt_secret=None).require_jwt_secret()
        assert make_settings(jwt_secret="abc").require_jwt_secret() == "abc"


class TestCheckConfiguration:
    def test_refuses_to_start_without_secret(self, monkeypatch):
        monkeypatch.setattr(lifespan_module, "settings", make_settings(jwt_secret=None))
        with pytest.raises(RuntimeError, match="JWT_SECRET"):
            lifespan_module.check_configuration()

    def test_refuses_insecure_production(self, monkeypatch):
        monkeypatch.setattr(
            lifespan_module,
            "settings",
            make_settings(jwt_secret="changeme", environment="production"),
        )
        with pytest.raises(RuntimeError, match="Production configuration errors"):
            lifespan_module.check_configuration()

    def test_development_config_starts(self, monkeypatch):
        monkeypatch.setattr(lifespan_module, "settings", make_settings(jwt_secret="dev"))
        lifespan_module.check_configuration()

"""Unit tests for settings loading and the YAML overlay."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from clanboard.config import MetricsConfig, ServerConfig, Settings
from clanboard.models import MetricKind


def test_defaults() -> None:
    settings = Settings(_env_file=None, config_path=Path("missing.yaml")).with_yaml_config()

    assert settings.store.backend == "mongo"
    assert settings.store.seasons_collection == "sheets"
    assert settings.auth.jwt_algorithm == "HS256"
    assert settings.metrics.policy_for(MetricKind.MERITS) == "sum"
    assert settings.is_development


def test_yaml_overlay_merges_sections(tmp_path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "environment: production\n"
        "store:\n"
        "  backend: memory\n"
        "  database: clan_prod\n"
        "metrics:\n"
        "  home_server: 42\n"
        "  aggregation:\n"
        "    MERITS: max\n"
    )

    settings = Settings(_env_file=None, config_path=config_path).with_yaml_config()

    assert settings.environment == "production"
    assert not settings.is_development
    assert settings.store.backend == "memory"
    assert settings.store.database == "clan_prod"
    assert settings.store.users_collection == "users"
    assert settings.metrics.home_server == 42
    assert settings.metrics.policy_for(MetricKind.MERITS) == "max"
    assert settings.metrics.policy_for(MetricKind.KILLS) == "sum"


def test_nested_environment_variables(monkeypatch) -> None:
    monkeypatch.setenv("STORE__DATABASE", "from_env")
    monkeypatch.setenv("AUTH__JWT_SECRET", "s3cret")

    settings = Settings(_env_file=None, config_path=Path("missing.yaml"))

    assert settings.store.database == "from_env"
    assert settings.auth.jwt_secret == "s3cret"


def test_origins_accept_comma_separated_string() -> None:
    server = ServerConfig(allowed_origins="http://a.test, http://b.test,")

    assert server.allowed_origins == ["http://a.test", "http://b.test"]


def test_unknown_aggregation_policy_rejected() -> None:
    with pytest.raises(ValidationError):
        MetricsConfig(aggregation={"MERITS": "median"})


def test_settings_are_frozen() -> None:
    settings = Settings(_env_file=None, config_path=Path("missing.yaml"))

    with pytest.raises(ValidationError):
        settings.debug = True

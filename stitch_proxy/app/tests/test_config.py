"""
Unit Tests for Configuration and Transport Selection
====================================================

Tests for stitch_proxy/app/config.py and stitch_proxy/app/transport.py

Run tests:
----------
    pytest stitch_proxy/app/tests/test_config.py -v
"""

import pydantic
import pytest

from stitch_proxy.app.config import (
    DEFAULT_GRPC_TARGET,
    DEFAULT_MAX_UPLOAD_BYTES,
    DEFAULT_PANO_URL,
    Settings,
    validate_configuration,
)
from stitch_proxy.app.transport import TransportMode, select_transport


ENV_KEYS = [
    "GRPC",
    "PANO_URL",
    "PANO_KEY",
    "GRPC_TARGET",
    "MAX_UPLOAD_BYTES",
    "BACKEND_TIMEOUT_SECONDS",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove proxy variables from the environment"""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings(_env_file=None)

    assert settings.GRPC is False
    assert settings.pano_url_str == DEFAULT_PANO_URL
    assert settings.PANO_KEY == ""
    assert settings.GRPC_TARGET == DEFAULT_GRPC_TARGET
    assert settings.MAX_UPLOAD_BYTES == DEFAULT_MAX_UPLOAD_BYTES == 100 * 1024 * 1024
    assert settings.BACKEND_TIMEOUT_SECONDS is None
    assert select_transport(settings) is TransportMode.HTTP


def test_grpc_flag_from_environment(clean_env):
    clean_env.setenv("GRPC", "true")
    clean_env.setenv("PANO_KEY", "env-key")

    settings = Settings(_env_file=None)

    assert settings.GRPC is True
    assert settings.PANO_KEY == "env-key"
    assert select_transport(settings) is TransportMode.RPC


def test_grpc_flag_false_selects_http(clean_env):
    clean_env.setenv("GRPC", "false")

    assert select_transport(Settings(_env_file=None)) is TransportMode.HTTP


@pytest.mark.parametrize("value", ["", "foo", "1", "yes", "on", "false"])
def test_grpc_flag_only_true_enables_grpc(clean_env, value):
    """Test that anything other than "true" keeps HTTP mode instead of failing"""
    clean_env.setenv("GRPC", value)

    settings = Settings(_env_file=None)

    assert settings.GRPC is False
    assert select_transport(settings) is TransportMode.HTTP


@pytest.mark.parametrize("value", ["TRUE", "True", " true "])
def test_grpc_flag_true_is_case_insensitive(clean_env, value):
    clean_env.setenv("GRPC", value)

    assert select_transport(Settings(_env_file=None)) is TransportMode.RPC


def test_blank_pano_url_falls_back_to_default(clean_env):
    settings = Settings(_env_file=None, PANO_URL="  ")

    assert settings.pano_url_str == DEFAULT_PANO_URL


def test_settings_are_frozen(clean_env):
    settings = Settings(_env_file=None)

    with pytest.raises(pydantic.ValidationError):
        settings.GRPC = True


def test_invalid_log_level_rejected(clean_env):
    with pytest.raises(pydantic.ValidationError):
        Settings(_env_file=None, LOG_LEVEL="LOUD")


def test_log_level_normalised(clean_env):
    assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"


def test_validate_configuration_warns_about_missing_key(clean_env):
    report = validate_configuration(Settings(_env_file=None))

    assert report["transport"] == "http"
    assert any("PANO_KEY" in warning for warning in report["warnings"])


def test_validate_configuration_warns_about_ignored_url(clean_env):
    settings = Settings(_env_file=None, GRPC=True, PANO_KEY="k", PANO_URL="http://other/stitch")

    report = validate_configuration(settings)

    assert report["transport"] == "grpc"
    assert report["warnings"] == ["PANO_URL is set but ignored because GRPC is enabled"]

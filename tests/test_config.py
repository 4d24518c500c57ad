"""Tests for CivicConfig."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from civiccore import (
    ActiveHierarchy,
    AdminLevel,
    CivicConfig,
    ConfigurationError,
    LogLevel,
    NamedUnit,
    User,
    hierarchy_path,
    load_config_from_env,
    membership_path,
    scope_description,
)


class TestCivicConfig:
    """Tests for CivicConfig model."""

    def test_create_default_config(self) -> None:
        """Test creating a CivicConfig with defaults."""
        config = CivicConfig()
        assert config.log_level == LogLevel.INFO
        assert config.log_json is False
        assert config.service_name is None
        assert config.path_separator == " - "
        assert config.membership_separator == " / "

    def test_log_level_from_string(self) -> None:
        """Test creating config with log level as string, any case."""
        assert CivicConfig(log_level="debug").log_level == LogLevel.DEBUG

    def test_log_level_invalid(self) -> None:
        """Test creating config with invalid log level."""
        with pytest.raises(ValueError, match="Invalid log level"):
            CivicConfig(log_level="VERBOSE")

    def test_empty_separator_rejected(self) -> None:
        """Separators must not be empty."""
        with pytest.raises(ValueError, match="Separator must not be empty"):
            CivicConfig(path_separator="")

    def test_extra_fields_forbidden(self) -> None:
        """Test that extra fields are forbidden."""
        with pytest.raises(Exception):  # Pydantic validation error
            CivicConfig(redis_url="redis://localhost")  # type: ignore[call-arg]


class TestLoadConfigFromEnv:
    """Tests for load_config_from_env function."""

    @patch.dict(os.environ, {}, clear=True)
    def test_load_defaults(self) -> None:
        """Test loading config with no environment variables."""
        config = load_config_from_env()
        assert config.log_level == LogLevel.INFO
        assert config.log_json is False
        assert config.path_separator == " - "

    @patch.dict(
        os.environ,
        {
            "LOG_LEVEL": "DEBUG",
            "LOG_JSON": "yes",
            "SERVICE_NAME": "civic-client",
            "HIERARCHY_PATH_SEPARATOR": " › ",
            "HIERARCHY_MEMBERSHIP_SEPARATOR": " | ",
        },
        clear=True,
    )
    def test_load_from_env(self) -> None:
        """Test loading config from environment variables."""
        config = load_config_from_env()
        assert config.log_level == LogLevel.DEBUG
        assert config.log_json is True
        assert config.service_name == "civic-client"
        assert config.path_separator == " › "
        assert config.membership_separator == " | "

    @patch.dict(os.environ, {"LOG_LEVEL": "LOUD"}, clear=True)
    def test_invalid_env_raises_configuration_error(self) -> None:
        """Invalid values surface as ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_from_env()
        assert exc_info.value.code == "CONFIGURATION_ERROR"
        assert exc_info.value.details["errors"]


class TestDisplaySeparators:
    """Configured separators drive the rendered hierarchy strings."""

    def test_path_separator_used_by_paths(self) -> None:
        """hierarchy_path and scope_description join with the configured separator."""
        config = CivicConfig(path_separator=" > ")
        user = User(
            admin_level=AdminLevel.LOCALITY,
            region_id="R1",
            locality_id="L1",
            region=NamedUnit(id="R1", name="الخرطوم"),
            locality=NamedUnit(id="L1", name="بحري"),
        )
        assert hierarchy_path(user, config.path_separator) == "الخرطوم > بحري"
        assert scope_description(user, config.path_separator) == "المحلية > التسلسل الأصلي > الخرطوم > بحري"

    def test_membership_separator_from_env(self) -> None:
        """HIERARCHY_MEMBERSHIP_SEPARATOR reaches membership_path."""
        user = User(
            sector_region_id="SR1",
            sector_locality_id="SL1",
            sector_region=NamedUnit(id="SR1", name="الصحة"),
            sector_locality=NamedUnit(id="SL1", name="الرعاية"),
        )
        with patch.dict(os.environ, {"HIERARCHY_MEMBERSHIP_SEPARATOR": " | "}, clear=True):
            config = load_config_from_env()
        assert membership_path(user, ActiveHierarchy.SECTOR, config.membership_separator) == "الصحة | الرعاية"

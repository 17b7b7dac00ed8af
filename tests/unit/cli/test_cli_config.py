"""Tests for CLI configuration loading."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from leftovers.cli.config import ENV_VARS, Config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove every environment variable Config reads."""
    monkeypatch.delenv("LEFTOVERS_CONFIG", raising=False)
    for env_var in ENV_VARS:
        monkeypatch.delenv(env_var, raising=False)


class TestConfigLoad:
    """Test suite for Config.load."""

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        """Test a missing config file leaves defaults in place."""
        config = Config.load(str(tmp_path / "missing.yaml"))

        assert config == Config()
        assert config.log_level == "INFO"
        assert config.no_confirm is False

    def test_reads_yaml_file(self, tmp_path: Path) -> None:
        """Test values are read from the YAML file."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("iaas: aws\naws_region: eu-west-1\nno_confirm: true\nlog_level: DEBUG\n")

        config = Config.load(str(config_path))

        assert config.iaas == "aws"
        assert config.aws_region == "eu-west-1"
        assert config.no_confirm is True
        assert config.log_level == "DEBUG"

    def test_config_path_from_environment(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test LEFTOVERS_CONFIG selects the file when no path is given."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("iaas: gcp\n")
        monkeypatch.setenv("LEFTOVERS_CONFIG", str(config_path))

        assert Config.load().iaas == "gcp"

    def test_environment_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test environment variables win over file values."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("iaas: aws\naws_region: eu-west-1\n")
        monkeypatch.setenv("BBL_AWS_REGION", "us-west-2")
        monkeypatch.setenv("LEFTOVERS_NO_CONFIRM", "yes")

        config = Config.load(str(config_path))

        assert config.iaas == "aws"
        assert config.aws_region == "us-west-2"
        assert config.no_confirm is True

    @pytest.mark.parametrize("value,expected", [("1", True), ("true", True), ("no", False), ("0", False)])
    def test_no_confirm_strings(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, value: str, expected: bool) -> None:
        """Test string values of no_confirm are parsed as booleans."""
        monkeypatch.setenv("LEFTOVERS_NO_CONFIRM", value)

        assert Config.load(str(tmp_path / "missing.yaml")).no_confirm is expected

    def test_unknown_keys_are_ignored(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Test unknown keys are warned about and skipped."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("iaas: aws\ncolour: blue\n")

        with caplog.at_level(logging.WARNING, logger="leftovers.cli.config"):
            config = Config.load(str(config_path))

        assert config.iaas == "aws"
        assert not hasattr(config, "colour")
        assert "Ignoring unknown config key: colour" in caplog.text

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test an empty file is treated as no settings."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("")

        assert Config.load(str(config_path)) == Config()

    def test_non_mapping_file(self, tmp_path: Path) -> None:
        """Test a YAML list is rejected."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("- aws\n- gcp\n")

        with pytest.raises(ValueError, match="must contain a mapping"):
            Config.load(str(config_path))

    def test_unsupported_iaas(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test an unknown provider is a configuration error."""
        monkeypatch.setenv("BBL_IAAS", "azure")

        with pytest.raises(ValueError, match="Unsupported iaas: azure"):
            Config.load(str(tmp_path / "missing.yaml"))

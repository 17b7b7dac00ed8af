"""CLI configuration.

Settings come from a YAML file, then environment variables, then CLI options
(applied by the caller), each overriding the previous.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".leftovers" / "config.yaml"

SUPPORTED_IAAS = ("aws", "gcp")

# Environment variable -> config field
ENV_VARS = {
    "BBL_IAAS": "iaas",
    "BBL_AWS_REGION": "aws_region",
    "BBL_GCP_SERVICE_ACCOUNT_KEY": "gcp_service_account_key",
    "LEFTOVERS_LOG_LEVEL": "log_level",
    "LEFTOVERS_NO_CONFIRM": "no_confirm",
}

TRUTHY = ("1", "true", "yes", "on")


@dataclass
class Config:
    """Resolved CLI settings.

    Credentials (access keys, service account keys) may be set here, but
    secret access keys are only ever read from the environment or CLI options.

    Attributes:
        iaas: Provider to clean up ("aws" or "gcp")
        aws_region: AWS region
        gcp_service_account_key: Path to (or JSON of) a GCP service account key
        log_level: Default log level
        no_confirm: Skip confirmation prompts by default
    """

    iaas: Optional[str] = None
    aws_region: Optional[str] = None
    gcp_service_account_key: Optional[str] = None
    log_level: str = "INFO"
    no_confirm: bool = False

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        """Load configuration from file and environment.

        Args:
            path: Config file path (default: $LEFTOVERS_CONFIG or ~/.leftovers/config.yaml)

        Returns:
            Config instance

        Raises:
            ValueError: If the file is not a YAML mapping or names an unknown iaas
        """
        config = cls()

        config_path = Path(path or os.environ.get("LEFTOVERS_CONFIG") or DEFAULT_CONFIG_PATH).expanduser()
        if config_path.is_file():
            config._apply(config._read_file(config_path))

        config._apply(
            {field_name: os.environ[env_var] for env_var, field_name in ENV_VARS.items() if os.environ.get(env_var)}
        )
        config.validate()
        return config

    def validate(self) -> bool:
        if self.iaas is not None and self.iaas not in SUPPORTED_IAAS:
            raise ValueError(f"Unsupported iaas: {self.iaas}. Must be one of: {', '.join(SUPPORTED_IAAS)}")
        return True

    @staticmethod
    def _read_file(config_path: Path) -> dict[str, Any]:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping")

        logger.debug(f"Loaded config from {config_path}")
        return data

    def _apply(self, values: dict[str, Any]) -> None:
        known = {f.name for f in fields(self)}
        for key, value in values.items():
            if key not in known:
                logger.warning(f"Ignoring unknown config key: {key}")
                continue

            if key == "no_confirm" and isinstance(value, str):
                value = value.strip().lower() in TRUTHY

            setattr(self, key, value)

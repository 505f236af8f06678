"""
CLI Configuration

Configuration management for the sve CLI.
Supports environment variables and JSON or YAML configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from core.config.runtime import ENV_PREFIX, RuntimeConfig
from core.crypto.keys import DEFAULT_PRIVATE_KEY_FILE, DEFAULT_PUBLIC_KEY_FILE


DEFAULT_CONFIG_FILE = "sve.json"
YAML_SUFFIXES = (".yaml", ".yml")


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Protocol settings (line endings, header dialect, key source)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)

    # Exit with EXIT_VERIFICATION_FAILED on an invalid signature
    strict_mode: bool = False

    # Key files
    public_key_file: str = DEFAULT_PUBLIC_KEY_FILE
    private_key_file: str = DEFAULT_PRIVATE_KEY_FILE

    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.runtime.to_dict(),
            "strict_mode": self.strict_mode,
            "public_key_file": self.public_key_file,
            "private_key_file": self.private_key_file,
            "log_level": self.log_level,
            "log_file": self.log_file,
            "default_output_format": self.default_output_format,
        }


def load_config_from_env() -> CLIConfig:
    """Load configuration from environment variables."""
    config = CLIConfig(runtime=RuntimeConfig.from_env())

    if os.getenv(f"{ENV_PREFIX}STRICT_MODE"):
        config.strict_mode = os.getenv(f"{ENV_PREFIX}STRICT_MODE", "false").lower() == "true"

    config.public_key_file = os.getenv(f"{ENV_PREFIX}PUBLIC_KEY_FILE", config.public_key_file)
    config.private_key_file = os.getenv(f"{ENV_PREFIX}PRIVATE_KEY_FILE", config.private_key_file)

    config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", config.log_level)
    config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")

    return config


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON or YAML (.yaml, .yml) file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(f) or {}
        else:
            data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")

    config = CLIConfig(runtime=RuntimeConfig.from_dict(data))

    config.strict_mode = bool(data.get("strict_mode", config.strict_mode))
    config.public_key_file = data.get("public_key_file") or config.public_key_file
    config.private_key_file = data.get("private_key_file") or config.private_key_file

    config.log_level = data.get("log_level") or config.log_level
    config.log_file = data.get("log_file", config.log_file)

    config.default_output_format = data.get("default_output_format") or config.default_output_format

    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        default_paths = [
            Path.cwd() / DEFAULT_CONFIG_FILE,
            Path.cwd() / f".{DEFAULT_CONFIG_FILE}",
            Path.cwd() / "sve.yaml",
            Path.home() / ".config" / "sve" / "config.json",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    # Env takes precedence
    config.runtime = config.runtime.with_env_overrides()

    env_config = load_config_from_env()
    if os.getenv(f"{ENV_PREFIX}STRICT_MODE"):
        config.strict_mode = env_config.strict_mode
    if os.getenv(f"{ENV_PREFIX}PUBLIC_KEY_FILE"):
        config.public_key_file = env_config.public_key_file
    if os.getenv(f"{ENV_PREFIX}PRIVATE_KEY_FILE"):
        config.private_key_file = env_config.private_key_file
    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = env_config.log_level
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = env_config.log_file

    return config


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "line_ending_policy": "normalize",
  "header_dialect": "standard",
  "key_source": "embedded",
  "strict_mode": false,
  "public_key_file": "pubkey",
  "private_key_file": "privkey",
  "log_level": "WARNING",
  "log_file": null,
  "default_output_format": "human"
}
"""

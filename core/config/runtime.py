"""
Runtime Configuration

Protocol-level settings shared by the sign and verify pipelines:
line-ending policy, header dialect and where verification takes the
public key from.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from core.message.headers import STANDARD, HeaderDialect, get_dialect
from core.message.lines import LineEndingPolicy

load_dotenv()


ENV_PREFIX = "SVE_"


class KeySource(str, Enum):
    """Where the verify pipeline takes the public key from."""
    EMBEDDED = "embedded"  # Public-Key header, mandatory
    FILE = "file"  # separately supplied public key file


@dataclass
class RuntimeConfig:
    """
    Protocol configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    line_ending_policy: LineEndingPolicy = LineEndingPolicy.NORMALIZE
    header_dialect: HeaderDialect = STANDARD
    key_source: KeySource = KeySource.EMBEDDED

    def __post_init__(self):
        self.line_ending_policy = LineEndingPolicy(self.line_ending_policy)
        self.header_dialect = get_dialect(self.header_dialect)
        self.key_source = KeySource(self.key_source)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - SVE_LINE_ENDING_POLICY: normalize | preserve_crlf
        - SVE_HEADER_DIALECT: standard | legacy
        - SVE_KEY_SOURCE: embedded | file
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}LINE_ENDING_POLICY"):
            overrides["line_ending_policy"] = os.getenv(f"{ENV_PREFIX}LINE_ENDING_POLICY", "").lower()
        if os.getenv(f"{ENV_PREFIX}HEADER_DIALECT"):
            overrides["header_dialect"] = os.getenv(f"{ENV_PREFIX}HEADER_DIALECT", "").lower()
        if os.getenv(f"{ENV_PREFIX}KEY_SOURCE"):
            overrides["key_source"] = os.getenv(f"{ENV_PREFIX}KEY_SOURCE", "").lower()

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (missing or null keys take defaults)."""
        return cls(
            line_ending_policy=data.get("line_ending_policy") or LineEndingPolicy.NORMALIZE,
            header_dialect=data.get("header_dialect") or STANDARD,
            key_source=data.get("key_source") or KeySource.EMBEDDED,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "line_ending_policy": self.line_ending_policy.value,
            "header_dialect": self.header_dialect.name,
            "key_source": self.key_source.value,
        }

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.items():
            setattr(new_config, key, value)
        # Re-coerce string values set above
        new_config.__post_init__()
        return new_config

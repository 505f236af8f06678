"""
Runtime Configuration Module

Provides configuration loading for the sign and verify pipelines.
"""

from .runtime import ENV_PREFIX, KeySource, RuntimeConfig

__all__ = [
    "ENV_PREFIX",
    "KeySource",
    "RuntimeConfig",
]

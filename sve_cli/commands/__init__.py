"""
CLI command modules.
"""

from sve_cli.commands import keygen, sign, verify

__all__ = ["keygen", "sign", "verify"]

"""Domain module aggregation and shared exports."""

from . import accounts, advisory, assets, packages

__all__ = [
    "accounts",
    "advisory",
    "assets",
    "packages",
]

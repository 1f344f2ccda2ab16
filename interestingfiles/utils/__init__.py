"""Interesting Files Export utilities package."""

from interestingfiles.utils.logging_utils import (
    SetContextAdapter,
    configure_logging,
    get_logger,
    get_set_logger,
)

__all__ = [
    "SetContextAdapter",
    "configure_logging",
    "get_logger",
    "get_set_logger",
]

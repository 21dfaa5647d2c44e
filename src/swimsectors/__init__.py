"""Rank masters swimmers into performance sectors against National Qualifying Times."""

__version__ = "0.1.0"

from swimsectors.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]

"""Utility modules for swapcompose."""

from swapcompose.utils.logging_setup import configure_logging

__all__ = ["configure_logging"]

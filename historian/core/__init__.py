"""
Core utilities for the Historian server.

This package provides shared functionality such as logging configuration.
"""

from historian.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]

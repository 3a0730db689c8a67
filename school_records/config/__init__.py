"""
Configuration package for the school records package.

Holds environment settings and logging setup.
"""

from school_records.config.settings import Settings, get_settings, settings
from school_records.config.logging import get_logger, setup_logging

__all__ = ['settings', 'Settings', 'get_settings', 'setup_logging', 'get_logger']

"""Configuration management for Cloudgate.

This module exports the main Settings class and configuration utilities.
"""

from cloudgate.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]

"""
Configuration loading for switching deadlines.
"""

from switching_deadlines.config.manager import ConfigManager

__all__ = ["ConfigManager"]

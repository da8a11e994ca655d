"""
Configuration loading for the bookmark manager.
"""

from .configuration import Configuration
from .pydantic_config import ConfigurationManager, ManagerConfig

__all__ = ["Configuration", "ConfigurationManager", "ManagerConfig"]

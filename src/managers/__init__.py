"""
Managers for configuration
"""

from .config_manager import ConfigManager, AppConfig, ConfigError

__all__ = ['ConfigManager', 'AppConfig', 'ConfigError']

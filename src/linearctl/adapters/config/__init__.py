"""
Configuration Adapters - Config file store and layered provider.
"""

from linearctl.adapters.config.environment import EnvironmentConfigProvider
from linearctl.adapters.config.store import ConfigStore, default_config_path


__all__ = ["ConfigStore", "EnvironmentConfigProvider", "default_config_path"]

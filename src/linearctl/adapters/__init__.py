"""
Adapters - Concrete implementations of the core ports.
"""

from linearctl.adapters.config import ConfigStore, EnvironmentConfigProvider
from linearctl.adapters.filesystem import LocalFolderScanner
from linearctl.adapters.linear import LinearAdapter, LinearApiClient


__all__ = [
    "ConfigStore",
    "EnvironmentConfigProvider",
    "LinearAdapter",
    "LinearApiClient",
    "LocalFolderScanner",
]

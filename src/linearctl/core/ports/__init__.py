"""
Ports - Abstract interfaces for external dependencies.

Ports define the contracts that adapters must implement.
This enables dependency inversion and easy testing.
"""

from .config_provider import (
    AppConfig,
    ConfigProviderPort,
    LinearConfig,
    SyncConfig,
    mask_api_key,
)
from .project_tracker import (
    AccessDeniedError,
    AuthenticationError,
    ProjectCreatorPort,
    ProjectListerPort,
    ProjectTrackerPort,
    RateLimitError,
    ResourceNotFoundError,
    TeamNotFoundError,
    TrackerError,
    TransientError,
)


__all__ = [
    "AccessDeniedError",
    "AppConfig",
    "AuthenticationError",
    "ConfigProviderPort",
    "LinearConfig",
    "ProjectCreatorPort",
    "ProjectListerPort",
    "ProjectTrackerPort",
    "RateLimitError",
    "ResourceNotFoundError",
    "SyncConfig",
    "TeamNotFoundError",
    "TrackerError",
    "TransientError",
    "mask_api_key",
]

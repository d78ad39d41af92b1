"""
Linear Adapter - Integration with Linear.app.

This module provides the LinearAdapter and its GraphQL client for
listing and creating Linear projects.
"""

from linearctl.adapters.linear.adapter import LinearAdapter
from linearctl.adapters.linear.client import LinearApiClient, LinearRateLimiter


__all__ = ["LinearAdapter", "LinearApiClient", "LinearRateLimiter"]

"""
hostctl utilities.
"""

from .api import HostctlApiClient, create_api_client

__all__ = ["HostctlApiClient", "create_api_client"]

"""
Python client for the explorerd HTTP API.
"""

from explorerd.api_client.client import ExplorerClient, ExplorerClientError

__all__ = ["ExplorerClient", "ExplorerClientError"]

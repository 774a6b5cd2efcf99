"""
Apiserver Libraries

Discovery of the API resources served by the cluster.
"""

from .client import APIResourcesClient

__all__ = [
    'APIResourcesClient'
]

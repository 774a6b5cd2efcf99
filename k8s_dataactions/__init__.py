"""
k8s-dataactions

Builds the Kubernetes resource to Azure data action lookup table used by
access checks on Azure Arc connected clusters, AKS managed clusters and fleets.
"""

__author__ = "k8s-dataactions authors"

from .libs import (
    __version__, DataActionsDiscovery, OperationsMap, discover_resources, main, new_discover_resources_settings
)

__all__ = [
    '__version__',
    'DataActionsDiscovery',
    'OperationsMap',
    'discover_resources',
    'main',
    'new_discover_resources_settings'
]

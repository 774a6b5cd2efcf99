"""
Data Actions Discovery Library

Correlates the resources served by a Kubernetes apiserver with the Azure data
actions of the cluster's resource provider.
"""

from .core.constants import __version__

# Core libraries
from .core import ConfigManager, KubernetesAuth, NoOpMetricsRecorder, PrometheusMetricsRecorder
from .core.exceptions import (
    DataActionsError, ConfigurationError, UnsupportedClusterTypeError, UnknownEnvironmentError,
    KubeConfigError, DiscoveryError, AuthenticationError, NetworkError, ResponseError, DecodeError,
    DiscoverResourcesError
)

# Discovery libraries
from .discovery import (
    DataAction, OperationsMap, DiscoverResourcesSettings, create_operations_map, new_discover_resources_settings
)
from .apiserver import APIResourcesClient
from .azure import OperationsClient

# Main application
from .main_app import DataActionsDiscovery, discover_resources, main

__all__ = [
    # Core
    'ConfigManager',
    'KubernetesAuth',
    'NoOpMetricsRecorder',
    'PrometheusMetricsRecorder',
    'DataActionsError',
    'ConfigurationError',
    'UnsupportedClusterTypeError',
    'UnknownEnvironmentError',
    'KubeConfigError',
    'DiscoveryError',
    'AuthenticationError',
    'NetworkError',
    'ResponseError',
    'DecodeError',
    'DiscoverResourcesError',
    # Discovery
    'DataAction',
    'OperationsMap',
    'DiscoverResourcesSettings',
    'create_operations_map',
    'new_discover_resources_settings',
    'APIResourcesClient',
    'OperationsClient',
    # Main
    'DataActionsDiscovery',
    'discover_resources',
    'main'
]

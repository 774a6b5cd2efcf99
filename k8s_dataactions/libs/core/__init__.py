"""
Core Libraries

Shared functionality and utilities for the data actions discovery tool.
"""

from .auth import KubernetesAuth
from .config import ConfigManager
from .exceptions import (
    DataActionsError, ConfigurationError, UnsupportedClusterTypeError, UnknownEnvironmentError,
    KubeConfigError, DiscoveryError, AuthenticationError, NetworkError, ResponseError, DecodeError,
    DiscoverResourcesError
)
from .metrics import PrometheusMetricsRecorder, NoOpMetricsRecorder
from .utils import setup_logging, disable_ssl_warnings

__all__ = [
    'KubernetesAuth',
    'ConfigManager',
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
    'PrometheusMetricsRecorder',
    'NoOpMetricsRecorder',
    'setup_logging',
    'disable_ssl_warnings'
]

"""
Exceptions Module

Exception hierarchy for the data actions discovery tool.
"""

from typing import Optional


class DataActionsError(Exception):
    """Base exception for all data actions discovery errors"""


class ConfigurationError(DataActionsError):
    """Raised when settings or configuration files are invalid"""


class UnsupportedClusterTypeError(ConfigurationError):
    """Raised when the cluster type is not one of the supported Azure resource types"""

    def __init__(self, message: str, cluster_type: str = ""):
        super().__init__(message)
        self.cluster_type = cluster_type


class UnknownEnvironmentError(ConfigurationError):
    """Raised when an Azure environment name cannot be resolved"""

    def __init__(self, message: str, environment: str = ""):
        super().__init__(message)
        self.environment = environment


class KubeConfigError(DataActionsError):
    """Raised when the Kubernetes client configuration cannot be built"""


class DiscoveryError(DataActionsError):
    """Raised when the apiserver discovery endpoints cannot be queried or parsed"""


class AuthenticationError(DataActionsError):
    """Raised when a bearer token cannot be acquired"""


class NetworkError(DataActionsError):
    """Raised on transport failures while calling Azure"""


class ResponseError(DataActionsError):
    """Raised when Azure answers with a non-success status code"""

    def __init__(self, message: str, status_code: int = 0, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DecodeError(DataActionsError):
    """Raised when a response body is not the expected JSON document"""


class DiscoverResourcesError(DataActionsError):
    """Raised by the orchestrator when one of the fetch phases fails"""

    @property
    def cause(self) -> Optional[BaseException]:
        """The underlying fetch error"""
        return self.__cause__

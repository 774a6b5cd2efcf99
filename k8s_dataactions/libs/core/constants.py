"""
Constants Module

Centralized constants for the data actions discovery tool to eliminate magic
strings and improve maintainability.
"""

from dataclasses import dataclass
from enum import Enum

__version__ = "1.0.0"


class ClusterType(str, Enum):
    """Azure resource types of the Kubernetes offerings that expose data actions"""
    CONNECTED_CLUSTERS = "Microsoft.Kubernetes/connectedClusters"
    MANAGED_CLUSTERS = "Microsoft.ContainerService/managedClusters"
    FLEETS = "Microsoft.ContainerService/fleets"

    def __str__(self) -> str:
        """Return the resource type for use in action ids"""
        return self.value

    @classmethod
    def values(cls) -> list:
        """Get all supported cluster type strings"""
        return [member.value for member in cls]


class KubernetesConstants:
    """Kubernetes-related constants"""

    # Label the core API group is normalized to in the operations map
    CORE_API_GROUP = "v1"
    CORE_API_VERSION = "v1"

    SUBRESOURCE_SEPARATOR = "/"


class OperationsConstants:
    """Azure operations endpoint and action id constants"""

    OPERATIONS_ENDPOINT_FORMAT_ARC = "{}/providers/Microsoft.Kubernetes/operations?api-version=2021-10-01"
    OPERATIONS_ENDPOINT_FORMAT_AKS = "{}/providers/Microsoft.ContainerService/operations?api-version=2018-10-31"

    ACTION_ID_SEPARATOR = "/"
    CUSTOM_ACTION_SUFFIX = "action"

    # provider / resource type / group-or-resource
    MIN_ACTION_ID_SEGMENTS = 3

    DEFAULT_MAX_PAGES = 10


@dataclass(frozen=True)
class AzureEnvironment:
    """Endpoints of one Azure cloud"""
    name: str
    resource_manager_endpoint: str
    active_directory_endpoint: str


class AzureEnvironments:
    """Known Azure clouds, keyed by upper-cased environment name"""

    PUBLIC_CLOUD = AzureEnvironment(
        name="AzurePublicCloud",
        resource_manager_endpoint="https://management.azure.com/",
        active_directory_endpoint="https://login.microsoftonline.com/",
    )
    CHINA_CLOUD = AzureEnvironment(
        name="AzureChinaCloud",
        resource_manager_endpoint="https://management.chinacloudapi.cn/",
        active_directory_endpoint="https://login.chinacloudapi.cn/",
    )
    US_GOVERNMENT_CLOUD = AzureEnvironment(
        name="AzureUSGovernmentCloud",
        resource_manager_endpoint="https://management.usgovcloudapi.net/",
        active_directory_endpoint="https://login.microsoftonline.us/",
    )
    GERMAN_CLOUD = AzureEnvironment(
        name="AzureGermanCloud",
        resource_manager_endpoint="https://management.microsoftazure.de/",
        active_directory_endpoint="https://login.microsoftonline.de/",
    )

    BY_NAME = {
        "AZURECLOUD": PUBLIC_CLOUD,
        "AZUREPUBLICCLOUD": PUBLIC_CLOUD,
        "AZURECHINACLOUD": CHINA_CLOUD,
        "AZUREUSGOVERNMENT": US_GOVERNMENT_CLOUD,
        "AZUREUSGOVERNMENTCLOUD": US_GOVERNMENT_CLOUD,
        "AZUREGERMANCLOUD": GERMAN_CLOUD,
    }


class NetworkConstants:
    """Network-related constants"""

    from enum import Enum, IntEnum

    DEFAULT_TIMEOUT = 30

    USER_AGENT_PREFIX = "k8s-dataactions"

    class HTTPStatus(IntEnum):
        """HTTP status codes the tool reacts to"""
        OK = 200

    class ContentType(str, Enum):
        """Content-Type header values"""
        JSON = "application/json"
        FORM = "application/x-www-form-urlencoded"

        def __str__(self) -> str:
            """Return the content type value for use in headers"""
            return self.value

    class HTTPHeader(str, Enum):
        """Standard HTTP header names"""
        AUTHORIZATION = "Authorization"
        CONTENT_TYPE = "Content-Type"
        USER_AGENT = "User-Agent"

        def __str__(self) -> str:
            """Return the header name for use in HTTP requests"""
            return self.value


class MetricsConstants:
    """Prometheus metric names and buckets"""

    APISERVER_CALL_DURATION = "guard_apiresources_request_duration_seconds"
    APISERVER_CALL_HELP = "A histogram of latencies for apiserver requests."

    AZURE_CALL_DURATION = "guard_azure_get_operations_request_duration_seconds"
    AZURE_CALL_HELP = "A histogram of latencies for azure get operations requests."

    TOTAL_DURATION = "guard_discover_resources_request_duration_seconds"
    TOTAL_HELP = "A histogram of latencies for the whole resource discovery."

    BUCKETS = (.25, .5, 1, 2.5, 5, 10, 15, 20)


class ErrorMessages:
    """Centralized error message templates"""

    from enum import Enum

    class SSLError(str, Enum):
        """SSL-related error message templates"""
        CERT_VERIFICATION_FAILED = (
            "SSL certificate verification failed. The endpoint is using untrusted certificates.\n"
            "To resolve this issue, add the --skip-tls flag to your command."
        )

        CONNECTION_ERROR = (
            "SSL connection error occurred. If using self-signed certificates, add --skip-tls flag.\n"
            "Original error: {error}"
        )

        def __str__(self) -> str:
            """Return the error message template"""
            return self.value

    class ConfigError(str, Enum):
        """Configuration-related error message templates"""
        UNSUPPORTED_CLUSTER_TYPE = (
            "Failed to create endpoint for Get Operations call. "
            "Cluster type {cluster_type} is not supported."
        )
        UNKNOWN_ENVIRONMENT = "Failed to parse environment for Azure: unknown environment name {environment}"
        CONFIG_FILE_NOT_FOUND = "Configuration file not found: {config_path}"

        def __str__(self) -> str:
            """Return the error message template"""
            return self.value

    class DiscoveryError(str, Enum):
        """Resource discovery error message templates"""
        APISERVER_FAILED = "Failed to fetch list of api-resources from apiserver."
        AZURE_FAILED = "Failed to fetch operations from Azure."
        REQUEST_FAILED = "Request failed with status code: {status_code} and response: {body}"

        def __str__(self) -> str:
            """Return the error message template"""
            return self.value


class FileConstants:
    """File and directory related constants"""

    DEFAULT_CONFIG_FILE = "k8s-dataactions-config.yaml"
    CLIENT_SECRET_ENV_VAR = "AZURE_CLIENT_SECRET"

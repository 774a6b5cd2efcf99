"""
Discovery Settings

Resolves the Azure environment and operations endpoint for a cluster type.
"""

import logging
from dataclasses import dataclass, field

from ..core.constants import (
    AzureEnvironment, AzureEnvironments, ClusterType, ErrorMessages, NetworkConstants, OperationsConstants
)
from ..core.exceptions import UnknownEnvironmentError, UnsupportedClusterTypeError

logger = logging.getLogger(__name__)


@dataclass
class DiscoverResourcesSettings:
    """Everything a discovery run needs to reach the apiserver and Azure"""
    cluster_type: str
    environment: AzureEnvironment
    operations_endpoint: str
    aks_login_url: str = ""
    kubeconfig_file_path: str = ""
    tenant_id: str = ""
    client_id: str = ""
    client_secret: str = field(default="", repr=False)
    skip_tls: bool = False
    timeout: int = NetworkConstants.DEFAULT_TIMEOUT
    follow_next_link: bool = False
    max_pages: int = OperationsConstants.DEFAULT_MAX_PAGES

    @property
    def resource_manager_endpoint(self) -> str:
        return self.environment.resource_manager_endpoint.rstrip("/")

    @property
    def active_directory_endpoint(self) -> str:
        return self.environment.active_directory_endpoint.rstrip("/")

    @property
    def is_connected_cluster(self) -> bool:
        return self.cluster_type == ClusterType.CONNECTED_CLUSTERS.value


def environment_from_name(name: str) -> AzureEnvironment:
    """
    Resolve an Azure environment by name, case-insensitively.

    Raises:
        UnknownEnvironmentError: If the name is not a known Azure cloud
    """
    environment = AzureEnvironments.BY_NAME.get(name.strip().upper())
    if environment is None:
        raise UnknownEnvironmentError(
            ErrorMessages.ConfigError.UNKNOWN_ENVIRONMENT.format(environment=name), environment=name
        )
    return environment


def operations_endpoint(cluster_type: str, environment: AzureEnvironment) -> str:
    """
    Operations list URL for a cluster type.

    Raises:
        UnsupportedClusterTypeError: If the cluster type is not supported
    """
    resource_manager_endpoint = environment.resource_manager_endpoint.rstrip("/")

    if cluster_type == ClusterType.CONNECTED_CLUSTERS.value:
        return OperationsConstants.OPERATIONS_ENDPOINT_FORMAT_ARC.format(resource_manager_endpoint)
    if cluster_type in (ClusterType.MANAGED_CLUSTERS.value, ClusterType.FLEETS.value):
        return OperationsConstants.OPERATIONS_ENDPOINT_FORMAT_AKS.format(resource_manager_endpoint)

    raise UnsupportedClusterTypeError(
        ErrorMessages.ConfigError.UNSUPPORTED_CLUSTER_TYPE.format(cluster_type=cluster_type),
        cluster_type=cluster_type
    )


def new_discover_resources_settings(cluster_type: str, environment: str = "", login_url: str = "",
                                    kubeconfig_file_path: str = "", tenant_id: str = "", client_id: str = "",
                                    client_secret: str = "", skip_tls: bool = False,
                                    timeout: int = NetworkConstants.DEFAULT_TIMEOUT,
                                    follow_next_link: bool = False,
                                    max_pages: int = OperationsConstants.DEFAULT_MAX_PAGES
                                    ) -> DiscoverResourcesSettings:
    """
    Build discovery settings for a cluster type.

    Args:
        cluster_type: Azure resource type of the cluster
        environment: Azure environment name, public cloud when empty
        login_url: AKS login URL used to get tokens for managed clusters and fleets
        kubeconfig_file_path: Explicit kubeconfig, in-cluster config when empty
        tenant_id: Azure AD tenant
        client_id: Application id used for connected clusters
        client_secret: Application secret used for connected clusters
        skip_tls: Skip TLS verification on every outbound call
        timeout: HTTP timeout in seconds
        follow_next_link: Follow nextLink pagination of the operations list
        max_pages: Page cap when following nextLink

    Returns:
        DiscoverResourcesSettings: Resolved settings

    Raises:
        UnknownEnvironmentError: If a non-empty environment name is unknown
        UnsupportedClusterTypeError: If the cluster type is not supported
    """
    env = AzureEnvironments.PUBLIC_CLOUD
    if environment:
        env = environment_from_name(environment)

    endpoint = operations_endpoint(cluster_type, env)
    logger.debug(f"Resolved operations endpoint {endpoint} for {cluster_type} in {env.name}")

    return DiscoverResourcesSettings(
        cluster_type=cluster_type,
        environment=env,
        operations_endpoint=endpoint,
        aks_login_url=login_url,
        kubeconfig_file_path=kubeconfig_file_path,
        tenant_id=tenant_id,
        client_id=client_id,
        client_secret=client_secret,
        skip_tls=skip_tls,
        timeout=timeout,
        follow_next_link=follow_next_link,
        max_pages=max_pages,
    )

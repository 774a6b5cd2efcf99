"""
API Resources Client

Fetches the server preferred API resources from the Kubernetes apiserver.
"""

import json
import logging
from typing import Any, List, Optional

import urllib3
from kubernetes import client
from kubernetes.client.rest import ApiException

from ..core.auth import KubernetesAuth
from ..core.constants import KubernetesConstants
from ..core.exceptions import DiscoveryError
from ..discovery.models import APIResource, APIResourceList

logger = logging.getLogger(__name__)


class APIResourcesClient:
    """Lists the resources of the core group and of the preferred version of every API group"""

    def __init__(self, kubeconfig_file_path: str = "", skip_tls: bool = False,
                 auth: Optional[KubernetesAuth] = None):
        """
        Initialize API resources client

        Args:
            kubeconfig_file_path: Explicit kubeconfig path; in-cluster config is used when empty
            skip_tls: Whether to skip TLS verification
            auth: Pre-built authentication handler (defaults to KubernetesAuth)
        """
        self.auth = auth or KubernetesAuth(kubeconfig_file_path=kubeconfig_file_path, skip_tls=skip_tls)

    def fetch_api_resources(self) -> List[APIResourceList]:
        """
        Fetch the server preferred resources, one entry per group-version

        Returns:
            List[APIResourceList]: Core resources first, then named groups in server order

        Raises:
            KubeConfigError: If the cluster configuration cannot be built
            DiscoveryError: If a discovery request fails or returns an unexpected document
        """
        logger.debug("Fetching list of APIResources from the apiserver.")
        api_client = self.auth.configure_auth()

        try:
            resource_lists = self._server_preferred_resources(api_client)
        except ApiException as e:
            raise DiscoveryError(f"Failed to query apiserver discovery (status {e.status}): {e.reason}") from e
        except urllib3.exceptions.HTTPError as e:
            raise DiscoveryError(f"Failed to reach apiserver: {e}") from e
        except (AttributeError, TypeError, ValueError) as e:
            raise DiscoveryError(f"Unexpected apiserver discovery response: {e}") from e

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("List of ApiResources fetched from apiserver: %s",
                         json.dumps([resource_list.to_dict() for resource_list in resource_lists]))

        return resource_lists

    def _server_preferred_resources(self, api_client: client.ApiClient) -> List[APIResourceList]:
        resource_lists = [
            self._convert(client.CoreV1Api(api_client).get_api_resources(),
                          KubernetesConstants.CORE_API_VERSION)
        ]

        custom_api = client.CustomObjectsApi(api_client)
        group_list = client.ApisApi(api_client).get_api_versions()

        for group in group_list.groups or []:
            preferred = group.preferred_version or (group.versions[0] if group.versions else None)
            if preferred is None:
                logger.debug(f"API group {group.name} has no served versions, skipping")
                continue

            resources = custom_api.get_api_resources(group.name, preferred.version)
            resource_lists.append(self._convert(resources, preferred.group_version))

        return resource_lists

    @staticmethod
    def _convert(resource_list: Any, default_group_version: str) -> APIResourceList:
        """Convert a V1APIResourceList into the tool's immutable model"""
        resources = tuple(
            APIResource(
                name=resource.name,
                namespaced=bool(resource.namespaced),
                kind=resource.kind or "",
                verbs=tuple(resource.verbs or ()),
            )
            for resource in (resource_list.resources or [])
        )
        return APIResourceList(
            group_version=resource_list.group_version or default_group_version,
            resources=resources,
        )

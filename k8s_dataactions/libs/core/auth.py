"""
Authentication Module

Builds the Kubernetes client configuration used to talk to the apiserver.
"""

import logging

from kubernetes import client, config
from kubernetes.config import ConfigException

from .exceptions import KubeConfigError
from .utils import disable_ssl_warnings

logger = logging.getLogger(__name__)


class KubernetesAuth:
    """Loads cluster access configuration from a kubeconfig file or the in-cluster service account"""

    def __init__(self, kubeconfig_file_path: str = "", skip_tls: bool = False):
        """
        Initialize Kubernetes authentication handler

        Args:
            kubeconfig_file_path: Explicit kubeconfig path; in-cluster config is used when empty
            skip_tls: Whether to skip TLS verification for apiserver requests
        """
        self.kubeconfig_file_path = kubeconfig_file_path
        self.skip_tls = skip_tls

    def configure_auth(self) -> client.ApiClient:
        """
        Build an API client for the cluster

        Returns:
            client.ApiClient: Configured Kubernetes API client

        Raises:
            KubeConfigError: If the cluster access configuration cannot be built
        """
        configuration = client.Configuration()

        try:
            if self.kubeconfig_file_path:
                config.load_kube_config(config_file=self.kubeconfig_file_path,
                                        client_configuration=configuration)
                logger.debug(f"Loaded kubeconfig from {self.kubeconfig_file_path}")
            else:
                config.load_incluster_config(client_configuration=configuration)
                logger.debug("Loaded in-cluster config")
        except (ConfigException, OSError) as e:
            raise KubeConfigError(f"Error building kubeconfig: {e}") from e

        if self.skip_tls:
            configuration.verify_ssl = False
            configuration.ssl_ca_cert = None
            disable_ssl_warnings()

        return client.ApiClient(configuration)

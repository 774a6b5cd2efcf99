"""
Main Application

Orchestrates resource discovery: fetches the apiserver resources and the Azure
data actions, then correlates them into the operations map.
"""

import argparse
import logging
import os
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional

from .apiserver import APIResourcesClient
from .azure import OperationsClient
from .core import ConfigManager, PrometheusMetricsRecorder, setup_logging
from .core.constants import ClusterType, ErrorMessages, FileConstants, NetworkConstants, OperationsConstants
from .core.exceptions import DataActionsError, DiscoverResourcesError
from .core.protocols import APIResourcesProvider, DataActionsProvider, MetricsRecorder
from .discovery import (
    APIResourceList, DiscoverResourcesSettings, Operation, OperationsMap, create_operations_map,
    new_discover_resources_settings
)

logger = logging.getLogger(__name__)


class DataActionsDiscovery:
    """Builds the operations map for one cluster"""

    def __init__(
        self,
        settings: DiscoverResourcesSettings,
        api_resources_provider: Optional[APIResourcesProvider] = None,
        data_actions_provider: Optional[DataActionsProvider] = None,
        metrics: Optional[MetricsRecorder] = None,
        parallel: bool = True
    ):
        """
        Initialize discovery with dependency injection

        Args:
            settings: Resolved discovery settings
            api_resources_provider: Apiserver resources source (defaults to APIResourcesClient)
            data_actions_provider: Azure data actions source (defaults to OperationsClient)
            metrics: Duration recorder (defaults to PrometheusMetricsRecorder)
            parallel: Run the apiserver and Azure calls concurrently
        """
        self.settings = settings
        self.api_resources_provider = api_resources_provider or APIResourcesClient(
            kubeconfig_file_path=settings.kubeconfig_file_path,
            skip_tls=settings.skip_tls
        )
        self.data_actions_provider = data_actions_provider or OperationsClient(settings)
        self.metrics = metrics or PrometheusMetricsRecorder()
        self.parallel = parallel

    def discover_resources(self) -> OperationsMap:
        """
        Fetch both catalogs and build the ``group -> resource -> verb -> DataAction`` map

        Returns:
            OperationsMap: Freshly built operations map

        Raises:
            DiscoverResourcesError: If either fetch fails; the fetch error is its cause
        """
        start = time.monotonic()

        if self.parallel:
            with ThreadPoolExecutor(max_workers=2, thread_name_prefix="discover-resources") as executor:
                api_resources_future = executor.submit(self._fetch_api_resources)
                operations_future = executor.submit(self._fetch_data_actions)
                api_resources = api_resources_future.result()
                operations = operations_future.result()
        else:
            api_resources = self._fetch_api_resources()
            operations = self._fetch_data_actions()

        operations_map = create_operations_map(api_resources, operations, self.settings.cluster_type)
        self.metrics.observe_total(time.monotonic() - start)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Operations Map created for resources: {operations_map}")

        return operations_map

    def _fetch_api_resources(self) -> List[APIResourceList]:
        start = time.monotonic()
        try:
            api_resources = self.api_resources_provider.fetch_api_resources()
        except DataActionsError as e:
            raise DiscoverResourcesError(f"{ErrorMessages.DiscoveryError.APISERVER_FAILED.value} {e}") from e
        self.metrics.observe_apiserver_call(time.monotonic() - start)
        return api_resources

    def _fetch_data_actions(self) -> List[Operation]:
        start = time.monotonic()
        try:
            operations = self.data_actions_provider.fetch_data_actions()
        except DataActionsError as e:
            raise DiscoverResourcesError(f"{ErrorMessages.DiscoveryError.AZURE_FAILED.value} {e}") from e
        self.metrics.observe_cloud_call(time.monotonic() - start)
        return operations


def discover_resources(settings: DiscoverResourcesSettings, metrics: Optional[MetricsRecorder] = None,
                       parallel: bool = True) -> OperationsMap:
    """
    Build the operations map for the cluster described by the settings

    Args:
        settings: Resolved discovery settings
        metrics: Duration recorder (defaults to PrometheusMetricsRecorder)
        parallel: Run the apiserver and Azure calls concurrently

    Returns:
        OperationsMap: Freshly built operations map
    """
    return DataActionsDiscovery(settings, metrics=metrics, parallel=parallel).discover_resources()


# Command-line interface functions
def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser with subcommands using parent parsers"""

    # Common parser: arguments shared by ALL commands
    common_parser = argparse.ArgumentParser(add_help=False)
    common_parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    common_parser.add_argument('--config', help='Configuration file path')

    # Cluster parser: arguments that select the cluster type and Azure cloud
    cluster_parser = argparse.ArgumentParser(add_help=False)
    cluster_parser.add_argument('--cluster-type', choices=ClusterType.values(), help='Azure resource type of the cluster')
    cluster_parser.add_argument('--environment', help='Azure environment name (default: AzurePublicCloud)')

    parser = argparse.ArgumentParser(
        prog='k8s-dataactions',
        description='Correlate Kubernetes API resources with Azure data actions',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  k8s-dataactions discover --cluster-type Microsoft.Kubernetes/connectedClusters --tenant-id <tenant> \\
      --client-id <app-id> --kubeconfig ~/.kube/config
  k8s-dataactions endpoint --cluster-type Microsoft.ContainerService/managedClusters --environment AzureChinaCloud
  k8s-dataactions generate-config --output ./config

Use --help with specific commands for detailed help.
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    discover_parser = subparsers.add_parser(
        'discover',
        parents=[common_parser, cluster_parser],
        help='Build the operations map',
        description='Fetch apiserver resources and Azure data actions and print the operations map as JSON'
    )
    discover_parser.add_argument('--kubeconfig', help='Kubeconfig path (default: in-cluster config)')
    discover_parser.add_argument('--tenant-id', help='Azure AD tenant id')
    discover_parser.add_argument('--client-id', help='Application id (connected clusters)')
    discover_parser.add_argument('--client-secret',
                                 help=f'Application secret (connected clusters, or ${FileConstants.CLIENT_SECRET_ENV_VAR})')
    discover_parser.add_argument('--aks-login-url', help='AKS login URL (managed clusters and fleets)')
    discover_parser.add_argument('--skip-tls', action='store_true', help='Skip TLS verification for insecure requests')
    discover_parser.add_argument('--sequential', action='store_true', help='Call the apiserver and Azure one after the other')
    discover_parser.add_argument('--follow-next-link', action='store_true', help='Follow nextLink pagination of the operations list')
    discover_parser.add_argument('--max-pages', type=int, help='Page cap when following nextLink')
    discover_parser.add_argument('--timeout', type=int, help='HTTP timeout in seconds')
    discover_parser.add_argument('--output', help='Write the operations map to this file instead of stdout')

    subparsers.add_parser(
        'endpoint',
        parents=[common_parser, cluster_parser],
        help='Print the operations endpoint',
        description='Resolve the Azure Get Operations endpoint for a cluster type without calling it'
    )

    generate_parser = subparsers.add_parser(
        'generate-config',
        parents=[common_parser],
        help='Generate a configuration template',
        description='Generate configuration file (stdout by default, use --output to save to file)'
    )
    generate_parser.add_argument('--output', help='Output directory for the configuration file')

    return parser


# Maps argparse destinations to configuration keys
CONFIG_ARG_MAPPING = {
    'cluster_type': 'cluster.type',
    'kubeconfig': 'cluster.kubeconfig',
    'environment': 'azure.environment',
    'tenant_id': 'azure.tenant_id',
    'client_id': 'azure.client_id',
    'client_secret': 'azure.client_secret',
    'aks_login_url': 'azure.aks_login_url',
    'follow_next_link': 'discovery.follow_next_link',
    'max_pages': 'discovery.max_pages',
    'timeout': 'discovery.timeout',
    'skip_tls': 'global.skip_tls',
    'debug': 'global.debug',
}


def merge_config_with_args(args: argparse.Namespace, config_manager: ConfigManager) -> None:
    """
    Fill arguments not given on the command line from the configuration file.

    Command-line arguments take precedence; only attributes that are None,
    empty or False are overridden.
    """
    for arg_name, config_key in CONFIG_ARG_MAPPING.items():
        if not hasattr(args, arg_name):
            continue
        current_value = getattr(args, arg_name)
        if current_value is None or current_value == '' or current_value is False:
            config_value = config_manager.get_value(config_key)
            if config_value is not None:
                setattr(args, arg_name, config_value)

    # parallel is on unless disabled by either --sequential or the file
    if hasattr(args, 'sequential') and not args.sequential:
        args.sequential = config_manager.get_value('discovery.parallel', True) is False


def settings_from_args(args: argparse.Namespace) -> DiscoverResourcesSettings:
    """Resolve discovery settings from merged command-line arguments"""
    if not args.cluster_type:
        raise DataActionsError("--cluster-type is required (or cluster.type in the configuration file)")

    return new_discover_resources_settings(
        cluster_type=args.cluster_type,
        environment=args.environment or "",
        login_url=getattr(args, 'aks_login_url', None) or "",
        kubeconfig_file_path=os.path.expanduser(getattr(args, 'kubeconfig', None) or ""),
        tenant_id=getattr(args, 'tenant_id', None) or "",
        client_id=getattr(args, 'client_id', None) or "",
        client_secret=(getattr(args, 'client_secret', None)
                       or os.environ.get(FileConstants.CLIENT_SECRET_ENV_VAR, "")),
        skip_tls=bool(getattr(args, 'skip_tls', False)),
        timeout=getattr(args, 'timeout', None) or NetworkConstants.DEFAULT_TIMEOUT,
        follow_next_link=bool(getattr(args, 'follow_next_link', False)),
        max_pages=getattr(args, 'max_pages', None) or OperationsConstants.DEFAULT_MAX_PAGES,
    )


def handle_discover_command(args: argparse.Namespace, config_manager: ConfigManager) -> int:
    """Handle discover command execution."""
    settings = settings_from_args(args)
    operations_map = discover_resources(settings, parallel=not args.sequential)
    output = operations_map.to_json(indent=2)

    if args.output:
        Path(args.output).write_text(output + "\n")
        logger.info(f"Operations map written to {args.output}")
    else:
        print(output)
    return 0


def handle_endpoint_command(args: argparse.Namespace, config_manager: ConfigManager) -> int:
    """Handle endpoint command execution."""
    settings = settings_from_args(args)
    print(settings.operations_endpoint)
    return 0


def handle_generate_config_command(args: argparse.Namespace, config_manager: ConfigManager) -> int:
    """Handle generate-config command execution."""
    if args.output:
        config_file = config_manager.generate_config_template(args.output)
        print(f"Configuration template generated: {config_file}")
    else:
        print(config_manager.get_config_template_content())
    return 0


# Command dispatcher mapping
COMMAND_HANDLERS = {
    'discover': handle_discover_command,
    'endpoint': handle_endpoint_command,
    'generate-config': handle_generate_config_command,
}


def main(argv: Optional[List[str]] = None) -> int:
    """
    Application entry point.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config_manager = ConfigManager()
    try:
        if args.config:
            config_manager.load_config(args.config)
            merge_config_with_args(args, config_manager)
    except DataActionsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(args.debug)

    try:
        return COMMAND_HANDLERS[args.command](args, config_manager)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        return 1
    except (DataActionsError, OSError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

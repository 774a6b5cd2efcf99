"""
Correlation Engine

Matches the apiserver's resources against the Azure data actions of the
cluster's resource provider and builds the operations map used when an access
check needs every data action of a group, resource or verb.
"""

import logging
from typing import Iterable, List, Tuple

from ..core.constants import KubernetesConstants, OperationsConstants
from .models import ActionId, APIResource, APIResourceList, DataAction, Operation, OperationsMap

logger = logging.getLogger(__name__)


def action_prefix(cluster_type: str, group: str, resource: str) -> str:
    """
    Prefix every data action of a resource starts with after the provider.

    Core group resources sit right below the cluster type
    (``<clusterType>/pods``), named group resources below their group
    (``<clusterType>/apps/deployments``).
    """
    parts = [cluster_type]
    if group != KubernetesConstants.CORE_API_GROUP:
        parts.append(group)
    parts.append(resource)
    return OperationsConstants.ACTION_ID_SEPARATOR.join(parts)


def create_operations_map(api_resources: Iterable[APIResourceList], operations: Iterable[Operation],
                          cluster_type: str) -> OperationsMap:
    """
    Build the ``group -> resource -> verb -> DataAction`` map.

    Args:
        api_resources: Server preferred resources, one entry per group-version
        operations: Data actions of the cluster type's resource provider
        cluster_type: Azure resource type of the cluster

    Returns:
        OperationsMap: A new map; when two operations map to the same
        group/resource/verb the later one wins
    """
    operations_map = OperationsMap()
    parsed_operations: List[Tuple[Operation, ActionId]] = [
        (operation, ActionId.parse(operation.name)) for operation in operations
    ]

    for resource_list in api_resources:
        if not resource_list.resources:
            continue

        group = resource_list.group

        for api_resource in resource_list.resources:
            if api_resource.is_subresource:
                continue
            _add_resource_actions(operations_map, group, api_resource, parsed_operations, cluster_type)

    return operations_map


def _add_resource_actions(operations_map: OperationsMap, group: str, api_resource: APIResource,
                          parsed_operations: List[Tuple[Operation, ActionId]], cluster_type: str) -> None:
    prefix = action_prefix(cluster_type, group, api_resource.name)

    for operation, action_id in parsed_operations:
        if prefix not in operation.name:
            continue

        if not action_id.belongs_to(group, api_resource.name):
            continue

        verb = action_id.verb
        data_action = DataAction(
            action_id=operation.name,
            is_data_action=True,
            is_namespaced_resource=api_resource.namespaced,
        )

        previous = operations_map.set(group, api_resource.name, verb, data_action)
        if previous is not None and previous != data_action:
            logger.debug(f"Replacing data action {previous.action_id} with {operation.name} "
                         f"for {group}/{api_resource.name}/{verb}")

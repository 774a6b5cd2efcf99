"""
Discovery Libraries

Settings resolution, data models and the correlation of apiserver resources
with Azure data actions.
"""

from .correlation import create_operations_map
from .models import (
    ActionId, APIResource, APIResourceList, DataAction, Display, Operation, OperationList, OperationsMap
)
from .settings import DiscoverResourcesSettings, new_discover_resources_settings

__all__ = [
    'create_operations_map',
    'ActionId',
    'APIResource',
    'APIResourceList',
    'DataAction',
    'Display',
    'Operation',
    'OperationList',
    'OperationsMap',
    'DiscoverResourcesSettings',
    'new_discover_resources_settings'
]

"""
Data Models Module.

Typed data structures for both sides of the correlation: the API resources
reported by the apiserver, the operations reported by Azure, and the
operations map built from them.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..core.constants import KubernetesConstants, OperationsConstants
from ..core.exceptions import DecodeError


@dataclass(frozen=True)
class APIResource:
    """One resource served by an API group-version"""
    name: str
    namespaced: bool = False
    kind: str = ""
    verbs: Tuple[str, ...] = ()

    @property
    def is_subresource(self) -> bool:
        """Subresources such as pods/log carry the parent name before a separator"""
        return KubernetesConstants.SUBRESOURCE_SEPARATOR in self.name

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "namespaced": self.namespaced, "kind": self.kind, "verbs": list(self.verbs)}


@dataclass(frozen=True)
class APIResourceList:
    """Resources of one API group-version, as returned by apiserver discovery"""
    group_version: str
    resources: Tuple[APIResource, ...] = ()

    @property
    def group(self) -> str:
        """
        Canonical group label of this group-version.

        The core group is reported as "" or "v1" and is normalized to
        KubernetesConstants.CORE_API_GROUP; named groups drop their version.
        """
        if not self.group_version or self.group_version == KubernetesConstants.CORE_API_GROUP:
            return KubernetesConstants.CORE_API_GROUP
        return self.group_version.split("/", 1)[0]

    @property
    def is_core(self) -> bool:
        return self.group == KubernetesConstants.CORE_API_GROUP

    def to_dict(self) -> Dict[str, Any]:
        return {"groupVersion": self.group_version, "resources": [r.to_dict() for r in self.resources]}


@dataclass(frozen=True)
class Display:
    """Human readable description of an Azure operation"""
    provider: str = ""
    resource: str = ""
    operation: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Display":
        data = data if isinstance(data, dict) else {}
        return cls(
            provider=data.get("provider") or "",
            resource=data.get("resource") or "",
            operation=data.get("operation") or "",
            description=data.get("description") or "",
        )


@dataclass(frozen=True)
class Operation:
    """One entry of the Azure operations list"""
    name: str
    display: Display = field(default_factory=Display)
    is_data_action: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Operation":
        """
        Build an operation from its JSON representation.

        Raises:
            DecodeError: If the entry is not an object or its name is not a string
        """
        if not isinstance(data, dict):
            raise DecodeError(f"Operation entry must be an object, got {type(data).__name__}")
        name = data.get("name")
        if name is None:
            name = ""
        if not isinstance(name, str):
            raise DecodeError(f"Operation entry has an invalid name: {data!r}")
        is_data_action = data.get("isDataAction")
        return cls(
            name=name,
            display=Display.from_dict(data.get("display")),
            is_data_action=is_data_action if isinstance(is_data_action, bool) else None,
        )

    @property
    def is_data_action_set(self) -> bool:
        """True only when Azure explicitly flagged the operation as a data action"""
        return self.is_data_action is True

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "name": self.name,
            "display": {
                "provider": self.display.provider,
                "resource": self.display.resource,
                "operation": self.display.operation,
                "description": self.display.description,
            },
        }
        if self.is_data_action is not None:
            data["isDataAction"] = self.is_data_action
        return data


@dataclass(frozen=True)
class OperationList:
    """A page of the Azure operations list"""
    value: List[Operation] = field(default_factory=list)
    next_link: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "OperationList":
        """
        Build an operations page from a decoded JSON body.

        Raises:
            DecodeError: If the body does not have the operations list shape
        """
        if not isinstance(data, dict):
            raise DecodeError("Failed to decode response: expected a JSON object")
        value = data.get("value")
        if value is None:
            value = []
        if not isinstance(value, list):
            raise DecodeError("Failed to decode response: 'value' must be a list")
        next_link = data.get("nextLink")
        if next_link is None:
            next_link = ""
        if not isinstance(next_link, str):
            raise DecodeError("Failed to decode response: 'nextLink' must be a string")
        return cls(value=[Operation.from_dict(item) for item in value], next_link=next_link)


@dataclass(frozen=True)
class ActionId:
    """
    An Azure operation name parsed into its path segments.

    Data action names look like
    ``<provider>/<resourceType>/<group or core resource>/.../<verb>``, e.g.
    ``Microsoft.Kubernetes/connectedClusters/apps/deployments/read`` or
    ``Microsoft.Kubernetes/connectedClusters/pods/read``.
    """
    segments: Tuple[str, ...]

    @classmethod
    def parse(cls, name: str) -> "ActionId":
        return cls(tuple(name.split(OperationsConstants.ACTION_ID_SEPARATOR)))

    @property
    def is_well_formed(self) -> bool:
        return len(self.segments) >= OperationsConstants.MIN_ACTION_ID_SEGMENTS

    @property
    def provider(self) -> str:
        return self.segments[0]

    @property
    def resource_type(self) -> str:
        return self.segments[1] if len(self.segments) > 1 else ""

    @property
    def group_or_resource(self) -> str:
        """
        First segment after the provider and resource type.

        For named API groups this is the group, for the core group it is the
        resource name itself.
        """
        return self.segments[2]

    def belongs_to(self, group: str, resource: str) -> bool:
        """
        Whether this action targets the given group and resource.

        A substring match on the action name cannot tell
        ``.../connectedClusters/events.k8s.io/events/read`` apart from the core
        ``.../connectedClusters/events/read``, so the segment right after the
        cluster type is compared exactly: against the group for named groups,
        against the resource for the core group.
        """
        if not self.is_well_formed:
            return False
        if group == KubernetesConstants.CORE_API_GROUP:
            return self.group_or_resource == resource
        return self.group_or_resource == group

    @property
    def verb(self) -> str:
        """Last segment, or "<name>/action" for custom actions"""
        last = self.segments[-1]
        if last == OperationsConstants.CUSTOM_ACTION_SUFFIX and len(self.segments) > 1:
            return OperationsConstants.ACTION_ID_SEPARATOR.join(self.segments[-2:])
        return last


@dataclass(frozen=True)
class DataAction:
    """Azure data action granted for a verb on a resource"""
    action_id: str
    is_data_action: bool = True
    is_namespaced_resource: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ActionInfo": {"Id": self.action_id, "IsDataAction": self.is_data_action},
            "IsNamespacedResource": self.is_namespaced_resource,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DataAction":
        try:
            action_info = data["ActionInfo"]
            return cls(
                action_id=action_info["Id"],
                is_data_action=bool(action_info.get("IsDataAction", False)),
                is_namespaced_resource=bool(data.get("IsNamespacedResource", False)),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise DecodeError(f"Invalid data action entry {data!r}: {e}") from e


class OperationsMap(dict):
    """
    Three level lookup table: ``group -> resource -> verb -> DataAction``.

    Intermediate levels are created on first insert.
    """

    def set(self, group: str, resource: str, verb: str, data_action: DataAction) -> Optional[DataAction]:
        """Store a data action, returning the entry it replaced if any"""
        verbs = self.setdefault(group, {}).setdefault(resource, {})
        previous = verbs.get(verb)
        verbs[verb] = data_action
        return previous

    def lookup(self, group: str, resource: str, verb: str) -> Optional[DataAction]:
        return self.get(group, {}).get(resource, {}).get(verb)

    def iter_entries(self) -> Iterator[Tuple[str, str, str, DataAction]]:
        for group, resources in self.items():
            for resource, verbs in resources.items():
                for verb, data_action in verbs.items():
                    yield group, resource, verb, data_action

    def to_dict(self) -> Dict[str, Any]:
        return {
            group: {
                resource: {verb: data_action.to_dict() for verb, data_action in verbs.items()}
                for resource, verbs in resources.items()
            }
            for group, resources in self.items()
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)

    @classmethod
    def from_json(cls, text: str) -> "OperationsMap":
        """
        Rebuild an operations map from its JSON text.

        Raises:
            DecodeError: If the text is not a serialized operations map
        """
        try:
            data = json.loads(text)
        except ValueError as e:
            raise DecodeError(f"Failed to decode operations map: {e}") from e
        if not isinstance(data, dict):
            raise DecodeError("Failed to decode operations map: expected a JSON object")

        operations_map = cls()
        for group, resources in data.items():
            if not isinstance(resources, dict):
                raise DecodeError(f"Failed to decode operations map: group {group} must be an object")
            for resource, verbs in resources.items():
                if not isinstance(verbs, dict):
                    raise DecodeError(f"Failed to decode operations map: resource {resource} must be an object")
                for verb, entry in verbs.items():
                    operations_map.set(group, resource, verb, DataAction.from_dict(entry))
        return operations_map

    def __str__(self) -> str:
        return self.to_json()

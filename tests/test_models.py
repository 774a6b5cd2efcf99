"""
Data model tests
"""

import json

import pytest

from k8s_dataactions.libs.core.exceptions import DecodeError
from k8s_dataactions.libs.discovery.models import (
    ActionId, APIResource, APIResourceList, DataAction, Operation, OperationList, OperationsMap
)

from test_constants import CommonTestConstants as C


class TestAPIResourceList:
    """Test canonical group derivation"""

    @pytest.mark.parametrize("group_version,expected", [
        ("", "v1"),
        ("v1", "v1"),
        ("apps/v1", "apps"),
        ("events.k8s.io/v1", "events.k8s.io"),
        ("metrics.k8s.io/v1beta1", "metrics.k8s.io"),
    ])
    def test_group(self, group_version, expected):
        assert APIResourceList(group_version=group_version).group == expected

    def test_is_core(self):
        assert APIResourceList(group_version="").is_core
        assert not APIResourceList(group_version="batch/v1").is_core

    def test_subresource(self):
        assert APIResource(name="pods/log").is_subresource
        assert not APIResource(name="pods").is_subresource


class TestActionId:
    """Test the parsed form of operation names"""

    def test_segments(self):
        action_id = ActionId.parse(f"{C.ARC}/apps/deployments/read")

        assert action_id.segments == ("Microsoft.Kubernetes", "connectedClusters", "apps", "deployments", "read")
        assert action_id.group_or_resource == "apps"

    def test_plain_verb(self):
        assert ActionId.parse(f"{C.ARC}/pods/read").verb == "read"

    def test_custom_action_verb(self):
        assert ActionId.parse(f"{C.ARC}/nodes/restart/action").verb == "restart/action"

    def test_provider_and_resource_type(self):
        action_id = ActionId.parse(f"{C.AKS}/pods/read")

        assert action_id.provider == "Microsoft.ContainerService"
        assert action_id.resource_type == "managedClusters"

    def test_provider_of_single_segment(self):
        action_id = ActionId.parse("Microsoft.Kubernetes")

        assert action_id.provider == "Microsoft.Kubernetes"
        assert action_id.resource_type == ""

    def test_belongs_to_core(self):
        action_id = ActionId.parse(f"{C.ARC}/events/read")

        assert action_id.belongs_to("v1", "events")
        assert not action_id.belongs_to("events.k8s.io", "events")

    def test_belongs_to_named_group(self):
        action_id = ActionId.parse(f"{C.ARC}/events.k8s.io/events/read")

        assert action_id.belongs_to("events.k8s.io", "events")
        assert not action_id.belongs_to("v1", "events")

    @pytest.mark.parametrize("name", ["", "Microsoft.Kubernetes", "Microsoft.Kubernetes/connectedClusters"])
    def test_short_names_never_belong(self, name):
        action_id = ActionId.parse(name)

        assert not action_id.is_well_formed
        assert not action_id.belongs_to("v1", "pods")
        assert not action_id.belongs_to("apps", "deployments")


class TestOperation:
    """Test decoding of Get Operations entries"""

    def test_from_dict(self):
        operation = Operation.from_dict({
            "name": f"{C.ARC}/pods/read",
            "display": {"provider": "Microsoft Kubernetes", "resource": "Pods", "operation": "Gets/List pods",
                        "description": "Gets/List pods"},
            "isDataAction": True,
        })

        assert operation.name == f"{C.ARC}/pods/read"
        assert operation.display.resource == "Pods"
        assert operation.is_data_action_set

    @pytest.mark.parametrize("entry", [
        {"name": "Microsoft.Kubernetes/register/action"},
        {"name": "Microsoft.Kubernetes/register/action", "isDataAction": None},
        {"name": "Microsoft.Kubernetes/register/action", "isDataAction": False},
        {"name": "Microsoft.Kubernetes/register/action", "isDataAction": "true"},
    ])
    def test_missing_or_false_data_action_flag(self, entry):
        assert not Operation.from_dict(entry).is_data_action_set

    def test_missing_display(self):
        operation = Operation.from_dict({"name": "x/y/z", "display": None})

        assert operation.display.provider == ""

    @pytest.mark.parametrize("entry", [
        {"display": {}, "isDataAction": True},
        {"name": None, "isDataAction": True},
    ])
    def test_missing_name_decodes_empty(self, entry):
        operation = Operation.from_dict(entry)

        assert operation.name == ""
        assert operation.is_data_action_set

    @pytest.mark.parametrize("entry", ["a string", {"name": 42}, {"name": ["pods"]}])
    def test_invalid_entry(self, entry):
        with pytest.raises(DecodeError):
            Operation.from_dict(entry)


class TestOperationList:
    """Test decoding of Get Operations pages"""

    def test_from_dict(self):
        page = OperationList.from_dict({
            "value": [{"name": f"{C.ARC}/pods/read", "isDataAction": True}],
            "nextLink": "https://management.azure.com/next",
        })

        assert [operation.name for operation in page.value] == [f"{C.ARC}/pods/read"]
        assert page.next_link == "https://management.azure.com/next"

    def test_missing_fields(self):
        page = OperationList.from_dict({})

        assert page.value == []
        assert page.next_link == ""

    def test_null_value(self):
        assert OperationList.from_dict({"value": None}).value == []

    @pytest.mark.parametrize("body", [
        [], "text", {"value": {}}, {"value": ""}, {"value": 0},
        {"value": [], "nextLink": 3}, {"value": [], "nextLink": 0},
    ])
    def test_invalid_body(self, body):
        with pytest.raises(DecodeError):
            OperationList.from_dict(body)


class TestOperationsMap:
    """Test lookups and serialization of the operations map"""

    def _sample(self) -> OperationsMap:
        operations_map = OperationsMap()
        operations_map.set("v1", "pods", "read", DataAction(f"{C.ARC}/pods/read", True, True))
        operations_map.set("v1", "nodes", "restart/action", DataAction(f"{C.ARC}/nodes/restart/action", True, False))
        operations_map.set("apps", "deployments", "write", DataAction(f"{C.ARC}/apps/deployments/write", True, True))
        return operations_map

    def test_set_returns_previous_entry(self):
        operations_map = OperationsMap()
        first = DataAction("a/b/c", True, True)
        second = DataAction("a/b/c/d", True, True)

        assert operations_map.set("v1", "pods", "read", first) is None
        assert operations_map.set("v1", "pods", "read", second) == first
        assert operations_map.lookup("v1", "pods", "read") == second

    def test_lookup_missing(self):
        operations_map = self._sample()

        assert operations_map.lookup("v1", "pods", "delete") is None
        assert operations_map.lookup("v1", "secrets", "read") is None
        assert operations_map.lookup("batch", "jobs", "read") is None

    def test_wire_format(self):
        data = json.loads(self._sample().to_json())

        assert data["v1"]["pods"]["read"] == {
            "ActionInfo": {"Id": f"{C.ARC}/pods/read", "IsDataAction": True},
            "IsNamespacedResource": True,
        }

    def test_text_round_trip_keeps_queryable_content(self):
        operations_map = self._sample()

        restored = OperationsMap.from_json(str(operations_map))

        assert restored == operations_map
        assert sorted(restored.iter_entries()) == sorted(operations_map.iter_entries())

    def test_empty_round_trip(self):
        assert OperationsMap.from_json(OperationsMap().to_json()) == {}

    @pytest.mark.parametrize("text", ["not json", "[]", '{"v1": []}', '{"v1": {"pods": 1}}',
                                      '{"v1": {"pods": {"read": {}}}}'])
    def test_from_json_invalid(self, text):
        with pytest.raises(DecodeError):
            OperationsMap.from_json(text)

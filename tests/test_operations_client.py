"""
Operations client tests
"""

from unittest.mock import Mock

import pytest
import requests

from k8s_dataactions.libs.azure.operations import OperationsClient
from k8s_dataactions.libs.azure.tokens import TokenResponse
from k8s_dataactions.libs.core.exceptions import (
    AuthenticationError, DecodeError, NetworkError, ResponseError
)
from k8s_dataactions.libs.discovery.settings import new_discover_resources_settings

from test_constants import CommonTestConstants as C, ResourceBuilders as B


def _response(body=None, status_code=200, text=""):
    response = Mock()
    response.status_code = status_code
    response.text = text
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


class TestOperationsClient:
    """Test the Get Operations call and data action filtering"""

    def setup_method(self):
        self.session = Mock(spec=requests.Session)
        self.token_provider = Mock()
        self.token_provider.acquire.return_value = TokenResponse(token=C.TOKEN)

    def _client(self, cluster_type=C.ARC, **kwargs):
        settings = new_discover_resources_settings(cluster_type, **kwargs)
        return OperationsClient(settings, token_provider=self.token_provider, session=self.session)

    def test_filters_data_actions_of_cluster_type(self):
        self.session.get.return_value = _response({"value": [
            {"name": f"{C.ARC}/pods/read", "isDataAction": True},
            {"name": f"{C.ARC}/write", "isDataAction": False},
            {"name": "Microsoft.Kubernetes/register/action"},
            {"name": f"{C.AKS}/pods/read", "isDataAction": True},
            {"name": f"{C.ARC}/apps/deployments/write", "isDataAction": True},
        ]})

        data_actions = self._client().fetch_data_actions()

        assert [operation.name for operation in data_actions] == [
            f"{C.ARC}/pods/read",
            f"{C.ARC}/apps/deployments/write",
        ]

    def test_null_data_action_flag_is_excluded(self):
        self.session.get.return_value = _response({"value": [
            {"name": f"{C.ARC}/pods/read", "isDataAction": None},
        ]})

        assert self._client().fetch_data_actions() == []

    def test_nameless_entry_is_filtered_out(self):
        self.session.get.return_value = _response({"value": [
            {"display": {}, "isDataAction": True},
            {"name": None, "isDataAction": True},
            {"name": f"{C.ARC}/pods/read", "isDataAction": True},
        ]})

        data_actions = self._client().fetch_data_actions()

        assert [operation.name for operation in data_actions] == [f"{C.ARC}/pods/read"]

    def test_request_shape(self):
        self.session.get.return_value = _response(B.operations_body([]))

        self._client(timeout=12).fetch_data_actions()

        args, kwargs = self.session.get.call_args
        assert args[0] == C.ARC_ENDPOINT
        assert kwargs["headers"]["Authorization"] == f"Bearer {C.TOKEN}"
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert kwargs["headers"]["User-Agent"].startswith("k8s-dataactions-")
        assert kwargs["timeout"] == 12
        assert kwargs["verify"] is True

    def test_skip_tls_disables_verification(self):
        self.session.get.return_value = _response(B.operations_body([]))

        self._client(skip_tls=True).fetch_data_actions()

        assert self.session.get.call_args[1]["verify"] is False

    def test_fleets_use_container_service_endpoint(self):
        self.session.get.return_value = _response(B.operations_body([f"{C.FLEET}/pods/read"]))

        data_actions = self._client(C.FLEET).fetch_data_actions()

        assert self.session.get.call_args[0][0] == C.AKS_ENDPOINT
        assert [operation.name for operation in data_actions] == [f"{C.FLEET}/pods/read"]

    def test_non_success_status(self):
        self.session.get.return_value = _response(status_code=403, text="AuthorizationFailed")

        with pytest.raises(ResponseError) as exc_info:
            self._client().fetch_data_actions()

        assert exc_info.value.status_code == 403
        assert exc_info.value.body == "AuthorizationFailed"
        assert "403" in str(exc_info.value)

    def test_transport_failure(self):
        self.session.get.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(NetworkError) as exc_info:
            self._client().fetch_data_actions()

        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)

    def test_certificate_failure(self):
        self.session.get.side_effect = requests.exceptions.SSLError("certificate verify failed")

        with pytest.raises(NetworkError, match="--skip-tls"):
            self._client().fetch_data_actions()

    def test_invalid_json(self):
        self.session.get.return_value = _response(ValueError("Expecting value"))

        with pytest.raises(DecodeError):
            self._client().fetch_data_actions()

    def test_unexpected_body(self):
        self.session.get.return_value = _response({"value": "nope"})

        with pytest.raises(DecodeError):
            self._client().fetch_data_actions()

    def test_token_failure_skips_request(self):
        self.token_provider.acquire.side_effect = AuthenticationError("no token")

        with pytest.raises(AuthenticationError):
            self._client().fetch_data_actions()

        self.session.get.assert_not_called()

    def test_unexpected_token_failure_is_wrapped(self):
        self.token_provider.acquire.side_effect = RuntimeError("boom")

        with pytest.raises(AuthenticationError, match="boom"):
            self._client().fetch_data_actions()

    def test_empty_token(self):
        self.token_provider.acquire.return_value = TokenResponse(token="")

        with pytest.raises(AuthenticationError, match="empty token"):
            self._client().fetch_data_actions()


class TestOperationsPagination:
    """Test nextLink handling"""

    def setup_method(self):
        self.session = Mock(spec=requests.Session)
        self.token_provider = Mock()
        self.token_provider.acquire.return_value = TokenResponse(token=C.TOKEN)

    def _client(self, **kwargs):
        settings = new_discover_resources_settings(C.ARC, **kwargs)
        return OperationsClient(settings, token_provider=self.token_provider, session=self.session)

    def test_next_link_ignored_by_default(self):
        self.session.get.return_value = _response(
            B.operations_body([f"{C.ARC}/pods/read"], next_link="https://management.azure.com/page2")
        )

        data_actions = self._client().fetch_data_actions()

        assert len(data_actions) == 1
        assert self.session.get.call_count == 1

    def test_follows_next_link(self):
        self.session.get.side_effect = [
            _response(B.operations_body([f"{C.ARC}/pods/read"], next_link="https://management.azure.com/page2")),
            _response(B.operations_body([f"{C.ARC}/nodes/read"])),
        ]

        data_actions = self._client(follow_next_link=True).fetch_data_actions()

        assert [operation.name for operation in data_actions] == [f"{C.ARC}/pods/read", f"{C.ARC}/nodes/read"]
        assert self.session.get.call_args_list[1][0][0] == "https://management.azure.com/page2"

    def test_page_cap(self):
        self.session.get.return_value = _response(
            B.operations_body([f"{C.ARC}/pods/read"], next_link="https://management.azure.com/again")
        )

        data_actions = self._client(follow_next_link=True, max_pages=3).fetch_data_actions()

        assert self.session.get.call_count == 3
        assert len(data_actions) == 3

"""
Protocols

Narrow interfaces of the collaborators the discovery orchestrator depends on,
so they can be swapped for fakes in tests.
"""

from typing import List, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from ..discovery.models import APIResourceList, Operation
    from ..azure.tokens import TokenResponse


class TokenProvider(Protocol):
    """Acquires bearer tokens for Azure Resource Manager"""

    def acquire(self, scope: str = "") -> "TokenResponse":
        ...


class APIResourcesProvider(Protocol):
    """Lists the server preferred API resources of a cluster"""

    def fetch_api_resources(self) -> List["APIResourceList"]:
        ...


class DataActionsProvider(Protocol):
    """Lists the Azure data actions relevant to a cluster type"""

    def fetch_data_actions(self) -> List["Operation"]:
        ...


class MetricsRecorder(Protocol):
    """Observes the durations of the discovery phases, in seconds"""

    def observe_apiserver_call(self, seconds: float) -> None:
        ...

    def observe_cloud_call(self, seconds: float) -> None:
        ...

    def observe_total(self, seconds: float) -> None:
        ...

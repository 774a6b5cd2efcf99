"""
Operations Client

Fetches the Azure operations list of the cluster's resource provider and keeps
the data actions relevant to the cluster type.
"""

import json
import logging
from typing import Dict, List, Optional

import requests

from ..core.constants import ErrorMessages, NetworkConstants, __version__
from ..core.exceptions import AuthenticationError, DecodeError, NetworkError, ResponseError
from ..core.protocols import TokenProvider
from ..core.utils import build_user_agent, disable_ssl_warnings, handle_ssl_error
from ..discovery.models import Operation, OperationList
from ..discovery.settings import DiscoverResourcesSettings
from .tokens import create_token_provider

logger = logging.getLogger(__name__)


class OperationsClient:
    """Client for the Azure Get Operations call"""

    def __init__(self, settings: DiscoverResourcesSettings, token_provider: Optional[TokenProvider] = None,
                 session: Optional[requests.Session] = None, version: str = __version__):
        """
        Initialize operations client

        Args:
            settings: Resolved discovery settings
            token_provider: Bearer token source (defaults to the provider matching the cluster type)
            session: HTTP session (defaults to a new requests.Session)
            version: Tool version reported in the User-Agent
        """
        self.settings = settings
        self.session = session or requests.Session()
        self.token_provider = token_provider or create_token_provider(settings, self.session)
        self.user_agent = build_user_agent(version)

        if settings.skip_tls:
            disable_ssl_warnings()

    def fetch_data_actions(self) -> List[Operation]:
        """
        Fetch the data actions of the cluster type

        Returns:
            List[Operation]: Operations flagged as data actions whose name contains the cluster type

        Raises:
            AuthenticationError: If no bearer token can be acquired
            NetworkError: If the request cannot be sent
            ResponseError: If Azure answers with a non-success status
            DecodeError: If the response body is not an operations list
        """
        headers = self._build_headers(self._acquire_token())

        operations: List[Operation] = []
        url = self.settings.operations_endpoint
        pages = 0

        while url:
            page = self._get_page(url, headers)
            operations.extend(page.value)
            pages += 1

            if not page.next_link:
                break
            if not self.settings.follow_next_link:
                logger.debug(f"Operations list has more pages, not following nextLink {page.next_link}")
                break
            if pages >= self.settings.max_pages:
                logger.warning(f"Stopped following nextLink after {pages} pages, data actions may be incomplete")
                break
            url = page.next_link

        data_actions = [
            operation for operation in operations
            if operation.is_data_action_set and self.settings.cluster_type in operation.name
        ]

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("List of Operations fetched from Azure %s",
                         json.dumps([operation.to_dict() for operation in data_actions]))

        return data_actions

    def _acquire_token(self) -> str:
        try:
            token_response = self.token_provider.acquire()
        except AuthenticationError:
            raise
        except Exception as e:
            raise AuthenticationError(f"Error getting authorization headers for Get Operations call: {e}") from e

        if not token_response.token:
            raise AuthenticationError("Error getting authorization headers for Get Operations call: empty token")
        return token_response.token

    def _build_headers(self, token: str) -> Dict[str, str]:
        return {
            str(NetworkConstants.HTTPHeader.AUTHORIZATION): f"Bearer {token}",
            str(NetworkConstants.HTTPHeader.CONTENT_TYPE): str(NetworkConstants.ContentType.JSON),
            str(NetworkConstants.HTTPHeader.USER_AGENT): self.user_agent,
        }

    def _get_page(self, url: str, headers: Dict[str, str]) -> OperationList:
        logger.debug(f"Sending Get Operations request to {url}")
        try:
            response = self.session.get(url, headers=headers, timeout=self.settings.timeout,
                                        verify=not self.settings.skip_tls)
        except requests.exceptions.SSLError as e:
            handle_ssl_error(e, NetworkError)
        except requests.RequestException as e:
            raise NetworkError(f"Failed to send request for Get Operations call: {e}") from e

        if response.status_code != NetworkConstants.HTTPStatus.OK:
            raise ResponseError(
                ErrorMessages.DiscoveryError.REQUEST_FAILED.format(status_code=response.status_code,
                                                                   body=response.text),
                status_code=response.status_code,
                body=response.text
            )

        try:
            body = response.json()
        except ValueError as e:
            raise DecodeError(f"Failed to decode response: {e}") from e

        return OperationList.from_dict(body)

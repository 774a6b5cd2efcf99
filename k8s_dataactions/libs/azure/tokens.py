"""
Token Providers

Acquire Azure Resource Manager bearer tokens. Connected clusters use the
OAuth2 client credentials grant; managed clusters and fleets go through the
AKS login endpoint.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from ..core.constants import NetworkConstants
from ..core.exceptions import AuthenticationError
from ..core.protocols import TokenProvider
from ..core.utils import handle_ssl_error, mask_sensitive_info
from ..discovery.settings import DiscoverResourcesSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenResponse:
    """Bearer token returned by a token endpoint"""
    token: str = field(repr=False)
    token_type: str = "Bearer"
    expires_in: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "TokenResponse":
        """
        Build a token response from the token endpoint's JSON body.

        Raises:
            AuthenticationError: If the body carries no access token
        """
        if not isinstance(data, dict) or not data.get("access_token"):
            raise AuthenticationError("Token endpoint response has no access_token")
        try:
            expires_in = int(data.get("expires_in") or 0)
        except (TypeError, ValueError):
            expires_in = 0
        return cls(
            token=data["access_token"],
            token_type=data.get("token_type") or "Bearer",
            expires_in=expires_in,
        )


class _HTTPTokenProvider:
    """Shared request handling of the token providers"""

    name = "token"

    def __init__(self, login_url: str, session: Optional[requests.Session] = None,
                 timeout: int = NetworkConstants.DEFAULT_TIMEOUT, verify: bool = True):
        self.login_url = login_url
        self.session = session or requests.Session()
        self.timeout = timeout
        self.verify = verify

    def _post(self, **kwargs) -> TokenResponse:
        logger.debug(f"Acquiring {self.name} token from {self.login_url}")
        try:
            response = self.session.post(self.login_url, timeout=self.timeout, verify=self.verify, **kwargs)
        except requests.exceptions.SSLError as e:
            handle_ssl_error(e, AuthenticationError)
        except requests.RequestException as e:
            raise AuthenticationError(f"Failed to send {self.name} token request: {e}") from e

        if response.status_code != NetworkConstants.HTTPStatus.OK:
            raise AuthenticationError(
                f"{self.name} token request failed with status code: {response.status_code} "
                f"and response: {mask_sensitive_info(response.text)}"
            )

        try:
            body = response.json()
        except ValueError as e:
            raise AuthenticationError(f"Failed to decode {self.name} token response: {e}") from e

        return TokenResponse.from_dict(body)


class ClientCredentialTokenProvider(_HTTPTokenProvider):
    """OAuth2 client credentials grant against Azure AD"""

    name = "client credential"

    def __init__(self, client_id: str, client_secret: str, login_url: str, scope: str, **kwargs):
        """
        Args:
            client_id: Application id
            client_secret: Application secret
            login_url: Token endpoint, ``<aad>/<tenant>/oauth2/v2.0/token``
            scope: Default scope requested when acquire() gets none
        """
        super().__init__(login_url, **kwargs)
        self.client_id = client_id
        self.client_secret = client_secret
        self.scope = scope

    def acquire(self, scope: str = "") -> TokenResponse:
        form: Dict[str, str] = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "scope": scope or self.scope,
            "grant_type": "client_credentials",
        }
        return self._post(
            data=form,
            headers={str(NetworkConstants.HTTPHeader.CONTENT_TYPE): str(NetworkConstants.ContentType.FORM)},
        )


class AKSTokenProvider(_HTTPTokenProvider):
    """Token exchange through the AKS login endpoint"""

    name = "AKS"

    def __init__(self, login_url: str, tenant_id: str, **kwargs):
        super().__init__(login_url, **kwargs)
        self.tenant_id = tenant_id

    def acquire(self, scope: str = "") -> TokenResponse:
        # the login endpoint decides the audience; scope is not sent
        payload: Dict[str, str] = {"tenantID": self.tenant_id}
        return self._post(json=payload)


def create_token_provider(settings: DiscoverResourcesSettings,
                          session: Optional[requests.Session] = None) -> TokenProvider:
    """
    Pick the token provider matching the cluster type.

    Args:
        settings: Resolved discovery settings
        session: HTTP session shared with the caller (optional)

    Returns:
        TokenProvider: Client credential provider for connected clusters,
        AKS provider for managed clusters and fleets
    """
    common = {"session": session, "timeout": settings.timeout, "verify": not settings.skip_tls}

    if settings.is_connected_cluster:
        return ClientCredentialTokenProvider(
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            login_url=f"{settings.active_directory_endpoint}/{settings.tenant_id}/oauth2/v2.0/token",
            scope=f"{settings.resource_manager_endpoint}/.default",
            **common
        )

    return AKSTokenProvider(login_url=settings.aks_login_url, tenant_id=settings.tenant_id, **common)

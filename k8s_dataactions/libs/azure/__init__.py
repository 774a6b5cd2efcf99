"""
Azure Libraries

Token acquisition and the Get Operations call.
"""

from .operations import OperationsClient
from .tokens import AKSTokenProvider, ClientCredentialTokenProvider, TokenResponse, create_token_provider

__all__ = [
    'OperationsClient',
    'AKSTokenProvider',
    'ClientCredentialTokenProvider',
    'TokenResponse',
    'create_token_provider'
]

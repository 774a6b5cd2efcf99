"""
Core Utilities

Common utility functions used across the data actions discovery tool.
"""

import logging
import platform
import re
from typing import Type

import urllib3

from .constants import ErrorMessages, NetworkConstants
from .exceptions import DataActionsError, NetworkError


def setup_logging(debug: bool = False) -> None:
    """
    Set up logging configuration for the application.

    Args:
        debug: Enable debug logging level
    """
    level = logging.DEBUG if debug else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    root_logger.addHandler(console_handler)

    # Reduce noise from urllib3 when using insecure connections
    logging.getLogger('urllib3').setLevel(logging.WARNING)

    if debug:
        logging.getLogger(__name__).debug("Debug mode enabled")


def disable_ssl_warnings() -> None:
    """Disable SSL warnings when --skip-tls is used"""
    urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)


def build_user_agent(version: str) -> str:
    """
    Build the User-Agent sent to Azure, identifying platform, runtime and tool version.

    Args:
        version: Tool version

    Returns:
        str: User-Agent header value
    """
    system_platform = f"{platform.system().lower()}/{platform.machine().lower()}"
    return f"{NetworkConstants.USER_AGENT_PREFIX}-{system_platform}-python{platform.python_version()}-{version}"


def mask_sensitive_info(text: str, token: str = None) -> str:
    """
    Mask sensitive information in text for logging and debug output.

    Args:
        text: Text to mask
        token: Token or secret to mask (optional)

    Returns:
        Text with sensitive information masked
    """
    if not text:
        return text

    masked_text = text
    if token and token in masked_text:
        masked_text = masked_text.replace(token, "***MASKED***")

    masked_text = re.sub(r'Bearer [A-Za-z0-9+/=_.-]+', 'Bearer ***MASKED***', masked_text)
    masked_text = re.sub(r'(client_secret=)[^&\s]+', r'\1***MASKED***', masked_text)

    return masked_text


def handle_ssl_error(error: Exception, exception_class: Type[DataActionsError] = NetworkError,
                     context: str = "Connection error") -> None:
    """
    Centralized SSL error handling with user-friendly messages

    Args:
        error: The caught exception
        exception_class: The specific exception class to raise
        context: Prefix for non-SSL errors

    Raises:
        DataActionsError: Appropriate error type with user-friendly message
    """
    error_str = str(error)

    if "certificate verify failed" in error_str or "CERTIFICATE_VERIFY_FAILED" in error_str:
        raise exception_class(ErrorMessages.SSLError.CERT_VERIFICATION_FAILED.value) from error
    elif "SSLError" in error_str or "SSL:" in error_str:
        raise exception_class(ErrorMessages.SSLError.CONNECTION_ERROR.format(error=error)) from error
    else:
        raise exception_class(f"{context}: {error}") from error

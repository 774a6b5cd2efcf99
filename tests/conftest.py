"""
Shared pytest fixtures
"""

import logging

import pytest

from k8s_dataactions.libs.discovery.settings import new_discover_resources_settings

from test_constants import CommonTestConstants as C


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() reconfigures the root logger; put it back after each test"""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def arc_settings():
    return new_discover_resources_settings(
        C.ARC, tenant_id=C.TENANT_ID, client_id=C.CLIENT_ID, client_secret=C.CLIENT_SECRET
    )


@pytest.fixture
def aks_settings():
    return new_discover_resources_settings(C.AKS, login_url=C.AKS_LOGIN_URL, tenant_id=C.TENANT_ID)

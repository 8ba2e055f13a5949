"""Pytest fixtures for qn testing.

To use these fixtures, add to your conftest.py:

    pytest_plugins = ["qn.testing.fixtures"]

Or import specific fixtures:

    from qn.testing.fixtures import qiniu_client, upload_server
"""

import pytest

from qn.core.client import QiniuClient
from qn.core.settings import QiniuSettings
from qn.testing.mocks import MockUploadServer
from qn.testing.utils import create_test_client, create_test_settings


@pytest.fixture
def qiniu_settings() -> QiniuSettings:
    """Provide test settings for qn.

    Returns:
        QiniuSettings instance configured for testing
    """
    return create_test_settings()


@pytest.fixture
def upload_server(qiniu_settings: QiniuSettings) -> MockUploadServer:
    """Provide a mock upload endpoint that accepts the test credentials.

    Returns:
        MockUploadServer instance
    """
    server = MockUploadServer(
        access_key=qiniu_settings.access_key,
        secret_key=qiniu_settings.secret_key,
    )
    yield server
    server.reset()


@pytest.fixture
def qiniu_client(
    qiniu_settings: QiniuSettings, upload_server: MockUploadServer
) -> QiniuClient:
    """Provide a client that uploads to ``upload_server``.

    Returns:
        QiniuClient instance
    """
    client, _ = create_test_client(qiniu_settings, upload_server)
    return client

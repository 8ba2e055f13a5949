"""Testing utilities for qn applications.

This module provides a mock upload endpoint and helpers for testing code
that uploads through qn without touching the network.

Usage in conftest.py:
    from qn.testing import MockUploadServer, create_test_client

    @pytest.fixture
    def client():
        client, server = create_test_client()
        return client

Or use provided fixtures directly:
    pytest_plugins = ["qn.testing.fixtures"]
"""

from qn.testing.mocks import MockUploadServer, RecordedUpload, UploadedPart
from qn.testing.utils import create_test_client, create_test_settings

__all__ = [
    "MockUploadServer",
    "RecordedUpload",
    "UploadedPart",
    "create_test_client",
    "create_test_settings",
]

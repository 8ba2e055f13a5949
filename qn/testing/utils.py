"""Testing utilities for qn applications."""

from qn.core.client import QiniuClient
from qn.core.settings import QiniuSettings
from qn.testing.mocks import MockUploadServer


def create_test_settings(
    bucket_name: str = "test-bucket",
    access_key: str = "test-access-key",
    secret_key: str = "test-secret-key-for-testing-only",
    **overrides
) -> QiniuSettings:
    """Create qn settings for testing.

    Args:
        bucket_name: Default bucket for tokens
        access_key: Access key for tokens
        secret_key: Secret key used to sign tokens
        **overrides: Additional settings to override

    Returns:
        QiniuSettings instance configured for testing
    """
    return QiniuSettings(
        access_key=access_key,
        secret_key=secret_key,
        bucket_name=bucket_name,
        **overrides,
    )


def create_test_client(
    settings: QiniuSettings | None = None,
    server: MockUploadServer | None = None,
) -> tuple[QiniuClient, MockUploadServer]:
    """Create a client wired to a mock upload server.

    The server verifies tokens against the same credentials as the client.

    Returns:
        Tuple of (client, server)
    """
    settings = settings or create_test_settings()
    if server is None:
        server = MockUploadServer(
            access_key=settings.access_key, secret_key=settings.secret_key
        )
    client = QiniuClient(settings, transport=server.transport)
    return client, server

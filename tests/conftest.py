"""Shared fixtures for the qn test suite."""

import pytest

pytest_plugins = ["qn.testing.fixtures"]


@pytest.fixture(autouse=True)
def clean_qiniu_env(monkeypatch):
    """Keep QINIU_* variables from the environment out of the tests."""
    for name in (
        "QINIU_ACCESS_KEY",
        "QINIU_SECRET_KEY",
        "QINIU_BUCKET_NAME",
        "QINIU_DOMAIN",
        "QINIU_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)

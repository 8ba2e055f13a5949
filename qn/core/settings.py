"""Client configuration for qn.

Settings are immutable once loaded. Values passed explicitly win over
``QINIU_*`` environment variables.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

UPLOAD_URL = "http://up.qiniu.com/"

# 10 hours, in milliseconds
DEFAULT_TIMEOUT_MS = 36_000_000


class QiniuSettings(BaseSettings):
    """Credentials and defaults for a single QiniuClient.

    Credentials default to empty strings so that missing values can be
    reported together by ``missing_fields`` instead of failing one by one.
    """

    access_key: str = Field(default="", description="Qiniu access key")
    secret_key: str = Field(default="", description="Qiniu secret key")
    bucket_name: str = Field(
        default="", description="Bucket used as the default token scope"
    )
    domain: str | None = Field(
        default=None, description="Download domain bound to the bucket"
    )
    timeout: int = Field(
        default=DEFAULT_TIMEOUT_MS,
        description="Upload request timeout in milliseconds",
    )

    model_config = SettingsConfigDict(
        env_prefix="QINIU_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("domain", mode="before")
    @classmethod
    def _empty_domain_is_none(cls, value):
        return value or None

    @field_validator("timeout", mode="before")
    @classmethod
    def _default_timeout(cls, value):
        return value or DEFAULT_TIMEOUT_MS

    @property
    def timeout_seconds(self) -> float:
        """Timeout converted for the HTTP transport."""
        return self.timeout / 1000

    def missing_fields(self) -> list[str]:
        """Return the names of required credentials that are not set."""
        missing = []
        if not self.access_key:
            missing.append("access_key")
        if not self.secret_key:
            missing.append("secret_key")
        if not self.bucket_name:
            missing.append("bucket_name")
        return missing

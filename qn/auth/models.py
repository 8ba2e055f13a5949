"""Put policy model for upload tokens."""

import json
import time

from pydantic import BaseModel, ConfigDict, Field

from qn.core.exceptions import QiniuSerializationError

# Seconds an upload token stays valid when no deadline is given
DEFAULT_TOKEN_TTL = 3600


class PutPolicy(BaseModel):
    """Upload constraints and directives carried inside an upload token.

    Field names follow Python conventions; the wire form uses the camelCase
    names the upload service expects. Directives without a dedicated field
    (for example ``fsizeLimit``) are accepted as extra keyword arguments
    and serialized verbatim.

    ``return_url``/``return_body`` and ``callback_url``/``callback_body``
    are documented as mutually exclusive by the service. That is not
    checked here.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    scope: str | None = None
    deadline: int | None = None
    end_user: str | None = Field(default=None, alias="endUser")
    return_url: str | None = Field(default=None, alias="returnUrl")
    return_body: str | None = Field(default=None, alias="returnBody")
    callback_url: str | None = Field(default=None, alias="callbackUrl")
    callback_body: str | None = Field(default=None, alias="callbackBody")
    async_ops: str | None = Field(default=None, alias="asyncOps")

    def with_defaults(self, bucket_name: str, now: int | None = None) -> "PutPolicy":
        """Return a copy with scope and deadline filled in.

        Args:
            bucket_name: Scope used when none is set
            now: Current unix time; read from the clock when omitted

        Returns:
            A new PutPolicy with both scope and deadline set
        """
        updates = {}
        if not self.scope:
            updates["scope"] = bucket_name
        if not self.deadline:
            if now is None:
                now = int(time.time())
            updates["deadline"] = now + DEFAULT_TOKEN_TTL
        if not updates:
            return self
        return self.model_copy(update=updates)

    def to_wire(self) -> dict:
        """Dump the policy using wire names, dropping unset directives."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Serialize the policy to compact JSON.

        Raises:
            QiniuSerializationError: If a directive is not JSON-serializable
        """
        try:
            return json.dumps(
                self.to_wire(), separators=(",", ":"), ensure_ascii=False
            )
        except (TypeError, ValueError) as e:
            raise QiniuSerializationError(
                f"Put policy could not be serialized: {e}", original_error=e
            )

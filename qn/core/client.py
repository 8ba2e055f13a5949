"""Qiniu client: upload tokens and form uploads."""

import asyncio
import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any

import httpx

from qn.auth.models import PutPolicy
from qn.auth.token import UploadTokenSigner
from qn.core.exceptions import QiniuConfigurationError, QiniuTransportError
from qn.core.settings import UPLOAD_URL, QiniuSettings
from qn.storage.form import MultipartForm
from qn.storage.uploads import (
    UploadOptions,
    UploadResult,
    build_upload_form,
    classify_response,
    coerce_options,
    parse_response_body,
)

logger = logging.getLogger(__name__)

UploadCallback = Callable[[Any, Any, Any], Any]


class QiniuClient:
    """Client for a single bucket.

    The client only holds immutable settings, so one instance can run any
    number of concurrent uploads.

    Example:
        client = QiniuClient(
            access_key="ak", secret_key="sk", bucket_name="photos"
        )
        result = await client.upload(b"...", {"key": "a.jpg", "x:uid": "42"})
        if result.ok:
            print(result.data["hash"])
    """

    upload_url: str = UPLOAD_URL

    def __init__(
        self,
        settings: QiniuSettings | None = None,
        *,
        access_key: str | None = None,
        secret_key: str | None = None,
        bucket_name: str | None = None,
        domain: str | None = None,
        timeout: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            settings: Complete settings (preferred)
            access_key: Access key, if settings not provided
            secret_key: Secret key, if settings not provided
            bucket_name: Default bucket, if settings not provided
            domain: Download domain bound to the bucket
            timeout: Default request timeout in milliseconds
            transport: httpx transport used for uploads, for tests or proxies

        Raises:
            QiniuConfigurationError: If a credential is missing
        """
        if settings is None:
            overrides = {
                "access_key": access_key,
                "secret_key": secret_key,
                "bucket_name": bucket_name,
                "domain": domain,
                "timeout": timeout,
            }
            settings = QiniuSettings(
                **{name: value for name, value in overrides.items() if value is not None}
            )

        missing = settings.missing_fields()
        if missing:
            raise QiniuConfigurationError(missing_fields=missing)

        self.settings = settings
        self._transport = transport
        self._signer = UploadTokenSigner(
            settings.access_key, settings.secret_key, settings.bucket_name
        )

    @classmethod
    def create(cls, settings: QiniuSettings | None = None, **kwargs) -> "QiniuClient":
        """Alternate constructor, same arguments as ``QiniuClient()``."""
        return cls(settings, **kwargs)

    @property
    def bucket_name(self) -> str:
        return self.settings.bucket_name

    def upload_token(
        self,
        policy: PutPolicy | Mapping[str, Any] | None = None,
        **fields: Any,
    ) -> str:
        """Create a signed upload token.

        Args:
            policy: Put policy or mapping of directives
            **fields: Directives merged over ``policy``, e.g.
                ``deadline=...`` or ``returnBody=...``

        Returns:
            The token string ``access_key:signature:encoded_policy``

        Raises:
            QiniuSerializationError: If the policy is not JSON-serializable
        """
        if fields:
            base = policy.to_wire() if isinstance(policy, PutPolicy) else dict(policy or {})
            policy = PutPolicy.model_validate({**base, **fields})
        return self._signer.sign(policy)

    async def upload(
        self,
        content: Any,
        options: UploadOptions | Mapping[str, Any] | None = None,
        callback: UploadCallback | None = None,
    ) -> UploadResult:
        """Upload content with a single multipart POST.

        HTTP and transport failures do not raise; they are reported on the
        returned result and to ``callback``, which is called exactly once
        with ``(error, data, response)``.

        Args:
            content: bytes, str, binary file object, MultipartForm, or a
                content variant from ``qn.storage.content``
            options: UploadOptions or an equivalent mapping
            callback: Optional completion callback, sync or async

        Returns:
            The upload result

        Raises:
            TypeError: If the content type is not supported
            pydantic.ValidationError: If the options are invalid
            QiniuSerializationError: If the upload token cannot be built
        """
        options = coerce_options(options)
        token = self._signer.sign()
        form = build_upload_form(content, options, token)
        timeout = (options.timeout or self.settings.timeout) / 1000

        logger.debug(
            f"Uploading {form!r} to bucket {self.bucket_name} "
            f"(key={options.key!r}, timeout={timeout}s)"
        )
        result = await self._send(form, timeout)

        if result.error is None:
            logger.info(f"Uploaded to bucket {self.bucket_name} (key={options.key!r})")
        elif result.response is not None:
            logger.warning(
                f"Upload to bucket {self.bucket_name} rejected "
                f"with status {result.status_code}: {result.error.message}"
            )

        if callback is not None:
            outcome = callback(result.error, result.data, result.response)
            if inspect.isawaitable(outcome):
                await outcome
        return result

    def upload_in_background(
        self,
        content: Any,
        options: UploadOptions | Mapping[str, Any] | None = None,
        callback: UploadCallback | None = None,
    ) -> "asyncio.Task[UploadResult]":
        """Schedule ``upload`` on the running event loop and return at once.

        The event loop only keeps a weak reference to the task. Keep the
        returned task (or await it) until it is done, otherwise it can be
        garbage collected before the upload finishes.
        """
        return asyncio.create_task(self.upload(content, options, callback))

    async def _send(self, form: MultipartForm, timeout: float) -> UploadResult:
        """POST the form and classify the outcome."""
        try:
            async with httpx.AsyncClient(
                timeout=timeout, transport=self._transport
            ) as http:
                response = await http.post(
                    self.upload_url,
                    headers={"Accept": "application/json"},
                    **form.request_kwargs(),
                )
        except httpx.HTTPError as e:
            logger.error(f"Upload to {self.upload_url} failed: {e!r}")
            return UploadResult(
                error=QiniuTransportError(original_error=e, endpoint=self.upload_url)
            )

        data = parse_response_body(response)
        return UploadResult(
            error=classify_response(response, data),
            data=data,
            response=response,
        )

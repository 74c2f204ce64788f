import logging
from typing import Optional
from urllib.parse import quote

import httpx

from ...application.ports.verify_provider import (
    VERIFY_TEMPLATE,
    VERIFY_TYPE,
    ConfirmResult,
    CreateResult,
    ErrorReport,
    ProviderError,
    VerificationHandle,
    VerifyProvider,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://rest.messagebird.com"


class MessageBirdVerifyProvider(VerifyProvider):
    """MessageBird Verify API over a shared httpx client."""

    def __init__(self, api_key: str, base_url: str = DEFAULT_BASE_URL, timeout: float = 10.0, client: Optional[httpx.Client] = None):
        self.client = client or httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={
                "Authorization": f"AccessKey {api_key}",
                "Accept": "application/json",
            },
        )

    def create(self, number: str) -> CreateResult:
        payload = {"recipient": number, "type": VERIFY_TYPE, "template": VERIFY_TEMPLATE}
        try:
            response = self.client.post("/verify", json=payload)
        except httpx.TransportError as e:
            logger.warning(f"MessageBird verify create failed: {e!r}")
            return CreateResult(error=ErrorReport.unreachable())

        error = self._error_report(response)
        if error is not None:
            return CreateResult(error=error)
        verification_id = response.json().get("id")
        if not verification_id:
            return CreateResult(error=ErrorReport.from_errors([ProviderError(code=response.status_code, description="Response did not include a verification id")]))
        return CreateResult(handle=VerificationHandle(id=str(verification_id)))

    def confirm(self, verification_id: str, token: str) -> ConfirmResult:
        path = f"/verify/{quote(verification_id or '', safe='')}"
        try:
            response = self.client.get(path, params={"token": token})
        except httpx.TransportError as e:
            logger.warning(f"MessageBird verify confirm failed: {e!r}")
            return ConfirmResult(error=ErrorReport.unreachable())

        return ConfirmResult(error=self._error_report(response))

    def close(self) -> None:
        self.client.close()

    def _error_report(self, response: httpx.Response) -> Optional[ErrorReport]:
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict) and body.get("errors"):
            return ErrorReport.from_errors(
                ProviderError(code=e.get("code"), description=e.get("description", ""))
                for e in body["errors"]
            )
        if response.is_error or not isinstance(body, dict):
            return ErrorReport.from_errors([ProviderError(code=response.status_code, description=response.reason_phrase)])
        return None

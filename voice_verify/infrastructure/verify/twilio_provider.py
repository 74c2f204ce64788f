import logging
from typing import Optional

import requests
from twilio.base.exceptions import TwilioRestException
from twilio.http.http_client import TwilioHttpClient
from twilio.rest import Client

from ...application.ports.verify_provider import (
    ConfirmResult,
    CreateResult,
    ErrorReport,
    ProviderError,
    VerificationHandle,
    VerifyProvider,
)

logger = logging.getLogger(__name__)

# Twilio Verify speaks its own message on voice calls; custom templates are not supported
VOICE_CHANNEL = "call"
APPROVED = "approved"


def _to_e164(number: str) -> str:
    return number if number.startswith("+") else f"+{number}"


def _rest_error(e: TwilioRestException) -> ErrorReport:
    return ErrorReport.from_errors([ProviderError(code=e.code or e.status, description=e.msg)])


class TwilioVerifyProvider(VerifyProvider):
    def __init__(self, account_sid: str, auth_token: str, verify_sid: str, timeout: float = 10.0, client: Optional[Client] = None):
        self.client = client or Client(
            account_sid,
            auth_token,
            http_client=TwilioHttpClient(timeout=timeout),
        )
        self.verify_sid = verify_sid

    def create(self, number: str) -> CreateResult:
        try:
            verification = self.client.verify.services(self.verify_sid).verifications.create(
                to=_to_e164(number), channel=VOICE_CHANNEL
            )
        except TwilioRestException as e:
            return CreateResult(error=_rest_error(e))
        except requests.RequestException as e:
            logger.warning(f"Twilio verification create failed: {e!r}")
            return CreateResult(error=ErrorReport.unreachable())
        return CreateResult(handle=VerificationHandle(id=verification.sid))

    def confirm(self, verification_id: str, token: str) -> ConfirmResult:
        try:
            check = self.client.verify.services(self.verify_sid).verification_checks.create(
                verification_sid=verification_id, code=token
            )
        except TwilioRestException as e:
            return ConfirmResult(error=_rest_error(e))
        except requests.RequestException as e:
            logger.warning(f"Twilio verification check failed: {e!r}")
            return ConfirmResult(error=ErrorReport.unreachable())

        if check.status != APPROVED:
            return ConfirmResult(error=ErrorReport.from_errors([
                ProviderError(code=check.status, description="Verification code was not approved")
            ]))
        return ConfirmResult()

    def close(self) -> None:
        session = getattr(self.client.http_client, "session", None)
        if session is not None:
            session.close()

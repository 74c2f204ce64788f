import logging
from dataclasses import dataclass
from typing import Optional

from ..ports.audit_logger import AuditLogger
from ..ports.verify_provider import ConfirmResult, CreateResult, ErrorReport, VerifyProvider
from ...utils import compose_phone_number

logger = logging.getLogger(__name__)


def _error_details(error: Optional[ErrorReport]) -> dict:
    if error is None:
        return {}
    if error.transport_failure:
        return {"transport_failure": True}
    return {"error_codes": [e.code for e in error.errors]}


@dataclass
class VerificationService:
    provider: VerifyProvider
    audit_logger: Optional[AuditLogger] = None

    def start(self, country_code: str, phone_number: str) -> CreateResult:
        number = compose_phone_number(country_code, phone_number)
        result = self.provider.create(number)
        if result.ok:
            logger.info(f"Verification {result.handle.id} created")
        else:
            logger.info(f"Verification create failed: {result.error.message!r}")
        self._audit(
            "verification_create",
            phone=number,
            verification_id=result.handle.id if result.handle else None,
            success=result.ok,
            details=_error_details(result.error),
        )
        return result

    def confirm(self, verification_id: str, token: str) -> ConfirmResult:
        result = self.provider.confirm(verification_id, token)
        if result.ok:
            logger.info(f"Verification {verification_id} confirmed")
        else:
            logger.info(f"Verification {verification_id} not confirmed: {result.error.message!r}")
        self._audit(
            "verification_confirm",
            verification_id=verification_id,
            success=result.ok,
            details=_error_details(result.error),
        )
        return result

    def _audit(self, action: str, **kwargs) -> None:
        if self.audit_logger is not None:
            self.audit_logger.log(action, **kwargs)

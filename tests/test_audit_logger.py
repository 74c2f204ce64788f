import json
import logging

from voice_verify.infrastructure.audit.std_logger import StdAuditLogger
from voice_verify.utils import hash_phone_number


def test_audit_entry_hashes_phone_number(caplog):
    caplog.set_level(logging.INFO, logger="voice_verify.infrastructure.audit.std_logger")
    StdAuditLogger().log("verification_create", phone="31612345678", verification_id="abc", details={"error_codes": []})

    assert "31612345678" not in caplog.text
    message = caplog.records[-1].getMessage()
    assert message.startswith("AUDIT: ")
    entry = json.loads(message[len("AUDIT: "):])
    assert entry["action"] == "verification_create"
    assert entry["phone_hash"] == hash_phone_number("31612345678")
    assert entry["verification_id"] == "abc"
    assert entry["success"] is True


def test_audit_entry_without_phone(caplog):
    caplog.set_level(logging.INFO, logger="voice_verify.infrastructure.audit.std_logger")
    StdAuditLogger().log("verification_confirm", verification_id="abc", success=False)

    entry = json.loads(caplog.records[-1].getMessage()[len("AUDIT: "):])
    assert entry["phone_hash"] is None
    assert entry["success"] is False

from types import SimpleNamespace

import requests
from twilio.base.exceptions import TwilioRestException

from voice_verify.infrastructure.verify.twilio_provider import TwilioVerifyProvider


class FakeEndpoint:
    def __init__(self, outcome):
        self.outcome = outcome
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


class FakeTwilioClient:
    def __init__(self, verification=None, check=None):
        self.verifications = FakeEndpoint(verification)
        self.verification_checks = FakeEndpoint(check)
        self.service_sids = []
        self.closed = False
        self.http_client = SimpleNamespace(session=SimpleNamespace(close=self._close))
        self.verify = SimpleNamespace(services=self._services)

    def _services(self, sid):
        self.service_sids.append(sid)
        return SimpleNamespace(verifications=self.verifications, verification_checks=self.verification_checks)

    def _close(self):
        self.closed = True


def make_provider(client):
    return TwilioVerifyProvider("AC123", "token", "VA123", client=client)


def test_create_places_voice_call_in_e164():
    client = FakeTwilioClient(verification=SimpleNamespace(sid="VEabc", status="pending"))

    result = make_provider(client).create("31612345678")

    assert result.ok
    assert result.handle.id == "VEabc"
    assert client.service_sids == ["VA123"]
    assert client.verifications.calls == [{"to": "+31612345678", "channel": "call"}]


def test_create_rest_error_becomes_error_report():
    error = TwilioRestException(400, "/Verifications", msg="Invalid parameter `To`", code=60200, method="POST")
    client = FakeTwilioClient(verification=error)

    result = make_provider(client).create("31bogus")

    assert not result.ok
    assert result.error.message == "Error code 60200: Invalid parameter `To`"


def test_create_connection_error_is_unreachable():
    client = FakeTwilioClient(verification=requests.ConnectionError("refused"))

    result = make_provider(client).create("31612345678")

    assert result.error.transport_failure


def test_confirm_checks_by_verification_sid():
    client = FakeTwilioClient(check=SimpleNamespace(status="approved"))

    result = make_provider(client).confirm("VEabc", "123456")

    assert result.ok
    assert client.verification_checks.calls == [{"verification_sid": "VEabc", "code": "123456"}]


def test_confirm_pending_status_is_an_error():
    client = FakeTwilioClient(check=SimpleNamespace(status="pending"))

    result = make_provider(client).confirm("VEabc", "000000")

    assert not result.ok
    assert result.error.message == "Error code pending: Verification code was not approved"


def test_confirm_rest_error_without_code_uses_status():
    client = FakeTwilioClient(check=TwilioRestException(404, "/VerificationCheck", msg="Not found", method="POST"))

    result = make_provider(client).confirm("VEgone", "123456")

    assert result.error.message == "Error code 404: Not found"


def test_confirm_timeout_is_unreachable():
    client = FakeTwilioClient(check=requests.Timeout("timed out"))

    result = make_provider(client).confirm("VEabc", "123456")

    assert result.error.transport_failure


def test_close_closes_http_session():
    client = FakeTwilioClient()
    make_provider(client).close()
    assert client.closed

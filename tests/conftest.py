import pytest

SETTINGS_ENV = (
    "APP_ENV",
    "DEBUG",
    "LOG_LEVEL",
    "VERIFY_PROVIDER",
    "PROVIDER_TIMEOUT_SECONDS",
    "MESSAGEBIRD_API_KEY",
    "MESSAGEBIRD_BASE_URL",
    "TWILIO_ACCOUNT_SID",
    "TWILIO_AUTH_TOKEN",
    "TWILIO_VERIFY_SERVICE_SID",
)


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch):
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)

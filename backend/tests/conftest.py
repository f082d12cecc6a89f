import smtplib
import threading

import pytest
from fastapi.testclient import TestClient

from contact_relay.core.settings import SmtpConfig, get_settings
from contact_relay.main import create_app

REQUIRED_ENV = {
    "SMTP_SERVER": "smtp.example.com",
    "SMTP_USER": "forms@example.com",
    "SMTP_PASSWORD": "s3cret",
    "DEFAULT_RECEIVER": "inbox@example.com",
}
OPTIONAL_ENV = ["SMTP_PORT", "CORS_ORIGINS", "PORT", "WEB_CONCURRENCY"]


class FakeRelay:
    """In-memory stand-in for smtplib.SMTP_SSL that records every connection."""

    def __init__(self):
        self.connections = []
        self.logins = []
        self.sent = []
        self.fail_on_connect = None
        self.fail_on_login = None
        self.fail_on_send = None
        # predicate on the outgoing message; True means the relay rejects it
        self.reject_if = None
        self._lock = threading.Lock()

    def factory(self, host, port=0, *args, **kwargs):
        relay = self
        with self._lock:
            self.connections.append((host, port))
        if self.fail_on_connect is not None:
            raise self.fail_on_connect

        class _Session:
            def __enter__(self):
                return self

            def __exit__(self, *exc):
                return False

            def login(self, user, password):
                if relay.fail_on_login is not None:
                    raise relay.fail_on_login
                with relay._lock:
                    relay.logins.append((user, password))

            def send_message(self, msg):
                # force serialization the way a real transport would
                msg.as_string()
                if relay.fail_on_send is not None:
                    raise relay.fail_on_send
                if relay.reject_if is not None and relay.reject_if(msg):
                    raise smtplib.SMTPDataError(554, b"Transaction failed")
                with relay._lock:
                    relay.sent.append(msg)
                return {}

        return _Session()


@pytest.fixture
def smtp_env(monkeypatch, tmp_path):
    # keep a developer's .env or shell exports out of the tests
    monkeypatch.chdir(tmp_path)
    for key in OPTIONAL_ENV:
        monkeypatch.delenv(key, raising=False)
    for key, value in REQUIRED_ENV.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()
    yield REQUIRED_ENV
    get_settings.cache_clear()


@pytest.fixture
def config(smtp_env):
    return SmtpConfig(_env_file=None)


@pytest.fixture
def relay(monkeypatch):
    fake = FakeRelay()
    monkeypatch.setattr("contact_relay.core.mailer.smtplib.SMTP_SSL", fake.factory)
    return fake


@pytest.fixture
def app(config):
    application = create_app()
    application.dependency_overrides[get_settings] = lambda: config
    return application


@pytest.fixture
def client(app, relay):
    return TestClient(app)

import json
import os
import shutil
import tempfile

import pytest
import requests
from flask import Flask

from mailchimp_subscriber_count import SubscriberCount
from mailchimp_subscriber_count.core.config import Config


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for test databases, cleaned up after."""
    d = tempfile.mkdtemp(prefix="mc-subscriber-count-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture(autouse=True)
def isolated_config(tmp_db_dir, monkeypatch):
    """Point every database at the temp dir and hide real credentials."""
    monkeypatch.setattr(Config, "DB_DIR", tmp_db_dir)
    monkeypatch.setattr(Config, "SETTINGS_DB", os.path.join(tmp_db_dir, "settings.db"))
    monkeypatch.setattr(Config, "LOG_DB", os.path.join(tmp_db_dir, "logs.db"))
    monkeypatch.setattr(Config, "TRANSIENTS_DB", os.path.join(tmp_db_dir, "transients.db"))
    monkeypatch.delenv("MAILCHIMP_API_KEY", raising=False)
    monkeypatch.delenv("MAILCHIMP_LIST_ID", raising=False)
    monkeypatch.setenv("SECRET_KEY", "test-secret")


def make_app(tmp_db_dir, **config):
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = tmp_db_dir
    app.config["SETTINGS_DB"] = os.path.join(tmp_db_dir, "settings.db")
    app.config["LOG_DB"] = os.path.join(tmp_db_dir, "logs.db")
    app.config["TRANSIENTS_DB"] = os.path.join(tmp_db_dir, "transients.db")
    app.config.update(config)
    SubscriberCount(app)
    return app


@pytest.fixture
def app(tmp_db_dir):
    """Flask app with the subscriber count extension initialised."""
    return make_app(tmp_db_dir)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    """Test client with an admin session."""
    with client.session_transaction() as sess:
        sess["admin_id"] = 1
    return client


def make_response(payload=None, status_code=200, body=None):
    """Build a real requests.Response carrying a JSON (or raw) body."""
    response = requests.Response()
    response.status_code = status_code
    response.url = "https://us6.api.mailchimp.com/3.0/lists/L1"
    response._content = (body if body is not None else json.dumps(payload)).encode("utf-8")
    return response


@pytest.fixture
def app_factory(tmp_db_dir):
    """Build an app with extra config, e.g. app_factory(SUBSCRIBER_COUNT_CACHE='sqlite')."""
    return lambda **config: make_app(tmp_db_dir, **config)


@pytest.fixture
def mc_response():
    """Factory for fake MailChimp responses."""
    return make_response

"""
Tests for the settings store and the config provider that owns cache
invalidation.
Run with: pytest tests/test_settings.py -v
"""

import os
import sqlite3
from unittest.mock import MagicMock

import pytest

from mailchimp_subscriber_count.core.exceptions import InvalidSettings
from mailchimp_subscriber_count.modules.mailchimp import CountCache
from mailchimp_subscriber_count.modules.mailchimp.models import Credentials
from mailchimp_subscriber_count.modules.settings import SettingsConfigProvider
from mailchimp_subscriber_count.modules.settings.database import (
    get_setting, set_setting, mask_secret, sanitize
)


@pytest.fixture
def db_path(tmp_db_dir):
    return os.path.join(tmp_db_dir, "settings.db")


@pytest.fixture
def cache():
    cache = CountCache(ttl=60)
    cache.get_or_fetch(Credentials("abc-us6", "L1"), MagicMock(return_value=5))
    return cache


# ---------------------------------------------------------------------------
# Settings store
# ---------------------------------------------------------------------------

def test_secret_is_encrypted_at_rest(db_path):
    set_setting("MAILCHIMP_API_KEY", "abc123-us6", is_secret=True, db_path=db_path)

    with sqlite3.connect(db_path) as conn:
        stored = conn.execute(
            "SELECT value FROM settings WHERE key = ?", ("MAILCHIMP_API_KEY",)
        ).fetchone()[0]

    assert stored != "abc123-us6"
    assert get_setting("MAILCHIMP_API_KEY", db_path=db_path) == "abc123-us6"


def test_get_setting_falls_back_to_environment(db_path, monkeypatch):
    monkeypatch.setenv("MAILCHIMP_LIST_ID", "from-env")
    assert get_setting("MAILCHIMP_LIST_ID", db_path=db_path) == "from-env"

    set_setting("MAILCHIMP_LIST_ID", "from-db", db_path=db_path)
    assert get_setting("MAILCHIMP_LIST_ID", db_path=db_path) == "from-db"


def test_undecryptable_secret_reads_as_unset(db_path, monkeypatch):
    set_setting("MAILCHIMP_API_KEY", "abc123-us6", is_secret=True, db_path=db_path)
    set_setting("MAILCHIMP_LIST_ID", "L1", db_path=db_path)
    monkeypatch.setenv("SECRET_KEY", "rotated-secret")

    assert get_setting("MAILCHIMP_API_KEY", "", db_path=db_path) == ""

    provider = SettingsConfigProvider(CountCache(), db_path=db_path)
    assert provider.get_credentials().is_configured is False
    assert provider.masked_settings()["MAILCHIMP_API_KEY"] == ""


def test_mask_secret():
    assert mask_secret("abcdef123-us6") == "*********-us6"
    assert mask_secret("abc") == "****"
    assert mask_secret("") == ""


def test_sanitize_keeps_only_schema_keys():
    clean = sanitize({
        "MAILCHIMP_API_KEY": "  abc123-us6 ",
        "MAILCHIMP_LIST_ID": "L1",
        "is_admin": "yes",
    })
    assert clean == {"MAILCHIMP_API_KEY": "abc123-us6", "MAILCHIMP_LIST_ID": "L1"}


def test_sanitize_drops_masked_secret():
    assert sanitize({"MAILCHIMP_API_KEY": "*******-us6"}) == {}


@pytest.mark.parametrize("data", [["MAILCHIMP_API_KEY"], {"MAILCHIMP_LIST_ID": 42}])
def test_sanitize_rejects_bad_input(data):
    with pytest.raises(InvalidSettings):
        sanitize(data)


# ---------------------------------------------------------------------------
# Config provider
# ---------------------------------------------------------------------------

def test_provider_defaults_to_empty_credentials(db_path, cache):
    credentials = SettingsConfigProvider(cache, db_path=db_path).get_credentials()
    assert credentials == Credentials("", "")
    assert not credentials.is_configured


def test_update_saves_and_invalidates(db_path, cache):
    provider = SettingsConfigProvider(cache, db_path=db_path)

    changed = provider.update({"MAILCHIMP_API_KEY": "abc123-us6", "MAILCHIMP_LIST_ID": "L1"})

    assert sorted(changed) == ["MAILCHIMP_API_KEY", "MAILCHIMP_LIST_ID"]
    assert provider.get_credentials() == Credentials("abc123-us6", "L1")
    assert cache.peek() is None


def test_unchanged_update_keeps_cache(db_path, cache):
    provider = SettingsConfigProvider(cache, db_path=db_path)
    provider.update({"MAILCHIMP_LIST_ID": "L1"})
    cache.get_or_fetch(provider.get_credentials(), MagicMock(return_value=9))

    assert provider.update({"MAILCHIMP_LIST_ID": "L1"}) == []
    assert cache.peek().value == 9


def test_masked_echo_does_not_overwrite_key(db_path, cache):
    provider = SettingsConfigProvider(cache, db_path=db_path)
    provider.update({"MAILCHIMP_API_KEY": "abc123-us6"})

    masked = provider.masked_settings()
    assert masked["MAILCHIMP_API_KEY"].endswith("-us6")
    assert masked["MAILCHIMP_API_KEY"].startswith("*")

    provider.update(masked)
    assert provider.get_credentials().api_key == "abc123-us6"

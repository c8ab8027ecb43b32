"""
Settings Database with Encryption
=================================

Stores the MailChimp settings with encryption for the API key.
Uses Fernet symmetric encryption (AES-128-CBC).
"""

import sqlite3
import os
import base64
import hashlib
import logging
from datetime import datetime

from cryptography.fernet import Fernet, InvalidToken

from mailchimp_subscriber_count.core.config import get_config_value
from mailchimp_subscriber_count.core.database import Database
from mailchimp_subscriber_count.core.exceptions import InvalidSettings

logger = logging.getLogger(__name__)


def get_settings_db_path():
    """Get settings database path"""
    return Database.ensure_parent_dir(get_config_value('SETTINGS_DB', 'settings.db'))


def get_encryption_key():
    """
    Derive encryption key from Flask SECRET_KEY.
    Returns a Fernet-compatible key (32 bytes, base64 encoded).
    """
    try:
        from flask import current_app
        secret = current_app.config.get('SECRET_KEY') or 'default-insecure-key'
    except RuntimeError:
        # Outside of app context
        secret = os.environ.get('SECRET_KEY', os.environ.get('FLASK_SECRET_KEY', 'default-insecure-key'))

    # Derive a 32-byte key using SHA256
    key_bytes = hashlib.sha256(secret.encode()).digest()
    return base64.urlsafe_b64encode(key_bytes)


def encrypt_value(value):
    """Encrypt a value using Fernet"""
    if not value:
        return value
    return Fernet(get_encryption_key()).encrypt(value.encode()).decode()


def decrypt_value(encrypted_value):
    """Decrypt a value using Fernet"""
    if not encrypted_value:
        return encrypted_value

    try:
        return Fernet(get_encryption_key()).decrypt(encrypted_value.encode()).decode()
    except InvalidToken:
        # SECRET_KEY changed; the secret reads as unset
        logger.warning("Could not decrypt a stored setting; re-enter it in the settings")
        return ''


def mask_secret(value):
    """Show only the last 4 characters of a secret"""
    if not value:
        return value
    if len(value) <= 4:
        return '****'
    return '*' * (len(value) - 4) + value[-4:]


def init_settings_db(db_path=None):
    """Initialize settings database"""
    db_path = db_path or get_settings_db_path()

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    cursor.execute('''
        CREATE TABLE IF NOT EXISTS settings (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            key TEXT NOT NULL UNIQUE,
            value TEXT,
            is_secret BOOLEAN DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')
    cursor.execute('CREATE INDEX IF NOT EXISTS idx_settings_key ON settings(key)')

    conn.commit()
    conn.close()

    return db_path


def get_setting(key, default=None, decrypt=True, db_path=None):
    """
    Get a setting value by key.
    Falls back to environment variable if not in database.
    """
    db_path = db_path or get_settings_db_path()
    if not os.path.exists(db_path):
        return os.environ.get(key, default)

    conn = sqlite3.connect(db_path)
    try:
        cursor = conn.cursor()
        cursor.execute('SELECT value, is_secret FROM settings WHERE key = ?', (key,))
        row = cursor.fetchone()
    except sqlite3.OperationalError:
        # Table not created yet
        row = None
    finally:
        conn.close()

    if row:
        value, is_secret = row
        if is_secret and decrypt and value:
            value = decrypt_value(value)
        return value if value else default

    return os.environ.get(key, default)


def set_setting(key, value, is_secret=False, db_path=None):
    """Set a setting value"""
    db_path = init_settings_db(db_path)

    stored_value = encrypt_value(value) if is_secret and value else value

    Database.execute_write(db_path, '''
        INSERT INTO settings (key, value, is_secret, updated_at)
        VALUES (?, ?, ?, ?)
        ON CONFLICT(key) DO UPDATE SET
            value = excluded.value,
            is_secret = excluded.is_secret,
            updated_at = excluded.updated_at
    ''', (key, stored_value, is_secret, datetime.now().isoformat()))
    return True


# The only settings this extension accepts
SETTINGS_SCHEMA = [
    {'key': 'MAILCHIMP_API_KEY', 'label': 'MailChimp API Key', 'is_secret': True, 'default': '',
     'description': 'Found under Extras > API keys of your MailChimp account page'},
    {'key': 'MAILCHIMP_LIST_ID', 'label': 'MailChimp List ID', 'is_secret': False, 'default': '',
     'description': 'Found under Settings > List name and defaults while viewing a list'},
]

SCHEMA_BY_KEY = {s['key']: s for s in SETTINGS_SCHEMA}


def sanitize(data):
    """
    Validate submitted settings against SETTINGS_SCHEMA.

    Unknown keys are dropped. Values must be strings and are stripped.
    A secret that still looks masked ('****abcd') is dropped so it does
    not overwrite the stored key.
    """
    if not isinstance(data, dict):
        raise InvalidSettings("Settings must be a JSON object")

    output = {}
    for key, value in data.items():
        setting = SCHEMA_BY_KEY.get(key)
        if setting is None:
            continue
        if value is None:
            value = ''
        if not isinstance(value, str):
            raise InvalidSettings(f"{key} must be a string")

        value = value.strip()
        if setting['is_secret'] and value.startswith('*'):
            continue
        output[key] = value

    return output

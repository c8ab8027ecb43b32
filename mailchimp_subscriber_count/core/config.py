import os
from dotenv import load_dotenv

load_dotenv(override=True)

class Config:
    """
    Base configuration for the subscriber count extension.
    Values set on the Flask app config take precedence over these.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

    # Get DB_DIR from environment, or use a default if not set
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))

    # Database paths - use environment variables or fallback to DB_DIR
    SETTINGS_DB = os.getenv('SETTINGS_DB', os.path.join(DB_DIR, "settings.db"))
    LOG_DB = os.getenv('LOG_DB', os.path.join(DB_DIR, "logs.db"))
    TRANSIENTS_DB = os.getenv('TRANSIENTS_DB', os.path.join(DB_DIR, "transients.db"))

    # MAILCHIMP_API_KEY / MAILCHIMP_LIST_ID are read from the settings DB,
    # falling back to the environment (see modules/settings/database.py)

    # Seconds before the HTTP request to MailChimp is abandoned
    MAILCHIMP_TIMEOUT = float(os.getenv('MAILCHIMP_TIMEOUT', '10'))

    # Subscriber count cache: 3 days by default
    SUBSCRIBER_COUNT_TTL = int(os.getenv('SUBSCRIBER_COUNT_TTL', str(60 * 60 * 24 * 3)))
    # 'memory' (per process) or 'sqlite' (shared by every worker on the host)
    SUBSCRIBER_COUNT_CACHE = os.getenv('SUBSCRIBER_COUNT_CACHE', 'memory')
    SUBSCRIBER_COUNT_LOCALE = os.getenv('SUBSCRIBER_COUNT_LOCALE', 'en_US')


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val:
        return val
    return os.getenv(key, default)

"""
Flask extension that builds the subscriber count components once per app
and registers the HTTP endpoints and template helper.
"""

import logging

from .core.config import Config
from .core.database import Database
from .modules.mailchimp import CountCache, MemoryCountStore, SqliteCountStore, SubscriberCountService
from .modules.settings import SettingsConfigProvider, settings_bp
from .modules.counter import count_bp

logger = logging.getLogger(__name__)

EXTENSION_NAME = 'mailchimp_subscriber_count'

# Copied into app.config when the app does not set them
CONFIG_DEFAULTS = [
    'DB_DIR', 'SETTINGS_DB', 'LOG_DB', 'TRANSIENTS_DB',
    'MAILCHIMP_TIMEOUT', 'SUBSCRIBER_COUNT_TTL', 'SUBSCRIBER_COUNT_CACHE',
    'SUBSCRIBER_COUNT_LOCALE',
]


class SubscriberCount:
    """
    Usage:
        app = Flask(__name__)
        subscriber_count = SubscriberCount(app)

    Templates can then call {{ mailchimp_subscriber_count() }}.
    """

    def __init__(self, app=None):
        self.cache = None
        self.provider = None
        self.service = None

        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        for key in CONFIG_DEFAULTS:
            app.config.setdefault(key, getattr(Config, key))
        # Encrypts the stored API key
        if not app.config.get('SECRET_KEY') and Config.SECRET_KEY:
            app.config['SECRET_KEY'] = Config.SECRET_KEY

        Database.ensure_parent_dir(app.config['SETTINGS_DB'])

        self.cache = CountCache(
            store=self._build_store(app),
            ttl=int(app.config['SUBSCRIBER_COUNT_TTL']),
        )
        self.provider = SettingsConfigProvider(self.cache, db_path=app.config['SETTINGS_DB'])
        self.service = SubscriberCountService(
            self.provider,
            self.cache,
            locale=app.config['SUBSCRIBER_COUNT_LOCALE'],
            timeout=float(app.config['MAILCHIMP_TIMEOUT']),
        )

        app.extensions[EXTENSION_NAME] = self
        app.register_blueprint(settings_bp)
        app.register_blueprint(count_bp)
        app.add_template_global(self.service.get_subscriber_count, 'mailchimp_subscriber_count')

        logger.info(f"Subscriber count ready (cache: {app.config['SUBSCRIBER_COUNT_CACHE']}, "
                    f"ttl: {app.config['SUBSCRIBER_COUNT_TTL']}s)")

    @staticmethod
    def _build_store(app):
        backend = app.config['SUBSCRIBER_COUNT_CACHE']
        if backend == 'sqlite':
            return SqliteCountStore(app.config['TRANSIENTS_DB'])
        if backend == 'memory':
            return MemoryCountStore()
        raise ValueError(f"Unknown SUBSCRIBER_COUNT_CACHE backend: {backend!r}")

    def get_subscriber_count(self):
        return self.service.get_subscriber_count()

"""
Settings Config Provider
========================

Supplies the MailChimp credentials to the subscriber count service and
owns the update path: any change to a stored credential invalidates the
subscriber count cache so the next read reflects the new list.
"""

from mailchimp_subscriber_count.core.logging_service import LoggingService
from mailchimp_subscriber_count.modules.mailchimp.models import Credentials
from .database import (
    get_setting, set_setting, init_settings_db, mask_secret, sanitize,
    SETTINGS_SCHEMA, SCHEMA_BY_KEY
)

API_KEY_SETTING = 'MAILCHIMP_API_KEY'
LIST_ID_SETTING = 'MAILCHIMP_LIST_ID'


class SettingsConfigProvider:
    """
    Args:
        cache: the CountCache to invalidate when credentials change
        db_path: settings database, SETTINGS_DB from config when omitted
    """

    def __init__(self, cache, db_path=None):
        self.cache = cache
        self.db_path = db_path

    def _get(self, key):
        return get_setting(key, SCHEMA_BY_KEY[key]['default'], db_path=self.db_path) or ''

    def get_credentials(self):
        return Credentials(api_key=self._get(API_KEY_SETTING), list_id=self._get(LIST_ID_SETTING))

    def update(self, data):
        """
        Save submitted settings and invalidate the cache if anything changed.

        Returns:
            list of the keys whose stored value changed

        Raises:
            InvalidSettings: data does not match SETTINGS_SCHEMA
        """
        clean = sanitize(data)
        init_settings_db(self.db_path)

        changed = []
        for key, value in clean.items():
            if self._get(key) == value:
                continue
            set_setting(key, value, is_secret=SCHEMA_BY_KEY[key]['is_secret'], db_path=self.db_path)
            changed.append(key)

        if changed:
            self.cache.invalidate()
            LoggingService.info('settings', 'MailChimp settings updated', {'changed': changed})

        return changed

    def masked_settings(self):
        """Current values keyed by setting, secrets masked"""
        values = {}
        for setting in SETTINGS_SCHEMA:
            value = self._get(setting['key'])
            values[setting['key']] = mask_secret(value) if setting['is_secret'] else value
        return values

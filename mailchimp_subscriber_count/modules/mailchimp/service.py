import logging
import sqlite3

from mailchimp_subscriber_count.core.exceptions import SubscriberCountError, FetchFailed
from mailchimp_subscriber_count.core.logging_service import LoggingService
from .client import fetch_member_count, DEFAULT_TIMEOUT
from .formatting import format_count, DEFAULT_LOCALE

logger = logging.getLogger(__name__)


class SubscriberCountService:
    """
    Public accessor for the subscriber count.

    Takes the settings provider and the cache explicitly; both are built
    once by the SubscriberCount extension. Errors never escape
    get_count or get_subscriber_count: they are logged and the count is
    reported as unavailable.
    """

    def __init__(self, provider, cache, fetcher=fetch_member_count,
                 locale=DEFAULT_LOCALE, timeout=DEFAULT_TIMEOUT):
        self.provider = provider
        self.cache = cache
        self.fetcher = fetcher
        self.locale = locale
        self.timeout = timeout

    def _fetch(self, credentials):
        return self.fetcher(credentials, timeout=self.timeout)

    def get_count(self):
        """Raw member count, or None when unset or unavailable"""
        try:
            credentials = self.provider.get_credentials()
            if not credentials.is_configured:
                logger.debug("MailChimp credentials not configured, skipping count")
                return None
            return self.cache.get_or_fetch(credentials, self._fetch)
        except SubscriberCountError as e:
            # Transient failures are warnings; the others need an admin
            log = LoggingService.warning if isinstance(e, FetchFailed) else LoggingService.error
            log('mailchimp', f"Subscriber count unavailable: {e}", {
                'error_type': type(e).__name__,
                'status_code': getattr(e, 'status_code', None),
            })
            return None
        except sqlite3.Error as e:
            LoggingService.error('mailchimp', f"Subscriber count storage error: {e}", {
                'error_type': type(e).__name__,
            })
            return None

    def get_subscriber_count(self):
        """Formatted member count, or an empty string when unavailable"""
        count = self.get_count()
        if count is None:
            return ''
        return format_count(count, self.locale)

    def refresh(self):
        """
        Fetch again, bypassing the cached entry. Unlike get_count this
        raises SubscriberCountError so admin tooling can show what went
        wrong; a failed refresh leaves the cached entry as it was.
        """
        credentials = self.provider.get_credentials()
        return self.cache.refresh(credentials, self._fetch)

    def invalidate(self):
        self.cache.invalidate()

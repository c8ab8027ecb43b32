"""
Subscriber Count Cache
======================

A single cached member count with a time-to-live, so page renders do not
call MailChimp every time. Two storage backends:

- MemoryCountStore: one slot per process
- SqliteCountStore: a row in a SQLite transients table, shared by every
  worker process that points at the same file

There is no cross-process lock. Two workers missing at the same time may
both fetch; whichever stores last wins.
"""

import logging
import threading
import time

from mailchimp_subscriber_count.core.database import Database
from .models import CachedCount

logger = logging.getLogger(__name__)

CACHE_KEY = 'mailchimp_subscriber_count'
DEFAULT_TTL = 60 * 60 * 24 * 3  # 3 days


class MemoryCountStore:
    """Process-wide slot holding at most one CachedCount"""

    def __init__(self):
        self._entry = None
        self._lock = threading.Lock()

    def get(self):
        with self._lock:
            return self._entry

    def set(self, entry):
        with self._lock:
            self._entry = entry

    def delete(self):
        with self._lock:
            self._entry = None


class SqliteCountStore:
    """CachedCount persisted as a row in a SQLite transients table"""

    def __init__(self, db_path, key=CACHE_KEY):
        self.db_path = Database.ensure_parent_dir(db_path)
        self.key = key
        self._init_table()

    def _init_table(self):
        with Database.connect(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS transients (
                    key TEXT PRIMARY KEY,
                    value INTEGER NOT NULL,
                    fetched_at REAL NOT NULL,
                    ttl REAL NOT NULL,
                    fingerprint TEXT NOT NULL DEFAULT ''
                )
            ''')
            conn.commit()

    def get(self):
        with Database.connect(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                'SELECT value, fetched_at, ttl, fingerprint FROM transients WHERE key = ?',
                (self.key,)
            )
            row = cursor.fetchone()

        if not row:
            return None
        value, fetched_at, ttl, fingerprint = row
        return CachedCount(value=int(value), fetched_at=float(fetched_at), ttl=float(ttl),
                           fingerprint=fingerprint)

    def set(self, entry):
        Database.execute_write(self.db_path, '''
            INSERT INTO transients (key, value, fetched_at, ttl, fingerprint)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                fetched_at = excluded.fetched_at,
                ttl = excluded.ttl,
                fingerprint = excluded.fingerprint
        ''', (self.key, entry.value, entry.fetched_at, entry.ttl, entry.fingerprint))

    def delete(self):
        Database.execute_write(self.db_path, 'DELETE FROM transients WHERE key = ?', (self.key,))


class CountCache:
    """
    Serves the cached count while it is fresh and fetches it otherwise.

    An entry only counts as a hit for the credentials it was fetched with,
    so a key or list change made outside SettingsConfigProvider.update
    (environment, another worker) is still picked up.

    Args:
        store: storage backend, MemoryCountStore when omitted
        ttl: seconds a fetched count stays valid
    """

    def __init__(self, store=None, ttl=DEFAULT_TTL):
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")
        self.store = store if store is not None else MemoryCountStore()
        self.ttl = ttl

    def get_or_fetch(self, credentials, fetch_fn, ttl=None):
        """
        Return the cached count, calling fetch_fn(credentials) on a miss.

        Errors from fetch_fn propagate and nothing is written, so an
        existing entry keeps its original fetched_at.
        """
        entry = self.store.get()
        if entry is not None and entry.matches(credentials) and entry.is_valid(time.time()):
            logger.debug(f"Subscriber count cache hit ({entry.value})")
            return entry.value

        logger.debug("Subscriber count cache miss, fetching")
        return self.refresh(credentials, fetch_fn, ttl)

    def refresh(self, credentials, fetch_fn, ttl=None):
        """Fetch regardless of the stored entry, replacing it only on success"""
        ttl = self.ttl if ttl is None else ttl
        value = fetch_fn(credentials)
        # Last successful fetch always overwrites
        self.store.set(CachedCount(value=value, fetched_at=time.time(), ttl=ttl,
                                   fingerprint=credentials.fingerprint))
        return value

    def peek(self):
        """Stored entry, valid or not"""
        return self.store.get()

    def invalidate(self):
        """Drop the cached count unconditionally"""
        self.store.delete()
        logger.info("Subscriber count cache invalidated")

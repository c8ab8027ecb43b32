"""
MailChimp Module
================

Cached subscriber count for one MailChimp list:
- endpoint: regional API URL from the API key's data center suffix
- client: authenticated fetch of stats.member_count
- cache: TTL cache with memory and SQLite stores
- formatting: locale-aware thousands grouping
- service: the accessor used by templates and routes
"""

from .models import Credentials, CachedCount
from .endpoint import resolve_endpoint
from .client import fetch_member_count
from .cache import CountCache, MemoryCountStore, SqliteCountStore, CACHE_KEY, DEFAULT_TTL
from .formatting import format_count
from .service import SubscriberCountService

__all__ = [
    'Credentials', 'CachedCount', 'resolve_endpoint', 'fetch_member_count',
    'CountCache', 'MemoryCountStore', 'SqliteCountStore', 'CACHE_KEY', 'DEFAULT_TTL',
    'format_count', 'SubscriberCountService',
]

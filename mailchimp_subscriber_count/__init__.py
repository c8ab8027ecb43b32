"""
MailChimp Subscriber Count
==========================

A Flask extension that displays a cached MailChimp list subscriber count:
- Regional endpoint resolution from the API key
- Authenticated fetch of the list's member count
- TTL cache (3 days by default) with memory or SQLite storage
- Admin JSON API for the API key / list ID, with cache invalidation on save

Usage:
    from mailchimp_subscriber_count import SubscriberCount

    subscriber_count = SubscriberCount(app)

    # In templates
    {{ mailchimp_subscriber_count() }}
"""

__version__ = '1.0.0'

from .extension import SubscriberCount

__all__ = ['SubscriberCount']

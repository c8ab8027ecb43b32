"""
Modules
=======

Feature modules of the subscriber count extension.
"""

__all__ = ['mailchimp', 'settings', 'counter']

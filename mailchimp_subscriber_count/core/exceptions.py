"""
Error types raised while fetching the subscriber count.

None of these are fatal: SubscriberCountService catches every
SubscriberCountError and reports the count as unavailable.
"""


class SubscriberCountError(Exception):
    """Base class for everything that can stop a count from being produced"""


class InvalidCredentials(SubscriberCountError):
    """API key or list ID missing or malformed. Needs reconfiguration, not a retry."""


class FetchFailed(SubscriberCountError):
    """Transport error or non-2xx response from MailChimp"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponse(SubscriberCountError):
    """Response body does not carry a usable stats.member_count"""


class InvalidSettings(ValueError):
    """Submitted settings do not match the settings schema"""

import hashlib
from dataclasses import dataclass


@dataclass(frozen=True)
class Credentials:
    """API key and list ID addressing one MailChimp list"""

    api_key: str = ''
    list_id: str = ''

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.list_id)

    @property
    def fingerprint(self) -> str:
        """Digest identifying the key/list pair without storing the key"""
        return hashlib.sha256(f"{self.api_key}:{self.list_id}".encode()).hexdigest()


@dataclass(frozen=True)
class CachedCount:
    """
    A fetched member count and when it was fetched (epoch seconds).
    fingerprint is that of the Credentials the count was fetched with.
    """

    value: int
    fetched_at: float
    ttl: float
    fingerprint: str = ''

    def __post_init__(self):
        if self.value < 0:
            raise ValueError(f"member count cannot be negative: {self.value}")

    def age(self, now: float) -> float:
        return now - self.fetched_at

    def is_valid(self, now: float) -> bool:
        return self.age(now) < self.ttl

    def matches(self, credentials) -> bool:
        return self.fingerprint == credentials.fingerprint

    def to_dict(self, now: float) -> dict:
        return {
            'value': self.value,
            'fetched_at': self.fetched_at,
            'ttl': self.ttl,
            'age': round(self.age(now), 3),
            'valid': self.is_valid(now),
        }

"""
Core
====

Configuration, persistence helpers, logging and error types shared by the
subscriber count modules.
"""

from .config import Config, get_config_value
from .database import Database
from .exceptions import (
    SubscriberCountError, InvalidCredentials, FetchFailed, MalformedResponse, InvalidSettings
)
from .logging_service import LoggingService

__all__ = [
    'Config', 'get_config_value', 'Database', 'LoggingService',
    'SubscriberCountError', 'InvalidCredentials', 'FetchFailed', 'MalformedResponse',
    'InvalidSettings',
]

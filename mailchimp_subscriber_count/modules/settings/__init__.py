"""
Settings Module
===============

Admin JSON API for the MailChimp API key and list ID.
The API key is encrypted at rest. Saving new values invalidates the
subscriber count cache.
"""

from flask import Blueprint

settings_bp = Blueprint('mailchimp_settings', __name__, url_prefix='/admin/mailchimp')

from .provider import SettingsConfigProvider
from . import routes

__all__ = ['settings_bp', 'SettingsConfigProvider']

"""
Settings Admin Routes
=====================

Admin JSON API for the MailChimp settings and the subscriber count cache.
"""

import time
from functools import wraps

from flask import request, session, jsonify, current_app
from . import settings_bp
from .database import SETTINGS_SCHEMA
from mailchimp_subscriber_count.core.exceptions import InvalidSettings, SubscriberCountError
from mailchimp_subscriber_count.core.logging_service import LoggingService


def admin_required(f):
    """Decorator to require admin login"""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'admin_id' not in session:
            return jsonify({'success': False, 'error': 'Admin login required'}), 401
        return f(*args, **kwargs)
    return decorated_function


def _extension():
    return current_app.extensions['mailchimp_subscriber_count']


@settings_bp.route('/settings', methods=['GET'])
@admin_required
def get_settings():
    """Current settings (API key masked) and the settings schema"""
    provider = _extension().provider
    return jsonify({
        'success': True,
        'settings': provider.masked_settings(),
        'schema': SETTINGS_SCHEMA,
    })


@settings_bp.route('/settings', methods=['POST'])
@admin_required
def save_settings():
    """Save settings; the provider invalidates the cache on change"""
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict()

    try:
        changed = _extension().provider.update(data)
    except InvalidSettings as e:
        return jsonify({'success': False, 'error': str(e)}), 400

    return jsonify({
        'success': True,
        'message': f'Settings saved successfully ({len(changed)} settings updated)',
        'changed': changed,
    })


@settings_bp.route('/cache', methods=['GET'])
@admin_required
def cache_status():
    """Inspect the cached subscriber count"""
    ext = _extension()
    entry = ext.cache.peek()
    return jsonify({
        'success': True,
        'ttl': ext.cache.ttl,
        'entry': entry.to_dict(time.time()) if entry else None,
    })


@settings_bp.route('/cache/clear', methods=['POST'])
@admin_required
def clear_cache():
    """Drop the cached subscriber count"""
    _extension().service.invalidate()
    LoggingService.info('settings', 'Subscriber count cache cleared by admin')
    return jsonify({'success': True, 'message': 'Subscriber count cache cleared'})


@settings_bp.route('/test-connection', methods=['GET'])
@admin_required
def test_connection():
    """Fetch the count from MailChimp now, bypassing the cache"""
    service = _extension().service
    try:
        count = service.refresh()
    except SubscriberCountError as e:
        return jsonify({
            'success': False,
            'error_type': type(e).__name__,
            'error': str(e),
        })

    return jsonify({
        'success': True,
        'count': count,
        'formatted': service.get_subscriber_count(),
        'message': 'MailChimp connection successful',
    })


@settings_bp.route('/logs', methods=['GET'])
@admin_required
def recent_logs():
    """Recent MailChimp and settings log records, newest first"""
    source = request.args.get('source')
    limit = min(request.args.get('limit', 50, type=int), 500)
    return jsonify({'success': True, 'logs': LoggingService.get_recent_logs(source, limit)})

from flask import jsonify, current_app
from . import count_bp


@count_bp.route('', methods=['GET'])
def get_subscriber_count():
    """Formatted subscriber count; empty when unset or unavailable"""
    service = current_app.extensions['mailchimp_subscriber_count'].service
    count = service.get_subscriber_count()
    response = jsonify({'count': count, 'available': bool(count)})
    response.headers['Cache-Control'] = 'public, max-age=300'
    return response

"""
Counter Module
==============

Public read-only endpoint with the formatted subscriber count:
- GET /api/subscriber-count
"""

from flask import Blueprint

count_bp = Blueprint('subscriber_count', __name__, url_prefix='/api/subscriber-count')

from . import routes

__all__ = ['count_bp']

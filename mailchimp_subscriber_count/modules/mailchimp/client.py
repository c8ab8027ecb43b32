"""
MailChimp List Client
=====================

Fetches the member count of a single list from the MailChimp Marketing API v3.
Authentication is HTTP Basic with a placeholder username and the API key as
the password. No retries: callers rely on the cache TTL to pace attempts.
"""

import base64
import logging

import requests

from mailchimp_subscriber_count.core.exceptions import FetchFailed, MalformedResponse
from mailchimp_subscriber_count.core.logging_service import LoggingService
from .endpoint import resolve_endpoint

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10
AUTH_USERNAME = 'x'


def build_auth_header(api_key):
    """Basic auth header value for the given API key"""
    token = base64.b64encode(f"{AUTH_USERNAME}:{api_key}".encode('utf-8')).decode('ascii')
    return f"Basic {token}"


def parse_member_count(data):
    """
    Extract stats.member_count from a decoded list response.

    Accepts ints, integral floats and digit strings. Anything else,
    including booleans and negative numbers, is a MalformedResponse.
    """
    stats = data.get('stats') if isinstance(data, dict) else None
    if not isinstance(stats, dict) or 'member_count' not in stats:
        raise MalformedResponse("Response has no stats.member_count field")

    value = stats['member_count']
    if isinstance(value, bool):
        raise MalformedResponse(f"stats.member_count is not numeric: {value!r}")

    if isinstance(value, int):
        count = value
    elif isinstance(value, float) and value.is_integer():
        count = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        count = int(value.strip())
    else:
        raise MalformedResponse(f"stats.member_count is not numeric: {value!r}")

    if count < 0:
        raise MalformedResponse(f"stats.member_count is negative: {count}")
    return count


def fetch_member_count(credentials, timeout=DEFAULT_TIMEOUT):
    """
    Fetch the current member count for the configured list.

    Args:
        credentials: Credentials with api_key and list_id
        timeout: Seconds before the request is abandoned

    Returns:
        int member count

    Raises:
        InvalidCredentials: key or list ID missing or malformed
        FetchFailed: transport error or non-2xx status
        MalformedResponse: body is not JSON or lacks stats.member_count
    """
    url = resolve_endpoint(credentials.api_key, credentials.list_id)
    headers = {
        'Authorization': build_auth_header(credentials.api_key.strip()),
        'Accept': 'application/json',
    }

    try:
        response = requests.get(url, headers=headers, timeout=timeout)
        response.raise_for_status()
    except requests.HTTPError as e:
        status_code = e.response.status_code if e.response is not None else None
        LoggingService.log_api_call('mailchimp', url, 'GET', status_code)
        raise FetchFailed(f"MailChimp returned HTTP {status_code}", status_code=status_code) from e
    except requests.RequestException as e:
        LoggingService.log_api_call('mailchimp', url, 'GET', None, {'error': str(e)})
        raise FetchFailed(f"MailChimp request failed: {e}") from e

    LoggingService.log_api_call('mailchimp', url, 'GET', response.status_code)

    try:
        data = response.json()
    except ValueError as e:
        raise MalformedResponse("MailChimp response is not valid JSON") from e

    count = parse_member_count(data)
    logger.debug(f"Fetched member count {count} for list {credentials.list_id}")
    return count

import re
from urllib.parse import quote

from mailchimp_subscriber_count.core.exceptions import InvalidCredentials

API_DOMAIN = "api.mailchimp.com"
API_VERSION = "3.0"

# Region prefix plus number, e.g. us6, us19
DATA_CENTER_PATTERN = re.compile(r'[a-z]+[0-9]+')


def get_data_center(api_key: str) -> str:
    """Return the data center suffix of an API key (``abc123-us6`` -> ``us6``)"""
    api_key = (api_key or '').strip()
    if not api_key:
        raise InvalidCredentials("MailChimp API key is not set")
    if '-' not in api_key:
        raise InvalidCredentials("MailChimp API key has no data center suffix")

    data_center = api_key.rsplit('-', 1)[1]
    if not data_center:
        raise InvalidCredentials("MailChimp API key has an empty data center suffix")
    if not DATA_CENTER_PATTERN.fullmatch(data_center):
        raise InvalidCredentials(f"MailChimp API key has an invalid data center suffix: {data_center!r}")
    return data_center


def resolve_endpoint(api_key: str, list_id: str) -> str:
    """Build the list endpoint URL on the key's regional API host"""
    list_id = (list_id or '').strip()
    if not list_id:
        raise InvalidCredentials("MailChimp list ID is not set")

    data_center = get_data_center(api_key)
    encoded_id = quote(list_id, safe='')
    return f"https://{data_center}.{API_DOMAIN}/{API_VERSION}/lists/{encoded_id}"

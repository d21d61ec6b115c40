"""
Helper Functions

Contains utility functions used throughout the application.
"""

import re
from typing import Dict, Optional
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from ..config.game_settings import DEFAULT_MAX_GUESSES, MAX_GUESSES, MIN_GUESSES
from ..errors import InvalidDefinition

_NON_LETTERS = re.compile(r'[^a-z]', re.IGNORECASE)


def sanitize_word(word: str) -> str:
    """Strip everything but ASCII letters and fold to uppercase."""
    return _NON_LETTERS.sub('', word).upper()


def clamp_guesses(value) -> int:
    """
    Normalizes a guess budget from form or payload input.

    Blank values fall back to the default, numbers (or numeric strings) are
    truncated to whole guesses and clamped into the allowed range.

    Raises:
        InvalidDefinition: If the value is not numeric at all
    """
    if not value:
        return DEFAULT_MAX_GUESSES
    if isinstance(value, bool):
        raise InvalidDefinition("Max guesses must be a number.")
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        raise InvalidDefinition("Max guesses must be a number.")
    return min(MAX_GUESSES, max(MIN_GUESSES, number))


def build_share_url(base_url: str, token: str, param: str = 'd') -> str:
    """Embed a puzzle token in base_url as the only query parameter."""
    scheme, netloc, path, _, _ = urlsplit(base_url)
    return urlunsplit((scheme, netloc, path or '/', urlencode({param: token}), ''))


def extract_token(url_or_query: Optional[str], param: str = 'd') -> Optional[str]:
    """
    Pull the puzzle token out of a share link.

    Accepts a full URL or a bare query string. Returns None when the
    parameter is absent, which means no puzzle is loaded.
    """
    if not url_or_query:
        return None
    parts = urlsplit(url_or_query)
    query = parts.query
    if not query and '=' in url_or_query and not parts.scheme:
        query = url_or_query.lstrip('?')
    values = parse_qs(query).get(param)
    if not values or not values[0]:
        return None
    return values[0]


def get_user_identity(request_obj=None) -> Dict[str, str]:
    """Identify a caller by IP; there are no accounts."""
    if request_obj is None:
        from flask import request
        request_obj = request

    user_ip = getattr(request_obj, 'remote_addr', None) or 'unknown'

    return {'user_ip': user_ip}

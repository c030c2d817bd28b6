"""
HTTP helpers shared by the OAuth and API clients.
"""

from typing import Any

import httpx

# Raised while building a request, before anything goes on the wire.
REQUEST_SETUP_ERRORS = (httpx.InvalidURL, httpx.UnsupportedProtocol, TypeError, ValueError)


def response_detail(response: httpx.Response) -> Any:
    """Parsed error body: JSON if possible, raw text otherwise."""
    try:
        return response.json()
    except ValueError:
        return response.text

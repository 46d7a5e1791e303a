"""
In-memory implementation of the redirect gateway.

Holds the current location as plain attributes. Useful for scripts,
server-side hosts that turn the recorded target into an HTTP redirect,
and tests.
"""
import logging
import urllib.parse
from typing import Optional

from .gateway import RedirectGateway

# Configure logger
logger = logging.getLogger(__name__)


class InMemoryRedirectGateway(RedirectGateway):
    """
    Redirect gateway backed by an in-memory location.

    Attributes:
        href: Full URL of the current location
        search: Explicit query string of the current location. When None,
            the query is derived from href.
    """

    def __init__(self, href: str = "", search: Optional[str] = None):
        self.href = href
        self.search = search

    def get_current_url(self) -> str:
        return self.href

    def get_current_query(self) -> str:
        if self.search is not None:
            return self.search
        query = urllib.parse.urlsplit(self.href).query
        return f"?{query}" if query else ""

    def navigate_to(self, url: str) -> None:
        logger.debug(f"In-memory navigation to {url}")
        self.href = url
        # A new page has its own query
        self.search = None

"""
Redirect gateway abstraction.

The wallet protocol has a single side effect: sending the user agent to
another URL. This module defines the interface through which the provider
reads the current location and performs that navigation, so the codec can
run against a real host environment or an in-memory fake alike.
"""
import logging
from abc import ABC, abstractmethod

# Configure logger
logger = logging.getLogger(__name__)


class RedirectGateway(ABC):
    """
    Abstract base class for access to the user agent's current location.

    There is at most one active page at a time, so implementations are not
    required to serialize concurrent calls to navigate_to; callers must not
    rely on any ordering between racing navigations.
    """

    @abstractmethod
    def get_current_url(self) -> str:
        """
        Get the full URL of the current location.

        Returns:
            Absolute URL string, used as the default callback URL
        """
        pass

    @abstractmethod
    def get_current_query(self) -> str:
        """
        Get the query portion of the current location.

        Returns:
            Query string, with or without the leading '?', or "" if none
        """
        pass

    @abstractmethod
    def navigate_to(self, url: str) -> None:
        """
        Send the user agent to the given URL.

        Navigation is fire-and-forget: nothing is returned, retried or
        verified. The current page is expected to be replaced.

        Args:
            url: Absolute URL to navigate to
        """
        pass

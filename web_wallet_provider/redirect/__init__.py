"""
Redirect module for the web wallet provider.

Provides the interface to the user agent's current location and the
bundled in-memory implementation.
"""
from .gateway import RedirectGateway
from .memory_gateway import InMemoryRedirectGateway

__all__ = ['RedirectGateway', 'InMemoryRedirectGateway']
